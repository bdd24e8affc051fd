"""Fixed locations inside the Android WebView template project."""

from typing import Dict, Tuple

from apkgen.domain.models.build_request import Placeholder

MANIFEST_PATH = "app/src/main/AndroidManifest.xml"
GRADLE_PATH = "app/build.gradle"
MAIN_ACTIVITY_PATH = "app/src/main/java/com/example/webview/MainActivity.java"

ICON_PATH = "app/src/main/res/mipmap-xxxhdpi/ic_launcher.png"
WEB_ASSETS_DIR = "app/src/main/assets/web"
WEB_ENTRY_FILENAME = "index.html"
ARCHIVE_EXTENSIONS = (".zip",)

ARTIFACT_PATH = "app/build/outputs/apk/debug/app-debug.apk"
DOWNLOAD_FILENAME = "app.apk"
APK_MEDIA_TYPE = "application/vnd.android.package-archive"

# Every placeholder is looked up in every target file.
SUBSTITUTION_TARGETS: Dict[str, Tuple[Placeholder, ...]] = {
    MANIFEST_PATH: tuple(Placeholder),
    GRADLE_PATH: tuple(Placeholder),
    MAIN_ACTIVITY_PATH: tuple(Placeholder),
}
