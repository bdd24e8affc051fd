"""
Test data and build commands shared across apkgen tests.
"""

import sys
from typing import List

from apkgen.infrastructure.workspace.layout import ARTIFACT_PATH

ARTIFACT_BYTES = b"PK\x03\x04fake-apk-contents"
DEFAULT_ICON_BYTES = b"\x89PNG default icon"

MANIFEST_TEMPLATE = """<manifest package="{{PACKAGE_NAME}}" android:versionName="{{VERSION}}">
    <application android:label="{{APP_NAME}}" />
</manifest>
"""

GRADLE_TEMPLATE = """android {
    defaultConfig {
        applicationId "{{PACKAGE_NAME}}"
        versionName "{{VERSION}}"
    }
}
"""

MAIN_ACTIVITY_TEMPLATE = """public class MainActivity {
    private static final String START_URL = "{{URL}}";
}
"""

FORM_DATA = {
    "appName": "My Shop",
    "packageName": "com.example.shop",
    "version": "2.1.0",
    "url": "https://shop.example.com/start",
}


def python_command(script: str) -> List[str]:
    """Command running ``script`` with the current interpreter."""
    return [sys.executable, "-c", script]


def succeeding_build_command(delay: float = 0) -> List[str]:
    """Writes a fake APK, optionally after sleeping for ``delay`` seconds."""
    return python_command(
        f"import pathlib, time; time.sleep({delay!r}); "
        f"p = pathlib.Path({ARTIFACT_PATH!r}); "
        "p.parent.mkdir(parents=True, exist_ok=True); "
        f"p.write_bytes({ARTIFACT_BYTES!r})"
    )


def failing_build_command() -> List[str]:
    return python_command("import sys; sys.stderr.write('FAILURE: compile error'); sys.exit(3)")


def silent_build_command() -> List[str]:
    """Exits successfully without producing an artifact."""
    return python_command("pass")
