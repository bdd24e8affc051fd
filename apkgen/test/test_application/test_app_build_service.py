from pathlib import Path
from typing import List, Optional

import pytest

from apkgen.application.interfaces.ibuild_invoker import IBuildInvoker
from apkgen.application.services.app_build_service import AppBuildService
from apkgen.application.services.exceptions import (
    ArtifactMissingError,
    BuildError,
    WorkspaceError,
)
from apkgen.domain.models.build_request import BuildFields, BuildRequest
from apkgen.domain.models.upload import StagedUpload
from apkgen.infrastructure.workspace.asset_injector import AssetInjector
from apkgen.infrastructure.workspace.layout import (
    ARTIFACT_PATH,
    ICON_PATH,
    MAIN_ACTIVITY_PATH,
    MANIFEST_PATH,
)
from apkgen.infrastructure.workspace.provisioner import WorkspaceProvisioner
from apkgen.infrastructure.workspace.substitutor import ParameterSubstitutor

FIELDS = BuildFields(
    app_name="My Shop",
    package_name="com.example.shop",
    version="2.1.0",
    url="https://shop.example.com",
)


class RecordingBuildInvoker(IBuildInvoker):
    """Build invoker that records the workspace as it looked at build time."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.icon_bytes: Optional[bytes] = None
        self.workspaces: List[Path] = []

    def build(self, workspace_path: Path) -> Path:
        self.workspaces.append(workspace_path)
        icon = workspace_path / ICON_PATH
        self.icon_bytes = icon.read_bytes() if icon.exists() else None
        if self.error is not None:
            raise self.error
        artifact = workspace_path / ARTIFACT_PATH
        artifact.parent.mkdir(parents=True, exist_ok=True)
        artifact.write_bytes(b"apk")
        return artifact


class ReleaseTracker:
    def __init__(self):
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


def make_service(template_dir: Path, temp_root: Path, invoker: IBuildInvoker) -> AppBuildService:
    return AppBuildService(
        provisioner=WorkspaceProvisioner(template_dir, temp_root),
        substitutor=ParameterSubstitutor(),
        asset_injector=AssetInjector(),
        build_invoker=invoker,
    )


def staged_icon(tmp_path: Path, release: ReleaseTracker) -> StagedUpload:
    path = tmp_path / "upload" / "icon.png"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"uploaded icon")
    return StagedUpload(path=path, filename="icon.png", release=release)


def test_generate_builds_parameterized_workspace(template_dir: Path, temp_root: Path):
    """Test that the build sees the substituted files and returns a download link."""
    invoker = RecordingBuildInvoker()
    service = make_service(template_dir, temp_root, invoker)

    outcome = service.generate(BuildRequest(fields=FIELDS))

    workspace = temp_root / outcome.build_id
    assert invoker.workspaces == [workspace]
    assert outcome.artifact_path == workspace / ARTIFACT_PATH
    assert outcome.download_url == f"/download/{outcome.build_id}"
    manifest = (workspace / MANIFEST_PATH).read_text(encoding="utf-8")
    assert 'package="com.example.shop"' in manifest
    assert 'android:label="My Shop"' in manifest
    assert "https://shop.example.com" in (workspace / MAIN_ACTIVITY_PATH).read_text(encoding="utf-8")


def test_generate_injects_icon_before_build(template_dir: Path, temp_root: Path, tmp_path: Path):
    """Test that the icon is in place when the build runs and uploads are released after."""
    invoker = RecordingBuildInvoker()
    release = ReleaseTracker()

    make_service(template_dir, temp_root, invoker).generate(
        BuildRequest(fields=FIELDS, icon=staged_icon(tmp_path, release))
    )

    assert invoker.icon_bytes == b"uploaded icon"
    assert release.calls == 1


@pytest.mark.parametrize(
    "error",
    [BuildError("exit 1", output="boom", returncode=1), ArtifactMissingError("no apk")],
)
def test_generate_failure_keeps_workspace(
    template_dir: Path, temp_root: Path, tmp_path: Path, error: Exception
):
    """Test that a failed build leaves its workspace and keeps the uploads."""
    release = ReleaseTracker()
    service = make_service(template_dir, temp_root, RecordingBuildInvoker(error=error))

    with pytest.raises(type(error)):
        service.generate(BuildRequest(fields=FIELDS, icon=staged_icon(tmp_path, release)))

    assert len(list(temp_root.iterdir())) == 1
    assert release.calls == 0


def test_generate_stops_on_template_corruption(template_dir: Path, temp_root: Path):
    """Test that a missing template file aborts before the build."""
    (template_dir / MAIN_ACTIVITY_PATH).unlink()
    invoker = RecordingBuildInvoker()

    with pytest.raises(WorkspaceError):
        make_service(template_dir, temp_root, invoker).generate(BuildRequest(fields=FIELDS))

    assert invoker.workspaces == []
