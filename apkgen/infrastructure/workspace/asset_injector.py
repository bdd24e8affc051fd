"""Places uploaded icon and web content at fixed workspace locations."""

import logging
import shutil
import zipfile
from pathlib import Path

from apkgen.application.services.exceptions import WorkspaceError
from apkgen.domain.models.upload import StagedUpload
from apkgen.infrastructure.workspace.layout import (
    ARCHIVE_EXTENSIONS,
    ICON_PATH,
    WEB_ASSETS_DIR,
    WEB_ENTRY_FILENAME,
)


logger = logging.getLogger(__name__)


def is_archive(filename: str) -> bool:
    return Path(filename).suffix.lower() in ARCHIVE_EXTENSIONS


def extract_zip(archive_path: Path, target_dir: Path) -> int:
    """Extract a zip archive below ``target_dir``.

    Returns:
        Number of files extracted

    Raises:
        WorkspaceError: If the archive is unreadable or a member escapes ``target_dir``
    """
    root = target_dir.resolve()
    try:
        with zipfile.ZipFile(archive_path) as archive:
            members = archive.infolist()
            for member in members:
                destination = (root / member.filename).resolve()
                if destination != root and root not in destination.parents:
                    raise WorkspaceError(f"Archive member escapes target directory: {member.filename}")
            archive.extractall(root)
    except zipfile.BadZipFile as e:
        raise WorkspaceError(f"Unreadable archive: {archive_path.name}") from e
    return sum(1 for member in members if not member.is_dir())


class AssetInjector:
    """Copies optional uploaded assets into a workspace."""

    def inject_icon(self, workspace_path: Path, icon: StagedUpload) -> Path:
        """Overwrite the launcher icon with the uploaded bytes."""
        destination = Path(workspace_path) / ICON_PATH
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(icon.path, destination)
        except OSError as e:
            logger.error("Failed to inject icon into %s: %s", workspace_path, e)
            raise WorkspaceError("Failed to inject icon") from e
        logger.info("Injected icon %s", icon.filename)
        return destination

    def inject_web_content(self, workspace_path: Path, asset: StagedUpload) -> Path:
        """Place uploaded web content in the web assets directory.

        A ``.zip`` upload is expanded preserving relative paths; any other
        file becomes the ``index.html`` entry point.

        Returns:
            The web assets directory
        """
        target_dir = Path(workspace_path) / WEB_ASSETS_DIR
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            if is_archive(asset.filename):
                count = extract_zip(asset.path, target_dir)
                logger.info("Extracted %d files from %s", count, asset.filename)
            else:
                shutil.copyfile(asset.path, target_dir / WEB_ENTRY_FILENAME)
                logger.info("Copied %s as %s", asset.filename, WEB_ENTRY_FILENAME)
        except WorkspaceError:
            raise
        except OSError as e:
            logger.error("Failed to inject web content into %s: %s", workspace_path, e)
            raise WorkspaceError("Failed to inject web content") from e
        return target_dir
