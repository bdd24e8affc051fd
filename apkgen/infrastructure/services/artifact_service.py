"""One-shot artifact delivery and workspace cleanup."""

import logging
import os
import shutil
import time
import uuid
from datetime import timedelta
from pathlib import Path
from typing import Iterator, List, Optional

from apkgen.application.services.exceptions import ArtifactNotFoundError
from apkgen.domain.models.workspace import Workspace, WorkspaceState
from apkgen.infrastructure.workspace.layout import ARTIFACT_PATH


logger = logging.getLogger(__name__)

CLAIMED_SUFFIX = ".downloading"


def is_build_id(name: str) -> bool:
    """Whether ``name`` is a canonical build identifier."""
    try:
        return str(uuid.UUID(name)) == name
    except ValueError:
        return False


class ArtifactService:
    """Serves each built artifact once and removes its workspace afterwards.

    The filesystem is the only registry: a build id names the directory
    ``<temp_root>/<build_id>``.
    """

    def __init__(
        self,
        temp_root: Path,
        staging_root: Optional[Path] = None,
        artifact_path: str = ARTIFACT_PATH,
    ):
        self.temp_root = Path(temp_root)
        self.staging_root = Path(staging_root) if staging_root is not None else None
        self.artifact_path = artifact_path

    def workspace_path(self, build_id: str) -> Path:
        if not is_build_id(build_id):
            raise ArtifactNotFoundError(f"Unknown build id: {build_id!r}")
        return self.temp_root / build_id

    def claim(self, build_id: str) -> Path:
        """Reserve the artifact of ``build_id`` for a single download.

        The artifact is renamed atomically, so concurrent or repeated claims
        for the same build fail.

        Returns:
            Path of the claimed artifact file

        Raises:
            ArtifactNotFoundError: If the build never existed, never completed,
                or its artifact was already downloaded
        """
        artifact = self.workspace_path(build_id) / self.artifact_path
        claimed = artifact.with_name(artifact.name + CLAIMED_SUFFIX)
        try:
            os.replace(artifact, claimed)
        except FileNotFoundError as e:
            raise ArtifactNotFoundError(f"No artifact for build {build_id}") from e
        logger.info("Artifact of build %s claimed for download", build_id)
        return claimed

    def discard(self, build_id: str) -> Workspace:
        """Delete the whole workspace of a downloaded build.

        Only built workspaces have an artifact to claim, so the workspace moves
        from ``built`` to ``deleted``.
        """
        workspace = Workspace(build_id, self.workspace_path(build_id), WorkspaceState.BUILT)
        shutil.rmtree(workspace.path, ignore_errors=True)
        workspace.advance(WorkspaceState.DELETED)
        logger.info("Removed workspace %s", build_id)
        return workspace

    def _expired(self, root: Optional[Path], cutoff: float) -> Iterator[Path]:
        if root is None or not root.is_dir():
            return
        for entry in root.iterdir():
            if not entry.is_dir() or not is_build_id(entry.name):
                continue
            try:
                mtime = entry.stat().st_mtime
            except FileNotFoundError:
                # removed by a concurrent download
                continue
            if mtime < cutoff:
                yield entry

    def sweep(self, max_age: timedelta, dry_run: bool = False) -> List[Path]:
        """Remove workspaces and staging directories older than ``max_age``.

        Args:
            max_age: Minimum age of a directory before it is removed
            dry_run: Only report what would be removed

        Returns:
            Directories removed (or that would be removed)
        """
        cutoff = time.time() - max_age.total_seconds()
        expired = list(self._expired(self.temp_root, cutoff))
        expired.extend(self._expired(self.staging_root, cutoff))
        for path in expired:
            if dry_run:
                logger.info("Would remove expired directory %s", path)
                continue
            shutil.rmtree(path, ignore_errors=True)
            logger.info("Removed expired directory %s", path)
        return expired
