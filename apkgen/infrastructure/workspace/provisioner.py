"""Creates per-request build workspaces from the template project."""

import logging
import os
import shutil
import uuid
from pathlib import Path

from apkgen.application.services.exceptions import WorkspaceError
from apkgen.domain.models.workspace import Workspace


logger = logging.getLogger(__name__)


class WorkspaceProvisioner:
    """Materializes a private copy of the template project for each build."""

    def __init__(self, template_dir: Path, temp_root: Path):
        """Initialize the provisioner.

        Args:
            template_dir: Read-only template project copied into every workspace
            temp_root: Directory under which workspaces are created
        """
        self.template_dir = Path(template_dir)
        self.temp_root = Path(temp_root)

    def provision(self) -> Workspace:
        """Create a new workspace holding a full copy of the template.

        Returns:
            The freshly created workspace in the ``CREATED`` state

        Raises:
            WorkspaceError: If the template is missing or cannot be copied
        """
        if not self.template_dir.is_dir():
            raise WorkspaceError(f"Template directory not found: {self.template_dir}")

        build_id = str(uuid.uuid4())
        path = self.temp_root / build_id
        try:
            # copytree keeps file modes, so the gradle wrapper stays executable
            shutil.copytree(self.template_dir, path)
            # copystat gave the directory the template's mtime; age is measured from now
            os.utime(path)
        except OSError as e:
            logger.error("Failed to provision workspace %s: %s", build_id, e)
            shutil.rmtree(path, ignore_errors=True)
            raise WorkspaceError(f"Failed to provision workspace {build_id}") from e

        logger.info("Provisioned workspace %s at %s", build_id, path)
        return Workspace(build_id=build_id, path=path)
