"""Interface for the build invoker."""

from abc import ABC, abstractmethod
from pathlib import Path


class IBuildInvoker(ABC):
    """Interface for running the external build tool on a workspace."""

    @abstractmethod
    def build(self, workspace_path: Path) -> Path:
        """Build the project in ``workspace_path``.

        Args:
            workspace_path: Root of the workspace to build

        Returns:
            Path of the produced artifact

        Raises:
            BuildError: If the build tool fails
            ArtifactMissingError: If the tool succeeds without producing the artifact
        """
        pass
