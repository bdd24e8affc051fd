"""Runs the Gradle wrapper to build a workspace into an APK."""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from apkgen.application.interfaces.ibuild_invoker import IBuildInvoker
from apkgen.application.services.exceptions import ArtifactMissingError, BuildError
from apkgen.infrastructure.workspace.layout import ARTIFACT_PATH


logger = logging.getLogger(__name__)


class GradleBuildInvoker(IBuildInvoker):
    """Builds a workspace with an external command and locates the APK."""

    def __init__(
        self,
        command: Sequence[str],
        artifact_path: str = ARTIFACT_PATH,
        timeout: Optional[float] = None,
    ):
        """Initialize the invoker.

        Args:
            command: Build command and arguments, run with the workspace as cwd
            artifact_path: Expected artifact location relative to the workspace
            timeout: Seconds to wait before the build is abandoned (no limit if None)
        """
        self.command: List[str] = list(command)
        self.artifact_path = artifact_path
        self.timeout = timeout

    def build(self, workspace_path: Path) -> Path:
        workspace_path = Path(workspace_path)
        logger.info("Running %s in %s", " ".join(self.command), workspace_path)
        try:
            result = subprocess.run(
                self.command,
                cwd=workspace_path,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            logger.error("Build timed out after %s seconds in %s", self.timeout, workspace_path)
            raise BuildError("Build timed out", output=str(e)) from e
        except OSError as e:
            logger.error("Failed to start build in %s: %s", workspace_path, e)
            raise BuildError("Failed to start build", output=str(e)) from e

        logger.info("Build exit code: %d", result.returncode)
        if result.returncode != 0:
            output = result.stdout + result.stderr
            logger.error("Build error in %s:\n%s", workspace_path, output)
            raise BuildError(
                f"Build exited with code {result.returncode}",
                output=output,
                returncode=result.returncode,
            )
        logger.debug("Build output: %s", result.stdout)

        artifact = workspace_path / self.artifact_path
        if not artifact.is_file():
            logger.error("Build succeeded but %s is missing in %s", self.artifact_path, workspace_path)
            raise ArtifactMissingError(f"Artifact not produced: {self.artifact_path}")
        return artifact
