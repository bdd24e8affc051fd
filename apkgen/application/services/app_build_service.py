"""Service running one build request from template copy to artifact."""

import logging
from dataclasses import dataclass
from pathlib import Path

from apkgen.application.interfaces.ibuild_invoker import IBuildInvoker
from apkgen.application.services.exceptions import ArtifactMissingError, BuildError
from apkgen.domain.models.build_request import BuildRequest
from apkgen.domain.models.workspace import Workspace, WorkspaceState
from apkgen.infrastructure.workspace.asset_injector import AssetInjector
from apkgen.infrastructure.workspace.provisioner import WorkspaceProvisioner
from apkgen.infrastructure.workspace.substitutor import ParameterSubstitutor


@dataclass
class BuildOutcome:
    """Result of a successful build."""

    build_id: str
    artifact_path: Path

    @property
    def download_url(self) -> str:
        return f"/download/{self.build_id}"


class AppBuildService:
    """Runs provisioning, substitution, asset injection and the build in order.

    Every step works on the same private workspace. Any failure is terminal:
    nothing is retried and a failed workspace stays on disk until swept.
    """

    def __init__(
        self,
        provisioner: WorkspaceProvisioner,
        substitutor: ParameterSubstitutor,
        asset_injector: AssetInjector,
        build_invoker: IBuildInvoker,
    ):
        """Initialize the build service.

        Args:
            provisioner: Creates workspaces from the template
            substitutor: Writes request parameters into the workspace
            asset_injector: Places uploaded assets into the workspace
            build_invoker: Runs the external build tool
        """
        self.provisioner = provisioner
        self.substitutor = substitutor
        self.asset_injector = asset_injector
        self.build_invoker = build_invoker
        self.logger = logging.getLogger(__name__)

    def prepare(self, request: BuildRequest) -> Workspace:
        """Provision a workspace and apply the request's parameters and assets."""
        workspace = self.provisioner.provision()
        try:
            self.substitutor.substitute(workspace.path, request.fields.as_mapping())
            workspace.advance(WorkspaceState.PARAMETERIZED)

            if request.icon is not None:
                self.asset_injector.inject_icon(workspace.path, request.icon)
            if request.web_content is not None:
                self.asset_injector.inject_web_content(workspace.path, request.web_content)
            workspace.advance(WorkspaceState.ASSET_INJECTED)
        except OSError:
            workspace.advance(WorkspaceState.BUILD_FAILED)
            raise
        return workspace

    def generate(self, request: BuildRequest) -> BuildOutcome:
        """Build an APK for ``request``.

        Staged uploads are released once the build has succeeded.

        Raises:
            WorkspaceError: On any filesystem failure
            BuildError: If the build tool fails
            ArtifactMissingError: If the build tool produced no artifact
        """
        workspace = self.prepare(request)

        workspace.advance(WorkspaceState.BUILDING)
        try:
            artifact_path = self.build_invoker.build(workspace.path)
        except (BuildError, ArtifactMissingError) as e:
            workspace.advance(WorkspaceState.BUILD_FAILED)
            self.logger.error("Build %s failed: %s", workspace.build_id, e)
            raise
        workspace.advance(WorkspaceState.BUILT)
        self.logger.info("Build %s produced %s", workspace.build_id, artifact_path)

        for upload in request.staged_uploads():
            upload.release()

        return BuildOutcome(build_id=workspace.build_id, artifact_path=artifact_path)
