"""Domain models for apkgen."""

from apkgen.domain.models.build_request import BuildFields, BuildRequest, Placeholder
from apkgen.domain.models.upload import StagedUpload
from apkgen.domain.models.workspace import Workspace, WorkspaceState

__all__ = [
    "BuildFields",
    "BuildRequest",
    "Placeholder",
    "StagedUpload",
    "Workspace",
    "WorkspaceState",
]
