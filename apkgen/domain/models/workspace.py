"""
Workspace model and its lifecycle.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet

from apkgen.application.services.exceptions import WorkspaceStateError


class WorkspaceState(str, Enum):
    """Lifecycle states of a build workspace."""

    CREATED = "created"
    PARAMETERIZED = "parameterized"
    ASSET_INJECTED = "asset-injected"
    BUILDING = "building"
    BUILT = "built"
    BUILD_FAILED = "build-failed"
    DELETED = "deleted"


ALLOWED_TRANSITIONS: Dict[WorkspaceState, FrozenSet[WorkspaceState]] = {
    WorkspaceState.CREATED: frozenset(
        {WorkspaceState.PARAMETERIZED, WorkspaceState.BUILD_FAILED}
    ),
    WorkspaceState.PARAMETERIZED: frozenset(
        {WorkspaceState.ASSET_INJECTED, WorkspaceState.BUILD_FAILED}
    ),
    WorkspaceState.ASSET_INJECTED: frozenset(
        {WorkspaceState.BUILDING, WorkspaceState.BUILD_FAILED}
    ),
    WorkspaceState.BUILDING: frozenset({WorkspaceState.BUILT, WorkspaceState.BUILD_FAILED}),
    WorkspaceState.BUILT: frozenset({WorkspaceState.DELETED}),
    WorkspaceState.BUILD_FAILED: frozenset({WorkspaceState.DELETED}),
    WorkspaceState.DELETED: frozenset(),
}


@dataclass
class Workspace:
    """An isolated directory holding one build attempt."""

    build_id: str
    path: Path
    state: WorkspaceState = WorkspaceState.CREATED

    def advance(self, new_state: WorkspaceState) -> None:
        """Move the workspace to ``new_state``.

        Raises:
            WorkspaceStateError: If the transition is not allowed
        """
        if new_state not in ALLOWED_TRANSITIONS[self.state]:
            raise WorkspaceStateError(
                f"Workspace {self.build_id} cannot move from {self.state.value} to {new_state.value}"
            )
        self.state = new_state

