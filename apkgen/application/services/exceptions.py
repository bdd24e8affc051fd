"""Custom exceptions for the apkgen build services."""

from typing import Optional, Sequence


class ValidationError(Exception):
    """Raised when a build request is missing required fields."""

    def __init__(self, missing_fields: Sequence[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(f"Missing required fields: {', '.join(self.missing_fields)}")


class WorkspaceError(IOError):
    """Raised when a workspace cannot be created, read or written.

    This covers template copy failures, missing template files and
    uploads that cannot be placed in the workspace.
    """


class WorkspaceStateError(Exception):
    """Raised when a workspace is moved through an invalid lifecycle transition."""


class BuildError(Exception):
    """Raised when the external build tool fails.

    Carries the tool's captured output so it can be logged server-side.
    """

    def __init__(self, message: str, output: str = "", returncode: Optional[int] = None):
        super().__init__(message)
        self.output = output
        self.returncode = returncode


class ArtifactMissingError(Exception):
    """Raised when the build tool reports success but produced no artifact."""


class ArtifactNotFoundError(ValueError):
    """Raised when a requested artifact cannot be found for download."""
