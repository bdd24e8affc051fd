"""
Staged upload model.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable


@dataclass
class StagedUpload:
    """An uploaded file staged on disk before it is consumed by a build.

    ``release`` deletes the staging area; it may be called more than once.
    """

    path: Path
    filename: str
    release: Callable[[], None] = field(repr=False, default=lambda: None)
