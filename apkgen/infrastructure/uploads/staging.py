"""Stages multipart uploads on disk, one directory per file."""

import logging
import shutil
import uuid
from functools import partial
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from apkgen.application.services.exceptions import WorkspaceError
from apkgen.domain.models.upload import StagedUpload


logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_NAME = "upload"


def release_directory(path: Path) -> None:
    shutil.rmtree(path, ignore_errors=True)
    logger.debug("Released staging directory %s", path)


class UploadStager:
    """Writes uploaded files below a staging root."""

    def __init__(self, staging_root: Path):
        self.staging_root = Path(staging_root)

    def stage(self, upload: Optional[UploadFile]) -> Optional[StagedUpload]:
        """Copy an upload into its own staging directory.

        Returns ``None`` when no file was sent for the field.

        Raises:
            WorkspaceError: If the upload cannot be written
        """
        if upload is None or not upload.filename:
            return None

        # Only the base name is kept; client paths are never trusted
        filename = Path(upload.filename.replace("\\", "/")).name
        if filename in ("", "..", "."):
            filename = DEFAULT_UPLOAD_NAME
        staging_dir = self.staging_root / str(uuid.uuid4())
        destination = staging_dir / filename
        try:
            staging_dir.mkdir(parents=True)
            with open(destination, "wb") as out:
                shutil.copyfileobj(upload.file, out)
        except OSError as e:
            logger.error("Failed to stage upload %s: %s", filename, e)
            release_directory(staging_dir)
            raise WorkspaceError(f"Failed to stage upload {filename}") from e

        logger.debug("Staged %s at %s", filename, destination)
        return StagedUpload(
            path=destination,
            filename=filename,
            release=partial(release_directory, staging_dir),
        )
