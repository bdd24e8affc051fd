"""
Build request model.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from apkgen.application.services.exceptions import ValidationError
from apkgen.domain.models.upload import StagedUpload


class Placeholder(str, Enum):
    """Placeholder names known to the template project."""

    PACKAGE_NAME = "PACKAGE_NAME"
    APP_NAME = "APP_NAME"
    VERSION = "VERSION"
    URL = "URL"

    @property
    def token(self) -> str:
        """Literal marker written in the template files, e.g. ``{{URL}}``."""
        return "{{" + self.value + "}}"


@dataclass(frozen=True)
class BuildFields:
    """The four required text parameters of a build."""

    app_name: str
    package_name: str
    version: str
    url: str

    @classmethod
    def from_form(
        cls,
        app_name: Optional[str],
        package_name: Optional[str],
        version: Optional[str],
        url: Optional[str],
    ) -> "BuildFields":
        """Create fields from raw form values.

        Raises:
            ValidationError: If any value is missing or empty
        """
        provided = {
            "appName": app_name,
            "packageName": package_name,
            "version": version,
            "url": url,
        }
        missing: List[str] = [name for name, value in provided.items() if not value]
        if missing:
            raise ValidationError(missing)
        return cls(
            app_name=app_name,
            package_name=package_name,
            version=version,
            url=url,
        )

    def as_mapping(self) -> Dict[Placeholder, str]:
        return {
            Placeholder.PACKAGE_NAME: self.package_name,
            Placeholder.APP_NAME: self.app_name,
            Placeholder.VERSION: self.version,
            Placeholder.URL: self.url,
        }


@dataclass
class BuildRequest:
    """Request-scoped parameters of a single build."""

    fields: BuildFields
    icon: Optional[StagedUpload] = None
    web_content: Optional[StagedUpload] = None

    def staged_uploads(self) -> List[StagedUpload]:
        return [upload for upload in (self.icon, self.web_content) if upload is not None]
