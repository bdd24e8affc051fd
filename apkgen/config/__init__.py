"""
Configuration package for apkgen.
"""

import shlex
import sys
from functools import lru_cache
from pathlib import Path
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_TEMPLATE_DIR = PACKAGE_DIR / "templates" / "android-webview"


def default_build_command() -> str:
    """Gradle wrapper invocation for the current platform."""
    gradle_command = "gradlew.bat" if sys.platform == "win32" else "./gradlew"
    return f"{gradle_command} assembleDebug"


class Settings(BaseSettings):
    """Application settings."""

    TEMP_ROOT: str = "temp"
    STAGING_ROOT: Optional[str] = None
    TEMPLATE_DIR: Optional[str] = None
    BUILD_COMMAND: Optional[str] = None
    BUILD_TIMEOUT: Optional[float] = None
    REPLACE_ALL_OCCURRENCES: bool = False
    WORKSPACE_MAX_AGE_HOURS: float = 24.0
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    @property
    def temp_root(self) -> Path:
        return Path(self.TEMP_ROOT).resolve()

    @property
    def staging_root(self) -> Path:
        if self.STAGING_ROOT:
            return Path(self.STAGING_ROOT).resolve()
        return self.temp_root / "uploads"

    @property
    def template_dir(self) -> Path:
        if self.TEMPLATE_DIR:
            return Path(self.TEMPLATE_DIR).resolve()
        return DEFAULT_TEMPLATE_DIR

    @property
    def build_command(self) -> List[str]:
        return shlex.split(self.BUILD_COMMAND or default_build_command())


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
