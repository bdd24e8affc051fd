"""
Shared fixtures for apkgen tests.
"""

import shlex
from pathlib import Path
from typing import Callable, Generator, List

import pytest
from fastapi.testclient import TestClient

from apkgen.api.dependencies import get_services
from apkgen.config import Settings, get_settings
from apkgen.infrastructure.services.setup import Services, setup_services
from apkgen.infrastructure.workspace.layout import (
    GRADLE_PATH,
    ICON_PATH,
    MAIN_ACTIVITY_PATH,
    MANIFEST_PATH,
)
from apkgen.main import app
from apkgen.test.fixtures import (
    DEFAULT_ICON_BYTES,
    GRADLE_TEMPLATE,
    MAIN_ACTIVITY_TEMPLATE,
    MANIFEST_TEMPLATE,
    succeeding_build_command,
)


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Create a minimal template project with placeholder files."""
    template = tmp_path / "template"
    files = {
        MANIFEST_PATH: MANIFEST_TEMPLATE,
        GRADLE_PATH: GRADLE_TEMPLATE,
        MAIN_ACTIVITY_PATH: MAIN_ACTIVITY_TEMPLATE,
        "settings.gradle": "include ':app'\n",
    }
    for rel_path, content in files.items():
        target = template / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    icon = template / ICON_PATH
    icon.parent.mkdir(parents=True, exist_ok=True)
    icon.write_bytes(DEFAULT_ICON_BYTES)
    return template


@pytest.fixture
def temp_root(tmp_path: Path) -> Path:
    root = tmp_path / "temp"
    root.mkdir()
    return root


@pytest.fixture
def staging_root(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def services_factory(
    template_dir: Path, temp_root: Path, staging_root: Path
) -> Callable[[List[str]], Services]:
    """Build services whose build step runs the given command."""

    def factory(command: List[str]) -> Services:
        settings = Settings(
            TEMP_ROOT=str(temp_root),
            STAGING_ROOT=str(staging_root),
            TEMPLATE_DIR=str(template_dir),
            BUILD_COMMAND=shlex.join(command),
        )
        return setup_services(settings)

    return factory


@pytest.fixture
def services(services_factory: Callable[[List[str]], Services]) -> Services:
    """Services whose build command produces a fake APK."""
    return services_factory(succeeding_build_command())


@pytest.fixture
def client_factory(
    services_factory: Callable[[List[str]], Services],
) -> Generator[Callable[[List[str]], TestClient], None, None]:
    """Test clients wired to the temporary template and temp root."""

    def factory(command: List[str]) -> TestClient:
        services = services_factory(command)
        app.dependency_overrides[get_services] = lambda: services
        return TestClient(app)

    yield factory
    app.dependency_overrides.clear()


@pytest.fixture
def client(client_factory: Callable[[List[str]], TestClient]) -> TestClient:
    return client_factory(succeeding_build_command())


@pytest.fixture
def clean_settings_cache() -> Generator[None, None, None]:
    """Drop cached settings before and after a test that changes the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
