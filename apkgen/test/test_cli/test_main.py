"""
Tests for main CLI commands.
"""

import os
import time
import uuid
from pathlib import Path

import pytest
from click.testing import CliRunner

from apkgen import __version__
from apkgen.cli.main import cli
from apkgen.infrastructure.workspace.layout import GRADLE_PATH, MAIN_ACTIVITY_PATH


def test_version() -> None:
    """Test version command."""
    runner = CliRunner()
    result = runner.invoke(cli, ["version"])
    assert result.exit_code == 0
    assert f"apkgen version {__version__}" in result.output


def test_check_template_clean(template_dir: Path) -> None:
    """Test check-template on a well-formed template."""
    runner = CliRunner()
    result = runner.invoke(cli, ["check-template", str(template_dir)])
    assert result.exit_code == 0
    assert "No issues found" in result.output
    assert "{{URL}}=1" in result.output


def test_check_template_reports_issues(template_dir: Path) -> None:
    """Test check-template flags duplicated tokens and missing files."""
    (template_dir / MAIN_ACTIVITY_PATH).write_text("{{URL}} and {{URL}}", encoding="utf-8")
    (template_dir / GRADLE_PATH).unlink()

    runner = CliRunner()
    result = runner.invoke(cli, ["check-template", str(template_dir)])
    assert result.exit_code == 1
    assert "{{URL}} appears 2 times" in result.output
    assert f"Missing template file: {GRADLE_PATH}" in result.output


def test_check_packaged_template(clean_settings_cache, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that the template shipped with the package is well-formed."""
    monkeypatch.delenv("TEMPLATE_DIR", raising=False)
    runner = CliRunner()
    result = runner.invoke(cli, ["check-template"])
    assert result.exit_code == 0, result.output


def test_sweep(clean_settings_cache, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Test sweep removes expired workspaces and honours --dry-run."""
    temp_root = tmp_path / "temp"
    expired = temp_root / str(uuid.uuid4())
    fresh = temp_root / str(uuid.uuid4())
    expired.mkdir(parents=True)
    fresh.mkdir()
    stamp = time.time() - 3 * 3600
    os.utime(expired, (stamp, stamp))
    monkeypatch.setenv("TEMP_ROOT", str(temp_root))

    runner = CliRunner()
    result = runner.invoke(cli, ["sweep", "--max-age-hours", "2", "--dry-run"])
    assert result.exit_code == 0
    assert "Would remove 1 expired directory" in result.output
    assert expired.exists()

    result = runner.invoke(cli, ["sweep", "--max-age-hours", "2"])
    assert result.exit_code == 0
    assert f"Removed {expired.resolve()}" in result.output
    assert not expired.exists()
    assert fresh.exists()


def test_sweep_rejects_non_positive_age(clean_settings_cache) -> None:
    """Test sweep refuses a zero maximum age."""
    runner = CliRunner()
    result = runner.invoke(cli, ["sweep", "--max-age-hours", "0"])
    assert result.exit_code != 0
    assert "must be greater than zero" in result.output
