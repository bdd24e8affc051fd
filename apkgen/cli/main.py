"""
Main CLI module for apkgen.
"""

from datetime import timedelta
from pathlib import Path
from typing import Optional

import click

from apkgen.cli.validate_cmd import validate
from apkgen.cli.config_cmd import config


@click.group()
def cli():
    """APK Generator (apkgen) command line interface."""
    pass


# Add commands
cli.add_command(validate, name="validate")
cli.add_command(config, name="config")


@cli.command()
def version():
    """Show apkgen version information."""
    from apkgen import __version__

    click.echo(f"apkgen version {__version__}")


@cli.command()
@click.option("--host", default=None, help="Interface to bind (defaults to HOST)")
@click.option("--port", type=int, default=None, help="Port to listen on (defaults to PORT)")
@click.option("--reload", is_flag=True, help="Reload on source changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the build API server."""
    import uvicorn
    from apkgen.config import get_settings
    from apkgen.infrastructure.logging_config import configure_logging

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    uvicorn.run(
        "apkgen.main:app",
        host=host or settings.HOST,
        port=port or settings.PORT,
        reload=reload,
    )


@cli.command()
@click.option(
    "--max-age-hours",
    type=float,
    default=None,
    help="Remove directories older than this (defaults to WORKSPACE_MAX_AGE_HOURS)",
)
@click.option("--dry-run", is_flag=True, help="Only list what would be removed")
def sweep(max_age_hours: Optional[float], dry_run: bool):
    """Remove workspaces that were never downloaded and leftover uploads."""
    from apkgen.config import get_settings
    from apkgen.infrastructure.services.artifact_service import ArtifactService

    settings = get_settings()
    hours = max_age_hours if max_age_hours is not None else settings.WORKSPACE_MAX_AGE_HOURS
    if hours <= 0:
        raise click.BadParameter("must be greater than zero", param_hint="--max-age-hours")

    service = ArtifactService(settings.temp_root, settings.staging_root)
    removed = service.sweep(timedelta(hours=hours), dry_run=dry_run)

    verb = "Would remove" if dry_run else "Removed"
    for path in removed:
        click.echo(f"{verb} {path}")
    click.echo(f"{verb} {len(removed)} expired director{'y' if len(removed) == 1 else 'ies'}")


@cli.command(name="check-template")
@click.argument("path", type=click.Path(exists=True, file_okay=False), required=False)
def check_template(path: Optional[str]):
    """Check that every placeholder appears exactly once per template file."""
    from apkgen.config import get_settings
    from apkgen.infrastructure.workspace.substitutor import ParameterSubstitutor

    settings = get_settings()
    template_dir = Path(path) if path else settings.template_dir
    substitutor = ParameterSubstitutor(replace_all=settings.REPLACE_ALL_OCCURRENCES)
    report = substitutor.audit_template(template_dir)

    issues = []
    for rel_path, counts in report.items():
        if not counts:
            issues.append(f"Missing template file: {rel_path}")
            continue
        for placeholder, count in counts.items():
            if count > 1 and not substitutor.replace_all:
                issues.append(
                    f"{rel_path}: {placeholder.token} appears {count} times, only the first is replaced"
                )

    click.echo(f"\nTemplate: {template_dir}")
    for rel_path, counts in report.items():
        found = ", ".join(f"{p.token}={n}" for p, n in counts.items() if n) or "(no placeholders)"
        click.echo(f"  {rel_path}: {found}")

    if issues:
        click.echo("\n⚠️  Found potential issues:")
        for issue in issues:
            click.echo(f"- {issue}")
        raise SystemExit(1)
    click.echo("\n✅ No issues found in the template.")


if __name__ == "__main__":
    cli()
