"""Helper module for setting up services from settings."""

from dataclasses import dataclass

from apkgen.config import Settings
from apkgen.application.services.app_build_service import AppBuildService
from apkgen.infrastructure.build.gradle_build_invoker import GradleBuildInvoker
from apkgen.infrastructure.services.artifact_service import ArtifactService
from apkgen.infrastructure.uploads.staging import UploadStager
from apkgen.infrastructure.workspace.asset_injector import AssetInjector
from apkgen.infrastructure.workspace.provisioner import WorkspaceProvisioner
from apkgen.infrastructure.workspace.substitutor import ParameterSubstitutor


@dataclass
class Services:
    """A dataclass that holds all the services."""

    build_service: AppBuildService
    artifact_service: ArtifactService
    upload_stager: UploadStager


def setup_services(settings: Settings) -> Services:
    """
    Set up services from application settings.

    Args:
        settings: Application settings

    Returns:
        Services instance with all required services
    """
    build_service = AppBuildService(
        provisioner=WorkspaceProvisioner(settings.template_dir, settings.temp_root),
        substitutor=ParameterSubstitutor(replace_all=settings.REPLACE_ALL_OCCURRENCES),
        asset_injector=AssetInjector(),
        build_invoker=GradleBuildInvoker(settings.build_command, timeout=settings.BUILD_TIMEOUT),
    )

    return Services(
        build_service=build_service,
        artifact_service=ArtifactService(settings.temp_root, settings.staging_root),
        upload_stager=UploadStager(settings.staging_root),
    )
