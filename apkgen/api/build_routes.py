from functools import partial
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from apkgen.api.dependencies import get_services
from apkgen.api.responses import OneShotFileResponse
from apkgen.application.dto.build import ErrorResponse, GenerateAppResponse
from apkgen.domain.models.build_request import BuildFields, BuildRequest
from apkgen.infrastructure.services.setup import Services
from apkgen.infrastructure.workspace.layout import APK_MEDIA_TYPE, DOWNLOAD_FILENAME

api = APIRouter()

openapi_tags = {"name": "Build", "description": "APK build and download API"}


# Plain `def` handlers run in the thread pool, so a build in progress
# never blocks other requests.
@api.post(
    "/generate-app",
    response_model=GenerateAppResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["Build"],
)
def generate_app(
    app_name: Optional[str] = Form(None, alias="appName"),
    package_name: Optional[str] = Form(None, alias="packageName"),
    version: Optional[str] = Form(None),
    url: Optional[str] = Form(None),
    icon: Optional[UploadFile] = File(None),
    html_file: Optional[UploadFile] = File(None, alias="htmlFile"),
    services: Services = Depends(get_services),
):
    fields = BuildFields.from_form(app_name, package_name, version, url)

    stager = services.upload_stager
    request = BuildRequest(
        fields=fields,
        icon=stager.stage(icon),
        web_content=stager.stage(html_file),
    )
    outcome = services.build_service.generate(request)

    return GenerateAppResponse(
        apkPath=str(outcome.artifact_path),
        downloadUrl=outcome.download_url,
    )


@api.get(
    "/download/{build_id}",
    responses={404: {"model": ErrorResponse}},
    tags=["Build"],
)
def download_apk(build_id: str, services: Services = Depends(get_services)):
    artifacts = services.artifact_service
    claimed = artifacts.claim(build_id)
    return OneShotFileResponse(
        claimed,
        on_complete=partial(artifacts.discard, build_id),
        filename=DOWNLOAD_FILENAME,
        media_type=APK_MEDIA_TYPE,
    )
