"""Entrypoint of the build API exposing the FastAPI `app` to be served by an application server such as uvicorn."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from apkgen import __version__
from apkgen.api.build_routes import api as build_api, openapi_tags as build_tags
from apkgen.application.services.exceptions import (
    ArtifactMissingError,
    ArtifactNotFoundError,
    BuildError,
    ValidationError,
    WorkspaceError,
)
from apkgen.config import get_settings
from apkgen.infrastructure.logging_config import configure_logging

__license__ = "MIT"

logger = logging.getLogger(__name__)

description = """
Builds Android WebView packages from a template project and serves each APK once.
"""


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    settings.temp_root.mkdir(parents=True, exist_ok=True)
    logger.info("Workspaces under %s, template %s", settings.temp_root, settings.template_dir)
    yield


# Metadata to improve the usefulness of OpenAPI Docs /docs API Explorer
app = FastAPI(
    title="APK Generator API",
    version=__version__,
    description=description,
    openapi_tags=[build_tags],
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# Clients only ever see generic messages; details go to the log.
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.info("Rejected %s: %s", request.url.path, exc)
    return error_response(400, "Missing required fields")


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Malformed request to %s: %s", request.url.path, exc.errors())
    return error_response(400, "Missing required fields")


@app.exception_handler(BuildError)
async def build_error_handler(request: Request, exc: BuildError):
    logger.error("Build failed (exit code %s): %s", exc.returncode, exc)
    return error_response(500, "Failed to build APK")


@app.exception_handler(ArtifactMissingError)
async def artifact_missing_handler(request: Request, exc: ArtifactMissingError):
    logger.error("Artifact missing: %s", exc)
    return error_response(500, "APK generation failed")


@app.exception_handler(ArtifactNotFoundError)
async def artifact_not_found_handler(request: Request, exc: ArtifactNotFoundError):
    logger.info("Download rejected: %s", exc)
    return error_response(404, "APK not found")


@app.exception_handler(WorkspaceError)
async def workspace_error_handler(request: Request, exc: WorkspaceError):
    logger.error("Workspace failure: %s", exc, exc_info=exc)
    return error_response(500, "Internal server error")


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
    return error_response(500, "Internal server error")


# Plugging in each of the router APIs
feature_apis = [
    build_api,
]

for feature_api in feature_apis:
    app.include_router(feature_api)
