from pydantic import BaseModel


class GenerateAppResponse(BaseModel):
    success: bool = True
    apkPath: str
    downloadUrl: str


class ErrorResponse(BaseModel):
    error: str
