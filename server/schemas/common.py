"""Common schemas used across multiple endpoints."""

from pydantic import BaseModel


class UploadErrorResponse(BaseModel):
    """Error body returned by the upload endpoints."""
    error: str
    code: str


class ListErrorResponse(BaseModel):
    """Error body returned by the listing endpoint."""
    message: str
    code: str
