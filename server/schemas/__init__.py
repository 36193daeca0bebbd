"""Pydantic schemas for API requests and responses."""

from server.schemas.files import (
    UploadResponse,
    FileEntry,
    ListFilesResponse
)
from server.schemas.common import UploadErrorResponse, ListErrorResponse

__all__ = [
    "UploadResponse",
    "FileEntry",
    "ListFilesResponse",
    "UploadErrorResponse",
    "ListErrorResponse"
]
