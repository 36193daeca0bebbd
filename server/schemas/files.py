"""Pydantic schemas for upload and listing endpoints."""

from typing import List
from pydantic import BaseModel


class UploadResponse(BaseModel):
    """Response model for single-file and chunk uploads."""
    message: str


class FileEntry(BaseModel):
    """A stored file as reported by the listing endpoint."""
    name: str
    size: int


class ListFilesResponse(BaseModel):
    """Response model for file listing."""
    files: List[FileEntry]
