"""Service layer for the upload server."""

from server.services.chunk_service import ChunkAssembler
from server.services.file_store import FileStore

__all__ = ["ChunkAssembler", "FileStore"]
