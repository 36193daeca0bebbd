"""Service locator for the storage components shared by the routes."""

from pathlib import Path
from typing import Optional

from server.chunk_storage import ChunkStorage
from server.config import CHUNKS_DIR, UPLOAD_DIR
from server.services.chunk_service import ChunkAssembler
from server.services.file_store import FileStore

_file_store: Optional[FileStore] = None
_chunk_assembler: Optional[ChunkAssembler] = None


def configure_storage(upload_dir: Path, chunks_dir: Path) -> None:
    """
    Create the file store and chunk assembler for the given directories.

    Both directories are created if missing.
    """
    global _file_store, _chunk_assembler
    _file_store = FileStore(upload_dir)
    _file_store.ensure_directory()
    storage = ChunkStorage(chunks_dir)
    storage.ensure_directory()
    _chunk_assembler = ChunkAssembler(storage, upload_dir)


def get_file_store() -> FileStore:
    """Get global file store instance, configuring defaults on first use"""
    if _file_store is None:
        configure_storage(Path(UPLOAD_DIR), Path(CHUNKS_DIR))
    return _file_store


def get_chunk_assembler() -> ChunkAssembler:
    """Get global chunk assembler instance, configuring defaults on first use"""
    if _chunk_assembler is None:
        configure_storage(Path(UPLOAD_DIR), Path(CHUNKS_DIR))
    return _chunk_assembler
