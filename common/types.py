"""Shared data type definitions (FileDescriptor, ChunkRange, ChunkEnvelope, StoredFile)."""

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_MEDIA_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class FileDescriptor:
    """
    A file selected for upload.

    Renaming produces a new descriptor that still points at the same bytes.
    """
    name: str
    byte_length: int
    media_type: str = DEFAULT_MEDIA_TYPE
    path: Optional[Path] = None

    @classmethod
    def from_path(cls, path: Path) -> "FileDescriptor":
        """
        Build a descriptor for a local file.

        Args:
            path: Path of the file on disk

        Returns:
            FileDescriptor named after the file's base name

        Raises:
            OSError: If the file cannot be stat'ed
        """
        path = Path(path)
        media_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            byte_length=path.stat().st_size,
            media_type=media_type or DEFAULT_MEDIA_TYPE,
            path=path,
        )


@dataclass(frozen=True)
class ChunkRange:
    """
    Half-open byte range [start, end) of one chunk.
    """
    chunk_index: int
    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class ChunkEnvelope:
    """
    One ordered slice of a file's bytes, as received by the server.
    """
    file_name: str
    chunk_index: int
    total_chunks: int
    data: bytes

    @property
    def is_last(self) -> bool:
        return self.chunk_index == self.total_chunks - 1


@dataclass(frozen=True)
class StoredFile:
    """
    A file in the upload directory.
    """
    name: str
    size: int
