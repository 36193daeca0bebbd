"""Manages chunk part files on disk: write, read, delete and completeness checks."""

from pathlib import Path
from typing import List

from common.constants import CHUNK_PART_SEPARATOR


class ChunkStorage:
    """
    Chunk parts stored as `{file_name}.part_{chunk_index}` in a single directory.
    """

    def __init__(self, chunks_dir: Path):
        self.chunks_dir = Path(chunks_dir)

    def ensure_directory(self) -> None:
        """Ensure chunks directory exists."""
        self.chunks_dir.mkdir(parents=True, exist_ok=True)

    def get_part_path(self, file_name: str, chunk_index: int) -> Path:
        """
        Get file path for a chunk part.

        Args:
            file_name: Name of the file the chunk belongs to
            chunk_index: 0-based position of the chunk

        Returns:
            Path object for the part file
        """
        return self.chunks_dir / f"{file_name}{CHUNK_PART_SEPARATOR}{chunk_index}"

    def write_part(self, file_name: str, chunk_index: int, data: bytes) -> Path:
        """
        Write chunk data to disk, replacing an earlier delivery of the same part.

        Args:
            file_name: Name of the file the chunk belongs to
            chunk_index: 0-based position of the chunk
            data: Raw chunk bytes

        Returns:
            Path to the written part

        Raises:
            OSError: If write operation fails
        """
        self.ensure_directory()
        path = self.get_part_path(file_name, chunk_index)
        path.write_bytes(data)
        return path

    def read_part(self, file_name: str, chunk_index: int) -> bytes:
        """
        Read an entire chunk part.

        Raises:
            FileNotFoundError: If the part does not exist
        """
        return self.get_part_path(file_name, chunk_index).read_bytes()

    def delete_part(self, file_name: str, chunk_index: int) -> bool:
        """
        Delete a chunk part.

        Returns:
            True if the part was deleted, False if it didn't exist
        """
        path = self.get_part_path(file_name, chunk_index)
        if path.exists():
            path.unlink()
            return True
        return False

    def part_exists(self, file_name: str, chunk_index: int) -> bool:
        return self.get_part_path(file_name, chunk_index).exists()

    def missing_parts(self, file_name: str, total_chunks: int) -> List[int]:
        """
        Find which parts of a file have not been received yet.

        Args:
            file_name: Name of the file
            total_chunks: Number of chunks the file was split into

        Returns:
            Sorted list of missing chunk indices (empty when the set is complete)
        """
        return [i for i in range(total_chunks) if not self.part_exists(file_name, i)]
