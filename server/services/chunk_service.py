"""Chunk receiver: persists chunk parts and reassembles a file when its last chunk arrives."""

import logging
from pathlib import Path

from common.types import ChunkEnvelope
from server.chunk_storage import ChunkStorage
from server.exceptions import ChunkMergeError, StorageWriteError

logger = logging.getLogger(__name__)


class ChunkAssembler:
    def __init__(self, storage: ChunkStorage, upload_dir: Path):
        self.storage = storage
        self.upload_dir = Path(upload_dir)

    def receive_chunk(self, envelope: ChunkEnvelope) -> bool:
        """
        Store one chunk and merge the file if it is the last one by index.

        Args:
            envelope: Chunk with file name, position and bytes

        Returns:
            True if the file was reassembled by this call

        Raises:
            StorageWriteError: If the part cannot be written
            ChunkMergeError: If reassembly fails
        """
        try:
            self.storage.write_part(envelope.file_name, envelope.chunk_index, envelope.data)
        except OSError as e:
            logger.error(
                f"Failed to store chunk {envelope.chunk_index} of {envelope.file_name}: {e}",
                exc_info=True
            )
            raise StorageWriteError(f"Error saving chunk {envelope.chunk_index} of {envelope.file_name}") from e

        logger.debug(
            f"Stored chunk {envelope.chunk_index + 1}/{envelope.total_chunks} "
            f"of {envelope.file_name} ({len(envelope.data)} bytes)"
        )

        if not envelope.is_last:
            return False

        logger.info(f"Merging {envelope.total_chunks} chunks of {envelope.file_name}")
        self.merge_chunks(envelope.file_name, envelope.total_chunks)
        return True

    def merge_chunks(self, file_name: str, total_chunks: int) -> Path:
        """
        Concatenate parts 0..total_chunks-1 into the final file, deleting each part once copied.

        The output is not rolled back if a part fails midway.

        Args:
            file_name: Name of the file to reassemble
            total_chunks: Number of parts to concatenate

        Returns:
            Path of the reassembled file

        Raises:
            ChunkMergeError: If parts are missing or an I/O error occurs
        """
        missing = self.storage.missing_parts(file_name, total_chunks)
        if missing:
            raise ChunkMergeError(
                f"Cannot merge {file_name}: missing chunk(s) {', '.join(str(i) for i in missing)}"
            )

        output_path = self.upload_dir / file_name
        bytes_written = 0

        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'wb') as out:
                for chunk_index in range(total_chunks):
                    data = self.storage.read_part(file_name, chunk_index)
                    out.write(data)
                    bytes_written += len(data)
                    self.storage.delete_part(file_name, chunk_index)
        except OSError as e:
            logger.error(
                f"Merge of {file_name} failed after {bytes_written} bytes: {e}",
                exc_info=True
            )
            raise ChunkMergeError(f"Error merging chunks of {file_name}") from e

        logger.info(f"Reassembled {file_name}: {total_chunks} chunks, {bytes_written} bytes")
        return output_path
