"""Chunk planner and uploader: decides between a single request and a sequential chunked upload."""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterator, Optional

from common.constants import CHUNK_SIZE_BYTES, LARGE_FILE_THRESHOLD_BYTES
from common.logging_config import get_logger
from common.types import ChunkRange, FileDescriptor

if TYPE_CHECKING:
    from cli.upload_client import UploadClient

logger = get_logger(__name__)

ProgressCallback = Callable[[float], None]


@dataclass(frozen=True)
class UploadPolicy:
    """
    Files of at most large_file_threshold bytes go in one request; larger
    files are split into chunk_size pieces.
    """
    chunk_size: int = CHUNK_SIZE_BYTES
    large_file_threshold: int = LARGE_FILE_THRESHOLD_BYTES


DEFAULT_POLICY = UploadPolicy()


def count_chunks(byte_length: int, chunk_size: int) -> int:
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return math.ceil(byte_length / chunk_size)


def plan_chunks(byte_length: int, chunk_size: int) -> Iterator[ChunkRange]:
    """
    Split a byte length into consecutive ranges of at most chunk_size bytes.

    Args:
        byte_length: Size of the file in bytes
        chunk_size: Maximum chunk size in bytes

    Yields:
        ChunkRange for indices 0..total_chunks-1

    Raises:
        ValueError: If chunk_size is not positive
    """
    total_chunks = count_chunks(byte_length, chunk_size)
    for chunk_index in range(total_chunks):
        start = chunk_index * chunk_size
        yield ChunkRange(
            chunk_index=chunk_index,
            start=start,
            end=min(start + chunk_size, byte_length),
        )


def upload_file(
    file: FileDescriptor,
    client: "UploadClient",
    on_progress: Optional[ProgressCallback] = None,
    policy: UploadPolicy = DEFAULT_POLICY
) -> dict:
    """
    Upload a file, chunking it when it is larger than the policy threshold.

    Args:
        file: File to upload; its path provides the bytes
        client: Transport used for the requests
        on_progress: Called with a percentage after each chunk (never for single uploads)
        policy: Chunk size and threshold

    Returns:
        Response body of the final request

    Raises:
        UploadTransportError: If any request fails
        OSError: If the local file cannot be read
    """
    if file.byte_length > policy.large_file_threshold:
        return upload_file_in_chunks(file, client, on_progress, policy.chunk_size)

    with open(file.path, 'rb') as f:
        return client.upload_single(file.name, f, file.media_type)


def upload_file_in_chunks(
    file: FileDescriptor,
    client: "UploadClient",
    on_progress: Optional[ProgressCallback] = None,
    chunk_size: int = CHUNK_SIZE_BYTES
) -> dict:
    """
    Send a file as ordered chunks, one request at a time.

    A failed chunk stops the upload; parts already sent stay on the server.

    Returns:
        Response body of the last chunk
    """
    total_chunks = count_chunks(file.byte_length, chunk_size)
    logger.info(f"Uploading {file.name} in {total_chunks} chunks of up to {chunk_size} bytes")

    result = {}
    with open(file.path, 'rb') as f:
        for chunk in plan_chunks(file.byte_length, chunk_size):
            f.seek(chunk.start)
            data = f.read(chunk.size)

            result = client.upload_chunk(
                file.name,
                data,
                chunk.chunk_index,
                total_chunks,
                file.media_type,
            )

            if on_progress:
                on_progress((chunk.chunk_index + 1) / total_chunks * 100)

    return result
