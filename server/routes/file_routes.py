"""Upload and listing API routes."""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, File, Form, UploadFile
from starlette.datastructures import UploadFile as StarletteUploadFile

from common.types import ChunkEnvelope
from server.exceptions import InvalidChunkError, MissingUploadFieldError
from server.schemas.common import ListErrorResponse, UploadErrorResponse
from server.schemas.files import FileEntry, ListFilesResponse, UploadResponse
from server.service_locator import get_chunk_assembler, get_file_store
from server.services.chunk_service import ChunkAssembler
from server.services.file_store import FileStore
from server.utils import check_storage_name, parse_chunk_number

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Files"])

MISSING_FILE_NAME_MESSAGE = (
    "Missing filename, did you pass the filename in the multipart part? "
    "(`files={'file': (filename, chunk)}`)"
)

UPLOAD_ERROR_RESPONSES = {
    400: {"model": UploadErrorResponse},
    500: {"model": UploadErrorResponse},
}


def _uploaded_file_name(file: Union[UploadFile, str]) -> str:
    # A part sent without a filename arrives as a plain form string.
    if not isinstance(file, StarletteUploadFile) or not file.filename:
        raise MissingUploadFieldError(MISSING_FILE_NAME_MESSAGE)
    return file.filename


@router.get(
    "/files",
    response_model=ListFilesResponse,
    responses={500: {"model": ListErrorResponse}}
)
async def list_files(file_store: FileStore = Depends(get_file_store)):
    """
    List stored files.

    Returns:
        - files: name and size in bytes of every stored file

    Raises:
        - 500: Upload directory cannot be read
    """
    files = file_store.list_files()
    return ListFilesResponse(files=[FileEntry(name=f.name, size=f.size) for f in files])


@router.post("/upload-single", response_model=UploadResponse, responses=UPLOAD_ERROR_RESPONSES)
async def upload_single(
    file: Union[UploadFile, str, None] = File(None),
    file_store: FileStore = Depends(get_file_store)
):
    """
    Upload a whole file in one request.

    Parameters:
        - file: File to upload (multipart/form-data)

    Returns:
        - message: Confirmation message

    Raises:
        - 400: Missing `file` field or unusable file name
        - 500: File could not be written
    """
    if file is None:
        raise MissingUploadFieldError("Missing required `file` key in body.")
    file_name = check_storage_name(_uploaded_file_name(file))

    logger.info(f"Receiving whole file {file_name}")
    file_store.save(file_name, file.file)

    return UploadResponse(message="File uploaded successfully")


@router.post("/upload-chunk", response_model=UploadResponse, responses=UPLOAD_ERROR_RESPONSES)
async def upload_chunk(
    file: Union[UploadFile, str, None] = File(None),
    currentChunkIndex: Optional[str] = Form(None),
    totalChunks: Optional[str] = Form(None),
    assembler: ChunkAssembler = Depends(get_chunk_assembler)
):
    """
    Upload one chunk of a file; the chunk with index totalChunks - 1 triggers reassembly.

    Parameters:
        - file: Chunk bytes, sent with the target file name as multipart filename
        - currentChunkIndex: 0-based index of this chunk
        - totalChunks: Number of chunks the file was split into

    Returns:
        - message: Confirmation message

    Raises:
        - 400: Missing field, missing file name or chunk position out of range
        - 500: Chunk could not be written or the file could not be reassembled
    """
    if file is None or currentChunkIndex is None or totalChunks is None:
        raise MissingUploadFieldError("Missing required parameters")
    file_name = check_storage_name(_uploaded_file_name(file))

    try:
        chunk_index = parse_chunk_number(currentChunkIndex, "currentChunkIndex")
        total_chunks = parse_chunk_number(totalChunks, "totalChunks")
    except ValueError as e:
        raise InvalidChunkError(str(e))

    if total_chunks < 1:
        raise InvalidChunkError(f"`totalChunks` must be at least 1, got {total_chunks}")
    if not 0 <= chunk_index < total_chunks:
        raise InvalidChunkError(
            f"`currentChunkIndex` must be between 0 and {total_chunks - 1}, got {chunk_index}"
        )

    data = await file.read()
    logger.debug(f"Receiving chunk {chunk_index + 1}/{total_chunks} of {file_name}")

    assembler.receive_chunk(
        ChunkEnvelope(
            file_name=file_name,
            chunk_index=chunk_index,
            total_chunks=total_chunks,
            data=data,
        )
    )

    return UploadResponse(message="Chunked file uploaded successfully")
