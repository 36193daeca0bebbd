"""Entry point for the upload server."""

import time
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.logging_config import setup_logging
from server.config import CHUNKS_DIR, SERVER_HOST, SERVER_PORT, UPLOAD_DIR
from server.exceptions import (
    UploadServiceError,
    MissingUploadFieldError,
    InvalidChunkError,
    InvalidFileNameError,
    StorageWriteError,
    ChunkMergeError,
    StorageListError
)
from server.routes.file_routes import router as file_router
from server.schemas.common import ListErrorResponse, UploadErrorResponse
from server.service_locator import configure_storage
from server.utils import generate_request_id

logger = setup_logging('server')

app = FastAPI(
    title="ChunkDrop Upload Server",
    description="File upload server with chunked upload reassembly",
    version="1.0.0"
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = generate_request_id()
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


@app.on_event("startup")
async def startup_event():
    """
    Create the storage directories on application startup.
    """
    logger.info("Upload server starting up...")
    configure_storage(Path(UPLOAD_DIR), Path(CHUNKS_DIR))
    logger.info(f"Storing uploads in {UPLOAD_DIR}, chunk parts in {CHUNKS_DIR}")


def _client_error(request: Request, exc: UploadServiceError, code: str) -> JSONResponse:
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Rejected upload: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=UploadErrorResponse(error=str(exc), code=code).model_dump()
    )


def _server_error(request: Request, exc: UploadServiceError, code: str) -> JSONResponse:
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"{type(exc).__name__}: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=UploadErrorResponse(error=str(exc), code=code).model_dump()
    )


@app.exception_handler(MissingUploadFieldError)
async def missing_field_handler(request: Request, exc: MissingUploadFieldError):
    return _client_error(request, exc, "MISSING_FIELD")


@app.exception_handler(InvalidChunkError)
async def invalid_chunk_handler(request: Request, exc: InvalidChunkError):
    return _client_error(request, exc, "INVALID_CHUNK")


@app.exception_handler(InvalidFileNameError)
async def invalid_file_name_handler(request: Request, exc: InvalidFileNameError):
    return _client_error(request, exc, "INVALID_FILE_NAME")


@app.exception_handler(StorageWriteError)
async def storage_write_handler(request: Request, exc: StorageWriteError):
    return _server_error(request, exc, "WRITE_FAILED")


@app.exception_handler(ChunkMergeError)
async def chunk_merge_handler(request: Request, exc: ChunkMergeError):
    return _server_error(request, exc, "MERGE_FAILED")


@app.exception_handler(StorageListError)
async def storage_list_handler(request: Request, exc: StorageListError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(f"StorageListError: {exc} [request_id={request_id}]", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ListErrorResponse(message=str(exc), code="LIST_FAILED").model_dump()
    )


@app.exception_handler(UploadServiceError)
async def upload_service_error_handler(request: Request, exc: UploadServiceError):
    return _server_error(request, exc, "INTERNAL_ERROR")


app.include_router(file_router)


@app.get("/")
async def root():
    """
    Root endpoint for health check.
    """
    return {"message": "ChunkDrop Upload Server API", "status": "running"}


@app.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns 200 if service is alive.
    """
    return {"status": "healthy", "service": "server"}


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "server.main:app",
        host=SERVER_HOST,
        port=SERVER_PORT
    )


if __name__ == "__main__":
    main()
