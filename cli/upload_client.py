"""HTTP client for the upload server API."""

import uuid
from typing import BinaryIO, List, Union

import httpx

from common.logging_config import get_logger
from common.types import StoredFile
from cli.config import Config
from cli.exceptions import FileListError, UploadTransportError

logger = get_logger(__name__)


class UploadClient:
    """HTTP client for the upload endpoints. Requests are never retried."""

    def __init__(self, config: Config):
        """
        Initialize upload client.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.session = httpx.Client(
            base_url=config.get_base_url(),
            timeout=config.get_timeout()
        )
        self.request_id = None
        logger.info(f"Initialized UploadClient [base_url={config.get_base_url()}]")

    def _request(self, method: str, endpoint: str, **kwargs) -> httpx.Response:
        """
        Make one HTTP request and turn failures into UploadTransportError.

        Args:
            method: HTTP method (GET, POST)
            endpoint: API endpoint path
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            HTTP response object with a 2xx status

        Raises:
            UploadTransportError: On network failure or non-2xx status
        """
        self.request_id = str(uuid.uuid4())
        kwargs.setdefault('headers', {})['X-Request-ID'] = self.request_id

        logger.debug(f"Making request: {method} {endpoint} [request_id={self.request_id}]")

        try:
            response = self.session.request(method, endpoint, **kwargs)
        except httpx.ConnectError as e:
            logger.error(f"Network error: {method} {endpoint} error={e} [request_id={self.request_id}]")
            raise UploadTransportError("Cannot connect to upload server. Is it running?") from e
        except httpx.TimeoutException as e:
            logger.error(f"Timeout: {method} {endpoint} [request_id={self.request_id}]")
            raise UploadTransportError("Request timed out. Server may be overloaded.") from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error: {method} {endpoint} error={e} [request_id={self.request_id}]")
            raise UploadTransportError(f"Request failed: {e}") from e

        logger.debug(
            f"Response received: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
        )

        if not response.is_success:
            logger.warning(
                f"Request failed: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
            )
            raise UploadTransportError(self._format_error(response), status_code=response.status_code)

        return response

    def _format_error(self, response: httpx.Response) -> str:
        """
        Extract the server's error message from an error response.

        Args:
            response: HTTP response object

        Returns:
            Error message, falling back to the status code
        """
        try:
            error_data = response.json()
        except ValueError:
            error_data = None

        if isinstance(error_data, dict):
            detail = error_data.get('error') or error_data.get('message') or error_data.get('detail')
            if detail:
                return str(detail)

        return f"Request failed with status code {response.status_code}"

    def upload_single(self, file_name: str, content: Union[bytes, BinaryIO], media_type: str) -> dict:
        """
        Upload a whole file in one request.

        Args:
            file_name: Name to store the file under
            content: File bytes or an open binary file
            media_type: Content type of the multipart part

        Returns:
            Response body ({"message": ...})

        Raises:
            UploadTransportError: If the upload fails
        """
        logger.info(f"Uploading {file_name} in a single request")
        response = self._request(
            'POST',
            '/api/upload-single',
            files={'file': (file_name, content, media_type)}
        )
        return response.json()

    def upload_chunk(
        self,
        file_name: str,
        data: bytes,
        chunk_index: int,
        total_chunks: int,
        media_type: str
    ) -> dict:
        """
        Upload one chunk of a file.

        Args:
            file_name: Name of the file the chunk belongs to
            data: Chunk bytes
            chunk_index: 0-based chunk position
            total_chunks: Number of chunks of the file
            media_type: Content type of the multipart part

        Returns:
            Response body ({"message": ...})

        Raises:
            UploadTransportError: If the upload fails
        """
        logger.debug(f"Uploading chunk {chunk_index + 1}/{total_chunks} of {file_name} ({len(data)} bytes)")
        response = self._request(
            'POST',
            '/api/upload-chunk',
            files={'file': (file_name, data, media_type)},
            data={
                'currentChunkIndex': str(chunk_index),
                'totalChunks': str(total_chunks),
            }
        )
        return response.json()

    def get_files(self) -> List[StoredFile]:
        """
        Fetch the stored file list.

        Returns:
            StoredFile entries as reported by the server

        Raises:
            FileListError: If the list cannot be fetched
        """
        try:
            response = self._request('GET', '/api/files')
            data = response.json()
            return [StoredFile(name=f['name'], size=f['size']) for f in data['files']]
        except UploadTransportError as e:
            raise FileListError(str(e)) from e
        except (ValueError, KeyError, TypeError) as e:
            raise FileListError(f"Malformed file list response: {e}") from e

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
