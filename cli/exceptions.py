"""Exception classes for the upload client."""

from typing import Optional


class ClientError(Exception):
    """
    Base exception class for all client-side upload errors.
    """
    pass


class ValidationError(ClientError):
    """
    Raised when a file in a batch fails validation; nothing is uploaded.
    """

    def __init__(self, message: str, file_name: Optional[str] = None):
        super().__init__(message)
        self.file_name = file_name


class UploadTransportError(ClientError):
    """
    Raised when an upload request fails on the network or is answered with an error status.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FileListError(ClientError):
    """
    Raised when the stored file list cannot be fetched.
    """
    pass
