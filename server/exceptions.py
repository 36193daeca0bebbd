"""Custom exception classes for the upload server."""


class UploadServiceError(Exception):
    """
    Base exception class for all upload server errors.
    """
    pass


class MissingUploadFieldError(UploadServiceError):
    """
    Raised when a multipart upload lacks the file, a chunk field or the file name.
    """
    pass


class InvalidChunkError(UploadServiceError):
    """
    Raised when chunk position fields are not integers or fall outside 0 <= index < total.
    """
    pass


class StorageWriteError(UploadServiceError):
    """
    Raised when an uploaded file or chunk part cannot be written to disk.
    """
    pass


class ChunkMergeError(UploadServiceError):
    """
    Raised when the chunk parts of a file cannot be reassembled.
    """
    pass


class StorageListError(UploadServiceError):
    """
    Raised when the upload directory cannot be read.
    """
    pass


class InvalidFileNameError(UploadServiceError):
    """
    Raised when a file name would escape the storage directories.
    """
    pass
