"""Utility helper functions for the upload server."""

import re
import uuid

from server.exceptions import InvalidFileNameError

CHUNK_NUMBER_PATTERN = re.compile(r"^-?[0-9]+$")


def generate_request_id() -> str:
    """
    Generate a new request ID.

    Returns:
        UUID4 string
    """
    return str(uuid.uuid4())


def check_storage_name(file_name: str) -> str:
    """
    Reject file names that are not a single path component.

    Args:
        file_name: Name supplied by the client

    Returns:
        The unchanged file name

    Raises:
        InvalidFileNameError: If the name contains a path separator or is '.' or '..'
    """
    if "/" in file_name or "\\" in file_name or file_name in (".", "..") or "\x00" in file_name:
        raise InvalidFileNameError(f"Invalid file name: {file_name!r}")
    return file_name


def parse_chunk_number(value: str, field_name: str) -> int:
    """
    Parse a multipart form field holding a chunk position.

    Args:
        value: Raw form value
        field_name: Field name used in the error message

    Returns:
        Parsed integer

    Raises:
        ValueError: If the value is not a plain base-10 integer
    """
    if not isinstance(value, str) or not CHUNK_NUMBER_PATTERN.match(value.strip()):
        raise ValueError(f"`{field_name}` must be an integer, got {value!r}")
    return int(value.strip())
