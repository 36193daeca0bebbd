"""Client-side file validation run before anything reaches the network."""

import re
from dataclasses import dataclass
from typing import Optional

from common.constants import BLOCKED_EXTENSIONS, MAX_FILE_NAME_LENGTH, MAX_FILE_SIZE_BYTES
from common.logging_config import get_logger
from common.types import FileDescriptor

logger = get_logger(__name__)

SAFE_NAME_PATTERN = re.compile(r'^[A-Za-z0-9._ -]+$')
EXTENSION_PATTERN = re.compile(r'\.([^.]+)$')


@dataclass(frozen=True)
class ValidationConfig:
    """Limits applied by validate_file."""
    max_size: int = MAX_FILE_SIZE_BYTES
    max_name_length: int = MAX_FILE_NAME_LENGTH
    blocked_extensions: tuple[str, ...] = BLOCKED_EXTENSIONS


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    error_message: Optional[str] = None


VALID = ValidationResult(is_valid=True)


def _invalid(message: str) -> ValidationResult:
    logger.warning(message)
    return ValidationResult(is_valid=False, error_message=message)


def validate_file(file: FileDescriptor, config: ValidationConfig = ValidationConfig()) -> ValidationResult:
    """
    Check a file against size, name and extension rules, stopping at the first failure.

    Args:
        file: File selected for upload
        config: Limits to apply

    Returns:
        ValidationResult; error_message is set when the file is rejected
    """
    name = file.name

    if config.max_size and file.byte_length > config.max_size:
        return _invalid(f'File "{name}" exceeds the maximum size of {config.max_size} bytes')

    if len(name) > config.max_name_length:
        return _invalid(f'File "{name}" name is too long (max {config.max_name_length} characters)')

    if not SAFE_NAME_PATTERN.match(name):
        return _invalid(
            f'File "{name}" contains invalid characters. '
            f'Only alphanumeric, spaces, dots, underscores, and hyphens are allowed'
        )

    extension_match = EXTENSION_PATTERN.search(name)
    if not extension_match:
        return _invalid(f'File "{name}" must have a file extension')

    extension = extension_match.group(1).lower()
    if extension in config.blocked_extensions:
        return _invalid(f'File "{name}" has an executable extension (.{extension}) which is not allowed')

    return VALID

