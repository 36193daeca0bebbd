"""Upload orchestration: validation, name-conflict resolution and sequential per-file uploads."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, AbstractSet, Callable, Dict, List, Optional, Sequence

from common.logging_config import get_logger
from common.types import FileDescriptor
from cli.conflict_resolution import resolve_file_name_conflicts
from cli.exceptions import ValidationError
from cli.file_upload import DEFAULT_POLICY, UploadPolicy, upload_file
from cli.validation import ValidationConfig, validate_file

if TYPE_CHECKING:
    from cli.upload_client import UploadClient

logger = get_logger(__name__)

GENERIC_UPLOAD_ERROR = "Upload failed"

ProgressListener = Callable[[str, float], None]


@dataclass(frozen=True)
class UploadState:
    """Point-in-time copy of a session's upload state."""
    progress: Dict[str, float] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)
    is_uploading: bool = False


class UploadSession:
    """
    Owns the per-file progress and error maps for one client session.

    Files of a batch are uploaded one after the other; a failing file is
    recorded under its name and does not stop the rest of the batch.
    """

    def __init__(
        self,
        client: "UploadClient",
        validation_config: ValidationConfig = ValidationConfig(),
        policy: UploadPolicy = DEFAULT_POLICY,
        listener: Optional[ProgressListener] = None
    ):
        self.client = client
        self.validation_config = validation_config
        self.policy = policy
        self.listener = listener
        self.progress: Dict[str, float] = {}
        self.errors: Dict[str, str] = {}
        self.is_uploading = False

    def set_progress(self, file_name: str, percentage: float) -> None:
        self.progress[file_name] = percentage
        if self.listener:
            self.listener(file_name, percentage)

    def set_error(self, file_name: str, message: str) -> None:
        self.errors[file_name] = message

    def snapshot(self) -> UploadState:
        return UploadState(
            progress=dict(self.progress),
            errors=dict(self.errors),
            is_uploading=self.is_uploading,
        )

    def upload_files(
        self,
        files: Sequence[FileDescriptor],
        existing_names: AbstractSet[str] = frozenset()
    ) -> List[FileDescriptor]:
        """
        Validate, rename and upload a batch of files.

        Args:
            files: Files in the order they should be uploaded
            existing_names: Names already stored on the server

        Returns:
            The batch with the names the files were uploaded under

        Raises:
            ValidationError: If any file fails validation (nothing is uploaded)
        """
        for file in files:
            result = validate_file(file, self.validation_config)
            if not result.is_valid:
                raise ValidationError(result.error_message or "Validation failed", file_name=file.name)

        resolved = resolve_file_name_conflicts(files, existing_names)
        for original, renamed in zip(files, resolved):
            if original.name != renamed.name:
                logger.info(f"Renamed {original.name} to {renamed.name} to avoid a name conflict")

        self.is_uploading = True
        try:
            for file in resolved:
                self._upload_one(file)
        finally:
            self.is_uploading = False

        return resolved

    def _upload_one(self, file: FileDescriptor) -> None:
        # An error from an earlier attempt under the same name no longer applies.
        self.errors.pop(file.name, None)
        try:
            upload_file(
                file,
                self.client,
                on_progress=lambda pct: self.set_progress(file.name, pct),
                policy=self.policy,
            )
            logger.info(f"Uploaded {file.name} ({file.byte_length} bytes)")
        except Exception as e:
            message = str(e) or GENERIC_UPLOAD_ERROR
            logger.error(f"Upload of {file.name} failed: {message}")
            self.set_error(file.name, message)
