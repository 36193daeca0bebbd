"""Stored file list held by the client, refreshed on demand."""

from typing import TYPE_CHECKING, List, Set

from common.logging_config import get_logger
from common.types import StoredFile
from cli.exceptions import FileListError

if TYPE_CHECKING:
    from cli.upload_client import UploadClient

logger = get_logger(__name__)


class FileList:
    """Best-effort view of the server's files: a failed fetch leaves an empty list."""

    def __init__(self, client: "UploadClient"):
        self.client = client
        self.files: List[StoredFile] = []
        self.is_loading = False

    def refetch(self) -> List[StoredFile]:
        self.is_loading = True
        try:
            self.files = self.client.get_files()
            logger.debug(f"Fetched {len(self.files)} file(s)")
        except FileListError as e:
            logger.error(f"Failed to fetch files: {e}")
            self.files = []
        finally:
            self.is_loading = False
        return self.files

    def names(self) -> Set[str]:
        return {f.name for f in self.files}
