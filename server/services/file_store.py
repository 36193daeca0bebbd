"""File store: direct uploads into the upload directory and listing of stored files."""

import logging
import shutil
from pathlib import Path
from typing import BinaryIO, List

from common.constants import PLACEHOLDER_FILE_NAME
from common.types import StoredFile
from server.exceptions import StorageListError, StorageWriteError

logger = logging.getLogger(__name__)


class FileStore:
    def __init__(self, upload_dir: Path):
        self.upload_dir = Path(upload_dir)

    def ensure_directory(self) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def get_file_path(self, file_name: str) -> Path:
        return self.upload_dir / file_name

    def save(self, file_name: str, stream: BinaryIO) -> StoredFile:
        """
        Stream an uploaded file to its final location, replacing any file of the same name.

        Args:
            file_name: Name to store the file under
            stream: Readable binary stream with the file content

        Returns:
            StoredFile with the written size

        Raises:
            StorageWriteError: If the file cannot be written
        """
        path = self.get_file_path(file_name)
        try:
            self.ensure_directory()
            with open(path, 'wb') as out:
                shutil.copyfileobj(stream, out)
            size = path.stat().st_size
        except OSError as e:
            logger.error(f"Failed to save file {file_name}: {e}", exc_info=True)
            raise StorageWriteError(f"Error saving file {file_name}") from e

        logger.info(f"Stored file {file_name} ({size} bytes)")
        return StoredFile(name=file_name, size=size)

    def list_files(self) -> List[StoredFile]:
        """
        List stored files with their sizes, skipping the placeholder entry.

        Returns:
            StoredFile entries sorted by name

        Raises:
            StorageListError: If the upload directory cannot be read
        """
        try:
            entries = sorted(self.upload_dir.iterdir(), key=lambda p: p.name)
            files = []
            for entry in entries:
                if entry.name == PLACEHOLDER_FILE_NAME or not entry.is_file():
                    continue
                files.append(StoredFile(name=entry.name, size=entry.stat().st_size))
        except OSError as e:
            logger.error(f"Failed to list {self.upload_dir}: {e}")
            raise StorageListError(str(e)) from e

        return files
