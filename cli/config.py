"""Configuration management for ChunkDrop CLI."""

import json
import os
import shutil
import tempfile
from pathlib import Path

from common.constants import (
    BLOCKED_EXTENSIONS,
    CHUNK_SIZE_BYTES,
    DEFAULT_SERVER_PORT,
    LARGE_FILE_THRESHOLD_BYTES,
    MAX_FILE_NAME_LENGTH,
    MAX_FILE_SIZE_BYTES,
)
from common.logging_config import get_logger
from cli.file_upload import UploadPolicy
from cli.validation import ValidationConfig

logger = get_logger(__name__)


class Config:
    """Manages CLI configuration stored in JSON file."""

    DEFAULT_CONFIG = {
        "server_host": os.environ.get("CHUNKDROP_SERVER_HOST", "localhost"),
        "server_port": int(os.environ.get("CHUNKDROP_SERVER_PORT", str(DEFAULT_SERVER_PORT))),
        "timeout": 30,
        "chunk_size": CHUNK_SIZE_BYTES,
        "large_file_threshold": LARGE_FILE_THRESHOLD_BYTES,
        "max_file_size": MAX_FILE_SIZE_BYTES,
        "max_name_length": MAX_FILE_NAME_LENGTH,
        "blocked_extensions": list(BLOCKED_EXTENSIONS),
    }

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.chunkdrop/config.json)
        """
        self.config_path = config_path
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            self.config_path = Path(tempfile.gettempdir()) / '.chunkdrop' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                config = self.DEFAULT_CONFIG.copy()
                config.update(data)
                return config
            except (json.JSONDecodeError, IOError) as e:
                logger.warning(f"Unreadable config {self.config_path}, using defaults: {e}")
                backup_path = self.config_path.with_suffix('.json.bak')
                try:
                    shutil.copy(self.config_path, backup_path)
                except OSError as copy_error:
                    logger.warning(f"Could not back up config: {copy_error}")
                return self.DEFAULT_CONFIG.copy()
        else:
            config = self.DEFAULT_CONFIG.copy()
            try:
                with open(self.config_path, 'w') as f:
                    json.dump(config, f, indent=2)
            except IOError as e:
                logger.warning(f"Could not write default config: {e}")
            return config

    def get_base_url(self) -> str:
        """
        Get upload server base URL.

        Returns:
            Base URL string (e.g., "http://localhost:3000")
        """
        host = self.data.get('server_host', 'localhost')
        port = self.data.get('server_port', DEFAULT_SERVER_PORT)
        return f"http://{host}:{port}"

    def get_timeout(self) -> int:
        """
        Get request timeout in seconds.

        Returns:
            Timeout value in seconds
        """
        return self.data.get('timeout', 30)

    def get_upload_policy(self) -> UploadPolicy:
        """
        Get chunking policy.

        Returns:
            UploadPolicy with chunk size and large-file threshold in bytes
        """
        return UploadPolicy(
            chunk_size=int(self.data.get('chunk_size', CHUNK_SIZE_BYTES)),
            large_file_threshold=int(self.data.get('large_file_threshold', LARGE_FILE_THRESHOLD_BYTES)),
        )

    def get_validation_config(self) -> ValidationConfig:
        """
        Get client-side validation limits.

        Returns:
            ValidationConfig built from the stored limits
        """
        return ValidationConfig(
            max_size=int(self.data.get('max_file_size', MAX_FILE_SIZE_BYTES)),
            max_name_length=int(self.data.get('max_name_length', MAX_FILE_NAME_LENGTH)),
            blocked_extensions=tuple(
                ext.lower().lstrip('.') for ext in self.data.get('blocked_extensions', BLOCKED_EXTENSIONS)
            ),
        )
