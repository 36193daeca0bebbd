"""Shared pytest fixtures for all tests."""

import pytest
from fastapi.testclient import TestClient

from cli.config import Config
from server.main import app
from server.service_locator import configure_storage


@pytest.fixture
def temp_config_dir(tmp_path):
    """
    Create temporary config directory.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to temporary .chunkdrop directory
    """
    config_dir = tmp_path / '.chunkdrop'
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def temp_config(temp_config_dir):
    """
    Create temporary config instance.

    Args:
        temp_config_dir: Temporary config directory fixture

    Returns:
        Config instance with temp config file
    """
    return Config(temp_config_dir / 'config.json')


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a sample file for testing file uploads.

    Returns:
        Path to sample text file
    """
    file_path = tmp_path / 'test.txt'
    file_path.write_text('Sample content for testing')
    return file_path


@pytest.fixture
def make_file(tmp_path):
    """
    Factory creating files of a given size with non-repeating content.

    Returns:
        Callable (name, size) -> Path
    """
    def _make(name: str, size: int):
        path = tmp_path / 'local' / name
        path.parent.mkdir(exist_ok=True)
        path.write_bytes(bytes(i % 251 for i in range(size)))
        return path

    return _make


@pytest.fixture
def storage_dirs(tmp_path):
    """
    Point the server's storage at temporary directories.

    Returns:
        Tuple of (upload_dir, chunks_dir)
    """
    upload_dir = tmp_path / 'uploads'
    chunks_dir = tmp_path / 'uploads-chunks'
    configure_storage(upload_dir, chunks_dir)
    return upload_dir, chunks_dir


@pytest.fixture
def api(storage_dirs):
    """Create FastAPI test client backed by temporary storage."""
    return TestClient(app)
