"""Tests for the CLI entry point."""

from unittest.mock import Mock, patch

import pytest

import cli.commands
from cli.commands import close_client
from cli.main import main
from cli.upload_client import UploadClient


def test_main_closes_client_on_exit():
    """Test the HTTP client is closed after the REPL returns."""
    with patch('cli.main.repl_loop') as repl, patch('cli.main.close_client') as close:
        main([])

    repl.assert_called_once()
    close.assert_called_once()


def test_main_closes_client_on_error():
    """Test the HTTP client is closed even when the REPL crashes."""
    with patch('cli.main.repl_loop', side_effect=RuntimeError('boom')), \
            patch('cli.main.close_client') as close:
        with pytest.raises(RuntimeError):
            main(['--debug'])

    close.assert_called_once()


def test_close_client_resets_shared_state():
    """Test closing drops the cached client, session and file list."""
    client = Mock(spec=UploadClient)
    cli.commands._client = client
    cli.commands._session = Mock()
    cli.commands._file_list = Mock()

    close_client()

    client.close.assert_called_once()
    assert cli.commands._client is None
    assert cli.commands._session is None
    assert cli.commands._file_list is None


def test_close_client_without_client():
    """Test closing before any command ran is a no-op."""
    cli.commands._client = None

    close_client()

    assert cli.commands._client is None
