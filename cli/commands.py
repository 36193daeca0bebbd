"""Command handler functions for CLI operations."""

import sys
from pathlib import Path
from typing import Optional

from common.logging_config import get_logger
from common.types import FileDescriptor
from cli.config import Config
from cli.exceptions import ValidationError
from cli.file_list import FileList
from cli.models import ListCommand, ProgressCommand, UploadCommand
from cli.upload_client import UploadClient
from cli.upload_session import UploadSession
from cli.utils import format_file_size, render_progress_bar

logger = get_logger(__name__)


_client: Optional[UploadClient] = None
_session: Optional[UploadSession] = None
_file_list: Optional[FileList] = None


def _config_path() -> Path:
    return Path.home() / '.chunkdrop' / 'config.json'


def close_client() -> None:
    """Close the shared HTTP client and forget the session state built on it."""
    global _client, _session, _file_list
    if _client is not None:
        _client.close()
    _client = None
    _session = None
    _file_list = None


def show_progress(file_name: str, percentage: float) -> None:
    """Redraw the progress bar of the file currently uploading."""
    sys.stdout.write('\r' + render_progress_bar(file_name, percentage))
    if percentage >= 100:
        sys.stdout.write('\n')
    sys.stdout.flush()


def get_client() -> UploadClient:
    """
    Get or create global UploadClient instance.

    Returns:
        UploadClient instance
    """
    global _client
    if _client is None:
        logger.debug("Creating new UploadClient instance")
        _client = UploadClient(Config(_config_path()))
    return _client


def get_session() -> UploadSession:
    """
    Get or create the global UploadSession, configured from the CLI config.

    Returns:
        UploadSession instance
    """
    global _session
    if _session is None:
        client = get_client()
        _session = UploadSession(
            client,
            validation_config=client.config.get_validation_config(),
            policy=client.config.get_upload_policy(),
            listener=show_progress,
        )
    return _session


def get_file_list() -> FileList:
    """
    Get or create the global FileList.

    Returns:
        FileList instance
    """
    global _file_list
    if _file_list is None:
        _file_list = FileList(get_client())
    return _file_list


def handle_upload(
    cmd: UploadCommand,
    session: Optional[UploadSession] = None,
    file_list: Optional[FileList] = None
) -> str:
    """
    Handle 'upload' command.

    Args:
        cmd: UploadCommand with file_list
        session: Optional UploadSession for dependency injection (testing)
        file_list: Optional FileList for dependency injection (testing)

    Returns:
        One result line per file
    """
    logger.info(f"Executing upload command: {len(cmd.file_list)} file(s)")
    if session is None:
        session = get_session()
    if file_list is None:
        file_list = get_file_list()

    results = []
    files = []
    for file_path in cmd.file_list:
        path = Path(file_path).expanduser()
        if not path.exists():
            results.append(f"Error: File not found: {file_path}")
            continue
        if not path.is_file():
            results.append(f"Error: Not a file: {file_path}")
            continue
        files.append(FileDescriptor.from_path(path))

    if not files:
        return '\n'.join(results) if results else "No files uploaded."

    file_list.refetch()

    try:
        uploaded = session.upload_files(files, file_list.names())
    except ValidationError as e:
        results.append(f"Error: {e}")
        return '\n'.join(results)

    for original, file in zip(files, uploaded):
        renamed = f" (renamed from {original.name})" if original.name != file.name else ""
        if file.name in session.errors:
            results.append(f"Failed: {file.name}{renamed}: {session.errors[file.name]}")
        else:
            results.append(f"Uploaded: {file.name}{renamed} ({format_file_size(file.byte_length)})")

    file_list.refetch()
    logger.debug("Upload command completed")
    return '\n'.join(results)


def handle_list(cmd: ListCommand, file_list: Optional[FileList] = None) -> str:
    """
    Handle 'list' command.

    Args:
        cmd: ListCommand
        file_list: Optional FileList for dependency injection (testing)

    Returns:
        Formatted list of files
    """
    if file_list is None:
        file_list = get_file_list()

    files = file_list.refetch()
    if not files:
        return "No files uploaded yet."

    output = [f"Found {len(files)} file(s):"]
    for stored in files:
        output.append(f"  - {stored.name} ({format_file_size(stored.size)})")
    return '\n'.join(output)


def handle_progress(cmd: ProgressCommand, session: Optional[UploadSession] = None) -> str:
    """
    Handle 'progress' command.

    Args:
        cmd: ProgressCommand
        session: Optional UploadSession for dependency injection (testing)

    Returns:
        Progress bars for chunked uploads followed by recorded errors
    """
    if session is None:
        session = get_session()

    state = session.snapshot()
    if not state.progress and not state.errors:
        return "No chunked uploads or errors in this session."

    output = [render_progress_bar(name, pct) for name, pct in state.progress.items()]
    for name, message in state.errors.items():
        output.append(f"Error: {name}: {message}")
    return '\n'.join(output)
