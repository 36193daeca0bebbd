"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class UploadCommand:
    """Upload local files."""

    file_list: tuple[str, ...]
    command: Literal["upload"] = "upload"


@dataclass(frozen=True)
class ListCommand:
    """List files stored on the server."""

    command: Literal["list"] = "list"


@dataclass(frozen=True)
class ProgressCommand:
    """Show upload progress and errors of this session."""

    command: Literal["progress"] = "progress"


CommandRequest = UploadCommand | ListCommand | ProgressCommand
