"""Custom completer for ChunkDrop CLI with local file path completion."""

from pathlib import Path
from typing import Iterable, Optional

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import COMMANDS


class ChunkDropCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - Local file path completion for the 'upload' command
    """

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = base_dir

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        if tokens[0].lower() != "upload":
            return

        current_word = "" if is_typing_new_token else tokens[-1]
        already_typed = set(tokens[1:] if is_typing_new_token else tokens[1:-1])

        yield from self._complete_paths(current_word, already_typed)

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_paths(self, partial: str, exclude: set) -> Iterable[Completion]:
        """
        Complete entries of the directory named by the partial path.

        Directories complete with a trailing '/', files already on the
        command line are skipped.
        """
        base_dir = self.base_dir or Path.cwd()

        if "/" in partial:
            dir_part, name_part = partial.rsplit("/", 1)
            directory = base_dir / dir_part if dir_part else Path("/")
            prefix = f"{dir_part}/"
        else:
            directory, name_part, prefix = base_dir, partial, ""

        if not directory.is_dir():
            return

        for item in sorted(directory.iterdir(), key=lambda p: p.name):
            if not item.name.startswith(name_part):
                continue
            if item.name.startswith(".") and not name_part.startswith("."):
                continue
            candidate = f"{prefix}{item.name}"
            if item.is_dir():
                yield Completion(candidate + "/", start_position=-len(partial))
            elif candidate not in exclude:
                yield Completion(candidate, start_position=-len(partial))
