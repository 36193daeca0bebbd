"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["upload", "list", "progress", "clear", "exit", "help"]

STYLE = Style.from_dict(
    {
        "prompt": "#2F80ED bold",
        "command": "#0088ff bold",
    }
)

BLUE = "\033[38;2;47;128;237m"
GREEN = "\033[32m"
RED = "\033[31m"
RESET = "\033[0m"

LOGO = f"""{BLUE}
  ____ _                 _    ____
 / ___| |__  _   _ _ __ | | _|  _ \\ _ __ ___  _ __
| |   | '_ \\| | | | '_ \\| |/ / | | | '__/ _ \\| '_ \\
| |___| | | | |_| | | | |   <| |_| | | | (_) | |_) |
 \\____|_| |_|\\__,_|_| |_|_|\\_\\____/|_|  \\___/| .__/
                                             |_|
{RESET}"""

WELCOME_TITLE = "ChunkDrop CLI - File Uploads"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "chunkdrop> "

PROGRESS_BAR_WIDTH = 30

HELP_TEXT = """Available commands:
  upload <path> [<path> ...]          Validate and upload files (renamed if the name is taken)
  list                                List files stored on the server
  progress                            Show progress and errors of this session's uploads
  clear                               Clear screen and redisplay welcome message
  help                                Show this help
  exit                                Exit REPL

Files larger than the chunking threshold (default 5 MiB) are sent in 1 MiB chunks.
Examples:
  upload report.pdf
  upload "holiday photo.jpg" notes.txt
  list"""
