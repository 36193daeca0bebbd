"""Project-wide constants (chunking policy, validation limits, storage names)."""

CHUNK_SIZE_BYTES: int = 1024 * 1024  # 1 MiB per chunk
LARGE_FILE_THRESHOLD_BYTES: int = 5 * 1024 * 1024  # files above this are chunked

MAX_FILE_SIZE_BYTES: int = 10 * 1024 * 1024
MAX_FILE_NAME_LENGTH: int = 255
BLOCKED_EXTENSIONS: tuple[str, ...] = ("exe", "dll", "bat", "cmd", "sh", "js", "php", "py", "jar")

DEFAULT_UPLOAD_DIR: str = "uploads"
DEFAULT_CHUNKS_DIR: str = "uploads-chunks"

# Keeps the empty uploads directory tracked; never reported by the lister.
PLACEHOLDER_FILE_NAME: str = ".gitkeep"

CHUNK_PART_SEPARATOR: str = ".part_"

DEFAULT_SERVER_PORT: int = 3000
