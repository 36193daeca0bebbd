"""Configuration settings for the upload server."""

import os
from common.constants import DEFAULT_CHUNKS_DIR, DEFAULT_SERVER_PORT, DEFAULT_UPLOAD_DIR


SERVER_HOST = os.environ.get("CHUNKDROP_HOST", "0.0.0.0")

SERVER_PORT = int(os.environ.get("CHUNKDROP_PORT", str(DEFAULT_SERVER_PORT)))

UPLOAD_DIR = os.environ.get("CHUNKDROP_UPLOAD_DIR", DEFAULT_UPLOAD_DIR)

CHUNKS_DIR = os.environ.get("CHUNKDROP_CHUNKS_DIR", DEFAULT_CHUNKS_DIR)
