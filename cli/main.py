"""ChunkDrop CLI entry point."""

import os
import sys
from typing import List, Optional

from common.logging_config import setup_logging
from cli.commands import close_client
from cli.repl import repl_loop


def main(argv: Optional[List[str]] = None) -> None:
    """
    Run the upload REPL until the user exits.

    Log output stays at WARNING unless --debug or LOG_LEVEL asks for more,
    so it does not interleave with progress bars.
    """
    args = sys.argv[1:] if argv is None else argv
    debug = '--debug' in args
    log_level = 'DEBUG' if debug else os.getenv('LOG_LEVEL', 'WARNING')

    logger = setup_logging('cli', log_level=log_level)
    if debug:
        logger.debug("Debug logging enabled")

    try:
        repl_loop()
    except Exception as e:
        logger.error(f"CLI error: {e}", exc_info=True)
        raise
    finally:
        close_client()
        logger.debug("Upload client closed")


if __name__ == "__main__":
    main()
