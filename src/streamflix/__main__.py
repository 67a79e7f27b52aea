"""
StreamFlix Package Main Entry Point

Runs the CLI when the package is executed with ``python -m streamflix``.
"""

import logging
import sys

from streamflix.cli.error_handler import EXIT_INTERRUPTED
from streamflix.cli.typer_app import app

logger = logging.getLogger(__name__)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Command interrupted by user")
        sys.exit(EXIT_INTERRUPTED)


if __name__ == "__main__":
    main()
