"""Logging setup for the command line."""

import logging
import sys


def setup_logging(level: int = logging.WARNING) -> None:
    """Configure logging for a benchmark run.

    Log records go to stderr so they never mix with result rows.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
