"""
Logging setup shared by the icedb entry points.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

NOISY_LIBS = ["urllib3", "requests"]


def setup_logging(level: str = "INFO", lib_level: str = "WARNING") -> None:
    """
    Configure the root logger to write to stderr.

    Args:
        level: Level for icedb's own loggers
        lib_level: Level for chatty third-party libraries
    """
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    for lib in NOISY_LIBS:
        logging.getLogger(lib).setLevel(lib_level)
