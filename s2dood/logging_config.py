"""
Console logging for the s2dood command line.

Every module logs under the 's2dood' namespace. Records go to stdout as
'HH:MM:SS.mmm LVL name: message'.
"""

import logging
import sys
from typing import Optional


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """
    Route s2dood records to stdout at the level picked by the CLI flags.

    Warnings and errors are always shown; ``verbose`` adds per-map progress
    and ``debug`` adds one line per converted object. Calling it again
    replaces the previous handlers.
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s.%(msecs)03d %(levelname).3s %(name)s: %(message)s',
        datefmt='%H:%M:%S',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ],
        force=True
    )

    logger = logging.getLogger('s2dood')
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for ``s2dood.<name>``, or the package logger when no name is given."""
    if name:
        return logging.getLogger(f's2dood.{name}')
    return logging.getLogger('s2dood')
