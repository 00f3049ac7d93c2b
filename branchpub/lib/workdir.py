"""Scoped changes of the process working directory."""

import logging
import os
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


@contextmanager
def working_directory(path: Path):
    """
    Change into path, yield, and change back on exit.

    The original directory is restored on every exit path, including
    exceptions raised inside the block.
    """
    original = os.getcwd()
    os.chdir(path)
    logger.debug(f"Entered {path}")
    try:
        yield Path(path)
    finally:
        os.chdir(original)
        logger.debug(f"Restored working directory {original}")
