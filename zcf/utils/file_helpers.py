# zcf/utils/file_helpers.py

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def path_exists(path: Path) -> bool:
    """``Path.exists`` that reports unreadable locations as missing."""
    try:
        return path.exists()
    except OSError as e:
        logger.debug("Cannot inspect %s: %s", path, e)
        return False
