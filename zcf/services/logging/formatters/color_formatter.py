# zcf/services/logging/formatters/color_formatter.py

import logging
from typing import Dict, Optional

from colorama import Fore

from ....utils.color_support import color_support


class ColorFormatter(logging.Formatter):
    """Colors the level name and message of console records."""

    LEVEL_COLORS: Dict[int, str] = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.MAGENTA,
    }

    DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
    DEFAULT_DATEFMT = "%H:%M:%S"

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt or self.DEFAULT_FORMAT, datefmt or self.DEFAULT_DATEFMT)

    def format(self, record: logging.LogRecord) -> str:
        if not color_support.supports_color():
            return super().format(record)

        orig_msg = record.msg
        orig_levelname = record.levelname
        color = self.LEVEL_COLORS.get(record.levelno)
        try:
            record.levelname = color_support.colored(
                record.levelname, color, bright=record.levelno >= logging.WARNING
            )
            if isinstance(record.msg, str) and color:
                record.msg = color_support.colored(record.msg, color)
            return super().format(record)
        finally:
            record.msg = orig_msg
            record.levelname = orig_levelname
