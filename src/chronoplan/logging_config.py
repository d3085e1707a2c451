# SPDX-License-Identifier: MIT

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

_INITIALIZED = False


def configure_logging(level: str = "WARNING", *, log_path: Optional[Path] = None) -> None:
    """Install console and rotating file handlers on the ``chronoplan`` logger.

    Only the first call in a process has an effect.
    """
    global _INITIALIZED
    if _INITIALIZED:
        return

    logger = logging.getLogger("chronoplan")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    console_handler = RichHandler(show_path=False, rich_tracebacks=True)
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(console_handler)

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            str(log_path), maxBytes=1_000_000, backupCount=5, encoding="utf-8"
        )
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    _INITIALIZED = True
    logger.debug("Logging configured. Output file: %s", log_path)
