"""Central logging configuration for the converter."""
from __future__ import annotations

import logging
from typing import Optional

_DEFAULT_LEVEL = logging.INFO
PACKAGE_LOGGER = "pptx_markdown"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger with default configuration applied."""
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=_DEFAULT_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    return logger


def set_verbose(enabled: bool) -> None:
    """Switch the package loggers between INFO and DEBUG."""
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if enabled else _DEFAULT_LEVEL)
