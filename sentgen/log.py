from __future__ import annotations
import logging
from typing import Optional

LOG_FORMAT = "%(levelname)s: %(message)s"

def setup_logging(level: int = logging.INFO) -> None:
    """Configure the process-wide console handler. Call once, from a CLI."""
    logging.basicConfig(level=level, format=LOG_FORMAT)

def get_logger(logger: Optional[logging.Logger], name: str) -> logging.Logger:
    """Returns the injected logger, or the module logger for `name`."""
    return logger if logger is not None else logging.getLogger(name)
