# File: skyglow/core/logging.py

"""
Console logging for the API process.

Call setup_logging() once from the entry point; modules just use
logging.getLogger(__name__).
"""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def setup_logging(level: str | int = "INFO") -> None:
    """Install a single console handler on the root logger (idempotent)."""
    global _configured

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    if _configured:
        return

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(console)
    _configured = True
