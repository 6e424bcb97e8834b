from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s - docsum - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO", stream: TextIO | None = None) -> logging.Logger:
    """Install a single stream handler on the ``docsum`` logger hierarchy."""

    root = logging.getLogger("docsum")
    root.setLevel(level)
    for handler in list(root.handlers):
        if getattr(handler, "_docsum", False):
            root.removeHandler(handler)
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._docsum = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    return root
