from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def configure_logging(level: str | int = logging.INFO) -> None:
    """Install the console handler once; later calls only adjust the level."""
    global _configured

    root = logging.getLogger("geo_attendance")
    root.setLevel(level)
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    # Module names look like "src.geo_attendance.geo_attendance.sessions.service";
    # keep everything under one "geo_attendance" logger tree.
    _, sep, tail = name.rpartition("geo_attendance.geo_attendance.")
    return logging.getLogger(f"geo_attendance.{tail}" if sep else name)
