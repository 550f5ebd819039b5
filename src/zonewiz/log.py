"""Project logger.

One idempotently configured logger shared by the package and the page. The
level comes from ``ZONEWIZ_LOG_LEVEL`` (default INFO); records do not
propagate to the root logger so Streamlit's own handlers do not repeat them.
"""
from __future__ import annotations

import logging
import os

_LOGGER_NAME = "zonewiz"
_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _level(explicit: int | str | None) -> int:
    raw = str(explicit or os.getenv("ZONEWIZ_LOG_LEVEL", "INFO")).upper()
    return getattr(logging, raw, logging.INFO)


def get_logger(name: str | None = None, *, level: int | str | None = None) -> logging.Logger:
    """Return the project logger (or a child of it), configuring it on first use.

    Args:
        name: Optional child name, e.g. ``"data"`` gives ``zonewiz.data``.
        level: Level override; applied even when the logger is already set up.
    """
    base = logging.getLogger(_LOGGER_NAME)
    if not getattr(base, "_zonewiz_configured", False):
        base.setLevel(_level(level))
        base.propagate = False
        if not any(isinstance(h, logging.StreamHandler) for h in base.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
            base.addHandler(handler)
        base._zonewiz_configured = True  # type: ignore[attr-defined]
    elif level is not None:
        base.setLevel(_level(level))
    return base.getChild(name) if name else base


__all__ = ["get_logger"]
