from __future__ import annotations

import contextlib
import logging
import sys
import time
from typing import Any

DEFAULT_FORMAT = "%(asctime)sZ [%(levelname)s] %(name)s:%(lineno)d | %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

_SENTINEL_KEY = "_solsigner_stdout_handler"


class _UTCFormatter(logging.Formatter):
    """Formatter that renders timestamps in UTC."""

    converter = time.gmtime


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level {level!r}")
    return resolved


def setup_stdout_logging(
    *,
    level: int | str = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    stream: Any = None,
) -> logging.StreamHandler:
    """Ensure a single ``StreamHandler`` for the signer exists on the root logger.

    Calling this repeatedly reuses the handler installed by the first call
    and only updates its level and stream.
    """

    level = _resolve_level(level)
    root = logging.getLogger()
    root.setLevel(level)

    target = stream if stream is not None else sys.stdout
    handler = getattr(root, _SENTINEL_KEY, None)
    if not isinstance(handler, logging.StreamHandler) or handler not in root.handlers:
        handler = logging.StreamHandler(target)
        root.addHandler(handler)
    else:
        try:
            handler.setStream(target)
        except Exception:  # pragma: no cover - fall back to attribute assignment
            with contextlib.suppress(Exception):
                handler.stream = target  # type: ignore[attr-defined]

    handler.setLevel(level)
    handler.setFormatter(_UTCFormatter(fmt, datefmt=datefmt))
    setattr(root, _SENTINEL_KEY, handler)
    return handler
