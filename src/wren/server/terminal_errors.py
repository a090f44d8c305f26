"""Terminal formatting for unexpected server errors.

Client errors are one-line warnings. Everything else goes through
``log_error()``, whose verbosity comes from the ``WREN_TRACEBACK``
environment variable:

* ``compact`` (default) — error summary plus the last few app frames
* ``full`` — the complete Python traceback
* ``minimal`` — a single line with the innermost location
"""

from __future__ import annotations

import logging
import os
import traceback as _traceback
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wren.http.request import Request

logger = logging.getLogger("wren.server")

_STDLIB_PREFIX = os.path.dirname(os.__file__)


def _is_app_frame(filename: str) -> bool:
    """True if the frame is from the application (not stdlib/site-packages)."""
    if "site-packages" in filename or filename.startswith("<"):
        return False
    return not filename.startswith(_STDLIB_PREFIX)


def _safe_str(exc: BaseException) -> str:
    """``str(exc)``, or a placeholder when the exception's ``__str__`` fails."""
    try:
        return str(exc)
    except Exception:
        return f"<unprintable {type(exc).__name__}>"


def format_compact_traceback(exc: BaseException) -> str:
    """Error summary plus at most five application frames."""
    tb = exc.__traceback__
    frames = _traceback.extract_tb(tb) if tb else []
    app_frames = [f for f in frames if _is_app_frame(f.filename)]
    display_frames = app_frames or frames[-3:]

    parts = [f"{type(exc).__name__}: {_safe_str(exc)}"]
    if display_frames:
        parts.append("  Trace (app frames):")
        for frame in display_frames[-5:]:
            parts.append(f"    {frame.filename}:{frame.lineno} in {frame.name}")
            if frame.line:
                parts.append(f"      {frame.line.strip()}")
    return "\n".join(parts)


def format_minimal_error(exc: BaseException) -> str:
    """One-line error summary with the innermost frame location."""
    tb = exc.__traceback__
    frames = _traceback.extract_tb(tb) if tb else []
    last = frames[-1] if frames else None
    location = f" at {last.filename}:{last.lineno}" if last else ""
    return f"{type(exc).__name__}{location}: {_safe_str(exc)}"


def log_error(exc: BaseException, request: Request | None = None) -> None:
    """Log an unexpected error with the configured verbosity."""
    prefix = f"500 {request.method} {request.path}" if request is not None else "Server error"
    style = os.environ.get("WREN_TRACEBACK", "compact").lower()

    if style == "full":
        logger.error(prefix, exc_info=exc)
    elif style == "minimal":
        logger.error("%s - %s", prefix, format_minimal_error(exc))
    else:
        logger.error("%s\n%s", prefix, format_compact_traceback(exc))
