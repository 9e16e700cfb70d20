"""Terminal error formatting for the routehint pipeline.

Structured, human-readable error output for the development terminal.
Used where a failure must be reported without disturbing the response:
internal 500s in the request handler, and hint rendering failures that
the ``RouteHint`` middleware isolates from the request.

Verbosity is controlled by the ``ROUTEHINT_TRACEBACK`` environment
variable:

- ``compact`` (default) — error summary plus application frames only
- ``full`` — the complete Python traceback
- ``minimal`` — a single line
"""

from __future__ import annotations

import logging
import os
import traceback as _traceback
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from routehint.http.request import Request

logger = logging.getLogger("routehint.server")

# Width of the terminal banners (shared with terminal_hints)
_BANNER_WIDTH = 65

TRACEBACK_ENV = "ROUTEHINT_TRACEBACK"


def _is_app_frame(filename: str) -> bool:
    """True if the frame is from the application (not stdlib/site-packages)."""
    if "site-packages" in filename:
        return False
    if filename.startswith("<"):
        return False
    stdlib_prefix = os.path.dirname(os.__file__)
    return not filename.startswith(stdlib_prefix)


def format_compact_traceback(exc: BaseException) -> str:
    """Error summary followed by at most five application frames.

    Falls back to the last three frames when none belong to the
    application.
    """
    tb = exc.__traceback__
    frames = _traceback.extract_tb(tb) if tb else []
    app_frames = [f for f in frames if _is_app_frame(f.filename)]
    display_frames = app_frames if app_frames else frames[-3:]

    parts = [f"{type(exc).__name__}: {exc}"]
    if display_frames:
        parts.append("  Trace (app frames):")
        for frame in display_frames[-5:]:
            parts.append(f"    {frame.filename}:{frame.lineno} in {frame.name}")
            if frame.line:
                parts.append(f"      {frame.line.strip()}")
    return "\n".join(parts)


def format_minimal_error(exc: BaseException) -> str:
    """One-line error summary, located at the innermost frame."""
    tb = exc.__traceback__
    frames = _traceback.extract_tb(tb) if tb else []
    last = frames[-1] if frames else None
    location = f" at {last.filename}:{last.lineno}" if last else ""
    return f"{type(exc).__name__}{location}: {exc}"


def traceback_style() -> str:
    style = os.environ.get(TRACEBACK_ENV, "compact").lower()
    return style if style in {"compact", "full", "minimal"} else "compact"


def log_error(
    exc: BaseException,
    request: Request | None = None,
    *,
    prefix: str | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Log an error with the verbosity chosen by ``ROUTEHINT_TRACEBACK``.

    Args:
        exc: The exception to report. Must be the one being handled when
            the style is ``full``.
        request: The request that triggered the error, if any.
        prefix: Leading summary. Defaults to ``500 METHOD PATH``.
        log: Logger to write to. Defaults to ``routehint.server``.
    """
    target = log or logger
    if prefix is None:
        prefix = (
            f"500 {request.method} {request.path}" if request is not None else "Server error"
        )

    match traceback_style():
        case "full":
            target.error(prefix, exc_info=exc)
        case "minimal":
            target.error("%s: %s", prefix, format_minimal_error(exc))
        case _:
            target.error("%s\n%s", prefix, format_compact_traceback(exc))
