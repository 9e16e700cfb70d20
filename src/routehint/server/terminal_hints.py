"""Terminal formatting for route hints.

Turns a ``HintReport`` into text for the development terminal: additions
in green on the route line, removals in red on the request line. Respects
TTY detection — no ANSI codes when piped or redirected.

Example output (colors shown as markers)::

    -- Route hints: POST /hello/world/mood ---------------------------

    [+GET]: /hello/{name}/mood/[+{mood}]
    [-POST]: /hello/world/mood

    [+GET]: /hello?[+flag=23]&[+lalelu=1]
    [-POST]: /hello/[-world]/[-mood]

    -----------------------------------------------------------------

"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from routehint.hint.render import Highlight, RenderedLine

if TYPE_CHECKING:
    from routehint.hint.registry import HintReport

# Banner width — matches terminal_errors._BANNER_WIDTH
_W = 65


def use_color(stream: object | None = None) -> bool:
    """True if the output stream supports ANSI color."""
    s = stream or sys.stderr
    try:
        return s.isatty()  # type: ignore[union-attr]
    except Exception:
        return False


class _Palette:
    """ANSI escape sequences — empty strings when color is disabled."""

    __slots__ = ("addition", "dim", "removal", "reset")

    def __init__(self, *, enabled: bool) -> None:
        if enabled:
            self.reset = "\033[0m"
            self.dim = "\033[2m"
            self.addition = "\033[38;2;0;128;0m"  # green
            self.removal = "\033[38;2;179;0;0m"  # red
        else:
            self.reset = ""
            self.dim = ""
            self.addition = ""
            self.removal = ""

    def paint(self, text: str, highlight: Highlight) -> str:
        match highlight:
            case Highlight.ADDITION:
                color = self.addition
            case Highlight.REMOVAL:
                color = self.removal
            case Highlight.PLAIN:
                return text
        if not color:
            return text
        return f"{color}{text}{self.reset}"


def format_line(line: RenderedLine, *, color: bool = False) -> str:
    """One rendered line as terminal text."""
    c = _Palette(enabled=color)
    return "".join(c.paint(span.text, span.highlight) for span in line)


def format_report(
    report: HintReport,
    *,
    color: bool | None = None,
    show_header: bool = True,
) -> str:
    """Format a HintReport for terminal display.

    Args:
        report: The hints for one request.
        color: Force color on/off. ``None`` auto-detects from stderr.
        show_header: Print the banner naming the request.

    Returns:
        Multi-line string ready for ``sys.stderr.write()``: two lines per
        route, each pair followed by a blank line.
    """
    use = color if color is not None else use_color()
    c = _Palette(enabled=use)
    lines: list[str] = []

    if show_header:
        title = f"Route hints: {report.method} {report.target}"
        pad = _W - len(title) - 4  # 4 = "-- " + " "
        lines.append(f"{c.dim}--{c.reset} {title} {c.dim}{'-' * max(pad, 1)}{c.reset}")
        lines.append("")

    if not report.hints:
        lines.append(f"{c.dim}No routes registered.{c.reset}")
        lines.append("")

    for hint in report:
        lines.append(format_line(hint.route_line, color=use))
        lines.append(format_line(hint.request_line, color=use))
        lines.append("")

    if show_header:
        lines.append(f"{c.dim}{'-' * _W}{c.reset}")
        lines.append("")

    return "\n".join(lines)
