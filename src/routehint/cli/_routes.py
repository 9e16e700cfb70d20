"""``routehint routes`` — list registered routes.

Prints one row per (method, template) pair, with the declared format
and handler name.
"""

import argparse

from routehint.cli._resolve import resolve_or_exit


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of METHOD, PATH, FORMAT, and handler name."""
    app = resolve_or_exit(args)

    routes = app.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str, str]] = []
    for route in routes:
        handler_name = getattr(route.handler, "__name__", str(route.handler))
        if route.name:
            handler_name = f"{handler_name} ({route.name})"
        fmt = str(route.format) if route.format is not None else "-"
        rows.append((route.method, route.path, fmt, handler_name))

    headers = ("METHOD", "PATH", "FORMAT")
    widths = [max(len(headers[i]), *(len(r[i]) for r in rows)) for i in range(3)]

    line = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(line.format(*headers, "HANDLER"))
    sep_len = sum(widths) + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(line.format(*row))
