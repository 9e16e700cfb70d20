"""``routehint explain`` — hints for a request that never hits a server.

Diffs a hypothetical request against every route of an app and prints
the same report the ``RouteHint`` middleware writes at runtime::

    routehint explain myapp:app POST "/hello?flag=2" --content-type application/json
"""

import argparse
import sys

from routehint.cli._resolve import resolve_or_exit
from routehint.hint.diff import RequestShape
from routehint.hint.registry import on_startup, on_unmatched_request
from routehint.server.terminal_hints import format_report, use_color


def run_explain(args: argparse.Namespace) -> None:
    app = resolve_or_exit(args)

    shape = RequestShape.from_url(
        args.method,
        args.url,
        accept=args.accept,
        content_type=args.content_type,
    )
    report = on_unmatched_request(on_startup(app.routes), shape)

    color = args.color if args.color is not None else use_color(sys.stdout)
    print(format_report(report, color=color))
