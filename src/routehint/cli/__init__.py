"""routehint CLI — dev server, route listing, and offline explanations.

Entry point registered as ``routehint`` in ``pyproject.toml``::

    [project.scripts]
    routehint = "routehint.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``routehint`` command."""
    parser = argparse.ArgumentParser(
        prog="routehint",
        description="routehint — explain why a request matched no route.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- routehint run ----------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the dev server")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    # -- routehint routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    # -- routehint explain ------------------------------------------------
    explain_parser = subparsers.add_parser(
        "explain",
        help="Diff a hypothetical request against every route",
    )
    explain_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    explain_parser.add_argument("method", help="HTTP method (e.g. GET)")
    explain_parser.add_argument("url", help="Path with optional query (e.g. /a/b?x=1)")
    explain_parser.add_argument("--accept", default=None, help="Accept header value")
    explain_parser.add_argument(
        "--content-type",
        default=None,
        help="Content-Type header value",
    )
    explain_parser.add_argument(
        "--color",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Force ANSI color on or off (default: auto-detect)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from routehint.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from routehint.cli._routes import run_routes

        run_routes(args)
    elif args.command == "explain":
        from routehint.cli._explain import run_explain

        run_explain(args)
