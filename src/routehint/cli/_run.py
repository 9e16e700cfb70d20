"""``routehint run`` — development server command."""

import argparse

from routehint.cli._resolve import resolve_or_exit


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it with the pounce dev server.

    CLI flags override the app's configured host and port.
    """
    app = resolve_or_exit(args)

    from routehint.server.dev import run_dev_server

    run_dev_server(
        app,
        args.host or app.config.host,
        args.port or app.config.port,
        reload=app.config.debug,
        reload_include=app.config.reload_include,
        reload_dirs=app.config.reload_dirs,
        app_path=args.app,
        log_level=app.config.log_level,
    )
