"""Development server.

Serves a live routehint ``App`` with pounce in single-worker mode, after
telling the terminal which routes unmatched requests will be diffed
against. Reload watches ``.py`` files plus whatever the config adds.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from routehint.middleware.protocol import RouteAware

if TYPE_CHECKING:
    from routehint.app import App

_RELOAD_EXTENSIONS = (".py",)


def startup_lines(app: App, host: str, port: int) -> list[str]:
    """Lines announced before serving: address, route count, hint status."""
    routes = app.routes
    lines = [f"routehint serving {len(routes)} route(s) on http://{host}:{port}"]
    if any(isinstance(mw, RouteAware) for mw in app.middleware):
        lines.append("Route hints on: unmatched requests are diffed against every route.")
    else:
        lines.append("Route hints off: add RouteHint() middleware to explain 404s and 405s.")
    return lines


def run_dev_server(
    app: App,
    host: str,
    port: int,
    *,
    reload: bool = True,
    reload_include: tuple[str, ...] = (),
    reload_dirs: tuple[str, ...] = (),
    app_path: str | None = None,
    log_level: str = "info",
) -> None:
    """Serve *app* with pounce until interrupted.

    Args:
        app: The routehint App. Frozen before serving.
        host: Bind host address.
        port: Bind port number.
        reload: Restart on file changes.
        reload_include: Extensions watched in addition to ``.py``.
        reload_dirs: Extra directories to watch alongside cwd.
        app_path: ``"module:attribute"`` string pounce reimports on reload.
            Without it, reload restarts the same live object.
        log_level: pounce log level (debug, info, warning, error).
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    sys.stderr.write("\n".join(startup_lines(app, host, port)) + "\n")

    extensions = tuple(dict.fromkeys((*_RELOAD_EXTENSIONS, *reload_include)))
    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        reload_include=extensions,
        reload_dirs=reload_dirs,
        log_level=log_level,
    )
    Server(config, app, app_path=app_path).run()
