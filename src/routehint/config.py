"""Application and hint configuration.

Both configs are frozen dataclasses — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Host application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Reload (development mode — requires debug=True)
    reload_include: tuple[str, ...] = ()  # Extra extensions to watch (e.g. ".py", ".toml")
    reload_dirs: tuple[str, ...] = ()  # Extra directories to watch alongside cwd

    # Limits
    max_content_length: int = 16 * 1024 * 1024  # 16 MB

    log_level: str = "info"


@dataclass(frozen=True, slots=True)
class HintConfig:
    """How the ``RouteHint`` middleware reports route mismatches.

    ``color=None`` auto-detects from the output stream (ANSI only on a TTY).
    ``every_request=True`` prints hints for every request, matched or not.
    ``html_page`` replaces the 404/405 body with an HTML diff page when the
    app runs in debug mode.
    """

    color: bool | None = None
    every_request: bool = False
    html_page: bool = True
    show_header: bool = True
