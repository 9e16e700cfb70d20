"""routehint — explain why a request matched no route.

When a request falls through the router, routehint diffs it against every
registered route (method, path, query, and media type) and prints a
two-line comparison per route showing where they diverge.

Basic usage::

    from routehint import App, RouteHint

    app = App()
    app.add_middleware(RouteHint())

    @app.route("/hello/{name}")
    def hello(name: str):
        return f"Hello, {name}!"

    app.run()

Without a server::

    routehint explain myapp:app POST /hello/world
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "AnyResponse",
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "HintConfig",
    "MethodNotAllowed",
    "Middleware",
    "Next",
    "NotFound",
    "Request",
    "RequestShape",
    "Response",
    "RouteHint",
    "RouteHintError",
]

# Public name -> defining module
_LAZY: dict[str, str] = {
    "App": "routehint.app",
    "AppConfig": "routehint.config",
    "HintConfig": "routehint.config",
    "Request": "routehint.http.request",
    "Response": "routehint.http.response",
    "RouteHint": "routehint.middleware.hint",
    "RequestShape": "routehint.hint.diff",
    "AnyResponse": "routehint.middleware.protocol",
    "Middleware": "routehint.middleware.protocol",
    "Next": "routehint.middleware.protocol",
    "RouteHintError": "routehint.errors",
    "ConfigurationError": "routehint.errors",
    "HTTPError": "routehint.errors",
    "NotFound": "routehint.errors",
    "MethodNotAllowed": "routehint.errors",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routehint`` fast while providing a clean top-level API.
    """
    module_name = _LAZY.get(name)
    if module_name is None:
        msg = f"module 'routehint' has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
