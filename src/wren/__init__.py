"""Wren — a small ASGI toolkit for server-rendered HTML.

Routes map exact paths to handlers, handlers return strings, templates,
or responses, and everything is compiled once before the first request.

Basic usage::

    from wren import App, AppConfig, Template

    app = App(AppConfig(template_dir="templates"))

    @app.route("/", templates=("home.html",))
    def home():
        return Template("home.html")

    app.run()

The bundled site lives in ``wren.site`` and is served by ``wren run``.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "BadRequest",
    "ConfigurationError",
    "HTTPError",
    "MethodNotAllowed",
    "Middleware",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "Template",
    "TemplateLoadError",
    "WrenError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "App":
        from wren.app import App

        return App

    if name == "AppConfig":
        from wren.config import AppConfig

        return AppConfig

    if name == "Request":
        from wren.http.request import Request

        return Request

    if name == "Response":
        from wren.http.response import Response

        return Response

    if name == "Template":
        from wren.templating.returns import Template

        return Template

    if name in ("Middleware", "Next"):
        from wren.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in (
        "BadRequest",
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "TemplateLoadError",
        "WrenError",
    ):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
