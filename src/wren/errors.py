"""Wren exception hierarchy.

Shared across Router, App, template store, handlers, and middleware so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when app configuration or the route table is invalid.

    Raised at startup (``AppConfig.validate()``, ``App._freeze()``) and
    treated as fatal by the entrypoint.
    """


class TemplateError(WrenError):
    """Base for template store failures."""


class TemplateLoadError(TemplateError):
    """The template set could not be loaded completely.

    Fatal: the process must not start serving with a partial template set.
    """


class TemplateNotFound(TemplateError):  # noqa: N818
    """A template name was requested that the store never loaded."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"template {name!r} is not loaded")


class TemplateRenderError(TemplateError):
    """The engine failed while rendering a loaded template.

    Carries the template name and the engine's message; surfaced to the
    client as a 500.
    """

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        self.message = message
        super().__init__(f"template {name!r}: {message}")


class FormParseError(WrenError, ValueError):
    """The request body could not be parsed as form data."""


@dataclass(frozen=True, slots=True)
class HTTPError(WrenError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, middleware, or handlers. The ASGI handler
    catches these and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class BadRequest(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """400 — the request was understood but its content is invalid."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"method not allowed (allowed: {allow_value})"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
