"""Content negotiation — maps handler return values to Response objects.

isinstance-based dispatch, no magic, fully predictable. Templates are
rendered to a complete string here, before anything is sent, so a render
failure can still become a clean error response.
"""

from typing import Any

from wren.errors import ConfigurationError
from wren.http.response import HTML, Response
from wren.templating.returns import Template
from wren.templating.store import TemplateStore


def negotiate(value: Any, *, templates: TemplateStore | None = None) -> Response:
    """Convert a route handler's return value to a Response.

    Dispatch order:

    1. ``Response``            -> pass through
    2. ``Template``            -> render via the template store -> 200 text/html
    3. ``str``                 -> 200, text/html
    4. ``bytes``               -> 200, application/octet-stream
    5. ``(value, int)``        -> negotiate value, override status
    6. ``(value, int, dict)``  -> negotiate value, override status + headers
    """
    match value:
        case Response():
            return value
        case Template():
            if templates is None:
                msg = (
                    "Template return type requires a template store. "
                    "Ensure template_dir is configured in AppConfig."
                )
                raise ConfigurationError(msg)
            html = templates.render(value.name, value.context)
            return Response(body=html, content_type=HTML)
        case str():
            return Response(body=value, content_type=HTML)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case (inner, int() as status):
            return negotiate(inner, templates=templates).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner, templates=templates).with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                f"Return str, bytes, Template, or Response."
            )
            raise TypeError(msg)
