"""Error handling pipeline for wren requests.

Maps HTTPError exceptions and unexpected failures to plain-text
Response objects, using registered error handlers when present.
"""

import inspect
import logging
import traceback
from collections.abc import Callable
from typing import Any

from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import Response, plain_text
from wren.server.negotiation import negotiate
from wren.templating.store import TemplateStore

logger = logging.getLogger("wren.server")


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
    templates: TemplateStore | None,
) -> Response:
    """Invoke a user-registered error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc) args.
    Supports both sync and async error handlers.
    """
    params = list(inspect.signature(handler).parameters.values())

    if len(params) >= 2:
        result = handler(request, exc)
    elif len(params) == 1:
        result = handler(request)
    else:
        result = handler()

    if inspect.isawaitable(result):
        result = await result

    return negotiate(result, templates=templates)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    templates: TemplateStore | None,
) -> Response:
    """Map an HTTPError to a Response using registered error handlers."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    # Try exact exception type, then status code
    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        response = await call_error_handler(handler, request, exc, templates)
        # Keep the exception's status unless the handler chose its own
        if response.status == 200:
            response = response.with_status(exc.status)
    else:
        response = plain_text(exc.detail or f"Error {exc.status}", exc.status)

    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    templates: TemplateStore | None,
    debug: bool,
) -> Response:
    """Handle unexpected exceptions as 500 errors.

    The underlying error message is returned to the caller; in debug mode
    the full traceback is appended.
    """
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(type(exc)) or error_handlers.get(500)
    if handler is not None:
        response = await call_error_handler(handler, request, exc, templates)
        return response.with_status(500) if response.status == 200 else response

    body = str(exc) or type(exc).__name__
    if debug:
        body = f"{body}\n\n{''.join(traceback.format_exception(exc))}"
    return plain_text(body, 500)
