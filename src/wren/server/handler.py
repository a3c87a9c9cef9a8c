"""Per-request pipeline.

``handle_request`` is where an ASGI ``http`` scope becomes a ``Request``
and leaves as exactly one response. Between the two sit the middleware
chain, route dispatch, handler invocation and return-value negotiation.
Any exception on the way is turned into an error response here, so the
sender only ever sees a finished ``Response``.
"""

import inspect
from collections.abc import Callable, Sequence
from typing import Any

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.invoke import invoke
from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Next
from wren.routing.router import Router
from wren.server.errors import handle_http_error, handle_internal_error
from wren.server.negotiation import negotiate
from wren.server.sender import send_response
from wren.templating.store import TemplateStore


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: tuple[Callable[..., Any], ...],
    error_handlers: dict[int | type, Callable[..., Any]],
    templates: TemplateStore | None = None,
    max_body_size: int | None = None,
    debug: bool = False,
) -> None:
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive, max_body_size=max_body_size)
    pipeline = _chain(middleware, _route_endpoint(router, templates))

    try:
        response = await pipeline(request)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, templates)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, templates, debug)

    await send_response(response, send, head=request.method == "HEAD")


def _route_endpoint(router: Router, templates: TemplateStore | None) -> Next:
    """The innermost step: look up the route, call it, negotiate the result."""

    async def endpoint(request: Request) -> Response:
        route = router.match(request.method, request.path).route
        result = await invoke(route.handler, **_injected(route.handler, request))
        return negotiate(result, templates=templates)

    return endpoint


def _chain(middleware: Sequence[Callable[..., Any]], endpoint: Next) -> Next:
    """Wrap *endpoint* so the first middleware in the sequence runs first."""
    call = endpoint
    for mw in reversed(middleware):
        call = _bind(mw, call)
    return call


def _bind(mw: Callable[..., Any], inner: Next) -> Next:
    async def step(request: Request) -> Response:
        return await mw(request, inner)

    return step


def _injected(handler: Callable[..., Any], request: Request) -> dict[str, Any]:
    """Keyword arguments for *handler*: the request, if it asks for it.

    A parameter asks for the request by being named ``request`` or by
    being annotated ``Request``.
    """
    params = inspect.signature(handler, eval_str=True).parameters
    return {
        name: request
        for name, param in params.items()
        if name == "request" or param.annotation is Request
    }
