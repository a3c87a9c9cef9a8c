"""Access logging middleware.

One line per request on the ``wren.access`` logger::

    GET /form 200 1.42ms

Requests that end in an exception are logged with the status the
pipeline will answer with (the ``HTTPError`` status, or 500), then the
exception continues to the error handler.
"""

import logging
import time

from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Next

logger = logging.getLogger("wren.access")


class AccessLog:
    """Middleware that logs method, path, status, and duration.

    Usage::

        app.add_middleware(AccessLog())
    """

    __slots__ = ("_level",)

    def __init__(self, *, level: int = logging.INFO) -> None:
        self._level = level

    async def __call__(self, request: Request, next: Next) -> Response:
        start = time.perf_counter()
        try:
            response = await next(request)
        except HTTPError as exc:
            self._emit(request, exc.status, start)
            raise
        except Exception:
            self._emit(request, 500, start)
            raise
        self._emit(request, response.status, start)
        return response

    def _emit(self, request: Request, status: int, start: float) -> None:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.log(
            self._level,
            "%s %s %d %.2fms",
            request.method,
            request.path,
            status,
            duration_ms,
        )
