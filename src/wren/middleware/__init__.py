"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    AccessLog -- One log line per request with status and duration
    StaticFiles -- Serve static files from a directory under a URL prefix
"""

from wren.middleware.access_log import AccessLog
from wren.middleware.protocol import Middleware, Next
from wren.middleware.static import StaticFiles

__all__ = [
    "AccessLog",
    "Middleware",
    "Next",
    "StaticFiles",
]
