"""Static file serving middleware.

Serves files from a directory for paths under a URL prefix, stripping
the prefix. Falls through to the next handler (normally the router) for
non-matching paths and missing files, so an absent asset is an ordinary
404 from the route table.
"""

import mimetypes
from pathlib import Path

from wren.errors import NotFound
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Next


class StaticFiles:
    """Middleware that serves static files from a directory.

    Security: resolves symlinks and verifies the final path is within
    the configured directory. Anything outside it is answered with 404
    so the response says nothing about files beyond the root.
    Directories are never listed.

    Usage::

        app.add_middleware(StaticFiles(directory="./static", prefix="/static"))
    """

    __slots__ = ("_cache_control", "_directory", "_index", "_prefix")

    def __init__(
        self,
        directory: str | Path,
        prefix: str = "/static",
        *,
        index: str | None = None,
        cache_control: str = "public, max-age=3600",
    ) -> None:
        self._directory = Path(directory).resolve()
        self._index = index
        self._cache_control = cache_control

        # Normalize prefix: leading slash, no trailing slash. "/" serves the root.
        stripped = "/" + prefix.strip("/")
        self._prefix = stripped if stripped != "/" else ""

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def prefix(self) -> str:
        return self._prefix or "/"

    async def __call__(self, request: Request, next: Next) -> Response:
        """Serve a static file or fall through."""
        if request.method not in ("GET", "HEAD"):
            return await next(request)

        path = request.path

        if self._prefix:
            if not path.startswith(self._prefix + "/"):
                return await next(request)
            relative = path[len(self._prefix) :].lstrip("/")
        else:
            relative = path.lstrip("/")

        if not relative:
            return await next(request)

        file_path = (self._directory / relative).resolve()
        if not file_path.is_relative_to(self._directory):
            raise NotFound(f"No static file at {path!r}")

        if file_path.is_dir():
            if self._index is None:
                return await next(request)
            file_path = file_path / self._index

        if not file_path.is_file():
            return await next(request)

        return self._serve_file(file_path, head=request.method == "HEAD")

    def _serve_file(self, file_path: Path, *, head: bool = False) -> Response:
        """Read a file and build a response."""
        content_type, _ = mimetypes.guess_type(str(file_path))
        if content_type is None:
            content_type = "application/octet-stream"

        body = file_path.read_bytes()

        return (
            Response(body=b"" if head else body, content_type=content_type)
            .with_header("Content-Length", str(len(body)))
            .with_header("Cache-Control", self._cache_control)
        )
