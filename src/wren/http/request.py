"""The request object handlers receive.

Method, path and headers are fixed when the request arrives. The body
is read from the ASGI channel on first use, checked against the size
limit, and kept so that ``body()``, ``text()`` and ``form()`` can be
called in any order and any number of times.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from wren._internal.asgi import Receive
from wren.errors import FormParseError
from wren.http.headers import Headers

if TYPE_CHECKING:
    from wren.http.forms import FormData

DEFAULT_FORM_TYPE = "application/x-www-form-urlencoded"


@dataclass(slots=True)
class _Received:
    """What has been read off the wire so far."""

    body: bytes | None = None
    form: FormData | None = None


@dataclass(frozen=True, slots=True)
class Request:
    """An incoming HTTP request.

    ``max_body_size`` of ``None`` means the body is read without a limit.
    """

    method: str
    path: str
    headers: Headers
    max_body_size: int | None
    _receive: Receive = field(repr=False, compare=False)
    _received: _Received = field(default_factory=_Received, repr=False, compare=False)

    @classmethod
    def from_asgi(
        cls,
        scope: dict[str, Any],
        receive: Receive,
        *,
        max_body_size: int | None = None,
    ) -> Request:
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            max_body_size=max_body_size,
            _receive=receive,
        )

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def content_length(self) -> int | None:
        """Declared body length, or ``None`` when absent or not a number."""
        raw = self.headers.get("content-length")
        if raw is None or not raw.strip().isdigit():
            return None
        return int(raw)

    async def stream(self) -> AsyncIterator[bytes]:
        """Yield body chunks as they arrive, with no size check."""
        more = True
        while more:
            message = await self._receive()
            if chunk := message.get("body", b""):
                yield chunk
            more = message.get("more_body", False)

    async def body(self) -> bytes:
        """Return the whole body, reading it on the first call.

        Raises:
            FormParseError: If the declared or received length is over
                ``max_body_size``.
        """
        if self._received.body is None:
            self._received.body = await self._read_limited()
        return self._received.body

    async def text(self) -> str:
        return (await self.body()).decode("utf-8")

    async def form(self) -> FormData:
        """Parse the body as a form, once.

        A missing Content-Type is read as URL-encoded. Every failure,
        including an oversized body, is a ``FormParseError``.
        """
        if self._received.form is None:
            from wren.http.forms import parse_form_data

            raw = await self.body()
            self._received.form = parse_form_data(raw, self.content_type or DEFAULT_FORM_TYPE)
        return self._received.form

    async def _read_limited(self) -> bytes:
        limit = self.max_body_size
        if limit is None:
            return b"".join([chunk async for chunk in self.stream()])

        declared = self.content_length
        if declared is not None and declared > limit:
            msg = f"request body of {declared} bytes exceeds the {limit} byte limit"
            raise FormParseError(msg)

        buffer = bytearray()
        async for chunk in self.stream():
            buffer += chunk
            if len(buffer) > limit:
                msg = f"request body exceeds the {limit} byte limit"
                raise FormParseError(msg)
        return bytes(buffer)
