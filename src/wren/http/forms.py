"""Form data parsing — URL-encoded and multipart.

``FormData`` is the immutable, per-request result of parsing a form body.
URL-encoded bodies use stdlib ``urllib.parse``; multipart bodies use
``python-multipart``. Every way a body can be malformed surfaces as
``FormParseError`` so callers can answer with a single 400.
"""

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs

from python_multipart.multipart import MultipartParser, parse_options_header

from wren.errors import FormParseError

URLENCODED = "application/x-www-form-urlencoded"
MULTIPART = "multipart/form-data"

# A "%" not followed by two hex digits
_BAD_ESCAPE = re.compile(rb"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True, slots=True)
class UploadFile:
    """An uploaded file from a multipart form submission.

    The content is held in memory; request bodies are bounded by
    ``AppConfig.max_content_length``.
    """

    filename: str
    content_type: str
    size: int
    _content: bytes

    def read(self) -> bytes:
        """Return the file content as bytes."""
        return self._content

    def __repr__(self) -> str:
        return f"UploadFile({self.filename!r}, {self.content_type!r}, {self.size} bytes)"


class FormData(Mapping[str, str]):
    """Immutable parsed form data.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    ``files`` provides access to uploaded files by field name.

    Usage::

        form = await request.form()
        name = form.get("name", "")
    """

    __slots__ = ("_data", "_files")

    def __init__(
        self,
        data: dict[str, list[str]],
        files: dict[str, UploadFile] | None = None,
    ) -> None:
        object.__setattr__(self, "_data", data)
        object.__setattr__(self, "_files", files or {})

    @property
    def files(self) -> Mapping[str, UploadFile]:
        """Uploaded files by field name."""
        return self._files

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"FormData({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* (checkboxes, multi-selects)."""
        return list(self._data.get(key, []))


def parse_form_data(body: bytes, content_type: str) -> FormData:
    """Parse form body into FormData.

    Supports ``application/x-www-form-urlencoded`` and
    ``multipart/form-data``.

    Raises:
        FormParseError: If the content type is not a form encoding or
            the body is malformed for its encoding.
    """
    ct_lower = content_type.lower().split(";")[0].strip()

    if ct_lower == URLENCODED:
        return _parse_urlencoded(body)

    if ct_lower == MULTIPART:
        return _parse_multipart(body, content_type)

    msg = f"unsupported content type {content_type!r}"
    raise FormParseError(msg)


def _parse_urlencoded(body: bytes) -> FormData:
    """Parse URL-encoded form data using stdlib."""
    bad = _BAD_ESCAPE.search(body)
    if bad is not None:
        escape = body[bad.start() : bad.start() + 3].decode("latin-1")
        msg = f"invalid URL escape {escape!r}"
        raise FormParseError(msg)
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"body is not valid UTF-8 (byte {exc.start})"
        raise FormParseError(msg) from exc
    # Escaped bytes are only decoded here, so they need their own UTF-8 check
    try:
        return FormData(parse_qs(text, keep_blank_values=True, errors="strict"))
    except UnicodeDecodeError as exc:
        msg = "percent-encoded value is not valid UTF-8"
        raise FormParseError(msg) from exc


def _parse_multipart(body: bytes, content_type: str) -> FormData:
    """Parse multipart form data using python-multipart."""
    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if not boundary:
        msg = "multipart body is missing the boundary parameter"
        raise FormParseError(msg)

    data: dict[str, list[str]] = {}
    files: dict[str, UploadFile] = {}

    # Current part state
    headers: dict[str, str] = {}
    pending_header = ""
    content = bytearray()
    field_name: str | None = None
    filename: str | None = None
    complete = False

    def on_part_begin() -> None:
        nonlocal headers, content, field_name, filename
        headers = {}
        content = bytearray()
        field_name = None
        filename = None

    def on_part_data(chunk: bytes, start: int, end: int) -> None:
        content.extend(chunk[start:end])

    def on_part_end() -> None:
        if field_name is None:
            return
        if filename is not None:
            raw = bytes(content)
            files[field_name] = UploadFile(
                filename=filename,
                content_type=headers.get("content-type", "application/octet-stream"),
                size=len(raw),
                _content=raw,
            )
        else:
            try:
                value = content.decode("utf-8")
            except UnicodeDecodeError as exc:
                msg = f"field {field_name!r} is not valid UTF-8"
                raise FormParseError(msg) from exc
            data.setdefault(field_name, []).append(value)

    def on_header_field(chunk: bytes, start: int, end: int) -> None:
        nonlocal pending_header
        pending_header = chunk[start:end].decode("latin-1").lower()

    def on_header_value(chunk: bytes, start: int, end: int) -> None:
        nonlocal field_name, filename
        value = chunk[start:end].decode("latin-1")
        headers[pending_header] = value
        if pending_header == "content-disposition":
            _, params = parse_options_header(value.encode("latin-1"))
            name = params.get(b"name")
            if name is not None:
                field_name = name.decode("utf-8")
            fname = params.get(b"filename")
            if fname is not None:
                filename = fname.decode("utf-8")

    def on_end() -> None:
        nonlocal complete
        complete = True

    callbacks: dict[str, Any] = {
        "on_part_begin": on_part_begin,
        "on_part_data": on_part_data,
        "on_part_end": on_part_end,
        "on_header_field": on_header_field,
        "on_header_value": on_header_value,
        "on_end": on_end,
    }

    parser = MultipartParser(boundary, callbacks)
    try:
        parser.write(body)
        parser.finalize()
    except FormParseError:
        raise
    except ValueError as exc:
        msg = f"malformed multipart body: {exc}"
        raise FormParseError(msg) from exc

    # finalize() does not check the end state, so a cut-off body passes silently
    if not complete:
        msg = "malformed multipart body: missing closing boundary"
        raise FormParseError(msg)

    return FormData(data, files)
