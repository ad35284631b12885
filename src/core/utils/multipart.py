"""Multipart form-data parsing for API Gateway proxy bodies."""

from dataclasses import dataclass, field

from python_multipart.exceptions import MultipartParseError
from python_multipart.multipart import MultipartParser, parse_options_header

from core.models.errors import InvalidInputError


@dataclass
class UploadedPart:
    """One decoded form part.

    `size` counts every byte seen for the part; `data` stops growing once
    `max_part_size` is exceeded so oversized uploads stay bounded in memory.
    """

    field_name: str
    filename: str | None = None
    content_type: str | None = None
    size: int = 0
    data: bytearray = field(default_factory=bytearray)

    @property
    def is_file(self) -> bool:
        return self.filename is not None


class _FormCollector:
    def __init__(self, max_part_size: int) -> None:
        self.max_part_size = max_part_size
        self.parts: dict[str, UploadedPart] = {}
        self._headers: dict[str, bytes] = {}
        self._header_field = bytearray()
        self._header_value = bytearray()
        self._current: UploadedPart | None = None

    def on_part_begin(self) -> None:
        self._headers = {}
        self._current = None

    def on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_field += data[start:end]

    def on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value += data[start:end]

    def on_header_end(self) -> None:
        name = bytes(self._header_field).decode("latin-1").lower()
        self._headers[name] = bytes(self._header_value)
        self._header_field.clear()
        self._header_value.clear()

    def on_headers_finished(self) -> None:
        disposition, options = parse_options_header(self._headers.get("content-disposition", b""))
        if disposition != b"form-data" or b"name" not in options:
            raise InvalidInputError(message="Malformed multipart part")

        filename = options.get(b"filename")
        content_type = self._headers.get("content-type")
        try:
            field_name = options[b"name"].decode("utf-8")
            filename_text = filename.decode("utf-8") if filename is not None else None
        except UnicodeDecodeError as exc:
            raise InvalidInputError(
                message="Malformed multipart part",
                details={"cause": "part name or filename is not valid UTF-8"},
            ) from exc

        self._current = UploadedPart(
            field_name=field_name,
            filename=filename_text,
            content_type=content_type.decode("latin-1").strip() if content_type else None,
        )

    def on_part_data(self, data: bytes, start: int, end: int) -> None:
        part = self._current
        if part is None:
            return

        chunk = data[start:end]
        part.size += len(chunk)
        room = self.max_part_size + 1 - len(part.data)
        if room > 0:
            part.data += chunk[:room]

    def on_part_end(self) -> None:
        if self._current is not None:
            # first occurrence of a field wins
            self.parts.setdefault(self._current.field_name, self._current)
        self._current = None


def boundary_from_content_type(content_type: str | None) -> bytes:
    """Return the multipart boundary declared in a Content-Type header."""
    if not content_type:
        raise InvalidInputError(message="No file uploaded")

    mime, options = parse_options_header(content_type)
    if mime != b"multipart/form-data":
        raise InvalidInputError(
            message="No file uploaded",
            details={"content_type": content_type},
        )

    boundary = options.get(b"boundary")
    if not boundary:
        raise InvalidInputError(message="Multipart boundary is missing")

    return boundary


def parse_multipart(
    body: bytes,
    content_type: str | None,
    *,
    max_part_size: int,
) -> dict[str, UploadedPart]:
    """Parse a multipart/form-data body into parts keyed by field name.

    Raises:
        InvalidInputError: If the body is not well-formed multipart data
    """
    boundary = boundary_from_content_type(content_type)
    collector = _FormCollector(max_part_size)

    callbacks = {
        "on_part_begin": collector.on_part_begin,
        "on_part_data": collector.on_part_data,
        "on_part_end": collector.on_part_end,
        "on_header_field": collector.on_header_field,
        "on_header_value": collector.on_header_value,
        "on_header_end": collector.on_header_end,
        "on_headers_finished": collector.on_headers_finished,
    }

    parser = MultipartParser(boundary, callbacks)
    try:
        parser.write(body)
        parser.finalize()
    except MultipartParseError as exc:
        raise InvalidInputError(
            message="Malformed multipart body",
            details={"cause": str(exc)},
        ) from exc

    return collector.parts
