r"""Request units and the request-line parser.

A request file describes HTTP requests in roughly the shape they take
on the wire::

    POST /post HTTP/1.1
    Content-Type: application/json

    {"key": "value"}

The first meaningful line is the **request line**.  Unlike the strict
wire format it comes in three shapes:

    URL                     → GET URL, protocol unspecified
    METHOD URL              → protocol unspecified
    METHOD URL PROTOCOL

Lines beginning with ``#`` or ``//`` are comments and are skipped while
looking for the request line.

The parsed result is a ``RequestUnit``: method, resolved URL, protocol,
headers, and an optional body.  ``format_request`` turns one back into
wire bytes for a transport layer.
"""

import re
from dataclasses import dataclass, field
from enum import StrEnum
from urllib.parse import SplitResult, urlsplit

from reqfile.errors import InvalidRequestLineError, InvalidURLError
from reqfile.headers import Headers

_REQUEST_LINE_URL = 1
_REQUEST_LINE_METHOD_URL = 2
_REQUEST_LINE_METHOD_URL_PROTO = 3

_COMMENT_PREFIXES = ("#", "//")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_PROTOCOL_VERSION = re.compile(r"^HTTP/(\d+)\.(\d+)$")

_CRLF = b"\r\n"
_DEFAULT_PROTOCOL = "HTTP/1.1"


class HttpMethod(StrEnum):
    """Standard HTTP request methods.

    Request files may use any token as a method; these are the ones the
    HTTP specification defines.
    """

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    CONNECT = "CONNECT"


DEFAULT_METHOD = HttpMethod.GET


@dataclass(frozen=True)
class RequestUnit:
    """One parsed request, ready to hand to an HTTP transport.

    Attributes:
        method: The request method (``GET`` when the file omits it).
        url: The base-URL-prefixed target, already validated.
        protocol: The protocol token (e.g. ``HTTP/1.1``), or ``""``.
        headers: The header fields; empty but never missing.
        body: The body bytes, or ``None`` when the file has no body.

    """

    method: str
    url: str
    protocol: str = ""
    headers: Headers = field(default_factory=Headers)
    body: bytes | None = None

    @property
    def target(self) -> SplitResult:
        """Return the URL split into scheme, netloc, path, query, fragment."""
        return urlsplit(self.url)

    @property
    def protocol_version(self) -> tuple[int, int] | None:
        """Return ``(major, minor)`` for an ``HTTP/x.y`` protocol, else None."""
        match = _PROTOCOL_VERSION.match(self.protocol)
        if match is None:
            return None
        return int(match.group(1)), int(match.group(2))


def is_comment(line: str) -> bool:
    """Return True if *line* is a ``#`` or ``//`` comment."""
    return line.startswith(_COMMENT_PREFIXES)


def parse_url(raw: str) -> SplitResult:
    """Split *raw* into URL components, rejecting malformed input.

    Raises:
        ValueError: On control characters or whitespace, a missing scheme,
            an invalid percent-escape, a bad IPv6 literal, or a bad port.

    """
    for ch in raw:
        if ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F:  # noqa: PLR2004
            msg = f"invalid control character in URL: {ch!r}"
            raise ValueError(msg)
    if raw.startswith(":"):
        msg = "missing protocol scheme"
        raise ValueError(msg)
    parts = urlsplit(raw)
    # The query is kept raw; only these components must hold valid escapes.
    for component in (parts.netloc, parts.path, parts.fragment):
        if bad := _BAD_ESCAPE.search(component):
            msg = f"invalid URL escape {component[bad.start() : bad.start() + 3]!r}"
            raise ValueError(msg)
    # Accessing .port validates it.
    _ = parts.port
    return parts


def parse_request_line(line: str, *, base_url: str = "", file: str = "") -> RequestUnit:
    """Parse a request line into a header-less, body-less RequestUnit.

    Args:
        line: The logical request line.
        base_url: Prefix prepended verbatim to the URL field.
        file: The resolved file path, for error messages.

    Returns:
        A RequestUnit with method, url, and protocol filled in.

    Raises:
        InvalidRequestLineError: If the line does not have 1-3 fields.
        InvalidURLError: If the prefixed URL fails to parse.

    """
    fields = line.split()

    if len(fields) == _REQUEST_LINE_URL:
        method, raw_url, protocol = DEFAULT_METHOD.value, fields[0], ""
    elif len(fields) == _REQUEST_LINE_METHOD_URL:
        method, raw_url, protocol = fields[0], fields[1], ""
    elif len(fields) == _REQUEST_LINE_METHOD_URL_PROTO:
        method, raw_url, protocol = fields
    else:
        raise InvalidRequestLineError(file, line)

    url = base_url + raw_url
    try:
        parse_url(url)
    except ValueError as e:
        raise InvalidURLError(file, url, e) from e

    return RequestUnit(method=method, url=url, protocol=protocol)


def format_request(unit: RequestUnit) -> bytes:
    r"""Serialize a RequestUnit to wire-format bytes.

    Wire format::

        METHOD /path?query HTTP/1.1\r\n
        Host: example.com\r\n
        Header-Name: value\r\n
        ...\r\n
        \r\n
        [body]

    ``Host`` is added from the URL and ``Content-Length`` from the body
    when the unit does not set them.  An unspecified protocol is sent as
    ``HTTP/1.1``.
    """
    target = unit.target
    path = target.path or "/"
    if target.query:
        path = f"{path}?{target.query}"
    protocol = unit.protocol or _DEFAULT_PROTOCOL

    headers = Headers(unit.headers.items())
    if "Host" not in headers and target.netloc:
        headers = Headers([("Host", target.netloc), *headers.items()])
    if unit.body is not None and "Content-Length" not in headers:
        headers.add("Content-Length", str(len(unit.body)))

    parts: list[bytes] = [f"{unit.method} {path} {protocol}".encode(), _CRLF]
    for name, value in headers.items():
        parts.append(f"{name}: {value}".encode())
        parts.append(_CRLF)
    parts.append(_CRLF)
    if unit.body:
        parts.append(unit.body)
    return b"".join(parts)
