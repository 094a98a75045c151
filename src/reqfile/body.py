r"""Body assembly — collect the lines after the header block.

Everything after the blank line that closes the headers is body, up to
the end of the file or the next ``###`` separator.  Each line is copied
through followed by the canonical HTTP line terminator ``\r\n``.

A line that starts with ``<`` pulls in another file instead::

    POST /upload
    Content-Type: application/json

    < payload.json

The named file is rendered with the same template data as the request
file and spliced in verbatim.  Its contents are not scanned for further
``<`` lines: inclusion is one level deep.

A request with no body lines gets ``None``, not ``b""``, so callers can
tell "no body" from "empty body".
"""

from collections.abc import Callable

from reqfile.config import DEFAULT_ENCODING
from reqfile.errors import BodyError
from reqfile.reader import LineReader, is_unit_separator

HTTP_EOL = "\r\n"
INCLUDE_PREFIX = "<"


def include_target(line: str) -> str | None:
    """Return the file name of a ``< file`` line, or None for other lines."""
    if not line.startswith(INCLUDE_PREFIX):
        return None
    return line[len(INCLUDE_PREFIX) :].strip()


def assemble_body(
    reader: LineReader,
    include: Callable[[str], str],
    *,
    file: str,
    encoding: str = DEFAULT_ENCODING,
) -> bytes | None:
    """Read raw body lines from *reader* and return the encoded body.

    Args:
        reader: Reader positioned just after the header block.
        include: Renders a referenced file name and returns its text.
        file: The resolved path of the request file, for error messages.
        encoding: Encoding used to turn the body text into bytes.

    Returns:
        The body bytes, or None when there were no body lines.

    Raises:
        TemplateError: If an included file fails to render.
        BodyError: If the assembled body cannot be encoded.

    """
    chunks: list[str] = []
    while True:
        line = reader.peek_raw_line()
        if line is None or is_unit_separator(line):
            break
        reader.next_raw_line()

        name = include_target(line)
        chunks.append(line if name is None else include(name))
        chunks.append(HTTP_EOL)

    if not chunks:
        return None
    try:
        return "".join(chunks).encode(encoding)
    except (UnicodeEncodeError, LookupError) as e:
        raise BodyError(file, e) from e
