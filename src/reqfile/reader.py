r"""Line reader — a single cursor over rendered request text.

The parser reads the same text in two different ways:

- **Logical lines** — used for the request line and headers.  A line
  that starts with a space or tab continues the previous one (RFC 2822
  header folding), joined with a single space, so a long header value
  can be wrapped::

      Accept-Encoding: gzip, deflate,
        compress, br

  reads as ``Accept-Encoding: gzip, deflate, compress, br``.

- **Raw lines** — used for the body, where every line boundary matters
  and nothing is folded.

Both modes share one cursor, so switching from headers to body picks up
exactly where the header block stopped.  ``\n`` and ``\r\n`` terminators
are stripped; the body assembler puts canonical ``\r\n`` back.

A line starting with ``###`` is a **unit separator**: it ends the header
block or body of the current request in a multi-request file.
"""

import re

from reqfile.headers import Headers, canonical_name

UNIT_SEPARATOR = "###"

_FOLD_WHITESPACE = " \t"
_FIELD_NAME = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


class ProtocolError(ValueError):
    """Raise when a header block violates MIME header syntax."""


def is_unit_separator(line: str) -> bool:
    """Return True if *line* separates two requests in one file."""
    return line.startswith(UNIT_SEPARATOR)


def _split_lines(text: str) -> list[str]:
    r"""Split *text* on ``\n``, dropping a trailing ``\r`` from each line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


class LineReader:
    """Buffered, MIME-aware line source over a block of text."""

    def __init__(self, text: str) -> None:
        """Create a reader positioned at the first line of *text*."""
        self._lines = _split_lines(text)
        self._pos = 0

    @property
    def at_end(self) -> bool:
        """Return True once every line has been consumed."""
        return self._pos >= len(self._lines)

    def peek_raw_line(self) -> str | None:
        """Return the next raw line without consuming it (None at end)."""
        if self.at_end:
            return None
        return self._lines[self._pos]

    def next_raw_line(self) -> str:
        """Consume and return the next line verbatim.

        Raises:
            EOFError: If there are no more lines.

        """
        if self.at_end:
            msg = "end of input"
            raise EOFError(msg)
        line = self._lines[self._pos]
        self._pos += 1
        return line

    def next_logical_line(self) -> str:
        """Consume the next line plus any continuation lines folded into it.

        Continuation lines are trimmed and joined with a single space.  A
        whitespace-only line is not a continuation.

        Raises:
            EOFError: If there are no more lines.

        """
        line = self.next_raw_line()
        if not line:
            return line
        parts = [line.rstrip(_FOLD_WHITESPACE)]
        while True:
            nxt = self.peek_raw_line()
            if nxt is None or not nxt.startswith(tuple(_FOLD_WHITESPACE)):
                break
            if not nxt.strip(_FOLD_WHITESPACE):
                break
            self._pos += 1
            parts.append(nxt.strip(_FOLD_WHITESPACE))
        return " ".join(parts)

    def read_header_block(self) -> Headers:
        """Consume a MIME header block and return its fields.

        The block ends at a blank line (consumed), at a unit separator
        (left for the caller) or at end of input.  Reaching end of input is
        not an error; check ``at_end`` afterwards to tell it apart from a
        blank-line terminator.

        Raises:
            ProtocolError: If a line is not a valid ``Name: value`` field.

        """
        headers = Headers()
        first = True
        while True:
            nxt = self.peek_raw_line()
            if nxt is None or is_unit_separator(nxt):
                return headers
            if not nxt.strip(_FOLD_WHITESPACE):
                self._pos += 1
                return headers
            if first and nxt.startswith(tuple(_FOLD_WHITESPACE)):
                msg = f"malformed MIME header initial line: {nxt!r}"
                raise ProtocolError(msg)
            first = False

            line = self.next_logical_line()
            name, sep, value = line.partition(":")
            if not sep:
                msg = f"malformed MIME header line: {line!r}"
                raise ProtocolError(msg)
            if not _FIELD_NAME.match(name):
                msg = f"malformed MIME header: invalid field name {name!r}"
                raise ProtocolError(msg)
            headers.add(canonical_name(name), value.strip(_FOLD_WHITESPACE))
