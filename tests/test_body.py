"""Tests for body assembly.

Body lines are copied through with CRLF terminators; ``< file`` lines
are replaced by the included file's text.  A body with no lines at all
is absent (None), which is not the same as empty.
"""

import pytest

from reqfile.body import HTTP_EOL, assemble_body, include_target
from reqfile.errors import BodyError, TemplateError
from reqfile.reader import LineReader

FILE = "api.http"


def _no_include(name: str) -> str:
    """Fail the test if an include is attempted."""
    msg = f"unexpected include of {name}"
    raise AssertionError(msg)


class TestIncludeTarget:
    """Verify recognition of ``<`` include lines."""

    def test_include_lines(self) -> None:
        """The file name follows the < with optional whitespace."""
        assert include_target("< payload.json") == "payload.json"
        assert include_target("<payload.json") == "payload.json"
        assert include_target("<\tdir/payload.json  ") == "dir/payload.json"

    def test_other_lines(self) -> None:
        """Lines not starting with < are literal body text."""
        assert include_target("text < more") is None
        assert include_target(" < indented") is None


class TestAssembleBody:
    """Verify body accumulation."""

    def test_no_lines_gives_none(self) -> None:
        """An exhausted reader yields an absent body."""
        assert assemble_body(LineReader(""), _no_include, file=FILE) is None

    def test_literal_lines_use_crlf(self) -> None:
        """Each line, including blank ones, ends in CRLF."""
        reader = LineReader("line one\n\nline three\r\n")
        assert assemble_body(reader, _no_include, file=FILE) == b"line one\r\n\r\nline three\r\n"
        assert HTTP_EOL == "\r\n"

    def test_included_file_is_spliced_verbatim(self) -> None:
        """Included text is not re-split or normalised, only terminated."""
        reader = LineReader("before\n< part.txt\nafter\n")
        included: list[str] = []

        def include(name: str) -> str:
            included.append(name)
            return "x\ny\n"

        body = assemble_body(reader, include, file=FILE)
        assert body == b"before\r\nx\ny\n\r\nafter\r\n"
        assert included == ["part.txt"]

    def test_included_text_is_not_rescanned(self) -> None:
        """A < line inside included text stays literal."""
        reader = LineReader("< outer.txt\n")
        body = assemble_body(reader, lambda _: "< inner.txt", file=FILE)
        assert body == b"< inner.txt\r\n"

    def test_stops_at_separator(self) -> None:
        """The ### line ends the body and is left for the caller."""
        reader = LineReader("a\n###\nGET /next\n")
        assert assemble_body(reader, _no_include, file=FILE) == b"a\r\n"
        assert reader.peek_raw_line() == "###"

    def test_separator_first_gives_none(self) -> None:
        """A separator with no body lines before it leaves the body absent."""
        assert assemble_body(LineReader("###\n"), _no_include, file=FILE) is None

    def test_include_errors_propagate(self) -> None:
        """Errors from the include callback are not re-wrapped."""

        def include(name: str) -> str:
            raise TemplateError(name, FileNotFoundError(name))

        with pytest.raises(TemplateError):
            assemble_body(LineReader("< gone.json\n"), include, file=FILE)

    def test_encoding_failure_is_body_error(self) -> None:
        """Text the encoding can't represent raises BodyError."""
        with pytest.raises(BodyError) as exc_info:
            assemble_body(LineReader("naïve\n"), _no_include, file=FILE, encoding="ascii")
        assert exc_info.value.file == FILE
        assert isinstance(exc_info.value.cause, UnicodeEncodeError)

    def test_encoding_is_applied(self) -> None:
        """The body is encoded with the requested encoding."""
        body = assemble_body(LineReader("naïve\n"), _no_include, file=FILE, encoding="latin-1")
        assert body == "naïve\r\n".encode("latin-1")
