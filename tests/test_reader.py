"""Tests for the line reader.

The reader hands out the same text two ways: logical lines (with header
folding) for the request line and headers, and raw lines for the body.
Both share one cursor, so these tests also check that switching modes
never skips or repeats a line.
"""

import pytest

from reqfile.headers import Headers
from reqfile.reader import LineReader, ProtocolError, is_unit_separator


class TestRawLines:
    """Verify raw line reading."""

    def test_lines_are_returned_verbatim(self) -> None:
        """Raw lines keep leading whitespace and lose only the terminator."""
        reader = LineReader("a\n  b\r\nc")
        assert reader.next_raw_line() == "a"
        assert reader.next_raw_line() == "  b"
        assert reader.next_raw_line() == "c"

    def test_end_of_input_raises_eof(self) -> None:
        """Reading past the last line raises EOFError."""
        reader = LineReader("only\n")
        reader.next_raw_line()
        assert reader.at_end
        with pytest.raises(EOFError):
            reader.next_raw_line()

    def test_empty_text_is_immediately_at_end(self) -> None:
        """An empty string has no lines at all."""
        reader = LineReader("")
        assert reader.at_end
        assert reader.peek_raw_line() is None

    def test_peek_does_not_consume(self) -> None:
        """peek_raw_line returns the same line until it is read."""
        reader = LineReader("x\ny\n")
        assert reader.peek_raw_line() == "x"
        assert reader.peek_raw_line() == "x"
        assert reader.next_raw_line() == "x"
        assert reader.peek_raw_line() == "y"

    def test_trailing_blank_lines_are_kept(self) -> None:
        """Only the final terminator is dropped, not blank lines before it."""
        reader = LineReader("a\n\n")
        assert reader.next_raw_line() == "a"
        assert reader.next_raw_line() == ""
        assert reader.at_end


class TestLogicalLines:
    """Verify continuation-line folding."""

    def test_continuation_lines_are_folded(self) -> None:
        """Indented lines join the previous line with one space."""
        reader = LineReader("GET https://example.com\n  /path\n\t/more\nnext\n")
        assert reader.next_logical_line() == "GET https://example.com /path /more"
        assert reader.next_raw_line() == "next"

    def test_blank_line_is_not_folded(self) -> None:
        """A blank line comes back as-is and stops folding."""
        reader = LineReader("\n  indented\n")
        assert reader.next_logical_line() == ""

    def test_whitespace_only_line_is_not_a_continuation(self) -> None:
        """A line of only spaces is left for the next read."""
        reader = LineReader("Name: v\n   \nrest\n")
        assert reader.next_logical_line() == "Name: v"
        assert reader.next_raw_line() == "   "

    def test_end_of_input_raises_eof(self) -> None:
        """Logical reads past the end also raise EOFError."""
        with pytest.raises(EOFError):
            LineReader("").next_logical_line()


class TestHeaderBlock:
    """Verify MIME header block parsing."""

    def test_headers_until_blank_line(self) -> None:
        """The blank line ends the block and is consumed."""
        reader = LineReader("content-type: text/plain\nX-A:  1 \n\nbody\n")
        headers = reader.read_header_block()
        assert headers == {"Content-Type": ["text/plain"], "X-A": ["1"]}
        assert reader.next_raw_line() == "body"

    def test_folded_header_value(self) -> None:
        """A continuation line extends the header value."""
        reader = LineReader("Accept: a,\n b\n")
        assert reader.read_header_block()["accept"] == "a, b"

    def test_end_of_input_is_not_an_error(self) -> None:
        """A block that runs into end of input returns what it read."""
        reader = LineReader("Accept: */*\n")
        assert reader.read_header_block() == {"Accept": ["*/*"]}
        assert reader.at_end

    def test_empty_input_gives_empty_headers(self) -> None:
        """No lines at all means no headers."""
        assert LineReader("").read_header_block() == Headers()

    def test_separator_ends_block_without_consuming(self) -> None:
        """A ### line is left for the caller."""
        reader = LineReader("Accept: */*\n### next\nGET /b\n")
        assert len(reader.read_header_block()) == 1
        assert reader.peek_raw_line() == "### next"

    def test_line_without_colon(self) -> None:
        """A line with no colon is a ProtocolError."""
        with pytest.raises(ProtocolError, match="malformed MIME header line"):
            LineReader("not a header\n").read_header_block()

    def test_invalid_field_name(self) -> None:
        """Whitespace inside a field name is rejected."""
        with pytest.raises(ProtocolError, match="invalid field name"):
            LineReader("Bad Name: x\n").read_header_block()

    def test_leading_continuation_line(self) -> None:
        """A block may not start with a continuation line."""
        with pytest.raises(ProtocolError, match="initial line"):
            LineReader("  Accept: x\n").read_header_block()

    def test_protocol_error_is_value_error(self) -> None:
        """ProtocolError is a ValueError subclass."""
        assert issubclass(ProtocolError, ValueError)


class TestUnitSeparator:
    """Verify separator detection."""

    def test_separator_lines(self) -> None:
        """Lines starting with ### are separators, shorter runs are not."""
        assert is_unit_separator("###")
        assert is_unit_separator("#### second request")
        assert not is_unit_separator("## heading")
        assert not is_unit_separator(" ###")
