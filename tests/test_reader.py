"""
Tests for the character reader: decoding, position tracking and the
printable-character check.
"""

import codecs
import io

import pytest

from yamlcore.error import Mark, MarkedYAMLError
from yamlcore.reader import Reader, ReaderError


# ── Helpers ──────────────────────────────────────────────────────────

def _read_all(reader):
    """Consume a reader one character at a time, return the text."""
    chars = []
    while reader.peek() != '\0':
        chars.append(reader.peek())
        reader.forward()
    return ''.join(chars)


# ── Input kinds ──────────────────────────────────────────────────────

class TestInputKinds:

    def test_str_input(self):
        """A str is read as is."""
        reader = Reader("key: value")
        assert reader.name == "<unicode string>"
        assert _read_all(reader) == "key: value"

    def test_bytes_default_utf8(self):
        """Bytes without a BOM are decoded as UTF-8."""
        reader = Reader("caf\xE9".encode('utf-8'))
        assert reader.encoding == 'utf-8'
        assert _read_all(reader) == "caf\xE9"

    def test_bytes_utf16_le_bom(self):
        """A UTF-16 LE byte order mark selects the UTF-16 LE codec."""
        reader = Reader(codecs.BOM_UTF16_LE + "a: 1".encode('utf-16-le'))
        assert reader.encoding == 'utf-16-le'
        assert _read_all(reader).lstrip('\uFEFF') == "a: 1"

    def test_bytes_utf16_be_bom(self):
        """A UTF-16 BE byte order mark selects the UTF-16 BE codec."""
        reader = Reader(codecs.BOM_UTF16_BE + "a: 1".encode('utf-16-be'))
        assert reader.encoding == 'utf-16-be'

    def test_bytes_utf32_le_bom(self):
        """The UTF-32 LE mark wins over the UTF-16 LE mark it starts with."""
        reader = Reader(codecs.BOM_UTF32_LE + "a".encode('utf-32-le'))
        assert reader.encoding == 'utf-32-le'

    def test_text_file(self):
        """A text file object is read in chunks."""
        text = "item\n" * 2000
        reader = Reader(io.StringIO(text))
        assert _read_all(reader) == text

    def test_binary_file(self):
        """A binary file object is decoded after BOM detection."""
        reader = Reader(io.BytesIO(b"a: b\n"))
        assert reader.encoding == 'utf-8'
        assert _read_all(reader) == "a: b\n"


# ── Position tracking ────────────────────────────────────────────────

class TestPositions:

    def test_line_and_column(self):
        """forward() counts lines and columns."""
        reader = Reader("ab\ncd")
        reader.forward(4)
        mark = reader.get_mark()
        assert (mark.index, mark.line, mark.column) == (4, 1, 1)

    def test_crlf_is_one_break(self):
        """CR LF counts as a single line break."""
        reader = Reader("a\r\nb")
        reader.forward(3)
        assert reader.get_mark().line == 1
        assert reader.get_mark().column == 0

    @pytest.mark.parametrize('line_break', ['\r', '\x85', '\u2028', '\u2029'])
    def test_other_breaks(self, line_break):
        """CR, NEL, LS and PS all end a line."""
        reader = Reader("a" + line_break + "b")
        reader.forward(2)
        assert reader.get_mark().line == 1

    def test_prefix_does_not_consume(self):
        """prefix() returns characters without moving."""
        reader = Reader("hello")
        assert reader.prefix(3) == "hel"
        assert reader.peek() == "h"

    def test_peek_past_end(self):
        """peek() returns NUL past the end of the input."""
        reader = Reader("x")
        assert reader.peek(5) == '\0'


# ── Printable check ──────────────────────────────────────────────────

class TestPrintable:

    def test_control_character_rejected(self):
        """A control character is a ReaderError."""
        with pytest.raises(ReaderError) as exc_info:
            Reader("a\x07b")
        assert "special characters are not allowed" in str(exc_info.value)
        assert exc_info.value.position == 1

    def test_control_character_in_file(self):
        """The check also runs on data read from a file."""
        with pytest.raises(ReaderError):
            _read_all(Reader(io.StringIO("ok\x01")))

    def test_invalid_utf8(self):
        """Undecodable bytes are a ReaderError naming the codec."""
        with pytest.raises(ReaderError) as exc_info:
            _read_all(Reader(b"a\xffb"))
        assert "utf-8" in str(exc_info.value)

    def test_bom_is_printable(self):
        """The byte order mark is allowed."""
        assert Reader.is_printable("\uFEFFtext")

    def test_astral_is_printable(self):
        """Characters outside the BMP are allowed."""
        assert Reader.is_printable("\U0001F600")


# ── Marks ────────────────────────────────────────────────────────────

class TestMarks:

    def test_snippet_points_at_column(self):
        """A mark renders the source line and a caret."""
        mark = Mark("<test>", 5, 0, 5, "key: [value\0", 5)
        text = str(mark)
        assert 'line 1, column 6' in text
        assert text.endswith('     ^')

    def test_long_line_clipped(self):
        """Long lines are cut around the pointer."""
        buffer = 'x' * 100 + '\0'
        text, offset = Mark("<test>", 50, 0, 50, buffer, 50).source_line()
        assert text.startswith(' ... ') and text.endswith(' ... ')
        assert text[offset] == 'x'
        assert len(text) < 80

    def test_snippet_stops_at_line_break(self):
        """Only the line holding the mark is quoted."""
        mark = Mark("<test>", 6, 1, 1, "a: 1\nb: 2\0", 6)
        assert mark.source_line() == ('b: 2', 1)

    def test_mark_without_buffer(self):
        """Marks from a stream have no snippet."""
        assert str(Mark("<file>", 3, 2, 1)) == '  in "<file>", line 3, column 2'

    def test_marked_error_parts(self):
        """Context, problem and note appear in order."""
        error = MarkedYAMLError("while parsing", Mark("<t>", 0, 0, 0),
                                "found x", Mark("<t>", 4, 1, 0), note="see docs")
        assert str(error).splitlines() == [
            'while parsing',
            '  in "<t>", line 1, column 1',
            'found x',
            '  in "<t>", line 2, column 1',
            'see docs',
        ]

    def test_marked_error_skips_duplicate_mark(self):
        """The context mark is omitted when it equals the problem mark."""
        mark = Mark("<test>", 0, 0, 0)
        error = MarkedYAMLError("while scanning", mark, "found trouble", mark)
        assert str(error).count('line 1, column 1') == 1
