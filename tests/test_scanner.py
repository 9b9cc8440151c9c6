"""
Tests for the scanner: token sequences, simple keys, scalar styles and
comment tokens.
"""

import pytest

import yamlcore
from yamlcore.comments import CommentType
from yamlcore.options import LoaderOptions
from yamlcore.scanner import ScannerError
from yamlcore.tokens import (
    StreamStartToken, StreamEndToken,
    DirectiveToken, DocumentStartToken, DocumentEndToken,
    BlockSequenceStartToken, BlockMappingStartToken, BlockEndToken,
    FlowSequenceStartToken, FlowSequenceEndToken,
    FlowMappingStartToken, FlowMappingEndToken,
    KeyToken, ValueToken, BlockEntryToken, FlowEntryToken,
    AliasToken, AnchorToken, TagToken, ScalarToken, CommentToken,
)


# ── Helpers ──────────────────────────────────────────────────────────

def _token_types(text, **options):
    """Scan text, return the token classes."""
    loader_options = LoaderOptions(**options) if options else None
    return [type(token) for token in yamlcore.scan(text, options=loader_options)]


def _scalars(text):
    """Scan text, return (value, style) for every scalar token."""
    return [(token.value, token.style) for token in yamlcore.scan(text)
            if isinstance(token, ScalarToken)]


def _comments(text):
    """Scan text with comments on, return (type, value) per comment."""
    return [(token.comment_type, token.value)
            for token in yamlcore.scan(text, options=LoaderOptions(process_comments=True))
            if isinstance(token, CommentToken)]


# ── Structure ────────────────────────────────────────────────────────

class TestStructure:

    def test_block_mapping(self):
        """A block mapping produces key/value tokens inside a block."""
        assert _token_types("a: 1\nb: 2\n") == [
            StreamStartToken, BlockMappingStartToken,
            KeyToken, ScalarToken, ValueToken, ScalarToken,
            KeyToken, ScalarToken, ValueToken, ScalarToken,
            BlockEndToken, StreamEndToken,
        ]

    def test_block_sequence(self):
        """A block sequence produces entry tokens."""
        assert _token_types("- a\n- b\n") == [
            StreamStartToken, BlockSequenceStartToken,
            BlockEntryToken, ScalarToken, BlockEntryToken, ScalarToken,
            BlockEndToken, StreamEndToken,
        ]

    def test_indentless_sequence(self):
        """A sequence at its key's column opens no block of its own."""
        types = _token_types("key:\n- a\n- b\n")
        assert BlockSequenceStartToken not in types
        assert types.count(BlockEntryToken) == 2
        assert types.count(BlockEndToken) == 1

    def test_flow_collections(self):
        """Flow indicators become flow tokens."""
        assert _token_types("[a, {b: c}]") == [
            StreamStartToken, FlowSequenceStartToken,
            ScalarToken, FlowEntryToken,
            FlowMappingStartToken, KeyToken, ScalarToken, ValueToken,
            ScalarToken, FlowMappingEndToken,
            FlowSequenceEndToken, StreamEndToken,
        ]

    def test_document_markers(self):
        """--- and ... are document tokens."""
        types = _token_types("--- a\n...\n")
        assert types == [StreamStartToken, DocumentStartToken, ScalarToken,
                         DocumentEndToken, StreamEndToken]

    def test_directive(self):
        """%YAML is scanned as a directive with a version tuple."""
        tokens = list(yamlcore.scan("%YAML 1.1\n--- a\n"))
        directive = tokens[1]
        assert isinstance(directive, DirectiveToken)
        assert directive.name == 'YAML'
        assert directive.value == (1, 1)

    def test_anchor_alias_tag(self):
        """Node properties are scanned as anchor, tag and alias tokens."""
        tokens = list(yamlcore.scan("- &x !!str a\n- *x\n"))
        anchor = next(t for t in tokens if isinstance(t, AnchorToken))
        tag = next(t for t in tokens if isinstance(t, TagToken))
        alias = next(t for t in tokens if isinstance(t, AliasToken))
        assert anchor.value == 'x'
        assert tag.value == ('!!', 'str')
        assert alias.value == 'x'

    def test_verbatim_tag(self):
        """A verbatim tag has no handle."""
        tokens = list(yamlcore.scan("!<tag:example.com,2000:x> a"))
        tag = next(t for t in tokens if isinstance(t, TagToken))
        assert tag.value == (None, 'tag:example.com,2000:x')


# ── Scalars ──────────────────────────────────────────────────────────

class TestScalars:

    def test_plain(self):
        """Plain scalars have no style."""
        assert _scalars("hello world") == [('hello world', None)]

    def test_plain_multiline_folds(self):
        """Line breaks inside a plain scalar fold into spaces."""
        assert _scalars("a\n b\n\n c") == [('a b\nc', None)]

    def test_single_quoted(self):
        """'' inside single quotes is one quote."""
        assert _scalars("'it''s'") == [("it's", "'")]

    def test_double_quoted_escapes(self):
        """Double-quoted escapes are decoded."""
        assert _scalars(r'"a\tb\x41\u263A\n"') == [('a\tbA\u263A\n', '"')]

    def test_literal(self):
        """A literal block keeps its line breaks."""
        assert _scalars("|\n  line1\n  line2\n") == [('line1\nline2\n', '|')]

    def test_literal_strip(self):
        """The strip indicator removes the final break."""
        assert _scalars("|-\n  text\n\n") == [('text', '|')]

    def test_literal_keep(self):
        """The keep indicator keeps trailing blank lines."""
        assert _scalars("|+\n  text\n\n") == [('text\n\n', '|')]

    def test_folded(self):
        """A folded block turns single breaks into spaces."""
        assert _scalars(">\n  one\n  two\n\n  three\n") == [('one two\nthree\n', '>')]

    def test_explicit_indentation(self):
        """An indentation indicator sets the content indent."""
        assert _scalars("|2\n   leading\n") == [(' leading\n', '|')]

    def test_plain_url_in_flow(self):
        """':' not followed by a space stays inside a flow plain scalar."""
        assert _scalars("[http://example.com]") == [('http://example.com', None)]


# ── Simple keys ──────────────────────────────────────────────────────

class TestSimpleKeys:

    def test_key_at_limit(self):
        """A 1024-character key is still a simple key."""
        types = _token_types("a" * 1024 + ": b")
        assert KeyToken in types

    def test_key_too_long_block(self):
        """A key longer than 1024 characters is not found."""
        with pytest.raises(ScannerError) as exc_info:
            list(yamlcore.scan("a" * 1025 + ": b"))
        assert "could not find expected ':'" in str(exc_info.value)

    def test_key_too_long_flow(self):
        """The same limit holds inside a flow mapping."""
        with pytest.raises(ScannerError) as exc_info:
            list(yamlcore.scan("{" + "a" * 1025 + ": b}"))
        assert "could not find expected ':'" in str(exc_info.value)
        assert exc_info.value.context == "while scanning a simple key"

    def test_configured_limit(self):
        """The limit comes from LoaderOptions."""
        with pytest.raises(ScannerError):
            list(yamlcore.scan("abcdefghij: b",
                               options=LoaderOptions(max_simple_key_length=5)))

    def test_multiline_key_rejected(self):
        """A simple key must fit on one line."""
        with pytest.raises(ScannerError) as exc_info:
            list(yamlcore.scan("a: 1\nb\nc: 2"))
        assert "could not find expected ':'" in str(exc_info.value)

    def test_tab_indentation(self):
        """A tab cannot start a token."""
        with pytest.raises(ScannerError) as exc_info:
            list(yamlcore.scan("a:\n\tb: 1"))
        assert "(TAB)" in str(exc_info.value)

    def test_mapping_value_not_allowed(self):
        """A value indicator after a plain value is an error."""
        with pytest.raises(ScannerError) as exc_info:
            list(yamlcore.scan("a: b: c"))
        assert "mapping values are not allowed here" in str(exc_info.value)


# ── Comments ─────────────────────────────────────────────────────────

class TestCommentTokens:

    def test_off_by_default(self):
        """No comment tokens without process_comments."""
        assert CommentToken not in _token_types("# c\na: 1 # d\n")

    def test_block_and_inline(self):
        """Own-line comments are BLOCK, trailing ones IN_LINE."""
        assert _comments("# head\na: 1 # tail\n") == [
            (CommentType.BLOCK, ' head'),
            (CommentType.IN_LINE, ' tail'),
        ]

    def test_blank_line(self):
        """An empty line is a BLANK_LINE comment."""
        comments = _comments("a: 1\n\nb: 2\n")
        assert comments == [(CommentType.BLANK_LINE, '\n')]

    def test_blank_lines_after_plain_scalar(self):
        """Each empty line after a plain value is a BLANK_LINE, spaces or not."""
        comments = _comments("a: 1\n\n  \nb: 2\n")
        assert comments == [(CommentType.BLANK_LINE, '\n')] * 2

    def test_blank_line_before_comment(self):
        """A blank line after a plain value comes before the next comment."""
        comments = _comments("a: 1\n\n# c\nb: 2\n")
        assert comments == [(CommentType.BLANK_LINE, '\n'),
                            (CommentType.BLOCK, ' c')]

    def test_folded_empty_line_not_blank(self):
        """An empty line inside a multi-line plain scalar is content."""
        assert _comments("a: one\n\n  two\n") == []

    def test_aligned_continuation(self):
        """A comment aligned with a trailing comment continues it."""
        comments = _comments("a: 1 # one\n     # two\nb: 2\n")
        assert comments == [
            (CommentType.IN_LINE, ' one'),
            (CommentType.IN_LINE, ' two'),
        ]

    def test_comment_after_block_header(self):
        """A comment after a block scalar header is IN_LINE."""
        comments = _comments("a: | # note\n  text\n")
        assert comments == [(CommentType.IN_LINE, ' note')]
