"""
Tests for the parser: event sequences, document boundaries, directives
and grammar errors.
"""

import logging

import pytest

import yamlcore
from yamlcore.events import (
    StreamStartEvent, StreamEndEvent, DocumentStartEvent, DocumentEndEvent,
    SequenceStartEvent, SequenceEndEvent, MappingStartEvent, MappingEndEvent,
    ScalarEvent, AliasEvent, CommentEvent,
)
from yamlcore.options import LoaderOptions
from yamlcore.parser import ParserError


# ── Helpers ──────────────────────────────────────────────────────────

def _events(text, **options):
    loader_options = LoaderOptions(**options) if options else None
    return list(yamlcore.parse(text, options=loader_options))


def _event_types(text, **options):
    return [type(event) for event in _events(text, **options)]


def _scalar_events(text):
    return [event for event in _events(text) if isinstance(event, ScalarEvent)]


# ── Event sequences ──────────────────────────────────────────────────

class TestEventSequences:

    def test_empty_stream(self):
        """An empty stream has no documents."""
        assert _event_types("") == [StreamStartEvent, StreamEndEvent]

    def test_implicit_document(self):
        """A bare scalar is an implicit document."""
        events = _events("hello")
        assert [type(e) for e in events] == [
            StreamStartEvent, DocumentStartEvent, ScalarEvent,
            DocumentEndEvent, StreamEndEvent,
        ]
        assert events[1].explicit is False
        assert events[3].explicit is False

    def test_explicit_markers(self):
        """--- and ... mark the document explicit."""
        events = _events("--- a\n...\n")
        assert events[1].explicit is True
        assert events[3].explicit is True

    def test_nested_collections(self):
        """Collections nest start/end pairs."""
        assert _event_types("a: [1, 2]\n") == [
            StreamStartEvent, DocumentStartEvent,
            MappingStartEvent, ScalarEvent,
            SequenceStartEvent, ScalarEvent, ScalarEvent, SequenceEndEvent,
            MappingEndEvent,
            DocumentEndEvent, StreamEndEvent,
        ]

    def test_flow_style_flags(self):
        """Collection start events record block or flow style."""
        events = _events("a: [1]\nb:\n  c: d\n")
        starts = [e for e in events
                  if isinstance(e, (SequenceStartEvent, MappingStartEvent))]
        assert [e.flow_style for e in starts] == [False, True, False]

    def test_indentless_sequence(self):
        """A sequence at its key's column is still a sequence."""
        events = _events("key:\n- a\n- b\n")
        assert SequenceStartEvent in [type(e) for e in events]
        assert [e.value for e in events if isinstance(e, ScalarEvent)] == \
            ['key', 'a', 'b']

    def test_multiple_documents(self):
        """Each --- opens a new document."""
        types = _event_types("--- 1\n--- 2\n")
        assert types.count(DocumentStartEvent) == 2
        assert types.count(DocumentEndEvent) == 2

    def test_empty_explicit_document(self):
        """An explicit document with no content holds an empty scalar."""
        scalars = _scalar_events("---\n...\n")
        assert len(scalars) == 1
        assert scalars[0].value == ''

    def test_empty_mapping_value(self):
        """A key with no value gets an empty plain scalar."""
        scalars = _scalar_events("a:\nb: 1\n")
        assert [s.value for s in scalars] == ['a', '', 'b', '1']
        assert scalars[1].implicit == (True, False)

    def test_alias_event(self):
        """An alias carries the anchor name."""
        events = _events("- &a x\n- *a\n")
        aliases = [e for e in events if isinstance(e, AliasEvent)]
        assert len(aliases) == 1
        assert aliases[0].anchor == 'a'

    def test_flow_sequence_single_pair(self):
        """A key: value entry in a flow sequence is a one-pair mapping."""
        types = _event_types("[a: b]")
        assert MappingStartEvent in types
        assert MappingEndEvent in types


# ── Scalars ──────────────────────────────────────────────────────────

class TestScalarEvents:

    def test_plain_implicit(self):
        """Plain untagged scalars are implicit for plain resolution."""
        scalar = _scalar_events("x")[0]
        assert scalar.implicit == (True, False)
        assert scalar.style is None

    def test_quoted_implicit(self):
        """Quoted untagged scalars are implicit for non-plain resolution."""
        scalar = _scalar_events("'x'")[0]
        assert scalar.implicit == (False, True)
        assert scalar.style == "'"

    def test_secondary_handle(self):
        """!! expands to the yaml.org prefix."""
        scalar = _scalar_events("!!int 3")[0]
        assert scalar.tag == 'tag:yaml.org,2002:int'
        assert scalar.implicit == (False, False)

    def test_non_specific_tag(self):
        """A lone ! keeps the scalar implicit."""
        scalar = _scalar_events("! 3")[0]
        assert scalar.tag == '!'
        assert scalar.implicit == (True, False)

    def test_tag_directive(self):
        """%TAG handles are applied to the document that declares them."""
        text = "%TAG !e! tag:example.com,2000:\n--- !e!foo bar\n"
        scalar = _scalar_events(text)[0]
        assert scalar.tag == 'tag:example.com,2000:foo'

    def test_tag_only_node(self):
        """A tag with no content is an empty scalar."""
        scalars = _scalar_events("a: !!str\n")
        assert scalars[1].value == ''
        assert scalars[1].tag == 'tag:yaml.org,2002:str'


# ── Directives ───────────────────────────────────────────────────────

class TestDirectives:

    def test_version_recorded(self):
        """The %YAML version is on the document start event."""
        events = _events("%YAML 1.1\n--- a\n")
        assert events[1].version == (1, 1)

    def test_duplicate_yaml_directive(self):
        """Two %YAML directives in one document are rejected."""
        with pytest.raises(ParserError) as exc_info:
            _events("%YAML 1.1\n%YAML 1.1\n--- a\n")
        assert "found duplicate YAML directive" in str(exc_info.value)

    def test_incompatible_version(self):
        """A major version other than 1 is rejected."""
        with pytest.raises(ParserError) as exc_info:
            _events("%YAML 2.0\n--- a\n")
        assert "version 1.* is required" in str(exc_info.value)

    def test_newer_minor_version_warns(self, caplog):
        """A newer 1.x version is processed with a warning."""
        with caplog.at_level(logging.WARNING, logger='yamlcore.parser'):
            _events("%YAML 1.2\n--- a\n")
        assert "not fully supported" in caplog.text

    def test_duplicate_tag_handle(self):
        """A tag handle may be declared once per document."""
        text = "%TAG !e! tag:a,2000:\n%TAG !e! tag:b,2000:\n--- a\n"
        with pytest.raises(ParserError) as exc_info:
            _events(text)
        assert "duplicate tag handle" in str(exc_info.value)

    def test_undefined_handle(self):
        """An undeclared named handle is an error."""
        with pytest.raises(ParserError) as exc_info:
            _events("!e!foo bar")
        assert "found undefined tag handle '!e!'" in str(exc_info.value)

    def test_handles_do_not_leak(self):
        """A %TAG handle ends with its document."""
        text = "%TAG !e! tag:a,2000:\n--- !e!x 1\n--- !e!y 2\n"
        with pytest.raises(ParserError):
            _events(text)

    def test_directive_without_document_start(self):
        """Directives must be followed by ---."""
        with pytest.raises(ParserError) as exc_info:
            _events("%YAML 1.1\na: 1\n")
        assert "expected '<document start>'" in str(exc_info.value)


# ── Grammar errors ───────────────────────────────────────────────────

class TestGrammarErrors:

    def test_unclosed_flow_sequence(self):
        """An unterminated flow sequence is reported with its context."""
        with pytest.raises(ParserError) as exc_info:
            _events("[a, b")
        assert exc_info.value.context == "while parsing a flow sequence"

    def test_bad_block_mapping(self):
        """A key indented under a plain value is rejected."""
        with pytest.raises(yamlcore.MarkedYAMLError):
            _events("a: 1\n b: 2\n")

    def test_missing_content(self):
        """A bare ']' is not node content."""
        with pytest.raises(ParserError) as exc_info:
            _events("- ]")
        assert "expected the node content" in str(exc_info.value)


# ── Comments ─────────────────────────────────────────────────────────

class TestCommentEvents:

    def test_comments_off(self):
        """Comment events are not produced by default."""
        assert CommentEvent not in _event_types("# c\na: 1 # d\n")

    def test_comments_in_stream(self):
        """Comment events appear where the comments are."""
        events = _events("# c\na: 1 # d\n", process_comments=True)
        comments = [e for e in events if isinstance(e, CommentEvent)]
        assert [c.value for c in comments] == [' c', ' d']
        # the leading comment comes before the document starts
        assert isinstance(events[1], CommentEvent)

    def test_comment_before_sequence_item(self):
        """A comment between sequence items is its own event."""
        events = _events("- a\n# mid\n- b\n", process_comments=True)
        values = [getattr(e, 'value', None) for e in events
                  if isinstance(e, (ScalarEvent, CommentEvent))]
        assert values == ['a', ' mid', 'b']
