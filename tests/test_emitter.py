"""
Tests for the emitter: layout, scalar styles, document markers and
formatting options.
"""

import pytest

import yamlcore
from yamlcore.emitter import EmitterError
from yamlcore.events import (
    StreamStartEvent, StreamEndEvent, DocumentStartEvent, DocumentEndEvent,
    SequenceStartEvent, SequenceEndEvent, MappingStartEvent, MappingEndEvent,
    ScalarEvent, AliasEvent,
)


# ── Helpers ──────────────────────────────────────────────────────────

def _document(*nodes, **document):
    """Wrap node events in a one-document stream."""
    return ([StreamStartEvent(), DocumentStartEvent(**document)]
            + list(nodes)
            + [DocumentEndEvent(), StreamEndEvent()])


def _scalar(value, tag=None, implicit=(True, True), style=None, anchor=None):
    return ScalarEvent(anchor, tag, implicit, value, style=style)


def _emit(*nodes, document=None, **options):
    """Emit one document; `document` holds DocumentStartEvent settings."""
    return yamlcore.emit(_document(*nodes, **(document or {})), **options)


# ── Layout ───────────────────────────────────────────────────────────

class TestLayout:

    def test_flow_mapping_of_scalars(self):
        """A mapping of plain scalars is written in flow style."""
        assert yamlcore.safe_dump({'a': 1}) == "{a: 1}\n"

    def test_nested_block(self):
        """Nested collections keep the outer one in block style."""
        assert yamlcore.safe_dump({'a': [1, 2]}) == "a: [1, 2]\n"

    def test_forced_block(self):
        """A block sequence under a key is not indented."""
        text = yamlcore.safe_dump({'a': [1, 2]}, default_flow_style=False)
        assert text == "a:\n- 1\n- 2\n"

    def test_indent(self):
        """Nested block mappings use the configured indent."""
        text = yamlcore.safe_dump({'a': {'b': 1}}, default_flow_style=False,
                                  indent=4)
        assert text == "a:\n    b: 1\n"

    def test_indicator_indent(self):
        """indicator_indent shifts the '-' of block sequence items."""
        text = yamlcore.safe_dump({'a': [1, 2]}, default_flow_style=False,
                                  indent=4, indicator_indent=2)
        assert text == "a:\n  - 1\n  - 2\n"

    def test_indent_with_indicator(self):
        """With indent_with_indicator the item content moves with the '-'."""
        text = yamlcore.safe_dump([{'x': 1, 'y': 2}], default_flow_style=False,
                                  indicator_indent=2, indent_with_indicator=True)
        assert text == "  - x: 1\n    y: 2\n"

    def test_sequence_of_mappings(self):
        """Mapping items start on the '-' line."""
        text = yamlcore.safe_dump([{'x': 1, 'y': 2}], default_flow_style=False)
        assert text == "- x: 1\n  y: 2\n"

    def test_indicator_indent_too_large(self):
        """indicator_indent must be smaller than indent."""
        with pytest.raises(ValueError) as exc_info:
            yamlcore.safe_dump([1], indicator_indent=2)
        assert "Indicator indent must be smaller then indent." in str(exc_info.value)

    def test_pretty_flow(self):
        """pretty_flow puts each flow entry on its own line."""
        text = yamlcore.safe_dump({'a': 1, 'b': 2}, pretty_flow=True)
        assert text == "{\n  a: 1,\n  b: 2\n}\n"

    def test_empty_collections_are_flow(self):
        """Empty collections are always written as [] and {}."""
        text = yamlcore.safe_dump({'a': [], 'b': {}}, default_flow_style=False)
        assert text == "a: []\nb: {}\n"

    def test_long_key(self):
        """Keys longer than max_simple_key_length use the '?' form."""
        text = yamlcore.safe_dump({'abcd': 1}, default_flow_style=False,
                                  max_simple_key_length=3)
        assert text == "? abcd\n: 1\n"

    def test_anchor_and_alias(self):
        """A shared collection is anchored once and aliased after."""
        shared = [1, 2]
        text = yamlcore.safe_dump({'x': shared, 'y': shared})
        assert text == "x: &id001 [1, 2]\ny: *id001\n"

    def test_line_break(self):
        """The configured line break is used throughout."""
        text = yamlcore.safe_dump({'a': 1, 'b': 2}, default_flow_style=False,
                                  line_break='\r\n')
        assert text == "a: 1\r\nb: 2\r\n"

    def test_width(self):
        """Long plain scalars are folded at the configured width."""
        data = {'k': ' '.join(['word'] * 30)}
        text = yamlcore.safe_dump(data, default_flow_style=False, width=40)
        lines = text.splitlines()
        assert len(lines) > 1
        assert max(len(line) for line in lines) <= 46
        assert yamlcore.safe_load(text) == data


# ── Scalar styles ────────────────────────────────────────────────────

class TestScalarStyles:

    def test_plain(self):
        """A plain root scalar leaves the document open-ended."""
        assert yamlcore.safe_dump('foo') == "foo\n...\n"

    @pytest.mark.parametrize('value, expected', [
        ('a: b', "'a: b'\n"),
        ('', "''\n"),
        ('#x', "'#x'\n"),
        ('yes', "'yes'\n"),
        ('123', "'123'\n"),
        ("'a", "'''a'\n"),
    ])
    def test_quoted_when_needed(self, value, expected):
        """Strings that would not read back as the same string are quoted."""
        assert yamlcore.safe_dump(value) == expected

    def test_inner_quote_stays_plain(self):
        """A quote inside the text does not force quoting."""
        assert yamlcore.safe_dump("it's") == "it's\n...\n"

    def test_null(self):
        """None is the plain null."""
        assert yamlcore.safe_dump(None) == "null\n...\n"

    @pytest.mark.parametrize('value, escape', [
        ('\x85', '\\N'),
        ('a\u2028b', '\\L'),
        ('\u2029', '\\P'),
    ])
    def test_unicode_breaks_escaped(self, value, escape):
        """NEL, LS and PS are written as double-quoted escapes."""
        text = yamlcore.safe_dump(value)
        assert text.startswith('"') and escape in text
        assert yamlcore.safe_load(text) == value

    def test_unicode_breaks_in_keys_and_items(self):
        """Keys and sequence items holding NEL load back unchanged."""
        data = {'k': ['\x85'], '\x85': 1}
        assert yamlcore.safe_load(yamlcore.safe_dump(data)) == data

    def test_literal(self):
        """Multiline strings are written as literals."""
        text = yamlcore.safe_dump({'t': 'line1\nline2'})
        assert text == "t: |-\n  line1\n  line2\n"

    def test_literal_clip(self):
        """A single trailing newline needs no chomping indicator."""
        assert yamlcore.safe_dump({'t': 'a\nb\n'}) == "t: |\n  a\n  b\n"

    def test_literal_keep(self):
        """Extra trailing newlines are kept and end the document."""
        assert yamlcore.safe_dump({'t': 'a\n\n'}) == "t: |+\n  a\n\n...\n"

    def test_folded(self):
        """A requested folded style is honoured."""
        assert _emit(_scalar('a b', style='>')) == ">-\n  a b\n"

    def test_double_quoted_request(self):
        """A requested double-quoted style is honoured."""
        assert _emit(_scalar('text', style='"')) == '"text"\n'

    def test_control_characters_escaped(self):
        """Control characters force double quotes and escapes."""
        assert _emit(_scalar('a\x07')) == '"a\\a"\n'

    def test_unicode_allowed(self):
        """Non-ASCII text is written as is by default."""
        assert yamlcore.safe_dump('caf\xe9') == "caf\xe9\n...\n"

    def test_unicode_escaped(self):
        """Without allow_unicode non-ASCII text is escaped."""
        assert yamlcore.safe_dump('caf\xe9', allow_unicode=False) == '"caf\\xE9"\n'

    def test_local_tag(self):
        """A non-implicit tag is written before a quoted value."""
        assert _emit(_scalar('v', tag='!custom', implicit=(False, False))) == \
            "!custom 'v'\n"

    def test_verbatim_tag(self):
        """A tag with no matching handle is written verbatim."""
        event = _scalar('v', tag='tag:example.com,2000:x', implicit=(False, False))
        assert _emit(event) == "!<tag:example.com,2000:x> 'v'\n"


# ── Documents ────────────────────────────────────────────────────────

class TestDocuments:

    def test_explicit_start(self):
        """explicit_start writes '---'."""
        assert yamlcore.safe_dump({'a': 1}, explicit_start=True) == "--- {a: 1}\n"

    def test_explicit_end(self):
        """explicit_end writes '...'."""
        assert yamlcore.safe_dump({'a': 1}, explicit_end=True) == "{a: 1}\n...\n"

    def test_version_directive(self):
        """A version adds a %YAML directive and forces '---'."""
        text = yamlcore.safe_dump({'a': 1}, version='1.1')
        assert text == "%YAML 1.1\n--- {a: 1}\n"

    def test_tag_directive(self):
        """Tag handles are written as %TAG directives."""
        text = yamlcore.safe_dump({'a': 1}, tags={'!e!': 'tag:example.com,2000:'})
        assert text == "%TAG !e! tag:example.com,2000:\n--- {a: 1}\n"

    def test_multiple_documents(self):
        """Documents after the first start with '---'."""
        assert yamlcore.safe_dump_all([1, 2]) == "1\n--- 2\n...\n"

    def test_canonical(self):
        """Canonical output tags and double-quotes every scalar."""
        text = yamlcore.safe_dump([1], canonical=True)
        assert text.startswith("---\n!!seq [")
        assert '!!int "1"' in text

    def test_encoding_gives_bytes(self):
        """With an encoding the result is bytes."""
        assert yamlcore.safe_dump({'a': 1}, encoding='utf-8') == b"{a: 1}\n"

    def test_event_stream(self):
        """emit() writes a hand-built event stream."""
        events = _document(
            MappingStartEvent(None, None, True, flow_style=False),
            _scalar('key'),
            SequenceStartEvent(None, None, True, flow_style=True),
            _scalar('x', anchor='a'),
            AliasEvent('a'),
            SequenceEndEvent(),
            MappingEndEvent(),
        )
        assert yamlcore.emit(events) == "key: [&a x, *a]\n"


# ── Errors ───────────────────────────────────────────────────────────

class TestEmitterErrors:

    def test_missing_stream_start(self):
        """The event stream must open with STREAM-START."""
        with pytest.raises(EmitterError) as exc_info:
            yamlcore.emit([DocumentStartEvent(), _scalar('x')])
        assert "expected StreamStartEvent" in str(exc_info.value)

    def test_alias_without_anchor(self):
        """An alias event needs an anchor name."""
        with pytest.raises(EmitterError) as exc_info:
            _emit(AliasEvent(None))
        assert "anchor is not specified for alias" in str(exc_info.value)

    def test_anchor_with_space(self):
        """Anchors may not contain spaces."""
        with pytest.raises(EmitterError) as exc_info:
            _emit(_scalar('x', anchor='a b'))
        assert "Anchor may not contain spaces" in str(exc_info.value)

    def test_unsupported_version(self):
        """Only YAML 1.x can be written."""
        with pytest.raises(EmitterError) as exc_info:
            _emit(_scalar('x'), document=dict(explicit=True, version=(2, 0)))
        assert "unsupported YAML version: 2.0" in str(exc_info.value)

    def test_document_event_version(self):
        """A version on the document event itself is written out."""
        text = _emit(_scalar('x'), document=dict(explicit=True, version=(1, 1)))
        assert text.startswith("%YAML 1.1\n---")

    def test_bad_tag_handle(self):
        """Tag handles must be wrapped in '!'."""
        with pytest.raises(EmitterError) as exc_info:
            _emit(_scalar('x'), document=dict(
                explicit=True, tags={'e': 'tag:example.com,2000:'}))
        assert "tag handle must start and end with '!'" in str(exc_info.value)
