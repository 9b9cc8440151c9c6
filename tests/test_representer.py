"""
Tests for the representer: how Python objects become nodes.
"""

import dataclasses
import datetime
import enum
from typing import List

import pytest

import yamlcore
from yamlcore.introspector import TypeDescription
from yamlcore.nodes import Tag, ScalarNode, SequenceNode, MappingNode
from yamlcore.options import DumperOptions, FlowStyle, NonPrintableStyle
from yamlcore.representer import RepresenterError


# ── Helpers ──────────────────────────────────────────────────────────

class Shade(enum.Enum):
    LIGHT = 1
    DARK = 2


@dataclasses.dataclass
class Point:
    x: int
    y: int


@dataclasses.dataclass
class Shape:
    name: str
    points: List[Point]
    shade: Shade
    origin: Point


class Loose:
    def __init__(self):
        self.b = 2
        self.a = 1
        self._hidden = 3


def _safe(data, **options):
    """Represent ``data`` with the safe dumper."""
    dumper = yamlcore.SafeDumper(None, DumperOptions(**options))
    return dumper.represent_root(data)


def _full(data, engine=None):
    """Represent ``data`` with the full dumper."""
    return (engine or yamlcore.YAML()).represent(data)


def _pairs(node):
    return [(key.value, value) for key, value in node.value]


# ── Scalars ──────────────────────────────────────────────────────────

class TestScalars:

    @pytest.mark.parametrize('data, tag, value', [
        (None, Tag.NULL, 'null'),
        (True, Tag.BOOL, 'true'),
        (False, Tag.BOOL, 'false'),
        (17, Tag.INT, '17'),
        (1.5, Tag.FLOAT, '1.5'),
        (1e17, Tag.FLOAT, '1.0e+17'),
        (float('inf'), Tag.FLOAT, '.inf'),
        (float('-inf'), Tag.FLOAT, '-.inf'),
        (float('nan'), Tag.FLOAT, '.nan'),
        ('text', Tag.STR, 'text'),
        (datetime.date(2002, 12, 14), Tag.TIMESTAMP, '2002-12-14'),
        (datetime.datetime(2001, 12, 14, 21, 59, 43), Tag.TIMESTAMP,
         '2001-12-14 21:59:43'),
    ])
    def test_standard_scalars(self, data, tag, value):
        """Standard scalars get their canonical text and tag."""
        node = _safe(data)
        assert isinstance(node, ScalarNode)
        assert (node.tag, node.value) == (tag, value)

    def test_multiline_string_literal(self):
        """Strings with line breaks are represented as literals."""
        node = _safe('line1\nline2')
        assert node.style == '|'

    def test_bytes_binary(self):
        """bytes become base64 !!binary."""
        node = _safe(b'hello')
        assert node.tag == Tag.BINARY
        assert node.value.strip() == 'aGVsbG8='

    def test_non_printable_binary(self):
        """Unprintable strings fall back to !!binary by default."""
        node = _safe('bell\x07')
        assert node.tag == Tag.BINARY

    def test_non_printable_escape(self):
        """With the escape style they stay strings."""
        node = _safe('bell\x07', non_printable_style=NonPrintableStyle.ESCAPE)
        assert node.tag == Tag.STR
        assert node.value == 'bell\x07'

    def test_default_style(self):
        """default_style applies to every scalar."""
        node = _safe('text', default_style='"')
        assert node.style == '"'

    def test_enum_safe(self):
        """An enum is its member name under a class tag."""
        node = _safe(Shade.DARK)
        assert node.value == 'DARK'
        assert node.tag == Tag.for_class(Shade)


# ── Collections ──────────────────────────────────────────────────────

class TestCollections:

    def test_list_of_scalars_is_flow(self):
        """With AUTO flow style, plain-scalar lists go flow."""
        node = _safe([1, 2])
        assert isinstance(node, SequenceNode)
        assert node.flow_style is True

    def test_nested_is_block(self):
        """A collection holding collections stays block."""
        node = _safe({'a': [1, 2]})
        assert node.flow_style is False
        assert _pairs(node)[0][1].flow_style is True

    def test_forced_block(self):
        """default_flow_style overrides the automatic choice."""
        node = _safe([1, 2], default_flow_style=FlowStyle.BLOCK)
        assert node.flow_style is False

    def test_insertion_order(self):
        """Keys keep dict order by default."""
        node = _safe({'b': 1, 'a': 2})
        assert [key for key, _ in _pairs(node)] == ['b', 'a']

    def test_sort_keys(self):
        """sort_keys orders mapping keys."""
        node = _safe({'b': 1, 'a': 2}, sort_keys=True)
        assert [key for key, _ in _pairs(node)] == ['a', 'b']

    def test_set(self):
        """A set is a !!set mapping with null values."""
        node = _safe({'x'})
        assert node.tag == Tag.SET
        assert _pairs(node)[0][1].tag == Tag.NULL

    def test_tuple_is_sequence(self):
        """Tuples are represented like lists."""
        assert _safe((1, 2)).tag == Tag.SEQ

    def test_shared_object_one_node(self):
        """An object met twice is one node."""
        shared = [1]
        node = _safe({'a': shared, 'b': shared})
        pairs = _pairs(node)
        assert pairs[0][1] is pairs[1][1]

    def test_equal_scalars_not_shared(self):
        """Scalars are never aliased."""
        node = _safe(['abc', 'abc'])
        assert node.value[0] is not node.value[1]

    def test_recursive_list(self):
        """A list containing itself refers to its own node."""
        data = []
        data.append(data)
        node = _safe(data)
        assert node.value[0] is node

    def test_unknown_object_safe(self):
        """The safe dumper refuses arbitrary objects."""
        with pytest.raises(RepresenterError):
            _safe(Loose())


# ── Objects ──────────────────────────────────────────────────────────

class TestObjects:

    def test_dataclass(self):
        """A dataclass is a mapping of its fields under a class tag."""
        node = _full(Point(1, 2))
        assert isinstance(node, MappingNode)
        assert node.tag == Tag.for_class(Point)
        assert [(k, v.value) for k, v in _pairs(node)] == [('x', '1'), ('y', '2')]

    def test_plain_object_attributes(self):
        """Without declarations, public attributes are dumped sorted."""
        node = _full(Loose())
        assert [key for key, _ in _pairs(node)] == ['a', 'b']

    def test_described_tag(self):
        """A TypeDescription tag replaces the class tag."""
        engine = yamlcore.YAML(type_descriptions=[TypeDescription(Point, '!point')])
        assert _full(Point(0, 0), engine).tag == '!point'

    def test_description_excludes(self):
        """Excluded properties are not dumped."""
        description = TypeDescription(Point)
        description.set_excludes('y')
        engine = yamlcore.YAML(type_descriptions=[description])
        assert [key for key, _ in _pairs(_full(Point(0, 0), engine))] == ['x']

    def test_inferable_tags_dropped(self):
        """Tags implied by declared property types are not written."""
        shape = Shape('tri', [Point(0, 0)], Shade.LIGHT, Point(1, 1))
        items = dict(_pairs(_full(shape)))
        assert items['origin'].tag == Tag.MAP
        assert items['shade'].tag == Tag.STR
        assert items['points'].value[0].tag == Tag.MAP

    def test_properties_sorted(self):
        """Properties are dumped in name order."""
        shape = Shape('tri', [], Shade.LIGHT, Point(1, 1))
        assert [key for key, _ in _pairs(_full(shape))] == \
            ['name', 'origin', 'points', 'shade']
