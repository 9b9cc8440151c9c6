"""
Tests for property discovery and type descriptions.
"""

import dataclasses
from typing import Any, ClassVar, Dict, List, Optional, Union

import pytest

from yamlcore.error import YAMLError
from yamlcore.introspector import (
    FieldProperty, MethodProperty, MissingProperty, PropertyUtils,
    TypeDescription, split_type_hint,
)


# ── Helpers ──────────────────────────────────────────────────────────

@dataclasses.dataclass
class Point:
    x: int
    y: int


class Annotated:
    count: int
    names: List[str]
    kind: ClassVar[str] = 'annotated'
    _private: int = 0


class Slotted:
    __slots__ = ('a', 'b')


class WithProperties:

    def __init__(self):
        self._size = 0

    @property
    def size(self) -> int:
        return self._size

    @size.setter
    def size(self, value):
        self._size = value

    @property
    def area(self) -> int:
        return self._size * self._size


class Empty:
    pass


# ── Type hints ───────────────────────────────────────────────────────

class TestSplitTypeHint:

    @pytest.mark.parametrize('hint, expected', [
        (int, (int, ())),
        (List[Point], (list, (Point,))),
        (Dict[str, int], (dict, (str, int))),
        (Optional[Point], (Point, ())),
        (Union[int, str], (object, ())),
        (Any, (object, ())),
        ('Point', (object, ())),
    ])
    def test_split(self, hint, expected):
        """Hints become a class and its type arguments."""
        assert split_type_hint(hint) == expected

    def test_nested_generic(self):
        """Nested arguments are reduced to their container class."""
        assert split_type_hint(List[List[int]]) == (list, (list,))


# ── Property discovery ───────────────────────────────────────────────

class TestPropertyUtils:

    def test_dataclass_fields(self):
        """Dataclass fields are properties in declaration order."""
        properties = PropertyUtils().get_properties_map(Point)
        assert list(properties) == ['x', 'y']
        assert properties['x'].type is int
        assert isinstance(properties['x'], FieldProperty)

    def test_annotations(self):
        """Annotated attributes are properties; ClassVar and private ones are not."""
        properties = PropertyUtils().get_properties_map(Annotated)
        assert list(properties) == ['count', 'names']
        assert properties['names'].type_arguments == (str,)

    def test_slots(self):
        """Slots are properties."""
        assert list(PropertyUtils().get_properties_map(Slotted)) == ['a', 'b']

    def test_python_properties(self):
        """Python properties use the getter's return hint."""
        properties = PropertyUtils().get_properties_map(WithProperties)
        assert isinstance(properties['size'], MethodProperty)
        assert properties['size'].type is int

    def test_read_only_skipped_for_dump(self):
        """Read-only properties are dumped only when allowed."""
        names = [p.name for p in PropertyUtils().get_properties(WithProperties)]
        assert names == ['size']
        utils = PropertyUtils(allow_read_only_properties=True)
        assert [p.name for p in utils.get_properties(WithProperties)] == \
            ['area', 'size']

    def test_property_get_set(self):
        """A MethodProperty reads and writes through the descriptor."""
        obj = WithProperties()
        prop = PropertyUtils().get_property(WithProperties, 'size')
        prop.set(obj, 3)
        assert prop.get(obj) == 3

    def test_unknown_property(self):
        """Unknown names are an error on a class with declarations."""
        with pytest.raises(YAMLError) as exc_info:
            PropertyUtils().get_property(Point, 'z')
        assert "Unable to find property 'z'" in str(exc_info.value)

    def test_skip_missing(self):
        """Skipping missing properties yields a no-op property."""
        prop = PropertyUtils(skip_missing_properties=True).get_property(Point, 'z')
        assert isinstance(prop, MissingProperty)
        point = Point(1, 2)
        prop.set(point, 5)
        assert point == Point(1, 2)

    def test_undeclared_class_accepts_any(self):
        """A class with nothing declared accepts any attribute."""
        prop = PropertyUtils().get_property(Empty, 'anything')
        obj = Empty()
        prop.set(obj, 1)
        assert obj.anything == 1

    def test_cache_reset_on_setting_change(self):
        """Changing a setting recomputes the readable properties."""
        utils = PropertyUtils()
        assert len(utils.get_properties(WithProperties)) == 1
        utils.set_allow_read_only_properties(True)
        assert len(utils.get_properties(WithProperties)) == 2


# ── Type descriptions ────────────────────────────────────────────────

class TestTypeDescription:

    def _description(self, cls=Point, **kwds):
        description = TypeDescription(cls, **kwds)
        description.set_property_utils(PropertyUtils())
        return description

    def test_properties_sorted(self):
        """Dumped properties come out sorted by name."""
        description = self._description(Annotated)
        assert [p.name for p in description.get_properties()] == ['count', 'names']

    def test_excludes(self):
        """Excluded properties are left out."""
        description = self._description()
        description.set_excludes('x')
        assert [p.name for p in description.get_properties()] == ['y']

    def test_includes_order(self):
        """Included properties keep the given order."""
        description = self._description()
        description.set_includes('y', 'x')
        assert [p.name for p in description.get_properties()] == ['y', 'x']

    def test_property_parameters(self):
        """Declared parameters override a property's type arguments."""
        description = self._description(Annotated)
        description.add_property_parameters('names', Point)
        assert description.get_property('names').type_arguments == (Point,)

    def test_impl_instance(self):
        """impl names the class to instantiate."""
        description = self._description(object, impl=Empty)
        assert isinstance(description.new_instance(None), Empty)

    def test_default_hooks(self):
        """The hooks do nothing by default."""
        description = self._description()
        assert description.new_instance(None) is None
        assert description.set_property(Point(0, 0), 'x', 1) is False
        assert description.setup_property_type('x', None) is False
