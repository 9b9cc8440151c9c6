"""
Tests for implicit tag resolution.
"""

import re

import pytest

from yamlcore.nodes import Tag, ScalarNode, SequenceNode, MappingNode
from yamlcore.resolver import BaseResolver, Resolver, ResolverError


# ── Helpers ──────────────────────────────────────────────────────────

def _resolve(value, implicit=(True, False)):
    return Resolver().resolve(ScalarNode, value, implicit)


# ── Core schema ──────────────────────────────────────────────────────

class TestImplicitTags:

    @pytest.mark.parametrize('value', ['yes', 'No', 'TRUE', 'false', 'on', 'OFF'])
    def test_bool(self, value):
        """YAML 1.1 booleans include yes/no and on/off."""
        assert _resolve(value) == Tag.BOOL

    @pytest.mark.parametrize('value', ['0', '-17', '+3', '0x1F', '017',
                                       '0b101', '1_000', '1:30'])
    def test_int(self, value):
        """Decimal, hex, octal, binary and sexagesimal integers."""
        assert _resolve(value) == Tag.INT

    @pytest.mark.parametrize('value', ['1.5', '-0.5e3', '.5', '.inf', '-.Inf', '.NaN',
                                       '1:30.5'])
    def test_float(self, value):
        """Floats, infinities and NaN."""
        assert _resolve(value) == Tag.FLOAT

    @pytest.mark.parametrize('value', ['~', 'null', 'Null', 'NULL', ''])
    def test_null(self, value):
        """Null spellings and the empty scalar."""
        assert _resolve(value) == Tag.NULL

    @pytest.mark.parametrize('value', ['2001-12-14', '2001-12-14t21:59:43.10-05:00',
                                       '2001-12-14 21:59:43.10 -5'])
    def test_timestamp(self, value):
        """Dates and date-times."""
        assert _resolve(value) == Tag.TIMESTAMP

    def test_merge(self):
        """<< is the merge key."""
        assert _resolve('<<') == Tag.MERGE

    @pytest.mark.parametrize('value', ['hello', 'yes please', '1.2.3', 'nULL',
                                       '12:', '0x'])
    def test_string_fallback(self, value):
        """Anything else is a string."""
        assert _resolve(value) == Tag.STR

    def test_non_plain_is_string(self):
        """A quoted scalar is never implicitly typed."""
        assert _resolve('123', implicit=(False, True)) == Tag.STR

    def test_collections(self):
        """Collections resolve to the generic tags."""
        resolver = Resolver()
        assert resolver.resolve(SequenceNode, None, True) == Tag.SEQ
        assert resolver.resolve(MappingNode, None, True) == Tag.MAP

    def test_base_resolver_has_no_implicits(self):
        """BaseResolver types every scalar as a string."""
        assert BaseResolver().resolve(ScalarNode, '123', (True, False)) == Tag.STR


# ── Registration ─────────────────────────────────────────────────────

class TestRegistration:

    def test_subclass_isolation(self):
        """Registering on a subclass leaves the parent untouched."""
        class Custom(Resolver):
            pass
        Custom.add_implicit_resolver('!color', re.compile(r'^#[0-9a-f]{6}$'), ['#'])
        assert Custom().resolve(ScalarNode, '#00ff00', (True, False)) == '!color'
        assert _resolve('#00ff00') == Tag.STR

    def test_string_pattern(self):
        """A regexp may be given as a string."""
        class Custom(BaseResolver):
            pass
        Custom.add_implicit_resolver('!upper', r'^[A-Z]+$', None)
        assert Custom().resolve(ScalarNode, 'ABC', (True, False)) == '!upper'

    def test_nul_first_means_any(self):
        """'\\0' among the first characters registers a wildcard."""
        class Custom(BaseResolver):
            pass
        Custom.add_implicit_resolver('!any', r'^x.*$', ['\0'])
        assert Custom().resolve(ScalarNode, 'xyz', (True, False)) == '!any'

    def test_invalid_first(self):
        """first must be a string or a sequence of characters."""
        class Custom(BaseResolver):
            pass
        with pytest.raises(ResolverError):
            Custom.add_implicit_resolver('!bad', r'^x$', 5)

    def test_unknown_kind(self):
        """Only node classes can be resolved."""
        with pytest.raises(ResolverError):
            Resolver().resolve(object, 'x', (True, False))
