"""Implicit tag resolution.

Untagged plain scalars are matched against the regular expressions
registered for their first character, then against those registered for
no particular character; the first full match wins.  Collections always
resolve to the generic ``!!seq`` and ``!!map`` tags.
"""

import re

from .error import YAMLError
from .nodes import Tag, ScalarNode, SequenceNode, MappingNode

__all__ = ['BaseResolver', 'Resolver', 'ResolverError',
           'BOOL', 'INT', 'FLOAT', 'NULL', 'EMPTY', 'MERGE', 'TIMESTAMP']


class ResolverError(YAMLError):
    pass


BOOL = re.compile(r'''^(?:yes|Yes|YES|no|No|NO
                    |true|True|TRUE|false|False|FALSE
                    |on|On|ON|off|Off|OFF)$''', re.X)

FLOAT = re.compile(r'''^(?:[-+]?(?:\.[0-9]+|[0-9_]+(?:\.[0-9_]*)?)(?:[eE][-+]?[0-9]+)?
                    |[-+]?[0-9][0-9_]*(?::[0-5]?[0-9])+\.[0-9_]*
                    |[-+]?\.(?:inf|Inf|INF)
                    |\.(?:nan|NaN|NAN))$''', re.X)

INT = re.compile(r'''^(?:[-+]?0b[0-1_]+
                    |[-+]?0[0-7_]+
                    |[-+]?(?:0|[1-9][0-9_]*)
                    |[-+]?0x[0-9a-fA-F_]+
                    |[-+]?[1-9][0-9_]*(?::[0-5]?[0-9])+)$''', re.X)

MERGE = re.compile(r'^(?:<<)$')

NULL = re.compile(r'^(?:~|null|Null|NULL| )$')

EMPTY = re.compile(r'^$')

TIMESTAMP = re.compile(r'''^(?:[0-9][0-9][0-9][0-9]-[0-9][0-9]-[0-9][0-9]
                    |[0-9][0-9][0-9][0-9]-[0-9][0-9]?-[0-9][0-9]?
                     (?:[Tt]|[ \t]+)[0-9][0-9]?
                     :[0-9][0-9]:[0-9][0-9](?:\.[0-9]*)?
                     (?:[ \t]*(?:Z|[-+][0-9][0-9]?(?::[0-9][0-9])?))?)$''', re.X)

YAML = re.compile(r'^(?:!|&|\*)$')


class BaseResolver:
    """Tag resolver without any implicit resolvers.

    ``yaml_implicit_resolvers`` maps a first character (or None for any
    character) to a list of (tag, regexp) pairs.  Registration copies the
    table into the class it is made on, so subclasses never change the
    tables of their parents.
    """

    yaml_implicit_resolvers = {}

    DEFAULT_SCALAR_TAG = Tag.STR
    DEFAULT_SEQUENCE_TAG = Tag.SEQ
    DEFAULT_MAPPING_TAG = Tag.MAP

    def __init__(self, options=None):
        pass

    @classmethod
    def add_implicit_resolver(cls, tag, regexp, first):
        """Register ``regexp`` for plain scalars starting with a character
        from ``first`` ('\\0' or None stands for any character)."""
        if 'yaml_implicit_resolvers' not in cls.__dict__:
            cls.yaml_implicit_resolvers = {
                key: list(value)
                for key, value in cls.yaml_implicit_resolvers.items()}
        if isinstance(regexp, str):
            regexp = re.compile(regexp)
        if first is None:
            first = [None]
        elif not isinstance(first, (str, list, tuple)):
            raise ResolverError("Invalid first characters: %r" % (first,))
        for ch in first:
            if ch == '\0':
                ch = None
            cls.yaml_implicit_resolvers.setdefault(ch, []).append((tag, regexp))

    def resolve(self, kind, value, implicit):
        if kind is ScalarNode and implicit[0]:
            if value:
                resolvers = self.yaml_implicit_resolvers.get(value[0], [])
            else:
                resolvers = []
            wildcard_resolvers = self.yaml_implicit_resolvers.get(None, [])
            for tag, regexp in resolvers + wildcard_resolvers:
                if regexp.fullmatch(value):
                    return tag
        if kind is ScalarNode:
            return self.DEFAULT_SCALAR_TAG
        elif kind is SequenceNode:
            return self.DEFAULT_SEQUENCE_TAG
        elif kind is MappingNode:
            return self.DEFAULT_MAPPING_TAG
        raise ResolverError("Unknown node kind: %r" % (kind,))


class Resolver(BaseResolver):
    """Resolver for the YAML 1.1 core types."""
    pass


Resolver.add_implicit_resolver(Tag.BOOL, BOOL, list('yYnNtTfFoO'))

Resolver.add_implicit_resolver(Tag.INT, INT, list('-+0123456789'))

Resolver.add_implicit_resolver(Tag.FLOAT, FLOAT, list('-+0123456789.'))

Resolver.add_implicit_resolver(Tag.MERGE, MERGE, ['<'])

Resolver.add_implicit_resolver(Tag.NULL, NULL, ['~', 'n', 'N', '\0'])

Resolver.add_implicit_resolver(Tag.NULL, EMPTY, None)

Resolver.add_implicit_resolver(Tag.TIMESTAMP, TIMESTAMP, list('0123456789'))

# The yaml type: plain scalars that would read as node properties.
Resolver.add_implicit_resolver(Tag.YAML, YAML, ['!', '&', '*'])
