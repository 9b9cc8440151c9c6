"""Node classes: the representation graph shared by loading and dumping.

Nodes are compared by identity.  Besides the tag, the value and the marks,
every node carries:

    anchor                  - the anchor it was composed with, if any
    type                    - the Python class it should be constructed as
    resolved                - True when the tag came from the resolver
    two_steps_construction  - the node is (part of) a recursive structure
    block_comments, in_line_comments, end_comments - lists of CommentLine
"""

import datetime


class Tag:
    """Standard tag names and helpers for class tags."""

    PREFIX = 'tag:yaml.org,2002:'
    CLASS_PREFIX = PREFIX + 'python/object:'

    YAML = PREFIX + 'yaml'
    MERGE = PREFIX + 'merge'
    SET = PREFIX + 'set'
    PAIRS = PREFIX + 'pairs'
    OMAP = PREFIX + 'omap'
    BINARY = PREFIX + 'binary'
    INT = PREFIX + 'int'
    FLOAT = PREFIX + 'float'
    TIMESTAMP = PREFIX + 'timestamp'
    BOOL = PREFIX + 'bool'
    NULL = PREFIX + 'null'
    STR = PREFIX + 'str'
    SEQ = PREFIX + 'seq'
    MAP = PREFIX + 'map'
    COMMENT = PREFIX + 'comment'

    # Python types a standard scalar tag may be constructed as directly.
    COMPATIBILITY = {
        INT: (int,),
        FLOAT: (float, int),
        BOOL: (bool,),
        STR: (str,),
        TIMESTAMP: (datetime.datetime, datetime.date),
        BINARY: (bytes, str),
    }

    @classmethod
    def for_class(cls, klass):
        return '%s%s.%s' % (cls.CLASS_PREFIX, klass.__module__,
                            klass.__qualname__)

    @classmethod
    def is_standard(cls, tag):
        return tag is not None and tag.startswith(cls.PREFIX)

    @classmethod
    def is_compatible(cls, tag, klass):
        compatible = cls.COMPATIBILITY.get(tag)
        if compatible is not None:
            return issubclass(klass, compatible)
        return tag == cls.for_class(klass)


class Node:
    """Base class for YAML nodes."""

    def __init__(self, tag, value, start_mark=None, end_mark=None):
        self.tag = tag
        self.value = value
        self.start_mark = start_mark
        self.end_mark = end_mark
        self.anchor = None
        self.type = object
        self.resolved = True
        self.two_steps_construction = False
        self.block_comments = None
        self.in_line_comments = None
        self.end_comments = None

    def use_class_constructor(self):
        """Whether ``type`` should decide how this node is constructed."""
        if self.type is object or self.type is None:
            return False
        if Tag.is_standard(self.tag) and self.resolved \
                and self.tag != Tag.NULL:
            return True
        return Tag.is_compatible(self.tag, self.type)

    def __repr__(self):
        value = self.value
        if isinstance(value, list):
            if len(value) == 0:
                value = '<empty>'
            elif len(value) == 1:
                value = '<1 item>'
            else:
                value = '<%d items>' % len(value)
        else:
            if len(value) > 75:
                value = repr(value[:70] + ' ... ')
            else:
                value = repr(value)
        return '%s(tag=%r, value=%s)' % (self.__class__.__name__,
                                         self.tag, value)


class ScalarNode(Node):
    """Scalar node (strings, numbers, etc.)."""
    id = 'scalar'

    def __init__(self, tag, value, start_mark=None, end_mark=None,
                 style=None):
        super().__init__(tag, value, start_mark, end_mark)
        self.style = style


class CollectionNode(Node):
    """Base class for collection nodes."""

    def __init__(self, tag, value, start_mark=None, end_mark=None,
                 flow_style=None):
        super().__init__(tag, value, start_mark, end_mark)
        self.flow_style = flow_style


class SequenceNode(CollectionNode):
    """Sequence node (lists/arrays)."""
    id = 'sequence'


class MappingNode(CollectionNode):
    """Mapping node (dicts/objects).

    ``value`` is a list of (key_node, value_node) pairs.  ``merged`` is set
    by the composer when one of the keys is the merge key ``<<``.
    """
    id = 'mapping'

    def __init__(self, tag, value, start_mark=None, end_mark=None,
                 flow_style=None):
        super().__init__(tag, value, start_mark, end_mark, flow_style)
        self.merged = False
