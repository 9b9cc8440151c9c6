"""Loader and dumper configuration.

Every pipeline stage reads its settings from one of these objects, handed
over when the loader or dumper is created.  Nothing here is global: two
engines with different options can run side by side.
"""

import re


class FlowStyle:
    """Collection layout.  Values are the ``flow_style`` node attribute."""
    FLOW = True
    BLOCK = False
    AUTO = None


class ScalarStyle:
    """Scalar quoting styles, spelled the way events and nodes carry them."""
    PLAIN = None
    SINGLE_QUOTED = "'"
    DOUBLE_QUOTED = '"'
    LITERAL = '|'
    FOLDED = '>'

    ALL = (PLAIN, '', SINGLE_QUOTED, DOUBLE_QUOTED, LITERAL, FOLDED)


class LineBreak:
    WIN = '\r\n'
    MAC = '\r'
    UNIX = '\n'

    ALL = (WIN, MAC, UNIX)


class NonPrintableStyle:
    """What the representer does with strings that cannot be printed."""
    BINARY = 'binary'
    ESCAPE = 'escape'


class LoaderOptions:
    """Settings consumed by the loading pipeline.

    Attributes:
        allow_duplicate_keys: keep the last value when a mapping repeats
            a key; off by default, so a repeated key raises DuplicateKeyError
        wrapped_to_root_exception: re-raise non-YAML errors from
            constructors as YAMLError
        max_aliases_for_collections: upper bound on aliases that point to
            sequences or mappings in one document
        allow_recursive_keys: allow a mapping key that refers back to one
            of its own ancestors (filled in after the document is built)
        process_comments: emit comment tokens/events and attach them to nodes
        enum_case_sensitive: match enum member names exactly
        max_simple_key_length: number of characters after which a pending
            implicit key candidate goes stale
    """

    def __init__(self, allow_duplicate_keys=False,
                 wrapped_to_root_exception=False,
                 max_aliases_for_collections=50,
                 allow_recursive_keys=False,
                 process_comments=False,
                 enum_case_sensitive=True,
                 max_simple_key_length=1024):
        self.allow_duplicate_keys = allow_duplicate_keys
        self.wrapped_to_root_exception = wrapped_to_root_exception
        self.max_aliases_for_collections = max_aliases_for_collections
        self.allow_recursive_keys = allow_recursive_keys
        self.process_comments = process_comments
        self.enum_case_sensitive = enum_case_sensitive
        self.max_simple_key_length = max_simple_key_length

    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, ', '.join(
            '%s=%r' % item for item in sorted(vars(self).items())))


class DumperOptions:
    """Settings consumed by the dumping pipeline.

    Validated settings are properties; the rest are plain attributes.
    Invalid values raise ValueError at assignment.
    """

    MAX_INDENT = 10
    MIN_INDENT = 1
    MAX_SIMPLE_KEY_LENGTH = 1024

    def __init__(self, **kwargs):
        self.default_style = ScalarStyle.PLAIN
        self.default_flow_style = FlowStyle.AUTO
        self.canonical = False
        self.allow_unicode = True
        self._indent = 2
        self._indicator_indent = 0
        self.indent_with_indicator = False
        self.width = 80
        self.split_lines = True
        self._line_break = LineBreak.UNIX
        self.explicit_start = False
        self.explicit_end = False
        self._max_simple_key_length = 128
        self.non_printable_style = NonPrintableStyle.BINARY
        self._version = None
        self.tags = None
        self.pretty_flow = False
        self.process_comments = False
        self.sort_keys = False
        self.anchor_template = 'id%03d'
        self.encoding = None
        for key, value in kwargs.items():
            if not hasattr(self, key):
                raise TypeError("unknown dumper option %r" % key)
            setattr(self, key, value)

    @classmethod
    def from_kwargs(cls, **kwargs):
        """Build options from dump() keyword arguments, ignoring None."""
        return cls(**{key: value for key, value in kwargs.items()
                      if value is not None})

    @property
    def indent(self):
        return self._indent

    @indent.setter
    def indent(self, value):
        if value < self.MIN_INDENT:
            raise ValueError("Indent must be at least %d" % self.MIN_INDENT)
        if value > self.MAX_INDENT:
            raise ValueError("Indent must be at most %d" % self.MAX_INDENT)
        self._indent = value

    @property
    def indicator_indent(self):
        return self._indicator_indent

    @indicator_indent.setter
    def indicator_indent(self, value):
        if value > self.MAX_INDENT - 1:
            raise ValueError("Indicator indent must be at most Emitter.MAX_INDENT-1: %d"
                             % (self.MAX_INDENT - 1))
        if value < 0:
            raise ValueError("Indicator indent must be non-negative.")
        self._indicator_indent = value

    @property
    def line_break(self):
        return self._line_break

    @line_break.setter
    def line_break(self, value):
        if value not in LineBreak.ALL:
            raise ValueError("unsupported line break %r" % (value,))
        self._line_break = value

    @property
    def max_simple_key_length(self):
        return self._max_simple_key_length

    @max_simple_key_length.setter
    def max_simple_key_length(self, value):
        if value > self.MAX_SIMPLE_KEY_LENGTH:
            raise ValueError("The simple key must not span more than %d stream characters. "
                             "See https://yaml.org/spec/1.1/#id934537"
                             % self.MAX_SIMPLE_KEY_LENGTH)
        self._max_simple_key_length = value

    @property
    def version(self):
        return self._version

    @version.setter
    def version(self, value):
        if isinstance(value, str):
            match = re.match(r'^(\d+)\.(\d+)$', value)
            if match is None:
                raise ValueError("invalid YAML version %r" % value)
            value = (int(match.group(1)), int(match.group(2)))
        elif value is not None:
            value = tuple(value)
        self._version = value

    def check(self):
        """Cross-field validation, run when a dumper is built."""
        if not self.indent_with_indicator and self.indent <= self.indicator_indent:
            raise ValueError("Indicator indent must be smaller then indent.")
        if self.default_style not in ScalarStyle.ALL:
            raise ValueError("unsupported scalar style %r" % (self.default_style,))
