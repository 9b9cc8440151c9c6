"""Constructor: turns node graphs into Python objects.

Collections are built by generators that yield the empty container first
and fill it afterwards, so a document may refer to a container while it is
still being filled.  Keys that refer back to an unfinished object are
filled in after the whole document is built.
"""

import base64
import binascii
import datetime
import decimal
import enum
import importlib
import inspect
import logging
import re
import types
import warnings

from .error import YAMLError, MarkedYAMLError
from .introspector import PropertyUtils, split_type_hint
from .options import LoaderOptions
from .nodes import Tag, ScalarNode, SequenceNode, MappingNode

__all__ = ['BaseConstructor', 'SafeConstructor', 'Constructor',
           'ConstructorError', 'DuplicateKeyError', 'YAMLLoadWarning']

logger = logging.getLogger(__name__)


class ConstructorError(MarkedYAMLError):
    """YAML constructor error."""
    pass


class DuplicateKeyError(ConstructorError):
    """A mapping defines the same key twice."""

    def __init__(self, context_mark, key, problem_mark):
        super().__init__("while constructing a mapping", context_mark,
                         "found duplicate key %s" % (key,), problem_mark)
        self.key = key


class YAMLLoadWarning(UserWarning):
    pass


class BaseConstructor:
    """Base class for YAML constructors with full construct_object support."""

    yaml_constructors = {}
    yaml_multi_constructors = {}
    yaml_class_constructors = {}
    yaml_type_descriptions = {}
    yaml_property_utils = None

    def __init__(self, options=None):
        if options is None:
            options = LoaderOptions()
        self.allow_duplicate_keys = options.allow_duplicate_keys
        self.allow_recursive_keys = options.allow_recursive_keys
        self.wrapped_to_root_exception = options.wrapped_to_root_exception
        self.enum_case_sensitive = options.enum_case_sensitive
        self.constructed_objects = {}
        self.recursive_objects = {}
        self.state_generators = []
        self.deferred_fills = []
        self.deep_construct = False
        self.property_utils = self.yaml_property_utils or PropertyUtils()
        self.type_definitions = {}
        self.type_tags = {}
        for description in self.yaml_type_descriptions.values():
            self.add_type_description(description)

    def add_type_description(self, description):
        if description.property_utils is None:
            description.set_property_utils(self.property_utils)
        self.type_definitions[description.type] = description
        if description.tag is not None:
            self.type_tags[description.tag] = description.type

    def check_data(self):
        """Check if there is more data to construct."""
        return self.check_node()

    def get_data(self):
        """Construct and return the next document."""
        if self.check_node():
            return self.construct_document(self.get_node())

    def get_single_data(self, cls=object):
        """Construct and return a single document, optionally as ``cls``."""
        node = self.get_single_node()
        if node is None or node.tag == Tag.NULL:
            return None
        if cls is not object:
            cls, type_arguments = split_type_hint(cls)
            node.type = cls
            if not node.use_class_constructor():
                node.tag = Tag.for_class(cls)
            self.apply_type_arguments(node, type_arguments)
        return self.construct_document(node)

    def construct_document(self, node):
        """Construct a Python object from a root node."""
        if node.tag == Tag.COMMENT:
            return None
        try:
            data = self.construct_object(node)
            # Run any pending generators, then the postponed fills.
            while self.state_generators or self.deferred_fills:
                state_generators = self.state_generators
                self.state_generators = []
                for generator in state_generators:
                    for dummy in generator:
                        pass
                self.fill_recursive()
        except YAMLError:
            raise
        except Exception as exc:
            if self.wrapped_to_root_exception:
                raise YAMLError(str(exc)) from exc
            raise
        finally:
            self.constructed_objects = {}
            self.recursive_objects = {}
            self.state_generators = []
            self.deferred_fills = []
            self.deep_construct = False
        return data

    def fill_recursive(self):
        deferred_fills = self.deferred_fills
        self.deferred_fills = []
        for container, node, key_node, value_node in deferred_fills:
            if value_node is None:
                container.add(self.construct_key(
                    node, key_node, "while constructing a set"))
            else:
                key = self.construct_key(node, key_node)
                container[key] = self.construct_object(value_node, deep=True)

    def postpone_fill(self, container, node, key_node, value_node=None):
        logger.debug("postponing recursive key at %s", key_node.start_mark)
        self.deferred_fills.append((container, node, key_node, value_node))

    def construct_object(self, node, deep=False):
        """Construct a Python object from a node, dispatching by tag."""
        if node in self.constructed_objects:
            return self.constructed_objects[node]
        if deep:
            old_deep = self.deep_construct
            self.deep_construct = True
        if node in self.recursive_objects:
            raise ConstructorError(None, None,
                "found unconstructable recursive node", node.start_mark)
        self.recursive_objects[node] = None
        constructor = None
        tag_suffix = None
        if node.use_class_constructor():
            constructor = self.yaml_class_constructors.get(node.id)
        if constructor is not None:
            pass
        elif node.tag in self.yaml_constructors:
            constructor = self.yaml_constructors[node.tag]
        else:
            for tag_prefix in self.yaml_multi_constructors:
                if tag_prefix is not None and node.tag.startswith(tag_prefix):
                    tag_suffix = node.tag[len(tag_prefix):]
                    constructor = self.yaml_multi_constructors[tag_prefix]
                    break
            else:
                if None in self.yaml_multi_constructors:
                    tag_suffix = node.tag
                    constructor = self.yaml_multi_constructors[None]
                elif None in self.yaml_constructors:
                    constructor = self.yaml_constructors[None]
                elif isinstance(node, ScalarNode):
                    constructor = self.__class__.construct_scalar
                elif isinstance(node, SequenceNode):
                    constructor = self.__class__.construct_sequence
                elif isinstance(node, MappingNode):
                    constructor = self.__class__.construct_mapping
        if tag_suffix is None:
            data = constructor(self, node)
        else:
            data = constructor(self, tag_suffix, node)
        if isinstance(data, types.GeneratorType):
            generator = data
            data = next(generator)
            self.constructed_objects[node] = data
            if self.deep_construct:
                for dummy in generator:
                    pass
            else:
                self.state_generators.append(generator)
        else:
            data = self.finalize_construction(node, data)
            self.constructed_objects[node] = data
        del self.recursive_objects[node]
        if deep:
            self.deep_construct = old_deep
        return data

    def finalize_construction(self, node, data):
        description = self.type_definitions.get(node.type)
        if description is not None:
            return description.finalize_construction(data)
        return data

    def construct_scalar(self, node):
        """Construct a scalar value from a node."""
        if not isinstance(node, ScalarNode):
            raise ConstructorError(None, None,
                    "expected a scalar node, but found %s" % node.id,
                    node.start_mark)
        return node.value

    def construct_sequence(self, node, deep=False):
        """Construct a sequence from a node."""
        if not isinstance(node, SequenceNode):
            raise ConstructorError(None, None,
                    "expected a sequence node, but found %s" % node.id,
                    node.start_mark)
        return [self.construct_object(child, deep=deep)
                for child in node.value]

    def construct_mapping(self, node, deep=False):
        """Construct a mapping from a node."""
        if not isinstance(node, MappingNode):
            raise ConstructorError(None, None,
                    "expected a mapping node, but found %s" % node.id,
                    node.start_mark)
        mapping = {}
        self.fill_mapping(node, mapping, deep=deep)
        return mapping

    def construct_pairs(self, node, deep=False):
        """Construct a list of (key, value) pairs from a mapping node."""
        if not isinstance(node, MappingNode):
            raise ConstructorError(None, None,
                    "expected a mapping node, but found %s" % node.id,
                    node.start_mark)
        pairs = []
        for key_node, value_node in node.value:
            key = self.construct_object(key_node, deep=deep)
            value = self.construct_object(value_node, deep=deep)
            pairs.append((key, value))
        return pairs

    def construct_key(self, node, key_node, context="while constructing a mapping"):
        key = self.construct_object(key_node, deep=True)
        try:
            hash(key)
        except TypeError as exc:
            raise ConstructorError(context, node.start_mark,
                    "found unhashable key", key_node.start_mark) from exc
        return key

    def flatten_mapping(self, node):
        self.process_duplicate_keys(node)

    def process_duplicate_keys(self, node):
        """Drop (or reject) keys defined more than once in ``node`` itself."""
        seen = {}
        duplicates = []
        for index, (key_node, value_node) in enumerate(node.value):
            if key_node.tag == Tag.MERGE or key_node.two_steps_construction:
                continue
            key = self.construct_key(node, key_node)
            if key in seen:
                if not self.allow_duplicate_keys:
                    raise DuplicateKeyError(node.start_mark, key,
                                            key_node.start_mark)
                logger.debug("dropping duplicate key %r at %s",
                             key, key_node.start_mark)
                duplicates.append(seen[key])
            seen[key] = index
        for index in sorted(duplicates, reverse=True):
            del node.value[index]

    def fill_mapping(self, node, mapping, deep=False):
        self.flatten_mapping(node)
        for key_node, value_node in node.value:
            if key_node.two_steps_construction:
                if not self.allow_recursive_keys:
                    raise ConstructorError("while constructing a mapping",
                            node.start_mark,
                            "Recursive key for mapping is detected but it "
                            "is not configured to be allowed.",
                            key_node.start_mark)
                self.postpone_fill(mapping, node, key_node, value_node)
                continue
            key = self.construct_key(node, key_node)
            mapping[key] = self.construct_object(value_node, deep=deep)

    def fill_set(self, node, data):
        self.flatten_mapping(node)
        for key_node, value_node in node.value:
            if key_node.two_steps_construction:
                self.postpone_fill(data, node, key_node)
                continue
            data.add(self.construct_key(node, key_node,
                                        "while constructing a set"))

    def apply_type_arguments(self, node, type_arguments):
        """Pass declared item types (``List[X]``, ``Dict[K, V]``) on to
        the child nodes that carry no type of their own."""
        if not type_arguments:
            return
        if isinstance(node, SequenceNode):
            if node.type is tuple and len(type_arguments) == len(node.value):
                item_types = type_arguments
            else:
                item_types = [type_arguments[0]] * len(node.value)
            for child, item_type in zip(node.value, item_types):
                if child.type is object:
                    child.type = item_type
        elif isinstance(node, MappingNode) and isinstance(node.type, type):
            if issubclass(node.type, (set, frozenset)):
                for key_node, value_node in node.value:
                    if key_node.type is object:
                        key_node.type = type_arguments[0]
            elif issubclass(node.type, dict) and len(type_arguments) == 2:
                key_type, value_type = type_arguments
                for key_node, value_node in node.value:
                    if key_node.type is object:
                        key_node.type = key_type
                    if value_node.type is object:
                        value_node.type = value_type

    @classmethod
    def add_constructor(cls, tag, constructor):
        """Add a constructor for a specific tag."""
        if 'yaml_constructors' not in cls.__dict__:
            cls.yaml_constructors = cls.yaml_constructors.copy()
        cls.yaml_constructors[tag] = constructor

    @classmethod
    def add_multi_constructor(cls, tag_prefix, multi_constructor):
        """Add a multi-constructor for a tag prefix."""
        if 'yaml_multi_constructors' not in cls.__dict__:
            cls.yaml_multi_constructors = cls.yaml_multi_constructors.copy()
        cls.yaml_multi_constructors[tag_prefix] = multi_constructor

    @classmethod
    def add_class_constructor(cls, node_id, constructor):
        """Add the constructor used for typed nodes of kind ``node_id``."""
        if 'yaml_class_constructors' not in cls.__dict__:
            cls.yaml_class_constructors = cls.yaml_class_constructors.copy()
        cls.yaml_class_constructors[node_id] = constructor

    @classmethod
    def add_type_description_class(cls, description):
        """Register a TypeDescription for every instance of this class."""
        if 'yaml_type_descriptions' not in cls.__dict__:
            cls.yaml_type_descriptions = cls.yaml_type_descriptions.copy()
        cls.yaml_type_descriptions[description.type] = description


class SafeConstructor(BaseConstructor):
    """Safe constructor that doesn't allow arbitrary Python objects."""

    def flatten_mapping(self, node):
        self.process_duplicate_keys(node)
        if node.merged:
            node.value = self.merge_node(node, True, {}, [])

    def merge_node(self, node, preferred, key_to_index, values):
        """Collect the pairs of ``node`` and of everything merged into it.

        Keys of ``node`` itself replace merged ones; among merged mappings
        the first occurrence of a key wins.
        """
        for key_node, value_node in node.value:
            if key_node.tag == Tag.MERGE:
                if isinstance(value_node, MappingNode):
                    self.merge_node(value_node, False, key_to_index, values)
                elif isinstance(value_node, SequenceNode):
                    for subnode in value_node.value:
                        if not isinstance(subnode, MappingNode):
                            raise ConstructorError(
                                "while constructing a mapping",
                                node.start_mark,
                                "expected a mapping for merging, but found %s"
                                % subnode.id, subnode.start_mark)
                        self.merge_node(subnode, False, key_to_index, values)
                else:
                    raise ConstructorError("while constructing a mapping",
                            node.start_mark,
                            "expected a mapping or list of mappings for "
                            "merging, but found %s" % value_node.id,
                            value_node.start_mark)
            else:
                key = self.construct_key(node, key_node)
                if key not in key_to_index:
                    values.append((key_node, value_node))
                    key_to_index[key] = len(values) - 1
                elif preferred:
                    values[key_to_index[key]] = (key_node, value_node)
        return values

    def construct_yaml_null(self, node):
        self.construct_scalar(node)
        return None

    bool_values = {
        'yes':      True,
        'no':       False,
        'true':     True,
        'false':    False,
        'on':       True,
        'off':      False,
    }

    def construct_yaml_bool(self, node):
        value = self.construct_scalar(node)
        try:
            return self.bool_values[value.lower()]
        except KeyError:
            raise ConstructorError(None, None,
                    "invalid boolean value %r" % value,
                    node.start_mark) from None

    def construct_yaml_int(self, node):
        value = self.construct_scalar(node)
        value = value.replace('_', '')
        sign = +1
        if value[0] == '-':
            sign = -1
        if value[0] in '+-':
            value = value[1:]
        if value == '0':
            return 0
        elif value.startswith('0b'):
            return sign * int(value[2:], 2)
        elif value.startswith('0x'):
            return sign * int(value[2:], 16)
        elif value[0] == '0':
            return sign * int(value, 8)
        elif ':' in value:
            digits = [int(part) for part in value.split(':')]
            digits.reverse()
            base = 1
            value = 0
            for digit in digits:
                value += digit * base
                base *= 60
            return sign * value
        else:
            return sign * int(value)

    inf_value = float('inf')
    nan_value = float('nan')

    def construct_yaml_float(self, node):
        value = self.construct_scalar(node)
        value = value.replace('_', '').lower()
        sign = +1
        if value[0] == '-':
            sign = -1
        if value[0] in '+-':
            value = value[1:]
        if value == '.inf':
            return sign * self.inf_value
        elif value == '.nan':
            return self.nan_value
        elif ':' in value:
            digits = [float(part) for part in value.split(':')]
            digits.reverse()
            base = 1
            value = 0.0
            for digit in digits:
                value += digit * base
                base *= 60
            return sign * value
        else:
            return sign * float(value)

    def construct_yaml_binary(self, node):
        try:
            value = self.construct_scalar(node).encode('ascii')
        except UnicodeEncodeError as exc:
            raise ConstructorError(None, None,
                    "failed to convert base64 data into ascii: %s" % exc,
                    node.start_mark) from exc
        try:
            return base64.decodebytes(value)
        except binascii.Error as exc:
            raise ConstructorError(None, None,
                    "failed to decode base64 data: %s" % exc,
                    node.start_mark) from exc

    timestamp_regexp = re.compile(
            r'''^(?P<year>[0-9][0-9][0-9][0-9])
                -(?P<month>[0-9][0-9]?)
                -(?P<day>[0-9][0-9]?)
                (?:(?:[Tt]|[ \t]+)
                (?P<hour>[0-9][0-9]?)
                :(?P<minute>[0-9][0-9])
                :(?P<second>[0-9][0-9])
                (?:\.(?P<fraction>[0-9]*))?
                (?:[ \t]*(?P<tz>Z|(?P<tz_sign>[-+])(?P<tz_hour>[0-9][0-9]?)
                (?::(?P<tz_minute>[0-9][0-9]))?))?)?$''', re.X)

    def construct_yaml_timestamp(self, node):
        value = self.construct_scalar(node)
        match = self.timestamp_regexp.match(value)
        if match is None:
            raise ConstructorError(None, None,
                    "invalid timestamp %r" % value, node.start_mark)
        values = match.groupdict()
        year = int(values['year'])
        month = int(values['month'])
        day = int(values['day'])
        if not values['hour']:
            return datetime.date(year, month, day)
        hour = int(values['hour'])
        minute = int(values['minute'])
        second = int(values['second'])
        fraction = 0
        tzinfo = None
        if values['fraction']:
            fraction = values['fraction'][:6]
            while len(fraction) < 6:
                fraction += '0'
            fraction = int(fraction)
        if values['tz_sign']:
            tz_hour = int(values['tz_hour'])
            tz_minute = int(values['tz_minute'] or 0)
            delta = datetime.timedelta(hours=tz_hour, minutes=tz_minute)
            if values['tz_sign'] == '-':
                delta = -delta
            tzinfo = datetime.timezone(delta)
        elif values['tz']:
            tzinfo = datetime.timezone.utc
        return datetime.datetime(year, month, day, hour, minute, second,
                                 fraction, tzinfo=tzinfo)

    def construct_yaml_omap(self, node):
        # Note: we do not check for duplicate keys, because it's too
        # CPU-expensive.
        omap = []
        yield omap
        if not isinstance(node, SequenceNode):
            raise ConstructorError("while constructing an ordered map",
                    node.start_mark,
                    "expected a sequence, but found %s" % node.id,
                    node.start_mark)
        for subnode in node.value:
            if not isinstance(subnode, MappingNode):
                raise ConstructorError("while constructing an ordered map",
                        node.start_mark,
                        "expected a mapping of length 1, but found %s"
                        % subnode.id, subnode.start_mark)
            if len(subnode.value) != 1:
                raise ConstructorError("while constructing an ordered map",
                        node.start_mark,
                        "expected a single mapping item, but found %d items"
                        % len(subnode.value), subnode.start_mark)
            key_node, value_node = subnode.value[0]
            key = self.construct_object(key_node)
            value = self.construct_object(value_node)
            omap.append((key, value))

    def construct_yaml_pairs(self, node):
        # Note: the same code as `construct_yaml_omap`.
        pairs = []
        yield pairs
        if not isinstance(node, SequenceNode):
            raise ConstructorError("while constructing pairs",
                    node.start_mark,
                    "expected a sequence, but found %s" % node.id,
                    node.start_mark)
        for subnode in node.value:
            if not isinstance(subnode, MappingNode):
                raise ConstructorError("while constructing pairs",
                        node.start_mark,
                        "expected a mapping of length 1, but found %s"
                        % subnode.id, subnode.start_mark)
            if len(subnode.value) != 1:
                raise ConstructorError("while constructing pairs",
                        node.start_mark,
                        "expected a single mapping item, but found %d items"
                        % len(subnode.value), subnode.start_mark)
            key_node, value_node = subnode.value[0]
            key = self.construct_object(key_node)
            value = self.construct_object(value_node)
            pairs.append((key, value))

    def construct_yaml_set(self, node):
        data = set()
        yield data
        if not isinstance(node, MappingNode):
            raise ConstructorError(None, None,
                    "expected a mapping node, but found %s" % node.id,
                    node.start_mark)
        self.fill_set(node, data)

    def construct_yaml_str(self, node):
        return self.construct_scalar(node)

    def construct_yaml_seq(self, node):
        data = []
        yield data
        data.extend(self.construct_sequence(node))

    def construct_yaml_map(self, node):
        data = {}
        yield data
        if not isinstance(node, MappingNode):
            raise ConstructorError(None, None,
                    "expected a mapping node, but found %s" % node.id,
                    node.start_mark)
        self.fill_mapping(node, data)

    def construct_undefined(self, node):
        raise ConstructorError(None, None,
                "could not determine a constructor for the tag %r" % node.tag,
                node.start_mark)


SafeConstructor.add_constructor(Tag.NULL, SafeConstructor.construct_yaml_null)
SafeConstructor.add_constructor(Tag.BOOL, SafeConstructor.construct_yaml_bool)
SafeConstructor.add_constructor(Tag.INT, SafeConstructor.construct_yaml_int)
SafeConstructor.add_constructor(Tag.FLOAT, SafeConstructor.construct_yaml_float)
SafeConstructor.add_constructor(Tag.BINARY, SafeConstructor.construct_yaml_binary)
SafeConstructor.add_constructor(Tag.TIMESTAMP, SafeConstructor.construct_yaml_timestamp)
SafeConstructor.add_constructor(Tag.OMAP, SafeConstructor.construct_yaml_omap)
SafeConstructor.add_constructor(Tag.PAIRS, SafeConstructor.construct_yaml_pairs)
SafeConstructor.add_constructor(Tag.SET, SafeConstructor.construct_yaml_set)
SafeConstructor.add_constructor(Tag.STR, SafeConstructor.construct_yaml_str)
SafeConstructor.add_constructor(Tag.SEQ, SafeConstructor.construct_yaml_seq)
SafeConstructor.add_constructor(Tag.MAP, SafeConstructor.construct_yaml_map)
SafeConstructor.add_constructor(None, SafeConstructor.construct_undefined)

SafeConstructor.add_class_constructor('scalar', SafeConstructor.construct_undefined)
SafeConstructor.add_class_constructor('sequence', SafeConstructor.construct_undefined)
SafeConstructor.add_class_constructor('mapping', SafeConstructor.construct_undefined)


class Constructor(SafeConstructor):
    """Constructor that also builds instances of Python classes.

    A node is built as a class instance when its ``type`` is set (by a
    typed property, a registered TypeDescription tag or ``load_as``) or
    when it is tagged ``!!python/object:<module>.<name>``.
    """

    def find_python_class(self, name, mark):
        if not name:
            raise ConstructorError("while constructing a Python object", mark,
                    "expected non-empty name appended to the tag", mark)
        parts = name.split('.')
        for split in range(len(parts) - 1, 0, -1):
            module_name = '.'.join(parts[:split])
            try:
                module = importlib.import_module(module_name)
            except ImportError:
                continue
            obj = module
            for attribute in parts[split:]:
                try:
                    obj = getattr(obj, attribute)
                except AttributeError as exc:
                    raise ConstructorError(
                        "while constructing a Python object", mark,
                        "cannot find %r in the module %r"
                        % (attribute, module_name), mark) from exc
            if not isinstance(obj, type):
                raise ConstructorError("while constructing a Python object",
                        mark, "%r is not a class" % name, mark)
            return obj
        raise ConstructorError("while constructing a Python object", mark,
                "cannot find module for %r" % name, mark)

    def construct_python_object(self, suffix, node):
        cls = self.find_python_class(suffix, node.start_mark)
        warnings.warn("loading class %s.%s from a python/object tag"
                      % (cls.__module__, cls.__qualname__),
                      YAMLLoadWarning, stacklevel=2)
        node.type = cls
        return self.yaml_class_constructors[node.id](self, node)

    def construct_yaml_object(self, node):
        cls = self.type_tags.get(node.tag)
        if cls is None:
            return self.construct_undefined(node)
        node.type = cls
        return self.yaml_class_constructors[node.id](self, node)

    def new_instance(self, node):
        cls = node.type
        description = self.type_definitions.get(cls)
        if description is not None:
            instance = description.new_instance(node)
            if instance is not None:
                return instance
        try:
            signature = inspect.signature(cls)
        except (TypeError, ValueError):
            signature = None
        if signature is not None and all(
                param.default is not param.empty
                or param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD)
                for param in signature.parameters.values()):
            return cls()
        return cls.__new__(cls)

    def construct_standard_scalar(self, node):
        constructor = self.yaml_constructors.get(node.tag)
        if constructor is None or isinstance(node.value, list):
            return self.construct_scalar(node)
        return constructor(self, node)

    def construct_class_scalar(self, node):
        cls = node.type
        description = self.type_definitions.get(cls)
        if description is not None:
            instance = description.new_instance(node)
            if instance is not None:
                return instance
        try:
            if issubclass(cls, enum.Enum):
                return self.construct_enum(cls, node)
            if cls is str:
                if node.tag == Tag.BINARY:
                    return self.construct_yaml_binary(node).decode('utf-8')
                return self.construct_yaml_str(node)
            if cls is bool:
                return self.construct_yaml_bool(node)
            if cls is int:
                return self.construct_yaml_int(node)
            if cls is float:
                return float(self.construct_yaml_float(node))
            if cls is decimal.Decimal:
                return decimal.Decimal(
                    self.construct_scalar(node).replace('_', ''))
            if cls is bytes:
                if node.tag == Tag.BINARY:
                    return self.construct_yaml_binary(node)
                return self.construct_scalar(node).encode('utf-8')
            if cls is datetime.datetime or cls is datetime.date:
                value = self.construct_yaml_timestamp(node)
                if cls is datetime.datetime \
                        and not isinstance(value, datetime.datetime):
                    value = datetime.datetime(value.year, value.month,
                                              value.day)
                return value
            if issubclass(cls, str):
                return cls(self.construct_scalar(node))
            return cls(self.construct_standard_scalar(node))
        except MarkedYAMLError:
            raise
        except (YAMLError, TypeError, ValueError, ArithmeticError) as exc:
            raise ConstructorError(None, None,
                    "Can't construct a python object for scalar %s; "
                    "exception=%s" % (node.tag, exc),
                    node.start_mark) from exc

    def construct_enum(self, cls, node):
        name = self.construct_scalar(node)
        try:
            return cls[name]
        except KeyError:
            if not self.enum_case_sensitive:
                for member_name, member in cls.__members__.items():
                    if member_name.lower() == name.lower():
                        return member
        raise ConstructorError(None, None,
                "Unable to find enum value '%s' for enum class: %s"
                % (name, cls.__qualname__), node.start_mark)

    def construct_class_sequence(self, node):
        cls = node.type
        if issubclass(cls, (set, frozenset)):
            if node.two_steps_construction:
                raise ConstructorError(None, None,
                        "Set cannot be recursive.", node.start_mark)
            return cls(self.construct_sequence(node, deep=True))
        if issubclass(cls, list):
            return self.construct_class_list(node)
        if issubclass(cls, tuple):
            return cls(self.construct_sequence(node, deep=True))
        return self.construct_with_arguments(node)

    def construct_class_list(self, node):
        cls = node.type
        data = self.new_instance(node) if cls is not list else []
        yield data
        data.extend(self.construct_sequence(node))

    def construct_with_arguments(self, node):
        cls = node.type
        try:
            signature = inspect.signature(cls)
            signature.bind(*node.value)
        except (TypeError, ValueError) as exc:
            raise ConstructorError(None, None,
                    "No suitable constructor with %d arguments found for %s"
                    % (len(node.value), cls.__qualname__),
                    node.start_mark) from exc
        hints = self.property_utils.get_type_hints(cls.__init__)
        parameters = [param for param in signature.parameters.values()
                      if param.kind in (param.POSITIONAL_ONLY,
                                        param.POSITIONAL_OR_KEYWORD)]
        for child, param in zip(node.value, parameters):
            if child.type is object and param.name in hints:
                child.type, type_arguments = split_type_hint(hints[param.name])
                self.apply_type_arguments(child, type_arguments)
        arguments = self.construct_sequence(node, deep=True)
        try:
            return cls(*arguments)
        except (TypeError, ValueError) as exc:
            raise ConstructorError(None, None,
                    "Can't construct a python object for %s; exception=%s"
                    % (node.tag, exc), node.start_mark) from exc

    def construct_class_mapping(self, node):
        cls = node.type
        if issubclass(cls, dict):
            return self.construct_class_dict(node)
        if issubclass(cls, (set, frozenset)):
            return self.construct_class_set(node)
        return self.construct_class_object(node)

    def construct_class_dict(self, node):
        data = self.new_instance(node) if node.type is not dict else {}
        yield data
        self.fill_mapping(node, data)

    def construct_class_set(self, node):
        data = set()
        yield data
        self.fill_set(node, data)

    def construct_class_object(self, node):
        instance = self.new_instance(node)
        yield instance
        self.construct_properties(node, instance)
        self.finalize_construction(node, instance)

    def construct_properties(self, node, instance):
        self.flatten_mapping(node)
        cls = node.type
        description = self.type_definitions.get(cls)
        for key_node, value_node in node.value:
            if not isinstance(key_node, ScalarNode):
                raise ConstructorError("while constructing a Python object",
                        node.start_mark,
                        "Keys must be scalars but found: %r" % key_node,
                        key_node.start_mark)
            key_node.type = str
            key = self.construct_object(key_node, deep=True)
            try:
                if description is not None:
                    prop = description.get_property(key)
                else:
                    prop = self.property_utils.get_property(cls, key)
                if not prop.is_writable():
                    raise YAMLError("No writable property '%s' on class: %s"
                                    % (key, cls.__qualname__))
                if prop.type is not object:
                    value_node.type = prop.type
                type_detected = description is not None \
                    and description.setup_property_type(key, value_node)
                if not type_detected and not isinstance(value_node, ScalarNode):
                    self.apply_type_arguments(value_node, prop.type_arguments)
                value = self.construct_object(value_node)
                if description is None \
                        or not description.set_property(instance, key, value):
                    prop.set(instance, value)
            except MarkedYAMLError:
                raise
            except (YAMLError, TypeError, ValueError, AttributeError) as exc:
                raise ConstructorError(
                    "Cannot create property=%s for class=%s"
                    % (key, cls.__qualname__), node.start_mark,
                    str(exc), value_node.start_mark) from exc


Constructor.add_constructor(None, Constructor.construct_yaml_object)

Constructor.add_multi_constructor(Tag.CLASS_PREFIX,
                                  Constructor.construct_python_object)

Constructor.add_class_constructor('scalar', Constructor.construct_class_scalar)
Constructor.add_class_constructor('sequence', Constructor.construct_class_sequence)
Constructor.add_class_constructor('mapping', Constructor.construct_class_mapping)
