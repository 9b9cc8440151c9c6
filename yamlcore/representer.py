"""Representer: turns Python objects into a node graph for the serializer."""

import base64
import datetime
import enum
import re

from .error import YAMLError
from .introspector import FieldProperty, PropertyUtils
from .nodes import Tag, ScalarNode, SequenceNode, MappingNode
from .options import DumperOptions, NonPrintableStyle, ScalarStyle
from .reader import Reader

__all__ = ['BaseRepresenter', 'SafeRepresenter', 'Representer',
           'RepresenterError']


class RepresenterError(YAMLError):
    pass


class BaseRepresenter:
    """Base class for YAML representers.

    Representers are looked up by the exact type of the data first, then
    by multi-representers along the type's MRO.  Every represented object
    is remembered by identity, so an object met twice becomes one node
    (and an anchor plus alias in the output).
    """

    yaml_representers = {}
    yaml_multi_representers = {}

    def __init__(self, options=None):
        if options is None:
            options = DumperOptions()
        self.default_style = options.default_style
        self.default_flow_style = options.default_flow_style
        self.sort_keys = options.sort_keys
        self.represented_objects = {}
        self.object_keeper = []
        self.alias_key = None

    def represent(self, data):
        self.serialize(self.represent_root(data))

    def represent_root(self, data):
        """Represent one document and forget the identity table."""
        try:
            return self.represent_data(data)
        finally:
            self.represented_objects = {}
            self.object_keeper = []
            self.alias_key = None

    def represent_data(self, data):
        if self.ignore_aliases(data):
            self.alias_key = None
        else:
            self.alias_key = id(data)
        if self.alias_key is not None:
            if self.alias_key in self.represented_objects:
                return self.represented_objects[self.alias_key]
            self.object_keeper.append(data)
        data_types = type(data).__mro__
        if data_types[0] in self.yaml_representers:
            node = self.yaml_representers[data_types[0]](self, data)
        else:
            for data_type in data_types:
                if data_type in self.yaml_multi_representers:
                    node = self.yaml_multi_representers[data_type](self, data)
                    break
            else:
                if None in self.yaml_multi_representers:
                    node = self.yaml_multi_representers[None](self, data)
                elif None in self.yaml_representers:
                    node = self.yaml_representers[None](self, data)
                else:
                    node = ScalarNode(None, str(data))
        return node

    @classmethod
    def add_representer(cls, data_type, representer):
        """Add a representer for a specific type."""
        if 'yaml_representers' not in cls.__dict__:
            cls.yaml_representers = cls.yaml_representers.copy()
        cls.yaml_representers[data_type] = representer

    @classmethod
    def add_multi_representer(cls, data_type, representer):
        """Add a multi-representer for a type and its subclasses."""
        if 'yaml_multi_representers' not in cls.__dict__:
            cls.yaml_multi_representers = cls.yaml_multi_representers.copy()
        cls.yaml_multi_representers[data_type] = representer

    def represent_scalar(self, tag, value, style=None):
        if style is None:
            style = self.default_style
        node = ScalarNode(tag, value, style=style)
        if self.alias_key is not None:
            self.represented_objects[self.alias_key] = node
        return node

    def represent_sequence(self, tag, sequence, flow_style=None):
        value = []
        node = SequenceNode(tag, value, flow_style=flow_style)
        if self.alias_key is not None:
            self.represented_objects[self.alias_key] = node
        best_style = True
        for item in sequence:
            node_item = self.represent_data(item)
            if not (isinstance(node_item, ScalarNode) and not node_item.style):
                best_style = False
            value.append(node_item)
        if flow_style is None:
            if self.default_flow_style is not None:
                node.flow_style = self.default_flow_style
            else:
                node.flow_style = best_style
        return node

    def represent_mapping(self, tag, mapping, flow_style=None):
        value = []
        node = MappingNode(tag, value, flow_style=flow_style)
        if self.alias_key is not None:
            self.represented_objects[self.alias_key] = node
        best_style = True
        if hasattr(mapping, 'items'):
            mapping = list(mapping.items())
            if self.sort_keys:
                try:
                    mapping = sorted(mapping)
                except TypeError:
                    pass
        for item_key, item_value in mapping:
            node_key = self.represent_data(item_key)
            node_value = self.represent_data(item_value)
            if not (isinstance(node_key, ScalarNode) and not node_key.style):
                best_style = False
            if not (isinstance(node_value, ScalarNode) and not node_value.style):
                best_style = False
            value.append((node_key, node_value))
        if flow_style is None:
            if self.default_flow_style is not None:
                node.flow_style = self.default_flow_style
            else:
                node.flow_style = best_style
        return node

    def ignore_aliases(self, data):
        return False


class SafeRepresenter(BaseRepresenter):
    """Represents the standard YAML types only."""

    MULTILINE_PATTERN = re.compile('\n|\x85|\u2028|\u2029')

    def __init__(self, options=None):
        if options is None:
            options = DumperOptions()
        super().__init__(options)
        self.non_printable_style = options.non_printable_style
        self.class_tags = {}

    def add_class_tag(self, cls, tag):
        self.class_tags[cls] = tag

    def get_tag(self, cls, default_tag):
        return self.class_tags.get(cls, default_tag)

    def ignore_aliases(self, data):
        if data is None:
            return True
        if isinstance(data, tuple) and data == ():
            return True
        if isinstance(data, (str, bytes, bool, int, float, enum.Enum,
                             datetime.date)):
            return True
        return False

    def represent_none(self, data):
        return self.represent_scalar(Tag.NULL, 'null')

    def represent_str(self, data):
        tag = Tag.STR
        style = None
        if self.non_printable_style == NonPrintableStyle.BINARY \
                and not Reader.is_printable(data):
            tag = Tag.BINARY
            data = base64.encodebytes(data.encode('utf-8')).decode('ascii')
            style = ScalarStyle.LITERAL
        if self.default_style == ScalarStyle.PLAIN \
                and self.MULTILINE_PATTERN.search(data):
            style = ScalarStyle.LITERAL
        return self.represent_scalar(tag, data, style)

    def represent_binary(self, data):
        data = base64.encodebytes(data).decode('ascii')
        return self.represent_scalar(Tag.BINARY, data,
                                     style=ScalarStyle.LITERAL)

    def represent_bool(self, data):
        if data:
            value = 'true'
        else:
            value = 'false'
        return self.represent_scalar(Tag.BOOL, value)

    def represent_int(self, data):
        return self.represent_scalar(self.get_tag(type(data), Tag.INT),
                                     str(data))

    inf_value = float('inf')

    def represent_float(self, data):
        if data != data or (data == 0.0 and data == 1.0):
            value = '.nan'
        elif data == self.inf_value:
            value = '.inf'
        elif data == -self.inf_value:
            value = '-.inf'
        else:
            value = repr(data).lower()
            # repr() may give '1e+17'; '.0' keeps it a float when read back.
            if '.' not in value and 'e' in value:
                value = value.replace('e', '.0e', 1)
        return self.represent_scalar(self.get_tag(type(data), Tag.FLOAT),
                                     value)

    def represent_list(self, data):
        return self.represent_sequence(self.get_tag(type(data), Tag.SEQ),
                                       data)

    def represent_dict(self, data):
        return self.represent_mapping(self.get_tag(type(data), Tag.MAP),
                                      data)

    def represent_set(self, data):
        value = {}
        for key in data:
            value[key] = None
        return self.represent_mapping(self.get_tag(type(data), Tag.SET),
                                      value)

    def represent_date(self, data):
        value = data.isoformat()
        return self.represent_scalar(Tag.TIMESTAMP, value)

    def represent_datetime(self, data):
        value = data.isoformat(' ')
        return self.represent_scalar(Tag.TIMESTAMP, value)

    def represent_enum(self, data):
        cls = type(data)
        return self.represent_scalar(self.get_tag(cls, Tag.for_class(cls)),
                                     data.name)

    def represent_undefined(self, data):
        raise RepresenterError("cannot represent an object", data)


SafeRepresenter.add_representer(type(None), SafeRepresenter.represent_none)
SafeRepresenter.add_representer(str, SafeRepresenter.represent_str)
SafeRepresenter.add_representer(bytes, SafeRepresenter.represent_binary)
SafeRepresenter.add_representer(bool, SafeRepresenter.represent_bool)
SafeRepresenter.add_representer(int, SafeRepresenter.represent_int)
SafeRepresenter.add_representer(float, SafeRepresenter.represent_float)
SafeRepresenter.add_representer(list, SafeRepresenter.represent_list)
SafeRepresenter.add_representer(tuple, SafeRepresenter.represent_list)
SafeRepresenter.add_representer(dict, SafeRepresenter.represent_dict)
SafeRepresenter.add_representer(set, SafeRepresenter.represent_set)
SafeRepresenter.add_representer(frozenset, SafeRepresenter.represent_set)
SafeRepresenter.add_representer(datetime.date, SafeRepresenter.represent_date)
SafeRepresenter.add_representer(datetime.datetime,
                                SafeRepresenter.represent_datetime)
SafeRepresenter.add_multi_representer(enum.Enum, SafeRepresenter.represent_enum)
SafeRepresenter.add_representer(None, SafeRepresenter.represent_undefined)


class Representer(SafeRepresenter):
    """Also represents arbitrary objects, as mappings of their properties.

    The mapping is tagged with the class tag registered through a
    TypeDescription, or ``!!python/object:<module>.<name>`` otherwise.
    """

    yaml_type_descriptions = {}
    yaml_property_utils = None

    def __init__(self, options=None):
        super().__init__(options)
        self.property_utils = self.yaml_property_utils or PropertyUtils()
        self.type_definitions = {}
        for description in self.yaml_type_descriptions.values():
            self.add_type_description(description)

    def add_type_description(self, description):
        if description.tag is not None:
            self.add_class_tag(description.type, description.tag)
        if description.property_utils is None:
            description.set_property_utils(self.property_utils)
        self.type_definitions[description.type] = description

    @classmethod
    def add_type_description_class(cls, description):
        """Register a TypeDescription for every instance of this class."""
        if 'yaml_type_descriptions' not in cls.__dict__:
            cls.yaml_type_descriptions = cls.yaml_type_descriptions.copy()
        cls.yaml_type_descriptions[description.type] = description

    def get_properties(self, data):
        cls = type(data)
        if cls in self.type_definitions:
            return self.type_definitions[cls].get_properties()
        properties = self.property_utils.get_properties(cls)
        if not properties and not self.property_utils.get_properties_map(cls):
            # Nothing declared: dump the public instance attributes.
            properties = sorted(FieldProperty(name)
                                for name in getattr(data, '__dict__', {})
                                if not name.startswith('_'))
        return properties

    def represent_object(self, data):
        cls = type(data)
        value = []
        node = MappingNode(self.get_tag(cls, Tag.for_class(cls)), value)
        self.represented_objects[id(data)] = node
        best_style = True
        for prop in self.get_properties(data):
            member = prop.get(data)
            custom_tag = None if member is None \
                else self.class_tags.get(type(member))
            key_node, value_node = self.represent_property(prop, member,
                                                           custom_tag)
            if key_node.style:
                best_style = False
            if not (isinstance(value_node, ScalarNode)
                    and not value_node.style):
                best_style = False
            value.append((key_node, value_node))
        if self.default_flow_style is not None:
            node.flow_style = self.default_flow_style
        else:
            node.flow_style = best_style
        return node

    def represent_property(self, prop, member, custom_tag):
        """Represent one property; drop class tags the loader can infer
        from the declared property type."""
        key_node = self.represent_data(prop.name)
        has_alias = not self.ignore_aliases(member) \
            and id(member) in self.represented_objects
        value_node = self.represent_data(member)
        if member is not None and not has_alias and custom_tag is None:
            if isinstance(value_node, ScalarNode):
                if isinstance(member, enum.Enum) and prop.type is type(member):
                    value_node.tag = Tag.STR
            else:
                if isinstance(value_node, MappingNode) \
                        and prop.type is type(member) \
                        and not isinstance(member, (dict, set, frozenset)):
                    value_node.tag = Tag.MAP
                self.check_global_tag(prop, value_node, member)
        return key_node, value_node

    def check_global_tag(self, prop, node, member):
        type_arguments = prop.type_arguments
        if not type_arguments:
            return
        if isinstance(node, SequenceNode):
            for child in node.value:
                self.reset_tag(type_arguments[0], child)
        elif isinstance(member, (set, frozenset)):
            for key_node, value_node in node.value:
                self.reset_tag(type_arguments[0], key_node)
        elif isinstance(member, dict) and len(type_arguments) == 2:
            for key_node, value_node in node.value:
                self.reset_tag(type_arguments[0], key_node)
                self.reset_tag(type_arguments[1], value_node)

    def reset_tag(self, cls, node):
        if node.tag != Tag.for_class(cls):
            return
        if issubclass(cls, enum.Enum):
            node.tag = Tag.STR
        elif isinstance(node, MappingNode):
            node.tag = Tag.MAP


Representer.add_multi_representer(object, Representer.represent_object)
