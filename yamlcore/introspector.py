"""Property discovery for binding mapping nodes to Python objects.

A Property knows its name, its declared type and, for generic containers,
the type arguments (``List[Point]`` gives ``list`` with ``(Point,)``).
PropertyUtils finds the properties of a class; a TypeDescription adds
per-class tweaks on top of that.
"""

import dataclasses
import inspect
import logging
import typing

from .error import YAMLError

__all__ = ['Property', 'FieldProperty', 'MethodProperty', 'MissingProperty',
           'PropertyUtils', 'TypeDescription', 'split_type_hint']

logger = logging.getLogger(__name__)


def split_type_hint(hint):
    """Turn a type hint into a (class, type arguments) pair.

    ``Optional[X]`` unwraps to X; anything that is not a class (a string
    forward reference, ``Any``, a union of several classes) becomes
    ``object``.
    """
    if hint is typing.Any:
        return object, ()
    origin = typing.get_origin(hint)
    args = typing.get_args(hint)
    if origin is typing.Union:
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1:
            return split_type_hint(members[0])
        return object, ()
    if origin is not None:
        if not isinstance(origin, type):
            return object, ()
        args = tuple(split_type_hint(arg)[0] for arg in args
                     if arg is not Ellipsis)
        return origin, args
    if isinstance(hint, type):
        return hint, ()
    return object, ()


class Property:
    """A named, typed slot on a class."""

    def __init__(self, name, type=object, type_arguments=()):
        self.name = name
        self.type = type
        self.type_arguments = tuple(type_arguments)

    def is_readable(self):
        return True

    def is_writable(self):
        return True

    def get(self, obj):
        raise NotImplementedError

    def set(self, obj, value):
        raise NotImplementedError

    def with_type_arguments(self, type_arguments):
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone.type_arguments = tuple(type_arguments)
        return clone

    def __lt__(self, other):
        return self.name < other.name

    def __eq__(self, other):
        return isinstance(other, Property) \
            and self.name == other.name and self.type == other.type

    def __hash__(self):
        return hash((self.name, self.type))

    def __repr__(self):
        return '%s of %s' % (self.name, getattr(self.type, '__name__',
                                                self.type))


class FieldProperty(Property):
    """An instance attribute: a dataclass field, an annotation or a slot."""

    def get(self, obj):
        return getattr(obj, self.name)

    def set(self, obj, value):
        setattr(obj, self.name, value)


class MethodProperty(Property):
    """A Python ``property`` object; read-only when it has no setter."""

    def __init__(self, name, descriptor, type=object, type_arguments=()):
        super().__init__(name, type, type_arguments)
        self.descriptor = descriptor

    def is_readable(self):
        return self.descriptor.fget is not None

    def is_writable(self):
        return self.descriptor.fset is not None

    def get(self, obj):
        return self.descriptor.__get__(obj, type(obj))

    def set(self, obj, value):
        self.descriptor.__set__(obj, value)


class MissingProperty(Property):
    """Stands in for an unknown key when missing properties are skipped."""

    def get(self, obj):
        return obj

    def set(self, obj, value):
        pass


class PropertyUtils:

    def __init__(self, allow_read_only_properties=False,
                 skip_missing_properties=False):
        self.allow_read_only_properties = allow_read_only_properties
        self.skip_missing_properties = skip_missing_properties
        self.properties_cache = {}
        self.readable_properties = {}

    def set_allow_read_only_properties(self, value):
        if self.allow_read_only_properties != value:
            self.allow_read_only_properties = value
            self.readable_properties = {}

    def set_skip_missing_properties(self, value):
        if self.skip_missing_properties != value:
            self.skip_missing_properties = value
            self.readable_properties = {}

    def get_properties_map(self, cls):
        """Name -> Property for ``cls``, in discovery order."""
        if cls in self.properties_cache:
            return self.properties_cache[cls]
        properties = {}
        hints = self.get_type_hints(cls)

        def add(name, factory):
            if name.startswith('_') or name in properties:
                return
            properties[name] = factory(name, *split_type_hint(
                hints.get(name, object)))

        if dataclasses.is_dataclass(cls):
            for field in dataclasses.fields(cls):
                add(field.name, FieldProperty)
        for name, hint in hints.items():
            if typing.get_origin(hint) is typing.ClassVar \
                    or hint is typing.ClassVar:
                continue
            add(name, FieldProperty)
        for klass in reversed(cls.__mro__):
            slots = klass.__dict__.get('__slots__', ())
            if isinstance(slots, str):
                slots = (slots,)
            for name in slots:
                if name not in ('__dict__', '__weakref__'):
                    add(name, FieldProperty)
        for name, member in inspect.getmembers(cls):
            if isinstance(member, property):
                hint = hints.get(name)
                if hint is None and member.fget is not None:
                    hint = self.get_type_hints(member.fget).get('return', object)
                if not name.startswith('_') and name not in properties:
                    properties[name] = MethodProperty(
                        name, member, *split_type_hint(hint))
        self.properties_cache[cls] = properties
        return properties

    def get_type_hints(self, obj):
        try:
            return typing.get_type_hints(obj)
        except (NameError, TypeError) as exc:
            logger.debug("cannot evaluate type hints of %r: %s", obj, exc)
            return dict(getattr(obj, '__annotations__', {}))

    def get_properties(self, cls):
        """The properties used to dump ``cls``, sorted by name."""
        if cls in self.readable_properties:
            return self.readable_properties[cls]
        properties = sorted(
            prop for prop in self.get_properties_map(cls).values()
            if prop.is_readable()
            and (self.allow_read_only_properties or prop.is_writable()))
        self.readable_properties[cls] = properties
        return properties

    def get_property(self, cls, name):
        properties = self.get_properties_map(cls)
        prop = properties.get(name)
        if prop is None:
            if not properties:
                # Nothing declared: any attribute goes.
                return FieldProperty(name)
            if self.skip_missing_properties:
                return MissingProperty(name)
            raise YAMLError("Unable to find property '%s' on class: %s"
                            % (name, cls.__qualname__))
        return prop


class TypeDescription:
    """Per-class settings for loading and dumping ``cls``.

    ``tag`` binds a custom tag to the class, ``impl`` names the class to
    instantiate when ``cls`` itself is abstract.
    """

    def __init__(self, cls, tag=None, impl=None):
        self.type = cls
        self.tag = tag
        self.impl = impl
        self.property_utils = None
        self.property_parameters = {}
        self.excludes = frozenset()
        self.includes = None
        self.dump_properties = None

    def __repr__(self):
        return "TypeDescription for %s (tag=%r)" % (self.type, self.tag)

    def set_property_utils(self, property_utils):
        self.property_utils = property_utils
        self.dump_properties = None

    def add_property_parameters(self, name, *types):
        """Declare the item types of a container property."""
        self.property_parameters[name] = types
        self.dump_properties = None

    def set_includes(self, *names):
        self.includes = names or None
        self.dump_properties = None

    def set_excludes(self, *names):
        self.excludes = frozenset(names)
        self.dump_properties = None

    def get_property(self, name):
        prop = self.property_utils.get_property(self.type, name)
        if name in self.property_parameters:
            prop = prop.with_type_arguments(self.property_parameters[name])
        return prop

    def get_properties(self):
        """The properties to dump, in output order."""
        if self.dump_properties is not None:
            return self.dump_properties
        if self.includes is not None:
            properties = [self.get_property(name) for name in self.includes
                          if name not in self.excludes]
        else:
            properties = [
                self.get_property(prop.name)
                for prop in self.property_utils.get_properties(self.type)
                if prop.name not in self.excludes]
        self.dump_properties = properties
        return properties

    def setup_property_type(self, key, value_node):
        """Hook: set ``value_node.type`` and return True to override the
        declared property type."""
        return False

    def set_property(self, obj, name, value):
        """Hook: store ``value`` and return True to bypass the property."""
        return False

    def new_instance(self, node):
        """Hook: return a fresh instance, or None for the default."""
        if self.impl is not None:
            return self.impl()
        return None

    def finalize_construction(self, obj):
        return obj
