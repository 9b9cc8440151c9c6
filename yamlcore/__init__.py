"""yamlcore: a round-trip YAML 1.1 processing engine.

Loading runs reader -> scanner -> parser -> composer -> constructor and
dumping runs representer -> serializer -> emitter; the node graph is the
representation both directions share.

Usage:
    import yamlcore

    data = yamlcore.safe_load("foo: [1, 2]")
    text = yamlcore.safe_dump(data, default_flow_style=False)

    # Explicit configuration, typed binding:
    engine = yamlcore.YAML(loader_options=yamlcore.LoaderOptions(
        allow_duplicate_keys=True))
    point = engine.load_as("x: 1\\ny: 2\\n", Point)

Module-level functions take a Loader or Dumper class the way PyYAML does;
the YAML engine object keeps its own private loader and dumper classes.
"""

import copy
import io

from .error import *
from .tokens import *
from .events import *
from .nodes import Tag, Node, ScalarNode, CollectionNode, SequenceNode, MappingNode
from .options import (
    LoaderOptions, DumperOptions,
    FlowStyle, ScalarStyle, LineBreak, NonPrintableStyle,
)
from .comments import CommentType, CommentLine
from .reader import ReaderError
from .scanner import ScannerError
from .parser import ParserError
from .composer import ComposerError
from .resolver import ResolverError
from .constructor import ConstructorError, DuplicateKeyError, YAMLLoadWarning
from .representer import RepresenterError
from .serializer import SerializerError
from .emitter import EmitterError
from .introspector import (
    Property, FieldProperty, MethodProperty, MissingProperty,
    PropertyUtils, TypeDescription,
)
from .loader import *
from .dumper import *

__version__ = '1.0.0'


def _dumper_options(options, kwds):
    if options is None:
        return DumperOptions.from_kwargs(**kwds)
    if kwds:
        raise TypeError("pass either options or keyword arguments, not both")
    return options


def _output_stream(options):
    if options.encoding is None:
        return io.StringIO()
    return io.BytesIO()


def scan(stream, Loader=SafeLoader, options=None):
    """Scan a YAML stream and produce scanning tokens."""
    loader = Loader(stream, options)
    try:
        while loader.check_token():
            yield loader.get_token()
    finally:
        loader.dispose()


def parse(stream, Loader=SafeLoader, options=None):
    """Parse a YAML stream and produce parsing events."""
    loader = Loader(stream, options)
    try:
        while loader.check_event():
            yield loader.get_event()
    finally:
        loader.dispose()


def compose(stream, Loader=SafeLoader, options=None):
    """Parse the first YAML document in a stream
    and produce the corresponding representation tree."""
    loader = Loader(stream, options)
    try:
        return loader.get_single_node()
    finally:
        loader.dispose()


def compose_all(stream, Loader=SafeLoader, options=None):
    """Parse all YAML documents in a stream
    and produce corresponding representation trees."""
    loader = Loader(stream, options)
    try:
        while loader.check_node():
            yield loader.get_node()
    finally:
        loader.dispose()


def load(stream, Loader=None, options=None):
    """Parse the first YAML document in a stream
    and produce the corresponding Python object.

    Raises:
        TypeError: If Loader is not specified
        YAMLError: If the stream cannot be loaded
    """
    if Loader is None:
        raise TypeError("load() missing 1 required positional argument: 'Loader'")
    loader = Loader(stream, options)
    try:
        return loader.get_single_data()
    finally:
        loader.dispose()


def load_all(stream, Loader=None, options=None):
    """Parse all YAML documents in a stream
    and produce corresponding Python objects."""
    if Loader is None:
        raise TypeError("load_all() missing 1 required positional argument: 'Loader'")
    loader = Loader(stream, options)
    try:
        while loader.check_data():
            yield loader.get_data()
    finally:
        loader.dispose()


def safe_load(stream, options=None):
    """Load a document using standard YAML tags only."""
    return load(stream, SafeLoader, options)


def safe_load_all(stream, options=None):
    """Load all documents using standard YAML tags only."""
    return load_all(stream, SafeLoader, options)


def emit(events, stream=None, Dumper=Dumper, options=None, **kwds):
    """Emit YAML parsing events into a stream.

    If stream is None, return the produced string instead.
    """
    options = _dumper_options(options, kwds)
    getvalue = None
    if stream is None:
        stream = io.StringIO()
        getvalue = stream.getvalue
    dumper = Dumper(stream, options)
    try:
        for event in events:
            dumper.emit(event)
    finally:
        dumper.dispose()
    if getvalue:
        return getvalue()


def serialize_all(nodes, stream=None, Dumper=Dumper, options=None, **kwds):
    """Serialize a sequence of representation trees into a YAML stream.

    If stream is None, return the produced string instead.
    """
    options = _dumper_options(options, kwds)
    getvalue = None
    if stream is None:
        stream = _output_stream(options)
        getvalue = stream.getvalue
    dumper = Dumper(stream, options)
    try:
        dumper.open()
        for node in nodes:
            dumper.serialize(node)
        dumper.close()
    finally:
        dumper.dispose()
    if getvalue:
        return getvalue()


def serialize(node, stream=None, Dumper=Dumper, options=None, **kwds):
    """Serialize a representation tree into a YAML stream.

    If stream is None, return the produced string instead.
    """
    return serialize_all([node], stream, Dumper=Dumper, options=options, **kwds)


def dump_all(documents, stream=None, Dumper=Dumper, options=None, **kwds):
    """Serialize a sequence of Python objects into a YAML stream.

    Keyword arguments are DumperOptions settings (indent, width,
    default_flow_style, explicit_start, encoding, ...).  If stream is None,
    return the produced string (bytes when an encoding is given) instead.
    """
    options = _dumper_options(options, kwds)
    getvalue = None
    if stream is None:
        stream = _output_stream(options)
        getvalue = stream.getvalue
    dumper = Dumper(stream, options)
    try:
        dumper.open()
        for data in documents:
            dumper.represent(data)
        dumper.close()
    finally:
        dumper.dispose()
    if getvalue:
        return getvalue()


def dump(data, stream=None, Dumper=Dumper, options=None, **kwds):
    """Serialize a Python object into a YAML stream.

    If stream is None, return the produced string instead.
    """
    return dump_all([data], stream, Dumper=Dumper, options=options, **kwds)


def safe_dump_all(documents, stream=None, options=None, **kwds):
    """Serialize a sequence of Python objects into a YAML stream.
    Produce only standard YAML tags."""
    return dump_all(documents, stream, Dumper=SafeDumper, options=options, **kwds)


def safe_dump(data, stream=None, options=None, **kwds):
    """Serialize a Python object into a YAML stream.
    Produce only standard YAML tags."""
    return dump_all([data], stream, Dumper=SafeDumper, options=options, **kwds)


def add_implicit_resolver(tag, regexp, first=None, Loader=None, Dumper=Dumper):
    """Add an implicit scalar detector.

    If an implicit scalar value matches the given regexp,
    the corresponding tag is assigned to the scalar.
    first is a sequence of possible initial characters or None.
    """
    if Loader is None:
        globals()['Loader'].add_implicit_resolver(tag, regexp, first)
        SafeLoader.add_implicit_resolver(tag, regexp, first)
    else:
        Loader.add_implicit_resolver(tag, regexp, first)
    Dumper.add_implicit_resolver(tag, regexp, first)


def add_constructor(tag, constructor, Loader=None):
    """Add a constructor for the given tag.

    Args:
        tag: YAML tag to match
        constructor: Function(loader, node) -> object
        Loader: Loader class to add constructor to (default: Loader)
    """
    if Loader is None:
        Loader = globals()['Loader']
    Loader.add_constructor(tag, constructor)


def add_multi_constructor(tag_prefix, multi_constructor, Loader=None):
    """Add a multi-constructor for the given tag prefix.

    Args:
        tag_prefix: YAML tag prefix to match
        multi_constructor: Function(loader, tag_suffix, node) -> object
        Loader: Loader class to add constructor to (default: Loader)
    """
    if Loader is None:
        Loader = globals()['Loader']
    Loader.add_multi_constructor(tag_prefix, multi_constructor)


def add_representer(data_type, representer, Dumper=Dumper):
    """Add a representer for the given type.

    Args:
        data_type: Python type to represent
        representer: Function(dumper, data) -> node
        Dumper: Dumper class to add representer to (default: Dumper)
    """
    Dumper.add_representer(data_type, representer)


def add_multi_representer(data_type, multi_representer, Dumper=Dumper):
    """Add a representer for the given type and its subclasses.

    Args:
        data_type: Python type (and subclasses) to represent
        multi_representer: Function(dumper, data) -> node
        Dumper: Dumper class to add representer to (default: Dumper)
    """
    Dumper.add_multi_representer(data_type, multi_representer)


class YAMLObjectMetaclass(type):
    """Metaclass for YAMLObject that auto-registers constructors/representers."""

    def __init__(cls, name, bases, kwds):
        super().__init__(name, bases, kwds)
        if 'yaml_tag' in kwds and kwds['yaml_tag'] is not None:
            if isinstance(cls.yaml_loader, (list, tuple)):
                loaders = cls.yaml_loader
            else:
                loaders = [cls.yaml_loader]
            for loader in loaders:
                loader.add_constructor(cls.yaml_tag, cls.from_yaml)
            cls.yaml_dumper.add_representer(cls, cls.to_yaml)


class YAMLObject(metaclass=YAMLObjectMetaclass):
    """Base class for YAML-serializable objects.

    Subclasses should define:
        yaml_tag: The YAML tag for this class (e.g., '!myobject')
        yaml_loader: Loader class(es) to register with (default: Loader)
        yaml_dumper: Dumper class to register with (default: Dumper)

    And optionally override:
        from_yaml(cls, loader, node): Construct object from YAML node
        to_yaml(cls, dumper, data): Represent object as YAML node
    """

    yaml_loader = Loader
    yaml_dumper = Dumper

    yaml_tag = None
    yaml_flow_style = None

    @classmethod
    def from_yaml(cls, loader, node):
        """Construct an instance from a YAML node."""
        node.type = cls
        return loader.yaml_class_constructors[node.id](loader, node)

    @classmethod
    def to_yaml(cls, dumper, data):
        """Represent an instance as a YAML node."""
        node = dumper.represent_object(data)
        node.tag = cls.yaml_tag
        if cls.yaml_flow_style is not None:
            node.flow_style = cls.yaml_flow_style
        return node


class YAML:
    """A configured engine.

    The engine owns a loader class and a dumper class derived from
    Loader and Dumper, so constructors, representers, resolvers and type
    descriptions registered here stay private to it.

    Args:
        loader_options: LoaderOptions for every load (default: LoaderOptions())
        dumper_options: DumperOptions for every dump (default: DumperOptions())
        type_descriptions: TypeDescription objects to register up front
    """

    def __init__(self, loader_options=None, dumper_options=None,
                 type_descriptions=()):
        if loader_options is None:
            loader_options = LoaderOptions()
        if dumper_options is None:
            dumper_options = DumperOptions()
        self.loader_options = loader_options
        self.dumper_options = dumper_options
        self.Loader = type('YAMLLoader', (Loader,), {})
        self.Dumper = type('YAMLDumper', (Dumper,), {})
        for description in type_descriptions:
            self.add_type_description(description)

    def __repr__(self):
        return '<%s loader_options=%r>' % (self.__class__.__name__,
                                           self.loader_options)

    # Loading.

    def load(self, stream):
        """Load the only document in ``stream``."""
        loader = self.Loader(stream, self.loader_options)
        try:
            return loader.get_single_data()
        finally:
            loader.dispose()

    def load_all(self, stream):
        loader = self.Loader(stream, self.loader_options)
        try:
            while loader.check_data():
                yield loader.get_data()
        finally:
            loader.dispose()

    def load_as(self, stream, cls):
        """Load the only document in ``stream`` as an instance of ``cls``.

        ``cls`` may be a generic alias such as ``List[Point]``.
        """
        loader = self.Loader(stream, self.loader_options)
        try:
            return loader.get_single_data(cls)
        finally:
            loader.dispose()

    def compose(self, stream):
        loader = self.Loader(stream, self.loader_options)
        try:
            return loader.get_single_node()
        finally:
            loader.dispose()

    def compose_all(self, stream):
        loader = self.Loader(stream, self.loader_options)
        try:
            while loader.check_node():
                yield loader.get_node()
        finally:
            loader.dispose()

    def parse(self, stream):
        loader = self.Loader(stream, self.loader_options)
        try:
            while loader.check_event():
                yield loader.get_event()
        finally:
            loader.dispose()

    # Dumping.

    def _run_dumper(self, stream, write, options=None):
        if options is None:
            options = self.dumper_options
        getvalue = None
        if stream is None:
            stream = _output_stream(options)
            getvalue = stream.getvalue
        dumper = self.Dumper(stream, options)
        try:
            write(dumper)
        finally:
            dumper.dispose()
        if getvalue:
            return getvalue()

    def dump(self, data, stream=None):
        return self.dump_all([data], stream)

    def dump_all(self, documents, stream=None):
        def write(dumper):
            dumper.open()
            for data in documents:
                dumper.represent(data)
            dumper.close()
        return self._run_dumper(stream, write)

    def dump_as(self, data, tag=None, flow_style=None):
        """Dump ``data`` with the root node retagged as ``tag`` and,
        when given, ``flow_style`` as the default collection style."""
        options = self.dumper_options
        if flow_style is not None:
            options = copy.copy(options)
            options.default_flow_style = flow_style

        def write(dumper):
            node = dumper.represent_root(data)
            if tag is not None:
                node.tag = tag
            dumper.open()
            dumper.serialize(node)
            dumper.close()
        return self._run_dumper(None, write, options)

    def dump_as_map(self, data):
        """Dump an object as a plain block mapping, without its class tag."""
        return self.dump_as(data, Tag.MAP, FlowStyle.BLOCK)

    def represent(self, data):
        """Return the node graph ``data`` would be dumped as."""
        return self.Dumper(None, self.dumper_options).represent_root(data)

    def serialize(self, node, stream=None):
        def write(dumper):
            dumper.open()
            dumper.serialize(node)
            dumper.close()
        return self._run_dumper(stream, write)

    def emit(self, events, stream=None):
        def write(dumper):
            for event in events:
                dumper.emit(event)
        return self._run_dumper(stream, write)

    # Registration.

    def add_type_description(self, description):
        """Bind ``description.tag`` to its class for loading and dumping."""
        self.Loader.add_type_description_class(description)
        self.Dumper.add_type_description_class(description)

    def add_implicit_resolver(self, tag, regexp, first):
        self.Loader.add_implicit_resolver(tag, regexp, first)
        self.Dumper.add_implicit_resolver(tag, regexp, first)

    def add_constructor(self, tag, constructor):
        self.Loader.add_constructor(tag, constructor)

    def add_representer(self, data_type, representer):
        self.Dumper.add_representer(data_type, representer)
