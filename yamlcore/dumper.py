"""Dumper classes: the dumping pipeline stages mixed into one object."""

__all__ = ['BaseDumper', 'SafeDumper', 'Dumper']

from .emitter import Emitter
from .serializer import Serializer
from .representer import BaseRepresenter, SafeRepresenter, Representer
from .resolver import BaseResolver, Resolver
from .options import DumperOptions


class BaseDumper(Emitter, Serializer, BaseRepresenter, BaseResolver):

    def __init__(self, stream, options=None):
        if options is None:
            options = DumperOptions()
        options.check()
        self.options = options
        Emitter.__init__(self, stream, options)
        Serializer.__init__(self, options)
        BaseRepresenter.__init__(self, options)
        BaseResolver.__init__(self, options)


class SafeDumper(Emitter, Serializer, SafeRepresenter, Resolver):

    def __init__(self, stream, options=None):
        if options is None:
            options = DumperOptions()
        options.check()
        self.options = options
        Emitter.__init__(self, stream, options)
        Serializer.__init__(self, options)
        SafeRepresenter.__init__(self, options)
        Resolver.__init__(self, options)


class Dumper(Emitter, Serializer, Representer, Resolver):

    def __init__(self, stream, options=None):
        if options is None:
            options = DumperOptions()
        options.check()
        self.options = options
        Emitter.__init__(self, stream, options)
        Serializer.__init__(self, options)
        Representer.__init__(self, options)
        Resolver.__init__(self, options)
