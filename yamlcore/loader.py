"""Loader classes: the loading pipeline stages mixed into one object."""

__all__ = ['BaseLoader', 'SafeLoader', 'Loader']

from .reader import Reader
from .scanner import Scanner
from .parser import Parser
from .composer import Composer
from .constructor import BaseConstructor, SafeConstructor, Constructor
from .resolver import BaseResolver, Resolver
from .options import LoaderOptions


class BaseLoader(Reader, Scanner, Parser, Composer, BaseConstructor, BaseResolver):
    """Builds nodes with no implicit typing; every scalar stays a string
    unless a constructor is registered for its tag."""

    def __init__(self, stream, options=None):
        if options is None:
            options = LoaderOptions()
        self.options = options
        Reader.__init__(self, stream)
        Scanner.__init__(self, options)
        Parser.__init__(self, options)
        Composer.__init__(self, options)
        BaseConstructor.__init__(self, options)
        BaseResolver.__init__(self, options)


class SafeLoader(Reader, Scanner, Parser, Composer, SafeConstructor, Resolver):
    """Standard YAML types only."""

    def __init__(self, stream, options=None):
        if options is None:
            options = LoaderOptions()
        self.options = options
        Reader.__init__(self, stream)
        Scanner.__init__(self, options)
        Parser.__init__(self, options)
        Composer.__init__(self, options)
        SafeConstructor.__init__(self, options)
        Resolver.__init__(self, options)


class Loader(Reader, Scanner, Parser, Composer, Constructor, Resolver):
    """Standard types plus Python classes (typed binding and
    ``!!python/object`` tags)."""

    def __init__(self, stream, options=None):
        if options is None:
            options = LoaderOptions()
        self.options = options
        Reader.__init__(self, stream)
        Scanner.__init__(self, options)
        Parser.__init__(self, options)
        Composer.__init__(self, options)
        Constructor.__init__(self, options)
        Resolver.__init__(self, options)
