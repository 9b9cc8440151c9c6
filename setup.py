#!/usr/bin/env python3
"""
Setup script for yamlcore.

yamlcore is a pure-Python YAML 1.1 processing engine: reader, scanner,
parser, composer and constructor for loading; representer, serializer and
emitter for dumping.  There is no C extension to build.

Install for development with:

    pip install -e .[test]
"""

import os
import re
from setuptools import setup


def read_version():
    """Read __version__ from the package without importing it."""
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                        'yamlcore', '__init__.py')
    with open(path, encoding='utf-8') as f:
        match = re.search(r"^__version__ = '([^']+)'", f.read(), re.M)
    if match is None:
        raise RuntimeError("Unable to find __version__ in %s" % path)
    return match.group(1)


setup(
    name='yamlcore',
    version=read_version(),
    description='Round-trip YAML 1.1 processing engine',
    packages=['yamlcore'],
    python_requires='>=3.8',
    install_requires=[],
    extras_require={
        'test': ['pytest'],
    },
)
