#!/usr/bin/env python3
"""
Setup script for safe_yaml.

safe_yaml uses PyYAML only as a grammar parser (its event stream) and
resolves every node itself, so untrusted documents never instantiate
types that were not explicitly allowed.

Install for development:
    pip install -e .[test]
"""

import os
import re

from setuptools import setup


def read_version():
    """Read __version__ from the package without importing it."""
    here = os.path.dirname(os.path.abspath(__file__))
    with open(os.path.join(here, 'safe_yaml', '__init__.py'), encoding='utf-8') as f:
        match = re.search(r'^__version__ = "([^"]+)"', f.read(), re.MULTILINE)
    if not match:
        raise RuntimeError("unable to find __version__ in safe_yaml/__init__.py")
    return match.group(1)


setup(
    name='safe-yaml-resolver',
    version=read_version(),
    description='Policy-enforcing YAML loader: safe scalar typing and tag allow-lists',
    packages=['safe_yaml'],
    python_requires='>=3.8',
    install_requires=['PyYAML>=5.1'],
    extras_require={'test': ['pytest']},
)
