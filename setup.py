"""
Minimal setup.py for backwards compatibility.

All package metadata and dependencies are defined in pyproject.toml.
This file exists only for tools that don't fully support PEP 517/518.
"""

from setuptools import setup

# All configuration is in pyproject.toml
setup()
