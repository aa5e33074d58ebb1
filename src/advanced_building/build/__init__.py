"""
Build package for advanced-building.

This package contains the configuration layer, the target graph and the
targets that drive the external .NET tooling.
"""

from .graph import TargetGraph, Target, single_name
from .targets import BuildTargets, build_graph

__all__ = [
    'TargetGraph',
    'Target',
    'single_name',
    'BuildTargets',
    'build_graph',
]
