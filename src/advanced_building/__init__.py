"""
Build orchestration targets for .NET libraries.
"""

__version__ = '0.1.0'
