"""
Build configuration: models, loading with defaults, and error types.
"""

from .models import BuildConfig, BuildParams, NugetPackage, NugetDependency, NUnitSettings, ToolCommands
from .loading import load_build_config, ensure_scaffold
from .exceptions import ConfigException, BuildException, ToolFailedException

__all__ = [
    'BuildConfig',
    'BuildParams',
    'NugetPackage',
    'NugetDependency',
    'NUnitSettings',
    'ToolCommands',
    'load_build_config',
    'ensure_scaffold',
    'ConfigException',
    'BuildException',
    'ToolFailedException',
]
