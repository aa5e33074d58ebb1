"""
Wrappers around the external tools the build targets delegate to.
"""

from dataclasses import dataclass

from ..config.models import BuildConfig
from .docs import DocumentationGenerator, ConsoleMessage
from .git import Git
from .msbuild import MSBuild
from .nuget import NuGet, NuGetParams
from .nunit import NUnit


@dataclass
class Toolchain:
    """The set of tools one build uses; tests swap in fakes."""
    msbuild: MSBuild
    nunit: NUnit
    nuget: NuGet
    git: Git
    docs: DocumentationGenerator

    @classmethod
    def from_config(cls, config: BuildConfig) -> 'Toolchain':
        return cls(
            msbuild=MSBuild(config.tools.msbuild),
            nunit=NUnit(config.nunit),
            nuget=NuGet(config.tools.nuget),
            git=Git(config.tools.git),
            docs=DocumentationGenerator(config.tools.docs, working_dir=config.root_dir),
        )


__all__ = [
    'Toolchain',
    'MSBuild',
    'NUnit',
    'NuGet',
    'NuGetParams',
    'Git',
    'DocumentationGenerator',
    'ConsoleMessage',
]
