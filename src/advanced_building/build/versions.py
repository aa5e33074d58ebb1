"""
Assembly version stamping.

Generates the shared assembly-info source files (C# or F#, chosen by file
suffix) so every project in the solution is built with the release version.
"""

import logging
from pathlib import Path
from typing import List, Tuple

from .config.models import BuildConfig

logger = logging.getLogger(__name__)


def _escape(value: str) -> str:
    return value.replace('\\', '\\\\').replace('"', '\\"')


def numeric_version(version: str) -> str:
    """AssemblyVersion only accepts the numeric part (1.2.3 of 1.2.3-beta1)."""
    return version.split('-', 1)[0].split('+', 1)[0]


def assembly_attributes(config: BuildConfig) -> List[Tuple[str, str]]:
    return [
        ("AssemblyTitle", config.project_name),
        ("AssemblyProduct", config.project_name),
        ("AssemblyCompany", ", ".join(config.project_authors)),
        ("AssemblyCopyright", config.copyright_notice),
        ("AssemblyVersion", numeric_version(config.version)),
        ("AssemblyFileVersion", numeric_version(config.version)),
        ("AssemblyInformationalVersion", config.version),
    ]


def render_csharp(config: BuildConfig) -> str:
    lines = [
        "// <auto-generated/>",
        "using System;",
        "using System.Reflection;",
        "",
    ]
    for name, value in assembly_attributes(config):
        lines.append(f'[assembly: {name}Attribute("{_escape(value)}")]')
    lines.extend([
        "namespace System {",
        "    internal static class AssemblyVersionInformation {",
        f'        internal const string Version = "{_escape(numeric_version(config.version))}";',
        f'        internal const string InformationalVersion = "{_escape(config.version)}";',
        "    }",
        "}",
        "",
    ])
    return "\n".join(lines)


def render_fsharp(config: BuildConfig) -> str:
    lines = [
        "// <auto-generated/>",
        "namespace System",
        "open System.Reflection",
        "",
    ]
    for name, value in assembly_attributes(config):
        lines.append(f'[<assembly: {name}Attribute("{_escape(value)}")>]')
    lines.extend([
        "do ()",
        "",
        "module internal AssemblyVersionInformation =",
        f'    let [<Literal>] Version = "{_escape(numeric_version(config.version))}"',
        f'    let [<Literal>] InformationalVersion = "{_escape(config.version)}"',
        "",
    ])
    return "\n".join(lines)


def set_assembly_file_versions(config: BuildConfig) -> List[Path]:
    """
    Write every configured assembly-info file.

    Returns:
        The files that were written

    Raises:
        ValueError: If a file has a suffix other than .cs or .fs
    """
    written = []
    for relative in config.assembly_info_files:
        target = config.root_dir / relative
        if target.suffix == ".cs":
            content = render_csharp(config)
        elif target.suffix == ".fs":
            content = render_fsharp(config)
        else:
            raise ValueError(f"Unsupported assembly info file type: {relative}")

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding='utf-8')
        logger.info(f"Set version {config.version} in {target}")
        written.append(target)
    return written
