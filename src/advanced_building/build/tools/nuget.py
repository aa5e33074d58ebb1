"""NuGet restore, pack and push."""

import logging
from pathlib import Path
from typing import List, Optional, Sequence
from xml.sax.saxutils import escape, quoteattr

from pydantic import BaseModel

from ..config.models import NugetDependency
from .process import run_command

logger = logging.getLogger(__name__)


class NuGetParams(BaseModel):
    """Metadata filled into a .nuspec template for one package."""
    project: str
    version: str
    authors: List[str] = []
    summary: str = ""
    description: str = ""
    tags: str = ""
    copyright: str = ""
    release_notes: str = ""
    dependencies: List[NugetDependency] = []
    working_dir: Path = Path(".")
    output_path: Path = Path(".")
    access_key: str = ""
    publish: bool = False

    def package_file_name(self) -> str:
        return f"{self.project}.{self.version}.nupkg"


def render_dependencies(dependencies: Sequence[NugetDependency]) -> str:
    if not dependencies:
        return ""
    entries = "".join(
        f"<dependency id={quoteattr(dep.id)} version={quoteattr(dep.version)} />"
        for dep in dependencies
    )
    return f"<dependencies>{entries}</dependencies>"


def render_nuspec(template: str, params: NuGetParams) -> str:
    """Replace the @placeholder@ markers of a .nuspec template."""
    replacements = {
        "@build.number@": escape(params.version),
        "@version@": escape(params.version),
        "@project@": escape(params.project),
        "@authors@": escape(", ".join(params.authors)),
        "@summary@": escape(params.summary),
        "@description@": escape(params.description),
        "@tags@": escape(params.tags),
        "@copyright@": escape(params.copyright),
        "@releaseNotes@": escape(params.release_notes),
        "@dependencies@": render_dependencies(params.dependencies),
    }
    for marker, value in replacements.items():
        template = template.replace(marker, value)
    return template


class NuGet:
    """The NuGet command line client."""

    def __init__(self, command: Sequence[str] = ("nuget",)):
        self.command = list(command)

    def restore(self, packages_config: Path, output_path: Path) -> None:
        logger.info(f"Restoring packages from {packages_config}")
        run_command(self.command + ["install", str(packages_config),
                                    "-OutputDirectory", str(output_path)],
                    cwd=Path(packages_config).parent)

    def pack(self, nuspec_template: Path, params: NuGetParams) -> Path:
        """
        Render the template, pack it, and push it when publishing is enabled.

        Returns:
            Path of the produced .nupkg
        """
        output_path = Path(params.output_path)
        output_path.mkdir(parents=True, exist_ok=True)

        template = Path(nuspec_template).read_text(encoding='utf-8')
        nuspec = output_path / Path(nuspec_template).name
        nuspec.write_text(render_nuspec(template, params), encoding='utf-8')

        logger.info(f"Creating NuGet package {params.package_file_name()}")
        run_command(self.command + [
            "pack", str(nuspec),
            "-Version", params.version,
            "-OutputDirectory", str(output_path),
            "-BasePath", str(Path(params.working_dir).resolve()),
            "-NoPackageAnalysis",
        ], cwd=params.working_dir)

        package = output_path / params.package_file_name()
        if params.publish:
            self.push(package, params.access_key)
        return package

    def push(self, package: Path, access_key: str, source: Optional[str] = None) -> None:
        logger.info(f"Publishing {package.name}")
        cmd = self.command + ["push", str(package), access_key]
        if source:
            cmd.extend(["-Source", source])
        run_command(cmd)
