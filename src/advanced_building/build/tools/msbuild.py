"""Compiler invocation (msbuild / xbuild)."""

import logging
from pathlib import Path
from typing import Dict, List, Sequence

from .process import run_command

logger = logging.getLogger(__name__)


class MSBuild:
    """Builds project files into a single output directory."""

    def __init__(self, command: Sequence[str] = ("msbuild",)):
        self.command = list(command)

    def build_command(self, project: Path, output_dir: Path, target: str,
                      properties: Dict[str, str]) -> List[str]:
        cmd = self.command + [str(project), f"/t:{target}", f"/p:OutputPath={output_dir}/"]
        for key, value in properties.items():
            cmd.append(f"/p:{key}={value}")
        return cmd

    def build(self, projects: Sequence[Path], output_dir: Path, target: str = "Build",
              properties: Dict[str, str] = None) -> List[Path]:
        """
        Build each project in turn.

        Returns:
            Every file present in output_dir afterwards

        Raises:
            ToolFailedException: On the first project that fails to build
        """
        properties = properties or {}
        output_dir = Path(output_dir).resolve()
        for project in projects:
            logger.info(f"Building project: {project}")
            run_command(self.build_command(project, output_dir, target, properties),
                        cwd=Path(project).parent)
        if not output_dir.exists():
            return []
        return sorted(path for path in output_dir.rglob('*') if path.is_file())
