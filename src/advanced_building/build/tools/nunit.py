"""NUnit console runner."""

import os
import logging
from pathlib import Path
from typing import List, Sequence

from ..config.models import NUnitSettings
from .process import run_command

logger = logging.getLogger(__name__)


class NUnit:
    """Runs compiled test assemblies, failing on the first error."""

    def __init__(self, settings: NUnitSettings = None):
        self.settings = settings or NUnitSettings()

    def process_model(self) -> str:
        if self.settings.process_model:
            return self.settings.process_model
        # the default nunit-console config does not run .NET 4 assemblies on mono
        return "Default" if os.name == "nt" else "Single"

    def build_command(self, assemblies: Sequence[Path], output_file: str) -> List[str]:
        settings = self.settings
        cmd = list(settings.tool) + [str(assembly) for assembly in assemblies]
        cmd.extend([
            "/nologo",
            f"/framework:{settings.framework}",
            f"/process:{self.process_model()}",
            f"/xml:{output_file}",
        ])
        if settings.disable_shadow_copy:
            cmd.append("/noshadow")
        if settings.stop_on_error:
            cmd.append("/stoponerror")
        if settings.exclude_category:
            cmd.append(f"/exclude:{settings.exclude_category}")
        cmd.extend(settings.extra_args)
        return cmd

    def run(self, assemblies: Sequence[Path], working_dir: Path,
            output_file: str = "logs/TestResults.xml") -> None:
        """
        Raises:
            ToolFailedException: If any test fails or the run times out
        """
        logger.info(f"Running {len(assemblies)} test assemblies in {working_dir}")
        run_command(
            self.build_command(assemblies, output_file),
            cwd=working_dir,
            timeout=self.settings.timeout_minutes * 60,
        )
