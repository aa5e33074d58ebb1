"""Documentation generator, run as a separate process."""

from pathlib import Path
from typing import List, Sequence, Tuple

from pydantic import BaseModel

from .process import run_command


class ConsoleMessage(BaseModel):
    """One line of generator output."""
    is_error: bool
    message: str


class DocumentationGenerator:
    """Runs the documentation script with the documentation target as a build parameter."""

    def __init__(self, command: Sequence[str] = ("fsharpi", "generateDocs.fsx"), working_dir: Path = None):
        self.command = list(command)
        self.working_dir = working_dir

    def generate(self, target: str) -> Tuple[bool, List[ConsoleMessage]]:
        """
        Returns:
            (success, messages) with stdout lines as non-error and stderr
            lines as error messages
        """
        result = run_command(self.command, cwd=self.working_dir, env={"target": target}, check=False)
        messages = [ConsoleMessage(is_error=False, message=line) for line in result.stdout.splitlines()]
        messages.extend(ConsoleMessage(is_error=True, message=line) for line in result.stderr.splitlines())
        return result.returncode == 0, messages
