"""Version-control client operations used by the publishing targets."""

import shutil
import logging
from pathlib import Path
from typing import List, Sequence, Tuple

from .process import run_command

logger = logging.getLogger(__name__)


class Git:
    """Thin wrapper over the git command line."""

    def __init__(self, command: Sequence[str] = ("git",)):
        self.command = list(command)

    def _run(self, repo_dir: Path, *args: str):
        return run_command(self.command + list(args), cwd=repo_dir)

    def changed_files(self, repo_dir: Path, revision: str = "HEAD") -> List[Tuple[str, str]]:
        """(status, file) pairs for the working copy compared to revision."""
        result = self._run(repo_dir, "diff", revision, "--name-status")
        changes = []
        for line in result.stdout.splitlines():
            if not line.strip():
                continue
            status, _, file_name = line.partition("\t")
            changes.append((status.strip(), file_name.strip()))
        return changes

    def stage_all(self, repo_dir: Path) -> None:
        self._run(repo_dir, "add", ".", "--all")

    def commit(self, repo_dir: Path, message: str) -> None:
        logger.info(f"Committing in {repo_dir}: {message}")
        self._run(repo_dir, "commit", "-m", message)

    def clone_single_branch(self, work_dir: Path, repository: str, branch: str, target_dir: str) -> None:
        logger.info(f"Cloning branch {branch} of {repository} into {target_dir}")
        self._run(work_dir, "clone", "-b", branch, "--single-branch", repository, target_dir)

    def push_branch(self, repo_dir: Path, remote: str, branch: str) -> None:
        logger.info(f"Pushing {branch} to {remote}")
        self._run(repo_dir, "push", remote, branch)

    def full_clean(self, repo_dir: Path) -> None:
        """Remove everything in the working copy except the .git directory."""
        for child in Path(repo_dir).iterdir():
            if child.name == ".git":
                continue
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
