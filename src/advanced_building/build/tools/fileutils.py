"""Directory helpers used by the clean and copy targets."""

import shutil
import logging
from pathlib import Path
from typing import Iterable, List

logger = logging.getLogger(__name__)


def ensure_directory(path: Path) -> Path:
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def delete_dir(path: Path) -> None:
    """Delete a directory tree; a missing directory is fine."""
    path = Path(path)
    if path.exists():
        logger.debug(f"Deleting {path}")
        shutil.rmtree(path)


def clean_dir(path: Path) -> None:
    """Leave path as an existing, empty directory."""
    path = Path(path)
    if path.is_dir():
        for child in path.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
    else:
        ensure_directory(path)
    logger.debug(f"Cleaned {path}")


def clean_dirs(paths: Iterable[Path]) -> None:
    for path in paths:
        clean_dir(path)


def copy_recursive(source: Path, target: Path, overwrite: bool = True) -> List[Path]:
    """
    Copy the contents of source into target.

    Returns:
        The files written below target

    Raises:
        FileNotFoundError: If source is not a directory
    """
    source = Path(source)
    if not source.is_dir():
        raise FileNotFoundError(f"Source directory {source} does not exist")
    target = Path(target)
    copied = []
    for item in sorted(source.rglob('*')):
        destination = target / item.relative_to(source)
        if item.is_dir():
            ensure_directory(destination)
            continue
        if destination.exists() and not overwrite:
            continue
        ensure_directory(destination.parent)
        shutil.copy2(item, destination)
        copied.append(destination)
    return copied
