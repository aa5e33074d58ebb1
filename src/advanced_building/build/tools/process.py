"""Blocking process execution shared by all tool wrappers."""

import os
import logging
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

from ..config.exceptions import ToolFailedException

logger = logging.getLogger(__name__)


def run_command(cmd: List[str], cwd: Optional[Path] = None, env: Optional[Dict[str, str]] = None,
                timeout: Optional[float] = None, check: bool = True) -> subprocess.CompletedProcess:
    """
    Run a tool and wait for it.

    Args:
        cmd: Command line as a list of arguments
        cwd: Working directory
        env: Extra environment variables layered over os.environ
        timeout: Seconds before the process is killed
        check: Raise ToolFailedException on a non-zero exit code

    Raises:
        ToolFailedException: If the tool cannot be started, times out, or
            (with check) exits non-zero
    """
    tool = Path(cmd[0]).name
    cmd = [str(part) for part in cmd]
    logger.debug(f"Running {' '.join(cmd)} (cwd={cwd or Path.cwd()})")

    process_env = None
    if env:
        process_env = dict(os.environ)
        process_env.update(env)

    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            env=process_env,
            capture_output=True,
            text=True,
            timeout=timeout
        )
    except FileNotFoundError:
        raise ToolFailedException(f"{tool} not found, is it installed and on PATH?", tool=tool)
    except subprocess.TimeoutExpired as e:
        raise ToolFailedException(f"{tool} timed out after {timeout} seconds", tool=tool,
                                  output=e.stdout if isinstance(e.stdout, str) else None)

    for line in result.stdout.splitlines():
        logger.debug(f"{tool}: {line}")

    if check and result.returncode != 0:
        for line in result.stderr.splitlines():
            logger.error(f"{tool}: {line}")
        raise ToolFailedException(
            f"{tool} exited with code {result.returncode}",
            tool=tool,
            returncode=result.returncode,
            output=result.stdout,
        )
    return result
