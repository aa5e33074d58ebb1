"""
Command line entry point.

Loads the project's build.yaml, registers the targets, and hands the
resulting task collection to an invoke Program:

    advanced-build                 # runs All
    advanced-build NuGet           # runs NuGet and everything it depends on
    advanced-build NuGet_single    # runs only NuGet, without prompts
    advanced-build --list          # lists every target
"""

import sys
import logging
from typing import List, Optional

from invoke import Program

from . import __version__
from .build.config.exceptions import ConfigException, BuildException
from .build.config.loading import load_build_config, ensure_scaffold
from .build.config.logging import bootstrap_logging
from .build.targets import build_graph

logger = logging.getLogger(__name__)

PROGRAM_NAME = "advanced-build"


def main(argv: Optional[List[str]] = None, tools=None) -> None:
    """Run the requested target (All when none is given)."""
    bootstrap_logging()

    try:
        config = load_build_config()
        ensure_scaffold(config)
        graph = build_graph(config, tools)
        namespace = graph.to_collection()
    except ConfigException as e:
        print(e.guidance, file=sys.stderr)
        sys.exit(1)

    logger.info(f"Building {config.project_name} version {config.version}")
    program = Program(
        version=__version__,
        namespace=namespace,
        name=PROGRAM_NAME,
        binary=PROGRAM_NAME,
    )
    try:
        program.run(argv)
    except BuildException as e:
        logger.error(f"Build failed: {e}")
        sys.exit(1)
    finally:
        graph.log_time_report()


if __name__ == "__main__":
    main()
