"""
Centralized logging configuration.

bootstrap_logging() is called from every entry point so build targets log the
same way whether they run from the CLI or from tests.
"""

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Optional

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
DEFAULT_FORMAT = '%(levelname)s: %(name)s: %(message)s'


def _find_logging_config() -> Optional[Path]:
    """
    Find the logging configuration file.

    Looks for logging.ini in the current working directory, then next to
    the build configuration.

    Returns:
        Path to logging configuration file, or None if not found.
    """
    current_dir_config = Path('logging.ini')
    if current_dir_config.exists():
        return current_dir_config

    build_config = os.environ.get('BUILD_CONFIG')
    if build_config:
        beside_config = Path(build_config).parent / 'logging.ini'
        if beside_config.exists():
            return beside_config

    return None


def _setup_environment_variables():
    """
    Set LOG_LEVEL to INFO if not already set, ensuring the INI file has a valid value.
    """
    if 'LOG_LEVEL' not in os.environ:
        os.environ['LOG_LEVEL'] = 'INFO'

    log_level = os.environ['LOG_LEVEL'].strip().upper()
    if log_level not in LOG_LEVELS:
        print(f"Warning: Invalid LOG_LEVEL '{log_level}', using INFO", file=sys.stderr)
        os.environ['LOG_LEVEL'] = 'INFO'


def _apply_level_override():
    env_level = os.environ.get('LOG_LEVEL', '').strip().upper()
    if env_level not in LOG_LEVELS:
        return
    level = getattr(logging, env_level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        if isinstance(handler, logging.StreamHandler):
            handler.setLevel(level)
    logging.getLogger('advanced_building').setLevel(level)


def bootstrap_logging(name: Optional[str] = None) -> None:
    """
    Bootstrap logging configuration using Python's native INI format.

    This function:
    1. Sets up LOG_LEVEL for INI file substitution
    2. Loads logging.ini with logging.config.fileConfig() when one exists
    3. Falls back to basicConfig on stderr otherwise
    4. Applies the LOG_LEVEL override last

    Args:
        name: Optional name for the logger (defaults to root logger)
    """
    _setup_environment_variables()

    config_path = _find_logging_config()

    if config_path is None:
        logging.basicConfig(
            level=logging.INFO,
            format=DEFAULT_FORMAT,
            stream=sys.stderr
        )
        _apply_level_override()
        return

    try:
        logging.config.fileConfig(
            str(config_path),
            defaults={'LOG_LEVEL': os.environ['LOG_LEVEL']},
            disable_existing_loggers=False
        )
    except Exception as e:
        print(f"Warning: Failed to load logging config from {config_path}: {e}", file=sys.stderr)
        print("Using basic logging configuration", file=sys.stderr)
        logging.basicConfig(
            level=logging.INFO,
            format=DEFAULT_FORMAT,
            stream=sys.stderr
        )

    _apply_level_override()

    if name:
        logging.getLogger(name).debug(f"Logging configured for {name} from {config_path}")
    else:
        logging.debug(f"Logging configured for root logger from {config_path}")

