"""
Build configuration loading: project build.yaml merged over packaged defaults.
"""
import os
import re
import shutil
import logging
from pathlib import Path
from typing import Dict, Any, Optional

import yaml
from pydantic import ValidationError

from .exceptions import (
    ConfigFileNotFoundException,
    InvalidConfigException,
    ScaffoldMissingException,
)
from .models import BuildConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "BUILD_CONFIG"
CONFIG_FILE_NAME = "build.yaml"
DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"
NUGET_SCAFFOLD = "./packages/Yaaf.AdvancedBuilding/scaffold/nuget"
ASSEMBLY_INFO_SUFFIXES = (".cs", ".fs")

_RELEASE_NOTES_VERSION = re.compile(
    r"^\s*(?:###|\*)\s+v?(\d+(?:\.\d+)+(?:-[0-9A-Za-z.\-]+)?)"
)


def get_config_path(config_path: Optional[str] = None) -> Path:
    """Resolve which build.yaml to load (argument, BUILD_CONFIG, then cwd)."""
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR)
    if config_path is None:
        return Path.cwd() / CONFIG_FILE_NAME
    return Path(config_path).resolve()


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidConfigException(f"Failed to parse YAML: {e}", path=str(path))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigException("Top level of the file must be a mapping", path=str(path))
    return data


def merge_settings(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Merge overrides into defaults; nested mappings merge, everything else is replaced."""
    merged = dict(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = value
    return merged


def read_release_notes_version(path: Path) -> Optional[str]:
    """Return the newest version listed in a release notes file, if any."""
    if not path.exists():
        return None
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            match = _RELEASE_NOTES_VERSION.match(line)
            if match:
                return match.group(1)
    return None


def read_release_notes(path: Path) -> str:
    """
    Return the notes of the newest release, one per line.

    Handles both "### 1.2.0" sections followed by bullet lines and single-line
    "* 1.2.0 - notes" entries. A missing file yields an empty string.
    """
    if not path.exists():
        return ""
    notes = []
    in_newest = False
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            match = _RELEASE_NOTES_VERSION.match(line)
            if match:
                if in_newest:
                    break
                in_newest = True
                if line.lstrip().startswith('*'):
                    inline = line[match.end():].strip().lstrip('-').strip()
                    if inline:
                        notes.append(inline)
                continue
            if in_newest and line.strip():
                notes.append(line.strip().lstrip('*').strip())
    return "\n".join(notes)


def load_build_config(config_path: Optional[str] = None) -> BuildConfig:
    """
    Load the project's build configuration with defaults filled in.

    Relative paths are resolved against the directory holding build.yaml.

    Raises:
        ConfigFileNotFoundException: If build.yaml does not exist
        InvalidConfigException: If the file is not valid YAML, fails validation,
            no version can be determined, or an assembly info file type is
            not supported
    """
    path = get_config_path(config_path)
    if not path.exists():
        raise ConfigFileNotFoundException(f"Build configuration not found: {path}", path=str(path))

    logger.debug(f"Loading build configuration from {path}")
    settings = merge_settings(_load_yaml(DEFAULTS_PATH), _load_yaml(path))
    root_dir = path.parent.resolve()
    settings['root_dir'] = root_dir

    try:
        config = BuildConfig(**settings)
    except ValidationError as e:
        raise InvalidConfigException(str(e), path=str(path))

    resolved = {
        name: value if value.is_absolute() else root_dir / value
        for name, value in config.path_settings().items()
    }
    config = config.model_copy(update=resolved)

    if not config.version:
        version = read_release_notes_version(root_dir / config.release_notes_file)
        if version is None:
            raise InvalidConfigException(
                f"No 'version' set and no version found in {config.release_notes_file}",
                path=str(path),
            )
        config = config.model_copy(update={'version': version})

    unsupported = [name for name in config.assembly_info_files
                   if Path(name).suffix not in ASSEMBLY_INFO_SUFFIXES]
    if unsupported:
        raise InvalidConfigException(
            f"Unsupported assembly_info_files {unsupported}, use .cs or .fs files", path=str(path))

    names = [params.simple_build_name for params in config.build_targets]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise InvalidConfigException(f"Duplicate build target names: {duplicates}", path=str(path))

    logger.info(f"Loaded build configuration for {config.project_name} {config.version}")
    return config


def find_tool_in_sub_path(tool_name: str, root: Path, default: Path) -> Path:
    """Find a tool file anywhere below root, falling back to default."""
    if not Path(root).is_dir():
        return default
    for candidate in sorted(Path(root).rglob(tool_name)):
        if candidate.is_file():
            return candidate
    return default


def ensure_scaffold(config: BuildConfig) -> None:
    """
    Check the scaffold files the build relies on.

    With use_nuget enabled, NuGet.exe is copied to src/.nuget so the project
    files' restore step can find it.

    Raises:
        ScaffoldMissingException: If src/.nuget or NuGet.exe is missing
    """
    if not config.use_nuget:
        return

    default_nuget = config.global_packages_dir / "NuGet.CommandLine" / "tools" / "NuGet.exe"
    nuget = find_tool_in_sub_path("NuGet.exe", config.global_packages_dir, default_nuget)
    nuget_dir = config.root_dir / "src" / ".nuget"

    if not nuget_dir.is_dir():
        raise ScaffoldMissingException(
            'you set use_nuget to true but there is no "./src/.nuget/NuGet.targets" '
            'or "./src/.nuget/NuGet.Config"!',
            path=str(nuget_dir),
            scaffold=NUGET_SCAFFOLD,
        )
    if not nuget.exists():
        raise ScaffoldMissingException(
            f"you set use_nuget to true but NuGet.exe was not found (expected {nuget})",
            path=str(nuget),
            scaffold="the NuGet.CommandLine package (restore build dependencies first)",
        )

    shutil.copyfile(nuget, nuget_dir / "NuGet.exe")
    logger.debug(f"Copied {nuget} to {nuget_dir}")
