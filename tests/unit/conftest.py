"""
Unit test fixtures: a throwaway .NET project layout and a fake toolchain.
"""

from unittest.mock import MagicMock

import pytest

from advanced_building.build.config.loading import load_build_config
from advanced_building.build.tools import Toolchain
from .util import BUILD_YAML, write_build_yaml


@pytest.fixture
def project_dir(tmp_path):
    """A project root with build.yaml and a nuspec template."""
    write_build_yaml(tmp_path, BUILD_YAML)
    (tmp_path / "nuget").mkdir()
    (tmp_path / "nuget" / "Yaaf.Sample.nuspec").write_text(
        "<package><metadata><id>@project@</id><version>@build.number@</version></metadata></package>"
    )
    return tmp_path


@pytest.fixture
def config(project_dir):
    return load_build_config(str(project_dir / "build.yaml"))


@pytest.fixture
def tools():
    """Toolchain whose tools record calls instead of starting processes."""
    toolchain = Toolchain(
        msbuild=MagicMock(),
        nunit=MagicMock(),
        nuget=MagicMock(),
        git=MagicMock(),
        docs=MagicMock(),
    )
    toolchain.msbuild.build.return_value = []
    toolchain.docs.generate.return_value = (True, [])
    toolchain.git.changed_files.return_value = []
    return toolchain
