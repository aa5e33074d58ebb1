"""Tests for assembly version stamping."""

import pytest

from advanced_building.build.versions import (
    numeric_version,
    render_csharp,
    render_fsharp,
    set_assembly_file_versions,
)


def test_numeric_version_drops_prerelease_suffix():
    assert numeric_version("1.2.3") == "1.2.3"
    assert numeric_version("2.0.0-beta1") == "2.0.0"
    assert numeric_version("2.0.0+build.5") == "2.0.0"


def test_csharp_attributes(config):
    config = config.model_copy(update={'version': '2.0.0-beta1'})

    content = render_csharp(config)

    assert '[assembly: AssemblyTitleAttribute("Yaaf.Sample")]' in content
    assert '[assembly: AssemblyCompanyAttribute("Jane Doe, John Roe")]' in content
    assert '[assembly: AssemblyVersionAttribute("2.0.0")]' in content
    assert '[assembly: AssemblyInformationalVersionAttribute("2.0.0-beta1")]' in content
    assert 'internal const string Version = "2.0.0";' in content


def test_fsharp_attributes(config):
    content = render_fsharp(config)

    assert content.splitlines()[1] == "namespace System"
    assert '[<assembly: AssemblyFileVersionAttribute("1.2.3")>]' in content
    assert 'let [<Literal>] Version = "1.2.3"' in content


def test_quotes_are_escaped(config):
    config = config.model_copy(update={'copyright_notice': 'Copyright "Jane"'})

    assert 'AssemblyCopyrightAttribute("Copyright \\"Jane\\"")' in render_csharp(config)


def test_writes_every_configured_file(config):
    config = config.model_copy(update={
        'assembly_info_files': ["src/SharedAssemblyInfo.cs", "src/SharedAssemblyInfo.fs"],
    })

    written = set_assembly_file_versions(config)

    assert [path.name for path in written] == ["SharedAssemblyInfo.cs", "SharedAssemblyInfo.fs"]
    assert "[<assembly:" in (config.root_dir / "src" / "SharedAssemblyInfo.fs").read_text()


def test_unknown_file_type_is_rejected(config):
    config = config.model_copy(update={'assembly_info_files': ["src/AssemblyInfo.vb"]})

    with pytest.raises(ValueError, match="AssemblyInfo.vb"):
        set_assembly_file_versions(config)
