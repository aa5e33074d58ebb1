"""Tests for the external tool wrappers, with process execution patched out."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from advanced_building.build.config.exceptions import ToolFailedException
from advanced_building.build.config.models import NugetDependency, NUnitSettings
from advanced_building.build.tools import DocumentationGenerator, Git, MSBuild, NuGet, NuGetParams, NUnit
from advanced_building.build.tools.fileutils import clean_dir, copy_recursive
from advanced_building.build.tools.nuget import render_nuspec
from advanced_building.build.tools.process import run_command


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestRunCommand:

    @patch("advanced_building.build.tools.process.subprocess.run")
    def test_success_returns_result(self, mock_run):
        mock_run.return_value = completed(stdout="ok\n")

        result = run_command(["msbuild", "Lib.csproj"], cwd=Path("/src"))

        assert result.stdout == "ok\n"
        args, kwargs = mock_run.call_args
        assert args[0] == ["msbuild", "Lib.csproj"]
        assert kwargs["cwd"] == str(Path("/src"))
        assert kwargs["capture_output"] is True

    @patch("advanced_building.build.tools.process.subprocess.run")
    def test_non_zero_exit_raises(self, mock_run):
        mock_run.return_value = completed(returncode=3, stderr="boom")

        with pytest.raises(ToolFailedException) as exc_info:
            run_command(["nunit-console", "a.dll"])

        assert exc_info.value.returncode == 3
        assert exc_info.value.tool == "nunit-console"

    @patch("advanced_building.build.tools.process.subprocess.run")
    def test_non_zero_exit_allowed_without_check(self, mock_run):
        mock_run.return_value = completed(returncode=1)

        assert run_command(["fsharpi"], check=False).returncode == 1

    @patch("advanced_building.build.tools.process.subprocess.run")
    def test_missing_tool_raises(self, mock_run):
        mock_run.side_effect = FileNotFoundError("msbuild")

        with pytest.raises(ToolFailedException, match="not found"):
            run_command(["msbuild"])

    @patch("advanced_building.build.tools.process.subprocess.run")
    def test_timeout_raises(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="nunit-console", timeout=1)

        with pytest.raises(ToolFailedException, match="timed out"):
            run_command(["nunit-console"], timeout=1)

    @patch("advanced_building.build.tools.process.subprocess.run")
    def test_extra_environment_is_layered(self, mock_run, monkeypatch):
        monkeypatch.setenv("PATH_MARKER", "kept")
        mock_run.return_value = completed()

        run_command(["fsharpi"], env={"target": "LocalDoc"})

        env = mock_run.call_args.kwargs["env"]
        assert env["target"] == "LocalDoc"
        assert env["PATH_MARKER"] == "kept"


class TestMSBuild:

    def test_command_line(self):
        cmd = MSBuild(["xbuild"]).build_command(
            Path("src/Lib/Lib.csproj"), Path("/out/net45"), "Build",
            {"Configuration": "Release", "CustomBuildName": "net45"})

        assert cmd == [
            "xbuild", "src/Lib/Lib.csproj", "/t:Build", "/p:OutputPath=/out/net45/",
            "/p:Configuration=Release", "/p:CustomBuildName=net45",
        ]

    def test_build_returns_output_files(self, tmp_path):
        output_dir = tmp_path.resolve() / "build" / "net45"
        output_dir.mkdir(parents=True)
        (output_dir / "Lib.dll").write_bytes(b"MZ")
        project = tmp_path / "Lib.csproj"

        with patch("advanced_building.build.tools.msbuild.run_command") as mock_run:
            outputs = MSBuild().build([project], output_dir)

        assert outputs == [output_dir / "Lib.dll"]
        assert mock_run.call_args.kwargs["cwd"] == tmp_path


class TestNUnit:

    def test_command_line(self):
        nunit = NUnit(NUnitSettings(process_model="Single", exclude_category="VBNET"))

        cmd = nunit.build_command([Path("Lib.Test.dll")], "logs/TestResults.xml")

        assert cmd[:2] == ["nunit-console", "Lib.Test.dll"]
        assert "/framework:4.0" in cmd
        assert "/process:Single" in cmd
        assert "/xml:logs/TestResults.xml" in cmd
        assert "/noshadow" in cmd
        assert "/stoponerror" in cmd
        assert "/exclude:VBNET" in cmd

    def test_run_applies_timeout_and_working_dir(self, tmp_path):
        nunit = NUnit(NUnitSettings(timeout_minutes=2))

        with patch("advanced_building.build.tools.nunit.run_command") as mock_run:
            nunit.run([tmp_path / "Lib.Test.dll"], working_dir=tmp_path)

        assert mock_run.call_args.kwargs["timeout"] == 120
        assert mock_run.call_args.kwargs["cwd"] == tmp_path


class TestNuGet:

    def params(self, tmp_path, **overrides):
        values = dict(
            project="Yaaf.Sample",
            version="1.2.3",
            authors=["Jane Doe"],
            summary="Sample & more",
            dependencies=[NugetDependency(id="FSharp.Core", version="4.0.0")],
            working_dir=tmp_path,
            output_path=tmp_path / "release" / "nuget",
        )
        values.update(overrides)
        return NuGetParams(**values)

    def test_render_nuspec_replaces_placeholders(self, tmp_path):
        template = ("<id>@project@</id><version>@build.number@</version>"
                    "<authors>@authors@</authors><summary>@summary@</summary>@dependencies@")

        rendered = render_nuspec(template, self.params(tmp_path))

        assert "<id>Yaaf.Sample</id>" in rendered
        assert "<version>1.2.3</version>" in rendered
        assert "<summary>Sample &amp; more</summary>" in rendered
        assert '<dependency id="FSharp.Core" version="4.0.0" />' in rendered
        assert "@" not in rendered

    def test_pack_without_key_does_not_push(self, tmp_path):
        template = tmp_path / "Yaaf.Sample.nuspec"
        template.write_text("<id>@project@</id>")

        with patch("advanced_building.build.tools.nuget.run_command") as mock_run:
            package = NuGet().pack(template, self.params(tmp_path))

        assert package == tmp_path / "release" / "nuget" / "Yaaf.Sample.1.2.3.nupkg"
        assert (tmp_path / "release" / "nuget" / "Yaaf.Sample.nuspec").read_text() == "<id>Yaaf.Sample</id>"
        assert mock_run.call_count == 1
        assert mock_run.call_args.args[0][:2] == ["nuget", "pack"]

    def test_pack_with_key_pushes(self, tmp_path):
        template = tmp_path / "Yaaf.Sample.nuspec"
        template.write_text("<id>@project@</id>")
        params = self.params(tmp_path, access_key="secret", publish=True)

        with patch("advanced_building.build.tools.nuget.run_command") as mock_run:
            NuGet().pack(template, params)

        push = mock_run.call_args_list[-1].args[0]
        assert push[:2] == ["nuget", "push"]
        assert push[-1] == "secret"

    def test_restore_installs_into_output_path(self, tmp_path):
        with patch("advanced_building.build.tools.nuget.run_command") as mock_run:
            NuGet(["mono", "NuGet.exe"]).restore(tmp_path / "packages.config", tmp_path / "packages")

        assert mock_run.call_args.args[0] == [
            "mono", "NuGet.exe", "install", str(tmp_path / "packages.config"),
            "-OutputDirectory", str(tmp_path / "packages"),
        ]


class TestGit:

    def test_changed_files_parses_name_status(self, tmp_path):
        output = "M\tsrc/SharedAssemblyInfo.cs\nA\tdoc/new.md\n\n"
        with patch("advanced_building.build.tools.git.run_command", return_value=completed(stdout=output)) as mock_run:
            changes = Git().changed_files(tmp_path)

        assert changes == [("M", "src/SharedAssemblyInfo.cs"), ("A", "doc/new.md")]
        assert mock_run.call_args.args[0] == ["git", "diff", "HEAD", "--name-status"]

    def test_clone_single_branch(self, tmp_path):
        with patch("advanced_building.build.tools.git.run_command") as mock_run:
            Git().clone_single_branch(tmp_path, "git@github.com:u/p.git", "gh-pages", "gh-pages")

        assert mock_run.call_args.args[0] == [
            "git", "clone", "-b", "gh-pages", "--single-branch", "git@github.com:u/p.git", "gh-pages",
        ]

    def test_full_clean_keeps_git_directory(self, tmp_path):
        (tmp_path / ".git").mkdir()
        (tmp_path / ".git" / "HEAD").write_text("ref: refs/heads/gh-pages")
        (tmp_path / "css").mkdir()
        (tmp_path / "index.html").write_text("old")

        Git().full_clean(tmp_path)

        assert [path.name for path in tmp_path.iterdir()] == [".git"]


class TestDocumentationGenerator:

    def test_output_lines_are_tagged(self, tmp_path):
        result = completed(returncode=0, stdout="one\ntwo\n", stderr="warn\n")
        with patch("advanced_building.build.tools.docs.run_command", return_value=result) as mock_run:
            ok, messages = DocumentationGenerator(["fsharpi", "generateDocs.fsx"], tmp_path).generate("LocalDoc")

        assert ok is True
        assert [(m.is_error, m.message) for m in messages] == [(False, "one"), (False, "two"), (True, "warn")]
        assert mock_run.call_args.kwargs["env"] == {"target": "LocalDoc"}
        assert mock_run.call_args.kwargs["check"] is False

    def test_failure_is_reported(self, tmp_path):
        with patch("advanced_building.build.tools.docs.run_command", return_value=completed(returncode=1)):
            ok, _ = DocumentationGenerator().generate("GithubDoc")

        assert ok is False


class TestFileUtils:

    def test_clean_dir_creates_or_empties(self, tmp_path):
        target = tmp_path / "out"
        clean_dir(target)
        (target / "sub").mkdir()
        (target / "file.txt").write_text("x")

        clean_dir(target)

        assert target.is_dir()
        assert list(target.iterdir()) == []

    def test_copy_recursive(self, tmp_path):
        source = tmp_path / "html"
        (source / "content").mkdir(parents=True)
        (source / "index.html").write_text("new")
        (source / "content" / "style.css").write_text("body {}")
        target = tmp_path / "gh-pages"
        target.mkdir()
        (target / "index.html").write_text("old")

        copied = copy_recursive(source, target)

        assert (target / "index.html").read_text() == "new"
        assert (target / "content" / "style.css").exists()
        assert sorted(path.name for path in copied) == ["index.html", "style.css"]

    def test_copy_recursive_missing_source_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            copy_recursive(tmp_path / "missing", tmp_path / "gh-pages")

    def test_copy_recursive_without_overwrite(self, tmp_path):
        source = tmp_path / "html"
        source.mkdir()
        (source / "index.html").write_text("new")
        target = tmp_path / "gh-pages"
        target.mkdir()
        (target / "index.html").write_text("old")

        assert copy_recursive(source, target, overwrite=False) == []
        assert (target / "index.html").read_text() == "old"
