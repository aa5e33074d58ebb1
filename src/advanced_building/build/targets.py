"""
Build targets for a .NET library.

Handles the complete build: cleaning, restoring build dependencies, stamping
versions, building and testing every build configuration, copying release
files, packaging, and building and publishing documentation.
"""

import os
import shutil
import logging
from pathlib import Path
from typing import List

from .config.exceptions import ToolFailedException
from .config.loading import read_release_notes
from .config.models import BuildConfig, BuildParams
from .graph import TargetGraph, single_name
from .prompt import confirm
from .tools import Toolchain, NuGetParams
from .tools.fileutils import clean_dir, clean_dirs, delete_dir, ensure_directory, copy_recursive
from .versions import set_assembly_file_versions

logger = logging.getLogger(__name__)

NUGET_KEY_ENV_VAR = "NUGET_KEY"
GH_PAGES_BRANCH = "gh-pages"


def build_target_name(params: BuildParams) -> str:
    return f"Build_{params.simple_build_name}"


class BuildTargets:
    """The actions behind every target, bound to one configuration and toolchain."""

    def __init__(self, config: BuildConfig, tools: Toolchain = None):
        self.config = config
        self.tools = tools or Toolchain.from_config(config)

    # Cleaning

    def clean(self, single: bool = False) -> None:
        config = self.config
        clean_dirs([config.build_dir, config.test_dir, config.out_lib_dir,
                    config.out_doc_dir, config.out_nuget_dir])

    def clean_all(self, single: bool = False) -> None:
        """Delete downloaded build dependencies so they are fetched again."""
        packages_dir = self.config.global_packages_dir
        if not packages_dir.is_dir():
            logger.info(f"Nothing to delete, {packages_dir} does not exist")
            return
        for dependency_dir in sorted(packages_dir.iterdir()):
            if not dependency_dir.is_dir():
                continue
            # the build tool itself runs from one of these
            if dependency_dir.name in self.config.protected_packages:
                continue
            try:
                delete_dir(dependency_dir)
            except OSError as e:
                logger.error(f"Unable to delete {dependency_dir}: {e}")

    # Dependencies and versions

    def restore_packages(self, single: bool = False) -> None:
        if not self.config.use_nuget:
            logger.debug("use_nuget is disabled, skipping package restore")
            return
        for packages_config in sorted(self.config.root_dir.glob(self.config.packages_config_glob)):
            self.tools.nuget.restore(packages_config, output_path=self.config.nuget_package_dir)

    def set_versions(self, single: bool = False) -> None:
        set_assembly_file_versions(self.config)

    # Build and test

    def _build_with_files(self, message: str, base_dir: Path, projects: List[Path],
                          params: BuildParams) -> None:
        build_dir = base_dir / params.custom_build_name
        clean_dirs([build_dir])
        outputs = self.tools.msbuild.build(
            projects,
            build_dir,
            "Build",
            {"Configuration": params.build_mode, "CustomBuildName": params.custom_build_name},
        )
        for output in outputs:
            logger.info(f"{message}{output}")

    def build_app(self, params: BuildParams) -> None:
        self._build_with_files("AppBuild-Output: ", self.config.build_dir,
                               params.find_project_files(self.config.root_dir), params)

    def build_tests(self, params: BuildParams) -> None:
        self._build_with_files("TestBuild-Output: ", self.config.test_dir,
                               params.find_test_files(self.config.root_dir), params)

    def run_tests(self, params: BuildParams) -> None:
        test_dir = self.config.test_dir / params.custom_build_name
        ensure_directory(test_dir / "logs")
        assemblies = params.find_unit_test_dlls(test_dir)
        if not assemblies:
            logger.error(f"NO test found in {test_dir}")
            return
        self.tools.nunit.run(assemblies, working_dir=test_dir, output_file="logs/TestResults.xml")

    def build_all(self, params: BuildParams) -> None:
        self.build_app(params)
        self.build_tests(params)
        self.run_tests(params)

    # Release

    def copy_to_release(self, single: bool = False) -> None:
        logger.info("Copying to release because test was OK.")
        out_lib_dir = self.config.out_lib_dir
        clean_dir(out_lib_dir)

        for params in self.config.build_targets:
            build_name = params.custom_build_name
            source = self.config.build_dir / build_name
            if not source.is_dir():
                continue
            out_dir = ensure_directory(out_lib_dir / build_name)
            for file_name in self.config.generated_file_list:
                source_file = source / file_name
                if source_file.is_file():
                    shutil.copy2(source_file, out_dir / Path(file_name).name)

    def nuget_params(self, package) -> NuGetParams:
        config = self.config
        access_key = os.environ.get(NUGET_KEY_ENV_VAR, "")
        return NuGetParams(
            project=package.project or config.project_name,
            version=package.version or config.version,
            authors=config.project_authors,
            summary=package.summary if package.summary is not None else config.project_summary,
            description=package.description if package.description is not None else config.project_description,
            tags=package.tags if package.tags is not None else config.nuget_tags,
            copyright=config.copyright_notice,
            release_notes=read_release_notes(config.root_dir / config.release_notes_file),
            dependencies=package.dependencies,
            working_dir=config.root_dir,
            output_path=config.out_nuget_dir,
            access_key=access_key,
            publish=bool(access_key),
        )

    def nuget(self, single: bool = False) -> None:
        ensure_directory(self.config.out_nuget_dir)
        for package in self.config.nuget_packages:
            self.tools.nuget.pack(self.config.nuget_dir / package.file, self.nuget_params(package))

    # Documentation

    def build_documentation(self, target: str) -> None:
        logger.info(f"Building documentation ({target}), this could take some time, please wait...")
        ok, messages = self.tools.docs.generate(target)
        for message in messages:
            log = logger.error if message.is_error else logger.info
            log(f"DOCS: {message.message}")
        if not ok:
            raise ToolFailedException("documentation failed", tool="docs")

    def github_doc(self, single: bool = False) -> None:
        self.build_documentation("GithubDoc")

    def local_doc(self, single: bool = False) -> None:
        self.build_documentation("LocalDoc")
        index = (self.config.out_doc_dir / "local" / "html" / "index.html").resolve()
        logger.info(f"Local documentation has been finished, you can view it by opening {index} in your browser!")

    def release_github_doc(self, single: bool = False) -> None:
        config = self.config
        repository = config.github_repository()
        if not confirm(f"update github docs to {repository}?", assume_yes=single):
            logger.info("Skipping documentation release")
            return

        html_dir = config.out_doc_dir / f"{config.github_user}.github.io" / "html"
        if not html_dir.is_dir():
            raise ToolFailedException(
                f"no generated documentation in {html_dir}, run GithubDoc first", tool="docs")

        gh_pages = config.gh_pages_dir
        clean_dir(gh_pages)
        self.tools.git.clone_single_branch(gh_pages.parent, repository, GH_PAGES_BRANCH, gh_pages.name)
        self.tools.git.full_clean(gh_pages)
        for copied in copy_recursive(html_dir, gh_pages, overwrite=True):
            print(copied)
        self.tools.git.stage_all(gh_pages)
        self.tools.git.commit(gh_pages, f"Update generated documentation {config.version}")

        if confirm(f"gh-pages branch updated in the gh-pages directory, push that branch to {repository} now?",
                   assume_yes=single):
            self.tools.git.push_branch(gh_pages, "origin", GH_PAGES_BRANCH)

    def version_bump(self, single: bool = False) -> None:
        """Commit the regenerated assembly-info files."""
        changed_files = self.tools.git.changed_files(self.config.root_dir, "HEAD")
        if not changed_files:
            logger.info("No changes to commit for the version bump")
            return
        for status, file_name in changed_files:
            print(f"File {file_name} changed ({status})")
        if confirm("version bump commit?", assume_yes=single):
            self.tools.git.stage_all(self.config.root_dir)
            self.tools.git.commit(self.config.root_dir, f"Bump version to {self.config.version}")

    def all(self, single: bool = False) -> None:
        logger.info("All finished!")

    def release(self, single: bool = False) -> None:
        logger.info("All released!")


def build_graph(config: BuildConfig, tools: Toolchain = None) -> TargetGraph:
    """Register every target and wire the dependency edges between them."""
    targets = BuildTargets(config, tools)
    graph = TargetGraph(default="All")

    graph.target("Clean", targets.clean, "Delete build and release output")
    graph.target("CleanAll", targets.clean_all, "Also delete downloaded build dependencies")
    graph.target("RestorePackages", targets.restore_packages, "Restore NuGet packages")
    graph.target("SetVersions", targets.set_versions, "Write the shared assembly info files")
    for params in config.build_targets:
        graph.target(build_target_name(params),
                     lambda single, params=params: targets.build_all(params),
                     f"Build and test the {params.simple_build_name} configuration")
    graph.target("CopyToRelease", targets.copy_to_release, "Copy build output to the release folder")
    graph.target("NuGet", targets.nuget, "Create the NuGet packages")
    graph.target("GithubDoc", targets.github_doc, "Build the documentation for github pages")
    graph.target("LocalDoc", targets.local_doc, "Build the documentation for local browsing")
    graph.target("ReleaseGithubDoc", targets.release_github_doc, "Push the documentation to the gh-pages branch")
    graph.target("All", targets.all, "Build, test and package everything")
    graph.target("VersionBump", targets.version_bump, "Commit the version bump")
    graph.target("Release", targets.release, "Release packages and documentation")

    graph.depends("Clean", "CleanAll")
    graph.depends(single_name("Clean"), single_name("CleanAll"))

    graph.chain("Clean", "RestorePackages", "SetVersions")
    for params in config.build_targets:
        graph.chain("SetVersions", build_target_name(params), "All")

    graph.chain("Clean", "CopyToRelease", "NuGet", "LocalDoc", "All")
    graph.chain("All", "VersionBump", "GithubDoc", "ReleaseGithubDoc", "Release")

    graph.validate()
    return graph
