"""
Pydantic models for the build configuration record.
"""
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


def _find_files(root: Path, patterns: List[str]) -> List[Path]:
    """Expand glob patterns relative to root, keeping first-seen order."""
    found = []
    for pattern in patterns:
        for path in sorted(Path(root).glob(pattern)):
            if path.is_file() and path not in found:
                found.append(path)
    return found


class BuildParams(BaseModel):
    """One build configuration variant (e.g. a target framework)."""
    simple_build_name: str
    custom_build_name: str = ""
    build_mode: str = "Release"
    project_globs: List[str] = ["src/source/**/*.csproj", "src/source/**/*.fsproj"]
    test_project_globs: List[str] = ["src/test/**/*.csproj", "src/test/**/*.fsproj"]
    test_dll_globs: List[str] = ["*.Test.dll"]

    def model_post_init(self, __context) -> None:
        if not self.custom_build_name:
            self.custom_build_name = self.simple_build_name

    def find_project_files(self, root: Path) -> List[Path]:
        return _find_files(root, self.project_globs)

    def find_test_files(self, root: Path) -> List[Path]:
        return _find_files(root, self.test_project_globs)

    def find_unit_test_dlls(self, test_dir: Path) -> List[Path]:
        """Compiled test assemblies inside a per-configuration test directory."""
        return _find_files(test_dir, self.test_dll_globs)


class NugetDependency(BaseModel):
    id: str
    version: str


class NugetPackage(BaseModel):
    """A package manifest template under nuget/ plus per-package overrides."""
    file: str
    project: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[str] = None
    version: Optional[str] = None
    dependencies: List[NugetDependency] = []


class NUnitSettings(BaseModel):
    """Settings handed to the NUnit console runner."""
    tool: List[str] = ["nunit-console"]
    framework: str = "4.0"
    timeout_minutes: float = 30.0
    disable_shadow_copy: bool = True
    stop_on_error: bool = True
    process_model: Optional[str] = None
    exclude_category: Optional[str] = None
    extra_args: List[str] = []


class ToolCommands(BaseModel):
    """Command lines for the external tools the targets delegate to."""
    msbuild: List[str] = ["msbuild"]
    nuget: List[str] = ["nuget"]
    git: List[str] = ["git"]
    docs: List[str] = ["fsharpi", "generateDocs.fsx"]


class BuildConfig(BaseModel):
    """Build configuration with every default filled in."""
    root_dir: Path = Field(default_factory=Path.cwd)

    project_name: str
    project_summary: str = ""
    project_description: str = ""
    project_authors: List[str] = []
    copyright_notice: str = ""
    nuget_tags: str = ""
    github_user: str = ""
    github_project: str = ""

    version: Optional[str] = None
    release_notes_file: str = "doc/ReleaseNotes.md"

    use_nuget: bool = False
    packages_config_glob: str = "src/**/packages.config"
    protected_packages: List[str] = ["FAKE"]

    build_dir: Path = Path("build")
    test_dir: Path = Path("test")
    out_lib_dir: Path = Path("release/lib")
    out_doc_dir: Path = Path("release/documentation")
    out_nuget_dir: Path = Path("release/nuget")
    global_packages_dir: Path = Path("packages")
    nuget_package_dir: Path = Path("packages")
    nuget_dir: Path = Path("nuget")
    gh_pages_dir: Path = Path("gh-pages")

    generated_file_list: List[str] = []
    nuget_packages: List[NugetPackage] = []
    assembly_info_files: List[str] = ["src/SharedAssemblyInfo.cs"]
    build_targets: List[BuildParams] = []

    tools: ToolCommands = Field(default_factory=ToolCommands)
    nunit: NUnitSettings = Field(default_factory=NUnitSettings)

    def github_repository(self) -> str:
        return f"git@github.com:{self.github_user}/{self.github_project}.git"

    def path_settings(self) -> Dict[str, Path]:
        """All directory settings, used when resolving them against root_dir."""
        return {
            name: getattr(self, name)
            for name, info in type(self).model_fields.items()
            if info.annotation is Path and name != "root_dir"
        }
