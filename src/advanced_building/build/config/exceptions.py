"""
Exception classes with built-in guidance for build configuration and execution.
"""
import sys


class ConfigException(Exception):
    """Base exception for all configuration errors."""
    def __init__(self, message: str, error_type: str = None, path: str = None,
                 target_name: str = None):
        super().__init__(message)
        self.error_type = error_type
        self.path = path
        self.target_name = target_name
        self.guidance = self._generate_guidance()

    def _get_current_command(self):
        """Get the current command being executed."""
        if len(sys.argv) > 0:
            executable = sys.argv[0].split('/')[-1]
            args = sys.argv[1:]
            if args:
                return f"{executable} {' '.join(args)}"
            else:
                return executable
        return "unknown command"

    def _generate_guidance(self):
        """Override in subclasses to provide specific guidance."""
        return f"""
❌ Configuration error: {self}
💡 Check your build.yaml and try again
"""


class ConfigFileNotFoundException(ConfigException):
    """Raised when the project's build.yaml cannot be found."""
    def __init__(self, message: str, path: str = None):
        super().__init__(message, error_type="config_not_found", path=path)

    def _generate_guidance(self):
        command = self._get_current_command()
        return f"""
❌ Build configuration not found: {self.path}
💡 Resolve this in one of the following ways:
   1. Create build.yaml in the project root (see the scaffold in packages/Yaaf.AdvancedBuilding/scaffold)
   2. Or point to an existing file: BUILD_CONFIG=path/to/build.yaml {command}
"""


class InvalidConfigException(ConfigException):
    """Raised when build.yaml cannot be parsed or fails validation."""
    def __init__(self, message: str, path: str = None):
        super().__init__(message, error_type="invalid_config", path=path)

    def _generate_guidance(self):
        return f"""
❌ Invalid build configuration in {self.path}:
{self}
💡 Fix the listed settings in build.yaml and try again
"""


class ScaffoldMissingException(ConfigException):
    """Raised when a scaffold file the build relies on is not present."""
    def __init__(self, message: str, path: str = None, scaffold: str = None):
        self.scaffold = scaffold
        super().__init__(message, error_type="scaffold_missing", path=path)

    def _generate_guidance(self):
        hint = f"\n💡 Please copy them from {self.scaffold}" if self.scaffold else ""
        return f"""
❌ {self}{hint}
"""


class TargetGraphException(ConfigException):
    """Base exception for an invalid target graph."""
    def _generate_guidance(self):
        return f"""
❌ Invalid target graph: {self}
💡 Check the target registrations and dependency edges
"""


class DuplicateTargetException(TargetGraphException):
    """Raised when a target name is registered twice."""
    def __init__(self, target_name: str):
        super().__init__(f"Target '{target_name}' is already registered",
                         error_type="duplicate_target", target_name=target_name)


class UnknownTargetException(TargetGraphException):
    """Raised when an edge or a run request names a target that does not exist."""
    def __init__(self, target_name: str):
        super().__init__(f"Target '{target_name}' is not registered",
                         error_type="unknown_target", target_name=target_name)


class CyclicDependencyException(TargetGraphException):
    """Raised when the dependency edges form a cycle."""
    def __init__(self, cycle: list):
        self.cycle = list(cycle)
        super().__init__(f"Dependency cycle detected: {' ==> '.join(self.cycle)}",
                         error_type="cyclic_dependency", target_name=self.cycle[0])


class BuildException(Exception):
    """Base exception for failures while a target is running."""


class ToolFailedException(BuildException):
    """Raised when an external tool exits non-zero or times out."""
    def __init__(self, message: str, tool: str = None, returncode: int = None,
                 output: str = None):
        super().__init__(message)
        self.tool = tool
        self.returncode = returncode
        self.output = output
