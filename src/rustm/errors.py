"""Exceptions raised by rustm."""

from pathlib import Path

from rustm.models import ValidationFault


class RustmError(Exception):
    """Base class for all rustm errors."""


# Loading


class ConfigLoadError(RustmError):
    """The configuration file exists but cannot be used without manual repair."""

    def __init__(self, path: Path, message: str):
        super().__init__(message)
        self.path = path
        self.message = message


class CorruptConfigError(ConfigLoadError):
    """The configuration file is not valid YAML or has the wrong shape."""

    def __str__(self) -> str:
        return f"Corrupt config YAML in {self.path}: {self.message}"


class ConfigReadError(ConfigLoadError):
    """The configuration file could not be read."""

    def __str__(self) -> str:
        return f"I/O error loading config {self.path}: {self.message}"


# Saving


class ConfigSaveError(RustmError):
    """Saving the configuration failed; the previous file is untouched."""


class ConfigValidationError(ConfigSaveError):
    def __init__(self, fault: ValidationFault):
        super().__init__(str(fault))
        self.fault = fault

    def __str__(self) -> str:
        return f"Validation error: {self.fault}"


class ConfigSerializeError(ConfigSaveError):
    def __str__(self) -> str:
        return f"Serialization error: {self.args[0]}"


class ConfigWriteError(ConfigSaveError):
    def __str__(self) -> str:
        return f"I/O error saving config: {self.args[0]}"


# Projects


class ProjectsDirectoryInvalid(RustmError):
    """The configured projects directory no longer passes validation."""

    def __init__(self, fault: ValidationFault):
        super().__init__(str(fault))
        self.fault = fault

    def __str__(self) -> str:
        return f"Projects directory invalid: {self.fault}"


class ListProjectsError(RustmError):
    """Scanning the projects directory failed."""


class CreateProjectError(RustmError):
    """Creating a new project failed."""


class InvalidProjectName(CreateProjectError):
    def __init__(self, name: str, reason: str):
        super().__init__(f"Invalid project name '{name}': {reason}")
        self.name = name
        self.reason = reason


class ProjectAlreadyExists(CreateProjectError):
    def __init__(self, path: Path):
        super().__init__(f"Target directory already exists: {path}")
        self.path = path


class CargoNotFound(CreateProjectError):
    def __init__(self):
        super().__init__("Unable to locate `cargo` in PATH")


class CargoFailed(CreateProjectError):
    def __init__(self, status: int, stderr: str):
        super().__init__(f"`cargo new` failed (exit code {status}): {stderr.strip()}")
        self.status = status
        self.stderr = stderr


class CargoTimedOut(CreateProjectError):
    def __init__(self, timeout: float):
        super().__init__(f"`cargo new` did not finish within {timeout:g} seconds")
        self.timeout = timeout


# Editor


class OpenEditorError(RustmError):
    """Launching the configured editor failed."""


class EditorCommandEmpty(OpenEditorError):
    def __init__(self):
        super().__init__("Editor command is empty")


class EditorCommandInvalid(OpenEditorError):
    def __init__(self, command: str, reason: str):
        super().__init__(f"Cannot parse editor command '{command}': {reason}")
        self.command = command


class EditorSpawnFailed(OpenEditorError):
    def __init__(self, command: str, error: OSError):
        super().__init__(f"Failed to spawn editor command '{command}': {error}")
        self.command = command


class EditorFailed(OpenEditorError):
    def __init__(self, status: int):
        super().__init__(f"Editor command exited with status {status}")
        self.status = status
