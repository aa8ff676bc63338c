"""Data models for rustm."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from dateutil.relativedelta import relativedelta


@dataclass(frozen=True)
class ConfigurationRecord:
    """Validated user configuration.

    Only produced by ``config.load`` and ``config.create_and_persist``. The
    directory checks are point-in-time: the record is not re-validated on
    access, so consumers that act on the directory validate it again.
    """

    projects_directory: str
    editor_command: str

    def to_dict(self) -> dict[str, str]:
        return {
            "projects_directory": self.projects_directory,
            "editor_command": self.editor_command,
        }


class SetupReason(Enum):
    """Why the setup flow must run before the tool can be used."""

    MISSING_FILE = "missing_file"
    INCOMPLETE_DATA = "incomplete_data"


@dataclass(frozen=True)
class Ready:
    """Configuration loaded and validated."""

    config: ConfigurationRecord


@dataclass(frozen=True)
class NeedsInitialSetup:
    """The user has to (re-)enter the settings.

    ``fault`` is set when the file parsed but a value failed validation, so the
    setup form can say what to fix.
    """

    reason: SetupReason
    fault: "ValidationFault | None" = None


LoadOutcome = Ready | NeedsInitialSetup


@dataclass(frozen=True)
class ValidationFault:
    """A structured reason a setting was rejected.

    ``field`` names the offending setting so the UI can point at it.
    """

    field: str
    path: Path | None = None

    def __str__(self) -> str:
        return f"Field '{self.field}' is invalid"


class EmptyField(ValidationFault):
    def __str__(self) -> str:
        return f"Field '{self.field}' cannot be empty"


class DirectoryMissing(ValidationFault):
    def __str__(self) -> str:
        return f"Projects directory does not exist: {self.path}"


class NotADirectory(ValidationFault):
    def __str__(self) -> str:
        return f"Projects directory is not a directory: {self.path}"


class NotReadable(ValidationFault):
    def __str__(self) -> str:
        return f"Projects directory not readable: {self.path}"


class NotWritable(ValidationFault):
    def __str__(self) -> str:
        return f"Projects directory not writable: {self.path}"


class ProjectType(Enum):
    """Kind of crate passed to ``cargo new``."""

    BINARY = "bin"
    LIBRARY = "lib"

    @property
    def cargo_flag(self) -> str:
        return f"--{self.value}"


class ProjectEdition(Enum):
    E2015 = "2015"
    E2018 = "2018"
    E2021 = "2021"
    E2024 = "2024"


@dataclass
class CreateProjectParams:
    """User input for a new project."""

    name: str
    project_type: ProjectType = ProjectType.BINARY
    edition: ProjectEdition = ProjectEdition.E2024


@dataclass
class CreatedProject:
    """A project that `cargo new` created successfully."""

    project_path: Path
    params: CreateProjectParams


@dataclass
class ProjectInfo:
    """A Rust project found in the projects directory."""

    name: str
    path: Path
    has_uncommitted_changes: bool = False
    last_commit_date: datetime | None = field(default=None)


def format_age(when: datetime, now: datetime | None = None) -> str:
    """Format a timestamp as a coarse relative age ("3 months ago")."""
    delta = relativedelta(now or datetime.now(), when)
    for unit in ["years", "months", "days", "hours", "minutes"]:
        value = getattr(delta, unit)
        if value > 0:
            label = unit if value > 1 else unit[:-1]
            return f"{value} {label} ago"
    return "just now"
