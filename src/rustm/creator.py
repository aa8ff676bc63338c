"""Create new Rust projects with `cargo new` and open them in the editor."""

import logging
import shlex
import subprocess
from pathlib import Path

from rustm.errors import (
    CargoFailed,
    CargoNotFound,
    CargoTimedOut,
    EditorCommandEmpty,
    EditorCommandInvalid,
    EditorFailed,
    EditorSpawnFailed,
    InvalidProjectName,
    ProjectAlreadyExists,
    ProjectsDirectoryInvalid,
)
from rustm.models import ConfigurationRecord, CreatedProject, CreateProjectParams
from rustm.utils.filesystem import is_blank, validate_directory
from rustm.utils.git import set_global_default_branch

logger = logging.getLogger(__name__)

CARGO_TIMEOUT = 120


def validate_name(name: str) -> str | None:
    """Check a crate name.

    Returns:
        A description of the problem, or None if the name is acceptable
    """
    if is_blank(name):
        return "name cannot be blank"
    if any(c.isspace() for c in name):
        return "name cannot contain whitespace"
    if not (name[0].isascii() and name[0].isalpha()):
        return "name must start with an ASCII alphabetic character"
    if not all(c.isascii() and (c.isalnum() or c in "_-") for c in name):
        return "name can only contain ASCII alphanumeric, '_' or '-'"
    return None


def create_project(config: ConfigurationRecord, params: CreateProjectParams) -> CreatedProject:
    """Create a new project in the projects directory.

    Does not open the editor; see ``open_in_editor``.

    Args:
        config: Loaded configuration
        params: Name, type and edition of the new crate

    Returns:
        CreatedProject with the new project's path

    Raises:
        InvalidProjectName: The name is not a valid crate name
        ProjectsDirectoryInvalid: The projects directory no longer validates
        ProjectAlreadyExists: The target directory exists
        CargoNotFound: cargo is not on PATH
        CargoFailed: cargo exited with a non-zero status
        CargoTimedOut: cargo did not finish in time
    """
    logger.info(
        "Starting project creation: name='%s', type=%s, edition=%s",
        params.name,
        params.project_type.value,
        params.edition.value,
    )

    problem = validate_name(params.name)
    if problem:
        raise InvalidProjectName(params.name, problem)

    fault = validate_directory(config.projects_directory)
    if fault is not None:
        raise ProjectsDirectoryInvalid(fault)

    root = Path(config.projects_directory)
    project_path = root / params.name
    if project_path.exists():
        raise ProjectAlreadyExists(project_path)

    set_global_default_branch()

    command = [
        "cargo",
        "new",
        params.project_type.cargo_flag,
        "--edition",
        params.edition.value,
        params.name,
    ]
    logger.info("Executing: %s", shlex.join(command))
    try:
        result = subprocess.run(
            command,
            cwd=root,
            capture_output=True,
            text=True,
            check=False,
            timeout=CARGO_TIMEOUT,
        )
    except FileNotFoundError as e:
        logger.error("cargo new failed: %s", e)
        raise CargoNotFound() from e
    except subprocess.TimeoutExpired as e:
        logger.error("cargo new timed out after %s seconds", CARGO_TIMEOUT)
        raise CargoTimedOut(CARGO_TIMEOUT) from e

    if result.returncode != 0:
        logger.error("cargo new failed with status %s: %s", result.returncode, result.stderr.strip())
        raise CargoFailed(result.returncode, result.stderr)

    logger.info("Project successfully created at %s", project_path)
    return CreatedProject(project_path=project_path, params=params)


def open_in_editor(editor_command: str, project_path: Path) -> None:
    """Open a project with the configured editor command and wait for it.

    The command is split shell-style; the project path is appended as the
    last argument.

    Raises:
        EditorCommandEmpty: The command has no program
        EditorCommandInvalid: The command cannot be split (e.g. unbalanced quote)
        EditorSpawnFailed: The program could not be started
        EditorFailed: The program exited with a non-zero status
    """
    try:
        parts = shlex.split(editor_command)
    except ValueError as e:
        raise EditorCommandInvalid(editor_command, str(e)) from e
    if not parts:
        raise EditorCommandEmpty()

    logger.info("Opening project '%s' with editor command: %s", project_path, editor_command)
    try:
        result = subprocess.run([*parts, str(project_path)], check=False)
    except OSError as e:
        raise EditorSpawnFailed(editor_command, e) from e

    if result.returncode != 0:
        raise EditorFailed(result.returncode)
