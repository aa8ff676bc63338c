"""Scanner for Rust projects in the configured projects directory."""

import logging
from pathlib import Path

from rustm.errors import ListProjectsError, ProjectsDirectoryInvalid
from rustm.models import ConfigurationRecord, ProjectInfo
from rustm.utils.filesystem import validate_directory
from rustm.utils.git import get_last_commit_date, has_uncommitted_changes, is_git_repo

logger = logging.getLogger(__name__)


def is_rust_project(path: Path) -> bool:
    """A Rust project is a directory with a Cargo.toml at its root."""
    return path.is_dir() and (path / "Cargo.toml").is_file()


def list_projects(config: ConfigurationRecord) -> list[ProjectInfo]:
    """List the Rust projects directly under the projects directory.

    Directories that are not git repositories are included and reported
    clean. Git failures for a single project are logged and treated as clean.

    Args:
        config: Loaded configuration

    Returns:
        Projects sorted by name, case-insensitively

    Raises:
        ProjectsDirectoryInvalid: The projects directory no longer validates
        ListProjectsError: The directory could not be scanned
    """
    # Time may have passed since the config was loaded
    fault = validate_directory(config.projects_directory)
    if fault is not None:
        raise ProjectsDirectoryInvalid(fault)

    root = Path(config.projects_directory)
    logger.info("Listing Rust projects in %s", root)

    try:
        entries = list(root.iterdir())
    except OSError as e:
        raise ListProjectsError(f"I/O error listing projects in {root}: {e}") from e

    projects = []
    for path in entries:
        try:
            if not is_rust_project(path):
                continue
        except OSError as e:
            logger.warning("Skipping %s: %s", path, e)
            continue

        dirty = False
        last_commit_date = None
        if is_git_repo(path):
            dirty = bool(has_uncommitted_changes(path))
            last_commit_date = get_last_commit_date(path)

        projects.append(
            ProjectInfo(
                name=path.name,
                path=path,
                has_uncommitted_changes=dirty,
                last_commit_date=last_commit_date,
            )
        )

    projects.sort(key=lambda p: p.name.lower())
    return projects
