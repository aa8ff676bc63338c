"""Git utilities for rustm."""

import logging
import subprocess
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


def is_git_repo(path: Path) -> bool:
    """Check if path is a git repository."""
    git_path = path / ".git"
    return git_path.is_dir() or git_path.is_file()


def has_uncommitted_changes(repo_path: Path) -> bool | None:
    """Check whether a repository has staged, unstaged or untracked changes.

    Uses: git status --porcelain --untracked-files=all

    Args:
        repo_path: Path to the git repository

    Returns:
        True if dirty, False if clean, None if git could not answer
    """
    try:
        result = subprocess.run(
            ["git", "status", "--porcelain", "--untracked-files=all"],
            cwd=repo_path,
            capture_output=True,
            text=True,
            check=True,
            timeout=10,
        )
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError) as e:
        logger.warning("Git status check failed for %s: %s", repo_path, e)
        return None
    return bool(result.stdout.strip())


def get_last_commit_date(repo_path: Path) -> datetime | None:
    """Get the last commit timestamp for a repo.

    Uses: git log -1 --format=%ct (unix timestamp)

    Returns:
        Commit datetime or None if no commits or error
    """
    try:
        result = subprocess.run(
            ["git", "log", "-1", "--format=%ct"],
            cwd=repo_path,
            capture_output=True,
            text=True,
            check=True,
            timeout=5,
        )
        output = result.stdout.strip()
        if not output:
            return None
        return datetime.fromtimestamp(int(output))
    except (subprocess.CalledProcessError, ValueError, subprocess.TimeoutExpired, FileNotFoundError):
        return None


def set_global_default_branch(branch: str = "main") -> bool:
    """Best effort: set ``init.defaultBranch`` in the global git config.

    Failures are logged, never raised.

    Returns:
        True if git accepted the setting
    """
    try:
        subprocess.run(
            ["git", "config", "--global", "init.defaultBranch", branch],
            capture_output=True,
            text=True,
            check=True,
            timeout=5,
        )
    except subprocess.CalledProcessError as e:
        logger.warning("git config exited with status %s: %s", e.returncode, (e.stderr or "").strip())
        return False
    except (subprocess.TimeoutExpired, FileNotFoundError) as e:
        logger.warning("Unable to run git to set default branch: %s", e)
        return False

    logger.info("Ensured global git default branch is '%s'", branch)
    return True
