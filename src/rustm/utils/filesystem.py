"""Filesystem utilities for rustm.

Validation helpers here never log or print; they return a ``ValidationFault``
(or ``None``) and leave reporting to the caller.
"""

import os
from pathlib import Path

from rustm.models import (
    DirectoryMissing,
    EmptyField,
    NotADirectory,
    NotReadable,
    NotWritable,
    ValidationFault,
)

WRITE_PROBE_NAME = ".rustm_write_probe"


def is_blank(value: str) -> bool:
    """Return True if the value is empty after trimming whitespace."""
    return value.strip() == ""


def validate_directory(path: str, field: str = "projects_directory") -> ValidationFault | None:
    """Check that a path is a usable projects directory.

    Checks run in order and the first failure is returned: blank, missing,
    not a directory, not listable, not writable.

    Args:
        path: Candidate directory, as entered or stored (a string, so that an
            empty value is not mistaken for the current directory)
        field: Setting name reported in the fault

    Returns:
        The first ValidationFault found, or None if the directory is usable

    Raises:
        TypeError: path is not a string
    """
    if not isinstance(path, str):
        raise TypeError(f"{field} must be a string, got {type(path).__name__}")
    if is_blank(path):
        return EmptyField(field)

    directory = Path(path)
    if not directory.exists():
        return DirectoryMissing(field, directory)
    if not directory.is_dir():
        return NotADirectory(field, directory)

    try:
        with os.scandir(directory) as entries:
            next(entries, None)
    except OSError:
        return NotReadable(field, directory)

    probe = directory / WRITE_PROBE_NAME
    try:
        with open(probe, "w"):
            pass
    except OSError:
        return NotWritable(field, directory)
    try:
        probe.unlink()
    except OSError:
        # Leftover probe file is harmless
        pass

    return None


def validate_settings(projects_directory: str, editor_command: str) -> ValidationFault | None:
    """Validate both settings with the rules shared by loading and saving.

    Args:
        projects_directory: Directory new projects are created in
        editor_command: Command used to open a project

    Returns:
        The first ValidationFault found, or None
    """
    if is_blank(editor_command):
        return EmptyField("editor_command")
    return validate_directory(projects_directory)


def atomic_write_text(path: Path, content: str) -> None:
    """Write text so that ``path`` holds either the old or the new content.

    The content goes to a sibling ``<name>.tmp`` file, is flushed and fsynced,
    then renamed over the target. On failure the temp file is removed and the
    OSError propagates; the target is never touched before the rename.

    Args:
        path: Destination file
        content: Text to write (UTF-8)
    """
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise
