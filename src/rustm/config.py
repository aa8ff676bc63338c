"""Configuration management for rustm.

The configuration is a single YAML file with two required string keys,
``projects_directory`` and ``editor_command``. ``load`` classifies what is on
disk as ready, needing setup, or unusable; ``create_and_persist`` validates new
values and writes them atomically.
"""

import logging
import os
import sys
from pathlib import Path

import yaml

from rustm.errors import (
    ConfigReadError,
    ConfigSerializeError,
    ConfigValidationError,
    ConfigWriteError,
    CorruptConfigError,
)
from rustm.models import (
    ConfigurationRecord,
    LoadOutcome,
    NeedsInitialSetup,
    Ready,
    SetupReason,
)
from rustm.utils.filesystem import atomic_write_text, validate_settings

logger = logging.getLogger(__name__)

APP_NAME = "rustm"
CONFIG_FILENAME = "config.yaml"
REQUIRED_FIELDS = ("projects_directory", "editor_command")


def config_dir() -> Path:
    """Return the per-user application config directory for this platform."""
    if sys.platform == "win32":
        base = os.environ.get("APPDATA") or str(Path.home() / "AppData" / "Roaming")
    elif sys.platform == "darwin":
        base = str(Path.home() / "Library" / "Application Support")
    else:
        base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / APP_NAME


def config_file_path() -> Path:
    """Return the canonical path of ``config.yaml``."""
    return config_dir() / CONFIG_FILENAME


def load(config_path: Path | None = None) -> LoadOutcome:
    """Load and validate the configuration.

    Args:
        config_path: Override for the canonical file path

    Returns:
        Ready with the record, or NeedsInitialSetup when the file is missing,
        lacks a key, or holds values that no longer validate

    Raises:
        CorruptConfigError: The file is not YAML or not the expected shape
        ConfigReadError: The file exists but could not be read
    """
    path = config_path or config_file_path()

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return NeedsInitialSetup(SetupReason.MISSING_FILE)
    except UnicodeDecodeError as e:
        raise CorruptConfigError(path, f"not valid UTF-8: {e}") from e
    except OSError as e:
        raise ConfigReadError(path, str(e)) from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise CorruptConfigError(path, str(e)) from e

    if data is None:
        logger.warning("Config file %s is empty", path)
        return NeedsInitialSetup(SetupReason.INCOMPLETE_DATA)
    if not isinstance(data, dict):
        raise CorruptConfigError(path, f"expected a mapping, got {type(data).__name__}")

    # A present key with the wrong type (null included) is corrupt even if
    # another key is missing
    for name in REQUIRED_FIELDS:
        if name in data and not isinstance(data[name], str):
            raise CorruptConfigError(
                path, f"field '{name}' must be a string, got {type(data[name]).__name__}"
            )

    missing = [name for name in REQUIRED_FIELDS if name not in data]
    if missing:
        logger.warning("Config file %s is missing field(s): %s", path, ", ".join(missing))
        return NeedsInitialSetup(SetupReason.INCOMPLETE_DATA)

    projects_directory = data["projects_directory"]
    editor_command = data["editor_command"]

    fault = validate_settings(projects_directory, editor_command)
    if fault is not None:
        # The user can re-enter the values, so this is not a load failure
        logger.warning("Config validation failed: %s", fault)
        return NeedsInitialSetup(SetupReason.INCOMPLETE_DATA, fault=fault)

    return Ready(
        ConfigurationRecord(
            projects_directory=projects_directory,
            editor_command=editor_command.strip(),
        )
    )


def create_and_persist(
    projects_directory: str,
    editor_command: str,
    config_path: Path | None = None,
) -> ConfigurationRecord:
    """Validate new settings, write them atomically, and return a fresh record.

    Nothing is written unless both values pass validation. Any failure leaves
    the previous file (or its absence) unchanged.

    Args:
        projects_directory: Directory new projects are created in
        editor_command: Command used to open a project
        config_path: Override for the canonical file path

    Returns:
        The ConfigurationRecord that was written

    Raises:
        ConfigValidationError: A value failed validation
        ConfigSerializeError: The record could not be serialized
        ConfigWriteError: Creating the directory or writing the file failed
    """
    fault = validate_settings(projects_directory, editor_command)
    if fault is not None:
        raise ConfigValidationError(fault)

    record = ConfigurationRecord(
        projects_directory=projects_directory,
        editor_command=editor_command.strip(),
    )

    try:
        content = yaml.safe_dump(record.to_dict(), sort_keys=False, allow_unicode=True)
    except yaml.YAMLError as e:
        raise ConfigSerializeError(str(e)) from e

    path = config_path or config_file_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        atomic_write_text(path, content)
    except OSError as e:
        logger.error("Failed to write config %s: %s", path, e)
        raise ConfigWriteError(str(e)) from e

    logger.info("Configuration saved to %s", path)
    return record
