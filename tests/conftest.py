from pathlib import Path

import pytest

from rustm.logging_ import shutdown_logging


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    shutdown_logging()


@pytest.fixture
def projects_dir(tmp_path: Path) -> Path:
    path = tmp_path / "projects"
    path.mkdir()
    return path


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config" / "rustm" / "config.yaml"


@pytest.fixture
def write_config(config_path: Path):
    """Write raw text to the test config file."""

    def write(content: str) -> Path:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(content, encoding="utf-8")
        return config_path

    return write
