import subprocess

import pytest
import typer
import yaml
from typer.testing import CliRunner

from rustm import cli
from rustm.config import create_and_persist

runner = CliRunner()


class Prompt:
    """Stand-in for an InquirerPy prompt factory that replays answers."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.messages = []

    def __call__(self, message, **kwargs):
        self.messages.append(message)
        answer = self.answers.pop(0)
        return type("Answer", (), {"execute": lambda _self: answer})()


@pytest.fixture
def ready_config(config_path, projects_dir):
    create_and_persist(str(projects_dir), "vim", config_path)
    return config_path


def invoke(config_path, *args):
    return runner.invoke(cli.app, ["--config-file", str(config_path), *args])


def test_path_prints_config_file(config_path):
    result = invoke(config_path, "path")

    assert result.exit_code == 0
    assert str(config_path) in result.output.replace("\n", "")


def test_list_shows_projects(ready_config, projects_dir):
    for name in ["alpha", "beta"]:
        (projects_dir / name).mkdir()
        (projects_dir / name / "Cargo.toml").write_text("[package]\n")

    result = invoke(ready_config, "list")

    assert result.exit_code == 0
    assert "alpha" in result.output
    assert "beta" in result.output


def test_list_with_no_projects(ready_config):
    result = invoke(ready_config, "list")

    assert result.exit_code == 0
    assert "No Rust projects found" in result.output


def test_corrupt_config_exits(config_path, write_config):
    write_config("editor_command code\n")

    result = invoke(config_path, "list")

    assert result.exit_code == 1
    assert "corrupt" in result.output


def test_list_reports_vanished_directory(ready_config, projects_dir):
    record = cli.config_store.load(ready_config).config
    # Directory removed after the config was loaded
    projects_dir.rmdir()

    with pytest.raises(typer.Exit):
        cli.show_projects(record)


def test_new_creates_project(ready_config, projects_dir, monkeypatch):
    calls = []

    def fake_run(args, cwd=None, **kwargs):
        calls.append(list(args))
        if args[0] == "cargo":
            (cwd / args[-1]).mkdir()
        return subprocess.CompletedProcess(args, 0, "", "")

    monkeypatch.setattr(subprocess, "run", fake_run)

    result = invoke(ready_config, "new", "demo", "--lib", "--edition", "2021")

    assert result.exit_code == 0, result.output
    assert "Project created at" in result.output
    assert ["cargo", "new", "--lib", "--edition", "2021", "demo"] in calls
    assert (projects_dir / "demo").is_dir()


def test_new_rejects_bad_name(ready_config):
    result = invoke(ready_config, "new", "9lives")

    assert result.exit_code == 1
    assert "Invalid project name" in result.output


def test_setup_wizard_retries_until_valid(config_path, projects_dir, tmp_path, monkeypatch):
    filepath = Prompt(str(tmp_path / "missing"), str(projects_dir))
    text = Prompt("code", "code --wait")
    monkeypatch.setattr(cli.inquirer, "filepath", filepath)
    monkeypatch.setattr(cli.inquirer, "text", text)
    monkeypatch.setattr(cli.Confirm, "ask", lambda *args, **kwargs: True)

    result = invoke(config_path, "setup")

    assert result.exit_code == 0, result.output
    assert "does not exist" in result.output
    assert "Configuration saved successfully" in result.output
    data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    assert data == {"projects_directory": str(projects_dir), "editor_command": "code --wait"}


def test_setup_wizard_cancel_writes_nothing(config_path, tmp_path, monkeypatch):
    monkeypatch.setattr(cli.inquirer, "filepath", Prompt(str(tmp_path / "missing")))
    monkeypatch.setattr(cli.inquirer, "text", Prompt("code"))
    monkeypatch.setattr(cli.Confirm, "ask", lambda *args, **kwargs: False)

    result = invoke(config_path, "setup")

    assert result.exit_code == 1
    assert not config_path.exists()


def test_list_runs_setup_when_config_missing(config_path, projects_dir, monkeypatch):
    monkeypatch.setattr(cli.inquirer, "filepath", Prompt(str(projects_dir)))
    monkeypatch.setattr(cli.inquirer, "text", Prompt("vim"))

    result = invoke(config_path, "list")

    assert result.exit_code == 0, result.output
    assert "Welcome" in result.output
    assert config_path.exists()


def test_setup_refuses_to_overwrite_corrupt_config(config_path, projects_dir, write_config, monkeypatch):
    write_config("projects_directory: [oops\n")
    monkeypatch.setattr(cli.inquirer, "filepath", Prompt(str(projects_dir)))
    monkeypatch.setattr(cli.inquirer, "text", Prompt("vim"))

    result = invoke(config_path, "setup")

    assert result.exit_code == 1
    assert "corrupt" in result.output
    assert "Please fix or delete" in result.output
    assert config_path.read_text(encoding="utf-8") == "projects_directory: [oops\n"


def test_bad_editor_quoting_does_not_crash_after_create(config_path, projects_dir, monkeypatch):
    create_and_persist(str(projects_dir), "code '--wait", config_path)

    def fake_run(args, cwd=None, **kwargs):
        if args[0] == "cargo":
            (cwd / args[-1]).mkdir()
        return subprocess.CompletedProcess(args, 0, "", "")

    monkeypatch.setattr(subprocess, "run", fake_run)

    result = invoke(config_path, "new", "demo", "--open")

    assert result.exit_code == 0, result.output
    assert "Failed to launch editor" in result.output
    assert (projects_dir / "demo").is_dir()
