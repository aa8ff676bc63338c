"""Main CLI for rustm."""

import logging
import os
from pathlib import Path

import typer
from InquirerPy import inquirer
from InquirerPy.base.control import Choice
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm

from rustm import config as config_store
from rustm.creator import create_project, open_in_editor, validate_name
from rustm.errors import (
    ConfigLoadError,
    ConfigSaveError,
    ConfigValidationError,
    CorruptConfigError,
    CreateProjectError,
    ListProjectsError,
    OpenEditorError,
    ProjectsDirectoryInvalid,
)
from rustm.logging_ import LOG_FILENAME, init_logging
from rustm.models import (
    ConfigurationRecord,
    CreateProjectParams,
    LoadOutcome,
    ProjectEdition,
    ProjectType,
    Ready,
    SetupReason,
    ValidationFault,
)
from rustm.scanner import list_projects
from rustm.utils.display import describe_setup_reason, display_fault, display_projects

app = typer.Typer(
    name="rustm",
    help="Create and browse Rust projects in one projects directory",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)


def get_config_path(ctx: typer.Context) -> Path | None:
    """Config file override passed to the top-level command, if any."""
    return (ctx.obj or {}).get("config_path")


def load_or_exit(config_path: Path | None) -> LoadOutcome:
    """Load the configuration, exiting with status 1 if the file is unusable.

    A corrupt or unreadable file is never overwritten from here; the user has
    to repair or delete it first.
    """
    try:
        return config_store.load(config_path)
    except ConfigLoadError as e:
        logger.error("%s", e)
        kind = "corrupt" if isinstance(e, CorruptConfigError) else "unreadable"
        console.print(
            f"[red]Configuration file is {kind}:[/] {e.message}\n"
            f"Please fix or delete [bold]{e.path}[/], then restart."
        )
        raise typer.Exit(1)


def ensure_config(config_path: Path | None) -> ConfigurationRecord:
    """Load the configuration, running the setup wizard when needed.

    Exits with status 1 if the file is unusable or setup is cancelled.
    """
    outcome = load_or_exit(config_path)
    if isinstance(outcome, Ready):
        logger.info("Configuration loaded successfully")
        return outcome.config

    logger.info("Initial setup required: %s", outcome.reason.value)
    return run_setup_wizard(config_path, reason=outcome.reason, fault=outcome.fault)


def run_setup_wizard(
    config_path: Path | None,
    reason: SetupReason | None = None,
    fault: ValidationFault | None = None,
    current: ConfigurationRecord | None = None,
) -> ConfigurationRecord:
    """Prompt for both settings until they save or the user gives up."""
    intro = describe_setup_reason(reason) if reason else "Update your settings"
    console.print(Panel.fit(
        f"[bold cyan]Initial Setup[/]\n\n{intro}",
        border_style="cyan",
    ))
    if fault:
        display_fault(console, fault)

    projects_directory = current.projects_directory if current else ""
    editor_command = current.editor_command if current else ""

    while True:
        console.print("\n[bold cyan]Projects Directory[/]")
        projects_directory = inquirer.filepath(
            message="Projects directory:",
            default=projects_directory,
            only_directories=True,
        ).execute()

        console.print("\n[bold cyan]Editor[/]")
        editor_command = inquirer.text(
            message="Editor command (e.g. code, code -n, vim):",
            default=editor_command,
        ).execute()

        try:
            record = config_store.create_and_persist(
                os.path.expanduser(projects_directory),
                editor_command,
                config_path,
            )
        except ConfigValidationError as e:
            logger.error("Failed to save configuration: %s", e)
            display_fault(console, e.fault)
        except ConfigSaveError as e:
            logger.error("Failed to save configuration: %s", e)
            console.print(f"[red]Error saving configuration:[/] {e}")
        else:
            logger.info("Configuration saved")
            console.print("\n[green]Configuration saved successfully![/]")
            return record

        if not Confirm.ask("\nTry again?", default=True):
            console.print("[yellow]Setup cancelled.[/]")
            raise typer.Exit(1)


def show_projects(config: ConfigurationRecord) -> None:
    """List projects, exiting with status 1 if the directory is unusable."""
    try:
        projects = list_projects(config)
    except ProjectsDirectoryInvalid as e:
        display_fault(console, e.fault)
        console.print("Run [bold]rustm setup[/] to choose another directory.")
        raise typer.Exit(1)
    except ListProjectsError as e:
        console.print(f"[red]Failed to list projects:[/] {e}")
        raise typer.Exit(1)

    if not projects:
        console.print("[yellow]No Rust projects found.[/]")
        return
    display_projects(console, projects, config.projects_directory)


def create_and_maybe_open(
    config: ConfigurationRecord, params: CreateProjectParams, open_editor: bool | None
) -> bool:
    """Create a project, then open it if asked (or after asking, when None).

    Returns:
        True if the project was created
    """
    try:
        with console.status(f"Creating {params.name}..."):
            created = create_project(config, params)
    except CreateProjectError as e:
        console.print(f"[red]Failed to create project:[/] {e}")
        return False

    console.print(f"\n[green]Project created at:[/] {created.project_path}")

    if open_editor is None:
        open_editor = Confirm.ask("Open in editor?", default=True)
    if open_editor:
        try:
            open_in_editor(config.editor_command, created.project_path)
        except OpenEditorError as e:
            logger.error("%s", e)
            console.print(f"[red]Failed to launch editor:[/] {e}")
    return True


def prompt_new_project(config: ConfigurationRecord) -> None:
    """Interactive create-project form."""
    name = inquirer.text(
        message="Project name:",
        validate=lambda value: validate_name(value) is None,
        invalid_message="Use letters, digits, '_' or '-', starting with a letter",
    ).execute()

    project_type = inquirer.select(
        message="Project type:",
        choices=[
            Choice(ProjectType.BINARY, name="Binary (--bin)"),
            Choice(ProjectType.LIBRARY, name="Library (--lib)"),
        ],
        default=ProjectType.BINARY,
    ).execute()

    edition = inquirer.select(
        message="Rust edition:",
        choices=[
            Choice(e, name=f"{e.value} (latest)" if e is ProjectEdition.E2024 else e.value)
            for e in ProjectEdition
        ],
        default=ProjectEdition.E2024,
    ).execute()

    create_and_maybe_open(config, CreateProjectParams(name, project_type, edition), None)


def run_menu(config: ConfigurationRecord) -> None:
    """Main menu loop."""
    while True:
        console.print()
        action = inquirer.select(
            message="rustm - Global Mode",
            choices=[
                Choice("create", name="Create new project"),
                Choice("list", name="List projects"),
                Choice("quit", name="Quit"),
            ],
        ).execute()

        if action == "create":
            prompt_new_project(config)
        elif action == "list":
            try:
                show_projects(config)
            except typer.Exit:
                # Stay in the menu; the problem was already printed
                pass
        else:
            return


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        "-c",
        help="Use this config file instead of the default location",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log at DEBUG level",
    ),
) -> None:
    """Create new Rust projects and browse existing ones.

    Examples:

        rustm                         # Interactive menu (runs setup first if needed)

        rustm list                    # List projects, * marks uncommitted changes

        rustm new my-crate --lib      # Create a library crate

        rustm setup                   # Change projects directory or editor
    """
    ctx.obj = {"config_path": config_file}

    log_path = config_file.parent / LOG_FILENAME if config_file else None
    try:
        init_logging(log_path, debug=debug)
    except OSError as e:
        # Not fatal; run without a log file
        typer.echo(f"Failed to initialize logging: {e}", err=True)

    if ctx.invoked_subcommand is not None:
        return

    config = ensure_config(config_file)
    run_menu(config)


@app.command()
def setup(ctx: typer.Context) -> None:
    """Set the projects directory and editor command."""
    config_path = get_config_path(ctx)
    outcome = load_or_exit(config_path)

    if isinstance(outcome, Ready):
        run_setup_wizard(config_path, current=outcome.config)
    else:
        run_setup_wizard(config_path, reason=outcome.reason, fault=outcome.fault)


@app.command("list")
def list_command(ctx: typer.Context) -> None:
    """List Rust projects in the projects directory."""
    config = ensure_config(get_config_path(ctx))
    show_projects(config)


@app.command()
def new(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Crate name"),
    lib: bool = typer.Option(False, "--lib", help="Create a library instead of a binary"),
    edition: ProjectEdition = typer.Option(
        ProjectEdition.E2024,
        "--edition",
        help="Rust edition",
    ),
    open_editor: bool = typer.Option(
        False,
        "--open",
        "-o",
        help="Open the new project in the configured editor",
    ),
) -> None:
    """Create a new Rust project with cargo new."""
    config = ensure_config(get_config_path(ctx))
    params = CreateProjectParams(
        name=name,
        project_type=ProjectType.LIBRARY if lib else ProjectType.BINARY,
        edition=edition,
    )
    if not create_and_maybe_open(config, params, open_editor):
        raise typer.Exit(1)


@app.command()
def path(ctx: typer.Context) -> None:
    """Print the location of the configuration file."""
    console.print(str(get_config_path(ctx) or config_store.config_file_path()), soft_wrap=True)


if __name__ == "__main__":
    app()
