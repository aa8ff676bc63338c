"""Display utilities for rustm using Rich."""

from rich.console import Console
from rich.table import Table

from rustm.models import (
    DirectoryMissing,
    EmptyField,
    NotADirectory,
    NotReadable,
    NotWritable,
    ProjectInfo,
    SetupReason,
    ValidationFault,
    format_age,
)


def describe_setup_reason(reason: SetupReason) -> str:
    """Message shown at the top of the setup wizard."""
    if reason is SetupReason.MISSING_FILE:
        return "Welcome! Let's set up rustm."
    return "Configuration incomplete. Please re-enter required fields."


def fault_hint(fault: ValidationFault) -> str:
    """Suggest the corrective action for a validation fault."""
    if isinstance(fault, EmptyField):
        return f"Fill in {fault.field.replace('_', ' ')}."
    if isinstance(fault, DirectoryMissing):
        return "Create the directory or choose an existing one."
    if isinstance(fault, NotADirectory):
        return "Choose a directory, not a file."
    if isinstance(fault, (NotReadable, NotWritable)):
        return "Fix the directory permissions or choose another directory."
    return ""


def display_fault(console: Console, fault: ValidationFault) -> None:
    """Print a validation fault with its hint."""
    console.print(f"[red]{fault}[/]")
    hint = fault_hint(fault)
    if hint:
        console.print(f"[dim]{hint}[/]")


def display_projects(console: Console, projects: list[ProjectInfo], root: str) -> None:
    """Display projects in a rich table.

    Args:
        console: Rich console instance
        projects: Projects to display
        root: Projects directory shown in the title
    """
    table = Table(title=f"Projects in {root}")

    table.add_column("#", style="dim", width=4)
    table.add_column("Project", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Last Commit", style="yellow")
    table.add_column("Path", style="dim")

    for idx, project in enumerate(projects, 1):
        status = "[red]*[/]" if project.has_uncommitted_changes else ""
        last_commit = format_age(project.last_commit_date) if project.last_commit_date else "-"
        table.add_row(str(idx), project.name, status, last_commit, str(project.path))

    console.print(table)

    dirty = sum(1 for p in projects if p.has_uncommitted_changes)
    if dirty:
        console.print(f"\n[bold]{dirty}[/] project(s) with uncommitted changes marked [red]*[/]")
