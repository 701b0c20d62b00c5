"""CLI entry point for projectsync.

Each command builds a one-shot session (API client plus ``ProjectsStore``)
from the merged configuration, runs against the remote project service and
prints the cached result.
"""

import asyncio
from typing import Awaitable, Callable, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from .. import __version__
from ..api_client import ProjectsAPIClient, TransportError
from ..core.config import Config, ConfigError, ConfigManager
from ..permission import ScopePermissionOracle
from ..projects import (
    ProjectCreateRequest,
    ProjectListItem,
    ProjectsStore,
    ProjectUpdateRequest,
)
from ..runtime.logging import bootstrap_logging
from ..util.error import format_error, format_unknown_error

app = typer.Typer(
    name="projectsync",
    help="Inspect and manage projects through the project cache",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"projectsync {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level: debug, info, warn, error",
    ),
    print_logs: bool = typer.Option(
        False,
        "--print-logs",
        help="Print logs to stderr",
    ),
):
    """projectsync - project cache CLI."""
    try:
        bootstrap_logging(level=log_level, console=True if print_logs else None)
    except (ConfigError, ValueError) as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)


def build_store(cfg: Config, client: ProjectsAPIClient) -> ProjectsStore:
    """Wire a store to the configured scopes and team-project limit."""
    oracle = ScopePermissionOracle(lambda: cfg.scopes)
    return ProjectsStore(
        client,
        oracle,
        scopes=lambda: cfg.scopes,
        team_limit=lambda: cfg.projects.team_limit,
    )


def _run(fn: Callable[[ProjectsStore], Awaitable[None]]) -> None:
    async def runner() -> None:
        cfg = ConfigManager.get()
        client = ProjectsAPIClient(
            base_url=cfg.api.base_url,
            timeout=cfg.api.timeout,
            headers=cfg.api.headers,
        )
        store = build_store(cfg, client)
        try:
            await store.startup()
            await fn(store)
        finally:
            await store.shutdown()
            await client.aclose()

    try:
        asyncio.run(runner())
    except TransportError as e:
        err_console.print(f"[red]{format_error(e)}[/red]")
        raise typer.Exit(1)
    except ConfigError as e:
        err_console.print(f"[red]{format_unknown_error(e)}[/red]")
        raise typer.Exit(2)


def _project_table(items: List[ProjectListItem]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Role")
    for item in items:
        table.add_row(item.id, item.name or "", item.type.value, item.role or "")
    return table


@app.command("list")
def list_command(
    mine: bool = typer.Option(False, "--mine", help="Only projects you are a member of"),
):
    """List projects you can browse."""

    async def run(store: ProjectsStore) -> None:
        if mine:
            items = await store.get_my_projects()
        else:
            items = await store.get_available_projects()
        if not items:
            console.print("No projects")
            return
        console.print(_project_table(items))

    _run(run)


@app.command("show")
def show_command(project_id: str = typer.Argument(..., help="Project ID")):
    """Show one project and its members."""

    async def run(store: ProjectsStore) -> None:
        project = await store.get_project(project_id)
        console.print(f"[bold]{project.name or project.id}[/bold] ({project.type.value})")
        for relation in project.relations:
            who = relation.email or relation.id
            console.print(f"  {who}: {relation.role}")

    _run(run)


@app.command("count")
def count_command():
    """Show project counters and whether a new team project is allowed."""

    async def run(store: ProjectsStore) -> None:
        count = await store.get_projects_count()
        console.print(f"personal: {count.personal}")
        console.print(f"team: {count.team}")
        console.print(f"public: {count.public}")
        allowed = store.views.can_create_projects and store.views.has_permission_to_create_projects
        console.print(f"can create team project: {'yes' if allowed else 'no'}")

    _run(run)


@app.command("create")
def create_command(name: str = typer.Argument(..., help="Project name")):
    """Create a team project."""

    async def run(store: ProjectsStore) -> None:
        await store.get_projects_count()
        if not store.views.can_create_projects:
            console.print("[yellow]Team project limit reached; the server may reject this[/yellow]")
        project = await store.create_project(ProjectCreateRequest(name=name))
        console.print(f"Created {project.id}")

    _run(run)


@app.command("rename")
def rename_command(
    project_id: str = typer.Argument(..., help="Project ID"),
    name: str = typer.Argument(..., help="New name"),
):
    """Rename a project."""

    async def run(store: ProjectsStore) -> None:
        await store.update_project(ProjectUpdateRequest(id=project_id, name=name))
        console.print(f"Renamed {project_id}")

    _run(run)


@app.command("delete")
def delete_command(
    project_id: str = typer.Argument(..., help="Project ID"),
    transfer: Optional[str] = typer.Option(
        None,
        "--transfer",
        "-t",
        help="Move the project's workflows and credentials to this project",
    ),
):
    """Delete a project."""

    async def run(store: ProjectsStore) -> None:
        await store.delete_project(project_id, transfer)
        console.print(f"Deleted {project_id}")

    _run(run)


if __name__ == "__main__":
    app()
