"""CLI commands for the training platform.

Commands:
- serve: Run the Web API with uvicorn
- modules: List catalog modules
- module: Show one module's steps
"""

from pathlib import Path

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from training.config.app_config import load_app_config
from training.config.courses import load_course_data
from training.core.catalog import ModuleCatalog
from training.core.errors import TrainingModuleNotFoundError

app = typer.Typer(
    name="training",
    help="E-learning backend with JWT sessions and course progress tracking.",
    no_args_is_help=True,
)

console = Console()


def _load_catalog(courses_file: Path | None) -> ModuleCatalog:
    """Build the catalog from a courses file or the configured default."""
    path = courses_file or load_app_config().courses_file
    return ModuleCatalog(load_course_data(path).modules)


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (config default)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (config default)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the Web API."""
    config = load_app_config()
    effective_host = host or config.server.host
    effective_port = port or config.server.port

    console.print(
        f"[green]▶ Training API on http://{effective_host}:{effective_port}[/green] "
        f"[dim](storage: {config.storage.backend})[/dim]"
    )
    uvicorn.run(
        "training.web.api:create_app",
        factory=True,
        host=effective_host,
        port=effective_port,
        reload=reload,
    )


@app.command(name="modules")
def list_modules(
    courses_file: Path | None = typer.Option(
        None, "--courses-file", help="Course data YAML (config default)"
    ),
) -> None:
    """List all training modules in the catalog."""
    catalog = _load_catalog(courses_file)
    modules = catalog.list_modules()

    if not modules:
        console.print("[yellow]No modules in the catalog[/yellow]")
        return

    table = Table(title=f"Modules ({len(modules)})")
    table.add_column("id", style="bold", no_wrap=True)
    table.add_column("title")
    table.add_column("difficulty")
    table.add_column("duration")
    table.add_column("steps", justify="right")

    for m in modules:
        table.add_row(m.id, m.title, m.difficulty, m.duration, str(len(m.steps)))

    console.print(table)


@app.command()
def module(
    module_id: str = typer.Argument(..., help="Module id, e.g. welding-101"),
    courses_file: Path | None = typer.Option(
        None, "--courses-file", help="Course data YAML (config default)"
    ),
) -> None:
    """Show the steps of one module."""
    catalog = _load_catalog(courses_file)

    try:
        content = catalog.get(module_id)
    except TrainingModuleNotFoundError as e:
        console.print(f"[red]✗ {e.message}: {module_id}[/red]")
        ids = [m.id for m in catalog.list_modules()]
        if ids:
            console.print("\nAvailable modules:")
            for mid in ids:
                console.print(f"  - {mid}")
        raise typer.Exit(code=1)

    console.print(f"\n[bold]{content.title}[/bold]")
    if content.description:
        console.print(f"  [dim]{content.description}[/dim]")
    console.print(f"  [dim]difficulty:[/dim] {content.difficulty}")
    console.print(f"  [dim]duration:[/dim]   {content.duration}\n")

    for step in content.steps:
        console.print(f"  [bold]{step.id}.[/bold] {step.title} [dim]({step.video_timestamp})[/dim]")


if __name__ == "__main__":
    app()
