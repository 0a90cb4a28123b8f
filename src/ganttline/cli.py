"""Command-line interface for Ganttline."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Annotated

import typer

from .exceptions import GanttlineError
from .gantt import generate_mermaid, render_table
from .logger import setup_logger
from .navigation import Direction, navigate
from .parser import load_project
from .scheduler import ResolutionMode, SchedulingService, TimelineResult
from .unified_config import UnifiedConfig, discover_config, load_unified_config

app = typer.Typer(
    name="ganttline",
    help="Lay out project tasks on a dependency-ordered timeline",
    add_completion=False,
)

FileArgument = Annotated[Path, typer.Argument(help="Path to the project YAML file")]
CurrentDateOption = Annotated[
    str | None,
    typer.Option(
        "--current-date",
        help="Today's date for fallback windows and labels (YYYY-MM-DD). Defaults to today",
    ),
]
ResolutionOption = Annotated[
    ResolutionMode | None,
    typer.Option("--resolution", help="Dependency resolution mode. Overrides config"),
]
OutputOption = Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")]


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show date pushes, 2=show checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: ganttline_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for ganttline commands."""
    setup_logger(verbose)
    ctx.obj = config


def _parse_date_option(date_str: str | None, option_name: str) -> date | None:
    """Parse a YYYY-MM-DD option value, exiting with an error if it is malformed."""
    if date_str is None:
        return None

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        typer.echo(
            f"Error: Invalid date format for --{option_name} '{date_str}'. Use YYYY-MM-DD format.",
            err=True,
        )
        raise typer.Exit(1) from None


def _load_config(ctx: typer.Context, file: Path) -> UnifiedConfig:
    config_path = discover_config(file, ctx.obj)
    if config_path is None:
        return UnifiedConfig()
    try:
        return load_unified_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


def _run_schedule(
    ctx: typer.Context,
    file: Path,
    current_date: date | None,
    resolution: ResolutionMode | None,
) -> tuple[TimelineResult, UnifiedConfig]:
    config = _load_config(ctx, file)
    if resolution is not None:
        config.scheduler.resolution = resolution

    try:
        project = load_project(file, today=current_date)
    except GanttlineError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    service = SchedulingService(project, current_date=current_date, config=config.scheduler)
    return service.schedule(), config


def _write_output(content: str, output: Path | None, what: str) -> None:
    if output:
        if output.suffix.lower() == ".md" and content.startswith("gantt"):
            content = f"```mermaid\n{content}\n```\n"
        output.write_text(content, encoding="utf-8")
        typer.echo(f"{what} written to {output}")
    else:
        typer.echo(content)


def _echo_warnings(result: TimelineResult) -> None:
    if result.warnings:
        typer.echo("\nWarnings:", err=True)
        for warning in result.warnings:
            typer.echo(f"  - {warning}", err=True)


@app.command()
def schedule(
    ctx: typer.Context,
    file: FileArgument = Path("project.yaml"),
    *,
    current_date: CurrentDateOption = None,
    resolution: ResolutionOption = None,
    output: OutputOption = None,
) -> None:
    """Show the resolved schedule as a table."""
    today = _parse_date_option(current_date, "current-date")
    result, config = _run_schedule(ctx, file, today, resolution)
    table = render_table(result, today=today, show_connectors=config.gantt.show_connectors)
    _write_output(table, output, "Schedule")
    _echo_warnings(result)


@app.command()
def gantt(
    ctx: typer.Context,
    file: FileArgument = Path("project.yaml"),
    *,
    current_date: CurrentDateOption = None,
    resolution: ResolutionOption = None,
    title: Annotated[str | None, typer.Option("--title", "-t", help="Chart title")] = None,
    group_by_level: Annotated[
        bool,
        typer.Option("--group-by-level", help="One chart section per dependency level"),
    ] = False,
    output: OutputOption = None,
) -> None:
    """Generate a Gantt chart in Mermaid format."""
    today = _parse_date_option(current_date, "current-date")
    result, config = _run_schedule(ctx, file, today, resolution)
    mermaid_output = generate_mermaid(
        result,
        title=title or config.gantt.title,
        current_date=today,
        group_by_level=group_by_level or config.gantt.group_by_level,
    )
    _write_output(mermaid_output, output, "Gantt chart")
    _echo_warnings(result)


@app.command()
def grid(
    ctx: typer.Context,
    file: FileArgument = Path("project.yaml"),
    *,
    current_date: CurrentDateOption = None,
    resolution: ResolutionOption = None,
) -> None:
    """Print the timeline grid bounds and initial scroll position."""
    today = _parse_date_option(current_date, "current-date")
    result, config = _run_schedule(ctx, file, today, resolution)
    typer.echo(f"Project window: {result.project_start} .. {result.project_end}")
    typer.echo(f"Grid:           {result.grid[0]} .. {result.grid[-1]} ({len(result.grid)} days)")
    typer.echo(f"Scroll offset:  {result.scroll_offset():.1f}%")

    reference = today or date.today()  # noqa: DTZ011
    mode = config.gantt.view_mode
    typer.echo(
        f"View ({mode.value}):   prev {navigate(reference, mode, Direction.PREV)}, "
        f"next {navigate(reference, mode, Direction.NEXT)}"
    )


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
