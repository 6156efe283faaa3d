"""slnloader CLI - inspect Visual Studio solution files."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from slnloader.config import LoaderConfig, format_guid
from slnloader.errors import InvalidSolutionError
from slnloader.items.solution import LoadedProject, SolutionFileItem, SolutionFolder
from slnloader.loader import LoadResult, load_solution
from slnloader.output import build_result, write_output


@click.group()
def cli() -> None:
    """slnloader - Parse and resolve Visual Studio solution files."""
    pass


def _add_items(node, items) -> None:
    from rich.markup import escape

    for item in items:
        if isinstance(item, SolutionFolder):
            branch = node.add(f"[bold yellow]{escape(item.name)}[/bold yellow]")
            _add_items(branch, item.items)
        elif isinstance(item, SolutionFileItem):
            node.add(f"[dim]{escape(item.name)}[/dim]")
        elif isinstance(item, LoadedProject):
            style = "green" if item.status == "loaded" else "red"
            config = f" ({item.configuration})" if item.configuration else ""
            node.add(f"[{style}]{escape(item.name)}[/{style}]{escape(config)} [dim]{item.status}[/dim]")


def _run_with_progress(path: str, config: LoaderConfig) -> LoadResult:
    """Load the solution with Rich progress display."""
    from rich.console import Console
    from rich.progress import BarColumn, Progress, TextColumn, TimeElapsedColumn
    from rich.table import Table
    from rich.tree import Tree

    console = Console()

    with Progress(
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Reading solution...", total=1.0)

        def on_progress(value, task_name):
            progress.update(task, completed=value, description=task_name or "Reading solution...")

        result = load_solution(path, config, progress_callback=on_progress)

    solution = result.solution
    table = Table(title=f"Solution: {Path(path).name}", show_edge=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Format", solution.format_version.name if solution.format_version else "?")
    table.add_row("Projects", str(result.project_count))
    table.add_row("Folders", str(len(solution.folders())))
    table.add_row("Configurations", ", ".join(solution.configuration_names))
    table.add_row("Platforms", ", ".join(solution.platform_names))
    table.add_row("Active", str(solution.active_configuration or "-"))
    if result.repaired_ids:
        table.add_row("Repaired GUIDs", "yes")
    console.print(table)

    tree = Tree(f"[bold]{solution.name}[/bold]")
    _add_items(tree, solution.items)
    console.print(tree)

    if config.verbose:
        timing_table = Table(title="Phase Timings", show_edge=False)
        timing_table.add_column("Phase", style="bold")
        timing_table.add_column("Time (ms)", justify="right")
        for phase, seconds in result.phase_timings.items():
            timing_table.add_row(phase, f"{seconds * 1000:.1f}")
        console.print(timing_table)

    return result


@cli.command("inspect")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", "output_path", default=None, help="Write the resolved solution as JSON")
@click.option("-c", "--configuration", default=None, help="Active configuration, e.g. 'Release|x64'")
@click.option("--build-order", is_flag=True, help="Print projects in dependency order")
@click.option("--verbose", is_flag=True, help="Debug logging and per-phase timings")
@click.option("--quiet", is_flag=True, help="Suppress all output except errors")
def inspect_cmd(
    path: str,
    output_path: str | None,
    configuration: str | None,
    build_order: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Parse a solution file and show its resolved structure."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    config = LoaderConfig(active_configuration=configuration, verbose=verbose, quiet=quiet)

    try:
        if config.quiet:
            result = load_solution(path, config)
        else:
            result = _run_with_progress(path, config)

        if build_order and not config.quiet:
            from slnloader.dotnet.dependencies import build_order as order_projects

            for index, project in enumerate(order_projects(result.entries, result.solution), 1):
                click.echo(f"{index:3d}. {project.name} {format_guid(project.id_guid)}")
    except InvalidSolutionError as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)

    if output_path:
        write_output(build_result(result), output_path)
        if not config.quiet:
            from rich.console import Console
            Console().print(f"[green]Output written to:[/green] {output_path}")


if __name__ == "__main__":
    cli()
