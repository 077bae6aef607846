"""classmerge CLI - Merge class maps from co-installed vendored projects."""

from __future__ import annotations

import logging
import sys

import click

from classmerge.config import MANIFEST_FILENAME, ResolveResult, ResolverConfig
from classmerge.errors import ClassMergeError
from classmerge.output import write_output
from classmerge.pipeline import run_pipeline
from classmerge.resolver import ClassResolver


@click.group()
def cli() -> None:
    """classmerge - Resolve class names across vendored package copies."""
    pass


def _run_with_progress(config: ResolverConfig) -> ResolveResult:
    """Run the pipeline with Rich progress display."""
    from rich.console import Console
    from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
    from rich.table import Table

    console = Console()

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Initialising...", total=None)

        def on_phase(name, label):
            progress.update(task, description=label)

        result = run_pipeline(config, progress_callback=on_phase)

    table = Table(title="Project Precedence", show_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Project root", style="bold")
    table.add_column("Weight", justify="right")
    for i, root_path in enumerate(result.order, start=1):
        table.add_row(str(i), root_path, str(result.weights[root_path]))
    console.print(table)

    stats = result.stats
    summary = Table(title="Summary", show_edge=False)
    summary.add_column("Metric", style="bold")
    summary.add_column("Value", justify="right")
    summary.add_row("Projects", str(stats.get("projects", 0)))
    summary.add_row("Contested packages", str(stats.get("contested_packages", 0)))
    summary.add_row("Classes", str(stats.get("classes", 0)))
    duration = result.metadata.get("resolution_duration_ms", 0)
    summary.add_row("Duration", f"{duration:.1f}ms")
    console.print(summary)

    if config.verbose and result.latest:
        latest_table = Table(title="Latest Contested Versions", show_edge=False)
        latest_table.add_column("Package", style="bold")
        latest_table.add_column("Encoded version", justify="right")
        for package, version in sorted(result.latest.items()):
            latest_table.add_row(package, str(version))
        console.print(latest_table)

    return result


@cli.command("resolve")
@click.argument("vendor_dirs", nargs=-1, required=True, type=click.Path(exists=True, file_okay=False))
@click.option("-o", "--output", "output_path", default="classmap.merged.json", help="Output JSON file path")
@click.option("--installed", "installed_files", multiple=True, type=click.Path(), help="Extra installed-state JSON files for the fallback pass")
@click.option("--manifest-name", default=MANIFEST_FILENAME, help="Manifest filename at each project root")
@click.option("--verbose", is_flag=True, help="Show debug logging and latest contested versions")
@click.option("--quiet", is_flag=True, help="Suppress all output except errors")
def resolve_cmd(
    vendor_dirs: tuple[str, ...],
    output_path: str,
    installed_files: tuple[str, ...],
    manifest_name: str,
    verbose: bool,
    quiet: bool,
) -> None:
    """Merge the class maps of VENDOR_DIRS and write the result as JSON."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    config = ResolverConfig(
        vendor_dirs=list(vendor_dirs),
        installed_files=list(installed_files),
        manifest_filename=manifest_name,
        output_path=output_path,
        verbose=verbose,
        quiet=quiet,
    )

    try:
        if quiet:
            result = run_pipeline(config)
        else:
            result = _run_with_progress(config)
    except ClassMergeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    write_output(result, output_path)

    if not quiet:
        from rich.console import Console
        Console().print(f"[green]Output written to:[/green] {output_path}")


@cli.command("lookup")
@click.argument("name")
@click.argument("vendor_dirs", nargs=-1, required=True, type=click.Path(exists=True, file_okay=False))
@click.option("--installed", "installed_files", multiple=True, type=click.Path(), help="Extra installed-state JSON files for the fallback pass")
@click.option("--manifest-name", default=MANIFEST_FILENAME, help="Manifest filename at each project root")
def lookup_cmd(
    name: str,
    vendor_dirs: tuple[str, ...],
    installed_files: tuple[str, ...],
    manifest_name: str,
) -> None:
    """Print the file that NAME resolves to across VENDOR_DIRS."""
    resolver = ClassResolver(config=ResolverConfig(
        vendor_dirs=list(vendor_dirs),
        installed_files=list(installed_files),
        manifest_filename=manifest_name,
    ))
    try:
        resolver.run()
    except ClassMergeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    file_path = resolver.lookup(name)
    if file_path is None:
        click.echo(f"Not found: {name}", err=True)
        sys.exit(1)
    click.echo(file_path)


if __name__ == "__main__":
    cli()
