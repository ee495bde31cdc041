"""Command-line interface for the JMX to LoadRunner converter.

This module provides a Click-based CLI for converting JMeter JMX test
plans into LoadRunner Web/HTTP script folders.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from jmx2lr import __version__
from jmx2lr.core.converter import JMXToLoadRunnerConverter, inspect_jmx
from jmx2lr.core.data_structures import ConversionResult
from jmx2lr.core.options import ConverterOptions, load_options
from jmx2lr.exceptions import Jmx2LrException

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: int) -> None:
    """Route library logging through rich.

    Args:
        verbose: 0 = warnings, 1 = info, 2+ = debug
    """
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _default_output_dir(jmx_path: str) -> str:
    """Return <jmx dir>/<jmx stem>_loadrunner."""
    path = Path(jmx_path)
    return str(path.parent / f"{path.stem}_loadrunner")


def _display_result(result: ConversionResult) -> None:
    """Print generated script folders and warnings."""
    if result.scripts:
        table = Table(
            title=f"Generated {len(result.scripts)} LoadRunner Script(s)",
            show_header=True,
        )
        table.add_column("#", style="dim", width=3)
        table.add_column("Thread Group", style="cyan")
        table.add_column("Script Folder", style="green")
        table.add_column("Requests", justify="right")
        table.add_column("Transactions", justify="right")
        table.add_column("Correlations", justify="right")
        table.add_column("Parameters", justify="right")

        for idx, script in enumerate(result.scripts, 1):
            parameters = sum(len(s.variable_names) for s in script.parameter_sets)
            table.add_row(
                str(idx),
                script.group_name,
                script.script_dir,
                str(script.samplers),
                str(script.transactions),
                str(script.correlations),
                str(parameters),
            )

        console.print()
        console.print(table)

    if result.warnings:
        console.print(f"\n[bold yellow]Warnings ({len(result.warnings)}):[/bold yellow]")
        for i, warning in enumerate(result.warnings, 1):
            console.print(f"  {i}. {warning}")
        console.print("[dim]Warnings are also written to each script's conversion.log[/dim]")


@click.group()
@click.version_option(version=__version__, prog_name="jmx2lr")
def cli():
    """JMX to LoadRunner Converter - Turn JMeter test plans into VuGen scripts.

    Creates one LoadRunner Web/HTTP script folder per Thread Group, with
    requests, transactions, correlations and CSV parameters converted.
    """
    pass


@cli.command()
@click.argument("jmx_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    "output_dir",
    type=click.Path(file_okay=False),
    help="Output folder for script folders (default: <jmx name>_loadrunner next to the JMX)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML file with converter options",
)
@click.option(
    "--no-correlation",
    is_flag=True,
    help="Do not convert Regex/JSON extractors",
)
@click.option(
    "--no-dat",
    is_flag=True,
    help="Do not write .dat copies of CSV files",
)
@click.option(
    "--script-prefix",
    type=str,
    help="Prefix of script folder names (default: Script_)",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Show progress (-v) or debug details (-vv)",
)
def convert(
    jmx_path: str,
    output_dir: Optional[str],
    config_path: Optional[str],
    no_correlation: bool,
    no_dat: bool,
    script_prefix: Optional[str],
    verbose: int,
):
    """Convert a JMeter JMX test plan into LoadRunner scripts.

    Example:
        jmx2lr convert plan.jmx
        jmx2lr convert plan.jmx -o lr_scripts
        jmx2lr convert plan.jmx --config jmx2lr.yaml --no-correlation
    """
    _configure_logging(verbose)

    try:
        options = load_options(config_path) if config_path else ConverterOptions()
    except (OSError, Jmx2LrException) as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    # Command line flags win over the options file
    if no_correlation:
        options.enable_correlation = False
    if no_dat:
        options.write_dat_files = False
    if script_prefix is not None:
        options.script_prefix = script_prefix

    output_dir = output_dir or _default_output_dir(jmx_path)

    console.print(f"\n[bold]Converting JMX file:[/bold] {jmx_path}")
    console.print(f"[bold]Output folder:[/bold] {output_dir}")

    result = JMXToLoadRunnerConverter(options).convert(jmx_path, output_dir)

    _display_result(result)
    console.print()

    if not result.success:
        console.print(
            Panel(
                f"[bold red]✗ Conversion failed:[/bold red] {result.error}",
                border_style="red",
            )
        )
        sys.exit(1)

    console.print(
        Panel(
            f"[bold green]✓ Conversion completed![/bold green]\n\n"
            f"Script folders written to: {output_dir}\n"
            f"[dim]Open them in VuGen and review parameters & correlations.[/dim]",
            border_style="green",
        )
    )


@cli.command()
@click.argument("jmx_path", type=click.Path(exists=True, dir_okay=False))
def inspect(jmx_path: str):
    """Show what a conversion of a JMX test plan would produce.

    Lists Thread Groups with the samplers, transaction controllers and
    extractors the converter will pick up, plus the CSV data sets.

    Example:
        jmx2lr inspect plan.jmx
    """
    try:
        summary = inspect_jmx(jmx_path)
    except Jmx2LrException as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    groups = summary["thread_groups"]
    if not groups:
        console.print("\n[yellow]No ThreadGroup elements found in JMX.[/yellow]")
    else:
        table = Table(title=f"Found {len(groups)} Thread Group(s)", show_header=True)
        table.add_column("#", style="dim", width=3)
        table.add_column("Thread Group", style="cyan")
        table.add_column("Samplers", justify="right")
        table.add_column("Transactions", justify="right")
        table.add_column("Regex", justify="right")
        table.add_column("JSON", justify="right")

        for idx, group in enumerate(groups, 1):
            name = group["name"]
            if not group["has_children"]:
                name += " [yellow](no hashTree)[/yellow]"
            table.add_row(
                str(idx),
                name,
                str(group["samplers"]),
                str(group["transactions"]),
                str(group["regex_extractors"]),
                str(group["json_extractors"]),
            )

        console.print()
        console.print(table)

    data_sets = summary["csv_data_sets"]
    if data_sets:
        csv_table = Table(title="CSV Data Sets", show_header=True)
        csv_table.add_column("Name", style="cyan")
        csv_table.add_column("File", style="green")
        csv_table.add_column("Variables")
        csv_table.add_column("Delimiter", justify="center")

        for data_set in data_sets:
            csv_table.add_row(
                data_set["name"],
                data_set["filename"] or "[red](missing)[/red]",
                ", ".join(data_set["variable_names"]) or "[dim](none)[/dim]",
                data_set["delimiter"],
            )

        console.print()
        console.print(csv_table)

    console.print(f"\n[dim]Next step:[/dim] jmx2lr convert {jmx_path}")


@cli.command()
def mcp():
    """Serve the converter over MCP (stdio).

    Exposes the inspect_jmx_plan and convert_jmx_to_loadrunner tools to
    MCP clients. Status messages go to stderr; stdout carries the protocol.

    Example:
        jmx2lr mcp
    """
    try:
        from jmx2lr.mcp_server import run_server

        err_console.print(
            Panel(
                "[bold green]jmx2lr MCP server listening on stdio[/bold green]\n\n"
                "Tools: inspect_jmx_plan, convert_jmx_to_loadrunner\n\n"
                "[dim]Press Ctrl+C to stop[/dim]",
                title="jmx2lr MCP",
                border_style="green",
            )
        )

        run_server()

    except KeyboardInterrupt:
        err_console.print("\n[yellow]MCP server stopped[/yellow]")
    except Exception as e:
        err_console.print(f"\n[bold red]MCP server failed:[/bold red] {e}")
        sys.exit(1)


def main():
    """Entry point for CLI application."""
    cli()


if __name__ == "__main__":
    main()
