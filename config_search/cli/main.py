"""Main CLI interface for config-search."""

import click
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Tuple
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from .. import __version__
from ..core.config import OUTPUT_FORMATS, setup_config
from ..core.exceptions import (
    ConfigSearchError, ConfigurationError, DirectoryAccessError, FileSystemError,
    PathNotFoundError, ValidationError
)
from ..core.formatter import format_file_size, format_results
from ..core.logging_config import setup_logging
from ..core.models import FormatOptions, ResultSet
from ..core.scanner import search_configuration_files

# Initialize Rich console
console = Console()

SUGGESTIONS = [
    "package.json for Node.js projects",
    ".env for environment variables",
    ".gitignore for version control",
    "README.md for documentation",
]


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="config-search")
@click.argument("directory", required=False, type=click.Path(path_type=Path))
@click.option("--path", "-p", "path_option", type=click.Path(path_type=Path),
              help="Project path to search (default: current directory)")
@click.option("--max-depth", "-d", type=click.IntRange(min=0),
              help="Maximum search depth, 0 searches the root only (default from config)")
@click.option("--no-subdirs", is_flag=True, help="Don't search subdirectories")
@click.option("--no-categories", is_flag=True, help="Don't group results by category")
@click.option("--no-paths", is_flag=True, help="Don't show file paths")
@click.option("--no-summary", is_flag=True, help="Don't show summary statistics")
@click.option("--exclude", "-e", multiple=True, help="Additional path prefix to skip, relative to the search root (repeatable)")
@click.option("--format", "-f", "output_format", type=click.Choice(OUTPUT_FORMATS),
              help="Output format (default from config)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--config", "-c", "config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Configuration file path (default: ~/.config_search/config.ini if present)")
@click.option("--log-level", type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help="Set logging level (overrides config)")
@click.option("--log-file", type=click.Path(path_type=Path),
              help="Log file path (overrides config)")
def cli(directory: Path, path_option: Path, max_depth: int, no_subdirs: bool, no_categories: bool,
        no_paths: bool, no_summary: bool, exclude: Tuple[str, ...], output_format: str, verbose: bool,
        config_file: Path, log_level: str, log_file: Path):
    """Search a project directory for configuration files.

    \b
    Examples:
      config-search                    # Search current directory
      config-search /path/to/project   # Search specific path
      config-search --max-depth 1      # Shallow search
      config-search --no-categories    # Simple list format
    """
    try:
        config_manager = setup_config(config_file)
    except ConfigurationError as e:
        handle_cli_error(e, "configuration")
        raise click.Abort()

    app_config = config_manager.get_config()

    # Override logging config if command line options provided
    if log_level or log_file:
        logging_config = replace(
            app_config.logging,
            level=log_level or app_config.logging.level,
            file_path=log_file or app_config.logging.file_path,
            file_enabled=bool(log_file) or app_config.logging.file_enabled,
        )
    else:
        logging_config = app_config.logging

    logging_manager = setup_logging(logging_config)
    if verbose and not log_level:
        logging_manager.set_level("INFO")

    try:
        options = app_config.search.to_search_options()
        overrides = {}
        if max_depth is not None:
            overrides["max_depth"] = max_depth
        if no_subdirs:
            overrides["recursive"] = False
        if no_categories:
            overrides["group_by_category"] = False
        if exclude:
            overrides["exclude_paths"] = options.exclude_paths + tuple(exclude)
        options = options.with_overrides(**overrides)
    except ValidationError as e:
        handle_cli_error(e, "option parsing")
        raise click.Abort()

    format_options = app_config.output.to_format_options(group_by_category=options.group_by_category)
    if no_paths:
        format_options = replace(format_options, show_paths=False)
    if no_summary:
        format_options = replace(format_options, show_summary=False)

    output_format = output_format or app_config.output.format
    target = path_option or directory or Path(".")

    if output_format != "json":
        console.print(f"Searching for configuration files in: [bold]{escape(str(target.resolve()))}[/bold]\n")

    try:
        results = search_configuration_files(target, options)
    except ConfigSearchError as e:
        handle_cli_error(e, "search")
        raise click.Abort()

    if output_format == "json":
        click.echo(json.dumps(results.to_dict(), indent=2))
        return

    if results.is_empty:
        console.print("[yellow]No configuration files found in the specified directory.[/yellow]")
        console.print("\nTip: Make sure you're in the right directory or adjust search options.")
        console.print("This might be a new project. Consider adding:")
        for suggestion in SUGGESTIONS:
            console.print(f"  - {suggestion}")
    else:
        if output_format == "table":
            _display_table(results, format_options)
        else:
            click.echo(format_results(results, format_options))

        console.print(f"Search completed in [bold]{results.duration * 1000:.0f}ms[/bold]")

        top_categories = results.summary.top_categories(3)
        if top_categories:
            formatted = ", ".join(f"{category} ({count})" for category, count in top_categories)
            console.print(f"Top categories: [bold cyan]{formatted}[/bold cyan]")

    _display_warnings(results, verbose)


def _display_table(results: ResultSet, options: FormatOptions):
    """Display matched files as a Rich table."""
    if options.show_summary:
        console.print(f"[bold]Total files found: {results.summary.total}[/bold]")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("File", style="cyan", no_wrap=False, max_width=30)
    table.add_column("Category", style="green", justify="center")
    table.add_column("Size", justify="right")
    table.add_column("Modified", style="blue")
    if options.show_paths:
        table.add_column("Path", style="dim", no_wrap=False, max_width=50)

    if options.group_by_category and results.is_grouped:
        rows = [matched for matches in results.categorized.values() for matched in matches]
    else:
        rows = list(results.files)

    for matched in rows:
        row = [
            escape(matched.name),
            matched.category,
            format_file_size(matched.size),
            matched.modified.strftime("%Y-%m-%d %H:%M"),
        ]
        if options.show_paths:
            row.append(escape(matched.relative_path))
        table.add_row(*row)

    console.print(table)


def _display_warnings(results: ResultSet, verbose: bool):
    """Report directories that were skipped during the search."""
    if not results.warnings:
        return

    console.print(f"[bold yellow]Warnings: {len(results.warnings)} path(s) could not be read[/bold yellow]")
    if verbose:
        for warning in results.warnings[:10]:
            console.print(f"  [yellow]- {escape(warning)}[/yellow]")
        if len(results.warnings) > 10:
            console.print(f"  [dim]... and {len(results.warnings) - 10} more warnings[/dim]")


def handle_cli_error(error: Exception, operation: str = "operation") -> None:
    """
    Handle CLI errors with appropriate user feedback.

    Args:
        error: The exception that occurred
        operation: Description of the operation that failed
    """
    message = escape(str(error))
    if isinstance(error, PathNotFoundError):
        console.print(f"[bold red]Error:[/bold red] {message}")
        console.print("[yellow]Please check that the path exists and is accessible.[/yellow]")
    elif isinstance(error, DirectoryAccessError):
        console.print(f"[bold red]Permission Error:[/bold red] {message}")
        console.print("[yellow]Please check directory permissions or run with appropriate privileges.[/yellow]")
    elif isinstance(error, FileSystemError):
        console.print(f"[bold red]File System Error:[/bold red] {message}")
    elif isinstance(error, ConfigurationError):
        console.print(f"[bold red]Configuration Error:[/bold red] {message}")
        console.print("[yellow]Please fix the configuration file or pass a different one with --config.[/yellow]")
    elif isinstance(error, ValidationError):
        console.print(f"[bold red]Invalid Option:[/bold red] {message}")
    elif isinstance(error, ConfigSearchError):
        console.print(f"[bold red]Error:[/bold red] {message}")
    else:
        console.print(f"[bold red]Unexpected Error:[/bold red] {message}")

    # Log the full error for debugging
    logging.getLogger(__name__).debug(f"CLI error in {operation}: {error}", exc_info=True)


if __name__ == "__main__":
    cli()
