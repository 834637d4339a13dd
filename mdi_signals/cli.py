"""
CLI Module

Command line interface for the MDI signals generator providing:
- generate: run the full conversion pipeline (default command)
- cache list / cache clear: inspect and prune downloaded archives
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config_manager import ConfigManager, GeneratorPaths
from .env import GENERATOR_NAME, GENERATOR_VERSION, env, load_env_file
from .errors import ConfigurationError, SourceArchiveError
from .logger import get_logger, reconfigure_logging, set_log_level
from .pipeline import GenerationResult, SignalGenerator, write_report
from .source_archive import SourceArchive
from .utils import format_duration, format_size

logger = get_logger(__name__)
console = Console()

SETTINGS_LOAD_FAILED = -1


def _print_summary(result: GenerationResult, dist_dir: Path) -> None:
    table = Table(title="MDI Signals", show_header=False, title_justify="left")
    table.add_column("Key", style="bold")
    table.add_column("Value")

    table.add_row("Tag", result.tag)
    table.add_row("Source", result.origin or "-")
    table.add_row("Icons", str(len(result.icons)))
    table.add_row("Subgroups", str(len(result.subgroups)))
    table.add_row("Output", str(dist_dir))
    table.add_row("Duration", format_duration(result.duration))
    if result.success:
        table.add_row("Status", "[green]success[/green]")
    else:
        table.add_row("Status", f"[red]failed: {escape(result.error)}[/red]")

    console.print(table)


@click.group(invoke_without_command=True)
@click.version_option(version=GENERATOR_VERSION, prog_name=GENERATOR_NAME)
@click.help_option('--help', '-h')
@click.option('--env-file', type=click.Path(exists=True, dir_okay=False), default=None,
              help='Extra .env file loaded before the command runs')
@click.pass_context
def main(ctx, env_file: Optional[str] = None):
    """
    Material Design Icons to Factorio virtual signals generator

    Downloads a tagged icon release, rasterizes every SVG into a mipmap strip
    and writes the signal, subgroup and locale files into dist/.

    \b
    Examples:
      mdi-signals
      mdi-signals generate --tag v7.4.47
      mdi-signals generate --offline --report report.json
      mdi-signals cache list
    """
    if env_file:
        load_env_file(env_file, override=True)
        reconfigure_logging()

    if ctx.invoked_subcommand is None:
        ctx.invoke(generate)


@main.command()
@click.option('--config', '-c', 'config_file', default=None,
              help='Settings file (JSON or YAML)  [default: generator.json]')
@click.option('--tag', '-t', default=None, help='Override the release tag from the settings file')
@click.option('--offline', is_flag=True, help='Fail instead of downloading when the tag is not cached')
@click.option('--report', type=click.Path(dir_okay=False), default=None,
              help='Write a JSON generation report to this file')
@click.option('--verbose', '-v', is_flag=True, help='Show debug output')
def generate(config_file: Optional[str] = None, tag: Optional[str] = None,
             offline: bool = False, report: Optional[str] = None, verbose: bool = False):
    """Run the full conversion pipeline"""
    if verbose:
        set_log_level('DEBUG', 'console')

    try:
        settings = ConfigManager(config_file).load({'tag': tag})
    except ConfigurationError as e:
        click.echo(f"Failed to load the settings file: {e}")
        sys.exit(SETTINGS_LOAD_FAILED)

    paths = GeneratorPaths.from_env()
    result = SignalGenerator(settings, paths, offline=offline).run()

    if report:
        report_path = write_report(result, Path(report))
        logger.info(f"Report written: {report_path}")

    if console.is_terminal:
        _print_summary(result, paths.dist_dir)

    if not result.success:
        sys.exit(1)


@main.group()
def cache():
    """Inspect or prune cached source archives"""
    pass


def _archive() -> SourceArchive:
    paths = GeneratorPaths.from_env()
    return SourceArchive(paths.cache_dir, paths.temp_dir, timeout=env.http_timeout)


@cache.command('list')
def cache_list():
    """List cached archives"""
    cached = _archive().list_cached()
    if not cached:
        click.echo("No cached archives")
        return

    table = Table(title="Cached archives", title_justify="left")
    table.add_column("Tag", style="bold")
    table.add_column("Size", justify="right")
    table.add_column("Path")
    for item in cached:
        table.add_row(item.tag, format_size(item.size), str(item.path))
    console.print(table)


@cache.command('clear')
@click.option('--tag', '-t', default=None, help='Only remove this tag')
@click.option('--yes', '-y', is_flag=True, help='Do not ask for confirmation')
def cache_clear(tag: Optional[str], yes: bool):
    """Remove cached archives"""
    target = f"archive for tag '{tag}'" if tag else "all cached archives"
    if not yes and not click.confirm(f"Remove {target}?", default=False):
        click.echo("Cancelled")
        return

    try:
        removed = _archive().clear(tag)
    except SourceArchiveError as e:
        click.echo(str(e), err=True)
        sys.exit(1)
    click.echo(f"Removed {removed} archive(s)")


if __name__ == '__main__':
    main()
