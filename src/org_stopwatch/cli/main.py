"""Main CLI interface for Org Stopwatch."""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from org_stopwatch.cli.app import StopwatchApp
from org_stopwatch.core.clock import MonotonicClock
from org_stopwatch.core.config import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_DEBUG_LOG,
    ConfigError,
    StopwatchConfig,
    apply_overrides,
    load_config,
    save_config,
)
from org_stopwatch.core.log_exporter import LogExporter, OrgLogSink
from org_stopwatch.core.renderer import ConsoleSurface, Renderer
from org_stopwatch.core.split_tree import SplitTree
from org_stopwatch.core.timefmt import format_duration

console = Console()


def configure_logging(debug_log: Optional[Path]) -> None:
    """Send package logs to a file; the terminal belongs to the renderer."""
    if debug_log is None:
        return
    debug_log = Path(debug_log).expanduser()
    debug_log.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(debug_log, encoding="utf-8")
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    package_logger = logging.getLogger("org_stopwatch")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def get_config_or_exit(config_path: Optional[str], **overrides) -> StopwatchConfig:
    """Load config and apply CLI overrides, or exit with an error message."""
    try:
        config = load_config(Path(config_path) if config_path else None)
        return apply_overrides(config, **overrides)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort() from e


@click.group()
@click.version_option()
def main():
    """Org Stopwatch - terminal time tracking with nested subgoals."""


@main.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Path to config file",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    help="Org file to append logs to",
)
@click.option(
    "--max-splits", type=int, help="Maximum number of subgoals per session"
)
@click.option(
    "--tick",
    "tick_interval",
    type=float,
    help="Seconds between screen refreshes",
)
@click.option(
    "--debug", is_flag=True, help=f"Write debug logs to {DEFAULT_DEBUG_LOG}"
)
def run(
    config_path: Optional[str],
    log_file: Optional[str],
    max_splits: Optional[int],
    tick_interval: Optional[float],
    debug: bool,
):
    """Run the interactive stopwatch."""
    # termios is POSIX-only; keep the other commands importable elsewhere.
    from org_stopwatch.cli.terminal import KeyboardInput

    config = get_config_or_exit(
        config_path,
        log_file=Path(log_file) if log_file else None,
        max_splits=max_splits,
        tick_interval=tick_interval,
    )
    configure_logging(config.debug_log or (DEFAULT_DEBUG_LOG if debug else None))
    logger = logging.getLogger(__name__)
    logger.info("Starting stopwatch with %s", config.model_dump())

    tree = SplitTree(MonotonicClock(), max_splits=config.max_splits)
    renderer = Renderer(ConsoleSurface(console), tree)
    exporter = LogExporter(OrgLogSink(config.log_file))

    with KeyboardInput() as keys:
        app = StopwatchApp(tree, renderer, keys, exporter, config.tick_interval)
        try:
            app.run()
        except KeyboardInterrupt:
            pass
    console.print()


@main.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Path to config file",
)
@click.option(
    "--write", is_flag=True, help="Save the effective config to the config file"
)
def config(config_path: Optional[str], write: bool):
    """Show the effective configuration."""
    effective = get_config_or_exit(config_path)
    target = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    table = Table(title="Org Stopwatch Config")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    for key, value in effective.model_dump().items():
        table.add_row(key, "-" if value is None else str(value))
    console.print(table)

    if write:
        saved = save_config(effective, target)
        console.print(f"[green]✅ Wrote config to {saved}[/green]")


@main.command("format")
@click.argument("seconds", type=float)
def format_command(seconds: float):
    """Print SECONDS in the log's HH:MM:SS.mmm format."""
    click.echo(format_duration(seconds))


if __name__ == "__main__":
    main()
