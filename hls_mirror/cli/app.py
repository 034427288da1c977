"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from hls_mirror import __version__
from hls_mirror.core.mirror import MirrorSession
from hls_mirror.exceptions import HlsMirrorError
from hls_mirror.models.stats import MirrorResult
from hls_mirror.storage.config_manager import ConfigManager
from hls_mirror.utils.formatting import format_duration, parse_duration
from hls_mirror.utils.path import save_manifest

from .formatters import print_config, print_summary_panel

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("hls_mirror")

app = typer.Typer(
    name="hls-mirror",
    help=(
        "Mirror an HLS (.m3u8) playlist and all of its segments to a local"
        " directory for offline playback."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "hls-mirror"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the stored default settings."
    ),
):
    """HLS playlist mirroring CLI"""
    if version:
        console.print(f"[bold]hls-mirror[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("hls_mirror").setLevel(log_level)

    if show_config:
        try:
            config_data = ConfigManager(CONFIG_FILE).load_settings()
        except HlsMirrorError as e:
            console.print(f"[red]✗ {e}[/red]")
            raise typer.Exit(code=1) from e
        print_config(CONFIG_FILE, config_data)
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing config file without asking."
    ),
):
    """Write a config file holding the default settings."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    try:
        ConfigManager(CONFIG_FILE).save_new_config()
    except HlsMirrorError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")


@app.command(name="mirror")
def mirror_command(
    input_url: str = typer.Option(
        ..., "-i", "--input", help="URL of the .m3u8 playlist to mirror."
    ),
    output_dir: str = typer.Option(
        ..., "-o", "--output", help="Directory receiving index.m3u8 and the segments."
    ),
    threads: int | None = typer.Option(
        None,
        "-t",
        "--threads",
        help="Number of concurrent download workers (1-10000, default 1).",
    ),
    sleep: str | None = typer.Option(
        None,
        "-s",
        "--sleep",
        help="Pause each worker takes after every file, e.g. 500ms, 2s, 1m30s.",
    ),
    prefix: str | None = typer.Option(
        None,
        "-p",
        "--prefix",
        help="Prefix for generated file names. End it with '/' for a sub-directory.",
    ),
    width: int | None = typer.Option(
        None, "--width", help="Digits in generated file names (default 5)."
    ),
    retries: int | None = typer.Option(
        None, "--retries", help="Download attempts per file (default 5)."
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Timeout of a single request in seconds (default 300)."
    ),
):
    """Mirror a playlist and all referenced segments to a local directory."""
    request_delay = None
    if sleep is not None:
        try:
            request_delay = parse_duration(sleep)
        except ValueError as e:
            console.print(f"[red]✗ {e}[/red]")
            raise typer.Exit(code=1) from e

    cli_options = {
        key: value
        for key, value in {
            "input_url": input_url,
            "output_dir": output_dir,
            "workers": threads,
            "request_delay": request_delay,
            "name_prefix": prefix,
            "name_width": width,
            "max_attempts": retries,
            "request_timeout": timeout,
        }.items()
        if value is not None
    }

    # HlsMirrorError propagates to __main__, which renders it with suggestions.
    config = ConfigManager(CONFIG_FILE).load_config(cli_options)

    async def _mirror_async() -> MirrorResult:
        async with MirrorSession(config) as session:
            return await session.run()

    console.print("[bold cyan]📼 Starting mirror session...[/bold cyan]")
    result = asyncio.run(_mirror_async())
    save_manifest(config.index_path, result.manifest)

    log.info(
        f"Saved rewritten playlist, finished in {format_duration(result.duration)}."
    )
    print_summary_panel(result, config.index_path)
