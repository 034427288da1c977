"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from hls_mirror.models.stats import MirrorResult
from hls_mirror.utils.formatting import format_duration, format_size

# Failed links listed in the summary before the rest is elided.
MAX_FAILED_ROWS = 20


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "FormatError": [
            "• The URL does not point at an HLS playlist (missing #EXTM3U header).",
            "• Open the URL in a browser to check what the server returns.",
        ],
        "ParseError": [
            "• The playlist contains a malformed segment or key URI.",
            "• Check that the input URL itself is a valid http(s) URL.",
        ],
        "FetchError": [
            "• The playlist could not be downloaded.",
            "• Check your internet connection and that the URL is still valid.",
            "• Signed URLs may have expired: fetch a fresh one.",
        ],
        "CycleError": [
            "• The master playlist points back to a playlist already visited.",
            "• Try the URL of a specific variant playlist instead.",
        ],
        "StorageError": [
            "• Check that the output directory is writable.",
            "• Check the free space on the target disk.",
        ],
        "ConfigurationError": [
            "• Review the options passed on the command line.",
            "• Run `hls-mirror init --force` to reset the config file.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the stored default settings."""
    console = Console()
    content = "\n".join(f"{key} = {value}" for key, value in sorted(config_data.items()))
    source = str(config_path) if config_path.is_file() else "built-in defaults"

    console.print(
        Panel(
            content,
            title=f"Configuration ([dim]{source}[/dim])",
            border_style="cyan",
        )
    )


def print_summary_panel(result: MirrorResult, index_path: Path):
    """Displays the final summary of a mirror run."""
    console = Console()
    stats = result.stats

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=16)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row("Playlist:", f"[dim]{escape(result.playlist_url)}[/dim]")
    stats_table.add_row("Index:", f"[dim]{escape(str(index_path))}[/dim]")
    stats_table.add_row("", "")
    stats_table.add_row(
        "✓ Downloaded:",
        f"[bold green]{stats.links_downloaded}[/bold green] / {stats.links_total}",
    )
    if stats.links_failed > 0:
        stats_table.add_row("✗ Failed:", f"[bold red]{stats.links_failed}[/bold red]")
    stats_table.add_row("", "")
    stats_table.add_row(
        "Total Size:", f"[cyan]{format_size(stats.bytes_downloaded)}[/cyan]"
    )
    avg_speed = stats.bytes_downloaded / result.duration if result.duration > 0 else 0
    stats_table.add_row(
        "Avg. Speed:", f"[magenta]{format_size(int(avg_speed))}/s[/magenta]"
    )
    stats_table.add_row(
        "Time Elapsed:", f"[blue]{format_duration(result.duration)}[/blue]"
    )

    if stats.success:
        title = "✅ [bold]Mirror Complete[/bold]"
        border_color = "green"
    else:
        title = "⚠️  [bold]Mirror Completed With Errors[/bold]"
        border_color = "yellow"

    console.print()
    console.print(
        Panel(stats_table, title=title, border_style=border_color, expand=False)
    )

    if stats.failed_links:
        failed_table = Table(box=box.SIMPLE, header_style="bold red")
        failed_table.add_column("Local File", style="cyan", no_wrap=True)
        failed_table.add_column("URL", style="dim", overflow="fold")
        for link in stats.failed_links[:MAX_FAILED_ROWS]:
            failed_table.add_row(link.local_path, link.download_url)
        hidden = len(stats.failed_links) - MAX_FAILED_ROWS
        if hidden > 0:
            failed_table.add_row("…", f"{hidden} more")
        console.print(failed_table)
