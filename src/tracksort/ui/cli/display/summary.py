"""Utilities for rendering shared CLI display content."""

from __future__ import annotations

from collections.abc import Mapping

from rich.console import Console
from rich.table import Table

from tracksort.features.statistics import BatchSnapshot

# Rows shown per counter table before the rest is folded into "...".
TOP_COUNT_LIMIT = 10


def _counts_table(title: str, counts: Mapping[str, int]) -> Table:
    table = Table(title=title, title_justify="left")
    _ = table.add_column("Value", style="cyan")
    _ = table.add_column("Files", style="green", justify="right")
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    for value, count in ranked[:TOP_COUNT_LIMIT]:
        _ = table.add_row(value, str(count))
    if len(ranked) > TOP_COUNT_LIMIT:
        _ = table.add_row(f"... {len(ranked) - TOP_COUNT_LIMIT} more", "")
    return table


def render_processing_summary(
    console: Console,
    snapshot: BatchSnapshot,
    header_label: str,
    success_label: str,
    failure_label: str,
) -> None:
    """Render a formatted summary of a batch snapshot.

    Args:
        console: Rich console instance used to render output.
        snapshot: Final statistics of the batch.
        header_label: Label rendered in the summary header.
        success_label: Label describing the count of successful files.
        failure_label: Label describing the count of failed files.
    """
    counters = Table(title=f"{header_label}", title_justify="left", show_header=False)
    _ = counters.add_column("Counter", style="bold")
    _ = counters.add_column("Value", justify="right")
    _ = counters.add_row("Files found", str(snapshot.total_files))
    _ = counters.add_row(f"[green]{success_label}[/green]", str(snapshot.processed))
    _ = counters.add_row("Corrected", str(snapshot.corrected))
    _ = counters.add_row(f"[red]{failure_label}[/red]", str(snapshot.failed))
    _ = counters.add_row("Warnings", str(len(snapshot.warnings)))
    _ = counters.add_row("Duration", f"{snapshot.duration_seconds:.2f}s")
    console.print()
    console.print(counters)

    if snapshot.genres:
        console.print(_counts_table("Genres", snapshot.genres))
    if snapshot.artists:
        console.print(_counts_table("Artists", snapshot.artists))

    if snapshot.playlists:
        verb = "Removed" if snapshot.playlists_removed else "Found"
        if snapshot.dry_run and snapshot.playlists_removed:
            verb = "Would remove"
        console.print(f"{verb} {len(snapshot.playlists)} playlist(s) under the source root")

    if snapshot.cancelled:
        console.print("[yellow]Run cancelled before every file was processed.[/yellow]")

    if not snapshot.errors:
        return

    errors = Table(title="Errors", title_justify="left")
    _ = errors.add_column("File", style="red")
    _ = errors.add_column("Stage", style="yellow")
    _ = errors.add_column("Message")
    for error in snapshot.errors:
        _ = errors.add_row(str(error.file), error.stage, error.message)
    console.print(errors)
