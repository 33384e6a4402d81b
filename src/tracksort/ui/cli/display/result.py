"""src/tracksort/ui/cli/display/result.py
What: Render user-facing summaries for organize runs.
Why: Keep console output formatting consistent across the interface.
"""

from __future__ import annotations

from typing import final

from rich.console import Console

from tracksort.features.statistics import BatchSnapshot

from .summary import render_processing_summary


@final
class ResultDisplay:
    """Handles result display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_results(self, snapshot: BatchSnapshot, quiet: bool = False) -> None:
        """Display processing results.

        Args:
            snapshot: Final statistics of the batch.
            quiet: Whether to suppress non-error output.
        """
        if quiet:
            return

        render_processing_summary(
            console=self.console,
            snapshot=snapshot,
            header_label="Processing Summary",
            success_label="Organized",
            failure_label="Failed",
        )
