"""src/tracksort/ui/cli/display/preview.py
Where: CLI adapter layer for preview rendering.
What: Build a Rich tree of the destinations a dry run planned.
Why: Let users inspect the layout and corrections before copying anything.
"""

from pathlib import Path
from typing import final

from rich.console import Console
from rich.tree import Tree

from tracksort.features.statistics import BatchSnapshot, FileOutcome, ManifestEntry

from .summary import render_processing_summary


@final
class PreviewDisplay:
    """Handles preview display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def build_tree(self, snapshot: BatchSnapshot, base_path: Path) -> Tree:
        """Group planned destinations under their folders, one node per directory."""

        tree = Tree(f"📁 {base_path}")
        nodes: dict[tuple[str, ...], Tree] = {}

        planned = sorted(
            (entry for entry in snapshot.entries if entry.new_path is not None),
            key=lambda entry: str(entry.new_path).casefold(),
        )
        for entry in planned:
            assert entry.new_path is not None
            try:
                rel_path = entry.new_path.relative_to(base_path)
            except ValueError:
                rel_path = entry.new_path

            parent: Tree = tree
            folders = rel_path.parts[:-1]
            for depth in range(1, len(folders) + 1):
                key = folders[:depth]
                node = nodes.get(key)
                if node is None:
                    node = parent.add(f"📁 {folders[depth - 1]}")
                    nodes[key] = node
                parent = node
            _ = parent.add(self._label(entry, rel_path.name))

        return tree

    def show_preview(self, snapshot: BatchSnapshot, base_path: Path) -> None:
        """Display a preview of the planned file organization."""

        self.console.print("\n[bold cyan]Preview of planned changes:[/bold cyan]")
        self.console.print(self.build_tree(snapshot, base_path))

        unplaced = [entry for entry in snapshot.entries if entry.new_path is None]
        for entry in unplaced:
            self.console.print(f"[red]❌ {entry.original_path} (no destination)[/red]")

        render_processing_summary(
            console=self.console,
            snapshot=snapshot,
            header_label="Summary",
            success_label="Will organize",
            failure_label="Will fail",
        )

    @staticmethod
    def _label(entry: ManifestEntry, filename: str) -> str:
        if entry.outcome is FileOutcome.FAILED:
            return f"🎵 ❌ {filename} [red]Error[/red]"
        status = "[yellow]Preview[/yellow]"
        if entry.corrected:
            status = "[magenta]Corrected[/magenta]"
        if entry.warnings:
            status += f" [yellow]({'; '.join(entry.warnings)})[/yellow]"
        return f"🎵 ✨ {filename} {status}"
