"""src/tracksort/ui/cli/commands/organize.py
What: Execute organize and plan runs for a source directory.
Why: Bridge parsed arguments with the application service, playlist
     confirmation and Ctrl-C cancellation.
"""

import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from types import FrameType
from typing import override

from rich.prompt import Confirm

from tracksort.features.organization import BatchContext
from tracksort.features.statistics import BatchSnapshot
from tracksort.platform.logging import logger
from tracksort.ui.cli.commands.executor import CommandExecutor


@contextmanager
def cancel_on_interrupt(context: BatchContext) -> Iterator[None]:
    """Turn the first Ctrl-C into a cooperative cancel; a second one aborts."""

    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _handler(signum: int, frame: FrameType | None) -> None:
        _ = signum, frame
        if context.cancelled:
            raise KeyboardInterrupt
        logger.warning("Cancelling after the current file; press Ctrl-C again to abort")
        context.cancel()

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield
    finally:
        _ = signal.signal(signal.SIGINT, previous)


class OrganizeCommand(CommandExecutor):
    """Command for organizing a source directory."""

    def confirm_playlist_removal(self) -> bool:
        """Ask before deleting playlists unless ``--yes`` or a dry run makes it moot."""

        if not self.request.remove_playlists or self.request.dry_run or self.args.yes:
            return True
        try:
            return Confirm.ask(
                f"Delete every .m3u playlist under {self.request.source_root}?",
                default=False,
            )
        except EOFError:
            return False

    @override
    def execute(self) -> BatchSnapshot:
        """Execute the organize command.

        Returns:
            Final statistics of the batch.
        """
        if not self.confirm_playlist_removal():
            logger.info("Playlists will be kept")
            self.request = replace(self.request, remove_playlists=False)

        context = self.app.build_context(self.request)
        with cancel_on_interrupt(context):
            snapshot = self.progress_display.run_with_service(self.app, self.request, context)
        self.display_results(snapshot)
        return snapshot
