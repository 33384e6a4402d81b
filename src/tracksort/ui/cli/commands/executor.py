"""src/tracksort/ui/cli/commands/executor.py
What: Provide shared wiring for CLI command executors.
Why: Reuse orchestration and presentation helpers across commands.
"""

from abc import ABC, abstractmethod

from tracksort.application.services.organize_service import OrganizeMusicService, OrganizeRequest
from tracksort.features.statistics import BatchSnapshot
from tracksort.ui.cli.args.options import OrganizeArgs
from tracksort.ui.cli.display.preview import PreviewDisplay
from tracksort.ui.cli.display.progress import ProgressDisplay
from tracksort.ui.cli.display.result import ResultDisplay


class CommandExecutor(ABC):
    """Base class for command execution."""

    args: OrganizeArgs
    app: OrganizeMusicService
    request: OrganizeRequest
    preview_display: PreviewDisplay
    progress_display: ProgressDisplay
    result_display: ResultDisplay

    def __init__(self, args: OrganizeArgs, app: OrganizeMusicService | None = None) -> None:
        """Initialize command executor.

        Args:
            args: Command line arguments.
            app: Service override, mainly for tests.
        """
        self.args = args
        # Build the batch through the application layer to centralize orchestration
        self.app = app or OrganizeMusicService()
        self.request = OrganizeRequest(
            source_root=args.source_path,
            output_root=args.target_path,
            dry_run=args.dry_run,
            workers=args.workers,
            online=args.online,
            remove_playlists=args.remove_playlists,
            manifest_path=args.manifest,
        )
        self.preview_display = PreviewDisplay()
        self.progress_display = ProgressDisplay()
        self.result_display = ResultDisplay()

    @abstractmethod
    def execute(self) -> BatchSnapshot:
        """Execute the command.

        Returns:
            Final statistics of the batch.
        """
        pass

    def display_results(self, snapshot: BatchSnapshot) -> None:
        """Display command execution results.

        Args:
            snapshot: Final statistics of the batch.
        """
        if self.args.quiet:
            return
        if self.args.dry_run:
            self.preview_display.show_preview(snapshot, self.args.target_path)
        else:
            self.result_display.show_results(snapshot)
