"""Progress display functionality for CLI."""

from pathlib import Path
from typing import Any, Protocol, final, runtime_checkable

from rich.console import Console
from rich.progress import Progress, TaskID

from tracksort.application.services.organize_service import OrganizeRequest
from tracksort.features.organization import BatchContext
from tracksort.features.organization.usecases.batch_runner import ProgressCallback
from tracksort.features.statistics import BatchSnapshot
from tracksort.platform.logging import ProcessingRichHandler, logger


@runtime_checkable
class OrganizeServiceLike(Protocol):
    """Protocol for application services that can run a batch with progress."""

    def run(
        self,
        request: OrganizeRequest,
        context: BatchContext | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> BatchSnapshot:
        ...


def handler_console() -> Console | None:
    """Return the console of the active processing log handler, if any."""

    for handler in logger.handlers:
        if isinstance(handler, ProcessingRichHandler):
            return handler.console
    return None


@final
class ProgressDisplay:
    """Handles progress display in CLI."""

    def run_with_service(
        self,
        app: OrganizeServiceLike,
        request: OrganizeRequest,
        context: BatchContext,
    ) -> BatchSnapshot:
        """Run a batch via the application service with a progress bar.

        Args:
            app: Application service instance used to orchestrate processing.
            request: Organize operation parameters.
            context: Batch context prepared for ``request``.

        Returns:
            Final snapshot of the batch.
        """
        progress_kwargs: dict[str, Any] = {
            "transient": True,
            "redirect_stdout": False,
            "redirect_stderr": False,
        }
        progress_console = handler_console()
        if progress_console is not None:
            progress_kwargs["console"] = progress_console

        with Progress(**progress_kwargs) as progress:
            task_id: TaskID | None = None

            def _cb(processed: int, total: int, current_file: Path) -> None:
                nonlocal task_id
                _ = current_file  # consumed via logging elsewhere
                if task_id is None:
                    task_id = progress.add_task("[cyan]Organizing files...", total=total)
                progress.update(
                    task_id,
                    completed=processed,
                    description=f"[cyan]Organizing files... {processed}/{total}",
                )

            return app.run(request, context, _cb)
