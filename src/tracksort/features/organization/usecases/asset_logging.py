"""src/tracksort/features/organization/usecases/asset_logging.py
What: Structured processing log callback contract and the default emitter.
Why: Let the organizer and artwork helpers log events without owning a logger setup.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

from tracksort.platform.logging import logger

from .processing_types import ProcessingEvent


class ProcessLogger(Protocol):
    """Signature for structured processing log emitters."""

    def __call__(
        self,
        level: int,
        event: ProcessingEvent,
        message: str,
        *message_args: object,
        **context: object,
    ) -> None:
        ...


def log_processing(
    level: int,
    event: ProcessingEvent,
    message: str,
    *message_args: object,
    **context: object,
) -> None:
    """Emit ``message`` on the application logger with the event as structured extra."""

    extra: dict[str, Any] = {"processing_event": event.value}
    for key, value in context.items():
        extra[key] = str(value) if isinstance(value, Path) else value
    logger.log(level, message, *message_args, extra=extra, stacklevel=2)


__all__ = ["ProcessLogger", "log_processing"]
