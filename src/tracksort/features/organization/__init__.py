"""Organization feature: discovery, copying, collisions and the batch driver."""

from .usecases.batch_runner import BatchContext, BatchOptions, BatchRunner
from .usecases.organizer import Organizer
from .usecases.processing_types import ProcessingEvent, ProcessingStage

__all__ = [
    "BatchContext",
    "BatchOptions",
    "BatchRunner",
    "Organizer",
    "ProcessingEvent",
    "ProcessingStage",
]
