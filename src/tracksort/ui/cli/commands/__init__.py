"""CLI command executors."""

from .executor import CommandExecutor
from .organize import OrganizeCommand

__all__ = ["CommandExecutor", "OrganizeCommand"]
