"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final


@final
@dataclass(slots=True)
class OrganizeArgs:
    """Command line arguments for the ``organize`` or ``plan`` subcommands."""

    command: Literal["organize", "plan"]
    source_path: Path
    target_path: Path
    dry_run: bool
    workers: int | None
    online: bool
    remove_playlists: bool
    yes: bool
    manifest: Path | None
    verbose: bool
    quiet: bool


__all__ = ["OrganizeArgs"]
