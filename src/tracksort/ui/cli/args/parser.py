"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from tracksort.config.config import Config
from tracksort.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from tracksort.ui.cli.args.options import OrganizeArgs


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="tracksort",
            description="tracksort - Sort a music collection into Genre/Artist/Album folders.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        organize_parser = subparsers.add_parser(
            "organize",
            help="Copy music files into the organized output tree",
        )
        ArgumentParser._configure_organize_parser(organize_parser, dry_run_default=False)

        plan_parser = subparsers.add_parser(
            "plan",
            help="Preview organize results without touching the filesystem",
        )
        ArgumentParser._configure_organize_parser(plan_parser, dry_run_default=True)

        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> OrganizeArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            OrganizeArgs: Processed command line arguments.

        Raises:
            SystemExit: If the source path doesn't exist or parsing fails.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        # Set log level based on verbosity flags
        if parsed_args.quiet:
            log_level = logging.ERROR
        elif parsed_args.verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        return ArgumentParser._process_organize(parsed_args)

    @staticmethod
    def _configure_organize_parser(
        parser: argparse.ArgumentParser,
        *,
        dry_run_default: bool,
    ) -> None:
        """Apply shared configuration for organize-style subparsers."""

        parser.set_defaults(dry_run=dry_run_default)
        _ = parser.add_argument(
            "source_path",
            type=str,
            help="Directory scanned recursively for music files",
            metavar="SOURCE",
        )
        _ = parser.add_argument(
            "--target",
            type=str,
            required=True,
            help="Root directory for the organized copies",
            metavar="OUTPUT",
        )
        if not dry_run_default:
            _ = parser.add_argument(
                "--dry-run",
                action="store_true",
                help="Compute every destination without copying or deleting anything",
            )
        _ = parser.add_argument(
            "--workers",
            type=_positive_int,
            default=None,
            help="Threads used to read tags and plan destinations (default from config)",
            metavar="N",
        )
        _ = parser.add_argument(
            "--online",
            action="store_true",
            help="Fill missing metadata from online providers",
        )
        _ = parser.add_argument(
            "--remove-playlists",
            action="store_true",
            help="Delete .m3u playlists under SOURCE before organizing",
        )
        _ = parser.add_argument(
            "--yes",
            action="store_true",
            help="Do not ask for confirmation before deleting playlists",
        )
        _ = parser.add_argument(
            "--manifest",
            type=str,
            default=None,
            help="Write a JSON manifest of the run to PATH",
            metavar="PATH",
        )
        verbosity = parser.add_mutually_exclusive_group()
        _ = verbosity.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed processing information",
        )
        _ = verbosity.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def _process_organize(parsed_args: argparse.Namespace) -> OrganizeArgs:
        source_path = Path(parsed_args.source_path).expanduser()
        if not source_path.is_dir():
            logger.error("Source directory does not exist: %s", source_path)
            sys.exit(1)

        return OrganizeArgs(
            command=parsed_args.command,
            source_path=source_path,
            target_path=Path(parsed_args.target).expanduser(),
            dry_run=parsed_args.dry_run,
            workers=parsed_args.workers,
            online=parsed_args.online,
            remove_playlists=parsed_args.remove_playlists,
            yes=parsed_args.yes,
            manifest=Path(parsed_args.manifest).expanduser() if parsed_args.manifest else None,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )
