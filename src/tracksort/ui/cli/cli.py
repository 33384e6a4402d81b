"""Command line interface for tracksort."""

import sys
from typing import final

from tracksort.platform.logging import logger
from tracksort.shared.errors import TracksortError
from tracksort.ui.cli.args import ArgumentParser
from tracksort.ui.cli.commands import OrganizeCommand

EXIT_FAILURES = 1
EXIT_CANCELLED = 130


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args = ArgumentParser.process_args(args_list)
            snapshot = OrganizeCommand(args).execute()
            if snapshot.cancelled:
                sys.exit(EXIT_CANCELLED)
            if snapshot.has_failures:
                sys.exit(EXIT_FAILURES)
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(EXIT_CANCELLED)
        except TracksortError as e:
            logger.error("%s", e)
            sys.exit(EXIT_FAILURES)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(EXIT_FAILURES)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures and cancellation
        leave through ``sys.exit(...)`` inside command processing.
    """
    CommandProcessor.process_command()
    return 0
