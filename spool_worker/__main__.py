"""Entry point for running a spool worker from the command line."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import NoReturn

from pydantic import ValidationError

logger = logging.getLogger(__name__)


class WorkerArgumentParser(argparse.ArgumentParser):
    """Argument parser whose usage errors exit with the configuration code.

    argparse exits with 2 by default, which is already taken by
    "path is not a directory".
    """

    def error(self, message: str) -> NoReturn:
        from spool_worker.core.errors import ConfigurationError

        self.print_usage(sys.stderr)
        self.exit(ConfigurationError.exit_code, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = WorkerArgumentParser(
        prog="spool-worker",
        description=(
            "Watch a directory for work order files and process them one at a time. "
            "Run several workers on the same directory to share the load."
        ),
    )
    # Optional here so a missing directory maps to its own exit code
    parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="Directory to watch for work orders",
    )
    parser.add_argument(
        "--seconds-per-unit",
        type=float,
        default=None,
        help="Seconds of delay per minute of simulated work (default: 60)",
    )
    parser.add_argument(
        "--keep",
        type=int,
        default=None,
        help="Rolling window size and summary interval (default: 5)",
    )
    parser.add_argument(
        "--max-jitter",
        type=float,
        default=None,
        dest="max_jitter_seconds",
        help="Upper bound in seconds of the random sleep before each dequeue (default: 1)",
    )
    parser.add_argument(
        "--no-recursive",
        action="store_false",
        default=None,
        dest="recursive",
        help="Only watch the top level of the directory",
    )
    parser.add_argument(
        "--worker-name",
        default=None,
        help="Label used in log lines (default: host:pid)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=None,
        dest="log_json",
        help="Emit JSON log lines",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="Show version and exit",
    )
    return parser


def run_version() -> None:
    """Print version information."""
    from spool_worker import __version__

    print(f"spool-worker {__version__}")


def run_worker_command(args: argparse.Namespace) -> int:
    """Validate the directory and run the worker.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code (0 on clean shutdown, StartupError.exit_code otherwise).
    """
    from spool_worker.config import Settings, get_settings
    from spool_worker.core.errors import ConfigurationError, StartupError
    from spool_worker.core.logging import configure_logging
    from spool_worker.core.path_utils import resolve_watch_directory
    from spool_worker.runner import run_worker

    overrides = {
        key: value
        for key, value in (
            ("seconds_per_unit", args.seconds_per_unit),
            ("keep", args.keep),
            ("max_jitter_seconds", args.max_jitter_seconds),
            ("recursive", args.recursive),
            ("worker_name", args.worker_name),
            ("log_json", args.log_json),
        )
        if value is not None
    }
    if args.verbose:
        overrides["log_level"] = "DEBUG"

    try:
        settings = Settings(**overrides) if overrides else get_settings()
    except ValidationError as e:
        configure_logging()
        error = ConfigurationError(f"Invalid configuration: {e}")
        logger.error("%s Exiting.", error)
        return error.exit_code

    configure_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        worker_name=settings.worker_name,
    )

    try:
        directory = resolve_watch_directory(args.directory)
    except StartupError as e:
        logger.error("%s Exiting.", e)
        return e.exit_code

    try:
        asyncio.run(run_worker(directory, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        run_version()
        sys.exit(0)

    sys.exit(run_worker_command(args))


if __name__ == "__main__":
    main()
