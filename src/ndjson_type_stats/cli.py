"""Command-line interface for NDJSON type statistics."""

import argparse
import logging
import sys

from ndjson_type_stats.config import DEFAULT_CONFIG_PATH, LOG_LEVELS, load_config
from ndjson_type_stats.errors import ConfigError, ScanIOError
from ndjson_type_stats.solver.solve import main_count

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging to write to stderr."""
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ndjson-type-stats",
        description="Count lines and bytes per top-level `type` value in an NDJSON file.",
    )

    parser.add_argument(
        "input_file",
        nargs="?",
        default=None,
        help="Path to the NDJSON input file (default: input_file from the config file)",
    )

    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to the YAML config file (default: {DEFAULT_CONFIG_PATH}, optional)",
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of parallel workers (default: worker_count from config, else CPU count)",
    )

    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: log_level from config, else INFO)",
    )

    parser.add_argument(
        "--exclude-terminator",
        action="store_true",
        help="Do not count the trailing newline in each line's byte size",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.workers is not None and args.workers < 1:
        parser.error(f"--workers must be at least 1, got {args.workers}")

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        configure_logging()
        logger.error("%s", exc)
        return 1

    # Configure logging based on --log-level, falling back to the config file.
    log_level = getattr(logging, args.log_level or config.log_level)
    configure_logging(log_level)

    try:
        main_count(
            input_path=args.input_file or config.input_file,
            workers=args.workers or config.worker_count,
            include_terminator=config.include_terminator and not args.exclude_terminator,
            window_size=config.window_size,
            executor=config.executor,
        )
    except ScanIOError as exc:
        logger.error("%s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
