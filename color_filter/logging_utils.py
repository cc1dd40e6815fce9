"""Logging configuration for the command-line tool."""

from __future__ import annotations

import logging
import sys

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def add_logging_args(parser) -> None:
    """Add logging options to an argparse parser."""
    parser.add_argument(
        "--log-level",
        choices=tuple(LOG_LEVELS),
        help="Set log verbosity (debug, info, warning, error)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v for info, -vv for debug)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="count",
        default=0,
        help="Only log errors",
    )


def resolve_log_level(log_level: str | None = None, verbose: int = 0, quiet: int = 0) -> int:
    """Resolve a numeric log level, warning by default."""
    if log_level:
        return LOG_LEVELS[log_level.lower()]

    offset = verbose - quiet
    if offset >= 2:
        return logging.DEBUG
    if offset == 1:
        return logging.INFO
    if offset == 0:
        return logging.WARNING
    return logging.ERROR


def configure_logging(log_level: str | None = None, verbose: int = 0, quiet: int = 0) -> int:
    """Configure root logging on stderr and return the active level."""
    level = resolve_log_level(log_level, verbose, quiet)
    root_logger = logging.getLogger()

    if root_logger.handlers:
        root_logger.setLevel(level)
        return level

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    return level
