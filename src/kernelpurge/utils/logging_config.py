"""Logging configuration for kernelpurge.

Diagnostics go to stderr through the logging module; the cleanup plan and the
final report are written to stdout by the CLI.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def level_for_flags(verbose: bool = False, quiet: bool = False) -> int:
    """DEBUG with --verbose, WARNING with --quiet, INFO otherwise."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def setup_cli_logging(verbose: bool = False, quiet: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure the root logger for a CLI run.

    Args:
        verbose: Enable verbose (DEBUG) logging.
        quiet: Suppress most logging (WARNING and above only).
        log_file: Optional path that also receives timestamped records.
    """
    level = level_for_flags(verbose=verbose, quiet=quiet)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root_logger.addHandler(file_handler)
