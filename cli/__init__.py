"""CLI package for the calendar migration tool."""

import logging
import sys
from pathlib import Path

from calmigrate.config import MigratorConfig

# Loggers whose records reach the console; everything else only goes to file
CONSOLE_LOGGERS = ("calmigrate", "cli")


class _ConsoleFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR or record.name.split(".")[0] in CONSOLE_LOGGERS


def setup_logging(
    verbose: bool = False, quiet: bool = False, config: MigratorConfig | None = None
) -> Path:
    """Log everything to the migration log file and a summary to stderr.

    The console shows warnings by default (skipped blobs, lost uri races),
    progress with verbose and errors only with quiet. Third-party records
    below ERROR are kept out of the console.

    Returns:
        Path of the log file
    """
    config = config or MigratorConfig.from_env()
    log_path = config.log_dir / config.log_filename
    config.log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_path)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    console_handler.addFilter(_ConsoleFilter())
    if quiet:
        console_handler.setLevel(logging.ERROR)
    elif verbose:
        console_handler.setLevel(logging.INFO)
    else:
        console_handler.setLevel(logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).debug(f"Logging to {log_path}, store at {config.store_dir}")
    return log_path


def main() -> None:
    """Main entry point for the CLI."""
    from cli.parser import app

    app()


__all__ = ["main", "setup_logging"]
