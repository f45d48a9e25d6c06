"""
Rich-based logging for vmprov

Logs and errors go to stderr; stdout is reserved for user-facing progress and
for remote script output streamed through the prompt provider.
"""
import sys
import logging
from typing import Optional
from pathlib import Path

from rich.logging import RichHandler
from rich.console import Console
from rich.traceback import install as install_traceback

FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries that are noisy below WARNING
QUIET_LOGGERS = ("paramiko",)

_stdout_console = Console(file=sys.stdout)
_stderr_console = Console(file=sys.stderr)

# Locals stay hidden: tracebacks would otherwise print credentials
install_traceback(show_locals=False, width=120)


def _file_handler(log_file: Path, level: int) -> logging.Handler:
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    rich_tracebacks: bool = True,
) -> None:
    """
    Configure the root logger once per invocation.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL (unknown names mean INFO)
        log_file: Also write plain-text records to this file
        rich_tracebacks: Render exceptions logged with logger.exception via rich
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()

    console_handler = RichHandler(
        console=_stderr_console,
        show_path=False,
        markup=False,
        rich_tracebacks=rich_tracebacks,
    )
    console_handler.setLevel(log_level)
    root.addHandler(console_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    if log_file:
        root.addHandler(_file_handler(log_file, log_level))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def get_stdout_console() -> Console:
    """Console for progress messages and prompts"""
    return _stdout_console


def get_stderr_console() -> Console:
    """Console for errors and log records"""
    return _stderr_console
