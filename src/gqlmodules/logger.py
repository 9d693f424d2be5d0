"""Rich-backed logger shared by the library and the command line."""

import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

FILE_LOG_FORMAT = "%(asctime)s:%(levelname)s:%(message)s"


class GQLModulesLogger(logging.Logger):
    """
    Logger emitting records through Rich, plus a few plain console helpers.

    Diagnostics go through the standard levels (debug, info, warning, error) and
    are written to stderr. Command results are printed to stdout with ``print``,
    ``success``, ``rule`` and friends, undecorated, so they can be piped.
    """

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        super().__init__(name, level)
        self.console = Console()

        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_time=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        self.addHandler(handler)

    def add_file_handler(self, log_file: Path) -> None:
        """Also write records to ``log_file``, truncating it first."""
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        self.addHandler(file_handler)

    def print(self, message: str) -> None:
        """Print a message to the console. Rich markup is interpreted."""
        self.console.print(message)

    def success(self, message: str) -> None:
        self.print(f"[green]✓[/green] {message}")

    def hint(self, message: str) -> None:
        self.print(f"[dim]{message}[/dim]")

    def rule(self, title: str, style: str = "bold blue") -> None:
        """
        Draw a horizontal separator carrying a title.

        Args:
            title: Text shown in the middle of the rule
            style: Rich style applied to the title
        """
        self.console.rule(f"[{style}]{title}")

    def key_value(self, key: str, value: Any, key_style: str = "dim") -> None:
        self.print(f"[{key_style}]{key}:[/{key_style}] {value}")

    def list_item(self, text: str, prefix: str = "-") -> None:
        # Type names are printed verbatim, never parsed as markup
        self.console.print(f"{prefix} {text}", markup=False, highlight=False)


def get_logger(name: str = "gqlmodules") -> GQLModulesLogger:
    """
    Return the named logger, created as a GQLModulesLogger.

    Args:
        name: Logger name (default: "gqlmodules")
    """
    logging.setLoggerClass(GQLModulesLogger)
    logger = logging.getLogger(name)
    logging.setLoggerClass(logging.Logger)
    return logger  # type: ignore[return-value]
