"""Operator-facing status reporter for the dotfiles bootstrapper."""

import logging
from enum import Enum
from typing import List, Optional, Tuple

from rich.console import Console
from rich.text import Text

from .logger import get_utils_logger


class ReportLevel(Enum):
    """Severity tag printed in front of every status line."""
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"


_TAG_STYLES = {
    ReportLevel.INFO: "blue",
    ReportLevel.SUCCESS: "green",
    ReportLevel.WARNING: "yellow",
    ReportLevel.ERROR: "red",
}

_LOG_LEVELS = {
    ReportLevel.INFO: logging.INFO,
    ReportLevel.SUCCESS: logging.INFO,
    ReportLevel.WARNING: logging.WARNING,
    ReportLevel.ERROR: logging.ERROR,
}


class StatusReporter:
    """Prints tagged status lines and mirrors them into the log file."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the reporter.

        Args:
            console: Rich console to print to, a default one is created if omitted
        """
        self.console = console or Console()
        self.logger = get_utils_logger("reporter")
        self.history: List[Tuple[ReportLevel, str]] = []

    def report(self, level: ReportLevel, message: str) -> None:
        """Print one status line tagged with its severity.

        Args:
            level: Severity of the line
            message: Text to print; never interpreted as markup
        """
        self.history.append((level, message))
        line = Text.assemble((f"[{level.value}]", _TAG_STYLES[level]), " ", message)
        self.console.print(line, soft_wrap=True)
        self.logger.log(_LOG_LEVELS[level], f"[{level.value}] {message}",
                        extra={"operator_line": True})

    def info(self, message: str) -> None:
        self.report(ReportLevel.INFO, message)

    def success(self, message: str) -> None:
        self.report(ReportLevel.SUCCESS, message)

    def warning(self, message: str) -> None:
        self.report(ReportLevel.WARNING, message)

    def error(self, message: str) -> None:
        self.report(ReportLevel.ERROR, message)

    def plain(self, text: str = "") -> None:
        """Print untagged text such as follow-up instructions."""
        self.console.print(Text(text), soft_wrap=True)

    def messages(self, level: ReportLevel) -> List[str]:
        """Return every message reported at the given level, in order."""
        return [message for entry_level, message in self.history if entry_level == level]
