"""Exception types raised by the bootstrap pipeline.

Structural failures (repository creation, staging, commit) propagate as one
of these so the CLI can turn them into an error line and a nonzero exit.
Per-file problems are reported as warnings instead of being raised.
"""

from pathlib import Path
from typing import List, Optional


class BootstrapError(Exception):
    """Base class for all bootstrap failures."""


class AlreadyInitializedError(BootstrapError):
    """Raised when the tracked-dotfiles directory already exists."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(
            f"The directory {path} already exists. "
            "Please remove or rename it before continuing."
        )


class SubprocessFailureError(BootstrapError):
    """Raised when an external command exits nonzero or cannot be started."""

    def __init__(self, command: List[str], returncode: Optional[int], stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = f"exit code {returncode}" if returncode is not None else "could not be executed"
        message = f"Command failed ({detail}): {' '.join(command)}"
        if stderr.strip():
            message += f"\n{stderr.strip()}"
        super().__init__(message)


class WriteFailureError(BootstrapError):
    """Raised when a file or directory cannot be created or appended to."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write {path}: {reason}")


class NothingStagedError(BootstrapError):
    """Raised when the commit step runs without any staged dotfile."""

    def __init__(self):
        super().__init__("No candidate dotfiles were found, nothing to commit")
