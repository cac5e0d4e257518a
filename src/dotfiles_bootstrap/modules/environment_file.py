"""Best-effort update of a system-wide environment file such as /etc/environment."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from ..utils.logger import get_module_logger
from ..utils.reporter import StatusReporter
from .alias_installer import append_if_absent
from .errors import WriteFailureError

logger = get_module_logger("environment_file")


@dataclass
class EnvironmentBlock:
    """Variables appended to an environment file under a marker comment."""

    variables: Dict[str, str] = field(default_factory=dict)
    marker: str = "# Added by dotfiles setup"

    def lines(self) -> List[str]:
        return [f"{name}={value}" for name, value in self.variables.items()]

    def render(self) -> str:
        return "\n".join([self.marker] + self.lines())


def _is_writable(path: Path) -> bool:
    if path.exists():
        return os.access(path, os.W_OK)
    return path.parent.is_dir() and os.access(path.parent, os.W_OK)


def update_environment_file(path: Path, block: EnvironmentBlock,
                            reporter: StatusReporter) -> bool:
    """
    Add the environment variables to path when they are not there yet.

    Failures never abort the bootstrap: an unwritable file is reported as a
    warning carrying the lines to add by hand.

    Returns:
        bool: True when the variables are present in the file afterwards
    """
    if not block.variables:
        logger.debug("No environment variables configured, skipping")
        return False

    existing_lines = set()
    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                existing_lines = {line.strip() for line in f}
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(f"Failed to read {path}: {exc}")

    if all(line in existing_lines for line in block.lines()):
        reporter.info(f"Environment variables already exist in {path}")
        return True

    if not _is_writable(path):
        reporter.warning(
            f"Cannot write to {path}. Please manually add these lines:\n{block.render()}"
        )
        return False

    try:
        append_if_absent(path, block.render())
    except WriteFailureError as exc:
        reporter.warning(f"Failed to update {path}: {exc.reason}")
        return False

    reporter.success(f"Added environment variables to {path}")
    return True
