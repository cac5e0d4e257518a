"""Shell alias installation for the bare dotfiles repository."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List

from ..utils.logger import get_module_logger
from ..utils.reporter import StatusReporter
from .errors import WriteFailureError

logger = get_module_logger("alias_installer")


class AppendOutcome(Enum):
    """What append_if_absent did to the destination file."""
    CREATED = "created"
    APPENDED = "appended"
    ALREADY_PRESENT = "already_present"


@dataclass
class AliasDeclaration:
    """Alias mapping a short command to git bound to the bare repository."""

    name: str
    git_dir: Path
    work_tree_expr: str = "$HOME"
    comment: str = "# Dotfiles management"

    def command_line(self) -> str:
        """Get the git invocation the alias expands to."""
        return f"git --git-dir={self.git_dir} --work-tree={self.work_tree_expr}"

    def render(self) -> str:
        """Render the block written into shell startup files."""
        return f"{self.comment}\nalias {self.name}='{self.command_line()}'"


def append_if_absent(path: Path, block: str) -> AppendOutcome:
    """
    Append a text block to a file unless the exact block is already there.

    Args:
        path: Destination file, created when missing
        block: Text block; its exact text is the idempotency key

    Returns:
        AppendOutcome: What happened to the file

    Raises:
        WriteFailureError: The file could not be read, created or appended to
    """
    try:
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                f.write(block + "\n")
            logger.info(f"Created {path} with alias block")
            return AppendOutcome.CREATED

        with open(path, 'r', encoding='utf-8') as f:
            existing_content = f.read()

        if block in existing_content:
            logger.debug(f"Block already present in {path}")
            return AppendOutcome.ALREADY_PRESENT

        with open(path, 'a', encoding='utf-8') as f:
            f.write("\n" + block + "\n")
        logger.info(f"Appended block to {path}")
        return AppendOutcome.APPENDED

    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"Failed to update {path}: {exc}")
        raise WriteFailureError(path, str(exc)) from exc


def install_alias(declaration: AliasDeclaration, rc_files: List[Path],
                  reporter: StatusReporter) -> Dict[Path, AppendOutcome]:
    """
    Install the alias block into every shell startup file.

    A file that cannot be written is reported as a warning and skipped.

    Returns:
        dict: Outcome per rc file that was handled successfully
    """
    block = declaration.render()
    outcomes: Dict[Path, AppendOutcome] = {}

    for rc_file in rc_files:
        try:
            outcome = append_if_absent(rc_file, block)
        except WriteFailureError as exc:
            reporter.warning(f"{exc}, skipping alias installation for this file")
            continue

        outcomes[rc_file] = outcome
        if outcome is AppendOutcome.ALREADY_PRESENT:
            reporter.info(f"Alias '{declaration.name}' already present in {rc_file}")
        else:
            reporter.success(f"Added alias '{declaration.name}' to {rc_file}")

    return outcomes
