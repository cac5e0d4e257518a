"""Git command runner bound to a bare dotfiles repository."""

import subprocess
from pathlib import Path
from typing import List, Optional

from ..utils.logger import get_module_logger
from .errors import SubprocessFailureError

logger = get_module_logger("git_runner")


class GitRunner:
    """Runs git against a bare repository with an external work tree.

    Every command is equivalent to the shell alias
    ``git --git-dir=<git_dir> --work-tree=<work_tree>``.
    """

    def __init__(self, git_dir: Optional[Path] = None, work_tree: Optional[Path] = None,
                 executable: str = "git"):
        self.git_dir = git_dir
        self.work_tree = work_tree
        self.executable = executable

    def _base_command(self) -> List[str]:
        cmd = [self.executable]
        if self.git_dir is not None:
            cmd.append(f"--git-dir={self.git_dir}")
        if self.work_tree is not None:
            cmd.append(f"--work-tree={self.work_tree}")
        return cmd

    def run(self, args: List[str], check: bool = True,
            bound: bool = True) -> subprocess.CompletedProcess:
        """
        Run a git command and return the completed process.

        Args:
            args: Arguments following the git executable
            check: Raise SubprocessFailureError on a nonzero exit code
            bound: Prefix the repository's --git-dir/--work-tree options

        Returns:
            subprocess.CompletedProcess: The finished process
        """
        cmd = (self._base_command() if bound else [self.executable]) + list(args)
        cmd_str = ' '.join(cmd)
        logger.debug(f"Running command: {cmd_str}")

        # Run from inside the work tree so path arguments resolve against it
        cwd = str(self.work_tree) if bound and self.work_tree is not None else None

        try:
            completed = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            logger.warning(f"Failed to execute {self.executable}: {exc}")
            raise SubprocessFailureError(cmd, None, str(exc)) from exc

        if check and completed.returncode != 0:
            logger.warning(f"Command failed with code {completed.returncode}: {cmd_str}")
            logger.debug(f"git stderr: {completed.stderr}")
            raise SubprocessFailureError(cmd, completed.returncode, completed.stderr)

        return completed

    def init_bare(self, path: Path) -> None:
        """Create an empty bare repository at path."""
        self.run(["init", "--bare", str(path)], bound=False)

    def set_config(self, key: str, value: str) -> None:
        """Write a repository-local configuration value."""
        self.run(["config", "--local", key, value])

    def get_config(self, key: str) -> Optional[str]:
        """Read a repository-local configuration value, None when unset."""
        completed = self.run(["config", "--local", "--get", key], check=False)
        if completed.returncode != 0:
            return None
        return completed.stdout.strip()

    def add(self, path: Path) -> None:
        """Stage a single path."""
        self.run(["add", "--", str(path)])

    def commit(self, message: str) -> None:
        """Create a commit from the staged paths."""
        self.run(["commit", "-m", message])

    def has_head(self) -> bool:
        """Check whether the repository has at least one commit."""
        completed = self.run(["rev-parse", "--verify", "--quiet", "HEAD"], check=False)
        return completed.returncode == 0

    def count_commits(self) -> int:
        """Count the commits reachable from HEAD."""
        if not self.has_head():
            return 0
        return int(self.run(["rev-list", "--count", "HEAD"]).stdout.strip())

    def tracked_files(self) -> List[str]:
        """List the paths recorded in HEAD, relative to the work tree."""
        if not self.has_head():
            return []
        output = self.run(["ls-tree", "-r", "--name-only", "HEAD"]).stdout
        return [line for line in output.splitlines() if line]
