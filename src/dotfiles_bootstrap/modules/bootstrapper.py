"""Dotfiles bootstrap pipeline.

The bootstrap is an ordered list of steps folded until the first fatal
error. Each step either completes, moves the run to its next state, or
raises a BootstrapError that stops the run in the FAILED state. Nothing
already created is rolled back.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..config_manager import DotfilesConfig
from ..utils.logger import get_module_logger
from ..utils.reporter import StatusReporter
from .alias_installer import AliasDeclaration, AppendOutcome, install_alias
from .environment_file import EnvironmentBlock, update_environment_file
from .errors import AlreadyInitializedError, BootstrapError, NothingStagedError
from .git_runner import GitRunner
from .instructions import render_remote_instructions, render_restore_instructions

logger = get_module_logger("bootstrapper")


class BootstrapState(Enum):
    """Progress of a bootstrap run; FAILED and INSTRUCTIONS_EMITTED are terminal."""
    NOT_STARTED = "not_started"
    DIRECTORY_CHECKED = "directory_checked"
    REPO_INITIALIZED = "repo_initialized"
    ALIAS_INSTALLED = "alias_installed"
    FILES_STAGED = "files_staged"
    COMMITTED = "committed"
    INSTRUCTIONS_EMITTED = "instructions_emitted"
    FAILED = "failed"


@dataclass
class Step:
    """One pipeline step; reaches is the state entered when it completes."""
    name: str
    action: Callable[[], None]
    reaches: Optional[BootstrapState] = None


@dataclass
class BootstrapResult:
    """Outcome of a bootstrap run."""
    state: BootstrapState = BootstrapState.NOT_STARTED
    staged: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    alias_outcomes: Dict[Path, AppendOutcome] = field(default_factory=dict)
    failed_step: Optional[str] = None
    error: Optional[BootstrapError] = None

    @property
    def succeeded(self) -> bool:
        return self.state is BootstrapState.INSTRUCTIONS_EMITTED


class DotfilesBootstrapper:
    """Creates the bare dotfiles repository and records the known dotfiles in it."""

    def __init__(self, config: DotfilesConfig, github_user: str, repo_name: str,
                 reporter: Optional[StatusReporter] = None,
                 git: Optional[GitRunner] = None):
        self.config = config
        self.github_user = github_user
        self.repo_name = repo_name
        self.reporter = reporter or StatusReporter()
        self.git = git or GitRunner(git_dir=config.dotfiles_dir, work_tree=config.home)
        self.alias = AliasDeclaration(name=config.git_alias, git_dir=config.dotfiles_dir)
        self.result = BootstrapResult()

    def steps(self) -> List[Step]:
        """Get the pipeline in execution order."""
        return [
            Step("check_directory", self.check_directory, BootstrapState.DIRECTORY_CHECKED),
            Step("local_bin", self.create_local_bin),
            Step("init_repo", self.init_repository, BootstrapState.REPO_INITIALIZED),
            Step("alias", self.install_alias, BootstrapState.ALIAS_INSTALLED),
            Step("stage_files", self.stage_files, BootstrapState.FILES_STAGED),
            Step("commit", self.commit, BootstrapState.COMMITTED),
            Step("environment", self.update_environment),
            Step("instructions", self.emit_instructions, BootstrapState.INSTRUCTIONS_EMITTED),
        ]

    def run(self) -> BootstrapResult:
        """
        Run every step in order, stopping at the first fatal error.

        Returns:
            BootstrapResult: Final state, staged and skipped files, failure details
        """
        self.result = BootstrapResult()
        logger.info(f"Starting bootstrap of {self.config.dotfiles_dir}")

        for step in self.steps():
            logger.debug(f"Running step: {step.name}")
            try:
                step.action()
            except BootstrapError as exc:
                logger.debug(f"Step '{step.name}' failed", exc_info=True)
                self.reporter.error(str(exc))
                self.result.state = BootstrapState.FAILED
                self.result.failed_step = step.name
                self.result.error = exc
                return self.result

            if step.reaches is not None:
                self.result.state = step.reaches

        logger.info("Bootstrap completed")
        return self.result

    def check_directory(self) -> None:
        if self.config.dotfiles_dir.exists():
            raise AlreadyInitializedError(self.config.dotfiles_dir)

    def create_local_bin(self) -> None:
        local_bin = self.config.local_bin_dir
        if local_bin.is_dir():
            return

        self.reporter.info(f"Creating directory for custom scripts at {local_bin}...")
        try:
            local_bin.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            self.reporter.warning(f"Could not create {local_bin}: {exc}")
            return
        self.reporter.success(f"Created {local_bin} directory")

    def init_repository(self) -> None:
        self.reporter.info(f"Creating bare Git repository at {self.config.dotfiles_dir}...")
        self.git.init_bare(self.config.dotfiles_dir)
        self.reporter.success(f"Created bare repository at {self.config.dotfiles_dir}")

    def install_alias(self) -> None:
        self.reporter.info("Setting up Git alias for dotfiles management...")
        self.result.alias_outcomes = install_alias(
            self.alias, self.config.alias_files, self.reporter
        )
        self.git.set_config("status.showUntrackedFiles", "no")
        self.reporter.success(
            f"Git alias '{self.alias.name}' configured. You can now use "
            f"'{self.alias.name}' as a replacement for 'git' to manage your dotfiles."
        )

    def stage_files(self) -> None:
        self.reporter.info("Adding important dotfiles to the repository...")
        for path in dict.fromkeys(self.config.candidate_files):
            if not path.is_file():
                self.result.skipped.append(path)
                self.reporter.warning(f"File {path} not found, skipping")
                continue

            self.git.add(path)
            self.result.staged.append(path)
            self.reporter.success(f"Added {self._display_path(path)} to repository")

    def commit(self) -> None:
        self.reporter.info("Creating initial commit...")
        if not self.result.staged:
            raise NothingStagedError()
        self.git.commit(self.config.commit_message)
        self.reporter.success("Created initial commit")

    def update_environment(self) -> None:
        if not self.config.environment_variables:
            return
        self.reporter.info(f"Checking {self.config.environment_file}...")
        update_environment_file(
            self.config.environment_file,
            EnvironmentBlock(self.config.environment_variables),
            self.reporter,
        )

    def emit_instructions(self) -> None:
        host = self.config.remote_host
        self.reporter.info(f"Please manually create a repository on {host}:")
        for line in render_remote_instructions(
                self.alias.name, self.github_user, self.repo_name, host):
            self.reporter.plain(line)

        self.reporter.info("To clone your dotfiles on a new machine, follow these steps:")
        for line in render_restore_instructions(
                self.alias.name, self.github_user, self.repo_name, host,
                self._home_relative(self.config.dotfiles_dir)):
            self.reporter.plain(line)

    def _display_path(self, path: Path) -> str:
        try:
            return str(path.relative_to(self.config.home))
        except ValueError:
            return str(path)

    def _home_relative(self, path: Path) -> str:
        try:
            return f"$HOME/{path.relative_to(self.config.home)}"
        except ValueError:
            return str(path)
