"""Configuration management for the dotfiles bootstrapper."""

import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field

from .utils.logger import get_utils_logger


DEFAULT_CANDIDATE_FILES = [
    "~/.bashrc",
    "~/.bash_profile",
    "~/.gitconfig",
    "~/.config/Code/User/settings.json",
    "~/.config/Code/User/keybindings.json",
    "~/.config/Cursor/User/settings.json",
    "~/.config/Cursor/User/keybindings.json",
]

DEFAULT_DOTFILES_SETTINGS: Dict[str, Any] = {
    "dotfiles_dir": "~/.dotfiles",
    "local_bin_dir": "~/.local/bin",
    "git_alias": "config",
    "alias_files": ["~/.bashrc"],
    "candidate_files": DEFAULT_CANDIDATE_FILES,
    "commit_message": "Initial dotfiles commit",
    "default_repo_name": "dotfiles",
    "remote_host": "github.com",
    "environment": {
        "file": "/etc/environment",
        "variables": {},
    },
}


@dataclass
class AppConfig:
    """Application configuration data class."""
    name: str
    version: str
    description: str


@dataclass
class DotfilesConfig:
    """Settings driving a bootstrap run, with paths already expanded."""
    home: Path
    dotfiles_dir: Path
    local_bin_dir: Path
    git_alias: str
    alias_files: List[Path]
    candidate_files: List[Path]
    commit_message: str
    default_repo_name: str
    remote_host: str
    environment_file: Path
    environment_variables: Dict[str, str] = field(default_factory=dict)


def expand_path(raw: str, home: Path) -> Path:
    """Expand ~ and $HOME against home; relative paths are taken from home."""
    if raw == "~" or raw == "$HOME":
        return home
    for prefix in ("~/", "$HOME/", "${HOME}/"):
        if raw.startswith(prefix):
            return home / raw[len(prefix):]
    path = Path(raw)
    if path.is_absolute():
        return path
    return home / path


def _is_within(path: Path, home: Path) -> bool:
    try:
        path.relative_to(home)
    except ValueError:
        return False
    return True


class ConfigManager:
    """Manages application configuration from YAML files."""

    def __init__(self, config_dir: Path = Path("config")):
        self.config_dir = config_dir
        self._config_cache = {}
        self.logger = get_utils_logger("config_manager")
        self.logger.debug(f"Config manager initialized: config_dir={config_dir}")

    def load_config(self, config_name: str) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if config_name in self._config_cache:
            self.logger.debug(f"Using cached config: {config_name}")
            return self._config_cache[config_name]

        config_path = self.config_dir / f"{config_name}.yaml"
        self.logger.debug(f"Loading config file: {config_path}")

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as file:
                config = yaml.safe_load(file)

            if config is None:
                self.logger.warning(f"Config file is empty: {config_name}")
                config = {}

            self._config_cache[config_name] = config
            return config

        except yaml.YAMLError as e:
            self.logger.error(f"Failed to parse YAML [{config_name}]: {e}")
            raise
        except IOError as e:
            self.logger.error(f"Failed to read config file [{config_path}]: {e}")
            raise

    def _load_optional(self, config_name: str) -> Dict[str, Any]:
        try:
            return self.load_config(config_name)
        except FileNotFoundError:
            self.logger.debug(f"No {config_name}.yaml in {self.config_dir}, using defaults")
            return {}

    def get_app_config(self) -> AppConfig:
        """Get application configuration."""
        app_section = self._load_optional("app").get("app", {})
        return AppConfig(
            name=app_section.get("name", "Dotfiles Bootstrap"),
            version=str(app_section.get("version", "0.1.0")),
            description=app_section.get(
                "description", "Track dotfiles in a bare git repository"
            ),
        )

    def get_dotfiles_config(self, home: Optional[Path] = None) -> DotfilesConfig:
        """
        Get the bootstrap settings merged over the built-in defaults.

        Args:
            home: Home directory used to expand paths, defaults to Path.home()

        Returns:
            DotfilesConfig: Settings with every path expanded

        Raises:
            ValueError: A setting has the wrong type, or a candidate file
                lies outside the home directory
        """
        home = (home or Path.home()).expanduser().resolve()
        section = self._load_optional("dotfiles").get("dotfiles", {}) or {}
        if not isinstance(section, dict):
            raise ValueError("'dotfiles' section must be a mapping")

        settings = dict(DEFAULT_DOTFILES_SETTINGS)
        settings.update(section)

        environment = dict(DEFAULT_DOTFILES_SETTINGS["environment"])
        environment.update(settings.get("environment") or {})

        for key in ("alias_files", "candidate_files"):
            if not isinstance(settings[key], list):
                raise ValueError(f"'{key}' must be a list of paths")
        if not isinstance(environment["variables"], dict):
            raise ValueError("'environment.variables' must be a mapping")

        config = DotfilesConfig(
            home=home,
            dotfiles_dir=expand_path(str(settings["dotfiles_dir"]), home),
            local_bin_dir=expand_path(str(settings["local_bin_dir"]), home),
            git_alias=str(settings["git_alias"]),
            alias_files=[expand_path(str(p), home) for p in settings["alias_files"]],
            candidate_files=[expand_path(str(p), home) for p in settings["candidate_files"]],
            commit_message=str(settings["commit_message"]),
            default_repo_name=str(settings["default_repo_name"]),
            remote_host=str(settings["remote_host"]),
            environment_file=expand_path(str(environment["file"]), home),
            environment_variables={
                str(name): str(value) for name, value in environment["variables"].items()
            },
        )
        outside = [str(p) for p in config.candidate_files if not _is_within(p, home)]
        if outside:
            raise ValueError(
                f"candidate files must live inside the home directory {home}: "
                f"{', '.join(outside)}"
            )

        self.logger.debug(
            f"Dotfiles config loaded: {len(config.candidate_files)} candidate files, "
            f"repository at {config.dotfiles_dir}"
        )
        return config
