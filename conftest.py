"""Shared pytest fixtures for the dotfiles bootstrap tests."""

import io
import shutil
import sys
from pathlib import Path

import pytest
from rich.console import Console

# Add the src directory to the Python path
src_path = Path(__file__).parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dotfiles_bootstrap.config_manager import ConfigManager  # noqa: E402
from dotfiles_bootstrap.utils.reporter import StatusReporter  # noqa: E402


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


@pytest.fixture
def home(tmp_path, monkeypatch):
    """A throwaway home directory with a deterministic git identity."""
    home_dir = tmp_path / "home" / "u"
    home_dir.mkdir(parents=True)
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    return home_dir


@pytest.fixture
def reporter():
    """Reporter printing into memory."""
    return StatusReporter(Console(file=io.StringIO(), width=200))


@pytest.fixture
def make_config(tmp_path, home):
    """Build a DotfilesConfig from a dotfiles.yaml section."""
    def _make(**settings):
        import yaml

        config_dir = tmp_path / "config"
        config_dir.mkdir(exist_ok=True)
        with open(config_dir / "dotfiles.yaml", 'w', encoding='utf-8') as f:
            yaml.safe_dump({"dotfiles": settings}, f)
        return ConfigManager(config_dir).get_dotfiles_config(home)

    return _make
