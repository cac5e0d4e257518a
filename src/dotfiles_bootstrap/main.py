#!/usr/bin/env python3
"""
Dotfiles Bootstrap - Command Line Entry Point
Description: Track personal dotfiles in a bare git repository
"""

import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from rich.console import Console

from .config_manager import ConfigManager
from .modules.bootstrapper import DotfilesBootstrapper
from .modules.instructions import render_usage_hint
from .utils.logger import init_logging, get_logger
from .utils.reporter import StatusReporter


console = Console()


@click.command()
@click.option('--github-user', '-u', help='GitHub username used in the printed instructions')
@click.option('--repo-name', '-r', help='Remote repository name (default from config)')
@click.option('--config-dir', '-c', default='config', type=click.Path(path_type=Path),
              help='Configuration directory path')
@click.option('--home', type=click.Path(file_okay=False, path_type=Path),
              help='Home directory to bootstrap (defaults to the current user home)')
@click.option('--log-dir', default='logs', type=click.Path(file_okay=False, path_type=Path),
              help='Directory for the log file')
@click.option('--debug', is_flag=True, help='Enable debug mode')
def main(github_user: Optional[str], repo_name: Optional[str], config_dir: Path,
         home: Optional[Path], log_dir: Path, debug: bool):
    """Create a bare git repository tracking your dotfiles."""

    try:
        init_logging(config_dir, debug=debug, logs_dir=log_dir)
        logger = get_logger("dotfiles_bootstrap.main")

        config_manager = ConfigManager(config_dir)
        app_config = config_manager.get_app_config()
        dotfiles_config = config_manager.get_dotfiles_config(home)

        if debug:
            console.print(f"[blue]Starting {app_config.name} v{app_config.version}[/blue]")
            console.print(f"[dim]Config directory: {config_dir}[/dim]")

        reporter = StatusReporter(console)
        reporter.info("Starting dotfiles setup script...")

        if not github_user:
            github_user = click.prompt("Enter your GitHub username")
        if not repo_name:
            repo_name = click.prompt(
                "Enter repository name", default=dotfiles_config.default_repo_name
            )
        logger.debug(f"Bootstrapping for {github_user}/{repo_name}")

        bootstrapper = DotfilesBootstrapper(dotfiles_config, github_user, repo_name, reporter)
        result = bootstrapper.run()

        if not result.succeeded:
            sys.exit(1)

        reporter.success("Setup complete! Your dotfiles are now being tracked in a Git repository.")
        for line in render_usage_hint(dotfiles_config.git_alias):
            reporter.plain(line)

    except (KeyboardInterrupt, click.Abort):
        console.print("\n[yellow]Setup interrupted by user[/yellow]")
        sys.exit(130)
    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error starting setup: {e}[/red]")
        if debug:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
