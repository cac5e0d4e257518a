"""Follow-up instructions printed once the dotfiles repository exists."""

from typing import List


def remote_url(user: str, repo: str, host: str = "github.com") -> str:
    """Get the SSH remote URL for the dotfiles repository."""
    return f"git@{host}:{user}/{repo}.git"


def render_remote_instructions(alias: str, user: str, repo: str,
                               host: str = "github.com") -> List[str]:
    """
    Build the steps for creating the remote repository and pushing to it.

    Args:
        alias: Shell alias bound to the bare repository
        user: Account name on the hosting service
        repo: Repository name on the hosting service
        host: Hosting service SSH host

    Returns:
        list: Lines of plain text
    """
    return [
        f"1. Go to https://{host}/new",
        f"2. Name your repository: {repo}",
        "3. Make it public or private according to your preference",
        "4. Initialize without README, .gitignore, or license files",
        "5. Click 'Create repository'",
        "",
        "After creating the repository, run these commands to push your dotfiles:",
        "",
        f"  {alias} remote add origin {remote_url(user, repo, host)}",
        f"  {alias} branch -M main",
        f"  {alias} push -u origin main",
        "",
    ]


def render_restore_instructions(alias: str, user: str, repo: str,
                                host: str = "github.com",
                                dotfiles_dir: str = "$HOME/.dotfiles") -> List[str]:
    """Build the steps for replicating the setup on a new machine."""
    return [
        "",
        "1. Clone the bare repository:",
        f"   git clone --bare {remote_url(user, repo, host)} {dotfiles_dir}",
        "",
        "2. Define the alias in your shell:",
        f"   alias {alias}='git --git-dir={dotfiles_dir} --work-tree=$HOME'",
        "",
        "3. Checkout the content from the repository to your home directory:",
        f"   {alias} checkout",
        "",
        "4. Configure the repository to hide untracked files:",
        f"   {alias} config --local status.showUntrackedFiles no",
        "",
        "Note: If you encounter errors due to existing files, you can either:",
        "- Back up the conflicting files and then retry the checkout",
        f"- Use '{alias} checkout -f' to force overwrite (be careful!)",
        "",
    ]


def render_usage_hint(alias: str) -> List[str]:
    """Build the closing hint on how to use the alias."""
    return [
        "",
        f"You can use '{alias}' just like you would use 'git' to manage your dotfiles.",
        f"For example: '{alias} status', '{alias} add', '{alias} commit', etc.",
    ]
