"""
Git Integration

Thin wrappers around the git and GitHub CLIs used by the feature workflow.
No state is kept - every call queries the live repository.
"""

import json
import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from .config import get_config
from .models import RepoContext

console = Console(stderr=True, soft_wrap=True)
logger = logging.getLogger(__name__)


class GitManager:
    """Runs git commands against a working directory."""

    def __init__(self, git_command: Optional[str] = None, timeout: Optional[int] = None) -> None:
        """Initialize git manager.

        Args:
            git_command: Command to execute git (default: from config)
            timeout: Subprocess timeout in seconds (default: from config)
        """
        config = get_config()
        self.git_command = git_command or config.GIT_COMMAND
        self.timeout = timeout or config.SUBPROCESS_TIMEOUT

    def _run(self, path: Path, args: List[str]) -> subprocess.CompletedProcess:
        return subprocess.run(
            [self.git_command, "-C", str(path), *args],
            capture_output=True,
            text=True,
            check=True,
            timeout=self.timeout,
        )

    def get_repo_root(self, path: Path) -> Optional[Path]:
        """Return the top-level directory of the repository containing path.

        Args:
            path: Directory inside a possible git repository

        Returns:
            Repository root, or None if path is not inside a git repository
        """
        try:
            result = self._run(path, ["rev-parse", "--show-toplevel"])
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError) as e:
            logger.debug("No git repository at %s: %s", path, e)
            return None

        root = result.stdout.strip()
        return Path(root) if root else None

    def get_remote_url(self, path: Path, remote: Optional[str] = None) -> Optional[str]:
        """Return the URL of a remote, or None when it is not configured.

        Args:
            path: Directory inside the repository
            remote: Remote name (default: from config, usually 'origin')
        """
        remote = remote or get_config().DEFAULT_REMOTE
        try:
            result = self._run(path, ["remote", "get-url", remote])
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError) as e:
            logger.debug("No '%s' remote at %s: %s", remote, path, e)
            return None

        return result.stdout.strip() or None

    def create_branch(self, path: Path, branch_name: str) -> bool:
        """Create and check out a new branch.

        Args:
            path: Directory inside the repository
            branch_name: Name of the branch to create

        Returns:
            True if the branch was created, False otherwise
        """
        console.print(f"[green]Creating branch: {branch_name}[/green]")

        try:
            self._run(path, ["checkout", "-b", branch_name])
        except subprocess.CalledProcessError as e:
            console.print(f"[red]Branch creation failed: {escape(e.stderr.strip())}[/red]")
            return False
        except (subprocess.TimeoutExpired, FileNotFoundError) as e:
            console.print(f"[red]Branch creation failed: {escape(str(e))}[/red]")
            return False

        return True


class GitHubCLI:
    """Queries the GitHub CLI for the authenticated account and repository context."""

    def __init__(self, gh_command: Optional[str] = None, timeout: Optional[int] = None) -> None:
        """Initialize GitHub CLI wrapper.

        Args:
            gh_command: GitHub CLI command (default: from config)
            timeout: Subprocess timeout in seconds (default: from config)
        """
        config = get_config()
        self.gh_command = gh_command or config.GITHUB_CLI_COMMAND
        self.timeout = timeout or config.SUBPROCESS_TIMEOUT

    def _run(self, args: List[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
        return subprocess.run(
            [self.gh_command, *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
            timeout=self.timeout,
        )

    def get_authenticated_username(self) -> Optional[str]:
        """Return the login of the account gh is authenticated as."""
        try:
            result = self._run(["api", "user", "--jq", ".login"])
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError) as e:
            logger.debug("gh username lookup failed: %s", e)
            return None

        return result.stdout.strip() or None

    def get_repo_context(self, path: Optional[Path] = None) -> Optional[RepoContext]:
        """Return owner, name and default branch of the repository at path.

        Args:
            path: Directory inside the repository (default: current directory)

        Returns:
            RepoContext, or None if gh is missing, unauthenticated or not in a repo
        """
        try:
            result = self._run(
                ["repo", "view", "--json", "owner,name,defaultBranchRef"],
                cwd=path,
            )
            data = json.loads(result.stdout)
        except FileNotFoundError:
            console.print(f"[red]GitHub CLI '{self.gh_command}' is required but not installed[/red]")
            return None
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, json.JSONDecodeError) as e:
            logger.debug("gh repo view failed: %s", e)
            console.print("[red]Not in a git repository or gh not authenticated[/red]")
            return None

        return RepoContext(
            owner=data["owner"]["login"],
            name=data["name"],
            default_branch=(data.get("defaultBranchRef") or {}).get("name", ""),
        )

    def switch_account(self, repo_owner: str, company_handle: str, personal_handle: str) -> Optional[str]:
        """Switch gh to the account matching the repository owner.

        Args:
            repo_owner: Owner login of the current repository
            company_handle: Company account, used when it owns the repository
            personal_handle: Personal account, used for every other owner

        Returns:
            Handle switched to, or None if the switch failed
        """
        handle = company_handle if repo_owner == company_handle else personal_handle

        try:
            self._run(["auth", "switch", "--user", handle])
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError) as e:
            logger.debug("gh auth switch to %s failed: %s", handle, e)
            return None

        return handle
