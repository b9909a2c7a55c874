"""
Git client infrastructure for repobuilder.

Provides a clean abstraction over the git commands the build executor
needs before compiling a package source:
- Discarding local modifications (revert to clean)
- Force-pulling the latest upstream source
"""

from pathlib import Path
from typing import Optional, Union
import logging

from .command_runner import CommandRunner

logger = logging.getLogger(__name__)


class GitClient:
    """
    Abstraction over git commands.

    Example:
        client = GitClient()
        client.checkout_clean("/path/to/pkg")
        client.pull("/path/to/pkg", force=True)
    """

    def __init__(self, runner: Optional[CommandRunner] = None):
        """
        Initialize GitClient.

        Args:
            runner: Command gateway (creates new if None)
        """
        self.runner = runner or CommandRunner()

    def checkout_clean(self, path: Union[str, Path]) -> bool:
        """
        Discard local modifications to tracked files.

        Returns:
            True if successful
        """
        result = self.runner.run(["git", "checkout", "--", "."], cwd=path)
        if not result.ok:
            logger.warning(f"git checkout failed in {path} (exit {result.status})")
        return result.ok

    def pull(self, path: Union[str, Path], force: bool = False) -> bool:
        """
        Pull from the configured upstream.

        Returns:
            True if successful
        """
        cmd = ["git", "pull"]
        if force:
            cmd.append("-f")
        result = self.runner.run(cmd, cwd=path)
        if not result.ok:
            logger.warning(f"git pull failed in {path} (exit {result.status})")
        return result.ok
