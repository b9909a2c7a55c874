"""
pacman client for repobuilder.

Covers the two pacman-side operations the pipeline needs:
- Querying the installed-package registry (pacman -Q)
- Inserting a package file into a repository database (repo-add)
"""

from pathlib import Path
from typing import Optional, Union
import logging

from .command_runner import CommandRunner

logger = logging.getLogger(__name__)


class PacmanClient:
    """
    Abstraction over pacman and repo-add.

    Example:
        client = PacmanClient()
        client.installed_version("bash")   # "5.2.026-2" or None
        client.repo_add("/srv/repo", "myrepo", "foo-1.0-1-x86_64.pkg.tar.zst")
    """

    def __init__(self, runner: Optional[CommandRunner] = None):
        """
        Initialize PacmanClient.

        Args:
            runner: Command gateway (creates new if None)
        """
        self.runner = runner or CommandRunner()

    def query(self, name: str) -> Optional[str]:
        """
        Report an installed package as pacman prints it.

        Returns:
            "name version-release", or None if not installed
        """
        result = self.runner.run(["pacman", "-Q", name])
        if not result.ok or not result.stdout.strip():
            return None
        return result.stdout.strip()

    def installed_version(self, name: str) -> Optional[str]:
        """
        Get the installed version-release string of a package.

        Returns:
            Version-release (e.g. "1.2.3-1"), or None if not installed
        """
        line = self.query(name)
        if not line:
            return None
        parts = line.split()
        if len(parts) < 2:
            return None
        return parts[1]

    def repo_add(
        self,
        repo_dir: Union[str, Path],
        repo_name: str,
        filename: str,
    ) -> bool:
        """
        Insert a package file into the repository database.

        Older entries for the same package name are removed first and
        their files deleted from disk (-R); downgrades are refused (-p).

        Args:
            repo_dir: Repository directory (holds the database and packages)
            repo_name: Database base name ({repo_name}.db.tar.gz)
            filename: Package file name inside repo_dir

        Returns:
            True if the database was updated
        """
        database = f"{repo_name}.db.tar.gz"
        result = self.runner.run(
            ["repo-add", "-R", "-p", database, filename],
            cwd=repo_dir,
        )
        if not result.ok:
            logger.error(f"repo-add failed for {filename} (exit {result.status})")
        return result.ok
