"""
makepkg / devtools client for repobuilder.

Wraps the build tooling of an Arch-style system:
- makepkg: source fetch and host ("dirty") builds
- makechrootpkg: builds inside a clean chroot
- mkarchroot / arch-nspawn: chroot bootstrap and refresh

Only exit status matters for these commands; their output is streamed
to the terminal rather than captured.
"""

from pathlib import Path
from typing import Iterable, Optional, Union
import logging

from .command_runner import CommandRunner

logger = logging.getLogger(__name__)


class MakepkgClient:
    """
    Abstraction over makepkg and the devtools chroot helpers.

    Example:
        client = MakepkgClient()
        client.fetch_sources("/srv/pkgbuilds/foo")
        ok = client.build_in_chroot("/srv/pkgbuilds/foo", "/srv/chroot")
    """

    def __init__(self, runner: Optional[CommandRunner] = None):
        """
        Initialize MakepkgClient.

        Args:
            runner: Command gateway (creates new if None)
        """
        self.runner = runner or CommandRunner()

    def fetch_sources(self, path: Union[str, Path]) -> bool:
        """
        Download and extract sources without building.

        Runs pkgver() for VCS packages, so the descriptor's declared
        version may change on disk.

        Returns:
            True if successful
        """
        result = self.runner.run(["makepkg", "--nobuild", "--nodeps"], cwd=path, capture=False)
        if not result.ok:
            logger.warning(f"Source fetch failed in {path} (exit {result.status})")
        return result.ok

    def build_on_host(self, path: Union[str, Path]) -> bool:
        """
        Build on the host, installing missing dependencies.

        Returns:
            True if makepkg exited successfully
        """
        result = self.runner.run(["makepkg", "--syncdeps"], cwd=path, capture=False)
        return result.ok

    def build_in_chroot(self, path: Union[str, Path], chroot: Union[str, Path]) -> bool:
        """
        Build inside a working copy of the chroot.

        The chroot is updated before building (-u) and the working copy
        is removed afterwards (-c).

        Returns:
            True if makechrootpkg exited successfully
        """
        result = self.runner.run(
            ["makechrootpkg", "-c", "-u", "-r", str(chroot)],
            cwd=path,
            capture=False,
        )
        return result.ok

    def create_chroot(self, root: Union[str, Path], packages: Iterable[str]) -> bool:
        """
        Bootstrap a fresh chroot root with the given base packages.

        Returns:
            True if successful
        """
        result = self.runner.run(["mkarchroot", str(root), *packages], capture=False)
        if not result.ok:
            logger.error(f"mkarchroot failed for {root} (exit {result.status})")
        return result.ok

    def update_chroot(
        self,
        root: Union[str, Path],
        pacman_config: Union[str, Path],
        noconfirm: bool = True,
    ) -> bool:
        """
        Refresh the chroot's package set using the given pacman config.

        Returns:
            True if successful
        """
        cmd = ["arch-nspawn", "-C", str(pacman_config), str(root), "pacman", "-Syyu"]
        if noconfirm:
            cmd.append("--noconfirm")
        result = self.runner.run(cmd, capture=False)
        if not result.ok:
            logger.warning(f"Chroot update failed for {root} (exit {result.status})")
        return result.ok
