"""
Environment bootstrap service for repobuilder.

Prepares the directories and the chroot a run depends on:
- Creates the repository directory if absent
- Creates and bootstraps the chroot on first use
- Refreshes the chroot's package set before building
"""

import logging
from typing import Generator, Optional

from ..config import PipelineConfig
from ..exit_codes import CommandError
from ..infra.makepkg_client import MakepkgClient

logger = logging.getLogger(__name__)


class EnvironmentBootstrap:
    """
    Creates the repository directory and the build chroot.

    Example:
        bootstrap = EnvironmentBootstrap(config)
        for message in bootstrap.prepare():
            print(message)
    """

    def __init__(self, config: PipelineConfig, makepkg: Optional[MakepkgClient] = None):
        self.config = config
        self.makepkg = makepkg or MakepkgClient()

    def prepare(self, update: bool = True) -> Generator[str, None, None]:
        """
        Make the repository and chroot ready for a run.

        Yields:
            Progress messages

        Raises:
            CommandError: if the chroot cannot be bootstrapped for a chroot build
        """
        yield from self.ensure_repository()
        yield from self.ensure_chroot()
        if update:
            yield from self.update_chroot()

    def ensure_repository(self) -> Generator[str, None, None]:
        if not self.config.repo.exists():
            self.config.repo.mkdir(parents=True)
            yield f"Created repository directory {self.config.repo}"

    def ensure_chroot(self) -> Generator[str, None, None]:
        root = self.config.chroot_root
        if root.exists():
            return

        self.config.chroot.mkdir(parents=True, exist_ok=True)
        yield f"Bootstrapping chroot at {root}"
        if self.makepkg.create_chroot(root, self.config.base_packages):
            return

        if self.config.dirty:
            # Host builds do not need the chroot
            logger.warning(f"Chroot bootstrap failed at {root}")
        else:
            raise CommandError(f"cannot bootstrap chroot at {root}")

    def update_chroot(self) -> Generator[str, None, None]:
        root = self.config.chroot_root
        if not root.exists():
            return
        yield f"Updating chroot {root}"
        if not self.makepkg.update_chroot(root, self.config.pacman_config, self.config.noconfirm):
            logger.warning("Chroot update failed, continuing with existing packages")
