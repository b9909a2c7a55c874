"""
Build executor service for repobuilder.

Brings a package source up to date with its upstream and builds it,
either on the host ("dirty") or inside the clean chroot.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..config import PipelineConfig
from ..infra.git_client import GitClient
from ..infra.makepkg_client import MakepkgClient

logger = logging.getLogger(__name__)


class BuildExecutor:
    """
    Runs one package build.

    The source tree is reset and force-pulled first; a failed reset or
    pull does not stop the build. There is no retry; whether a failure
    stops the batch is decided by the pipeline.
    """

    def __init__(
        self,
        config: PipelineConfig,
        git: Optional[GitClient] = None,
        makepkg: Optional[MakepkgClient] = None,
    ):
        self.config = config
        self.git = git or GitClient()
        self.makepkg = makepkg or MakepkgClient()

    @property
    def mode(self) -> str:
        return "dirty" if self.config.dirty else "chroot"

    def build(self, path: Union[str, Path]) -> bool:
        """
        Build the package source at `path`.

        Returns:
            True if the build tool exited successfully
        """
        path = Path(path)

        self.git.checkout_clean(path)
        self.git.pull(path, force=True)

        logger.info(f"Building {path.name} ({self.mode})")
        if self.config.dirty:
            succeeded = self.makepkg.build_on_host(path)
        else:
            succeeded = self.makepkg.build_in_chroot(path, self.config.chroot)

        if not succeeded:
            logger.error(f"Build failed: {path.name}")
        return succeeded
