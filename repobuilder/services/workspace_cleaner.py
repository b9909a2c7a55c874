"""
Workspace cleaning service for repobuilder.

Removes a previous run's build byproducts from a package source so the
publisher only ever sees artifacts produced by the current build.
"""

import logging
import shutil
from pathlib import Path
from typing import Union

from ..config import PipelineConfig
from ..domain.package import PackageSource

logger = logging.getLogger(__name__)


class WorkspaceCleaner:
    """
    Best-effort removal of stale artifacts and extracted sources.

    Idempotent: cleaning an already clean workspace is a no-op.
    """

    def __init__(self, config: PipelineConfig):
        self.config = config

    def clean(self, path: Union[str, Path]) -> None:
        """Delete package files in `path` and its extracted sources directory."""
        source = PackageSource.from_path(path)
        if not source.path.is_dir():
            return

        for artifact in source.artifacts(self.config.artifact_extension):
            try:
                artifact.path.unlink()
                logger.debug(f"Removed stale artifact {artifact.path}")
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning(f"Could not remove {artifact.path}: {e}")

        sources_dir = source.path / self.config.sources_dir
        if sources_dir.is_dir() and not sources_dir.is_symlink():
            try:
                shutil.rmtree(sources_dir)
                logger.debug(f"Removed extracted sources {sources_dir}")
            except OSError as e:
                logger.warning(f"Could not remove {sources_dir}: {e}")
