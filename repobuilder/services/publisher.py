"""
Publishing service for repobuilder.

Moves freshly built package files into the repository directory, signs
them and adds them to the repository database. For every package file
the repository either ends up with file, signature and index entry, or
with none of them.
"""

import logging
import shutil
from pathlib import Path
from typing import List, Optional, Union

from ..config import PipelineConfig
from ..domain.operation import ArtifactStatus, PublishResult
from ..domain.package import Artifact, PackageSource
from ..exit_codes import RegistrationError
from ..infra.gpg_client import GpgClient
from ..infra.pacman_client import PacmanClient

logger = logging.getLogger(__name__)


class Publisher:
    """
    Registers build artifacts in the repository, at most once per filename.

    Example:
        publisher = Publisher(config)
        for result in publisher.publish("/srv/pkgbuilds/foo"):
            print(result.filename, result.status.value)
    """

    def __init__(
        self,
        config: PipelineConfig,
        gpg: Optional[GpgClient] = None,
        pacman: Optional[PacmanClient] = None,
    ):
        """
        Initialize Publisher.

        Args:
            config: Run configuration
            gpg: GpgClient instance (creates new if None)
            pacman: PacmanClient instance (creates new if None)
        """
        self.config = config
        self.gpg = gpg or GpgClient()
        self.pacman = pacman or PacmanClient()

    def publish(self, path: Union[str, Path]) -> List[PublishResult]:
        """
        Publish every artifact lying directly in `path`.

        Returns:
            One PublishResult per artifact found

        Raises:
            RegistrationError: if signing or indexing fails; the copied
                file and its signature are removed first
        """
        source = PackageSource.from_path(path)
        artifacts = source.artifacts(self.config.artifact_extension)
        if not artifacts:
            logger.warning(f"No artifacts to publish in {source.path}")

        results = []
        for artifact in artifacts:
            results.append(self._publish_artifact(artifact, source.identifier))
        return results

    def _publish_artifact(self, artifact: Artifact, package: str) -> PublishResult:
        target = self.config.repo / artifact.filename
        if target.exists():
            logger.info(f"{artifact.filename} already in repository, skipping")
            return PublishResult(filename=artifact.filename, status=ArtifactStatus.ALREADY_PRESENT)

        try:
            shutil.copyfile(artifact.path, target)
        except OSError as e:
            logger.error(f"Copying {artifact.filename} into {self.config.repo} failed: {e}")
            self._rollback(artifact)
            raise RegistrationError(artifact.filename, package=package) from e
        # gpg prompts before overwriting an orphaned signature
        (self.config.repo / artifact.signature_filename).unlink(missing_ok=True)

        if not self.gpg.detach_sign(target):
            self._rollback(artifact)
            raise RegistrationError(artifact.filename, package=package)

        if not self.pacman.repo_add(self.config.repo, self.config.repo_name, artifact.filename):
            self._rollback(artifact)
            raise RegistrationError(artifact.filename, package=package)

        logger.info(f"Registered {artifact.filename} in {self.config.index_filename}")
        return PublishResult(filename=artifact.filename, status=ArtifactStatus.REGISTERED, signed=True)

    def _rollback(self, artifact: Artifact) -> None:
        """Remove a copied artifact and its signature from the repository."""
        for name in (artifact.filename, artifact.signature_filename):
            leftover = self.config.repo / name
            try:
                leftover.unlink()
                logger.debug(f"Rolled back {leftover}")
            except FileNotFoundError:
                pass
