"""
Pipeline sequencing service for repobuilder.

Drives clean -> check -> build -> publish over the package sources found
under the build root, one package at a time, and applies the batch
failure policy:

- Without --force, the first failed build stops the run; later
  packages are never touched.
- With --force, failed builds are recorded and the run moves on.

The build root listing is taken once at the start of a run and walked in
the order the filesystem returns it. That order is platform dependent.
"""

import logging
import os
from typing import Generator, List, Optional

from ..config import PipelineConfig
from ..domain.operation import PackageResult, PackageStatus, RunSummary
from ..domain.package import BuildOutcome, PackageSource
from ..exit_codes import BuildFailureError, DiscoveryError
from .build_executor import BuildExecutor
from .publisher import Publisher
from .version_gate import GateDecision, VersionGate
from .workspace_cleaner import WorkspaceCleaner

logger = logging.getLogger(__name__)


class PipelineSequencer:
    """
    Runs the build-and-publish pipeline over a build root.

    Example:
        pipeline = PipelineSequencer(config)
        for result in pipeline.run():
            print(result.package, result.status.value)

        summary = pipeline.last_result
        print(f"Published {summary.published} packages")
    """

    def __init__(
        self,
        config: PipelineConfig,
        cleaner: Optional[WorkspaceCleaner] = None,
        gate: Optional[VersionGate] = None,
        executor: Optional[BuildExecutor] = None,
        publisher: Optional[Publisher] = None,
    ):
        """
        Initialize PipelineSequencer.

        Args:
            config: Run configuration
            cleaner: WorkspaceCleaner (creates new if None)
            gate: VersionGate (creates new if None)
            executor: BuildExecutor (creates new if None)
            publisher: Publisher (creates new if None)
        """
        self.config = config
        self.cleaner = cleaner or WorkspaceCleaner(config)
        self.gate = gate or VersionGate(config)
        self.executor = executor or BuildExecutor(config)
        self.publisher = publisher or Publisher(config)
        self.last_result: Optional[RunSummary] = None

    def discover(self) -> List[str]:
        """
        List the build root once.

        Raises:
            DiscoveryError: if the build root is empty or cannot be listed
        """
        try:
            entries = os.listdir(self.config.build_root)
        except OSError as e:
            raise DiscoveryError(f"Cannot list build root {self.config.build_root}: {e}") from e

        if not entries:
            raise DiscoveryError(f"No package sources in {self.config.build_root}")
        return entries

    def is_single_package(self, entries: List[str]) -> bool:
        """True if the build root itself holds the build descriptor."""
        if self.config.descriptor not in entries:
            return False
        return not (self.config.build_root / self.config.descriptor).is_dir()

    def iter_sources(self, entries: List[str]) -> Generator[PackageSource, None, None]:
        """Lazily yield the package source directories among `entries`."""
        for name in entries:
            path = self.config.build_root / name
            # Symlinks are not followed
            if path.is_symlink() or not path.is_dir():
                logger.debug(f"Skipping {name}: not a directory")
                continue
            yield PackageSource.from_path(path)

    def sources(self) -> Generator[PackageSource, None, None]:
        """Yield the package sources a run would process."""
        entries = self.discover()
        if self.is_single_package(entries):
            yield PackageSource.from_path(self.config.build_root)
            return
        yield from self.iter_sources(entries)

    def run(self) -> Generator[PackageResult, None, RunSummary]:
        """
        Process every package source.

        Yields:
            PackageResult for each package, as soon as it is processed

        Returns:
            RunSummary (also kept in self.last_result)

        Raises:
            DiscoveryError: nothing to build
            DescriptorParseError: a descriptor lacks pkgname or pkgver
            BuildFailureError: a build failed and the run is not forced
            RegistrationError: an artifact could not be indexed
        """
        entries = self.discover()
        summary = RunSummary(forced=self.config.force)
        self.last_result = summary

        if self.is_single_package(entries):
            summary.single_package = True
            source = PackageSource.from_path(self.config.build_root)
            logger.info(f"Single package mode: {source.identifier}")
            result = self.process(source, check_version=False)
            summary.add_result(result)
            yield result
            self._apply_failure_policy(result)
            return summary

        for source in self.iter_sources(entries):
            result = self.process(source)
            summary.add_result(result)
            yield result
            self._apply_failure_policy(result)

        return summary

    def process(self, source: PackageSource, check_version: bool = True) -> PackageResult:
        """Run the clean -> check -> build -> publish cycle for one package."""
        path = source.path
        self.cleaner.clean(path)

        if check_version and not self.gate.needs_build(path):
            logger.info(f"{source.identifier} is up to date")
            return PackageResult(
                package=source.identifier,
                path=str(path),
                status=PackageStatus.UP_TO_DATE,
            )

        outcome = BuildOutcome(
            identifier=source.identifier,
            path=path,
            succeeded=self.executor.build(path),
        )
        if not outcome.succeeded:
            return PackageResult(
                package=outcome.identifier,
                path=str(outcome.path),
                status=PackageStatus.FAILED,
                error="build failed",
            )

        artifacts = self.publisher.publish(outcome.path)
        if not artifacts:
            return PackageResult(
                package=outcome.identifier,
                path=str(outcome.path),
                status=PackageStatus.NO_ARTIFACTS,
                built=True,
                error="build produced no artifacts",
            )
        return PackageResult(
            package=outcome.identifier,
            path=str(outcome.path),
            status=PackageStatus.PUBLISHED,
            built=True,
            artifacts=artifacts,
        )

    def check(self) -> Generator[GateDecision, None, None]:
        """Run only the version gate over every package source."""
        for source in self.sources():
            yield self.gate.check(source.path)

    def _apply_failure_policy(self, result: PackageResult) -> None:
        if result.status != PackageStatus.FAILED:
            return
        if self.config.force:
            logger.warning(f"{result.package} failed to build, continuing (--force)")
            return
        raise BuildFailureError(result.package, path=result.path)
