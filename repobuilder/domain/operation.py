"""
Operation result domain objects for repobuilder.

Provides standardized result types for the build-and-publish run:
what happened to each package and each artifact, and a summary of
the whole batch.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional


class PackageStatus(Enum):
    """Status of one package in a run."""
    PUBLISHED = "published"
    UP_TO_DATE = "up_to_date"
    FAILED = "failed"
    NO_ARTIFACTS = "no_artifacts"


class ArtifactStatus(Enum):
    """Status of one artifact handed to the publisher."""
    REGISTERED = "registered"
    ALREADY_PRESENT = "already_present"


@dataclass
class PublishResult:
    """What the publisher did with one artifact file."""
    filename: str
    status: ArtifactStatus
    signed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'filename': self.filename,
            'status': self.status.value,
            'signed': self.signed,
        }


@dataclass
class PackageResult:
    """
    Outcome of the clean/check/build/publish cycle for one package.

    Used to track what happened to each package during a batch.
    """
    package: str
    path: str
    status: PackageStatus
    built: bool = False
    error: Optional[str] = None
    artifacts: List[PublishResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            'type': 'package',
            'package': self.package,
            'path': self.path,
            'status': self.status.value,
            'built': self.built,
        }
        if self.error:
            result['error'] = self.error
        if self.artifacts:
            result['artifacts'] = [artifact.to_dict() for artifact in self.artifacts]
        return result


@dataclass
class RunSummary:
    """
    Summary of a run across all discovered package sources.
    """
    single_package: bool = False
    forced: bool = False
    total: int = 0
    published: int = 0
    up_to_date: int = 0
    failed: int = 0
    no_artifacts: int = 0
    artifacts_registered: int = 0
    details: List[PackageResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if no failures occurred."""
        return self.failed == 0

    def add_result(self, result: PackageResult) -> None:
        """Add a package result and update counts."""
        self.details.append(result)
        self.total += 1

        if result.status == PackageStatus.PUBLISHED:
            self.published += 1
        elif result.status == PackageStatus.UP_TO_DATE:
            self.up_to_date += 1
        elif result.status == PackageStatus.FAILED:
            self.failed += 1
            if result.error:
                self.errors.append(f"{result.package}: {result.error}")
        elif result.status == PackageStatus.NO_ARTIFACTS:
            self.no_artifacts += 1

        self.artifacts_registered += sum(
            1 for artifact in result.artifacts
            if artifact.status == ArtifactStatus.REGISTERED
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'type': 'summary',
            'single_package': self.single_package,
            'forced': self.forced,
            'total': self.total,
            'published': self.published,
            'up_to_date': self.up_to_date,
            'failed': self.failed,
            'no_artifacts': self.no_artifacts,
            'artifacts_registered': self.artifacts_registered,
            'errors': self.errors,
        }
