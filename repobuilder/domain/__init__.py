"""
Domain layer for repobuilder.

Contains pure domain objects with no side effects:
- PackageSource: A directory holding a build descriptor
- BuildDescriptor: Declared package name and version
- BuildOutcome / Artifact: What a build attempt produced
- PackageResult / RunSummary: Per-package and per-run results

These objects are immutable where possible and provide
serialization methods for JSONL output.
"""

from .descriptor import BuildDescriptor, parse_descriptor, parse_descriptor_lines
from .package import PackageSource, BuildOutcome, Artifact
from .operation import (
    PackageStatus,
    ArtifactStatus,
    PublishResult,
    PackageResult,
    RunSummary,
)

__all__ = [
    'BuildDescriptor',
    'parse_descriptor',
    'parse_descriptor_lines',
    'PackageSource',
    'BuildOutcome',
    'Artifact',
    'PackageStatus',
    'ArtifactStatus',
    'PublishResult',
    'PackageResult',
    'RunSummary',
]
