"""
Service layer for repobuilder.

Contains the pipeline components that orchestrate domain objects and
infrastructure:
- WorkspaceCleaner: Removes stale artifacts before a build
- VersionGate: Decides whether a package needs building
- BuildExecutor: Builds on the host or in the chroot
- Publisher: Signs and indexes new artifacts, with rollback
- PipelineSequencer: Walks the build root and applies the failure policy
- EnvironmentBootstrap: Repository directory and chroot setup

Services are the primary API for commands to use.
"""

from .workspace_cleaner import WorkspaceCleaner
from .version_gate import VersionGate, GateDecision
from .build_executor import BuildExecutor
from .publisher import Publisher
from .pipeline import PipelineSequencer
from .bootstrap import EnvironmentBootstrap

__all__ = [
    'WorkspaceCleaner',
    'VersionGate',
    'GateDecision',
    'BuildExecutor',
    'Publisher',
    'PipelineSequencer',
    'EnvironmentBootstrap',
]
