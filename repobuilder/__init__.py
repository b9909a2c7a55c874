"""
repobuilder - Build package sources and publish them into a pacman repository.

repobuilder walks a directory of PKGBUILD trees, builds the packages whose
declared version differs from the installed one, and publishes the results
into a signed repository.

Quick Start:
    from repobuilder import PipelineConfig, PipelineSequencer

    config = PipelineConfig.from_options(
        build_root="~/pkgbuilds",
        chroot="~/chroot",
        repo="~/repo",
        repo_name="myrepo",
        pacman_config="/etc/pacman.conf",
    )

    pipeline = PipelineSequencer(config)
    for result in pipeline.run():
        print(result.package, result.status.value)

Pipeline, per package:
    WorkspaceCleaner -> VersionGate -> BuildExecutor -> Publisher

Failure policy:
    A failed build stops the run unless force=True. A failed repo-add
    always stops the run, after removing the copied file and signature.
"""

__version__ = "0.3.0"

# Domain objects
from .domain import (
    PackageSource,
    BuildDescriptor,
    BuildOutcome,
    Artifact,
    PackageResult,
    RunSummary,
)

# Services
from .services import (
    WorkspaceCleaner,
    VersionGate,
    BuildExecutor,
    Publisher,
    PipelineSequencer,
    EnvironmentBootstrap,
)

# Configuration
from .config import PipelineConfig, load_config, save_config

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "PackageSource",
    "BuildDescriptor",
    "BuildOutcome",
    "Artifact",
    "PackageResult",
    "RunSummary",
    # Services
    "WorkspaceCleaner",
    "VersionGate",
    "BuildExecutor",
    "Publisher",
    "PipelineSequencer",
    "EnvironmentBootstrap",
    # Configuration
    "PipelineConfig",
    "load_config",
    "save_config",
]
