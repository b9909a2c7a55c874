"""
Version gate service for repobuilder.

Decides whether a package source needs building by comparing the
version-release string its descriptor declares against what the
installed-package registry reports. The comparison is textual: any
difference (including "not installed") means build.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..config import PipelineConfig
from ..domain.descriptor import parse_descriptor
from ..domain.package import PackageSource
from ..infra.makepkg_client import MakepkgClient
from ..infra.pacman_client import PacmanClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GateDecision:
    """Result of checking one package source against the registry."""
    package: str
    path: Path
    declared: str
    installed: Optional[str]

    @property
    def needs_build(self) -> bool:
        return self.declared != self.installed

    def to_dict(self) -> Dict[str, Any]:
        return {
            'package': self.package,
            'path': str(self.path),
            'declared': self.declared,
            'installed': self.installed,
            'needs_build': self.needs_build,
        }


class VersionGate:
    """
    Compares declared and installed package versions.

    Example:
        gate = VersionGate(config)
        if gate.needs_build("/srv/pkgbuilds/foo"):
            ...
    """

    def __init__(
        self,
        config: PipelineConfig,
        makepkg: Optional[MakepkgClient] = None,
        pacman: Optional[PacmanClient] = None,
    ):
        """
        Initialize VersionGate.

        Args:
            config: Run configuration
            makepkg: MakepkgClient instance (creates new if None)
            pacman: PacmanClient instance (creates new if None)
        """
        self.config = config
        self.makepkg = makepkg or MakepkgClient()
        self.pacman = pacman or PacmanClient()

    def check(self, path: Union[str, Path]) -> GateDecision:
        """
        Fetch sources, read the descriptor and query the registry.

        Raises:
            DescriptorParseError: if the descriptor lacks pkgname or pkgver
        """
        source = PackageSource.from_path(path)

        # Updates the descriptor's pkgver for VCS sources; failure is not fatal
        self.makepkg.fetch_sources(source.path)

        descriptor = parse_descriptor(source.descriptor_path(self.config.descriptor))
        declared = descriptor.full_version(self.config.release)
        installed = self.pacman.installed_version(descriptor.name)

        decision = GateDecision(
            package=descriptor.name,
            path=source.path,
            declared=declared,
            installed=installed,
        )
        logger.debug(
            f"{descriptor.name}: declared {declared}, installed {installed or 'none'}"
        )
        return decision

    def needs_build(self, path: Union[str, Path]) -> bool:
        """True if the declared version-release differs from the installed one."""
        return self.check(path).needs_build
