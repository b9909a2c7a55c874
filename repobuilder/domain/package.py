"""
Package domain objects for repobuilder.

Provides:
- PackageSource: a directory holding a build descriptor
- BuildOutcome: the result of one build attempt
- Artifact: a built package file waiting to be published
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Union


@dataclass(frozen=True)
class PackageSource:
    """
    A package source directory, identified by its path.

    The identifier is the directory's name under the build root, or the
    build root's own name in single-package mode.
    """
    path: Path

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "PackageSource":
        return cls(path=Path(path))

    @property
    def identifier(self) -> str:
        return self.path.name

    def descriptor_path(self, descriptor: str = "PKGBUILD") -> Path:
        return self.path / descriptor

    def artifacts(self, extension: str) -> List["Artifact"]:
        """Build artifacts lying directly in the source directory."""
        if not self.path.is_dir():
            return []
        found = [
            Artifact(path=entry)
            for entry in self.path.iterdir()
            if entry.is_file() and entry.name.endswith(extension)
        ]
        return sorted(found, key=lambda artifact: artifact.filename)


@dataclass(frozen=True)
class BuildOutcome:
    """Result of building one package source."""
    identifier: str
    path: Path
    succeeded: bool


@dataclass(frozen=True)
class Artifact:
    """A built package file, identified in the repository by its filename."""
    path: Path

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def signature_filename(self) -> str:
        return f"{self.filename}.sig"
