"""
Shared fixtures for repobuilder tests.

FakeCommandRunner stands in for the external command gateway so that no
git, makepkg, pacman, repo-add or gpg process is ever started.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from repobuilder.config import PipelineConfig
from repobuilder.infra.command_runner import CommandResult


@dataclass
class Call:
    """One recorded command invocation."""
    cmd: List[str]
    cwd: Optional[str]
    capture: bool


class FakeCommandRunner:
    """
    Records commands and returns scripted results.

    Results are looked up by program name (cmd[0]); a handler, if set,
    is consulted first and may return None to fall through.
    """

    def __init__(self, handler: Optional[Callable] = None):
        self.handler = handler
        self.results: Dict[str, CommandResult] = {}
        self.calls: List[Call] = []

    def on(self, program: str, status: int = 0, stdout: str = "") -> "FakeCommandRunner":
        self.results[program] = CommandResult(status=status, stdout=stdout)
        return self

    def run(self, cmd, cwd=None, capture=True) -> CommandResult:
        cmd = [str(part) for part in cmd]
        self.calls.append(Call(cmd=cmd, cwd=str(cwd) if cwd else None, capture=capture))
        if self.handler:
            result = self.handler(cmd, Path(cwd) if cwd else None)
            if result is not None:
                return result
        return self.results.get(cmd[0], CommandResult(status=0))

    def commands(self, program: Optional[str] = None) -> List[List[str]]:
        return [call.cmd for call in self.calls if program is None or call.cmd[0] == program]


def write_pkgbuild(directory: Path, name: str, version: str = "1.0") -> Path:
    """Create a package source directory with a minimal PKGBUILD."""
    directory.mkdir(parents=True, exist_ok=True)
    descriptor = directory / "PKGBUILD"
    descriptor.write_text(
        f"# Maintainer: Test <test@example.com>\n"
        f"pkgname={name}\n"
        f"pkgver={version}\n"
        f"pkgrel=1\n"
        f"arch=('any')\n"
    )
    return directory


def artifact_name(name: str, version: str = "1.0") -> str:
    return f"{name}-{version}-1-any.pkg.tar.zst"


@pytest.fixture
def fake_runner():
    return FakeCommandRunner()


@pytest.fixture
def pipeline_config(tmp_path):
    """A run configuration rooted in a temporary directory."""
    build_root = tmp_path / "pkgbuilds"
    repo = tmp_path / "repo"
    build_root.mkdir()
    repo.mkdir()
    return PipelineConfig.from_options(
        build_root=build_root,
        chroot=tmp_path / "chroot",
        repo=repo,
        repo_name="testrepo",
        pacman_config=tmp_path / "pacman.conf",
    )
