"""
Infrastructure layer for repobuilder.

Contains abstractions for external systems:
- CommandRunner: the single command gateway (status + stdout)
- GitClient: source-control reset and update
- MakepkgClient: makepkg, makechrootpkg, mkarchroot, arch-nspawn
- PacmanClient: installed-package query and repo-add
- GpgClient: detached signatures

These provide clean interfaces that can be mocked for testing.
"""

from .command_runner import CommandRunner, CommandResult
from .git_client import GitClient
from .makepkg_client import MakepkgClient
from .pacman_client import PacmanClient
from .gpg_client import GpgClient

__all__ = [
    'CommandRunner',
    'CommandResult',
    'GitClient',
    'MakepkgClient',
    'PacmanClient',
    'GpgClient',
]
