"""GnuPG client for repobuilder: detached package signatures."""

from pathlib import Path
from typing import Optional, Union
import logging

from .command_runner import CommandRunner

logger = logging.getLogger(__name__)


class GpgClient:
    """Creates detached signatures with the user's default key."""

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner = runner or CommandRunner()

    def detach_sign(self, path: Union[str, Path]) -> bool:
        """
        Write {path}.sig next to the file.

        Returns:
            True if gpg exited successfully
        """
        path = Path(path)
        result = self.runner.run(["gpg", "--detach-sign", path.name], cwd=path.parent)
        if not result.ok:
            logger.error(f"gpg --detach-sign failed for {path.name} (exit {result.status})")
        return result.ok
