"""
External command gateway for repobuilder.

Every external tool (git, makepkg, makechrootpkg, pacman, repo-add, gpg)
is invoked through this one narrow interface:

    command in -> (status, stdout) out

This makes the whole pipeline:
- Easy to fake in tests (see FakeCommandRunner in tests/conftest.py)
- Consistent in error handling (failures are a status, never an exception)
- Isolated from business logic
"""

import shlex
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence, Union
from pathlib import Path
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Exit status and captured stdout of one external command."""
    status: int
    stdout: str = ""

    @property
    def ok(self) -> bool:
        return self.status == 0


class CommandRunner:
    """
    Runs external commands and reports their exit status.

    Commands block until they exit. No timeout is applied unless one is
    given explicitly, so a hung build blocks the run.

    Example:
        runner = CommandRunner()
        result = runner.run(["pacman", "-Q", "bash"])
        if result.ok:
            print(result.stdout)
    """

    def __init__(self, timeout: Optional[int] = None):
        """
        Initialize CommandRunner.

        Args:
            timeout: Command timeout in seconds (default: none)
        """
        self.timeout = timeout

    def run(
        self,
        cmd: Sequence[str],
        cwd: Optional[Union[str, Path]] = None,
        capture: bool = True,
    ) -> CommandResult:
        """
        Run a command.

        Args:
            cmd: Command and arguments
            cwd: Working directory
            capture: Capture stdout; when False the output goes straight
                to the terminal (long builds) and stdout is empty

        Returns:
            CommandResult with exit status and stdout
        """
        display = shlex.join(str(part) for part in cmd)
        logger.debug(f"Running: {display} (cwd={cwd})")

        try:
            result = subprocess.run(
                [str(part) for part in cmd],
                cwd=str(cwd) if cwd else None,
                stdout=subprocess.PIPE if capture else None,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"Command timed out: {display}")
            return CommandResult(status=-1)
        except OSError as e:
            # Missing executable, bad cwd, permission denied
            logger.error(f"Command failed to start: {display} - {e}")
            return CommandResult(status=127)

        if result.returncode != 0:
            logger.debug(f"Command exited {result.returncode}: {display}")

        return CommandResult(status=result.returncode, stdout=result.stdout or "")
