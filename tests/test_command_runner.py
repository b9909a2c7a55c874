"""
Tests for the external command gateway.

These start real (trivial) processes using the running interpreter.
"""

import sys

from repobuilder.infra.command_runner import CommandRunner, CommandResult


class TestCommandResult:
    """Tests for CommandResult dataclass."""

    def test_ok(self):
        assert CommandResult(status=0).ok is True
        assert CommandResult(status=1).ok is False
        assert CommandResult(status=-1).ok is False

    def test_default_stdout(self):
        assert CommandResult(status=0).stdout == ""


class TestCommandRunner:
    """Tests for CommandRunner."""

    def test_captures_stdout(self):
        runner = CommandRunner()
        result = runner.run([sys.executable, "-c", "print('hello')"])

        assert result.ok
        assert result.stdout.strip() == "hello"

    def test_reports_exit_status(self):
        runner = CommandRunner()
        result = runner.run([sys.executable, "-c", "import sys; sys.exit(3)"])

        assert result.status == 3
        assert not result.ok

    def test_runs_in_cwd(self, tmp_path):
        runner = CommandRunner()
        result = runner.run([sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path)

        assert result.stdout.strip() == str(tmp_path.resolve())

    def test_missing_executable_is_a_status(self, tmp_path):
        """A command that cannot start is reported, not raised."""
        runner = CommandRunner()
        result = runner.run([str(tmp_path / "no-such-tool")])

        assert result.status == 127
        assert result.stdout == ""

    def test_uncaptured_output_is_empty(self):
        runner = CommandRunner()
        result = runner.run([sys.executable, "-c", "print('streamed')"], capture=False)

        assert result.ok
        assert result.stdout == ""

    def test_timeout(self):
        runner = CommandRunner(timeout=1)
        result = runner.run([sys.executable, "-c", "import time; time.sleep(5)"])

        assert result.status == -1

    def test_no_timeout_by_default(self):
        assert CommandRunner().timeout is None
