"""
Tests for the infrastructure clients.

Each client is exercised against FakeCommandRunner to check the exact
command line, working directory and result interpretation.
"""

from repobuilder.infra.git_client import GitClient
from repobuilder.infra.gpg_client import GpgClient
from repobuilder.infra.makepkg_client import MakepkgClient
from repobuilder.infra.pacman_client import PacmanClient

from conftest import FakeCommandRunner


class TestGitClient:
    """Tests for GitClient."""

    def test_checkout_clean(self, tmp_path):
        runner = FakeCommandRunner()
        client = GitClient(runner)

        assert client.checkout_clean(tmp_path) is True
        assert runner.calls[0].cmd == ["git", "checkout", "--", "."]
        assert runner.calls[0].cwd == str(tmp_path)

    def test_force_pull(self, tmp_path):
        runner = FakeCommandRunner()
        client = GitClient(runner)

        client.pull(tmp_path, force=True)

        assert runner.commands() == [["git", "pull", "-f"]]

    def test_pull_failure(self, tmp_path):
        runner = FakeCommandRunner().on("git", status=1)
        client = GitClient(runner)

        assert client.pull(tmp_path) is False
        assert runner.commands() == [["git", "pull"]]


class TestMakepkgClient:
    """Tests for MakepkgClient."""

    def test_fetch_sources(self, tmp_path):
        runner = FakeCommandRunner()
        client = MakepkgClient(runner)

        assert client.fetch_sources(tmp_path) is True
        call = runner.calls[0]
        assert call.cmd == ["makepkg", "--nobuild", "--nodeps"]
        assert call.cwd == str(tmp_path)
        assert call.capture is False

    def test_build_on_host(self, tmp_path):
        runner = FakeCommandRunner()
        client = MakepkgClient(runner)

        assert client.build_on_host(tmp_path) is True
        assert runner.commands() == [["makepkg", "--syncdeps"]]

    def test_build_in_chroot(self, tmp_path):
        runner = FakeCommandRunner()
        client = MakepkgClient(runner)

        client.build_in_chroot(tmp_path / "pkg", tmp_path / "chroot")

        assert runner.commands() == [
            ["makechrootpkg", "-c", "-u", "-r", str(tmp_path / "chroot")]
        ]
        assert runner.calls[0].cwd == str(tmp_path / "pkg")

    def test_build_failure(self, tmp_path):
        runner = FakeCommandRunner().on("makechrootpkg", status=2)
        client = MakepkgClient(runner)

        assert client.build_in_chroot(tmp_path, tmp_path) is False

    def test_create_chroot(self, tmp_path):
        runner = FakeCommandRunner()
        client = MakepkgClient(runner)

        client.create_chroot(tmp_path / "root", ["base-devel", "git"])

        assert runner.commands() == [["mkarchroot", str(tmp_path / "root"), "base-devel", "git"]]

    def test_update_chroot(self, tmp_path):
        runner = FakeCommandRunner()
        client = MakepkgClient(runner)

        client.update_chroot(tmp_path / "root", tmp_path / "pacman.conf")

        assert runner.commands() == [[
            "arch-nspawn", "-C", str(tmp_path / "pacman.conf"), str(tmp_path / "root"),
            "pacman", "-Syyu", "--noconfirm",
        ]]

    def test_update_chroot_interactive(self, tmp_path):
        runner = FakeCommandRunner()
        client = MakepkgClient(runner)

        client.update_chroot(tmp_path / "root", tmp_path / "pacman.conf", noconfirm=False)

        assert "--noconfirm" not in runner.commands()[0]


class TestPacmanClient:
    """Tests for PacmanClient."""

    def test_installed_version(self):
        runner = FakeCommandRunner().on("pacman", stdout="foo 1.2.3-1\n")
        client = PacmanClient(runner)

        assert client.installed_version("foo") == "1.2.3-1"
        assert runner.commands() == [["pacman", "-Q", "foo"]]

    def test_not_installed(self):
        runner = FakeCommandRunner().on("pacman", status=1, stdout="")
        client = PacmanClient(runner)

        assert client.query("foo") is None
        assert client.installed_version("foo") is None

    def test_malformed_query_output(self):
        runner = FakeCommandRunner().on("pacman", stdout="foo\n")
        client = PacmanClient(runner)

        assert client.installed_version("foo") is None

    def test_repo_add(self, tmp_path):
        runner = FakeCommandRunner()
        client = PacmanClient(runner)

        assert client.repo_add(tmp_path, "myrepo", "foo-1.0-1-any.pkg.tar.zst") is True
        assert runner.commands() == [
            ["repo-add", "-R", "-p", "myrepo.db.tar.gz", "foo-1.0-1-any.pkg.tar.zst"]
        ]
        assert runner.calls[0].cwd == str(tmp_path)

    def test_repo_add_failure(self, tmp_path):
        runner = FakeCommandRunner().on("repo-add", status=1)
        client = PacmanClient(runner)

        assert client.repo_add(tmp_path, "myrepo", "foo.pkg.tar.zst") is False


class TestGpgClient:
    """Tests for GpgClient."""

    def test_detach_sign(self, tmp_path):
        runner = FakeCommandRunner()
        client = GpgClient(runner)
        target = tmp_path / "foo-1.0-1-any.pkg.tar.zst"

        assert client.detach_sign(target) is True
        assert runner.commands() == [["gpg", "--detach-sign", target.name]]
        assert runner.calls[0].cwd == str(tmp_path)

    def test_detach_sign_failure(self, tmp_path):
        runner = FakeCommandRunner().on("gpg", status=2)
        client = GpgClient(runner)

        assert client.detach_sign(tmp_path / "foo.pkg.tar.zst") is False
