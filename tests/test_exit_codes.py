"""
Tests for exit codes and the CommandError hierarchy.
"""

from repobuilder.exit_codes import (
    BUILD_FAILED,
    CONFIG_ERROR,
    DATA_ERROR,
    GENERAL_ERROR,
    INTERRUPTED,
    NO_PACKAGES_FOUND,
    PERMISSION_ERROR,
    REGISTRATION_FAILED,
    BuildFailureError,
    CommandError,
    ConfigError,
    DescriptorParseError,
    DiscoveryError,
    RegistrationError,
    get_exit_code_for_exception,
)


class TestCommandErrors:
    """Each error carries its own exit code."""

    def test_exit_codes(self):
        assert DiscoveryError().exit_code == NO_PACKAGES_FOUND
        assert DescriptorParseError("bad").exit_code == DATA_ERROR
        assert BuildFailureError("foo").exit_code == BUILD_FAILED
        assert RegistrationError("foo.pkg.tar.zst").exit_code == REGISTRATION_FAILED
        assert ConfigError("bad").exit_code == CONFIG_ERROR

    def test_build_failure_message(self):
        error = BuildFailureError("foo", path="/build/foo")

        assert str(error) == "foo failed to build"
        assert error.path == "/build/foo"

    def test_registration_message(self):
        error = RegistrationError("foo-1.0-1-any.pkg.tar.zst", package="foo")

        assert str(error) == "cannot register package foo-1.0-1-any.pkg.tar.zst (from foo)"
        assert str(RegistrationError("x.pkg.tar.zst")) == "cannot register package x.pkg.tar.zst"


class TestGetExitCode:
    """Tests for get_exit_code_for_exception."""

    def test_command_error_uses_own_code(self):
        assert get_exit_code_for_exception(CommandError("x", 42)) == 42

    def test_builtin_exceptions(self):
        assert get_exit_code_for_exception(KeyboardInterrupt()) == INTERRUPTED
        assert get_exit_code_for_exception(PermissionError()) == PERMISSION_ERROR

    def test_unknown_exception(self):
        assert get_exit_code_for_exception(RuntimeError("boom")) == GENERAL_ERROR
