"""
Standard exit codes for repobuilder commands.

Following Unix/POSIX conventions for command-line tools.
"""
from typing import Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
NO_PACKAGES_FOUND = 64   # Build root is empty or unlistable
CONFIG_ERROR = 66        # Configuration file error
PERMISSION_ERROR = 67    # Insufficient permissions
DATA_ERROR = 70          # Malformed build descriptor or other bad input
BUILD_FAILED = 72        # A package failed to build (run not forced)
REGISTRATION_FAILED = 73 # repo-add failed after an artifact was copied
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': GENERAL_ERROR,
    'PermissionError': PERMISSION_ERROR,
    'ValueError': DATA_ERROR,
    'KeyError': DATA_ERROR,
    'JSONDecodeError': DATA_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: Exception) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    if isinstance(exc, CommandError):
        return exc.exit_code
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class DiscoveryError(CommandError):
    """Raised when the build root holds no package sources."""
    def __init__(self, message: str = "No package sources found"):
        super().__init__(message, NO_PACKAGES_FOUND)


class DescriptorParseError(CommandError):
    """Raised when a build descriptor lacks its name or version."""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, DATA_ERROR)
        self.path = path


class BuildFailureError(CommandError):
    """Raised when a package fails to build and the run is not forced."""
    def __init__(self, package: str, path: Optional[str] = None):
        super().__init__(f"{package} failed to build", BUILD_FAILED)
        self.package = package
        self.path = path


class RegistrationError(CommandError):
    """Raised when an artifact cannot be added to the repository index."""
    def __init__(self, filename: str, package: Optional[str] = None):
        message = f"cannot register package {filename}"
        if package:
            message += f" (from {package})"
        super().__init__(message, REGISTRATION_FAILED)
        self.filename = filename
        self.package = package


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)
