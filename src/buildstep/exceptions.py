"""Custom exceptions for the docker build step.

This module defines a hierarchy of custom exceptions for better error
categorization. Each exception carries the process exit code that the
command line entry points report for it.
"""

EXIT_SUCCESS = 0
EXIT_UNKNOWN = 1
EXIT_BUILD_FAILED = 2
EXIT_DAEMON_UNAVAILABLE = 3
EXIT_INTERRUPTED = 130


class BuildStepError(Exception):
    """Base exception for all build step errors.

    Parameters
    ----------
    message : str
        Error message describing what went wrong.
    details : dict, optional
        Additional structured information about the error.

    Attributes
    ----------
    message : str
        The error message.
    details : dict
        Dictionary containing additional error context.
    exit_code : int
        Exit code reported by the command line entry point.
    """

    exit_code = EXIT_UNKNOWN

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        """Format error message with optional details.

        Returns
        -------
        str
            Formatted error message.
        """
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigError(BuildStepError):
    """Configuration loading or validation error.

    Raised when:
    - A configuration file contains invalid YAML
    - A configuration value has the wrong type
    """

    pass


class ValidationError(BuildStepError):
    """Input validation error.

    Raised when:
    - Required command line options are missing
    - The image tag does not match the image reference grammar
    - The Dockerfile does not exist
    - DOCKER_AUTH_CONFIG is not a JSON object
    """

    pass


class DaemonUnavailableError(BuildStepError):
    """The Docker daemon cannot be reached.

    Raised when `docker info` fails or the docker binary is missing.
    """

    exit_code = EXIT_DAEMON_UNAVAILABLE


class BuildFailedError(BuildStepError):
    """`docker build` exited with a non-zero status.

    Parameters
    ----------
    message : str
        Error message describing the failure.
    returncode : int, optional
        Exit status reported by docker.

    Attributes
    ----------
    returncode : int or None
        Exit status reported by docker.
    """

    exit_code = EXIT_BUILD_FAILED

    def __init__(self, message: str, returncode: int = None):
        details = {}
        if returncode is not None:
            details["exit_code"] = returncode

        super().__init__(message, details)
        self.returncode = returncode
