"""
Docker CLI process invocation.

All interaction with the Docker daemon goes through :class:`DockerCLI`, which
runs the ``docker`` binary with ``subprocess.run`` and returns a
:class:`CommandResult` instead of raising on non-zero exit status.
"""

import logging
import os
import subprocess
from dataclasses import dataclass

from buildstep.exceptions import DaemonUnavailableError
from buildstep.lib.output import info

logger = logging.getLogger(__name__)

MASK = "***"


@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of one docker invocation.

    Attributes
    ----------
    returncode : int
        Process exit status.
    stdout : str
        Captured standard output (empty when not captured).
    stderr : str
        Captured standard error (empty when not captured).
    """

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def format_command(cmd: list[str]) -> str:
    """
    Render a command for display with build argument values masked.

    Parameters
    ----------
    cmd : list[str]
        Command and arguments.

    Returns
    -------
    str
        Space separated command line.

    Examples
    --------
    >>> format_command(["docker", "build", "--build-arg", "TOKEN=secret", "."])
    'docker build --build-arg TOKEN=*** .'
    """
    rendered = []
    mask_next = False
    for arg in cmd:
        if mask_next and "=" in arg:
            name = arg.split("=", 1)[0]
            arg = f"{name}={MASK}"
        mask_next = arg == "--build-arg"
        rendered.append(arg)
    return " ".join(rendered)


class DockerCLI:
    """
    Thin wrapper around the docker binary.

    Parameters
    ----------
    binary : str, optional
        Docker executable name or path, by default "docker".
    host : str or None, optional
        Daemon address exported as DOCKER_HOST to child processes.
    verbose : bool, optional
        Echo every command before running it.
    """

    def __init__(self, binary: str = "docker", host: str | None = None, verbose: bool = False):
        self.binary = binary
        self.host = host
        self.verbose = verbose

    def _env(self) -> dict:
        env = os.environ.copy()
        if self.host:
            env["DOCKER_HOST"] = self.host
        return env

    def command(self, *args: str) -> list[str]:
        return [self.binary, *args]

    def run(self, args: list[str], capture: bool = True) -> CommandResult:
        """
        Run a docker subcommand.

        Parameters
        ----------
        args : list[str]
            Arguments following the docker binary.
        capture : bool, optional
            Capture stdout/stderr instead of streaming to the terminal.

        Returns
        -------
        CommandResult
            Exit status and captured output.

        Raises
        ------
        DaemonUnavailableError
            If the docker binary cannot be found.
        """
        cmd = self.command(*args)
        if self.verbose:
            info(f"Executing: {format_command(cmd)}")
        logger.debug("Running %s", format_command(cmd))

        try:
            result = subprocess.run(
                cmd,
                capture_output=capture,
                text=True,
                check=False,
                env=self._env(),
            )
        except FileNotFoundError:
            raise DaemonUnavailableError(
                "Docker CLI not found. Install docker or set docker.binary",
                {"binary": self.binary},
            )

        logger.debug("%s exited with %s", args[0] if args else self.binary, result.returncode)
        return CommandResult(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )

    def ping(self) -> CommandResult:
        """Run ``docker info``; succeeds only when the daemon answers."""
        return self.run(["info"])

    def server_experimental(self) -> bool:
        """Return True if the daemon reports experimental features enabled."""
        result = self.run(["version", "--format", "{{.Server.Experimental}}"])
        return result.ok and result.stdout.strip().lower() == "true"

    def build_supports(self, option: str) -> bool:
        """Return True if ``docker build --help`` lists the given option."""
        result = self.run(["build", "--help"])
        if not result.ok:
            return False
        # Option names are the first one or two words of a help line ("-t, --tag list")
        return any(option in line.split()[:2] for line in result.stdout.splitlines())

    def pull(self, image: str) -> CommandResult:
        return self.run(["pull", image])

    def build(self, args: list[str]) -> CommandResult:
        return self.run(["build", *args], capture=False)
