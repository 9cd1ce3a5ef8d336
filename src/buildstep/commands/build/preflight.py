"""Daemon precondition checks for the build command."""

import logging

from buildstep.exceptions import DaemonUnavailableError
from buildstep.lib.docker import DockerCLI
from buildstep.lib.output import warning

logger = logging.getLogger(__name__)

SQUASH_OPTION = "--squash"


def ensure_daemon(docker: DockerCLI) -> None:
    """Verify the Docker daemon answers ``docker info``.

    Parameters
    ----------
    docker : DockerCLI
        Docker client wrapper

    Raises
    ------
    DaemonUnavailableError
        If the daemon is unreachable or the docker binary is missing
    """
    result = docker.ping()
    if result.ok:
        return

    details = {}
    if docker.host:
        details["docker_host"] = docker.host
    reason = result.stderr.strip().splitlines()
    if reason:
        details["reason"] = reason[-1]
    raise DaemonUnavailableError("Docker daemon is not reachable", details)


def resolve_squash(docker: DockerCLI, requested: bool) -> bool:
    """Decide whether ``--squash`` can be passed to docker build.

    Squash needs a daemon running with experimental features and a CLI that
    knows the option. Either one missing downgrades squash to disabled.

    Parameters
    ----------
    docker : DockerCLI
        Docker client wrapper
    requested : bool
        Whether -s was given

    Returns
    -------
    bool
        True if squash stays enabled
    """
    if not requested:
        return False

    if not docker.server_experimental():
        warning("Squash disabled: Docker daemon is not running in experimental mode")
        return False

    if not docker.build_supports(SQUASH_OPTION):
        warning(f"Squash disabled: docker build does not support {SQUASH_OPTION}")
        return False

    logger.debug("Squash enabled")
    return True
