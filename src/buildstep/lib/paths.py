"""XDG-compliant path management for the docker build step."""

import os
from pathlib import Path

APP_NAME = "docker-build-step"
PROJECT_CONFIG_NAME = "docker-build.yaml"


def get_config_dir() -> Path:
    """
    Get the configuration directory following XDG Base Directory spec.

    Returns
    -------
    Path
        Path to ~/.config/docker-build-step/ or $XDG_CONFIG_HOME/docker-build-step/.
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        base = Path(xdg_config_home)
    else:
        base = Path.home() / ".config"

    return base / APP_NAME


def get_config_file() -> Path:
    """
    Get path to the user configuration file.

    Returns
    -------
    Path
        Path to config.yaml in the configuration directory.
    """
    return get_config_dir() / "config.yaml"


def get_project_config_file(project_dir: Path | None = None) -> Path:
    """
    Get path to project-local configuration file.

    Parameters
    ----------
    project_dir : Path or None, optional
        Directory to look in, by default the current working directory.

    Returns
    -------
    Path
        Path to docker-build.yaml in the project directory.
    """
    return (project_dir or Path.cwd()) / PROJECT_CONFIG_NAME


def get_docker_config_file() -> Path:
    """
    Get path to the Docker client credential file.

    Honours DOCKER_CONFIG the same way the docker CLI does.

    Returns
    -------
    Path
        Path to $DOCKER_CONFIG/config.json or ~/.docker/config.json.
    """
    docker_config = os.environ.get("DOCKER_CONFIG")
    if docker_config:
        return Path(docker_config) / "config.json"
    return Path.home() / ".docker" / "config.json"
