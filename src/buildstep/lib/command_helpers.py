"""
Command Helper Functions.

This module provides helpers shared by the build step commands.

Functions
---------
get_docker_config : Extract Docker client configuration with defaults
get_registry_variables : Get the cache registry variable names
create_docker_cli : Build a DockerCLI from the command context
handle_dry_run : Handle dry-run mode with consistent messaging
"""

from typing import Any, TypedDict

from buildstep.config.loader import DEFAULT_REGISTRY_VARIABLES
from buildstep.lib.docker import DockerCLI
from buildstep.lib.output import info


class CommandContext(TypedDict):
    """
    Type-safe command context dictionary.

    Attributes
    ----------
    config : dict
        Loaded configuration dictionary.
    verbose : bool
        Enable verbose output.
    dry_run : bool
        Simulate actions without executing them.
    args : argparse.Namespace
        Parsed command-line arguments.
    """

    config: dict
    verbose: bool
    dry_run: bool
    args: object  # argparse.Namespace


def get_docker_config(config: dict[str, Any]) -> dict[str, Any]:
    """
    Extract Docker configuration with defaults.

    Parameters
    ----------
    config : dict
        Configuration dictionary.

    Returns
    -------
    dict
        Dict with keys: binary, host
    """
    docker = config.get("docker", {})
    return {
        "binary": docker.get("binary") or "docker",
        "host": docker.get("host") or None,
    }


def get_registry_variables(config: dict[str, Any]) -> list[str]:
    """Get the environment variable names that hold cache registry URLs."""
    cache = config.get("cache", {})
    return list(cache.get("registry_variables", DEFAULT_REGISTRY_VARIABLES))


def create_docker_cli(ctx: CommandContext) -> DockerCLI:
    """Create a DockerCLI from the context configuration."""
    docker = get_docker_config(ctx["config"] or {})
    return DockerCLI(binary=docker["binary"], host=docker["host"], verbose=ctx["verbose"])


def handle_dry_run(ctx: CommandContext, message: str, details: dict = None) -> bool:
    """
    Handle dry-run mode with consistent messaging.

    Parameters
    ----------
    ctx : CommandContext
        Command context dictionary.
    message : str
        Main action description.
    details : dict, optional
        Additional details to display.

    Returns
    -------
    bool
        True if in dry-run mode (caller should return early), False otherwise.

    Examples
    --------
    >>> if handle_dry_run(ctx, "Build image", {"tag": "app:1"}):
    ...     return 0
    """
    if not ctx.get("dry_run"):
        return False

    info(f"DRY RUN: {message}")

    if details:
        for key, value in details.items():
            info(f"  {key}: {value}")

    return True
