"""Handler for the auth command."""

import os

from buildstep.exceptions import EXIT_SUCCESS
from buildstep.lib.command_helpers import CommandContext, handle_dry_run
from buildstep.lib.output import success, warning
from buildstep.lib.paths import get_docker_config_file

from .operations import write_auth_config

AUTH_CONFIG_VARIABLE = "DOCKER_AUTH_CONFIG"


def handle(ctx: CommandContext) -> int:
    """Write DOCKER_AUTH_CONFIG to the docker credential file.

    Parameters
    ----------
    ctx : CommandContext
        Command context with args

    Returns
    -------
    int
        Exit code (0 for success)
    """
    args = ctx["args"]
    path = getattr(args, "output", None) or get_docker_config_file()
    value = os.environ.get(AUTH_CONFIG_VARIABLE, "")

    if not value.strip():
        warning(f"{AUTH_CONFIG_VARIABLE} is empty, writing an empty credential file")

    if handle_dry_run(ctx, f"Write docker credentials to {path}"):
        return EXIT_SUCCESS

    write_auth_config(value, path)
    success(f"Docker credentials written to {path}")
    return EXIT_SUCCESS
