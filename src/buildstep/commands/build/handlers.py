"""Handler for the build command."""

import os

from buildstep.exceptions import EXIT_SUCCESS
from buildstep.lib.command_helpers import (
    CommandContext,
    create_docker_cli,
    get_registry_variables,
    handle_dry_run,
)
from buildstep.lib.docker import format_command
from buildstep.lib.output import header, info, success, warning

from .cache import collect_candidates, warm_cache
from .invocation import BuildPlan, build_command, collect_build_args, run_build
from .options import parse_options
from .preflight import ensure_daemon, resolve_squash


def handle(ctx: CommandContext) -> int:
    """Run the docker-build step.

    Validates options, checks the daemon, resolves squash support, warms
    the cache, then runs docker build. In dry-run mode no docker command is
    executed: squash stays as requested and every cache candidate is
    assumed pullable.

    Parameters
    ----------
    ctx : CommandContext
        Command context with config and args

    Returns
    -------
    int
        Exit code (0 for success)

    Raises
    ------
    ValidationError
        If the options are invalid
    DaemonUnavailableError
        If the Docker daemon cannot be reached
    BuildFailedError
        If docker build fails
    """
    config = ctx["config"] or {}
    dry_run = ctx["dry_run"]
    options = parse_options(ctx["args"])
    docker = create_docker_cli(ctx)

    header(f"Building {options.tag}")
    info(f"Dockerfile: {options.dockerfile}")
    info(f"Context: {options.context}")

    candidates = []
    if options.cache:
        candidates = collect_candidates(os.environ, get_registry_variables(config))

    if dry_run:
        squash = options.squash
        cache_sources = candidates
    else:
        ensure_daemon(docker)
        squash = resolve_squash(docker, options.squash)
        cache_sources = warm_cache(docker, candidates) if candidates else []

    if options.cache and not cache_sources:
        warning("No cache image available, building with --no-cache")

    plan = BuildPlan(
        options=options,
        squash=squash,
        cache_sources=tuple(cache_sources),
        build_args=collect_build_args(os.environ),
    )

    if handle_dry_run(
        ctx,
        f"Build image {options.tag}",
        {
            "squash": plan.squash,
            "cache": ", ".join(plan.cache_sources) or "disabled",
            "build args": ", ".join(name for name, _ in plan.build_args) or "none",
        },
    ):
        info(f"Would execute: {format_command(build_command(plan, docker.binary))}")
        return EXIT_SUCCESS

    run_build(docker, plan)

    success(f"Image built: {options.tag}")
    return EXIT_SUCCESS
