"""Assembly and execution of the docker build command."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from buildstep.exceptions import BuildFailedError
from buildstep.lib.docker import DockerCLI

from .options import BuildOptions

logger = logging.getLogger(__name__)

BUILD_ARG_PREFIX = "DOCKER_BUILD_ARG_"


@dataclass(frozen=True)
class BuildPlan:
    """Resolved state of a build after preflight checks and cache warm-up.

    Cache is in effect exactly when ``cache_sources`` is non-empty.
    """

    options: BuildOptions
    squash: bool = False
    cache_sources: tuple[str, ...] = ()
    build_args: tuple[tuple[str, str], ...] = ()

    @property
    def cache(self) -> bool:
        return bool(self.cache_sources)


def collect_build_args(environ: Mapping[str, str]) -> tuple[tuple[str, str], ...]:
    """Collect build arguments from ``DOCKER_BUILD_ARG_<NAME>`` variables.

    Parameters
    ----------
    environ : Mapping[str, str]
        Environment to read from

    Returns
    -------
    tuple[tuple[str, str], ...]
        (NAME, value) pairs sorted by name; a bare prefix is ignored
    """
    pairs = []
    for key, value in environ.items():
        if not key.startswith(BUILD_ARG_PREFIX):
            continue
        name = key[len(BUILD_ARG_PREFIX) :]
        if not name:
            continue
        pairs.append((name, value))
    return tuple(sorted(pairs))


def build_arguments(plan: BuildPlan) -> list[str]:
    """Arguments following ``docker build`` for a plan.

    Parameters
    ----------
    plan : BuildPlan
        Resolved build plan

    Returns
    -------
    list[str]
        Flags, tag, Dockerfile and context directory
    """
    args = ["--pull", "--compress"]
    if plan.squash:
        args.append("--squash")
    if plan.options.quiet:
        args.append("--quiet")

    for name, value in plan.build_args:
        args.extend(["--build-arg", f"{name}={value}"])

    if plan.cache:
        for image in plan.cache_sources:
            args.extend(["--cache-from", image])
    else:
        args.append("--no-cache")

    args.extend(
        [
            "-t",
            plan.options.tag,
            "-f",
            str(plan.options.dockerfile),
            str(plan.options.context),
        ]
    )
    return args


def build_command(plan: BuildPlan, binary: str = "docker") -> list[str]:
    """Full docker build command line for a plan."""
    return [binary, "build", *build_arguments(plan)]


def run_build(docker: DockerCLI, plan: BuildPlan) -> None:
    """Run docker build, streaming its output.

    Raises
    ------
    BuildFailedError
        If docker build exits non-zero
    """
    result = docker.build(build_arguments(plan))
    if not result.ok:
        raise BuildFailedError(f"Docker build failed for {plan.options.tag}", result.returncode)
    logger.debug("Build of %s finished", plan.options.tag)
