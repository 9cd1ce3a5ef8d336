"""Layer cache warm-up from registry repositories."""

import logging
from collections.abc import Iterable, Mapping

from buildstep.exceptions import ValidationError
from buildstep.lib.docker import DockerCLI
from buildstep.lib.output import info, warning
from buildstep.lib.reference import latest_of

logger = logging.getLogger(__name__)


def collect_candidates(environ: Mapping[str, str], names: Iterable[str]) -> list[str]:
    """Gather repository URLs to warm the cache from.

    Unset and empty variables are skipped silently. Values that are not a
    valid untagged repository reference are skipped with a warning. The
    first occurrence of a repeated URL wins.

    Parameters
    ----------
    environ : Mapping[str, str]
        Environment to read from
    names : Iterable[str]
        Variable names, in priority order

    Returns
    -------
    list[str]
        ``<repository>:latest`` references to pull
    """
    candidates = []
    for name in names:
        value = (environ.get(name) or "").strip()
        if not value:
            continue

        try:
            image = latest_of(value)
        except ValidationError as e:
            warning(f"Ignoring {name}: {e}")
            continue

        if image not in candidates:
            candidates.append(image)

    logger.debug("Cache candidates: %s", candidates)
    return candidates


def warm_cache(docker: DockerCLI, candidates: Iterable[str]) -> list[str]:
    """Pull each candidate image, keeping the ones that succeed.

    Failures are reported and skipped; there are no retries.

    Parameters
    ----------
    docker : DockerCLI
        Docker client wrapper
    candidates : Iterable[str]
        Image references to pull

    Returns
    -------
    list[str]
        Successfully pulled references, in candidate order
    """
    sources = []
    for image in candidates:
        info(f"Pulling cache image {image}")
        result = docker.pull(image)
        if result.ok:
            sources.append(image)
            continue

        reason = result.stderr.strip().splitlines()
        warning(f"Could not pull {image}" + (f": {reason[-1]}" if reason else ""))

    return sources
