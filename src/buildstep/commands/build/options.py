"""Validated build options."""

from dataclasses import dataclass
from pathlib import Path

from buildstep.exceptions import ValidationError
from buildstep.lib.reference import validate_reference


@dataclass(frozen=True)
class BuildOptions:
    """Options of one docker-build invocation.

    Attributes
    ----------
    tag : str
        Image reference to build
    dockerfile : Path
        Absolute path to the Dockerfile
    squash : bool
        Squash was requested with -s
    cache : bool
        Cache warm-up was requested with -c
    quiet : bool
        Pass --quiet to docker build
    """

    tag: str
    dockerfile: Path
    squash: bool = False
    cache: bool = False
    quiet: bool = False

    @property
    def context(self) -> Path:
        return self.dockerfile.parent


def parse_options(args) -> BuildOptions:
    """Validate parsed arguments into BuildOptions.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed arguments from the build parser

    Returns
    -------
    BuildOptions
        Validated options

    Raises
    ------
    ValidationError
        If -t or -f is missing, the tag is malformed, or the Dockerfile
        does not exist
    """
    tag = getattr(args, "tag", None)
    dockerfile = getattr(args, "dockerfile", None)

    missing = []
    if not tag:
        missing.append("Image tag (-t) is required")
    if not dockerfile:
        missing.append("Dockerfile (-f) is required")
    if missing:
        raise ValidationError("; ".join(missing))

    validate_reference(tag)

    dockerfile_path = Path(dockerfile).resolve()
    if not dockerfile_path.is_file():
        raise ValidationError(f"Dockerfile not found: {dockerfile_path}")

    return BuildOptions(
        tag=tag,
        dockerfile=dockerfile_path,
        squash=bool(getattr(args, "squash", False)),
        cache=bool(getattr(args, "cache", False)),
        quiet=bool(getattr(args, "quiet", False)),
    )
