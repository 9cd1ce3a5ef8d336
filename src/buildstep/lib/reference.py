"""
Image reference grammar.

A single grammar validates both the ``-t`` image tag and the registry
repositories used for cache warm-up::

    reference := [registry "/"] path [":" tag]
    registry  := (host-with-dot | "localhost") [":" port] | host ":" port
    path      := segment ("/" segment)*
    segment   := [a-z0-9]+ (separator [a-z0-9]+)*     separator: "." "_" "__" "-"+
    tag       := [A-Za-z0-9_][A-Za-z0-9_.-]{0,127}

Digests (``@sha256:...``) are not accepted.
"""

import re
from dataclasses import dataclass

from buildstep.exceptions import ValidationError

_HOST_COMPONENT = r"[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?"
_REGISTRY = (
    rf"(?:{_HOST_COMPONENT}(?:\.{_HOST_COMPONENT})+|localhost)(?::[0-9]+)?"
    rf"|{_HOST_COMPONENT}:[0-9]+"
)
_SEGMENT = r"[a-z0-9]+(?:(?:[._]|__|-+)[a-z0-9]+)*"
_TAG = r"[A-Za-z0-9_][A-Za-z0-9_.-]{0,127}"

REFERENCE_PATTERN = re.compile(
    rf"(?:(?P<registry>{_REGISTRY})/)?"
    rf"(?P<path>{_SEGMENT}(?:/{_SEGMENT})*)"
    rf"(?::(?P<tag>{_TAG}))?"
)

LATEST_TAG = "latest"


@dataclass(frozen=True)
class ImageReference:
    """
    Parsed image reference.

    Attributes
    ----------
    registry : str or None
        Registry host with optional port.
    path : str
        Repository path below the registry.
    tag : str or None
        Tag suffix, without the colon.
    """

    registry: str | None
    path: str
    tag: str | None

    @property
    def repository(self) -> str:
        """Registry and path without the tag."""
        if self.registry:
            return f"{self.registry}/{self.path}"
        return self.path

    def with_tag(self, tag: str) -> str:
        return f"{self.repository}:{tag}"

    def __str__(self):
        if self.tag:
            return self.with_tag(self.tag)
        return self.repository


def parse_reference(value: str) -> ImageReference | None:
    """
    Parse an image reference.

    Parameters
    ----------
    value : str
        Candidate reference, e.g. ``registry.example.com:5000/team/app:1.2``.

    Returns
    -------
    ImageReference or None
        Parsed reference, or None if the value does not match the grammar.
    """
    if not value:
        return None
    match = REFERENCE_PATTERN.fullmatch(value)
    if match is None:
        return None
    return ImageReference(
        registry=match.group("registry"),
        path=match.group("path"),
        tag=match.group("tag"),
    )


def is_valid_reference(value: str) -> bool:
    """Return True if value matches the image reference grammar."""
    return parse_reference(value) is not None


def validate_reference(value: str) -> str:
    """
    Validate an image reference.

    Parameters
    ----------
    value : str
        Image reference to validate.

    Returns
    -------
    str
        The unchanged value.

    Raises
    ------
    ValidationError
        If the value does not match the image reference grammar.
    """
    if not is_valid_reference(value):
        raise ValidationError(f"Invalid image tag format: {value}")
    return value


def latest_of(repository: str) -> str:
    """
    Return the ``:latest`` reference for an untagged repository URL.

    Parameters
    ----------
    repository : str
        Repository URL without a tag.

    Returns
    -------
    str
        ``<repository>:latest``

    Raises
    ------
    ValidationError
        If the repository is invalid or already carries a tag.

    Examples
    --------
    >>> latest_of("registry.gitlab.com/group/project")
    'registry.gitlab.com/group/project:latest'
    """
    reference = parse_reference(repository)
    if reference is None:
        raise ValidationError(f"Invalid repository URL: {repository}")
    if reference.tag:
        raise ValidationError(
            f"Repository URL must not include a tag: {repository}",
            {"tag": reference.tag},
        )
    return reference.with_tag(LATEST_TAG)
