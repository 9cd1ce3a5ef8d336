"""Docker credential file operations."""

import json
import logging
import os
from pathlib import Path

from buildstep.exceptions import ValidationError

logger = logging.getLogger(__name__)

EMPTY_AUTH_CONFIG = "{}"
AUTH_FILE_MODE = 0o600


def write_auth_config(value: str, path: Path) -> Path:
    """
    Write a docker credential configuration file.

    Parameters
    ----------
    value : str
        Contents of DOCKER_AUTH_CONFIG. Empty writes an empty JSON object.
    path : Path
        Destination file; parent directories are created.

    Returns
    -------
    Path
        The written path.

    Raises
    ------
    ValidationError
        If a non-empty value is not a JSON object.
    """
    content = value.strip() if value else ""
    if content:
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValidationError(f"DOCKER_AUTH_CONFIG is not valid JSON: {e.msg}", {"line": e.lineno})
        if not isinstance(parsed, dict):
            raise ValidationError("DOCKER_AUTH_CONFIG must be a JSON object")
    else:
        content = EMPTY_AUTH_CONFIG

    path.parent.mkdir(parents=True, exist_ok=True)
    # created private; fchmod narrows a file that already existed
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, AUTH_FILE_MODE)
    os.fchmod(fd, AUTH_FILE_MODE)
    with os.fdopen(fd, "w") as f:
        f.write(content + "\n")

    logger.debug("Wrote %d bytes to %s", len(content) + 1, path)
    return path
