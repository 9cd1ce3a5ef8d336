"""Auth command: write DOCKER_AUTH_CONFIG to the docker credential file."""

from .handlers import handle
from .parser import register_arguments

__all__ = ["register_arguments", "handle"]
