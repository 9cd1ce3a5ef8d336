"""Build command: the docker-build CI step.

Usage:
    docker-build -t <tag> -f <Dockerfile> [-s] [-c] [-q]
"""

from .handlers import handle
from .parser import register_arguments

__all__ = ["register_arguments", "handle"]
