"""Parser configuration for the auth command."""

import argparse
from pathlib import Path


def register_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the auth config arguments.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        Top-level parser of the docker-auth-config entry point
    """
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Credential file to write (default: $DOCKER_CONFIG/config.json or ~/.docker/config.json)",
    )
