"""Parser configuration for the build command."""

import argparse


def register_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the build step arguments.

    ``-t`` and ``-f`` are required but checked after parsing, so that a
    missing tag and a missing Dockerfile are both reported.

    Parameters
    ----------
    parser : argparse.ArgumentParser
        Top-level parser of the docker-build entry point
    """
    parser.add_argument(
        "-t",
        "--tag",
        help="Image reference to build, e.g. registry.example.com/team/app:1.0 (required)",
    )
    parser.add_argument(
        "-f",
        "--file",
        dest="dockerfile",
        help="Path to Dockerfile; its directory is the build context (required)",
    )
    parser.add_argument(
        "-s",
        "--squash",
        action="store_true",
        help="Squash newly built layers (needs an experimental daemon)",
    )
    parser.add_argument(
        "-c",
        "--cache",
        action="store_true",
        help="Warm the layer cache by pulling :latest from the registry variables",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress docker build output",
    )
