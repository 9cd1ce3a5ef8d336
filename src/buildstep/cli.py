"""Command line entry points for the docker build step."""

import sys
import traceback
from pathlib import Path

from buildstep import __version__
from buildstep.config.loader import ConfigLoader
from buildstep.exceptions import EXIT_INTERRUPTED, EXIT_UNKNOWN, BuildStepError
from buildstep.lib.formatters import StepArgumentParser
from buildstep.lib.logger import setup_logger
from buildstep.lib.output import error, set_color_enabled


def _add_global_options(parser: StepArgumentParser) -> None:
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, help="Config file path (default: auto-detect)")
    parser.add_argument("--verbose", action="store_true", help="Echo docker commands, show tracebacks")
    parser.add_argument("--dry-run", action="store_true", help="Show what would happen")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")


def create_parser() -> StepArgumentParser:
    """
    Create the argument parser for ``docker-build``.

    Returns
    -------
    StepArgumentParser
        Configured argument parser.
    """
    from buildstep.commands import build

    parser = StepArgumentParser(
        prog="docker-build",
        description="Build a Docker image as a CI pipeline step",
        epilog=(
            "Environment:\n"
            "  DOCKER_BUILD_ARG_<NAME>  passed as --build-arg NAME=<value>\n"
            "  CI_REGISTRY_IMAGE, DOCKER_REGISTRY_IMAGE, ECR_REGISTRY_IMAGE, GCR_REGISTRY_IMAGE\n"
            "                           repositories whose :latest image warms the cache (-c)\n"
            "\n"
            "Exit codes: 0 success, 1 error, 2 build failed, 3 daemon unreachable"
        ),
    )
    build.register_arguments(parser)
    _add_global_options(parser)
    return parser


def create_auth_parser() -> StepArgumentParser:
    """
    Create the argument parser for ``docker-auth-config``.

    Returns
    -------
    StepArgumentParser
        Configured argument parser.
    """
    from buildstep.commands import auth

    parser = StepArgumentParser(
        prog="docker-auth-config",
        description="Write DOCKER_AUTH_CONFIG to the docker credential file",
    )
    auth.register_arguments(parser)
    _add_global_options(parser)
    return parser


def _run(parser: StepArgumentParser, handler, argv: list[str] | None) -> int:
    """
    Parse arguments, load configuration and run a command handler.

    Returns
    -------
    int
        Exit code: 0 for success, the error's exit code for BuildStepError,
        1 for unexpected failures, 130 for keyboard interrupt.
    """
    try:
        args = parser.parse_args(argv)
    except BuildStepError as e:
        parser.print_usage(sys.stderr)
        error(str(e))
        return e.exit_code

    if args.no_color:
        set_color_enabled(False)

    setup_logger("buildstep")

    ctx = {
        "config": None,
        "verbose": args.verbose,
        "dry_run": args.dry_run,
        "args": args,
    }

    try:
        ctx["config"] = ConfigLoader(config_path=args.config).load()
        return handler(ctx)
    except KeyboardInterrupt:
        print()
        return EXIT_INTERRUPTED
    except BuildStepError as e:
        error(str(e))
        return e.exit_code
    except Exception as e:
        error(f"Command failed: {e}")
        if args.verbose:
            traceback.print_exc()
        return EXIT_UNKNOWN


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for ``docker-build``.

    Parameters
    ----------
    argv : list[str] or None, optional
        Arguments to parse, by default ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit code: 0 success, 1 parse/unknown error, 2 build failure,
        3 daemon unreachable, 130 keyboard interrupt.
    """
    from buildstep.commands import build

    return _run(create_parser(), build.handle, argv)


def auth_main(argv: list[str] | None = None) -> int:
    """Entry point for ``docker-auth-config``."""
    from buildstep.commands import auth

    return _run(create_auth_parser(), auth.handle, argv)


if __name__ == "__main__":
    sys.exit(main())
