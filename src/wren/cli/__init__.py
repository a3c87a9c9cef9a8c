"""Wren CLI — serve the site or check that it can start.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"
"""

import argparse
import logging
import sys

from wren.errors import ConfigurationError, TemplateLoadError

logger = logging.getLogger("wren.cli")

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    """Flags shared by ``run`` and ``check``; unset flags fall back to ``WREN_*``."""
    parser.add_argument("--templates", default=None, help="Template directory")
    parser.add_argument(
        "--static",
        default=None,
        help="Static asset directory ('none' disables static serving)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Debug mode (tracebacks in 500 responses, auto-reload)",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: info)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wren",
        description="Wren — serve a small server-rendered site.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wren run ---------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the server")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    _add_config_arguments(run_parser)

    # -- wren check -------------------------------------------------------
    check_parser = subparsers.add_parser(
        "check",
        help="Validate config and templates, then print the route table",
    )
    _add_config_arguments(check_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command.

    Exits with status 1 when startup fails: invalid configuration,
    templates that fail to load, or a port that cannot be bound.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(format=LOG_FORMAT)

    try:
        if args.command == "run":
            from wren.cli._run import run_site

            run_site(args)
        elif args.command == "check":
            from wren.cli._check import run_check

            run_check(args)
    except (ConfigurationError, TemplateLoadError) as exc:
        logger.error("Startup failed: %s", exc)
        sys.exit(1)
    except OSError as exc:
        logger.error("Server failed: %s", exc)
        sys.exit(1)
