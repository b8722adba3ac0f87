"""
CLI commands for Permanent Detour.

Usage:
    permanentdetour serve --primo SUBDOMAIN --vid VID [file...]
    permanentdetour check file [file...]
    permanentdetour version

Flags left unset fall back to PERMANENTDETOUR_* environment variables.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

import uvicorn
from pydantic import ValidationError

from detour import __version__
from detour.core.id_map import MappingLoadError, load_id_map_files
from detour.core.rule_sets import RULE_SETS
from detour.core.settings import ENV_PREFIX, Settings, get_settings
from detour.main import create_app
from detour.utils.logging_setup import LOG_LEVELS, parse_log_level, setup_logging

logger = logging.getLogger(__name__)


def _serve_settings(args: argparse.Namespace) -> Settings:
    return get_settings(
        address=args.address,
        primo=args.primo,
        primo_base_url=args.primo_base_url,
        vid=args.vid,
        rule_set=args.rule_set,
        redirect_policy="temporary" if args.temporary else None,
        mapping_files=args.files or None,
        log_level=args.log_level,
    )


def cmd_serve(args: argparse.Namespace) -> int:
    """Load the mapping files and serve redirects until interrupted."""
    try:
        settings = _serve_settings(args)
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    setup_logging("detour", level=parse_log_level(settings.log_level))

    try:
        app = create_app(settings)
    except MappingLoadError as e:
        logger.error(f"Could not load mappings: {e}")
        return 1

    host, port = settings.listen_address
    logger.info(
        f"Starting server on {host}:{port}, "
        f"redirecting {settings.rule_set} requests to {settings.destination_base_url}"
    )
    # uvicorn drains in-flight requests on SIGINT/SIGTERM
    uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())
    logger.info("Server stopped.")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Validate mapping files without serving."""
    try:
        id_map = load_id_map_files(args.files)
    except MappingLoadError as e:
        logger.error(f"Mapping check failed: {e}")
        return 1

    print(f"{len(id_map)} III bib ID to Ex Libris ID mappings OK.")
    return 0


def cmd_version(args: argparse.Namespace) -> int:
    print(f"Permanent Detour {__version__}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Permanent Detour: a tiny web service which redirects legacy OPAC requests to Primo URLs.",
        prog="permanentdetour",
        epilog=f"Environment variables ({ENV_PREFIX}<NAME>) are read when a flag is unset.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve = subparsers.add_parser("serve", help="Serve redirects")
    serve.add_argument("--address", help="Address to bind on, host:port (default :8877)")
    serve.add_argument("--primo", help="The subdomain of the target Primo instance, ?????.primo.exlibrisgroup.com")
    serve.add_argument("--primo-base-url", help="Full base URL of the target Primo instance")
    serve.add_argument("--vid", help="VID parameter for Primo")
    serve.add_argument(
        "--rule-set",
        choices=sorted(RULE_SETS),
        help="Legacy catalogue platform to translate (default: sierra)",
    )
    serve.add_argument(
        "--temporary",
        action="store_true",
        help="Issue temporary (302) instead of permanent (301) redirects",
    )
    serve.add_argument("files", nargs="*", help="Mapping files")
    serve.set_defaults(func=cmd_serve)

    check = subparsers.add_parser("check", help="Validate mapping files")
    check.add_argument("files", nargs="+", help="Mapping files")
    check.set_defaults(func=cmd_check)

    version = subparsers.add_parser("version", help="Print the version")
    version.set_defaults(func=cmd_version)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging("detour", level=parse_log_level(args.log_level or "INFO"))

    if not getattr(args, "func", None):
        parser.print_help()
        return 1
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
