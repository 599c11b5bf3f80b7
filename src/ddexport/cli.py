"""
Command-line interface for ddexport.

Provides commands to list supported Datadog resource kinds, show the
resolved provider configuration, and export resources to declarative
definition files.

Uses Python's argparse module (no external CLI libraries).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

from datadog_api_client.exceptions import ApiException

from ddexport import __version__
from ddexport.config.settings import (
    OUTPUT_FORMATS,
    ConfigurationError,
    Settings,
    load_config,
)
from ddexport.export.resource_writer import ExportError, export_resources
from ddexport.generators.base import ARG_FILTER, GeneratorError
from ddexport.provider.credentials import mask_secret
from ddexport.provider.datadog_provider import DatadogProvider
from ddexport.provider.errors import ProviderError, UnsupportedResourceKindError

# Set up logging
logger = logging.getLogger(__name__)

# Global verbosity settings (set during main() based on args)
_quiet_mode = False


def set_output_mode(quiet: bool = False) -> None:
    global _quiet_mode
    _quiet_mode = quiet


def output(message: str = "", force: bool = False) -> None:
    """
    Print a message to stdout, respecting quiet mode.

    Args:
        message: The message to print.
        force: If True, print even in quiet mode (for essential output like JSON).
    """
    if force or not _quiet_mode:
        print(message)


def output_error(message: str) -> None:
    """Print an error message (always shown, even in quiet mode)."""
    print(message, file=sys.stderr)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for the ddexport CLI."""
    parser = argparse.ArgumentParser(
        prog="ddexport",
        description="Export Datadog account objects as declarative resource definitions",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"ddexport {__version__}",
    )

    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Override config file location (default: ~/.ddexport/config.yaml)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase output verbosity (can be repeated)",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-essential output",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    # list command
    list_parser = subparsers.add_parser(
        "list",
        help="List supported resource kinds",
    )
    list_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    list_parser.set_defaults(func=cmd_list)

    # Shared credential options
    credentials = argparse.ArgumentParser(add_help=False)
    credentials.add_argument(
        "--api-key",
        default="",
        help="Datadog API key (default: $DATADOG_API_KEY)",
    )
    credentials.add_argument(
        "--app-key",
        default="",
        help="Datadog application key (default: $DATADOG_APP_KEY)",
    )
    credentials.add_argument(
        "--api-url",
        default="",
        metavar="URL",
        help="Custom Datadog API endpoint (default: $DATADOG_HOST)",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        parents=[credentials],
        help="Show the resolved provider configuration (keys masked)",
    )
    config_parser.set_defaults(func=cmd_config)

    # export command
    export_parser = subparsers.add_parser(
        "export",
        parents=[credentials],
        help="Export resources to definition files",
    )
    export_parser.add_argument(
        "-r", "--resources",
        metavar="KINDS",
        help="Comma-separated resource kinds, or 'all' (default: from config)",
    )
    export_parser.add_argument(
        "-o", "--output",
        metavar="DIR",
        help="Output directory (default: from config)",
    )
    export_parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        help="Output format (default: from config)",
    )
    export_parser.add_argument(
        "--filter",
        action="append",
        default=[],
        metavar="KIND=ID[:ID...]",
        help="Only export the given ids of a kind (can be repeated)",
    )
    export_parser.add_argument(
        "--no-provider-file",
        action="store_true",
        help="Do not write the provider block (it contains the raw keys)",
    )
    export_parser.set_defaults(func=cmd_export)

    return parser


def setup_logging(verbose: int, quiet: bool) -> None:
    """Configure logging based on verbosity level."""
    if quiet:
        level = logging.WARNING
    elif verbose == 0:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _load_settings(args: argparse.Namespace) -> Settings:
    settings = load_config(Path(args.config) if args.config else None)
    # Command-line verbosity wins over the configured level
    if not args.verbose and not args.quiet:
        logging.getLogger().setLevel(settings.log_level)
    return settings


def parse_filters(values: list[str]) -> dict[str, list[str]]:
    """
    Parse --filter values of the form KIND=ID[:ID...].

    Raises:
        ConfigurationError: If a value is malformed.
    """
    filters: dict[str, list[str]] = {}
    for value in values:
        kind, sep, ids = value.partition("=")
        if not sep or not kind or not ids:
            raise ConfigurationError(
                f"Invalid filter: {value}. Expected KIND=ID[:ID...]"
            )
        filters.setdefault(kind, []).extend(i for i in ids.split(":") if i)
    return filters


def cmd_list(args: argparse.Namespace) -> int:
    """List supported resource kinds."""
    provider = DatadogProvider()
    services = provider.get_supported_service()

    if args.json:
        kinds = {name: gen.resource_type for name, gen in sorted(services.items())}
        output(json.dumps(kinds, indent=2), force=True)
        return 0

    output(f"Supported {provider.get_name()} resource kinds:")
    for name, generator in sorted(services.items()):
        output(f"  {name:<36} {generator.resource_type}")
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Show the resolved provider configuration."""
    settings = _load_settings(args)
    provider = DatadogProvider()
    provider.init([args.api_key, args.app_key, args.api_url or settings.api_url])

    config = provider.get_config()
    output(f"api_key: {mask_secret(config['api_key'])}", force=True)
    output(f"app_key: {mask_secret(config['app_key'])}", force=True)
    output(f"api_url: {config['api_url'] or '(default)'}", force=True)
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Export the selected resource kinds."""
    settings = _load_settings(args)
    provider = DatadogProvider()

    if args.resources:
        kinds = [k.strip() for k in args.resources.split(",") if k.strip()]
    else:
        kinds = list(settings.export.resources)
    if kinds == ["all"]:
        kinds = sorted(provider.get_supported_service())
    if not kinds:
        output_error("No resource kinds selected. Use --resources or set export.resources.")
        return 2

    filters = dict(settings.export.filters)
    filters.update(parse_filters(args.filter))

    output_dir = Path(args.output or settings.export.output_dir)
    fmt = args.format or settings.export.output_format

    session = provider.init([args.api_key, args.app_key, args.api_url or settings.api_url])
    provider_config = None if args.no_provider_file else provider.get_config()

    failures = 0
    try:
        for kind in kinds:
            try:
                generator = provider.init_service(kind, verbose=args.verbose > 0)
                extra = {"page-size": settings.export.page_size}
                if kind in filters:
                    extra[ARG_FILTER] = filters[kind]
                generator.set_args({**generator.get_args(), **extra})

                generator.init_resources()
                result = export_resources(generator, output_dir, fmt, provider_config)
                output(f"{kind}: {result.resource_count} resources -> {result.directory}")
            except UnsupportedResourceKindError as e:
                output_error(str(e))
                failures += 1
            except (ApiException, GeneratorError, ExportError) as e:
                output_error(f"{kind}: export failed: {e}")
                logger.debug(f"Export of {kind} failed", exc_info=True)
                failures += 1
    finally:
        session.close()

    if failures:
        output_error(f"{failures} of {len(kinds)} resource kinds failed")
        return 1
    return 0


def main() -> NoReturn:
    """Main entry point for the ddexport CLI."""
    parser = create_parser()
    args = parser.parse_args()

    setup_logging(args.verbose, args.quiet)
    set_output_mode(args.quiet)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        exit_code = args.func(args)
        sys.exit(exit_code)
    except KeyboardInterrupt:
        output("\nOperation cancelled.")
        sys.exit(130)
    except ProviderError as e:
        output_error(f"Provider error: {e}")
        sys.exit(2)
    except ConfigurationError as e:
        output_error(f"Configuration error: {e}")
        sys.exit(2)
    except Exception as e:
        if args.verbose > 0:
            raise
        output_error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
