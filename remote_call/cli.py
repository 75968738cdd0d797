"""Command-line interface for remote-call."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from remote_call.config import ConfigError, RemoteCallOptions, load_options
from remote_call.discovery import (
    PatternError,
    ScanError,
    discover,
    render_type_descriptor,
    scan_files,
    write_type_descriptor,
)
from remote_call.runtime import RemoteCallError, RemoteCaller, open_page_transport

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging to stderr."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _add_discovery_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        "patterns",
        nargs="*",
        help="Function paths relative to the root, e.g. 'server/api/*' 'server/utils/**'",
    )
    parser.add_argument(
        "--root",
        "-r",
        default=".",
        help="Project root directory (default: current directory)",
    )
    parser.add_argument(
        "--config",
        "-c",
        help="JSON file holding function_paths (used when no patterns are given)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="remote-call",
        description="Discover exported TypeScript functions and call them remotely",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    scan_parser = subparsers.add_parser("scan", help="List files matched by the function paths")
    _add_discovery_arguments(scan_parser)

    discover_parser = subparsers.add_parser(
        "discover",
        help="Print discovered functions, conflicts and errors as JSON",
    )
    _add_discovery_arguments(discover_parser)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate the remote call type declaration",
    )
    _add_discovery_arguments(generate_parser)
    generate_parser.add_argument(
        "--output",
        "-o",
        help="Output path for the declaration (default: stdout)",
    )

    call_parser = subparsers.add_parser(
        "call",
        help="Call a function exposed by a page",
    )
    call_parser.add_argument("url", help="URL of the page (http, https, or file://)")
    call_parser.add_argument("identifier", help="Name of the function to call")
    call_parser.add_argument(
        "arguments",
        nargs="*",
        help="JSON-encoded arguments (bare words are passed as strings)",
    )
    call_parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window",
    )

    return parser


def resolve_options(parsed: argparse.Namespace) -> RemoteCallOptions:
    """Options from explicit patterns, else from the config file."""
    if parsed.patterns:
        return RemoteCallOptions(function_paths=list(parsed.patterns))
    if parsed.config:
        return load_options(parsed.config)
    return RemoteCallOptions()


def decode_argument(text: str):
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def run_scan(root: str, options: RemoteCallOptions) -> int:
    """Run the scan command."""
    for path in scan_files(root, options.function_paths):
        print(path)
    return 0


async def run_discover(root: str, options: RemoteCallOptions) -> int:
    """Run the discover command."""
    result = await discover(root, options)
    print(result.to_json())
    return 0


async def run_generate(root: str, options: RemoteCallOptions, output: str | None) -> int:
    """Run the generate command."""
    result = await discover(root, options)
    if output:
        write_type_descriptor(result.registry, Path(output))
        print(
            f"Declared {len(result.registry)} functions. Types written to: {output}",
            file=sys.stderr,
        )
    else:
        print(render_type_descriptor(result.registry))
    return 0


async def run_call(url: str, identifier: str, arguments: list[str], headed: bool = False) -> int:
    """Run the call command.

    Returns:
        Exit code (0 for success, 1 if the call was rejected)
    """
    args = [decode_argument(a) for a in arguments]
    logger.info(f"Calling {identifier} on {url} with {args}")
    try:
        async with open_page_transport(url, [identifier], headless=not headed) as transport:
            value = await RemoteCaller(transport).get_proxy(identifier)(*args)
    except RemoteCallError as e:
        logger.error(f"Remote call failed: {e}")
        print(f"Error ({e.kind.value}): {e}", file=sys.stderr)
        return 1

    print(json.dumps(value))
    return 0


async def run_cli(args: list[str]) -> int:
    """Run the CLI with the given arguments.

    Args:
        args: Command-line arguments (without program name)

    Returns:
        Exit code (0 for success, non-zero for fatal errors)
    """
    try:
        parsed = create_parser().parse_args(args)
    except SystemExit as e:
        return e.code if e.code else 1

    setup_logging(parsed.verbose)

    if parsed.command is None:
        create_parser().print_help(sys.stderr)
        return 1

    if parsed.command == "call":
        return await run_call(parsed.url, parsed.identifier, parsed.arguments, parsed.headed)

    try:
        options = resolve_options(parsed)
        if parsed.command == "scan":
            return run_scan(parsed.root, options)
        elif parsed.command == "discover":
            return await run_discover(parsed.root, options)
        elif parsed.command == "generate":
            return await run_generate(parsed.root, options, parsed.output)
    except (ConfigError, PatternError, ScanError) as e:
        logger.error(f"Discovery failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 1


def main():
    """Entry point for the CLI."""
    exit_code = asyncio.run(run_cli(sys.argv[1:]))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
