#!/usr/bin/env python3
"""
Command Line Interface for the Parameter Store editor.

Resolves settings from flags and the optional config file, asks for a
prefix when none is known, and hands over to the edit loop.
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .config import Settings, find_config_file, load_config
from .editor import EditLoop
from .exceptions import ConfigError, PromptCancelled, RemoteError
from .prompt import TerminalPrompt
from .retry import RetryPolicy
from .store import ParameterStore


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return number


def _non_negative_float(value: str) -> float:
    number = float(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for ``ssm-edit``."""
    parser = argparse.ArgumentParser(
        prog="ssm-edit",
        description="Browse and edit AWS SSM parameters from an interactive menu",
        epilog="""
Examples:
  ssm-edit /app/test/            # Edit parameters under /app/test/
  ssm-edit /app/prod/ --secure   # Hide SecureString values
  ssm-edit -p staging -r eu-west-1

Environment:
  SSM_EDIT_CONFIG    Override the config file location
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("prefix", nargs="?", default=None,
                        help="Parameter prefix (prompted for when omitted)")
    parser.add_argument("--secure", "-s", action="store_true", default=None,
                        help="Mask SecureString values in the list and edit prompt")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--quiet", "-q", action="store_true", default=None,
                           help="Only print errors and prompts")
    verbosity.add_argument("--debug", "-d", action="store_true", default=None,
                           help="Report every failed write attempt")

    parser.add_argument("--profile", "-p", help="AWS profile to use")
    parser.add_argument("--region", "-r", help="AWS region to use")
    parser.add_argument("--config", "-c", help="Configuration file with defaults")
    parser.add_argument("--attempts", type=_positive_int,
                        help="Write attempts before giving up (default: 5)")
    parser.add_argument("--delay", type=_non_negative_float,
                        help="Seconds between write attempts (default: 0.2)")
    return parser


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = build_parser()
    parsed_args = parser.parse_args(args)

    try:
        config = load_config(find_config_file(parsed_args.config))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    settings = Settings.resolve(parsed_args, config)
    prompt = TerminalPrompt()

    prefix = settings.prefix
    if not prefix:
        try:
            prefix = prompt.read_line("Enter SSM parameter prefix")
        except PromptCancelled:
            return 0

    try:
        store = ParameterStore.from_session(settings.profile, settings.region)
    except RemoteError as e:
        print(f"Error creating SSM client: {e}", file=sys.stderr)
        return 1

    loop = EditLoop(
        store,
        prompt,
        prefix,
        secure=settings.secure,
        retry_policy=RetryPolicy(settings.attempts, settings.delay),
        quiet=settings.quiet,
        debug=settings.debug,
    )
    if settings.debug:
        print(f"Prefix: {loop.prefix}")
        print(f"Secure mode: {settings.secure}")
        print(f"Retry: {settings.attempts} attempts, {settings.delay}s apart")
    return loop.run()


if __name__ == "__main__":
    sys.exit(main())
