"""
Relayer CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m relayer_cli session --chain 0021 [--app-pub-key HEX] [--height N]
    python -m relayer_cli relay --chain 0021 --data BODY --aat aat.json [--node-pub-key HEX]

Environment Variables:
    RELAYER_PRIVATE_KEY         Hex ed25519 key used to sign relay proofs
    RELAYER_DISPATCHERS         Comma separated dispatcher URLs
    RELAYER_RETRY_ATTEMPTS      Connection retries per request (default: 3)
    RELAYER_TIMEOUT_MS          Request timeout in milliseconds (default: 5000)
    RELAYER_REJECT_SELF_SIGNED  Reject self-signed certificates (default: false)
    RELAYER_LOG_LEVEL           Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

import yaml

from relayer.schemas.errors import RelayerException
from relayer_cli.commands import relay, session
from relayer_cli.config import load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_RELAY_REJECTED = 2


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="relayer",
        description="Relayer CLI - Dispatch sessions and send signed relays to service nodes.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: ./relayer.yaml or ~/.config/relayer/config.yaml)",
    )
    parser.add_argument(
        "--dispatcher", "-d",
        action="append",
        default=None,
        help="Dispatcher URL (repeatable, overrides config)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- session command ---
    session_parser = subparsers.add_parser(
        "session",
        help="Get the current session for an application and chain",
    )
    session_parser.add_argument("--chain", type=str, required=True, help="Relay chain id")
    session_parser.add_argument(
        "--app-pub-key",
        type=str,
        default=None,
        help="Application public key (default: public key of RELAYER_PRIVATE_KEY)",
    )
    session_parser.add_argument("--height", type=int, default=0, help="Session block height (default: 0, latest)")
    session_parser.set_defaults(func=session.session_cmd)

    # --- relay command ---
    relay_parser = subparsers.add_parser(
        "relay",
        help="Send one relay through a freshly dispatched session",
    )
    relay_parser.add_argument("--chain", type=str, required=True, help="Relay chain id")
    relay_parser.add_argument("--data", type=str, required=True, help="Request body to relay")
    relay_parser.add_argument("--aat", type=str, required=True, help="Path to AAT JSON file")
    relay_parser.add_argument("--method", type=str, default="", help="HTTP method for REST chains")
    relay_parser.add_argument("--path", type=str, default="", help="Path for REST chains")
    relay_parser.add_argument(
        "--header",
        action="append",
        default=None,
        help="Relay header as KEY=VALUE (repeatable)",
    )
    relay_parser.add_argument(
        "--node-pub-key",
        type=str,
        default=None,
        help="Serve the relay from this session node (default: random)",
    )
    relay_parser.add_argument("--height", type=int, default=0, help="Session block height (default: 0, latest)")
    relay_parser.set_defaults(func=relay.relay_cmd)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0=success, 1=error, 2=relay rejected by the node)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config, dispatchers=args.dispatcher)
    except (OSError, yaml.YAMLError, RelayerException) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(level=args.log_level or config.log_level)
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (RelayerException, ValueError, OSError) as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
