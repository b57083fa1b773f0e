"""
CLI Session Command

Ask a dispatcher for the current session and print it.

Usage:
    relayer session --chain 0021 [--app-pub-key HEX] [--height N]
"""

from __future__ import annotations

from argparse import Namespace

from relayer.relay.relayer import Relayer
from relayer_cli.config import load_signer

EXIT_SUCCESS = 0


def session_cmd(args: Namespace) -> int:
    """Handle session command."""
    config = args.runtime_config
    relayer = Relayer.from_config(config, signer=load_signer())

    session = relayer.get_new_session(
        chain=args.chain,
        application_public_key=args.app_pub_key,
        session_block_height=args.height,
    )
    print(session.model_dump_json(indent=2, by_alias=True))
    return EXIT_SUCCESS
