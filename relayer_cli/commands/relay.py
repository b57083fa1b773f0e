"""
CLI Relay Command

Dispatch a session, send one relay through it and print the node's answer.

Usage:
    relayer relay --chain 0021 --data '<body>' --aat aat.json \
        [--method POST] [--path /] [--header K=V ...] [--node-pub-key HEX]

The signing key is read from RELAYER_PRIVATE_KEY.
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path
from typing import Optional, Sequence

from relayer.relay.relayer import Relayer
from relayer.schemas.errors import NodeNotInSessionError, RelayError
from relayer.schemas.relay import Node, PocketAAT, Session
from relayer_cli.config import load_signer

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_RELAY_REJECTED = 2


def load_aat(path: Path) -> PocketAAT:
    """Read an AAT from a JSON file with wire field names."""
    with open(path, "r") as f:
        return PocketAAT.model_validate(json.load(f))


def parse_headers(values: Optional[Sequence[str]]) -> Optional[dict[str, str]]:
    """Turn repeated K=V arguments into a header dict, keeping their order."""
    if not values:
        return None
    headers: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValueError(f"Header must be KEY=VALUE, got {item!r}")
        headers[key.strip()] = value.strip()
    return headers


def find_node(session: Session, public_key: str) -> Node:
    for node in session.nodes:
        if node.public_key == public_key:
            return node
    raise NodeNotInSessionError(public_key, session.key)


def relay_cmd(args: Namespace) -> int:
    """Handle relay command."""
    config = args.runtime_config
    relayer = Relayer.from_config(config, signer=load_signer())
    aat = load_aat(Path(args.aat))

    session = relayer.get_new_session(
        chain=args.chain,
        application_public_key=aat.application_public_key,
        session_block_height=args.height,
    )
    node = find_node(session, args.node_pub_key) if args.node_pub_key else None

    try:
        response = relayer.relay(
            blockchain=args.chain,
            data=args.data,
            aat=aat,
            session=session,
            headers=parse_headers(args.header),
            method=args.method,
            node=node,
            path=args.path,
        )
    except RelayError as e:
        logger.warning(f"Node rejected relay: {e.message}")
        print(json.dumps({"error": e.to_dict()}, indent=2))
        return EXIT_RELAY_REJECTED

    print(response.model_dump_json(indent=2, by_alias=True))
    return EXIT_SUCCESS
