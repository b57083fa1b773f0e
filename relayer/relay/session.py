"""
Session membership and service node selection.
"""

from __future__ import annotations

import random
from typing import Optional

from relayer.schemas.errors import EmptySessionError
from relayer.schemas.relay import Node, Session


def is_node_in_session(session: Session, node: Node) -> bool:
    """True iff a node with the same public key is part of the session."""
    return node.public_key in session.public_keys


def get_random_session_node(
    session: Session,
    rng: Optional[random.Random] = None,
) -> Node:
    """
    Pick a session node uniformly at random.

    Raises:
        EmptySessionError: If the session has no nodes.
    """
    if not session.nodes:
        raise EmptySessionError(session.key)
    rng = rng or random.SystemRandom()
    return session.nodes[rng.randrange(len(session.nodes))]
