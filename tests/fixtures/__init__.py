"""
Test fixtures package for relayer tests.

Usage:
    from fixtures import make_session, FakeSigner, FakeProvider

    def test_something():
        session = make_session(node_count=1)
"""

from .common import (
    APP_PUBLIC_KEY,
    CHAIN,
    CLIENT_PUBLIC_KEY,
    FakeProvider,
    FakeSigner,
    SequenceRandom,
    make_aat,
    make_node,
    make_relay_answer,
    make_session,
)

__all__ = [
    "APP_PUBLIC_KEY",
    "CHAIN",
    "CLIENT_PUBLIC_KEY",
    "FakeProvider",
    "FakeSigner",
    "SequenceRandom",
    "make_aat",
    "make_node",
    "make_relay_answer",
    "make_session",
]
