"""
KeyManager (ed25519 signer) tests.
"""

import pytest
from nacl import signing

from relayer.crypto.signer import AbstractSigner, KeyManager
from relayer.relay.proof import generate_proof_bytes
from relayer.schemas import RelayMeta, RelayPayload, RequestHash

from fixtures import make_aat, make_session

SEED_HEX = bytes(range(32)).hex()


class TestLoading:
    def test_from_seed(self):
        manager = KeyManager.from_private_key(SEED_HEX)
        expected = bytes(signing.SigningKey(bytes(range(32))).verify_key).hex()
        assert manager.get_public_key() == expected

    def test_from_seed_and_public_key(self):
        manager = KeyManager.from_private_key(SEED_HEX)
        full = manager.get_private_key()

        assert len(full) == 128
        assert KeyManager.from_private_key(full).get_public_key() == manager.get_public_key()

    def test_prefix_and_whitespace_tolerated(self):
        manager = KeyManager.from_private_key(f"  0x{SEED_HEX}\n")
        assert manager.get_public_key() == KeyManager.from_private_key(SEED_HEX).get_public_key()

    def test_mismatched_public_key(self):
        with pytest.raises(ValueError):
            KeyManager.from_private_key(SEED_HEX + "00" * 32)

    def test_wrong_length(self):
        with pytest.raises(ValueError):
            KeyManager.from_private_key("00" * 16)

    def test_is_a_signer(self):
        assert isinstance(KeyManager.from_private_key(SEED_HEX), AbstractSigner)


class TestSigning:
    def test_hex_payload_is_decoded(self):
        manager = KeyManager.from_private_key(SEED_HEX)
        digest = "ab" * 32

        signature = manager.sign(digest)

        verify_key = signing.VerifyKey(bytes.fromhex(manager.get_public_key()))
        verify_key.verify(bytes.fromhex(digest), bytes.fromhex(signature))
        assert len(signature) == 128

    def test_bytes_payload_signed_as_is(self):
        manager = KeyManager.from_private_key(SEED_HEX)
        assert manager.sign(b"\xab" * 32) == manager.sign("ab" * 32)

    def test_non_hex_string_rejected(self):
        with pytest.raises(ValueError):
            KeyManager.from_private_key(SEED_HEX).sign("not hex")

    def test_verify(self):
        manager = KeyManager.from_private_key(SEED_HEX)
        session = make_session(node_count=1)
        digest = generate_proof_bytes(
            entropy=1,
            session_block_height=session.header.session_block_height,
            servicer_public_key=session.nodes[0].public_key,
            blockchain=session.header.chain,
            aat=make_aat(),
            request_hash=RequestHash(payload=RelayPayload(data="{}"), meta=RelayMeta(block_height=1)),
        )
        signature = manager.sign(digest)

        assert manager.verify(digest, signature)
        assert not manager.verify("00" * 32, signature)
        assert not manager.verify(digest, "zz")
