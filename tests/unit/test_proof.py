"""
Proof Builder Tests

Tests for relayer/relay/proof.py:
- AAT token hashing ignores the application signature
- Request hashing is deterministic and sensitive to every field
- Proof bytes depend on every input, entropy included
- Entropy is drawn from the injected random source
"""

import hashlib
import random

import pytest

from relayer.relay.proof import (
    MAX_ENTROPY,
    build_unsigned_proof,
    generate_entropy,
    generate_proof_bytes,
    hash_aat,
    hash_request,
)
from relayer.schemas import RelayMeta, RelayPayload, RequestHash, dumps_canonical

from fixtures import APP_PUBLIC_KEY, CLIENT_PUBLIC_KEY, make_aat


def _request(
    data: str = '{"jsonrpc":"2.0","method":"eth_blockNumber","params":[],"id":1}',
    method: str = "",
    path: str = "",
    headers=None,
    block_height: int = 101,
) -> RequestHash:
    return RequestHash(
        payload=RelayPayload(data=data, method=method, path=path, headers=headers),
        meta=RelayMeta(block_height=block_height),
    )


def _proof_bytes(**overrides) -> str:
    params = dict(
        entropy=42,
        session_block_height=101,
        servicer_public_key="b" * 64,
        blockchain="0021",
        aat=make_aat(),
        request_hash=_request(),
    )
    params.update(overrides)
    return generate_proof_bytes(**params)


class TestHashAAT:
    def test_exact_token_layout(self):
        token_json = (
            '{"version":"0.0.1",'
            f'"app_pub_key":"{APP_PUBLIC_KEY}",'
            f'"client_pub_key":"{CLIENT_PUBLIC_KEY}",'
            '"signature":""}'
        )
        expected = hashlib.sha3_256(token_json.encode("utf-8")).hexdigest()
        assert hash_aat(make_aat()) == expected

    def test_signature_is_ignored(self):
        assert hash_aat(make_aat(application_signature="1" * 128)) == hash_aat(
            make_aat(application_signature="2" * 128)
        )

    def test_version_matters(self):
        assert hash_aat(make_aat(version="0.0.1")) != hash_aat(make_aat(version="0.0.2"))


class TestHashRequest:
    def test_exact_layout(self):
        text = (
            '{"payload":{"data":"{}","method":"GET","path":"/status",'
            '"headers":{"X-A":"1"}},"meta":{"block_height":7}}'
        )
        request = _request(data="{}", method="GET", path="/status", headers={"X-A": "1"}, block_height=7)
        assert hash_request(request) == hashlib.sha3_256(text.encode("utf-8")).hexdigest()

    def test_structurally_identical_inputs_hash_identically(self):
        assert hash_request(_request()) == hash_request(_request())

    @pytest.mark.parametrize(
        "changes",
        [
            {"data": "{}"},
            {"method": "POST"},
            {"path": "/v1"},
            {"headers": {"Content-Type": "application/json"}},
            {"block_height": 102},
        ],
    )
    def test_any_field_change_changes_digest(self, changes):
        assert hash_request(_request(**changes)) != hash_request(_request())

    def test_empty_headers_differ_from_missing_headers(self):
        assert hash_request(_request(headers={})) != hash_request(_request(headers=None))


class TestProofBytes:
    def test_same_inputs_same_digest(self):
        assert _proof_bytes() == _proof_bytes()

    def test_entropy_changes_digest(self):
        assert _proof_bytes(entropy=42) != _proof_bytes(entropy=43)

    @pytest.mark.parametrize(
        "changes",
        [
            {"session_block_height": 102},
            {"servicer_public_key": "d" * 64},
            {"blockchain": "0001"},
            {"aat": make_aat(version="0.0.2")},
            {"request_hash": _request(data="{}")},
        ],
    )
    def test_every_input_is_committed(self, changes):
        assert _proof_bytes(**changes) != _proof_bytes()

    def test_aat_signature_not_committed(self):
        assert _proof_bytes(aat=make_aat(application_signature="00")) == _proof_bytes()

    def test_precomputed_request_hash_gives_same_digest(self):
        assert _proof_bytes(request_hash=hash_request(_request())) == _proof_bytes()

    def test_digest_of_unsigned_proof_layout(self):
        request = _request()
        aat = make_aat()
        text = (
            '{"entropy":42,"session_block_height":101,'
            f'"servicer_pub_key":"{"b" * 64}","blockchain":"0021","signature":"",'
            f'"token":"{hash_aat(aat)}","request_hash":"{hash_request(request)}"}}'
        )
        assert _proof_bytes() == hashlib.sha3_256(text.encode("utf-8")).hexdigest()

    def test_unsigned_proof_signature_slot_is_empty(self):
        unsigned = build_unsigned_proof(
            entropy=1,
            session_block_height=1,
            servicer_public_key="b" * 64,
            blockchain="0021",
            aat=make_aat(),
            request_hash="0" * 64,
        )
        assert '"signature":""' in dumps_canonical(unsigned)


class TestEntropy:
    def test_within_bounds(self):
        rng = random.Random(7)
        draws = [generate_entropy(rng) for _ in range(1000)]
        assert all(0 <= d < MAX_ENTROPY for d in draws)

    def test_seeded_source_is_reproducible(self):
        assert generate_entropy(random.Random(99)) == generate_entropy(random.Random(99))

    def test_fresh_per_draw(self):
        rng = random.Random(5)
        draws = {generate_entropy(rng) for _ in range(500)}
        assert len(draws) == 500

    def test_default_source(self):
        assert 0 <= generate_entropy() < MAX_ENTROPY
