# MIT License © 2025 Motohiro Suzuki
"""
tests/test_nums_key.py

NUMS contract:
- default seed -> counter 0, prefix 0x02, pinned DER (golden.yml)
- same seed -> same key, every run
- counter past u32 max -> CounterOverflow
"""

import base64
import hashlib

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

import sealing.crypto.nums as nums
from sealing.crypto.nums import NUMS_SEED, candidate_x, generate_nums_key, verify_nums_key
from sealing.protocol.errors import CounterOverflow


def test_default_seed_matches_golden(golden, nums_key):
    g = golden["nums"]
    assert NUMS_SEED == g["seed"].encode("utf-8")
    assert nums_key.counter == g["counter"]
    assert nums_key.prefix == g["prefix"]
    assert nums_key.der_b64() == g["spki_der_b64"]


def test_generation_is_deterministic(nums_key):
    again = generate_nums_key()
    assert again.spki_der == nums_key.spki_der
    assert again.counter == nums_key.counter
    assert verify_nums_key(nums_key)


def test_x_coordinate_is_the_seed_hash(nums_key):
    expected_x = hashlib.sha256(NUMS_SEED + (0).to_bytes(4, "big")).digest()
    assert candidate_x(NUMS_SEED, 0) == expected_x

    compressed = nums_key.compressed()
    assert compressed[0] == nums_key.prefix
    assert compressed[1:] == expected_x


def test_key_is_on_p256_and_parses_as_spki(nums_key):
    pk = serialization.load_der_public_key(nums_key.spki_der)
    assert isinstance(pk, ec.EllipticCurvePublicKey)
    assert isinstance(pk.curve, ec.SECP256R1)
    assert base64.b64decode(nums_key.der_b64()) == nums_key.spki_der


def test_other_seed_gives_other_key(nums_key):
    other = generate_nums_key(b"some other seed")
    assert other.spki_der != nums_key.spki_der
    assert other.seed == b"some other seed"


def test_counter_overflow_is_fatal(monkeypatch):
    monkeypatch.setattr(nums, "_try_decompress", lambda curve, encoded: None)

    with pytest.raises(CounterOverflow) as e:
        generate_nums_key(start_counter=nums.COUNTER_MAX - 1)

    assert e.value.fatal is True


def test_start_counter_out_of_range_rejected():
    with pytest.raises(CounterOverflow):
        generate_nums_key(start_counter=nums.COUNTER_MAX + 1)


def test_odd_prefix_is_tried_after_even(monkeypatch):
    seen = []
    real = nums._try_decompress

    def only_odd(curve, encoded):
        seen.append(encoded[0])
        if encoded[0] == 0x02:
            return None
        return real(curve, encoded)

    monkeypatch.setattr(nums, "_try_decompress", only_odd)
    key = generate_nums_key()

    # counter-0 x is a valid abscissa, so the odd-y twin exists too
    assert seen[:2] == [0x02, 0x03]
    assert key.counter == 0
    assert key.prefix == 0x03
