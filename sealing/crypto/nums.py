# MIT License © 2025 Motohiro Suzuki
"""
crypto/nums.py

"Nothing up my sleeve" P-256 public key.

Derivation (publicly reproducible):
    for counter = 0, 1, 2, ...   (u32, big-endian)
        x = SHA-256(seed || counter)
        try SEC1 compressed point 0x02||x, then 0x03||x
    first point that decompresses wins.

The search runs over hash outputs used as x-coordinates, never over scalars,
so nobody (including us) knows the discrete log of the result.

For the default seed the search stops at counter=0 with prefix 0x02;
tests/test_nums_key.py pins the DER encoding.
"""

from __future__ import annotations

import base64
import hashlib
import logging
from dataclasses import dataclass, field
from typing import Optional

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from sealing.protocol.errors import CounterOverflow

log = logging.getLogger(__name__)

NUMS_SEED = b"This is a P-256 NUMS key for KMS"
COUNTER_MAX = 0xFFFFFFFF

# even y first, then odd y
PREFIXES = (0x02, 0x03)


@dataclass(frozen=True)
class NumsKey:
    public_key: ec.EllipticCurvePublicKey = field(repr=False)
    seed: bytes
    counter: int
    prefix: int
    spki_der: bytes = field(repr=False)

    def der_b64(self) -> str:
        return base64.b64encode(self.spki_der).decode("ascii")

    def compressed(self) -> bytes:
        return self.public_key.public_bytes(
            serialization.Encoding.X962,
            serialization.PublicFormat.CompressedPoint,
        )


def _u32(x: int) -> bytes:
    if x < 0 or x > COUNTER_MAX:
        raise CounterOverflow(f"NUMS counter out of u32 range: {x}")
    return x.to_bytes(4, "big")


def candidate_x(seed: bytes, counter: int) -> bytes:
    return hashlib.sha256(seed + _u32(counter)).digest()


def _try_decompress(curve: ec.EllipticCurve, encoded: bytes) -> Optional[ec.EllipticCurvePublicKey]:
    # ValueError: x is not a field element, or x^3+ax+b has no square root
    try:
        return ec.EllipticCurvePublicKey.from_encoded_point(curve, encoded)
    except ValueError:
        return None


def generate_nums_key(seed: bytes = NUMS_SEED, *, start_counter: int = 0) -> NumsKey:
    """
    Run the NUMS search on P-256.

    Raises CounterOverflow if the counter would step past COUNTER_MAX.
    """
    seed = bytes(seed)
    curve = ec.SECP256R1()
    counter = start_counter

    log.info("generating P-256 NUMS public key seed=%r", seed.decode("utf-8", "replace"))

    while True:
        x = candidate_x(seed, counter)
        for prefix in PREFIXES:
            pk = _try_decompress(curve, bytes([prefix]) + x)
            if pk is None:
                continue
            der = pk.public_bytes(
                serialization.Encoding.DER,
                serialization.PublicFormat.SubjectPublicKeyInfo,
            )
            log.info("NUMS key found counter=%d prefix=0x%02x", counter, prefix)
            return NumsKey(public_key=pk, seed=seed, counter=counter, prefix=prefix, spki_der=der)

        if counter >= COUNTER_MAX:
            raise CounterOverflow("P-256 NUMS key generation counter overflowed")
        counter += 1


def verify_nums_key(key: NumsKey) -> bool:
    """Re-run the search from the recorded seed and compare."""
    again = generate_nums_key(key.seed)
    return (
        again.counter == key.counter
        and again.prefix == key.prefix
        and again.spki_der == key.spki_der
    )
