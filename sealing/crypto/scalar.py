# MIT License © 2025 Motohiro Suzuki
"""
crypto/scalar.py

32-byte shared secret -> secp256k1 key pair.

Rule:
  - candidate = int(secret, big-endian)
  - accept if 0 < candidate < n
  - else increment the 32-byte buffer by one (carry, wrap on overflow), retest

This is NOT modular reduction. Secrets in [n, 2^256) walk up to the wrap
and land on 1; the walk is skipped (see _normalize_buffer), the result is
the same.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from sealing.crypto.zeroize import wipe_bytearray

SECRET_LEN = 32

# secp256k1 group order
SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


@dataclass(frozen=True)
class SealedKeyPair:
    private_key: ec.EllipticCurvePrivateKey = field(repr=False)
    public_key_bytes: bytes

    def public_key(self) -> ec.EllipticCurvePublicKey:
        return self.private_key.public_key()


def increment_be_bytes(buf: bytearray) -> None:
    """Add one to buf as a big-endian integer, in place. All-0xff wraps to zero."""
    for i in range(len(buf) - 1, -1, -1):
        if buf[i] != 0xFF:
            buf[i] += 1
            return
        buf[i] = 0


def _in_range(v: int, order: int) -> bool:
    return 0 < v < order


def _normalize_buffer(buf: bytearray, order: int) -> int:
    while True:
        v = int.from_bytes(buf, "big")
        if _in_range(v, order):
            return v
        if v >= order:
            # every value up to 2^len-1 is >= order as well; the carry ends at zero
            buf[:] = bytes(len(buf))
        increment_be_bytes(buf)


def normalize_scalar(secret: bytes, order: int = SECP256K1_ORDER) -> int:
    if len(secret) != SECRET_LEN:
        raise ValueError(f"secret must be {SECRET_LEN} bytes, got {len(secret)}")
    buf = bytearray(secret)
    try:
        return _normalize_buffer(buf, order)
    finally:
        wipe_bytearray(buf)


def derive_sealed_keypair(secret: bytes) -> SealedKeyPair:
    d = normalize_scalar(secret)
    sk = ec.derive_private_key(d, ec.SECP256K1())
    pub = sk.public_key().public_bytes(
        serialization.Encoding.X962,
        serialization.PublicFormat.UncompressedPoint,
    )
    return SealedKeyPair(private_key=sk, public_key_bytes=pub)
