# MIT License © 2025 Motohiro Suzuki
"""
crypto/zeroize.py

Best-effort secret zeroization.

Reality check (Python):
- 'bytes' is immutable; cannot guarantee in-place wiping of the original object.
- 'bytearray' can be wiped in-place, so working copies of secrets live in one.

Used for the KMS shared secret: the normalizer works on a bytearray copy
and wipes it once the scalar has been extracted.
"""

from __future__ import annotations


def wipe_bytearray(b: bytearray) -> None:
    """In-place wipe for mutable buffer."""
    for i in range(len(b)):
        b[i] = 0
