# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

import hashlib
from typing import Optional

from sealing.keysources.base import SharedSecretOracle


class StaticOracle(SharedSecretOracle):
    """
    NOT secure. Local development only (SEALING_ORACLE=static).

    secret = SHA256(seed || "|ecdh|" || key_id || peer_der)
    so the same seed/key_id always seals the same key pair.
    """
    name = "static"

    def __init__(self, seed: str) -> None:
        if not seed:
            raise ValueError("StaticOracle needs a non-empty seed")
        self._seed = seed.encode("utf-8")

    def derive_shared_secret(self, key_id: str, peer_public_key_der: bytes) -> Optional[bytes]:
        h = hashlib.sha256()
        h.update(self._seed)
        h.update(b"|ecdh|")
        h.update(key_id.encode("utf-8"))
        h.update(bytes(peer_public_key_der))
        return h.digest()
