# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

from typing import Optional


class SharedSecretOracle:
    """
    Key-agreement oracle: ECDH between a remote private key (named by key_id)
    and the peer public key we send.

    Implementations raise OracleError on transport failure / rejection and
    return None when the answer carries no secret.
    """
    name: str

    def derive_shared_secret(self, key_id: str, peer_public_key_der: bytes) -> Optional[bytes]:
        raise NotImplementedError
