# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

import logging

from sealing.crypto.scalar import SECRET_LEN
from sealing.keysources.base import SharedSecretOracle
from sealing.protocol.errors import InvalidKeyIdentifier, InvalidSecretLength, MissingSecret

log = logging.getLogger(__name__)


def acquire_shared_secret(oracle: SharedSecretOracle, key_id: str, peer_public_key_der: bytes) -> bytes:
    """
    Ask the oracle for ECDH(key_id, peer) and enforce its contract.

    Raises:
      InvalidKeyIdentifier  key_id empty (oracle is not called)
      OracleError           from the oracle itself
      MissingSecret         oracle answered without a secret
      InvalidSecretLength   secret is not exactly 32 bytes
    """
    if not isinstance(key_id, str) or not key_id.strip():
        raise InvalidKeyIdentifier("key_id must be a non-empty string")

    secret = oracle.derive_shared_secret(key_id, peer_public_key_der)

    if secret is None:
        log.error("oracle returned no secret oracle=%s key_id=%s", oracle.name, key_id)
        raise MissingSecret("oracle returned no shared secret")
    if not isinstance(secret, (bytes, bytearray, memoryview)):
        log.error("oracle returned malformed secret oracle=%s type=%s", oracle.name, type(secret).__name__)
        raise MissingSecret("oracle returned a non-bytes shared secret")

    secret = bytes(secret)
    if len(secret) != SECRET_LEN:
        # length only, never the bytes
        log.error("oracle secret length mismatch oracle=%s key_id=%s len=%d", oracle.name, key_id, len(secret))
        raise InvalidSecretLength(len(secret), SECRET_LEN)

    return secret
