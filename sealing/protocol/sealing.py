# MIT License © 2025 Motohiro Suzuki
"""
protocol/sealing.py

Sealing state machine:  UNSEALED --seal()--> SEALED  (terminal)

Implementation rule:
  - acquire + normalize run WITHOUT any lock (the oracle call may block)
  - SetOnceCell.set() is the ONLY place where the state switches
  - a losing candidate is discarded, the caller gets AlreadySealed(raced=True)
  - any failure before set() leaves the state UNSEALED (retry allowed)
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Generic, Optional, TypeVar

from sealing.crypto.nums import NumsKey
from sealing.crypto.scalar import SealedKeyPair, derive_sealed_keypair
from sealing.keysources.acquire import acquire_shared_secret
from sealing.keysources.base import SharedSecretOracle
from sealing.protocol.errors import AlreadySealed, NotSealed

log = logging.getLogger(__name__)

T = TypeVar("T")


class SealingState(str, Enum):
    UNSEALED = "UNSEALED"
    SEALED = "SEALED"


class SetOnceCell(Generic[T]):
    """
    Single-assignment slot.
    set() checks and assigns inside the lock; get() is a plain reference read.
    """
    __slots__ = ("_lock", "_value")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: Optional[T] = None

    def get(self) -> Optional[T]:
        return self._value

    def set(self, value: T) -> bool:
        if value is None:
            raise ValueError("SetOnceCell cannot hold None")
        with self._lock:
            if self._value is not None:
                return False
            self._value = value
            return True


class SealingCoordinator:
    def __init__(self, oracle: SharedSecretOracle, nums_key: NumsKey) -> None:
        self.oracle = oracle
        self.nums_key = nums_key
        self._cell: SetOnceCell[SealedKeyPair] = SetOnceCell()

    @property
    def state(self) -> SealingState:
        return SealingState.SEALED if self._cell.get() is not None else SealingState.UNSEALED

    @property
    def is_sealed(self) -> bool:
        return self._cell.get() is not None

    def seal(self, key_id: str) -> bytes:
        """
        Derive and commit the key pair for key_id. Returns the sealed public key
        (65-byte uncompressed secp256k1 point).
        """
        if self.is_sealed:
            raise AlreadySealed("secret has already been generated")

        secret = acquire_shared_secret(self.oracle, key_id, self.nums_key.spki_der)
        candidate = derive_sealed_keypair(secret)

        if not self._cell.set(candidate):
            log.warning("seal lost commit race key_id=%s", key_id)
            raise AlreadySealed("secret has already been generated (race condition)", raced=True)

        log.info("sealed ephemeral secp256k1 key pair key_id=%s oracle=%s", key_id, self.oracle.name)
        return candidate.public_key_bytes

    def public_key(self) -> bytes:
        kp = self._cell.get()
        if kp is None:
            raise NotSealed("secret not generated yet")
        return kp.public_key_bytes
