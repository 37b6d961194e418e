# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

from sealing.protocol.failure import FailureCode, FailureLayer, FailurePhase


class SealingError(Exception):
    code = FailureCode.ERR_INTERNAL
    layer = FailureLayer.STATE
    phase = FailurePhase.SEAL
    fatal = False


class AlreadySealed(SealingError):
    """Idempotent conflict: a key pair is already committed."""
    code = FailureCode.ERR_ALREADY_SEALED

    def __init__(self, message: str = "already sealed", *, raced: bool = False) -> None:
        super().__init__(message)
        self.raced = raced


class NotSealed(SealingError):
    code = FailureCode.ERR_NOT_SEALED
    phase = FailurePhase.READ


class InvalidKeyIdentifier(SealingError):
    code = FailureCode.ERR_INVALID_KEY_ID
    layer = FailureLayer.TRANSPORT


class OracleError(SealingError):
    """Oracle unreachable or rejected the request. Caller may retry."""
    code = FailureCode.ERR_ORACLE
    layer = FailureLayer.ORACLE


class MissingSecret(SealingError):
    """Oracle answered without a secret payload."""
    code = FailureCode.ERR_MISSING_SECRET
    layer = FailureLayer.ORACLE


class InvalidSecretLength(SealingError):
    code = FailureCode.ERR_INVALID_SECRET_LENGTH
    layer = FailureLayer.ORACLE

    def __init__(self, length: int, expected: int = 32) -> None:
        super().__init__(f"shared secret length {length} != {expected}")
        self.length = length
        self.expected = expected


class CounterOverflow(SealingError):
    """NUMS search exhausted the u32 counter space."""
    code = FailureCode.ERR_COUNTER_OVERFLOW
    layer = FailureLayer.CRYPTO
    phase = FailurePhase.STARTUP
    fatal = True


class ConfigError(SealingError):
    code = FailureCode.ERR_CONFIG
    layer = FailureLayer.CONFIG
    phase = FailurePhase.STARTUP
    fatal = True
