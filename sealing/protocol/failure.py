# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from sealing.protocol.errors import SealingError


class FailureLayer(str, Enum):
    CRYPTO = "crypto"
    ORACLE = "oracle"
    STATE = "state"
    CONFIG = "config"
    TRANSPORT = "transport"


class FailurePhase(str, Enum):
    STARTUP = "startup"
    SEAL = "seal"
    READ = "read"


class FailureCode(str, Enum):
    ERR_ALREADY_SEALED = "ERR_ALREADY_SEALED"
    ERR_NOT_SEALED = "ERR_NOT_SEALED"
    ERR_ORACLE = "ERR_ORACLE"
    ERR_MISSING_SECRET = "ERR_MISSING_SECRET"
    ERR_INVALID_SECRET_LENGTH = "ERR_INVALID_SECRET_LENGTH"
    ERR_INVALID_KEY_ID = "ERR_INVALID_KEY_ID"
    ERR_BAD_REQUEST = "ERR_BAD_REQUEST"
    ERR_COUNTER_OVERFLOW = "ERR_COUNTER_OVERFLOW"
    ERR_CONFIG = "ERR_CONFIG"
    ERR_INTERNAL = "ERR_INTERNAL"


@dataclass(frozen=True)
class Failure:
    """
    Unified error carrier.
    detail is LOCAL-ONLY by default (MUST NOT be sent to HTTP clients).
    """
    layer: FailureLayer
    phase: FailurePhase
    code: FailureCode
    fatal: bool
    detail: Optional[str] = None

    def redacted(self) -> "Failure":
        return Failure(
            layer=self.layer,
            phase=self.phase,
            code=self.code,
            fatal=self.fatal,
            detail=None,
        )

    @property
    def message(self) -> str:
        return public_message(self.code)

    @staticmethod
    def from_error(err: "SealingError") -> "Failure":
        return Failure(
            layer=err.layer,
            phase=err.phase,
            code=err.code,
            fatal=err.fatal,
            detail=str(err) or None,
        )


class HttpStatus(int, Enum):
    """
    Status codes served for each failure. Keep values stable once published.
    """
    OK = 200
    NOT_FOUND = 404
    CONFLICT = 409
    UNPROCESSABLE = 422
    INTERNAL = 500

    @staticmethod
    def from_failure_code(code: FailureCode) -> "HttpStatus":
        m = {
            FailureCode.ERR_ALREADY_SEALED: HttpStatus.CONFLICT,
            FailureCode.ERR_NOT_SEALED: HttpStatus.NOT_FOUND,
            FailureCode.ERR_ORACLE: HttpStatus.INTERNAL,
            FailureCode.ERR_MISSING_SECRET: HttpStatus.INTERNAL,
            FailureCode.ERR_INVALID_SECRET_LENGTH: HttpStatus.INTERNAL,
            FailureCode.ERR_INVALID_KEY_ID: HttpStatus.UNPROCESSABLE,
            FailureCode.ERR_BAD_REQUEST: HttpStatus.UNPROCESSABLE,
        }
        return m.get(code, HttpStatus.INTERNAL)


_PUBLIC_MESSAGES = {
    FailureCode.ERR_ALREADY_SEALED: "Secret has already been generated.",
    FailureCode.ERR_NOT_SEALED: "Secret not found. Please generate it first.",
    FailureCode.ERR_ORACLE: "KMS operation failed.",
    FailureCode.ERR_MISSING_SECRET: "KMS returned no secret.",
    FailureCode.ERR_INVALID_SECRET_LENGTH: "Invalid secret length from KMS.",
    FailureCode.ERR_INVALID_KEY_ID: "key_id must be a non-empty string.",
    FailureCode.ERR_BAD_REQUEST: "Request body must be JSON with a 'key_id' string.",
}


def public_message(code: FailureCode) -> str:
    return _PUBLIC_MESSAGES.get(code, "Internal error.")
