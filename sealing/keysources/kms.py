# MIT License © 2025 Motohiro Suzuki
"""
keysources/kms.py

AWS KMS DeriveSharedSecret adapter.

- KeyAgreementAlgorithm is always ECDH
- PublicKey is the NUMS key as DER SubjectPublicKeyInfo
- endpoint_url may point at a local proxy (AWS_KMS_ENDPOINT)

Fail-closed: any botocore error raises OracleError. No retries beyond what
botocore does itself.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from sealing.keysources.base import SharedSecretOracle
from sealing.protocol.errors import OracleError

log = logging.getLogger(__name__)

KEY_AGREEMENT_ALGORITHM = "ECDH"


def make_kms_client(*, endpoint_url: Optional[str] = None, region: Optional[str] = None) -> Any:
    kwargs: dict[str, Any] = {}
    if endpoint_url:
        kwargs["endpoint_url"] = endpoint_url
    if region:
        kwargs["region_name"] = region
    return boto3.client("kms", **kwargs)


class KMSOracle(SharedSecretOracle):
    name = "kms"

    def __init__(self, client: Any) -> None:
        self.client = client

    def derive_shared_secret(self, key_id: str, peer_public_key_der: bytes) -> Optional[bytes]:
        try:
            resp = self.client.derive_shared_secret(
                KeyId=key_id,
                KeyAgreementAlgorithm=KEY_AGREEMENT_ALGORITHM,
                PublicKey=bytes(peer_public_key_der),
            )
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "Unknown")
            log.error("kms derive_shared_secret rejected key_id=%s code=%s", key_id, code)
            raise OracleError(f"KMS rejected DeriveSharedSecret: {code}") from e
        except BotoCoreError as e:
            log.error("kms derive_shared_secret failed key_id=%s error=%s", key_id, type(e).__name__)
            raise OracleError(f"KMS unreachable: {e}") from e

        return resp.get("SharedSecret")
