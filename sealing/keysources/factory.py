# MIT License © 2025 Motohiro Suzuki
"""
keysources/factory.py

Oracle selection from ServiceConfig.oracle (case-insensitive):
  - "kms"    -> KMSOracle over a boto3 client (endpoint override honoured)
  - "static" -> StaticOracle (dev only)
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sealing.keysources.base import SharedSecretOracle
from sealing.keysources.kms import KMSOracle, make_kms_client
from sealing.keysources.static import StaticOracle
from sealing.protocol.config import ServiceConfig
from sealing.protocol.errors import ConfigError

log = logging.getLogger(__name__)


def make_oracle(cfg: ServiceConfig, *, kms_client: Optional[Any] = None) -> SharedSecretOracle:
    src = (cfg.oracle or "kms").lower()

    if src == "kms":
        if cfg.kms_endpoint:
            log.info("KMS proxy configured at: %s", cfg.kms_endpoint)
        else:
            log.info("KMS proxy is NOT configured, using default endpoint")
        client = kms_client or make_kms_client(endpoint_url=cfg.kms_endpoint, region=cfg.region)
        return KMSOracle(client)

    if src == "static":
        if not cfg.static_seed:
            raise ConfigError("oracle 'static' requires static_seed")
        log.warning("using StaticOracle: development only, sealed key is NOT secret")
        return StaticOracle(cfg.static_seed)

    raise ConfigError(f"Unknown oracle: {src}")
