# MIT License © 2025 Motohiro Suzuki
"""
protocol/config.py

ServiceConfig resolution order:
  1) dataclass defaults
  2) YAML file (explicit path, or env SEALING_CONFIG)
  3) environment variables (PORT, AWS_KMS_ENDPOINT, ...)

YAML keys use the field names (port, kms_endpoint, oracle, ...).
Unknown keys are ignored.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from sealing.protocol.errors import ConfigError

DEFAULT_NUMS_SEED = "This is a P-256 NUMS key for KMS"

ORACLES = ("kms", "static")

ENV_VARS = {
    "host": "HOST",
    "port": "PORT",
    "kms_endpoint": "AWS_KMS_ENDPOINT",
    "region": "AWS_REGION",
    "oracle": "SEALING_ORACLE",
    "static_seed": "SEALING_STATIC_SEED",
    "nums_seed": "SEALING_NUMS_SEED",
    "log_level": "LOG_LEVEL",
}


@dataclass(frozen=True)
class ServiceConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    kms_endpoint: Optional[str] = None
    region: Optional[str] = None
    oracle: str = "kms"
    static_seed: Optional[str] = None
    nums_seed: str = DEFAULT_NUMS_SEED
    log_level: str = "INFO"

    def validated(self) -> "ServiceConfig":
        try:
            port = int(self.port)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"port must be an integer, got {self.port!r}") from e
        if not 0 < port <= 65535:
            raise ConfigError(f"port out of range: {port}")

        oracle = str(self.oracle).strip().lower()
        if oracle not in ORACLES:
            raise ConfigError(f"unknown oracle: {self.oracle!r} (expected one of {ORACLES})")
        if oracle == "static" and not self.static_seed:
            raise ConfigError("oracle 'static' requires static_seed (SEALING_STATIC_SEED)")

        if not self.nums_seed:
            raise ConfigError("nums_seed must not be empty")

        return replace(
            self,
            port=port,
            oracle=oracle,
            kms_endpoint=self.kms_endpoint or None,
            region=self.region or None,
            log_level=str(self.log_level).upper(),
        )


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text())
    except OSError as e:
        raise ConfigError(f"cannot read config file: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file must hold a mapping: {path}")
    return data


def load_config(path: str | Path | None = None, environ: Mapping[str, str] | None = None) -> ServiceConfig:
    env = os.environ if environ is None else environ
    known = {f.name for f in fields(ServiceConfig)}
    values: dict[str, Any] = {}

    if path is None:
        path = env.get("SEALING_CONFIG") or None
    if path is not None:
        for k, v in _read_yaml(Path(path)).items():
            if k in known:
                values[k] = v

    for name, var in ENV_VARS.items():
        v = env.get(var)
        if v is not None and v.strip():
            values[name] = v.strip()

    return ServiceConfig(**values).validated()
