# MIT License © 2025 Motohiro Suzuki
"""
runners/run_server.py

Startup order:
  1) config (YAML + env)
  2) NUMS key, computed once before any request is served
  3) oracle (KMS client, or static dev oracle)
  4) coordinator + Flask app, threaded server

Exit status 2 on configuration error or NUMS counter overflow.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

from sealing.crypto.nums import NumsKey, generate_nums_key
from sealing.keysources.factory import make_oracle
from sealing.protocol.config import ServiceConfig, load_config
from sealing.protocol.errors import ConfigError, CounterOverflow
from sealing.protocol.sealing import SealingCoordinator
from sealing.transport.http_app import create_app

log = logging.getLogger("sealing.server")


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def build_nums_key(cfg: ServiceConfig) -> NumsKey:
    nums = generate_nums_key(cfg.nums_seed.encode("utf-8"))
    log.info("Using P-256 NUMS public key (DER, base64): %s", nums.der_b64())
    return nums


def build_coordinator(cfg: ServiceConfig) -> SealingCoordinator:
    nums = build_nums_key(cfg)
    oracle = make_oracle(cfg)
    return SealingCoordinator(oracle, nums)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    config_path = args[0] if args else None

    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        print(f"[sealing] config error: {e}", file=sys.stderr)
        return 2

    setup_logging(cfg.log_level)

    try:
        coordinator = build_coordinator(cfg)
    except CounterOverflow as e:
        log.critical("NUMS key generation failed: %s", e)
        return 2
    except ConfigError as e:
        log.critical("config error: %s", e)
        return 2

    app = create_app(coordinator)
    log.info("listening on %s:%d", cfg.host, cfg.port)
    app.run(host=cfg.host, port=cfg.port, threaded=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
