# MIT License © 2025 Motohiro Suzuki
"""
sealing/

One-time secret sealing service:
- NUMS P-256 public key (crypto.nums)
- ECDH shared secret from a key-agreement oracle (keysources)
- secp256k1 key pair sealed exactly once (protocol.sealing)
"""

__version__ = "0.1.0"
