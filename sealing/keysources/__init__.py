# MIT License © 2025 Motohiro Suzuki
"""
sealing/keysources/

Key-agreement oracles (KMS, static dev source) and the acquirer that
enforces the 32-byte shared-secret contract.
"""

from sealing.keysources.acquire import acquire_shared_secret
from sealing.keysources.base import SharedSecretOracle

__all__ = ["SharedSecretOracle", "acquire_shared_secret"]
