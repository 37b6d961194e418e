# MIT License © 2025 Motohiro Suzuki
"""
sealing/crypto/

Pure, deterministic key derivation: NUMS point search, scalar normalization,
and best-effort wiping of secret buffers. Nothing here does I/O.
"""
