# MIT License © 2025 Motohiro Suzuki
"""
tools/check_golden_vectors.py

Recomputes every vector in vectors/golden.yml:
  - NUMS key (seed -> counter, prefix, DER)
  - scalar normalization cases
  - end-to-end sealed public key for a fixed oracle secret

If anything drifted, CI MUST FAIL.
"""

import base64
import sys
from pathlib import Path

import yaml

from sealing.crypto.nums import generate_nums_key
from sealing.crypto.scalar import derive_sealed_keypair, normalize_scalar

PROJECT_ROOT = Path(__file__).resolve().parents[1]
GOLDEN = PROJECT_ROOT / "vectors" / "golden.yml"


def fail(msg: str):
    print(f"[FAIL] {msg}")
    sys.exit(1)


def check(data: dict) -> list:
    problems = []

    nums = data.get("nums") or {}
    key = generate_nums_key(str(nums.get("seed", "")).encode("utf-8"))
    if key.counter != nums.get("counter"):
        problems.append(f"nums: counter {key.counter} != {nums.get('counter')}")
    if key.prefix != nums.get("prefix"):
        problems.append(f"nums: prefix 0x{key.prefix:02x} != {nums.get('prefix')}")
    if key.der_b64() != nums.get("spki_der_b64"):
        problems.append("nums: DER mismatch")

    for case in data.get("normalize", []):
        name = case.get("name", "?")
        secret = bytes.fromhex(case["secret_hex"])
        got = normalize_scalar(secret)
        if got != int(case["scalar_hex"], 16):
            problems.append(f"normalize/{name}: scalar {got:064x}")
        pub = derive_sealed_keypair(secret).public_key_bytes
        if pub.hex() != case["public_key_hex"]:
            problems.append(f"normalize/{name}: public key mismatch")

    e2e = data.get("end_to_end") or {}
    if e2e:
        pub = derive_sealed_keypair(bytes.fromhex(e2e["secret_hex"])).public_key_bytes
        if pub.hex() != e2e["public_key_hex"]:
            problems.append("end_to_end: public key hex mismatch")
        if base64.b64encode(pub).decode("ascii") != e2e["public_key_b64"]:
            problems.append("end_to_end: public key base64 mismatch")

    return problems


def main():
    if not GOLDEN.exists():
        fail(f"golden vectors not found: {GOLDEN}")

    data = yaml.safe_load(GOLDEN.read_text())
    if not data:
        fail("golden.yml is empty")

    problems = check(data)
    if problems:
        for p in problems:
            print(f"[FAIL] {p}")
        sys.exit(1)

    print(f"[OK] all golden vectors reproduce ({GOLDEN.relative_to(PROJECT_ROOT)})")


if __name__ == "__main__":
    main()
