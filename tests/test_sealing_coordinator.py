# MIT License © 2025 Motohiro Suzuki
"""
tests/test_sealing_coordinator.py

Sealing state machine:
- UNSEALED: public_key() -> NotSealed
- seal() commits exactly once, even under N concurrent callers
- once SEALED, seal() fails with AlreadySealed WITHOUT calling the oracle
- failures before commit leave the state UNSEALED (retry works)
"""

import threading

import pytest

from sealing.protocol.errors import AlreadySealed, InvalidSecretLength, NotSealed, OracleError
from sealing.protocol.sealing import SealingCoordinator, SealingState, SetOnceCell
from tests.fakes import BarrierOracle, FixedOracle, FlakyOracle


def test_end_to_end_golden(golden, nums_key, e2e_secret):
    e2e = golden["end_to_end"]
    c = SealingCoordinator(FixedOracle(e2e_secret), nums_key)

    pub = c.seal(e2e["key_id"])

    assert pub.hex() == e2e["public_key_hex"]
    assert c.public_key() == pub
    assert c.state == SealingState.SEALED


def test_read_before_write(nums_key, e2e_secret):
    c = SealingCoordinator(FixedOracle(e2e_secret), nums_key)
    with pytest.raises(NotSealed):
        c.public_key()
    assert c.state == SealingState.UNSEALED

    pub = c.seal("test-key")
    assert c.public_key() == pub
    assert c.public_key() == pub


def test_second_seal_rejected_without_oracle_call(nums_key, e2e_secret):
    o = FixedOracle(e2e_secret)
    c = SealingCoordinator(o, nums_key)
    first = c.seal("test-key")

    with pytest.raises(AlreadySealed) as e:
        c.seal("other-key")

    assert e.value.raced is False
    assert len(o.calls) == 1
    assert c.public_key() == first


@pytest.mark.parametrize("n", [31, 33])
def test_bad_secret_length_leaves_unsealed(nums_key, n):
    c = SealingCoordinator(FixedOracle(b"\x05" * n), nums_key)
    with pytest.raises(InvalidSecretLength):
        c.seal("test-key")
    assert c.is_sealed is False
    with pytest.raises(NotSealed):
        c.public_key()


def test_oracle_outage_then_retry(nums_key, golden, e2e_secret):
    c = SealingCoordinator(FlakyOracle(e2e_secret, failures=1), nums_key)

    with pytest.raises(OracleError):
        c.seal("test-key")
    assert c.is_sealed is False

    pub = c.seal("test-key")
    assert pub.hex() == golden["end_to_end"]["public_key_hex"]


def test_concurrent_seal_exactly_once(nums_key):
    n = 8
    oracle = BarrierOracle(b"\x11" * 32, parties=n)
    c = SealingCoordinator(oracle, nums_key)

    ok = []
    raced = []
    errors = []
    lock = threading.Lock()

    def worker(i: int) -> None:
        try:
            pub = c.seal(f"key-{i}")
            with lock:
                ok.append(pub)
        except AlreadySealed as e:
            with lock:
                raced.append(e)
        except Exception as e:  # pragma: no cover
            with lock:
                errors.append(e)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=20)

    assert errors == []
    assert len(ok) == 1
    assert len(raced) == n - 1
    # every caller reached the oracle; only the commit is exclusive
    assert len(oracle.calls) == n
    assert all(e.raced for e in raced)
    assert c.public_key() == ok[0]


def test_set_once_cell():
    cell = SetOnceCell()
    assert cell.get() is None
    assert cell.set("a") is True
    assert cell.set("b") is False
    assert cell.get() == "a"
    with pytest.raises(ValueError):
        SetOnceCell().set(None)
