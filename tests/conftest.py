# MIT License © 2025 Motohiro Suzuki
import pytest

from sealing.crypto.nums import generate_nums_key
from tests.fakes import load_golden


@pytest.fixture(scope="session")
def golden():
    return load_golden()


@pytest.fixture(scope="session")
def nums_key():
    return generate_nums_key()


@pytest.fixture
def e2e_secret(golden):
    return bytes.fromhex(golden["end_to_end"]["secret_hex"])
