import pytest

from docsign_core.keystore import KeyStore
from docsign_core.service import SigningService


@pytest.fixture
def store(tmp_path):
    return KeyStore(tmp_path / "appdata")


@pytest.fixture
def service(store):
    return SigningService(store)


@pytest.fixture
def document(tmp_path):
    path = tmp_path / "contract.txt"
    path.write_bytes(b"I agree to the terms.\n")
    return path
