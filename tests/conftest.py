import pytest

from classical_engine import log
from classical_engine.engine import CIPHER_REGISTRY


@pytest.fixture(autouse=True)
def quiet_logs():
    log.set_verbose(False)
    yield
    log.set_verbose(False)


@pytest.fixture
def registry_snapshot():
    saved = dict(CIPHER_REGISTRY)
    yield CIPHER_REGISTRY
    CIPHER_REGISTRY.clear()
    CIPHER_REGISTRY.update(saved)
