"""
Test bootstrap:
- Force-add src to sys.path (collection-time safe)
- Make tests/helpers importable as ``helpers``
- Provide scripted providers and a deterministic seed phrase
"""
import sys
import pathlib

import pytest

TESTS_DIR = pathlib.Path(__file__).parent
SRC = TESTS_DIR.parent / "src"

for path in (SRC, TESTS_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from helpers import FakeProvider, LEGACY_SNAPSHOT, PRIORITY_FEE_SNAPSHOT, SEED_PHRASE  # noqa: E402


@pytest.fixture
def seed_phrase():
    """Seed phrase with known derived accounts."""
    return SEED_PHRASE


@pytest.fixture
def provider():
    """Provider whose network reports priority fees."""
    return FakeProvider(snapshot=PRIORITY_FEE_SNAPSHOT)


@pytest.fixture
def legacy_provider():
    """Provider whose network reports only a legacy gas price."""
    return FakeProvider(snapshot=LEGACY_SNAPSHOT)
