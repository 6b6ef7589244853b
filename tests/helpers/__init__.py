from .providers import (
    GWEI,
    FakeProvider,
    LEGACY_SNAPSHOT,
    PRIORITY_FEE_SNAPSHOT,
    PRIORITY_ONLY_SNAPSHOT,
)
from .factories import (
    SEED_PHRASE,
    ACCOUNT0,
    ACCOUNT1,
    SENDER,
    RECIPIENT,
    BLOB_HASH,
    STORAGE_KEY,
    mk_access_list,
)

__all__ = [
    "GWEI",
    "FakeProvider",
    "LEGACY_SNAPSHOT",
    "PRIORITY_FEE_SNAPSHOT",
    "PRIORITY_ONLY_SNAPSHOT",
    "SEED_PHRASE",
    "ACCOUNT0",
    "ACCOUNT1",
    "SENDER",
    "RECIPIENT",
    "BLOB_HASH",
    "STORAGE_KEY",
    "mk_access_list",
]
