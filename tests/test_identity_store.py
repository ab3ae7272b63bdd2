import asyncio
from types import SimpleNamespace

import pytest
from pymongo.errors import DuplicateKeyError

from posadmin.auth.service import IdentityProvider
from posadmin.auth.store import IdentityStore
from posadmin.utils.exceptions import DuplicateError


class UniqueEmailCollection:
    """Collection double that enforces a unique index on `email`."""

    def __init__(self):
        self.docs: dict[str, dict] = {}
        self.indexes: list[tuple] = []

    async def create_index(self, key, **kwargs):
        self.indexes.append((key, kwargs))
        return f"{key}_1"

    async def find_one(self, query):
        await asyncio.sleep(0)
        for doc in self.docs.values():
            if all(doc.get(k) == v for k, v in query.items()):
                return doc
        return None

    async def insert_one(self, doc):
        if any(d["email"] == doc["email"] for d in self.docs.values()):
            raise DuplicateKeyError("E11000 duplicate key error: email")
        self.docs[doc["_id"]] = doc
        return SimpleNamespace(inserted_id=doc["_id"])

    async def delete_one(self, query):
        removed = self.docs.pop(query["_id"], None)
        return SimpleNamespace(deleted_count=1 if removed else 0)


@pytest.fixture
def collection():
    return UniqueEmailCollection()


@pytest.mark.asyncio
async def test_ensure_indexes_makes_email_unique(collection):
    await IdentityStore(collection).ensure_indexes()

    key, options = collection.indexes[0]
    assert key == "email"
    assert options["unique"] is True


@pytest.mark.asyncio
async def test_duplicate_key_becomes_conflict(collection):
    store = IdentityStore(collection)
    await store.insert({"_id": "1", "email": "a@example.com"})

    with pytest.raises(DuplicateError) as exc_info:
        await store.insert({"_id": "2", "email": "a@example.com"})
    assert exc_info.value.status_code == 409


@pytest.mark.asyncio
async def test_concurrent_sign_ups_keep_one_identity(collection):
    provider = IdentityProvider(IdentityStore(collection))

    results = await asyncio.gather(
        provider.sign_up("same@example.com", "secret1"),
        provider.sign_up("same@example.com", "secret2"),
        return_exceptions=True,
    )

    assert sum(isinstance(r, DuplicateError) for r in results) == 1
    assert len(collection.docs) == 1
