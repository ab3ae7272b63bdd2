import os

# Cheap hashing and a fixed signing key for the whole test session
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret")

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from posadmin.accounts.schemas import Profile
from posadmin.app import create_app
from posadmin.auth.context import Viewer
from posadmin.auth.helpers import create_access_token, hash_password
from posadmin.auth.schemas import Identity

BASE_TIME = datetime(2026, 1, 1, 9, 0, 0, tzinfo=timezone.utc)


class InMemoryProfileStore:
    def __init__(self):
        self.rows: dict[str, Profile] = {}
        self.fail_inserts = False

    def seed(self, profile: Profile) -> Profile:
        self.rows[profile.id] = profile
        return profile

    async def get(self, profile_id: str) -> Optional[Profile]:
        return self.rows.get(profile_id)

    def _match(self, p: Profile, role=None, created_by=None, is_active=None) -> bool:
        if role is not None and (p.role.value if p.role else None) != role:
            return False
        if created_by is not None and p.created_by != created_by:
            return False
        if is_active is not None and p.is_active != is_active:
            return False
        return True

    async def list(self, role=None, created_by=None) -> list[Profile]:
        items = [p for p in self.rows.values() if self._match(p, role, created_by)]
        items.sort(key=lambda p: p.created_at, reverse=True)
        return items

    async def count(self, role=None, created_by=None, is_active=None) -> int:
        return sum(1 for p in self.rows.values() if self._match(p, role, created_by, is_active))

    async def insert(self, profile: Profile) -> Profile:
        if self.fail_inserts:
            raise PyMongoError("insert rejected")
        self.rows[profile.id] = profile
        return profile

    async def update(self, profile_id: str, fields: dict) -> Optional[Profile]:
        current = self.rows.get(profile_id)
        if current is None:
            return None
        data = current.model_dump()
        data.update(fields)
        self.rows[profile_id] = Profile(**data)
        return self.rows[profile_id]

    async def delete(self, profile_id: str) -> bool:
        return self.rows.pop(profile_id, None) is not None


class InMemoryIdentityStore:
    def __init__(self):
        self.docs: dict[str, dict] = {}

    async def find_by_email(self, email: str) -> Optional[dict]:
        email = email.lower()
        for doc in self.docs.values():
            if doc["email"] == email:
                return doc
        return None

    async def get(self, identity_id: str) -> Optional[dict]:
        return self.docs.get(identity_id)

    async def insert(self, doc: dict) -> dict:
        self.docs[doc["_id"]] = doc
        return doc

    async def delete(self, identity_id: str) -> bool:
        return self.docs.pop(identity_id, None) is not None


def make_profile(
    profile_id: str,
    role="CASHIER",
    fullname: Optional[str] = None,
    created_by: Optional[str] = None,
    is_active: bool = True,
    minutes: int = 0,
) -> Profile:
    return Profile(
        id=profile_id,
        fullname=fullname or f"User {profile_id}",
        role=role,
        created_by=created_by,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        is_active=is_active,
    )


@pytest.fixture
def profiles():
    return InMemoryProfileStore()


@pytest.fixture
def identities():
    return InMemoryIdentityStore()


@pytest.fixture
def seed(profiles, identities):
    """Seed identity + profile and return a Bearer header for that account."""

    def _seed(profile_id: str, role="CASHIER", password: str = "secret123", **kwargs) -> dict:
        email = f"{profile_id.lower()}@example.com"
        identities.docs[profile_id] = {
            "_id": profile_id,
            "email": email,
            "password": hash_password(password),
            "metadata": {},
            "created_at": BASE_TIME,
        }
        if role is not False:
            profiles.seed(make_profile(profile_id, role=role, **kwargs))
        token = create_access_token({"sub": profile_id, "email": email})
        return {"Authorization": f"Bearer {token}"}

    return _seed


@pytest.fixture
def app(profiles, identities):
    return create_app(profile_store=profiles, identity_store=identities)


@pytest.fixture
def client(app):
    return TestClient(app)


def viewer_for(profile: Profile) -> Viewer:
    return Viewer(
        identity=Identity(id=profile.id, email=f"{profile.id.lower()}@example.com"),
        profile=profile,
    )
