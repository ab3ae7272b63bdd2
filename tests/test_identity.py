from datetime import timedelta

import pytest

from posadmin.auth.helpers import create_access_token, decode_access_token
from posadmin.auth.service import AuthService, IdentityProvider
from posadmin.utils.exceptions import (
    AuthenticationError,
    DuplicateError,
    ForbiddenError,
)
from tests.conftest import make_profile


@pytest.fixture
def provider(identities):
    return IdentityProvider(identities)


@pytest.mark.asyncio
async def test_sign_up_stores_hashed_password(provider, identities):
    identity = await provider.sign_up("New@Example.com", "secret1", {"fullname": "New"})

    doc = identities.docs[identity.id]
    assert identity.email == "new@example.com"
    assert doc["password"] != "secret1"
    assert doc["metadata"] == {"fullname": "New"}


@pytest.mark.asyncio
async def test_sign_up_rejects_duplicate_email(provider):
    await provider.sign_up("a@example.com", "secret1")
    with pytest.raises(DuplicateError):
        await provider.sign_up("A@example.com", "secret2")


@pytest.mark.asyncio
async def test_sign_in(provider):
    created = await provider.sign_up("a@example.com", "secret1")

    identity = await provider.sign_in("a@example.com", "secret1")
    assert identity.id == created.id

    with pytest.raises(AuthenticationError):
        await provider.sign_in("a@example.com", "wrong")
    with pytest.raises(AuthenticationError):
        await provider.sign_in("nobody@example.com", "secret1")


@pytest.mark.asyncio
async def test_get_user_from_token(provider):
    created = await provider.sign_up("a@example.com", "secret1")
    token = provider.issue_token(created)

    identity = await provider.get_user(token)
    assert identity.id == created.id
    assert identity.email == "a@example.com"


@pytest.mark.asyncio
async def test_get_user_rejects_bad_tokens(provider):
    created = await provider.sign_up("a@example.com", "secret1")
    expired = create_access_token({"sub": created.id}, expires_delta=timedelta(minutes=-1))

    assert await provider.get_user(None) is None
    assert await provider.get_user("not-a-jwt") is None
    assert await provider.get_user(expired) is None
    assert await provider.get_user(create_access_token({"sub": "ghost"})) is None
    assert await provider.get_user(create_access_token({"email": "x@example.com"})) is None


@pytest.mark.asyncio
async def test_deleted_identity_no_longer_resolves(provider):
    created = await provider.sign_up("a@example.com", "secret1")
    token = provider.issue_token(created)

    assert await provider.delete_user(created.id) is True
    assert await provider.get_user(token) is None


def test_decode_rejects_tampered_token():
    header, _, signature = create_access_token({"sub": "x"}).split(".")
    _, payload, _ = create_access_token({"sub": "y"}).split(".")
    with pytest.raises(AuthenticationError):
        decode_access_token(".".join([header, payload, signature]))


@pytest.mark.asyncio
async def test_authenticate_returns_profile(provider, profiles):
    created = await provider.sign_up("a@example.com", "secret1")
    profiles.seed(make_profile(created.id, role="ADMIN", fullname="Ada"))

    result = await AuthService(provider, profiles).authenticate("a@example.com", "secret1")

    assert result.token_type == "bearer"
    assert result.user["role"] == "ADMIN"
    assert result.user["fullname"] == "Ada"
    assert (await provider.get_user(result.access_token)).id == created.id


@pytest.mark.asyncio
async def test_authenticate_refuses_deactivated_profile(provider, profiles):
    created = await provider.sign_up("a@example.com", "secret1")
    profiles.seed(make_profile(created.id, is_active=False))

    with pytest.raises(ForbiddenError):
        await AuthService(provider, profiles).authenticate("a@example.com", "secret1")
