"""Identity provider + sign-in flow."""

import uuid
from datetime import datetime, timezone
from typing import Optional

from posadmin.accounts.store import ProfileStore
from posadmin.utils import Logger
from posadmin.utils.exceptions import (
    AuthenticationError,
    DuplicateError,
    ForbiddenError,
)
from .helpers import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from .schemas import Identity, TokenResponse
from .store import IdentityStore

logger = Logger("auth")


def _to_identity(doc: dict) -> Identity:
    return Identity(id=doc["_id"], email=doc["email"], created_at=doc.get("created_at"))


class IdentityProvider:
    """Registers credentials and resolves session tokens to identities."""

    def __init__(self, store: IdentityStore):
        self.store = store

    async def sign_up(
        self, email: str, password: str, metadata: dict | None = None
    ) -> Identity:
        email = email.strip().lower()
        if await self.store.find_by_email(email):
            raise DuplicateError("User with this email already exists")

        doc = {
            "_id": str(uuid.uuid4()),
            "email": email,
            "password": hash_password(password),
            "metadata": metadata or {},
            "created_at": datetime.now(timezone.utc),
        }
        await self.store.insert(doc)
        return _to_identity(doc)

    async def sign_in(self, email: str, password: str) -> Identity:
        doc = await self.store.find_by_email(email.strip().lower())
        if not doc or not verify_password(password, doc.get("password", "")):
            logger.warning(f"Failed sign-in for {email}")
            raise AuthenticationError("Invalid credentials")
        return _to_identity(doc)

    def issue_token(self, identity: Identity) -> str:
        return create_access_token({"sub": identity.id, "email": identity.email})

    async def get_user(self, token: Optional[str]) -> Optional[Identity]:
        """Resolve a session token to its identity, or None."""
        if not token:
            return None
        try:
            payload = decode_access_token(token)
        except AuthenticationError:
            return None

        identity_id = payload.get("sub")
        if not identity_id:
            return None
        doc = await self.store.get(identity_id)
        return _to_identity(doc) if doc else None

    async def delete_user(self, identity_id: str) -> bool:
        return await self.store.delete(identity_id)


class AuthService:
    """Sign-in: verify credentials, refuse deactivated profiles, issue a session."""

    def __init__(self, identities: IdentityProvider, profiles: ProfileStore):
        self.identities = identities
        self.profiles = profiles

    async def authenticate(self, email: str, password: str) -> TokenResponse:
        identity = await self.identities.sign_in(email, password)

        profile = await self.profiles.get(identity.id)
        if profile is not None and not profile.is_active:
            logger.warning(f"Deactivated account attempted sign-in: {identity.id}")
            raise ForbiddenError("Account is deactivated")

        user = {"id": identity.id, "email": identity.email}
        if profile is not None:
            user.update(profile.model_dump(mode="json"))

        return TokenResponse(
            access_token=self.identities.issue_token(identity),
            user=user,
        )
