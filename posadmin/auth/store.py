"""Identity store — credential records in the `auth_users` collection."""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import DuplicateKeyError

from posadmin.utils.exceptions import DuplicateError


class IdentityStore:
    """
    Thin wrapper over the identity collection.

    Documents look like:
        {"_id": <uuid str>, "email": str, "password": <bcrypt hash>,
         "metadata": {...}, "created_at": datetime}
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def ensure_indexes(self) -> None:
        """One identity per email; concurrent sign-ups race on this index."""
        await self.collection.create_index("email", unique=True, background=True)

    async def find_by_email(self, email: str) -> Optional[dict]:
        return await self.collection.find_one({"email": email.lower()})

    async def get(self, identity_id: str) -> Optional[dict]:
        return await self.collection.find_one({"_id": identity_id})

    async def insert(self, doc: dict) -> dict:
        try:
            await self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise DuplicateError("User with this email already exists")
        return doc

    async def delete(self, identity_id: str) -> bool:
        result = await self.collection.delete_one({"_id": identity_id})
        return result.deleted_count > 0
