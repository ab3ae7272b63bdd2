"""Profile store — one document per identity in `users_profile`."""

from typing import Optional

import pymongo
from motor.motor_asyncio import AsyncIOMotorCollection

from posadmin.utils import serialize_doc
from .schemas import Profile


def _to_profile(doc: dict) -> Profile:
    return Profile(**serialize_doc(doc))


def _filters(
    role: Optional[str] = None,
    created_by: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> dict:
    filters: dict = {}
    if role is not None:
        filters["role"] = role
    if created_by is not None:
        filters["created_by"] = created_by
    if is_active is not None:
        filters["is_active"] = is_active
    return filters


class ProfileStore:
    """
    Equality-filtered access to the profile collection.

    Documents look like:
        {"_id": <identity id>, "fullname": str, "role": str,
         "created_by": str | None, "created_at": datetime, "is_active": bool}
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def get(self, profile_id: str) -> Optional[Profile]:
        doc = await self.collection.find_one({"_id": profile_id})
        return _to_profile(doc) if doc else None

    async def list(
        self,
        role: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> list[Profile]:
        """All matching profiles, newest first."""
        cursor = self.collection.find(_filters(role, created_by)).sort(
            "created_at", pymongo.DESCENDING
        )
        return [_to_profile(doc) async for doc in cursor]

    async def count(
        self,
        role: Optional[str] = None,
        created_by: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> int:
        return await self.collection.count_documents(
            _filters(role, created_by, is_active)
        )

    async def insert(self, profile: Profile) -> Profile:
        doc = profile.model_dump(exclude={"id"})
        doc["_id"] = profile.id
        if profile.role is not None:
            doc["role"] = profile.role.value
        await self.collection.insert_one(doc)
        return profile

    async def update(self, profile_id: str, fields: dict) -> Optional[Profile]:
        """Set `fields` on one profile and return the updated row."""
        doc = await self.collection.find_one_and_update(
            {"_id": profile_id},
            {"$set": fields},
            return_document=pymongo.ReturnDocument.AFTER,
        )
        return _to_profile(doc) if doc else None

    async def delete(self, profile_id: str) -> bool:
        result = await self.collection.delete_one({"_id": profile_id})
        return result.deleted_count > 0
