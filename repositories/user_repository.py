"""Repository for the `users` collection."""

from __future__ import annotations

from typing import Optional

from repositories.base import BaseRepository
from schemas.models.user import UserDoc


class UserRepository(BaseRepository[UserDoc]):
    collection_name = "users"
    model = UserDoc

    async def find_by_email(self, email: str) -> Optional[UserDoc]:
        doc = await self._col.find_one({"email": email})
        return self._to_model(doc)
