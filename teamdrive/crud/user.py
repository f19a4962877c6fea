from typing import Optional

from pydantic import BaseModel

from teamdrive.core.exceptions import NotFoundError
from teamdrive.crud.base import BaseCRUD, to_object_id
from teamdrive.models.user import User


class UserCRUD(BaseCRUD[User, BaseModel]):
    """Read-only lookups; users are managed by the account service"""

    entity = "user"

    def __init__(self):
        super().__init__(User)

    async def get_user_by_id(self, user_id: str) -> User:
        user = await self._run(self.model.find_one({"_id": to_object_id(user_id, self.entity)}), "get_user_by_id")
        if not user:
            raise NotFoundError("User not found")
        return user

    async def get_by_clerk_id(self, clerk_id: str) -> Optional[User]:
        return await self._run(self.model.find_one({"clerk_id": clerk_id}), "get_by_clerk_id")


user_crud = UserCRUD()
