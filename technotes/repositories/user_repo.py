"""User Directory: lectura de usuarios (activo + roles) por id."""
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from technotes.core.config import settings
from technotes.domain.models import User
from technotes.domain.roles import RoleSet
from technotes.repositories.ids import parse_object_id


class UserRepository:
    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._users = db[settings.users_collection]

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Obtiene usuario por id (str); None si no existe o el id no es válido."""
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        doc = await self._users.find_one({"_id": oid}, {"active": 1, "roles": 1})
        if not doc:
            return None
        raw_roles = doc.get("roles")
        return User(
            id=str(doc["_id"]),
            active=bool(doc.get("active", False)),
            roles=RoleSet.from_strings(raw_roles),
            has_roles=isinstance(raw_roles, list) and len(raw_roles) > 0,
        )
