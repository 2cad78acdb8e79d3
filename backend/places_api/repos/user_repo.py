from motor.motor_asyncio import AsyncIOMotorDatabase, AsyncIOMotorClientSession

from places_api.repos.object_ids import to_object_id

class UserRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db["users"]

    async def find_by_id(self, user_id: str) -> dict | None:
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return await self.collection.find_one({"_id": oid})

    async def add_place(self, user_id: str, place_id, session: AsyncIOMotorClientSession | None = None) -> bool:
        """Appends a place to the user's list. Returns False if the user is gone."""
        result = await self.collection.update_one(
            {"_id": to_object_id(user_id)},
            {"$push": {"places": to_object_id(place_id)}},
            session=session
        )
        return result.matched_count == 1

    async def remove_place(self, user_id: str, place_id, session: AsyncIOMotorClientSession | None = None) -> bool:
        """Pulls every reference to the place from the user's list."""
        result = await self.collection.update_one(
            {"_id": to_object_id(user_id)},
            {"$pull": {"places": to_object_id(place_id)}},
            session=session
        )
        return result.matched_count == 1
