from motor.motor_asyncio import AsyncIOMotorDatabase, AsyncIOMotorClientSession
from pymongo import ReturnDocument

from places_api.repos.object_ids import to_object_id

class PlaceRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db["places"]

    async def find_by_id(self, place_id: str) -> dict | None:
        oid = to_object_id(place_id)
        if oid is None:
            return None
        return await self.collection.find_one({"_id": oid})

    async def find_many(self, place_ids: list) -> list[dict]:
        """
        Resolves a list of place ids to documents, keeping the order of the ids.
        Ids with no matching document are skipped.
        """
        oids = [oid for oid in (to_object_id(p) for p in place_ids) if oid is not None]
        if not oids:
            return []
        cursor = self.collection.find({"_id": {"$in": oids}})
        docs = await cursor.to_list(length=len(oids))
        by_id = {doc["_id"]: doc for doc in docs}
        return [by_id[oid] for oid in oids if oid in by_id]

    async def insert(self, doc: dict, session: AsyncIOMotorClientSession | None = None) -> dict:
        result = await self.collection.insert_one(doc, session=session)
        doc["_id"] = result.inserted_id
        return doc

    async def update_fields(self, place_id: str, fields: dict) -> dict | None:
        return await self.collection.find_one_and_update(
            {"_id": to_object_id(place_id)},
            {"$set": fields},
            return_document=ReturnDocument.AFTER
        )

    async def delete(self, place_id: str, session: AsyncIOMotorClientSession | None = None) -> bool:
        result = await self.collection.delete_one({"_id": to_object_id(place_id)}, session=session)
        return result.deleted_count == 1
