import logging

from fastapi import UploadFile

from places_api.core.errors import AuthorizationError, HttpError, InternalError, NotFoundError
from places_api.core.logger import logs
from places_api.models.place_model import Place, PlaceCreate, PlaceUpdate
from places_api.models.user_model import User
from places_api.repos.object_ids import to_object_id
from places_api.repos.place_repo import PlaceRepository
from places_api.repos.user_repo import UserRepository
from places_api.services.geocoding_service import BaseGeocoder
from places_api.services.image_storage import ImageStorage


class PlacesService:
    """
    Place CRUD on top of the place and user collections.

    Create and delete touch both a place and its creator's ``places`` list;
    both writes go through ``transactions.transaction()`` so they commit
    together or not at all.
    """

    def __init__(
        self,
        place_repo: PlaceRepository,
        user_repo: UserRepository,
        transactions,
        geocoder: BaseGeocoder,
        storage: ImageStorage,
    ):
        self.place_repo = place_repo
        self.user_repo = user_repo
        self.transactions = transactions
        self.geocoder = geocoder
        self.storage = storage

    async def get_place_by_id(self, place_id: str) -> Place:
        try:
            doc = await self.place_repo.find_by_id(place_id)
        except Exception as e:
            logs.log(logging.ERROR, f"Place lookup failed for {place_id}: {str(e)}")
            raise InternalError("Something went wrong, could not find a place.")

        if not doc:
            raise NotFoundError("Could not find a place for the provided id.")

        return Place.from_document(doc)

    async def get_places_by_user_id(self, user_id: str) -> list[Place]:
        try:
            doc = await self.user_repo.find_by_id(user_id)
            user = User.from_document(doc) if doc else None
            docs = await self.place_repo.find_many(user.places) if user else []
        except Exception as e:
            logs.log(logging.ERROR, f"Fetching places for user {user_id} failed: {str(e)}")
            raise InternalError("Fetching places failed, please try again later.")

        # A user with no places is reported the same way as a missing user
        if not user or not docs:
            raise NotFoundError("Could not find places for the provided user id.")

        return [Place.from_document(doc) for doc in docs]

    async def create_place(self, data: PlaceCreate, image: UploadFile, user_id: str) -> Place:
        image_path = await self.storage.save(image)
        try:
            return await self._create_place(data, image_path, user_id)
        except Exception:
            self.storage.remove(image_path)
            raise

    async def _create_place(self, data: PlaceCreate, image_path: str, user_id: str) -> Place:
        if data.creator != user_id:
            logs.log(logging.WARNING, f"Submitted creator {data.creator} ignored, using caller {user_id}")

        location = await self.geocoder.get_coordinates(data.address)

        try:
            user = await self.user_repo.find_by_id(user_id)
        except Exception as e:
            logs.log(logging.ERROR, f"Owner lookup failed for {user_id}: {str(e)}")
            raise InternalError("Creating place failed, please try again.")

        if not user:
            raise NotFoundError("Could not find user for provided id.")

        doc = {
            "title": data.title,
            "description": data.description,
            "address": data.address,
            "location": location.model_dump(),
            "image": image_path,
            "creator": to_object_id(user_id),
        }

        try:
            async with self.transactions.transaction() as session:
                doc = await self.place_repo.insert(doc, session=session)
                if not await self.user_repo.add_place(user_id, doc["_id"], session=session):
                    raise RuntimeError(f"user {user_id} vanished before the place was linked")
        except Exception as e:
            logs.log(logging.ERROR, f"Creating place for user {user_id} failed: {str(e)}")
            raise InternalError("Creating place failed, please try again.")

        logs.log(logging.INFO, f"Created place {doc['_id']} for user {user_id}")
        return Place.from_document(doc)

    async def update_place(self, place_id: str, data: PlaceUpdate, user_id: str) -> Place:
        try:
            doc = await self.place_repo.find_by_id(place_id)
        except Exception as e:
            logs.log(logging.ERROR, f"Place lookup failed for {place_id}: {str(e)}")
            raise InternalError("Something went wrong, could not update place.")

        if not doc:
            raise NotFoundError("Could not find place for this id.")

        if str(doc["creator"]) != user_id:
            logs.log(logging.WARNING, f"User {user_id} tried to edit place {place_id}")
            raise AuthorizationError("You are not allowed to edit this place.")

        try:
            updated = await self.place_repo.update_fields(
                place_id, {"title": data.title, "description": data.description}
            )
        except Exception as e:
            logs.log(logging.ERROR, f"Saving place {place_id} failed: {str(e)}")
            raise InternalError("Something went wrong, could not update place.")

        if not updated:
            raise NotFoundError("Could not find place for this id.")

        logs.log(logging.INFO, f"Updated place {place_id}")
        return Place.from_document(updated)

    async def delete_place(self, place_id: str, user_id: str) -> None:
        try:
            doc = await self.place_repo.find_by_id(place_id)
        except Exception as e:
            logs.log(logging.ERROR, f"Place lookup failed for {place_id}: {str(e)}")
            raise InternalError("Something went wrong, could not delete place.")

        if not doc:
            raise NotFoundError("Could not find place for this id.")

        creator_id = str(doc["creator"])
        if creator_id != user_id:
            logs.log(logging.WARNING, f"User {user_id} tried to delete place {place_id}")
            raise AuthorizationError("You are not allowed to delete this place.")

        try:
            async with self.transactions.transaction() as session:
                await self.user_repo.remove_place(creator_id, doc["_id"], session=session)
                if not await self.place_repo.delete(place_id, session=session):
                    raise NotFoundError("Could not find place for this id.")
        except HttpError:
            raise
        except Exception as e:
            logs.log(logging.ERROR, f"Deleting place {place_id} failed: {str(e)}")
            raise InternalError("Something went wrong, could not delete place.")

        logs.log(logging.INFO, f"Deleted place {place_id}")
        self.storage.remove(doc["image"])
