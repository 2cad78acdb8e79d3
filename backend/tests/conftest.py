import copy
import io
from contextlib import asynccontextmanager

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from starlette.datastructures import Headers
from fastapi import UploadFile

from places_api.core.security import create_access_token
from places_api.main import app
from places_api.repos.object_ids import to_object_id
from places_api.routes.places_route import get_places_service
from places_api.services.geocoding_service import StaticGeocoder
from places_api.services.image_storage import ImageStorage
from places_api.services.places_service import PlacesService

STUB_LAT = 35.6365636
STUB_LNG = 139.7401022
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-body"


class InMemoryStore:
    """Places and users held in dicts, with named operations that can be made to fail."""

    def __init__(self):
        self.places = {}
        self.users = {}
        self.fail_on = set()

    def check(self, operation: str):
        if operation in self.fail_on:
            raise RuntimeError(f"injected failure in {operation}")

    def snapshot(self):
        return copy.deepcopy((self.places, self.users))

    def restore(self, snapshot):
        self.places, self.users = copy.deepcopy(snapshot)

    def add_user(self, name="Max", email=None) -> str:
        oid = ObjectId()
        self.users[oid] = {
            "_id": oid,
            "name": name,
            "email": email or f"{name.lower()}@example.com",
            "image": "uploads/images/avatar.png",
            "places": [],
        }
        return str(oid)

    def user_place_ids(self, user_id: str) -> list[str]:
        return [str(p) for p in self.users[ObjectId(user_id)]["places"]]


class InMemoryPlaceRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def find_by_id(self, place_id):
        self.store.check("place.find")
        doc = self.store.places.get(to_object_id(place_id))
        return copy.deepcopy(doc)

    async def find_many(self, place_ids):
        self.store.check("place.find")
        oids = [to_object_id(p) for p in place_ids]
        return [copy.deepcopy(self.store.places[oid]) for oid in oids if oid in self.store.places]

    async def insert(self, doc, session=None):
        self.store.check("place.insert")
        doc = dict(doc)
        doc["_id"] = ObjectId()
        self.store.places[doc["_id"]] = copy.deepcopy(doc)
        return doc

    async def update_fields(self, place_id, fields):
        self.store.check("place.update")
        doc = self.store.places.get(to_object_id(place_id))
        if doc is None:
            return None
        doc.update(fields)
        return copy.deepcopy(doc)

    async def delete(self, place_id, session=None):
        self.store.check("place.delete")
        return self.store.places.pop(to_object_id(place_id), None) is not None


class InMemoryUserRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def find_by_id(self, user_id):
        self.store.check("user.find")
        return copy.deepcopy(self.store.users.get(to_object_id(user_id)))

    async def add_place(self, user_id, place_id, session=None):
        self.store.check("user.add_place")
        user = self.store.users.get(to_object_id(user_id))
        if user is None:
            return False
        user["places"].append(to_object_id(place_id))
        return True

    async def remove_place(self, user_id, place_id, session=None):
        self.store.check("user.remove_place")
        user = self.store.users.get(to_object_id(user_id))
        if user is None:
            return False
        oid = to_object_id(place_id)
        user["places"] = [p for p in user["places"] if p != oid]
        return True


class InMemoryTransactionManager:
    """Snapshot on begin, restore on any failure including a failed commit."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    @asynccontextmanager
    async def transaction(self):
        snapshot = self.store.snapshot()
        try:
            yield None
            self.store.check("commit")
        except Exception:
            self.store.restore(snapshot)
            raise


def make_upload(content: bytes = PNG_BYTES, content_type: str = "image/png", filename: str = "place.png") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


def auth_header(user_id: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id, 'caller@example.com')}"}


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def storage(tmp_path):
    return ImageStorage(tmp_path / "images", 500000)


@pytest.fixture
def service(store, storage):
    return PlacesService(
        InMemoryPlaceRepository(store),
        InMemoryUserRepository(store),
        InMemoryTransactionManager(store),
        StaticGeocoder(STUB_LAT, STUB_LNG),
        storage,
    )


@pytest.fixture
def client(service):
    app.dependency_overrides[get_places_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
