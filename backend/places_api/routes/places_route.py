from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from motor.motor_asyncio import AsyncIOMotorDatabase
import pydantic

from places_api.core.db_connection import MongoTransactionManager, get_db, get_transaction_manager
from places_api.core.errors import ValidationError
from places_api.core.security import get_current_user_id
from places_api.models.place_model import (
    MessageResponse,
    PlaceCreate,
    PlaceResponse,
    PlacesResponse,
    PlaceUpdate,
)
from places_api.repos.place_repo import PlaceRepository
from places_api.repos.user_repo import UserRepository
from places_api.services.geocoding_service import BaseGeocoder, get_geocoder
from places_api.services.image_storage import ImageStorage, get_image_storage
from places_api.services.places_service import PlacesService

router = APIRouter(prefix="/api/places", tags=["places"])

# --- Dependency Injection ---
def get_place_repo(db: AsyncIOMotorDatabase = Depends(get_db)) -> PlaceRepository:
    return PlaceRepository(db)

def get_user_repo(db: AsyncIOMotorDatabase = Depends(get_db)) -> UserRepository:
    return UserRepository(db)

def get_places_service(
    place_repo: PlaceRepository = Depends(get_place_repo),
    user_repo: UserRepository = Depends(get_user_repo),
    transactions: MongoTransactionManager = Depends(get_transaction_manager),
    geocoder: BaseGeocoder = Depends(get_geocoder),
    storage: ImageStorage = Depends(get_image_storage),
) -> PlacesService:
    return PlacesService(place_repo, user_repo, transactions, geocoder, storage)

def parse_place_form(
    title: str = Form(""),
    description: str = Form(""),
    address: str = Form(""),
    creator: str = Form(""),
) -> PlaceCreate:
    try:
        return PlaceCreate(title=title.strip(), description=description, address=address.strip(), creator=creator)
    except pydantic.ValidationError as e:
        raise ValidationError(
            errors=[{"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]} for err in e.errors()]
        )

# --- Public Endpoints ---
@router.get("/user/{uid}", response_model=PlacesResponse)
async def get_places_by_user_id(uid: str, service: PlacesService = Depends(get_places_service)):
    return PlacesResponse(places=await service.get_places_by_user_id(uid))

@router.get("/{pid}", response_model=PlaceResponse)
async def get_place_by_id(pid: str, service: PlacesService = Depends(get_places_service)):
    return PlaceResponse(place=await service.get_place_by_id(pid))

# --- Authenticated Endpoints ---
@router.post("", response_model=PlaceResponse, status_code=status.HTTP_201_CREATED)
async def create_place(
    user_id: str = Depends(get_current_user_id),
    data: PlaceCreate = Depends(parse_place_form),
    image: UploadFile = File(...),
    service: PlacesService = Depends(get_places_service),
):
    place = await service.create_place(data, image, user_id)
    return PlaceResponse(place=place)

@router.patch("/{pid}", response_model=PlaceResponse)
async def update_place(
    pid: str,
    data: PlaceUpdate,
    user_id: str = Depends(get_current_user_id),
    service: PlacesService = Depends(get_places_service),
):
    return PlaceResponse(place=await service.update_place(pid, data, user_id))

@router.delete("/{pid}", response_model=MessageResponse)
async def delete_place(
    pid: str,
    user_id: str = Depends(get_current_user_id),
    service: PlacesService = Depends(get_places_service),
):
    await service.delete_place(pid, user_id)
    return MessageResponse(message="Deleted place.")
