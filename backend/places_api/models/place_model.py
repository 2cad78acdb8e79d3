from pydantic import BaseModel, Field
from typing import List

# --- Domain Models ---
class Location(BaseModel):
    lat: float
    lng: float

class Place(BaseModel):
    id: str
    title: str
    description: str
    address: str
    location: Location
    image: str
    creator: str

    @classmethod
    def from_document(cls, doc: dict) -> "Place":
        """Build the client view of a stored place, exposing _id as a string id."""
        return cls(
            id=str(doc["_id"]),
            title=doc["title"],
            description=doc["description"],
            address=doc["address"],
            location=Location(**doc["location"]),
            image=doc["image"],
            creator=str(doc["creator"]),
        )

# --- API Request/Response Models ---
class PlaceCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=5)
    address: str = Field(..., min_length=1)
    # Accepted for compatibility; ownership always comes from the caller's token
    creator: str = Field(..., min_length=1)

class PlaceUpdate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=5)

class PlaceResponse(BaseModel):
    place: Place

class PlacesResponse(BaseModel):
    places: List[Place]

class MessageResponse(BaseModel):
    message: str
