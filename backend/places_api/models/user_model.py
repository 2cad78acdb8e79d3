from pydantic import BaseModel
from typing import List, Optional

class User(BaseModel):
    id: str
    name: str
    email: str
    image: Optional[str] = None
    places: List[str] = []

    @classmethod
    def from_document(cls, doc: dict) -> "User":
        return cls(
            id=str(doc["_id"]),
            name=doc.get("name", ""),
            email=doc.get("email", ""),
            image=doc.get("image"),
            places=[str(p) for p in doc.get("places", [])],
        )
