# spotfinder/schemas/location.py
from pydantic import BaseModel
from typing import List, Optional


class LocationCreate(BaseModel):
    # Everything optional here so missing id/name surface as our own 400, not a schema error
    id: Optional[str] = None
    name: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    tags: Optional[List[str]] = None
    address: Optional[str] = None
    description: Optional[str] = None


class LocationUpdate(BaseModel):
    """Partial update — only fields present in the request body are applied."""
    id: Optional[str] = None
    name: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    tags: Optional[List[str]] = None
    address: Optional[str] = None
    description: Optional[str] = None


class LocationOut(BaseModel):
    id: str
    name: str
    lat: float
    lng: float
    address: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = []

    @classmethod
    def from_model(cls, loc) -> "LocationOut":
        return cls(
            id=loc.location_id,
            name=loc.name,
            lat=loc.latitude,
            lng=loc.longitude,
            address=loc.address,
            description=loc.description,
            tags=loc.tag_names,
        )
