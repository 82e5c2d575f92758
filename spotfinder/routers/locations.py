# spotfinder/routers/locations.py
"""Location catalog — list/filter, create, read, partial update, delete."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from spotfinder.database import get_db
from spotfinder.schemas.location import LocationCreate, LocationUpdate, LocationOut
from spotfinder.schemas.tag import TagOut
from spotfinder.services import location_service
from spotfinder.services.tag_service import list_tags

router = APIRouter()


def _parse_tag_filter(tags: Optional[str]) -> List[str]:
    if not tags:
        return []
    return [t.strip() for t in tags.split(",") if t.strip()]


@router.get("/locations", response_model=list[LocationOut], summary="List locations, optionally by tags")
def get_locations(tags: Optional[str] = None, db: Session = Depends(get_db)):
    """`?tags=quiet,study` returns only locations carrying ALL of the given tags."""
    locations = location_service.list_locations(db, _parse_tag_filter(tags))
    return [LocationOut.from_model(loc) for loc in locations]


@router.post("/locations", response_model=LocationOut, status_code=status.HTTP_201_CREATED,
             summary="Add a location")
def create_location(body: LocationCreate, db: Session = Depends(get_db)):
    loc = location_service.create_location(db, body.model_dump())
    return LocationOut.from_model(loc)


@router.get("/locations/{location_id}", response_model=LocationOut, summary="Get one location")
def get_location(location_id: str, db: Session = Depends(get_db)):
    return LocationOut.from_model(location_service.get_location(db, location_id))


@router.put("/locations/{location_id}", response_model=LocationOut, summary="Partially update a location")
def update_location(location_id: str, body: LocationUpdate, db: Session = Depends(get_db)):
    """
    Only fields present in the body change. A `tags` list replaces the
    location's whole tag set; omit it to keep the current tags.
    """
    loc = location_service.update_location(db, location_id, body.model_dump(exclude_unset=True))
    return LocationOut.from_model(loc)


@router.delete("/locations/{location_id}", summary="Delete a location")
def delete_location(location_id: str, db: Session = Depends(get_db)):
    location_service.delete_location(db, location_id)
    return {"success": True}


@router.get("/tags", response_model=list[TagOut], summary="All canonical tags")
def get_tags(db: Session = Depends(get_db)):
    return list_tags(db)
