# spotfinder/services/location_service.py
"""
Location catalog store: create / get / list / update / delete.

Every write runs in one transaction on the request's session:
the location row, any new canonical tags (tag_service.ensure_tag) and the
location_tags edges commit together or not at all.
"""

import math
from typing import List, Optional

from sqlalchemy import delete, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from spotfinder.exceptions import ConflictError, NotFoundError, ValidationError
from spotfinder.models.location import Location, location_tags
from spotfinder.models.occupancy_report import OccupancyReport
from spotfinder.models.tag import Tag
from spotfinder.services.tag_service import ensure_tags, link_location_tag, normalize_tag_names
from spotfinder.utils.logger import get_logger

logger = get_logger(__name__)

# API field → column
_FIELD_MAP = {
    "name": "name",
    "lat": "latitude",
    "lng": "longitude",
    "address": "address",
    "description": "description",
}


# Column widths in models/location.py
MAX_ID_LENGTH = 100
MAX_NAME_LENGTH = 200
MAX_ADDRESS_LENGTH = 300


def _require_text(value, message: str, field: str, max_length: int) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message)
    return _check_length(value.strip(), field, max_length)


def _check_length(value: str, field: str, max_length: int) -> str:
    if len(value) > max_length:
        raise ValidationError(f"'{field}' must be at most {max_length} characters")
    return value


def _optional_address(value) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("'address' must be a string")
    return _check_length(value, "address", MAX_ADDRESS_LENGTH)


def _check_tag_list(value) -> list:
    if not isinstance(value, list):
        raise ValidationError("'tags' must be a list of strings")
    return normalize_tag_names(value)


def _check_coordinate(value, field: str, limit: float) -> float:
    if value is None:
        raise ValidationError(f"'{field}' is required")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(f"'{field}' must be a number")
    if not -limit <= value <= limit:
        raise ValidationError(f"'{field}' must be between {-limit:g} and {limit:g}")
    return float(value)


def _replace_tags(db: Session, location_id: str, tags: list) -> None:
    db.execute(delete(location_tags).where(location_tags.c.location_id == location_id))
    for tag_id in ensure_tags(db, tags):
        link_location_tag(db, location_id, tag_id)


def _find(db: Session, location_id: str) -> Optional[Location]:
    return db.query(Location).filter(Location.location_id == location_id).first()


def _get_or_404(db: Session, location_id: str) -> Location:
    loc = _find(db, location_id)
    if not loc:
        raise NotFoundError(f"Location '{location_id}' not found")
    return loc


def insert_location(db: Session, payload: dict) -> Location:
    """
    Validate and stage a new location plus its tag edges, without committing.
    Shared by create_location (one row per transaction) and the seed import
    (one batch per transaction).
    """
    if not payload.get("id") or not payload.get("name"):
        raise ValidationError("Invalid location payload: id and name are required")
    location_id = _require_text(payload["id"], "Location id must be a non-empty string", "id", MAX_ID_LENGTH)
    name = _require_text(payload["name"], "Location name must be a non-empty string", "name", MAX_NAME_LENGTH)
    lat = _check_coordinate(payload.get("lat"), "lat", 90)
    lng = _check_coordinate(payload.get("lng"), "lng", 180)
    address = _optional_address(payload.get("address"))
    tags = _check_tag_list(payload.get("tags") or [])

    if _find(db, location_id) is not None:
        raise ConflictError(f"Location with id '{location_id}' already exists")

    loc = Location(
        location_id=location_id,
        name=name,
        latitude=lat,
        longitude=lng,
        address=address,
        description=payload.get("description"),
    )
    db.add(loc)
    try:
        db.flush()
    except IntegrityError:
        # Lost a race with a concurrent create of the same id
        raise ConflictError(f"Location with id '{location_id}' already exists")

    for tag_id in ensure_tags(db, tags):
        link_location_tag(db, location_id, tag_id)
    return loc


def create_location(db: Session, payload: dict) -> Location:
    try:
        loc = insert_location(db, payload)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"[CATALOG] Created location {loc.location_id} ({loc.name}) tags={loc.tag_names}")
    return loc


def get_location(db: Session, location_id: str) -> Location:
    return _get_or_404(db, location_id)


def list_locations(db: Session, tags: Optional[List[str]] = None) -> List[Location]:
    """
    All locations, or — with a tag filter — only those carrying EVERY filter tag.
    The AND semantics decide which markers the map shows.
    """
    q = db.query(Location)
    wanted = normalize_tag_names(tags or [])
    if wanted:
        matching = (
            db.query(location_tags.c.location_id)
            .join(Tag, Tag.tag_id == location_tags.c.tag_id)
            .filter(Tag.name.in_(wanted))
            .group_by(location_tags.c.location_id)
            .having(func.count(Tag.tag_id) == len(wanted))
        )
        q = q.filter(Location.location_id.in_(matching.scalar_subquery()))
    return q.order_by(Location.name, Location.location_id).all()


def update_location(db: Session, location_id: str, fields: dict) -> Location:
    """
    Merge the supplied fields into an existing location. Omitted fields keep
    their values; a supplied `tags` list replaces the whole tag set, and `[]`
    clears it. `tags: null` is rejected like any other null required field.
    """
    loc = _get_or_404(db, location_id)

    if "id" in fields and fields["id"] is not None and fields["id"] != location_id:
        raise ValidationError("Location id cannot be changed")
    if "name" in fields:
        fields["name"] = _require_text(
            fields["name"], "Location name must be a non-empty string", "name", MAX_NAME_LENGTH
        )
    if "lat" in fields:
        fields["lat"] = _check_coordinate(fields["lat"], "lat", 90)
    if "lng" in fields:
        fields["lng"] = _check_coordinate(fields["lng"], "lng", 180)
    if "address" in fields:
        fields["address"] = _optional_address(fields["address"])
    if "tags" in fields:
        if fields["tags"] is None:
            raise ValidationError("'tags' must be a list of strings; send [] to clear all tags")
        fields["tags"] = _check_tag_list(fields["tags"])

    try:
        for field, column in _FIELD_MAP.items():
            if field in fields:
                setattr(loc, column, fields[field])
        if "tags" in fields:
            db.flush()
            _replace_tags(db, location_id, fields["tags"])
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"[CATALOG] Updated location {location_id}: {sorted(k for k in fields if k != 'id')}")
    return loc


def delete_location(db: Session, location_id: str) -> None:
    """Remove a location, its tag edges and its reports. Tag rows are kept."""
    _get_or_404(db, location_id)
    try:
        db.execute(delete(location_tags).where(location_tags.c.location_id == location_id))
        db.execute(delete(OccupancyReport).where(OccupancyReport.location_id == location_id))
        db.execute(delete(Location).where(Location.location_id == location_id))
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"[CATALOG] Deleted location {location_id}")
