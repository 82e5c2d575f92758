# spotfinder/services/tag_service.py
"""
Tag normalizer — maps free-text tag strings onto the shared tags dictionary.

Names are trimmed but case is kept ("Quiet" != "quiet"). Empty names are rejected.
Both writes below are single conflict-tolerant statements, never read-then-write,
so two requests introducing the same tag at once still end up with one row.
"""

from typing import Iterable, List
from sqlalchemy.orm import Session
from spotfinder.database import dialect_insert
from spotfinder.exceptions import ValidationError
from spotfinder.models.location import location_tags
from spotfinder.models.tag import Tag
from spotfinder.utils.logger import get_logger

logger = get_logger(__name__)

MAX_TAG_LENGTH = 100


def normalize_tag_name(name) -> str:
    if not isinstance(name, str):
        raise ValidationError(f"Tag names must be strings, got {type(name).__name__}")
    cleaned = name.strip()
    if not cleaned:
        raise ValidationError("Tag names must not be empty")
    if len(cleaned) > MAX_TAG_LENGTH:
        raise ValidationError(f"Tag names must be at most {MAX_TAG_LENGTH} characters")
    return cleaned


def normalize_tag_names(names: Iterable) -> List[str]:
    """Normalize a payload's tags, dropping repeats but keeping first-seen order."""
    seen = {}
    for name in names:
        seen.setdefault(normalize_tag_name(name), None)
    return list(seen)


def ensure_tag(db: Session, name: str) -> int:
    """Return the tag_id for `name`, inserting the canonical row on first sight."""
    name = normalize_tag_name(name)
    insert = dialect_insert(db)
    stmt = insert(Tag).values(name=name)
    # DO UPDATE (not DO NOTHING) so RETURNING yields the existing row's id too
    stmt = stmt.on_conflict_do_update(
        index_elements=[Tag.name], set_={"name": stmt.excluded.name}
    ).returning(Tag.tag_id)
    return db.execute(stmt).scalar_one()


def ensure_tags(db: Session, names: Iterable) -> List[int]:
    """
    Upsert every tag in `names`. Each upsert row-locks its tag until commit,
    so tags are always taken in sorted order to keep concurrent writers from
    locking the same pair in opposite orders.
    """
    return [ensure_tag(db, name) for name in sorted(normalize_tag_names(names))]


def link_location_tag(db: Session, location_id: str, tag_id: int) -> None:
    """Attach a tag to a location. Linking an existing pair is a no-op."""
    insert = dialect_insert(db)
    db.execute(
        insert(location_tags)
        .values(location_id=location_id, tag_id=tag_id)
        .on_conflict_do_nothing()
    )


def list_tags(db: Session) -> List[Tag]:
    return db.query(Tag).order_by(Tag.name).all()
