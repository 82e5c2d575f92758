# spotfinder/services/seed_service.py
"""
Bulk import of location records (e.g. the legacy locations.json export).

A batch is one transaction: if any record fails, nothing from the batch is kept.
Tags are upserted, so re-running an import never duplicates tag rows.
Records without an `id` get a fresh UUID and WILL be duplicated on re-run;
records with an existing id fail the batch unless skip_existing=True.
"""

import json
import uuid
from dataclasses import dataclass, field
from typing import Iterable, List

from sqlalchemy.orm import Session

from spotfinder.exceptions import ValidationError
from spotfinder.models.location import Location
from spotfinder.services.location_service import insert_location
from spotfinder.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class SeedSummary:
    inserted: int = 0
    skipped: List[str] = field(default_factory=list)


def load_seed_file(path: str) -> list:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValidationError(f"Seed file {path} must contain a JSON array of locations")
    return data


def import_locations(db: Session, records: Iterable[dict], skip_existing: bool = False) -> SeedSummary:
    summary = SeedSummary()
    try:
        for i, record in enumerate(records):
            if not isinstance(record, dict):
                raise ValidationError(f"Seed record #{i} is not an object")
            payload = dict(record)
            if payload.get("id") is None:
                payload["id"] = str(uuid.uuid4())
            else:
                payload["id"] = str(payload["id"])

            if skip_existing and db.query(Location).filter(Location.location_id == payload["id"]).first():
                summary.skipped.append(payload["id"])
                continue

            insert_location(db, payload)
            summary.inserted += 1
            logger.debug(f"[SEED] Staged {payload['id']} ({payload.get('name')})")
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"[SEED] Import failed, batch rolled back: {e}")
        raise

    logger.info(f"[SEED] Imported {summary.inserted} locations, skipped {len(summary.skipped)}")
    return summary
