# spotfinder/services/report_service.py
"""
Occupancy report ledger — crowd-sourced "how busy is it" reports.

A report is accepted only when, in this order:
  1. the caller is authenticated                      → AuthError (401)
  2. the location exists                              → NotFoundError (404)
  3. occupancy_level is an integer 1..5               → ValidationError (400)
  4. device coordinates were supplied                 → ValidationError (400)
  5. the device is within PROXIMITY_MAX_KM of it      → ProximityError (403)
  6. the reporter opted into data collection          → ReportingPermissionError (403)

The report row and the reporter's reputation bump share one commit.
Rows are never updated afterwards.
"""

import math
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from spotfinder.config import settings
from spotfinder.exceptions import (
    AuthError, NotFoundError, ProximityError, ReportingPermissionError, ValidationError,
)
from spotfinder.models.location import Location
from spotfinder.models.occupancy_report import OccupancyReport
from spotfinder.services.auth_service import Identity
from spotfinder.services.consent_service import ConsentProvider
from spotfinder.services.proximity_service import check_proximity
from spotfinder.services.reputation_service import ReputationStore
from spotfinder.utils.logger import get_logger

logger = get_logger(__name__)

LEVEL_LABELS = {
    1: "Empty",
    2: "Few People",
    3: "Moderate",
    4: "Busy",
    5: "Crowded",
}
DEFAULT_DEVICE_TYPE = "web"


def _parse_level(value) -> int:
    # bool is an int subclass; True must not count as level 1
    if isinstance(value, bool):
        level = None
    elif isinstance(value, int):
        level = value
    elif isinstance(value, float) and value.is_integer():
        level = int(value)
    else:
        level = None
    if level is None or level not in LEVEL_LABELS:
        raise ValidationError("occupancy_level must be an integer between 1 and 5")
    return level


def _parse_device_coordinates(lat, lng):
    if lat is None or lng is None:
        raise ValidationError(
            "Location verification required. Please enable GPS/location services and try again.",
            code="location_required",
        )
    for value in (lat, lng):
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise ValidationError("Device latitude and longitude must be numbers")
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        raise ValidationError("Device latitude/longitude out of range")
    return float(lat), float(lng)


def submit_report(db: Session, identity: Optional[Identity], body: dict,
                  consent: ConsentProvider, reputation: ReputationStore) -> OccupancyReport:
    if identity is None:
        raise AuthError(AuthError.MISSING, "Authentication required. Please log in.")

    location_id = body.get("location_id")
    location = (
        db.query(Location).filter(Location.location_id == location_id).first() if location_id else None
    )
    if location is None:
        raise NotFoundError(f"Location '{location_id}' not found")

    level = _parse_level(body.get("occupancy_level"))
    device_lat, device_lng = _parse_device_coordinates(body.get("latitude"), body.get("longitude"))

    proximity = check_proximity(device_lat, device_lng, location.latitude, location.longitude)
    if not proximity.admitted:
        logger.info(
            f"[REPORT] Rejected {identity.subject_id} at {location_id}: "
            f"{proximity.distance_m}m away (max {round(proximity.max_km * 1000)}m)"
        )
        raise ProximityError(proximity.distance_km, proximity.max_km)

    if not consent.has_reporting_consent(identity.subject_id):
        raise ReportingPermissionError("Please enable data collection in your profile to report occupancy.")

    report = OccupancyReport(
        location_id=location.location_id,
        reporter_id=identity.subject_id,
        occupancy_level=level,
        latitude=device_lat,
        longitude=device_lng,
        device_type=body.get("device_type") or DEFAULT_DEVICE_TYPE,
        created_at=datetime.utcnow(),
    )
    try:
        db.add(report)
        reputation.increment(db, identity.subject_id, settings.REPUTATION_POINTS_PER_REPORT,
                             email=identity.email)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(report)
    logger.info(
        f"[REPORT] {identity.subject_id} reported level {level} ({LEVEL_LABELS[level]}) "
        f"at {location_id}, {proximity.distance_m}m away"
    )
    return report


def _ensure_location(db: Session, location_id: str) -> None:
    if db.query(Location).filter(Location.location_id == location_id).first() is None:
        raise NotFoundError(f"Location '{location_id}' not found")


def _newest_first(q):
    return q.order_by(OccupancyReport.created_at.desc(), OccupancyReport.report_id.desc())


def list_reports(db: Session, location_id: str, limit: int = 50) -> List[OccupancyReport]:
    _ensure_location(db, location_id)
    q = db.query(OccupancyReport).filter(OccupancyReport.location_id == location_id)
    return _newest_first(q).limit(max(1, min(limit, 500))).all()


def latest_report_by(db: Session, location_id: str, reporter_id: str) -> Optional[OccupancyReport]:
    q = db.query(OccupancyReport).filter(
        OccupancyReport.location_id == location_id,
        OccupancyReport.reporter_id == reporter_id,
    )
    return _newest_first(q).first()


def current_occupancy(db: Session, location_id: str, now: Optional[datetime] = None) -> dict:
    """
    Current occupancy = the newest report, ordered by (created_at, report_id),
    so an older report can never override a newer one.
    """
    _ensure_location(db, location_id)
    now = now or datetime.utcnow()
    window_start = now - timedelta(minutes=settings.OCCUPANCY_FRESHNESS_MINUTES)

    latest = _newest_first(
        db.query(OccupancyReport).filter(OccupancyReport.location_id == location_id)
    ).first()
    recent_count = db.query(func.count(OccupancyReport.report_id)).filter(
        OccupancyReport.location_id == location_id,
        OccupancyReport.created_at >= window_start,
    ).scalar()

    if latest is None:
        return {"location_id": location_id, "report_count": 0, "is_stale": True}
    return {
        "location_id": location_id,
        "occupancy_level": latest.occupancy_level,
        "label": LEVEL_LABELS[latest.occupancy_level],
        "reported_at": latest.created_at,
        "report_count": recent_count or 0,
        "is_stale": latest.created_at < window_start,
    }
