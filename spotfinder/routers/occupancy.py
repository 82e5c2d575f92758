# spotfinder/routers/occupancy.py
"""Crowd-sourced occupancy — submit a proximity-verified report, read current level."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Optional
from spotfinder.database import get_db
from spotfinder.schemas.occupancy_report import ReportCreate, ReportOut, OccupancyOut
from spotfinder.services import report_service
from spotfinder.services.auth_service import Identity, require_identity, optional_identity
from spotfinder.services.consent_service import ConsentProvider, get_consent_provider
from spotfinder.services.reputation_service import ReputationStore, get_reputation_store

router = APIRouter()


@router.post("/occupancy/report", response_model=ReportOut, status_code=status.HTTP_201_CREATED,
             summary="Report how busy a location is")
def submit_report(
    body: ReportCreate,
    identity: Identity = Depends(require_identity),
    consent: ConsentProvider = Depends(get_consent_provider),
    reputation: ReputationStore = Depends(get_reputation_store),
    db: Session = Depends(get_db),
):
    """
    Requires a bearer token and the device's live coordinates; the device must
    be within 500m of the location. Earns the reporter +1 reputation.
    """
    return report_service.submit_report(db, identity, body.model_dump(), consent, reputation)


@router.get("/occupancy/{location_id}", response_model=OccupancyOut, summary="Current occupancy")
def get_occupancy(
    location_id: str,
    identity: Optional[Identity] = Depends(optional_identity),
    db: Session = Depends(get_db),
):
    """Latest reported level. Signed-in callers also get their own last report."""
    result = OccupancyOut(**report_service.current_occupancy(db, location_id))
    if identity:
        mine = report_service.latest_report_by(db, location_id, identity.subject_id)
        if mine:
            result.my_last_report = ReportOut.model_validate(mine)
    return result


@router.get("/occupancy/{location_id}/reports", response_model=list[ReportOut],
            summary="Report history for a location")
def get_reports(location_id: str, limit: int = 50, db: Session = Depends(get_db)):
    return report_service.list_reports(db, location_id, limit)
