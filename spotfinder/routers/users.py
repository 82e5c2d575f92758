# spotfinder/routers/users.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from spotfinder.database import get_db
from spotfinder.schemas.user import MeOut
from spotfinder.services.auth_service import Identity, require_identity
from spotfinder.services.reputation_service import ReputationStore, get_reputation_store

router = APIRouter()


@router.get("/me", response_model=MeOut, summary="Who am I + reputation")
def get_me(
    identity: Identity = Depends(require_identity),
    reputation: ReputationStore = Depends(get_reputation_store),
    db: Session = Depends(get_db),
):
    return MeOut(
        user_id=identity.subject_id,
        email=identity.email,
        reputation_score=reputation.get_score(db, identity.subject_id),
        token_expires_at=identity.expires_at,
    )
