# spotfinder/services/reputation_service.py
"""
Reporter reputation counters.

increment() only stages the change on the caller's session — it never commits —
so report_service can commit the report and the +1 as one transaction.
"""

from datetime import datetime
from typing import Optional, Protocol

from sqlalchemy.orm import Session

from spotfinder.database import dialect_insert
from spotfinder.models.user_reputation import UserReputation


class ReputationStore(Protocol):
    def increment(self, db: Session, subject_id: str, amount: int, email: Optional[str] = None) -> None: ...

    def get_score(self, db: Session, subject_id: str) -> int: ...


class SqlReputationStore:
    def increment(self, db: Session, subject_id: str, amount: int, email: Optional[str] = None) -> None:
        insert = dialect_insert(db)
        now = datetime.utcnow()
        stmt = insert(UserReputation).values(
            user_id=subject_id, email=email, reputation_score=amount, updated_at=now,
        )
        # Atomic counter bump; first report creates the row
        stmt = stmt.on_conflict_do_update(
            index_elements=[UserReputation.user_id],
            set_={
                "reputation_score": UserReputation.reputation_score + amount,
                "updated_at": now,
            },
        )
        db.execute(stmt)

    def get_score(self, db: Session, subject_id: str) -> int:
        score = db.query(UserReputation.reputation_score).filter(UserReputation.user_id == subject_id).scalar()
        return score or 0


def get_reputation_store() -> ReputationStore:
    return SqlReputationStore()
