# spotfinder/models/user_reputation.py
"""
Reporter reputation counters, keyed by the bearer token's subject id.
Bumped in the same transaction as each accepted occupancy report.
"""

from sqlalchemy import Column, Integer, String, DateTime
from spotfinder.database import Base


class UserReputation(Base):
    __tablename__ = "user_reputation"

    user_id = Column(String(100), primary_key=True)
    email = Column(String(200))
    reputation_score = Column(Integer, default=0, nullable=False)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<UserReputation {self.user_id} score={self.reputation_score}>"
