# spotfinder/schemas/user.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class MeOut(BaseModel):
    user_id: str
    email: Optional[str]
    reputation_score: int
    token_expires_at: Optional[datetime]
