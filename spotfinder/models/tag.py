# spotfinder/models/tag.py
"""
Canonical tag dictionary. One row per distinct (case-sensitive) name,
enforced by the UNIQUE constraint that tag_service upserts against.
"""

from sqlalchemy import Column, Integer, String
from spotfinder.database import Base


class Tag(Base):
    __tablename__ = "tags"

    tag_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)

    def __repr__(self):
        return f"<Tag {self.tag_id} {self.name!r}>"
