# spotfinder/models/location.py
"""
Locations table + the location_tags association table.
A location's tags are shared Tag rows; deleting a location only removes its edges.
"""

from sqlalchemy import Column, Integer, String, Float, Text, Table, ForeignKey
from sqlalchemy.orm import relationship
from spotfinder.database import Base

location_tags = Table(
    "location_tags",
    Base.metadata,
    Column("location_id", String(100), ForeignKey("locations.location_id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.tag_id", ondelete="CASCADE"), primary_key=True, index=True),
)


class Location(Base):
    __tablename__ = "locations"

    location_id = Column(String(100), primary_key=True)   # client-supplied, immutable
    name = Column(String(200), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    address = Column(String(300))
    description = Column(Text)

    # Read side only; edges are written by tag_service upserts
    tags = relationship("Tag", secondary=location_tags, lazy="selectin", order_by="Tag.name", viewonly=True)

    @property
    def tag_names(self) -> list:
        return [t.name for t in self.tags]

    def __repr__(self):
        return f"<Location {self.location_id} name={self.name!r}>"
