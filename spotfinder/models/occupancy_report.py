# spotfinder/models/occupancy_report.py
"""
Occupancy report ledger. Rows are append-only: a correction is a new report.
Current occupancy of a location is derived from its latest row.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, CheckConstraint, Index
from spotfinder.database import Base


class OccupancyReport(Base):
    __tablename__ = "occupancy_reports"
    __table_args__ = (
        CheckConstraint("occupancy_level BETWEEN 1 AND 5", name="ck_occupancy_level_range"),
        Index("ix_occupancy_reports_location_created", "location_id", "created_at"),
    )

    report_id = Column(Integer, primary_key=True, autoincrement=True)
    location_id = Column(String(100), ForeignKey("locations.location_id", ondelete="CASCADE"), nullable=False)
    reporter_id = Column(String(100), nullable=False, index=True)
    occupancy_level = Column(Integer, nullable=False)   # 1=Empty … 5=Crowded
    latitude = Column(Float, nullable=False)            # device position at submission
    longitude = Column(Float, nullable=False)
    device_type = Column(String(50))
    created_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<OccupancyReport {self.report_id} loc={self.location_id} level={self.occupancy_level}>"
