# spotfinder/schemas/occupancy_report.py
from pydantic import BaseModel
from datetime import datetime
from typing import Any, Optional


class ReportCreate(BaseModel):
    # Loosely typed on purpose: report_service checks fields in a fixed order
    # (location → level → coordinates) and a schema error would jump the queue.
    location_id: Optional[str] = None
    occupancy_level: Any = None
    latitude: Any = None
    longitude: Any = None
    device_type: Optional[str] = None


class ReportOut(BaseModel):
    report_id: int
    location_id: str
    reporter_id: str
    occupancy_level: int
    latitude: float
    longitude: float
    device_type: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class OccupancyOut(BaseModel):
    location_id: str
    occupancy_level: Optional[int] = None
    label: Optional[str] = None
    reported_at: Optional[datetime] = None
    report_count: int = 0            # reports inside the freshness window
    is_stale: bool = True
    my_last_report: Optional[ReportOut] = None
