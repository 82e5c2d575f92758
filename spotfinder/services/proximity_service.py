# spotfinder/services/proximity_service.py
"""
Proximity gate: is the reporting device close enough to the location?
Linear haversine check. The exact boundary (distance == max) admits.
"""

from dataclasses import dataclass
from typing import Optional

from spotfinder.config import settings
from spotfinder.utils.geo import distance_km


@dataclass(frozen=True)
class ProximityResult:
    admitted: bool
    distance_km: float
    max_km: float

    @property
    def distance_m(self) -> int:
        return round(self.distance_km * 1000)


def check_proximity(device_lat: float, device_lon: float,
                    target_lat: float, target_lon: float,
                    max_km: Optional[float] = None) -> ProximityResult:
    if max_km is None:
        max_km = settings.PROXIMITY_MAX_KM
    measured = distance_km(device_lat, device_lon, target_lat, target_lon)
    return ProximityResult(admitted=measured <= max_km, distance_km=measured, max_km=max_km)
