# SpotFinder — Database Models
# Import all models here for SQLAlchemy discovery

from spotfinder.models.location import Location, location_tags    # noqa
from spotfinder.models.tag import Tag                             # noqa
from spotfinder.models.occupancy_report import OccupancyReport    # noqa
from spotfinder.models.user_reputation import UserReputation      # noqa
