"""SQLAlchemy models for the house calendar.

All models are imported here so that ``Base.metadata`` knows every table
(the test suite creates the schema from it).
"""

from housecal.models.booking import Booking
from housecal.models.house import House
from housecal.models.profile import Profile

__all__ = [
    "Booking",
    "House",
    "Profile",
]
