"""Static configuration for schedule generation.

Base depots, fixed clock times and the rotation reference date live here so
the builder and policies never hardcode them.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from plumbsched.domain.models import BaseLocation, Coordinates

JOHANNESBURG = "Johannesburg"
CAPE_TOWN = "Cape Town"

BASE_LOCATIONS: dict[str, BaseLocation] = {
    JOHANNESBURG: BaseLocation(
        city=JOHANNESBURG,
        address="5 Thora Cres, Wynberg, Sandton, 2090",
        coordinates=Coordinates(lat=-26.1076, lng=28.0567),
    ),
    CAPE_TOWN: BaseLocation(
        city=CAPE_TOWN,
        address="98 Marine Dr, Paarden Eiland, Cape Town, 7405",
        coordinates=Coordinates(lat=-33.8903, lng=18.4979),
    ),
}


@dataclass
class ScheduleConfig:
    """Configuration for day schedule generation.

    Attributes:
        base_locations: Depot table keyed by city name.
        default_city: City used when a staff member's city is unknown.
        day_start: Time of the base entry that opens every day.
        default_job_time: Slot used for a job that has no due time.
        normal_shift_end: End of a normal shift.
        late_shift_end: End of a late shift.
        rotation_reference: Monday on which late-shift week counting starts.
        jitter_origin: Approximate point that synthetic job coordinates
            are offset from.
        jitter_span: Width in degrees of the synthetic coordinate offset.
    """

    base_locations: dict[str, BaseLocation] = field(
        default_factory=lambda: dict(BASE_LOCATIONS)
    )
    default_city: str = JOHANNESBURG
    day_start: str = "05:00"
    default_job_time: str = "08:00"
    normal_shift_end: str = "17:00"
    late_shift_end: str = "19:00"
    rotation_reference: date = date(2024, 1, 1)
    jitter_origin: Coordinates = field(
        default_factory=lambda: Coordinates(lat=-26.2041, lng=28.0473)
    )
    jitter_span: float = 0.1

    def base_for_city(self, city: Optional[str]) -> BaseLocation:
        """Look up a depot, falling back to the default city."""
        if city and city in self.base_locations:
            return self.base_locations[city]
        return self.base_locations[self.default_city]
