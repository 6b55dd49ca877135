"""SGP4 orbit model producing geodetic sub-points."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone

from sgp4.api import WGS72, Satrec, jday

from ..core.errors import PropagationError
from ..core.location import GroundPoint
from ..core.satellites import OrbitalElements

logger = logging.getLogger(__name__)

# WGS-84 ellipsoid, km
EARTH_EQUATORIAL_RADIUS_KM = 6378.137
EARTH_POLAR_RADIUS_KM = 6356.7523142
EARTH_FLATTENING = (EARTH_EQUATORIAL_RADIUS_KM - EARTH_POLAR_RADIUS_KM) / EARTH_EQUATORIAL_RADIUS_KM
EARTH_E2 = 2 * EARTH_FLATTENING - EARTH_FLATTENING ** 2

TWO_PI = 2 * math.pi
J2000_JD = 2451545.0
GEODETIC_ITERATIONS = 20


def julian_date(instant: datetime) -> tuple[float, float]:
    """Split Julian date (whole, fraction) for a datetime, naive treated as UTC."""
    if instant.tzinfo is not None:
        instant = instant.astimezone(timezone.utc)
    return jday(
        instant.year, instant.month, instant.day,
        instant.hour, instant.minute,
        instant.second + instant.microsecond / 1e6,
    )


def gmst(jd: float, fr: float = 0.0) -> float:
    """Greenwich mean sidereal time in radians (IAU-82)."""
    tut1 = ((jd - J2000_JD) + fr) / 36525.0
    seconds = (
        -6.2e-6 * tut1 ** 3
        + 0.093104 * tut1 ** 2
        + (876600.0 * 3600 + 8640184.812866) * tut1
        + 67310.54841
    )
    return math.radians(seconds / 240.0) % TWO_PI


def eci_to_geodetic(position_km: tuple[float, float, float],
                    sidereal_time: float) -> tuple[float, float, float]:
    """Convert an Earth-centered inertial position to geodetic coordinates.

    Args:
        position_km: (x, y, z) in the TEME frame, kilometers
        sidereal_time: Greenwich sidereal time in radians

    Returns:
        Tuple of (latitude_deg, longitude_deg, height_km), longitude in
        [-180, 180)
    """
    x, y, z = position_km
    r = math.hypot(x, y)

    longitude = math.atan2(y, x) - sidereal_time
    longitude = (longitude + math.pi) % TWO_PI - math.pi

    latitude = math.atan2(z, r)
    c = 1.0
    for _ in range(GEODETIC_ITERATIONS):
        sin_lat = math.sin(latitude)
        c = 1 / math.sqrt(1 - EARTH_E2 * sin_lat * sin_lat)
        latitude = math.atan2(z + EARTH_EQUATORIAL_RADIUS_KM * c * EARTH_E2 * sin_lat, r)

    height = r / math.cos(latitude) - EARTH_EQUATORIAL_RADIUS_KM * c
    return math.degrees(latitude), math.degrees(longitude), height


class OrbitModel:
    """Propagates one satellite's element set to sub-points.

    The sgp4 satellite record is built on first use and cached; propagation
    itself keeps no state between calls.
    """

    def __init__(self, elements: OrbitalElements):
        self.elements = elements
        self._satrec: Satrec | None = None

    @property
    def name(self) -> str:
        return self.elements.name

    @property
    def satrec(self) -> Satrec:
        """The sgp4 propagation context for these elements."""
        if self._satrec is None:
            try:
                self._satrec = Satrec.twoline2rv(
                    self.elements.line1, self.elements.line2, WGS72
                )
            except (ValueError, IndexError) as e:
                raise PropagationError(
                    f"Invalid element set for {self.elements.name}: {e}"
                ) from e
        return self._satrec

    def position_at(self, instant: datetime) -> tuple[float, float, float]:
        """TEME position in km at an instant.

        Raises:
            PropagationError: If sgp4 reports an error or a non-finite state
        """
        jd, fr = julian_date(instant)
        error, position, _velocity = self.satrec.sgp4(jd, fr)
        if error != 0:
            raise PropagationError(
                f"SGP4 error {error} for {self.elements.name} at {instant.isoformat()}"
            )
        if not all(math.isfinite(c) for c in position):
            raise PropagationError(
                f"Non-finite position for {self.elements.name} at {instant.isoformat()}"
            )
        return position

    def sub_point_at(self, instant: datetime) -> GroundPoint:
        """Geodetic point directly beneath the satellite at an instant.

        Args:
            instant: Time of interest (naive datetimes are read as UTC)

        Returns:
            GroundPoint of the sub-satellite point

        Raises:
            PropagationError: If propagation breaks down at this instant
        """
        position = self.position_at(instant)
        jd, fr = julian_date(instant)
        latitude, longitude, _height = eci_to_geodetic(position, gmst(jd, fr))
        return GroundPoint(latitude=latitude, longitude=longitude)
