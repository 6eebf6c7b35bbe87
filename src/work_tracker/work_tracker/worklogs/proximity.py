"""Great-circle distance and the check-out proximity rule."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import atan2, cos, radians, sin, sqrt

from ..core.constants import DEFAULT_MAX_CHECKOUT_METERS, EARTH_RADIUS_METERS
from ..core.enums import SessionErrorCode
from ..core.exceptions import SessionError
from .model import GeoPoint

logger = logging.getLogger(__name__)


def distance_meters(p1: GeoPoint, p2: GeoPoint) -> float:
    """Haversine distance in meters between two points given in degrees."""
    lat1 = radians(p1.lat)
    lat2 = radians(p2.lat)
    delta_lat = radians(p2.lat - p1.lat)
    delta_lng = radians(p2.lng - p1.lng)

    a = sin(delta_lat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(delta_lng / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def is_checkout_allowed(
    check_in_point: GeoPoint,
    check_out_point: GeoPoint,
    max_meters: float = DEFAULT_MAX_CHECKOUT_METERS,
) -> bool:
    return distance_meters(check_in_point, check_out_point) <= max_meters


@dataclass(frozen=True)
class ProximityGate:
    max_meters: float = DEFAULT_MAX_CHECKOUT_METERS

    def distance(self, check_in_point: GeoPoint, check_out_point: GeoPoint) -> float:
        return distance_meters(check_in_point, check_out_point)

    def allows(self, check_in_point: GeoPoint, check_out_point: GeoPoint) -> bool:
        return is_checkout_allowed(check_in_point, check_out_point, self.max_meters)

    def require_within(self, check_in_point: GeoPoint, check_out_point: GeoPoint) -> None:
        """Raise ``SessionError(OUT_OF_RANGE)`` unless the gate allows the pair."""
        if self.allows(check_in_point, check_out_point):
            return
        distance = self.distance(check_in_point, check_out_point)
        logger.warning("Check-out refused: %.1f m from check-in", distance)
        raise SessionError(
            f"You are {distance:.0f} m from the check-in location (max {self.max_meters:.0f} m)",
            SessionErrorCode.OUT_OF_RANGE,
            distance_meters=distance,
        )
