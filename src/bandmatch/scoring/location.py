"""Factor 1: Location Score (25% default weight).

Great-circle distance between two musicians, mapped to 0-100:
  - full score up to the optimal distance (plateau)
  - exponential decay between optimal and max distance
  - zero beyond max distance
"""

from __future__ import annotations

import logging
import math

from bandmatch.domain_model import round_half_up
from bandmatch.models import Location, LocationResult

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0
DECAY_RATE = 2.0


def haversine_distance(a: Location, b: Location) -> float:
    """Distance in km between two coordinates."""
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(d_lat / 2) * math.sin(d_lat / 2)
        + math.cos(math.radians(a.latitude))
        * math.cos(math.radians(b.latitude))
        * math.sin(d_lon / 2)
        * math.sin(d_lon / 2)
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def calculate(
    user_location: Location,
    candidate_location: Location,
    max_distance: float = 100,
    optimal_distance: float = 25,
) -> LocationResult:
    distance = haversine_distance(user_location, candidate_location)

    if distance > max_distance:
        return LocationResult(score=0, distance=distance)

    if distance <= optimal_distance:
        return LocationResult(score=100, distance=distance)

    span = max_distance - optimal_distance
    if span <= 0:
        return LocationResult(score=0, distance=distance)

    decay = (distance - optimal_distance) / span
    score = round_half_up(max(0.0, 100 * math.exp(-DECAY_RATE * decay)))

    logger.debug(
        "Location: %.1fkm (optimal=%.0f max=%.0f) decay=%.3f -> %d",
        distance, optimal_distance, max_distance, decay, score,
    )
    return LocationResult(score=score, distance=distance)
