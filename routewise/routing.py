"""
Distance and travel time utilities for RouteWise.

All geometry is straight-line great-circle distance computed with the
Haversine formula; there is no road network. Units follow a fixed
convention throughout the package: coordinates in degrees, distances in
meters, durations in minutes and speeds in km/h.

Example usage:

    pittsburgh = (40.4406, -79.9959)
    oakland = (40.4475, -79.9646)
    meters = haversine_distance(pittsburgh, oakland)
    minutes = travel_minutes(meters, avg_speed_kmph=35)
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

EARTH_RADIUS_M = 6_371_000.0


def haversine_distance(coord1: Tuple[float, float], coord2: Tuple[float, float]) -> float:
    """Compute the great‑circle distance between two coordinates in meters."""
    lat1, lon1 = coord1
    lat2, lon2 = coord2
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # rounding can push ``a`` just outside [0, 1] near poles and antipodes;
    # NaN coordinates stay NaN
    if not math.isnan(a):
        a = min(1.0, max(0.0, a))
    c = 2 * math.asin(math.sqrt(a))
    return EARTH_RADIUS_M * c


def travel_minutes(meters: float, avg_speed_kmph: float) -> float:
    """Convert a distance into an estimated travel duration.

    Args:
        meters: Distance to travel.
        avg_speed_kmph: Average speed in km/h.

    Returns:
        Duration in minutes, or ``math.inf`` when the speed is zero or
        negative. Callers must check for infinity; nothing is raised.
    """
    if avg_speed_kmph <= 0:
        return math.inf
    return (meters / 1000.0 / avg_speed_kmph) * 60.0


def compute_haversine_matrix(coords: Sequence[Tuple[float, float]]) -> List[List[float]]:
    """Compute a symmetric distance matrix (meters) using the Haversine formula.

    Args:
        coords: List of (lat, lon) tuples.

    Returns:
        Square matrix where ``matrix[i][j]`` is the distance from
        ``coords[i]`` to ``coords[j]``.
    """
    n = len(coords)
    dist_matrix = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            dist = haversine_distance(coords[i], coords[j])
            dist_matrix[i][j] = dist
            dist_matrix[j][i] = dist
    return dist_matrix
