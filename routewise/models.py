"""
Stop and route records for RouteWise.

A ``Stop`` is an immutable location with a service duration. A ``Route``
owns an ordered list of stops (the visiting sequence) and an optional
depot that anchors the start and end of the tour. Routes expose their
metrics and optimise their own stop order in place using the heuristics
from :mod:`routewise.optimisation`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import settings
from .optimisation import nearest_neighbor, two_opt
from .routing import compute_haversine_matrix, haversine_distance, travel_minutes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Stop:
    """A service location. Identity (equality and hashing) is ``id``."""

    id: int
    name: str = field(compare=False)
    lat: float = field(compare=False)
    lon: float = field(compare=False)
    service_duration: float = field(default=0.0, compare=False)  # minutes

    def __post_init__(self) -> None:
        if self.service_duration < 0:
            raise ValueError(
                f"Stop {self.id} has negative service duration {self.service_duration}"
            )

    @property
    def coords(self) -> Tuple[float, float]:
        return self.lat, self.lon


@dataclass(frozen=True)
class RouteSummary:
    route_id: int
    stop_ids: Tuple[int, ...]
    stop_count: int
    distance_meters: float
    travel_minutes: float
    service_minutes: float
    total_minutes: float


@dataclass
class Route:
    """An ordered sequence of stops worked by one mobile worker.

    With a depot the route is a closed tour (depot → stops → depot),
    otherwise an open path from the first to the last stop. The depot
    is never a member of ``stops``, and a stop id must not appear twice.
    """

    id: int
    depot: Optional[Stop] = None
    stops: List[Stop] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.depot is not None and self.depot in self.stops:
            raise ValueError(f"Depot {self.depot.id} cannot also be a stop of route {self.id}")

    def total_distance_meters(self) -> float:
        """Haversine length of the tour in meters."""
        dist = 0.0
        prev = self.depot
        for stop in self.stops:
            if prev is not None:
                dist += haversine_distance(prev.coords, stop.coords)
            prev = stop
        if self.depot is not None and self.stops:
            dist += haversine_distance(self.stops[-1].coords, self.depot.coords)
        return dist

    def service_minutes(self) -> float:
        return sum(stop.service_duration for stop in self.stops)

    def total_time_minutes(self, avg_speed_kmph: Optional[float] = None) -> float:
        """Travel time plus service time in minutes.

        Returns ``math.inf`` when the speed is zero or negative.
        """
        if avg_speed_kmph is None:
            avg_speed_kmph = settings.avg_speed_kmph
        travel = travel_minutes(self.total_distance_meters(), avg_speed_kmph)
        return travel + self.service_minutes()

    def _distance_matrix(self) -> Tuple[List[List[float]], Optional[int]]:
        # stops occupy indices 0..n-1, the depot (if any) index n
        coords = [stop.coords for stop in self.stops]
        depot_index = None
        if self.depot is not None:
            depot_index = len(coords)
            coords.append(self.depot.coords)
        return compute_haversine_matrix(coords), depot_index

    def build_nearest_neighbor(self) -> None:
        """Reorder stops greedily, starting from the depot or the first stop."""
        if not self.stops:
            return
        dist_matrix, depot_index = self._distance_matrix()
        order = nearest_neighbor(dist_matrix, range(len(self.stops)), depot=depot_index)
        self.stops[:] = [self.stops[i] for i in order]

    def two_opt(self, tolerance: Optional[float] = None) -> None:
        """Improve the current order in place until it is 2‑opt optimal."""
        if len(self.stops) < 3:
            return
        dist_matrix, depot_index = self._distance_matrix()
        order = two_opt(
            list(range(len(self.stops))), dist_matrix, depot=depot_index, tolerance=tolerance
        )
        self.stops[:] = [self.stops[i] for i in order]

    def optimize(self) -> None:
        """Run nearest neighbour then 2‑opt on the stop set.

        The set is treated as an unordered bag: construction always starts
        from the stops sorted by id. If the result is not shorter than the
        current order, the current order is kept and only 2‑opt is applied
        to it, so the distance never grows and a repeated call is a no-op.
        """
        if not self.stops:
            return
        tolerance = settings.improvement_tolerance
        incumbent = list(self.stops)
        before = self.total_distance_meters()

        self.stops.sort(key=lambda stop: stop.id)
        self.build_nearest_neighbor()
        self.two_opt(tolerance)
        after = self.total_distance_meters()

        if after > before - tolerance:
            self.stops[:] = incumbent
            self.two_opt(tolerance)
            after = self.total_distance_meters()
        logger.info(
            "Route %s optimised: %d stops, %.1f m -> %.1f m",
            self.id, len(self.stops), before, after,
        )

    def summary(self, avg_speed_kmph: Optional[float] = None) -> RouteSummary:
        """Snapshot of the route's order and metrics for presentation layers."""
        if avg_speed_kmph is None:
            avg_speed_kmph = settings.avg_speed_kmph
        meters = self.total_distance_meters()
        travel = travel_minutes(meters, avg_speed_kmph)
        service = self.service_minutes()
        return RouteSummary(
            route_id=self.id,
            stop_ids=tuple(stop.id for stop in self.stops),
            stop_count=len(self.stops),
            distance_meters=meters,
            travel_minutes=travel,
            service_minutes=service,
            total_minutes=travel + service,
        )
