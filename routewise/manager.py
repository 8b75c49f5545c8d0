"""
Multi-route coordination for RouteWise.

``RouteManager`` owns a collection of routes and moves stops between
them. A stop id is held by at most one route at a time: stops leave a
route through ``remove_stop_by_id`` (ownership passes to the caller) and
enter one through ``add_stop_to_route``. Lookup misses are reported as
``False``/``None`` results and logged, never raised.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .models import Route, RouteSummary, Stop

logger = logging.getLogger(__name__)


class DuplicateRouteError(ValueError):
    """Raised when a route id is registered twice."""


class RouteManager:
    """Owns a set of routes and moves stops between them."""

    def __init__(self) -> None:
        self.routes: List[Route] = []

    def add_route(self, route: Route) -> None:
        """Register ``route``; raises ``DuplicateRouteError`` on an id collision."""
        if self.get_route(route.id) is not None:
            raise DuplicateRouteError(f"Route {route.id} already exists")
        self.routes.append(route)

    def get_route(self, route_id: int) -> Optional[Route]:
        """Return the route with ``route_id``, or ``None``."""
        for route in self.routes:
            if route.id == route_id:
                return route
        return None

    def find_route_for_stop(self, stop_id: int) -> Optional[Route]:
        """Return the first route (in registration order) holding ``stop_id``."""
        for route in self.routes:
            if any(stop.id == stop_id for stop in route.stops):
                return route
        return None

    def add_stop_to_route(self, route_id: int, stop: Stop) -> bool:
        """Append ``stop`` to the route ``route_id``.

        Returns ``False`` if no such route exists, if ``stop`` is that
        route's depot, or if a route already holds the stop id. The stop
        is then not retained anywhere, so the caller remains its only
        owner.
        """
        route = self.get_route(route_id)
        if route is None:
            logger.warning("Route %s not found; stop %s was not added", route_id, stop.id)
            return False
        if route.depot is not None and route.depot == stop:
            logger.warning("Stop %s is the depot of route %s; not added", stop.id, route_id)
            return False
        owner = self.find_route_for_stop(stop.id)
        if owner is not None:
            logger.warning(
                "Stop %s already belongs to route %s; not added to route %s",
                stop.id, owner.id, route_id,
            )
            return False
        route.stops.append(stop)
        logger.info("Added stop %s to route %s", stop.id, route_id)
        return True

    def remove_stop_by_id(self, stop_id: int) -> Optional[Stop]:
        """Remove and return the first stop with ``stop_id``, or ``None``."""
        for route in self.routes:
            for pos, stop in enumerate(route.stops):
                if stop.id == stop_id:
                    logger.info("Removed stop %s from route %s", stop_id, route.id)
                    return route.stops.pop(pos)
        logger.warning("Stop %s not found in any route", stop_id)
        return None

    def reassign_stop(self, stop_id: int, target_route_id: int) -> bool:
        """Move a stop to another route.

        The target is checked before anything is removed, so a failed
        reassignment leaves every route unchanged.
        """
        target = self.get_route(target_route_id)
        if target is None:
            logger.warning(
                "Cannot reassign stop %s: route %s not found", stop_id, target_route_id
            )
            return False
        if target.depot is not None and target.depot.id == stop_id:
            logger.warning(
                "Cannot reassign stop %s: it is the depot of route %s", stop_id, target_route_id
            )
            return False
        stop = self.remove_stop_by_id(stop_id)
        if stop is None:
            return False
        return self.add_stop_to_route(target_route_id, stop)

    def optimize_all(self) -> None:
        """Optimise each route independently; stops never change route."""
        for route in self.routes:
            route.optimize()

    def total_distance_meters(self) -> float:
        return sum(route.total_distance_meters() for route in self.routes)

    def summaries(self, avg_speed_kmph: Optional[float] = None) -> List[RouteSummary]:
        return [route.summary(avg_speed_kmph) for route in self.routes]
