"""
Schedule calculation utilities for RouteWise.

This module turns a route's visiting order into a time‑based itinerary.
Travel between consecutive locations is estimated from the Haversine
distance and an average speed; each stop then occupies its service
duration before the worker leaves for the next one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import List, Optional

from .config import settings
from .models import Route
from .routing import haversine_distance, travel_minutes


@dataclass
class StopSchedule:
    stop_id: int
    arrival: datetime
    departure: datetime


def parse_time_string(t: str) -> time:
    """Parse a HH:MM formatted time string into a datetime.time object."""
    h, m = map(int, t.strip().split(":"))
    return time(hour=h, minute=m)


def schedule_route(
    route: Route,
    departure_time_str: str,
    avg_speed_kmph: Optional[float] = None,
) -> List[StopSchedule]:
    """Generate a schedule for a route in its current order.

    Args:
        route: Route whose stops are visited in list order.
        departure_time_str: Departure time from the depot (or the first
            stop) as HH:MM string, on today's date.
        avg_speed_kmph: Travel speed; defaults to ``settings.avg_speed_kmph``.

    Returns:
        One ``StopSchedule`` per stop with arrival and departure times.

    Raises:
        ValueError: If the speed is zero or negative, since travel time
            is then undefined.
    """
    if avg_speed_kmph is None:
        avg_speed_kmph = settings.avg_speed_kmph
    if avg_speed_kmph <= 0:
        raise ValueError(f"Cannot schedule route {route.id} at speed {avg_speed_kmph} km/h")

    today = datetime.now().date()
    current_time = datetime.combine(today, parse_time_string(departure_time_str))

    schedule: List[StopSchedule] = []
    prev = route.depot
    for stop in route.stops:
        if prev is not None:
            meters = haversine_distance(prev.coords, stop.coords)
            current_time += timedelta(minutes=travel_minutes(meters, avg_speed_kmph))
        arrival_time = current_time
        departure_time = arrival_time + timedelta(minutes=stop.service_duration)
        schedule.append(StopSchedule(stop_id=stop.id, arrival=arrival_time, departure=departure_time))
        current_time = departure_time
        prev = stop
    return schedule
