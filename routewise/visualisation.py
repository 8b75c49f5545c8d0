"""
Map visualisation utilities for RouteWise.

This module provides a helper function to build an interactive map
using the Folium library. It renders numbered markers for the stops of
each route, a marker for each depot, and draws every route as a
polyline in its own colour.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import folium

from .models import Route

ROUTE_COLOURS = ["blue", "red", "green", "purple", "orange", "darkblue", "cadetblue"]


def _route_path(route: Route) -> List[Tuple[float, float]]:
    path = [stop.coords for stop in route.stops]
    if route.depot is not None and path:
        path = [route.depot.coords] + path + [route.depot.coords]
    return path


def create_folium_map(routes: Sequence[Route]) -> folium.Map:
    """Create a Folium map with numbered markers and a polyline per route.

    Args:
        routes: Routes to draw, in their current visiting order.

    Returns:
        A Folium Map object ready for display.
    """
    coords = []
    for route in routes:
        coords.extend(stop.coords for stop in route.stops)
        if route.depot is not None:
            coords.append(route.depot.coords)
    if not coords:
        return folium.Map(location=[0, 0], zoom_start=2)
    # Compute map centre as the mean of all coordinates
    avg_lat = sum(lat for lat, _ in coords) / len(coords)
    avg_lon = sum(lon for _, lon in coords) / len(coords)
    m = folium.Map(location=[avg_lat, avg_lon], zoom_start=12, tiles="OpenStreetMap")

    for route_index, route in enumerate(routes):
        colour = ROUTE_COLOURS[route_index % len(ROUTE_COLOURS)]
        if route.depot is not None:
            folium.Marker(
                location=list(route.depot.coords),
                popup=folium.Popup(f"Route {route.id}: {route.depot.name}", parse_html=True),
                icon=folium.Icon(color=colour, icon="home"),
            ).add_to(m)
        for order, stop in enumerate(route.stops, start=1):
            folium.Marker(
                location=list(stop.coords),
                popup=folium.Popup(f"{order}. {stop.name} (route {route.id})", parse_html=True),
                icon=folium.DivIcon(html=f"<div style='font-size: 12px; color: white; background-color: {colour}; border-radius: 50%; width: 24px; height: 24px; text-align: center; line-height: 24px;'>{order}</div>")
            ).add_to(m)
        path = _route_path(route)
        if len(path) >= 2:
            folium.PolyLine([list(p) for p in path], color=colour, weight=4, opacity=0.6).add_to(m)
    return m
