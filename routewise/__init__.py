"""
RouteWise package initialization.

This package computes visiting orders for service stops split across
one or more mobile workers, estimates travel and service time for each
route, and supports incremental edits followed by re-optimisation.

Modules:
    config        – Runtime settings (pydantic-settings) and logging setup.
    routing       – Haversine distances, travel time estimation and
                    distance matrices.
    optimisation  – Nearest neighbour and 2‑opt heuristics on a distance
                    matrix with an optional depot.
    models        – ``Stop`` and ``Route`` records with route metrics.
    manager       – ``RouteManager`` coordinating stops across routes.
    schedule      – Arrival/departure itinerary for an optimised route.
    visualisation – Folium based map creation utilities.

Only straight-line great-circle distance is used as a travel proxy, so
results are approximate and assume no road network.
"""

__all__ = [
    "config",
    "routing",
    "optimisation",
    "models",
    "manager",
    "schedule",
    "visualisation",
]
