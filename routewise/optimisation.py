"""
Route optimisation heuristics for RouteWise.

This module implements simple travelling salesman heuristics for
constructing an approximate shortest tour through a set of points.
It provides two main functions:

    - ``nearest_neighbor``: build an initial route by repeatedly
      visiting the nearest unvisited location.
    - ``two_opt``: perform a 2‑opt optimisation on an initial route.

The algorithms operate on a symmetric distance matrix. Routes are lists
of matrix indices. An optional ``depot`` index acts as a fixed anchor
before the first and after the last stop; it never appears in the
route itself. Without a depot the route is an open path and its two
ends have no outgoing edge.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .config import settings

logger = logging.getLogger(__name__)


def _edge(dist_matrix: Sequence[Sequence[float]], a: Optional[int], b: Optional[int]) -> float:
    """Length of the edge a-b, or zero when either end is absent."""
    if a is None or b is None:
        return 0.0
    return dist_matrix[a][b]


def path_length(
    route: Sequence[int],
    dist_matrix: Sequence[Sequence[float]],
    depot: Optional[int] = None,
) -> float:
    """Length of ``route``, closed through ``depot`` when one is given."""
    if not route:
        return 0.0
    length = _edge(dist_matrix, depot, route[0]) + _edge(dist_matrix, route[-1], depot)
    for i in range(len(route) - 1):
        length += dist_matrix[route[i]][route[i + 1]]
    return length


def nearest_neighbor(
    dist_matrix: Sequence[Sequence[float]],
    candidates: Sequence[int],
    depot: Optional[int] = None,
) -> List[int]:
    """Construct an initial route using the nearest neighbor heuristic.

    Args:
        dist_matrix: A square matrix of distances.
        candidates: Indices to visit. Their order only matters for
            choosing the start (when there is no depot) and for breaking
            ties, where the earlier candidate wins.
        depot: Optional index the walk starts from. When absent, the
            first candidate is the start and is emitted first.

    Returns:
        A list containing every index of ``candidates`` exactly once.
    """
    remaining = list(candidates)
    if not remaining:
        return []
    route: List[int] = []
    if depot is None:
        current = remaining.pop(0)
        route.append(current)
    else:
        current = depot
    while remaining:
        best_pos = 0
        best_dist = float("inf")
        for pos, j in enumerate(remaining):
            d = dist_matrix[current][j]
            if d < best_dist:
                best_dist = d
                best_pos = pos
        current = remaining.pop(best_pos)
        route.append(current)
    return route


def two_opt(
    route: List[int],
    dist_matrix: Sequence[Sequence[float]],
    depot: Optional[int] = None,
    tolerance: Optional[float] = None,
) -> List[int]:
    """Perform 2‑opt optimisation on a given route.

    For every pair ``(i, k)`` with ``k >= i + 2`` the edges entering
    ``route[i]`` and leaving ``route[k]`` are exchanged by reversing
    ``route[i..k]`` whenever that shortens the tour by more than
    ``tolerance`` meters. Sweeps repeat until one finds no improvement.

    At the boundary the node before ``route[0]`` and after ``route[-1]``
    is the depot. Without a depot there is no edge there, and the missing
    edge counts as zero length on both the removed and the added side.
    Reversing the whole path of an open route is skipped.

    Args:
        route: Initial route as a list of indices.
        dist_matrix: Square matrix of distances corresponding to the
            indices in ``route``.
        depot: Optional anchor index closing the tour.
        tolerance: Minimum gain for a move; defaults to
            ``settings.improvement_tolerance``.

    Returns:
        A route that no single 2‑opt move can improve.
    """
    if tolerance is None:
        tolerance = settings.improvement_tolerance
    best = list(route)
    n = len(best)
    if n < 3:
        return best
    passes = 0
    improved = True
    while improved:
        improved = False
        passes += 1
        for i in range(n - 2):
            for k in range(i + 2, n):
                if depot is None and i == 0 and k == n - 1:
                    continue
                a = depot if i == 0 else best[i - 1]
                b = best[i]
                c = best[k]
                d = depot if k == n - 1 else best[k + 1]
                delta = (
                    _edge(dist_matrix, a, c)
                    + _edge(dist_matrix, b, d)
                    - _edge(dist_matrix, a, b)
                    - _edge(dist_matrix, c, d)
                )
                if delta < -tolerance:
                    best[i:k + 1] = best[i:k + 1][::-1]
                    improved = True
    logger.debug("2-opt converged after %d sweep(s) over %d stops", passes, n)
    return best
