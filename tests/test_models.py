import math
import random
import unittest

from routewise.models import Route, Stop
from routewise.routing import haversine_distance

DEPOT = Stop(0, "Depot", 40.4406, -79.9959, 0.0)


def random_stops(rng, n, start_id=1):
    return [
        Stop(
            start_id + i,
            f"Pool {start_id + i}",
            40.40 + rng.random() * 0.08,
            -80.03 + rng.random() * 0.08,
            rng.choice([8.0, 10.0, 12.0, 15.0]),
        )
        for i in range(n)
    ]


class TestStop(unittest.TestCase):
    def test_identity_is_id(self):
        a = Stop(1, "Pool A", 40.4475, -79.9646, 10.0)
        b = Stop(1, "Renamed", 0.0, 0.0, 5.0)
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertNotEqual(a, Stop(2, "Pool A", 40.4475, -79.9646, 10.0))

    def test_immutable(self):
        stop = Stop(1, "Pool A", 40.4475, -79.9646, 10.0)
        with self.assertRaises(AttributeError):
            stop.lat = 0.0

    def test_negative_service_duration(self):
        with self.assertRaises(ValueError):
            Stop(1, "Pool A", 40.4475, -79.9646, -1.0)

    def test_coords(self):
        self.assertEqual(DEPOT.coords, (40.4406, -79.9959))


class TestRouteMetrics(unittest.TestCase):
    def test_depot_cannot_be_stop(self):
        with self.assertRaises(ValueError):
            Route(1, DEPOT, [DEPOT])

    def test_empty_and_single_stop_without_depot(self):
        self.assertEqual(Route(1).total_distance_meters(), 0.0)
        route = Route(1, stops=[Stop(1, "Pool A", 40.4475, -79.9646, 10.0)])
        self.assertEqual(route.total_distance_meters(), 0.0)

    def test_closed_tour_with_depot(self):
        stop = Stop(1, "Pool A", 40.4475, -79.9646, 10.0)
        route = Route(1, DEPOT, [stop])
        leg = haversine_distance(DEPOT.coords, stop.coords)
        self.assertAlmostEqual(route.total_distance_meters(), 2 * leg)
        self.assertEqual(Route(2, DEPOT).total_distance_meters(), 0.0)

    def test_open_path_without_depot(self):
        a = Stop(1, "Pool A", 40.4475, -79.9646, 10.0)
        b = Stop(2, "Pool B", 40.4300, -80.0005, 12.0)
        c = Stop(3, "Pool C", 40.4305, -79.9800, 8.0)
        route = Route(1, stops=[a, b, c])
        expected = haversine_distance(a.coords, b.coords) + haversine_distance(b.coords, c.coords)
        self.assertAlmostEqual(route.total_distance_meters(), expected)

    def test_total_time_minutes(self):
        a = Stop(1, "Pool A", 40.4475, -79.9646, 10.0)
        b = Stop(2, "Pool B", 40.4300, -80.0005, 12.0)
        route = Route(1, stops=[a, b])
        meters = haversine_distance(a.coords, b.coords)
        self.assertAlmostEqual(route.service_minutes(), 22.0)
        self.assertAlmostEqual(route.total_time_minutes(30), meters / 1000 / 30 * 60 + 22.0)
        self.assertEqual(route.total_time_minutes(0), math.inf)

    def test_summary(self):
        a = Stop(1, "Pool A", 40.4475, -79.9646, 10.0)
        route = Route(4, DEPOT, [a])
        summary = route.summary(40)
        self.assertEqual(summary.route_id, 4)
        self.assertEqual(summary.stop_ids, (1,))
        self.assertEqual(summary.stop_count, 1)
        self.assertAlmostEqual(summary.distance_meters, route.total_distance_meters())
        self.assertAlmostEqual(summary.total_minutes, route.total_time_minutes(40))
        self.assertEqual(summary.service_minutes, 10.0)


class TestRouteOptimisation(unittest.TestCase):
    def test_nearest_neighbor_starts_at_first_stop_without_depot(self):
        stops = [
            Stop(1, "East", 0.0, 0.03, 0),
            Stop(2, "West", 0.0, 0.00, 0),
            Stop(3, "Middle", 0.0, 0.02, 0),
            Stop(4, "Near west", 0.0, 0.01, 0),
        ]
        route = Route(1, stops=list(stops))
        route.build_nearest_neighbor()
        self.assertEqual([s.id for s in route.stops], [1, 3, 4, 2])

    def test_nearest_neighbor_starts_from_depot(self):
        depot = Stop(0, "Depot", 0.0, 0.0, 0)
        stops = [
            Stop(1, "Far", 0.0, 0.03, 0),
            Stop(2, "Near", 0.0, 0.01, 0),
            Stop(3, "Middle", 0.0, 0.02, 0),
        ]
        route = Route(1, depot, list(stops))
        route.build_nearest_neighbor()
        self.assertEqual([s.id for s in route.stops], [2, 3, 1])
        self.assertNotIn(depot, route.stops)

    def test_two_opt_open_path_boundary(self):
        # Stops along the equator at 0.02, 0.01, 0.00, 0.03 degrees east.
        # Reversing the first three removes the 0.00 -> 0.03 edge.
        stops = [
            Stop(1, "A", 0.0, 0.02, 0),
            Stop(2, "B", 0.0, 0.01, 0),
            Stop(3, "C", 0.0, 0.00, 0),
            Stop(4, "D", 0.0, 0.03, 0),
        ]
        route = Route(1, stops=stops)
        route.two_opt()
        self.assertEqual([s.id for s in route.stops], [3, 2, 1, 4])

    def test_two_opt_never_worse_than_nearest_neighbor(self):
        rng = random.Random(42)
        for n in (3, 5, 8, 13, 21):
            for depot in (DEPOT, None):
                route = Route(1, depot, random_stops(rng, n))
                route.build_nearest_neighbor()
                nn_distance = route.total_distance_meters()
                route.two_opt()
                self.assertLessEqual(route.total_distance_meters(), nn_distance + 1e-6)
                self.assertEqual(len(route.stops), n)

    def test_optimize_is_idempotent(self):
        rng = random.Random(7)
        for depot in (DEPOT, None):
            route = Route(1, depot, random_stops(rng, 12))
            route.optimize()
            order = [s.id for s in route.stops]
            distance = route.total_distance_meters()
            route.optimize()
            self.assertEqual([s.id for s in route.stops], order)
            self.assertAlmostEqual(route.total_distance_meters(), distance)

    def test_optimize_never_increases_distance(self):
        rng = random.Random(3)
        for _ in range(10):
            for depot in (DEPOT, None):
                route = Route(1, depot, random_stops(rng, rng.randint(1, 10)))
                before = route.total_distance_meters()
                ids = sorted(s.id for s in route.stops)
                route.optimize()
                self.assertLessEqual(route.total_distance_meters(), before + 1e-6)
                self.assertEqual(sorted(s.id for s in route.stops), ids)

    def test_optimize_empty_route(self):
        route = Route(1, DEPOT)
        route.optimize()
        self.assertEqual(route.stops, [])


if __name__ == "__main__":
    unittest.main()
