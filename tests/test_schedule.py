import unittest
from datetime import time, timedelta

from routewise.models import Route, Stop
from routewise.routing import haversine_distance, travel_minutes
from routewise.schedule import parse_time_string, schedule_route

DEPOT = Stop(0, "Depot", 40.4406, -79.9959, 0.0)
POOL_A = Stop(1, "Pool A", 40.4475, -79.9646, 10.0)
POOL_B = Stop(2, "Pool B", 40.4300, -80.0005, 12.0)


class TestSchedule(unittest.TestCase):
    def test_parse_time_string(self):
        self.assertEqual(parse_time_string(" 09:30 "), time(9, 30))

    def test_schedule_with_depot(self):
        route = Route(1, DEPOT, [POOL_A, POOL_B])
        schedule = schedule_route(route, "09:00", avg_speed_kmph=30)
        self.assertEqual([s.stop_id for s in schedule], [1, 2])

        first_leg = travel_minutes(haversine_distance(DEPOT.coords, POOL_A.coords), 30)
        start = schedule[0].arrival - timedelta(minutes=first_leg)
        self.assertEqual((start.hour, start.minute), (9, 0))
        self.assertEqual(schedule[0].departure - schedule[0].arrival, timedelta(minutes=10))

        second_leg = travel_minutes(haversine_distance(POOL_A.coords, POOL_B.coords), 30)
        gap = (schedule[1].arrival - schedule[0].departure).total_seconds() / 60
        self.assertAlmostEqual(gap, second_leg, places=3)

    def test_schedule_without_depot_starts_at_first_stop(self):
        route = Route(1, stops=[POOL_A, POOL_B])
        schedule = schedule_route(route, "08:15", avg_speed_kmph=30)
        self.assertEqual(schedule[0].arrival.time(), time(8, 15))

    def test_schedule_undefined_speed(self):
        with self.assertRaises(ValueError):
            schedule_route(Route(1, DEPOT, [POOL_A]), "09:00", avg_speed_kmph=0)

    def test_empty_route(self):
        self.assertEqual(schedule_route(Route(1, DEPOT), "09:00", avg_speed_kmph=30), [])


if __name__ == "__main__":
    unittest.main()
