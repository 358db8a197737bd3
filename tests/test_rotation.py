import random
import unittest

from spin_wheel.models import Participant, WheelSettings
from spin_wheel.pool import build_pool
from spin_wheel.rotation import (
    final_rotation,
    pointer_angle,
    segment_at_angle,
    target_angle_for_winner,
)
from spin_wheel.segments import merge_adjacent, partition

A = Participant(id="a", name="A", color="red")
B = Participant(id="b", name="B", color="blue")
C = Participant(id="c", name="C", color="green", boosted=True)


class FixedRandom:
    def __init__(self, *values):
        self.values = list(values)

    def randrange(self, n):
        return self.values.pop(0)


class TestFinalRotation(unittest.TestCase):
    def test_reference_value(self):
        self.assertEqual(final_rotation(90, 3), 1260)

    def test_default_turns(self):
        self.assertEqual(final_rotation(90), 1260)

    def test_more_turns_add_full_circles(self):
        self.assertEqual(final_rotation(45, 5) - final_rotation(45, 3), 720)


class TestTargetAngle(unittest.TestCase):
    def setUp(self):
        settings = WheelSettings(base_slot_count=1, boost_multiplier=3)
        self.segments = partition(build_pool([A, C], settings))

    def test_midpoint_of_chosen_segment(self):
        # C owns 90-180, 180-270, 270-360
        self.assertEqual(target_angle_for_winner(self.segments, "c", FixedRandom(0)), 135.0)
        self.assertEqual(target_angle_for_winner(self.segments, "c", FixedRandom(2)), 315.0)
        self.assertEqual(target_angle_for_winner(self.segments, "a", FixedRandom(0)), 45.0)

    def test_unknown_winner(self):
        self.assertIsNone(target_angle_for_winner(self.segments, "zzz", FixedRandom(0)))
        self.assertIsNone(target_angle_for_winner([], "a", FixedRandom(0)))


class TestPointer(unittest.TestCase):
    def test_pointer_angle_inverts_final_rotation(self):
        self.assertEqual(pointer_angle(final_rotation(90, 3)), 90.0)
        self.assertEqual(pointer_angle(0), 270.0)

    def test_every_spin_stops_on_winner(self):
        settings = WheelSettings(base_slot_count=3, boost_multiplier=2)
        segments = partition(build_pool([A, B, C], settings))
        rng = random.Random(5)
        for seg in segments:
            target = target_angle_for_winner(segments, seg.owner_id, rng)
            landed = segment_at_angle(segments, pointer_angle(final_rotation(target)))
            self.assertEqual(landed.owner_id, seg.owner_id)
            merged_hit = segment_at_angle(merge_adjacent(segments), pointer_angle(final_rotation(target)))
            self.assertEqual(merged_hit.owner_id, seg.owner_id)

    def test_segment_at_angle_bounds(self):
        segments = partition(build_pool([A, B], WheelSettings()))
        self.assertEqual(segment_at_angle(segments, 0.0).owner_id, "a")
        self.assertEqual(segment_at_angle(segments, 180.0).owner_id, "b")
        self.assertEqual(segment_at_angle(segments, 359.9).owner_id, "b")
        self.assertEqual(segment_at_angle(segments, 360.0).owner_id, "a")
        self.assertIsNone(segment_at_angle([], 10.0))


if __name__ == "__main__":
    unittest.main()
