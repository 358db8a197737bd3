import random
import unittest

from spin_wheel.draw import select_winner, simulate_draws, win_probabilities
from spin_wheel.models import Participant, WheelSettings
from spin_wheel.pool import Slot, build_pool


class FixedRandom:
    """Returns queued indices from randrange."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = []

    def randrange(self, n):
        self.calls.append(n)
        return self.values.pop(0)


A = Participant(id="a", name="A", color="red")
B = Participant(id="b", name="B", color="blue", excluded=True)
C = Participant(id="c", name="C", color="green", boosted=True)


class TestSelectWinner(unittest.TestCase):
    def test_empty_pool_has_no_winner(self):
        self.assertIsNone(select_winner([], random.Random(1)))

    def test_draws_index_over_whole_pool(self):
        pool = [Slot(A), Slot(C), Slot(C), Slot(C)]
        rng = FixedRandom(0, 3)
        self.assertEqual(select_winner(pool, rng), A)
        self.assertEqual(select_winner(pool, rng), C)
        self.assertEqual(rng.calls, [4, 4])

    def test_single_slot_always_wins(self):
        rng = random.Random(99)
        for _ in range(50):
            self.assertEqual(select_winner([Slot(A)], rng), A)


class TestProbabilities(unittest.TestCase):
    def setUp(self):
        settings = WheelSettings(base_slot_count=1, boost_multiplier=3)
        self.pool = build_pool([A, B, C], settings)

    def test_expected_probabilities(self):
        self.assertEqual(win_probabilities(self.pool), {"a": 0.25, "c": 0.75})
        self.assertEqual(win_probabilities([]), {})

    def test_empirical_frequency_converges(self):
        trials = 20_000
        wins = simulate_draws(self.pool, trials, random.Random(1234))
        self.assertEqual(sum(wins.values()), trials)
        self.assertNotIn("b", wins)
        self.assertAlmostEqual(wins["a"] / trials, 0.25, delta=0.02)
        self.assertAlmostEqual(wins["c"] / trials, 0.75, delta=0.02)

    def test_simulate_empty_pool(self):
        self.assertEqual(sum(simulate_draws([], 100, random.Random(0)).values()), 0)


if __name__ == "__main__":
    unittest.main()
