"""
Tests for the dice sampler: single rolls, trial sets, and batched simulation.
"""

import dataclasses
import unittest

import numpy as np
from hypothesis import given, settings, strategies as st

from dice_sim.types import Die, Roll, TrialSet, InvalidArgument, MAX_FACE_COUNT
from dice_sim.aggregation.frequency import aggregate_totals
from dice_sim.simulation.engine import (
    roll_dice, simulate, simulate_batches, spawn_generators,
)


class TestDie(unittest.TestCase):

    def test_default_is_six_sided(self):
        self.assertEqual(Die().face_count, 6)

    def test_roll_in_range(self):
        rng = np.random.default_rng(0)
        die = Die(20)
        for _ in range(200):
            self.assertTrue(1 <= die.roll(rng) <= 20)

    def test_rejects_zero_faces(self):
        with self.assertRaises(InvalidArgument) as ctx:
            Die(0)
        self.assertEqual(ctx.exception.parameter, "face_count")

    def test_immutable(self):
        die = Die(6)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            die.face_count = 8

    def test_rejects_face_count_beyond_int64(self):
        with self.assertRaises(InvalidArgument) as ctx:
            Die(2**63)
        self.assertEqual(ctx.exception.parameter, "face_count")


class TestRollDice(unittest.TestCase):
    """Property-based tests for roll_dice."""

    @given(
        st.integers(min_value=1, max_value=100),
        st.integers(min_value=1, max_value=20),
        st.integers(min_value=0, max_value=2**32 - 1),
    )
    def test_range_and_cardinality(self, face_count, num_dice, seed):
        roll = roll_dice(face_count, num_dice, rng=seed)

        # Property: one face per die
        self.assertEqual(len(roll), num_dice)

        # Property: every face in [1, face_count]
        for face in roll:
            self.assertTrue(1 <= face <= face_count)

        self.assertEqual(roll.total, sum(roll.faces))

    def test_returns_plain_ints(self):
        roll = roll_dice(6, 3, rng=1)
        self.assertIsInstance(roll, Roll)
        self.assertTrue(all(type(f) is int for f in roll.faces))

    def test_single_face_die(self):
        self.assertEqual(roll_dice(1, 5, rng=3).faces, (1, 1, 1, 1, 1))

    def test_same_seed_same_roll(self):
        self.assertEqual(roll_dice(6, 4, rng=99), roll_dice(6, 4, rng=99))

    def test_generator_state_advances(self):
        """A passed Generator is used as-is, so sequences match a twin generator."""
        g1 = np.random.default_rng(2024)
        g2 = np.random.default_rng(2024)
        seq1 = [roll_dice(6, 2, rng=g1) for _ in range(10)]
        seq2 = [roll_dice(6, 2, rng=g2) for _ in range(10)]
        self.assertEqual(seq1, seq2)

    def test_invalid_arguments(self):
        cases = [
            ({"face_count": 0, "num_dice": 1}, "face_count"),
            ({"face_count": -6, "num_dice": 1}, "face_count"),
            ({"face_count": 6, "num_dice": 0}, "num_dice"),
            ({"face_count": 6.5, "num_dice": 1}, "face_count"),
            ({"face_count": 6, "num_dice": True}, "num_dice"),
        ]
        for kwargs, param in cases:
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(InvalidArgument) as ctx:
                    roll_dice(**kwargs)
                self.assertEqual(ctx.exception.parameter, param)
                self.assertIn(param, str(ctx.exception))

    def test_invalid_argument_is_value_error(self):
        with self.assertRaises(ValueError):
            roll_dice(0, 1)

    def test_face_count_beyond_int64(self):
        for face_count in (2**63, 2**63 - 1, 10**30):
            with self.subTest(face_count=face_count):
                with self.assertRaises(InvalidArgument) as ctx:
                    roll_dice(face_count, 1, rng=1)
                self.assertEqual(ctx.exception.parameter, "face_count")

    def test_largest_face_count(self):
        roll = roll_dice(MAX_FACE_COUNT, 3, rng=1)
        self.assertEqual(len(roll), 3)
        self.assertTrue(all(1 <= f <= MAX_FACE_COUNT for f in roll))


class TestSimulate(unittest.TestCase):

    def test_shape(self):
        trials = simulate(6, 2, 100, seed=123)
        self.assertIsInstance(trials, TrialSet)
        self.assertEqual(len(trials), 100)
        self.assertEqual(trials.num_dice, 2)
        self.assertEqual(trials.faces.shape, (100, 2))

    def test_determinism(self):
        first = simulate(6, 2, 100, seed=123)
        second = simulate(6, 2, 100, seed=123)
        self.assertTrue(np.array_equal(first.faces, second.faces))
        self.assertEqual(list(first), list(second))

    def test_reference_rolls_seed_123(self):
        """Pinned PCG64 output for 100 rolls of 2d6 with seed 123."""
        trials = simulate(6, 2, 100, seed=123)
        self.assertEqual(
            trials.to_lists()[:5], [[1, 5], [4, 1], [6, 2], [2, 2], [3, 2]]
        )
        self.assertEqual(
            aggregate_totals(trials).to_dict(),
            {3: 3, 4: 15, 5: 13, 6: 12, 7: 19, 8: 20, 9: 9, 10: 6, 11: 2, 12: 1},
        )

    def test_different_seeds_differ(self):
        a = simulate(6, 2, 100, seed=1)
        b = simulate(6, 2, 100, seed=2)
        self.assertFalse(np.array_equal(a.faces, b.faces))

    @settings(deadline=None, max_examples=50)
    @given(
        st.integers(min_value=1, max_value=30),
        st.integers(min_value=1, max_value=6),
        st.integers(min_value=0, max_value=200),
        st.integers(min_value=0, max_value=2**32 - 1),
    )
    def test_range_and_cardinality(self, face_count, num_dice, num_trials, seed):
        trials = simulate(face_count, num_dice, num_trials, seed=seed)
        self.assertEqual(len(trials), num_trials)
        for roll in trials:
            self.assertEqual(len(roll), num_dice)
            self.assertTrue(all(1 <= f <= face_count for f in roll))

    def test_totals_match_rolls(self):
        trials = simulate(8, 3, 50, seed=5)
        self.assertEqual(trials.totals.tolist(), [r.total for r in trials])

    def test_indexing_returns_roll(self):
        trials = simulate(6, 2, 10, seed=7)
        self.assertEqual(trials[3].faces, tuple(trials.to_lists()[3]))

    def test_slicing_returns_trial_set(self):
        trials = simulate(6, 2, 10, seed=7)
        head = trials[2:5]
        self.assertIsInstance(head, TrialSet)
        self.assertEqual(len(head), 3)
        self.assertEqual(head.face_count, 6)
        self.assertEqual(head.num_dice, 2)
        self.assertTrue(np.array_equal(head.faces, trials.faces[2:5]))
        self.assertEqual(list(head), list(trials)[2:5])
        self.assertEqual(trials[::3].to_lists(), trials.to_lists()[::3])

    def test_empty_slice(self):
        empty = simulate(6, 2, 10, seed=7)[:0]
        self.assertIsInstance(empty, TrialSet)
        self.assertEqual(len(empty), 0)
        self.assertEqual(empty.num_dice, 2)

    def test_zero_trials(self):
        trials = simulate(6, 3, 0, seed=1)
        self.assertEqual(len(trials), 0)
        self.assertEqual(trials.num_dice, 3)
        self.assertEqual(list(trials), [])
        self.assertEqual(trials.to_lists(), [])

    def test_face_count_beyond_int64_rejected(self):
        with self.assertRaises(InvalidArgument) as ctx:
            simulate(2**63, 1, 1)
        self.assertEqual(ctx.exception.parameter, "face_count")

    def test_negative_trials_rejected(self):
        with self.assertRaises(InvalidArgument) as ctx:
            simulate(6, 2, -1)
        self.assertEqual(ctx.exception.parameter, "num_trials")


class TestBatches(unittest.TestCase):

    def test_batch_sizes(self):
        batches = simulate_batches(6, 2, 103, n_batches=4, seed=11)
        sizes = [len(b) for b in batches]
        self.assertEqual(sum(sizes), 103)
        self.assertLessEqual(max(sizes) - min(sizes), 1)

    def test_reproducible(self):
        a = simulate_batches(6, 2, 40, n_batches=3, seed=11)
        b = simulate_batches(6, 2, 40, n_batches=3, seed=11)
        for x, y in zip(a, b):
            self.assertTrue(np.array_equal(x.faces, y.faces))

    def test_batches_use_independent_streams(self):
        a, b = simulate_batches(20, 3, 200, n_batches=2, seed=11)
        self.assertFalse(np.array_equal(a.faces, b.faces))

    def test_spawn_generators(self):
        gens = spawn_generators(42, 3)
        self.assertEqual(len(gens), 3)
        draws = [g.integers(0, 2**31, size=4).tolist() for g in gens]
        self.assertEqual(len({tuple(d) for d in draws}), 3)

    def test_spawn_from_generator(self):
        gens = spawn_generators(np.random.default_rng(3), 2)
        self.assertEqual(len(gens), 2)
        self.assertTrue(all(isinstance(g, np.random.Generator) for g in gens))

    def test_invalid_batch_count(self):
        with self.assertRaises(InvalidArgument):
            simulate_batches(6, 2, 10, n_batches=0)


if __name__ == "__main__":
    unittest.main()
