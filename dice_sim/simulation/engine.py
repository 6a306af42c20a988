"""
Monte Carlo sampling engine for fair dice.

Draws i.i.d. uniform faces with replacement from an explicit
numpy Generator. No global random state is touched: every function
takes its random source as an argument.
"""

import numpy as np
from typing import List
import logging

from ..types import (
    Roll, TrialSet, RandomSource,
    validate_face_count, validate_positive_int, validate_non_negative_int,
)

logger = logging.getLogger(__name__)


def roll_dice(
    face_count: int = 6,
    num_dice: int = 1,
    rng: RandomSource = None
) -> Roll:
    """
    Roll num_dice fair dice once.

    Args:
        face_count: Faces per die (>= 1)
        num_dice: Number of dice in the roll (>= 1)
        rng: Generator, SeedSequence, int seed, or None for fresh entropy.
             A Generator is used as-is and its state advances.

    Returns:
        Roll with num_dice faces, each in [1, face_count]

    Raises:
        InvalidArgument: If face_count or num_dice is not a positive integer
    """
    face_count = validate_face_count(face_count)
    num_dice = validate_positive_int("num_dice", num_dice)

    rng = np.random.default_rng(rng)
    faces = rng.integers(1, face_count + 1, size=num_dice)
    return Roll.from_array(faces)


def simulate(
    face_count: int,
    num_dice: int,
    num_trials: int,
    seed: RandomSource = None
) -> TrialSet:
    """
    Roll num_dice dice num_trials times.

    All trials are drawn into a single [num_trials, num_dice] array,
    so the same seed always reproduces the same TrialSet.

    Args:
        face_count: Faces per die (>= 1)
        num_dice: Dice per roll (>= 1)
        num_trials: Number of rolls (>= 0). Zero gives an empty TrialSet.
        seed: Random seed for reproducibility (accepts int, SeedSequence or Generator)

    Returns:
        TrialSet of num_trials rolls

    Raises:
        InvalidArgument: On out-of-range parameters
    """
    face_count = validate_face_count(face_count)
    num_dice = validate_positive_int("num_dice", num_dice)
    num_trials = validate_non_negative_int("num_trials", num_trials)

    if num_trials == 0:
        return TrialSet.empty(face_count, num_dice)

    rng = np.random.default_rng(seed)
    faces = rng.integers(
        1, face_count + 1, size=(num_trials, num_dice), dtype=np.int64
    )

    logger.debug("Simulated %d rolls of %dd%d", num_trials, num_dice, face_count)
    return TrialSet(face_count=face_count, faces=faces)


def spawn_generators(seed: RandomSource, n: int) -> List[np.random.Generator]:
    """
    Create n statistically independent generators from one seed.

    Children come from SeedSequence.spawn, so batches run in parallel
    never share or correlate their streams.
    """
    n = validate_positive_int("n", n)
    if isinstance(seed, np.random.Generator):
        return list(seed.spawn(n))
    if not isinstance(seed, np.random.SeedSequence):
        seed = np.random.SeedSequence(seed)
    return [np.random.default_rng(child) for child in seed.spawn(n)]


def simulate_batches(
    face_count: int,
    num_dice: int,
    num_trials: int,
    n_batches: int,
    seed: RandomSource = None
) -> List[TrialSet]:
    """
    Split num_trials across n_batches independently seeded TrialSets.

    Batch sizes differ by at most one. Results are reproducible for a
    given (seed, n_batches) pair.
    """
    face_count = validate_face_count(face_count)
    num_dice = validate_positive_int("num_dice", num_dice)
    num_trials = validate_non_negative_int("num_trials", num_trials)
    n_batches = validate_positive_int("n_batches", n_batches)

    base, extra = divmod(num_trials, n_batches)
    sizes = [base + (1 if i < extra else 0) for i in range(n_batches)]

    generators = spawn_generators(seed, n_batches)
    batches = [
        simulate(face_count, num_dice, size, seed=gen)
        for size, gen in zip(sizes, generators)
    ]

    logger.info(
        "Simulated %d rolls of %dd%d in %d batches",
        num_trials, num_dice, face_count, n_batches
    )
    return batches
