"""
Simulate-and-compare pipeline.

Wires the sampler, enumeration engine, aggregator and comparison
metrics together for one dice configuration.
"""

from typing import Dict
import logging

from .types import (
    FrequencyTable, RandomSource,
    validate_face_count, validate_positive_int, validate_non_negative_int,
)
from .config import DiceExperiment, DEFAULT_MAX_ENUMERATION
from .simulation.engine import simulate
from .simulation.bounds import (
    compute_total_bounds, combination_space_size, check_support
)
from .enumeration.combinations import enumerate_all
from .enumeration.exact import exact_total_counts
from .aggregation.frequency import aggregate, total
from .metrics.comparison import compare_distributions

logger = logging.getLogger(__name__)


def theoretical_distribution(
    face_count: int,
    num_dice: int,
    max_enumeration: int = DEFAULT_MAX_ENUMERATION
) -> FrequencyTable:
    """
    Exact count of combinations for every total.

    Enumerates and aggregates the full combination space when it has at
    most max_enumeration rolls; otherwise counts by convolution.
    Both strategies produce the same table.
    """
    size = combination_space_size(face_count, num_dice)

    if size <= max_enumeration:
        logger.info(f"Enumerating {size} combinations of {num_dice}d{face_count}")
        return aggregate(enumerate_all(face_count, num_dice), key_fn=total)

    logger.warning(
        f"Combination space {size} exceeds max_enumeration={max_enumeration}; "
        "using exact convolution counts"
    )
    return exact_total_counts(face_count, num_dice)


def run_dice_comparison(
    face_count: int = 6,
    num_dice: int = 2,
    num_trials: int = 100,
    seed: RandomSource = None,
    max_enumeration: int = DEFAULT_MAX_ENUMERATION,
    verbose: bool = False
) -> Dict:
    """
    Simulate dice rolls and compare against the theoretical distribution.

    Steps:
    1. Validate parameters
    2. Simulate num_trials rolls
    3. Aggregate simulated rolls by total
    4. Build the theoretical table (enumeration or convolution)
    5. Check both tables lie within the total bounds
    6. Compare

    Args:
        face_count: Faces per die
        num_dice: Dice per roll
        num_trials: Number of simulated rolls (0 allowed)
        seed: Random seed for reproducibility
        max_enumeration: Largest combination space to enumerate directly
        verbose: Whether to log progress

    Returns:
        Dict with trials, empirical/theoretical tables (counts and relative),
        comparison metrics, and metadata

    Raises:
        InvalidArgument: On out-of-range parameters
    """
    if verbose:
        logging.basicConfig(level=logging.INFO)

    # === VALIDATE ===
    face_count = validate_face_count(face_count)
    num_dice = validate_positive_int("num_dice", num_dice)
    num_trials = validate_non_negative_int("num_trials", num_trials)
    max_enumeration = validate_non_negative_int("max_enumeration", max_enumeration)
    bounds = compute_total_bounds(face_count, num_dice)
    space_size = combination_space_size(face_count, num_dice)

    # === SIMULATE ===
    logger.info(f"Simulating {num_trials} rolls of {num_dice}d{face_count}...")
    trials = simulate(face_count, num_dice, num_trials, seed=seed)

    # === EMPIRICAL ===
    empirical = aggregate(trials, key_fn=total)
    check_support(empirical, bounds)

    # === THEORETICAL ===
    theoretical = theoretical_distribution(face_count, num_dice, max_enumeration)
    check_support(theoretical, bounds)

    # === COMPARE ===
    comparison = compare_distributions(empirical, theoretical)

    if num_trials == 0:
        logger.warning("No trials simulated; empirical table is empty")

    return {
        'trials': trials,
        'empirical': empirical,
        'theoretical': theoretical,
        'relative_empirical': empirical.relative(),
        'relative_theoretical': theoretical.relative(),
        'comparison': comparison,
        'metadata': {
            'face_count': face_count,
            'num_dice': num_dice,
            'num_trials': num_trials,
            'seed': seed if isinstance(seed, int) else None,
            'total_bounds': bounds,
            'combination_space_size': space_size,
            'enumerated': space_size <= max_enumeration,
        },
    }


def run_from_config(config: DiceExperiment, verbose: bool = False) -> Dict:
    """Run the comparison pipeline for a DiceExperiment."""
    return run_dice_comparison(
        face_count=config.face_count,
        num_dice=config.num_dice,
        num_trials=config.num_trials,
        seed=config.seed,
        max_enumeration=config.max_enumeration,
        verbose=verbose,
    )
