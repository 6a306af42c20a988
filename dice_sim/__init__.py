"""
Dice roll simulation and frequency aggregation.

Samples fair dice from explicit random generators, enumerates the full
combination space, and reduces either into frequency tables that can be
compared against each other.
"""

from .types import (
    Die,
    Roll,
    TrialSet,
    FrequencyTable,
    DistributionComparison,
    InvalidArgument,
    CombinationSpaceTooLarge,
)
from .simulation import roll_dice, simulate, simulate_batches, spawn_generators
from .enumeration import CombinationSpace, enumerate_all, exact_total_counts
from .aggregation import group_and_reduce, aggregate, aggregate_totals, total, identity
from .metrics import compare_distributions, comparison_frame, tv_distance
from .config import DiceExperiment, EXPERIMENT_PRESETS, get_preset
from .pipeline import run_dice_comparison, run_from_config, theoretical_distribution

__version__ = "0.1.0"

__all__ = [
    "Die",
    "Roll",
    "TrialSet",
    "FrequencyTable",
    "DistributionComparison",
    "InvalidArgument",
    "CombinationSpaceTooLarge",
    "roll_dice",
    "simulate",
    "simulate_batches",
    "spawn_generators",
    "CombinationSpace",
    "enumerate_all",
    "exact_total_counts",
    "group_and_reduce",
    "aggregate",
    "aggregate_totals",
    "total",
    "identity",
    "compare_distributions",
    "comparison_frame",
    "tv_distance",
    "DiceExperiment",
    "EXPERIMENT_PRESETS",
    "get_preset",
    "run_dice_comparison",
    "run_from_config",
    "theoretical_distribution",
]
