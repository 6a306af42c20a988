"""Dice sampling and total bounds."""

from .engine import roll_dice, simulate, simulate_batches, spawn_generators
from .bounds import compute_total_bounds, combination_space_size, check_support

__all__ = [
    "roll_dice",
    "simulate",
    "simulate_batches",
    "spawn_generators",
    "compute_total_bounds",
    "combination_space_size",
    "check_support",
]
