"""Exhaustive enumeration of dice combinations."""

from .combinations import CombinationSpace, enumerate_all
from .exact import exact_total_counts

__all__ = ["CombinationSpace", "enumerate_all", "exact_total_counts"]
