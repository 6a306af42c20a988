"""Empirical-vs-theoretical distribution metrics."""

from .comparison import tv_distance, compare_distributions, comparison_frame

__all__ = ['tv_distance', 'compare_distributions', 'comparison_frame']
