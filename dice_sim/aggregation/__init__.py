"""Group-by-key reduction into frequency tables."""

from .frequency import (
    group_and_reduce,
    aggregate,
    aggregate_totals,
    total,
    identity,
    highest,
    lowest,
)

__all__ = [
    "group_and_reduce",
    "aggregate",
    "aggregate_totals",
    "total",
    "identity",
    "highest",
    "lowest",
]
