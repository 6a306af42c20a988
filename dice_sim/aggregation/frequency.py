"""
Frequency aggregation over rolls.

One primitive, group_and_reduce, folds items into per-key accumulators.
Counting rolls by key (empirical or enumerated) is that primitive with
a counting reducer.
"""

from typing import Any, Callable, Dict, Iterable, TypeVar
import logging

from ..types import Roll, FrequencyTable

logger = logging.getLogger(__name__)

T = TypeVar("T")
A = TypeVar("A")


# =============================================================================
# Key functions
# =============================================================================

def total(roll: Roll) -> int:
    """Sum of face values."""
    return roll.total


def identity(roll: Roll) -> int:
    """Face value of a single-die roll."""
    if len(roll) != 1:
        raise ValueError(f"identity key needs a single-die roll, got {len(roll)} dice")
    return roll[0]


def highest(roll: Roll) -> int:
    return max(roll)


def lowest(roll: Roll) -> int:
    return min(roll)


# =============================================================================
# Reduction
# =============================================================================

def group_and_reduce(
    items: Iterable[T],
    key_fn: Callable[[T], Any],
    reduce_fn: Callable[[A, T], A],
    initial: A
) -> Dict[Any, A]:
    """
    Fold items into one accumulator per key.

    items is consumed exactly once, in order. Each unseen key starts at
    initial; the accumulator becomes reduce_fn(acc, item) for every item
    with that key.

    Args:
        items: Finite iterable (lazy sources are not materialized)
        key_fn: Deterministic key extractor
        reduce_fn: (accumulator, item) -> accumulator
        initial: Starting accumulator for a new key (must be immutable)

    Returns:
        Dict of key -> final accumulator (empty for empty input)
    """
    groups: Dict[Any, A] = {}
    for item in items:
        key = key_fn(item)
        groups[key] = reduce_fn(groups.get(key, initial), item)
    return groups


def _count(acc: int, _item) -> int:
    return acc + 1


def aggregate(
    rolls: Iterable[Roll],
    key_fn: Callable[[Roll], int] = total
) -> FrequencyTable:
    """
    Count rolls by key.

    Guarantees: counts sum to the number of input rolls, and the result
    does not depend on input order. Empty input gives an empty table.

    Args:
        rolls: Rolls to aggregate (TrialSet, CombinationSpace, list, generator)
        key_fn: Grouping key, total by default

    Returns:
        FrequencyTable of key -> count
    """
    counts = group_and_reduce(rolls, key_fn, _count, 0)
    table = FrequencyTable(counts)
    logger.debug("Aggregated %d rolls into %d keys", table.total, len(table))
    return table


def aggregate_totals(rolls: Iterable[Roll]) -> FrequencyTable:
    """Count rolls by total."""
    return aggregate(rolls, key_fn=total)
