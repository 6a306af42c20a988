"""
Exact total counts without enumerating the combination space.

The count vector of a sum of independent dice is the convolution of the
single-die count vectors, so num_dice - 1 convolutions of ones(face_count)
give the same table as aggregating every combination by total.
"""

import numpy as np
import logging

from ..types import (
    FrequencyTable, CombinationSpaceTooLarge, validate_positive_int,
)

logger = logging.getLogger(__name__)

INT64_MAX = np.iinfo(np.int64).max

# Longest count vector (number of distinct totals) built by convolution
MAX_EXACT_SUPPORT = 100_000


def exact_total_counts(face_count: int, num_dice: int) -> FrequencyTable:
    """
    Number of ordered combinations producing each total.

    Cost is O(num_dice^2 * face_count^2) instead of O(face_count^num_dice).

    Raises:
        InvalidArgument: If either parameter is not a positive integer
        CombinationSpaceTooLarge: If there are more than MAX_EXACT_SUPPORT
            distinct totals, or face_count ** num_dice overflows int64
    """
    face_count = validate_positive_int("face_count", face_count)
    num_dice = validate_positive_int("num_dice", num_dice)

    support = num_dice * (face_count - 1) + 1
    if support > MAX_EXACT_SUPPORT:
        raise CombinationSpaceTooLarge(
            "face_count", face_count,
            f"small enough that num_dice * (face_count - 1) + 1 <= {MAX_EXACT_SUPPORT}"
        )

    size = face_count ** num_dice
    if size > INT64_MAX:
        raise CombinationSpaceTooLarge(
            "num_dice", num_dice,
            f"small enough that {face_count} ** num_dice fits in int64"
        )

    single = np.ones(face_count, dtype=np.int64)
    counts = single
    for _ in range(num_dice - 1):
        counts = np.convolve(counts, single)

    # counts[i] is the number of combinations with total num_dice + i
    table = FrequencyTable({
        num_dice + i: int(c) for i, c in enumerate(counts)
    })

    logger.debug(
        "Exact counts for %dd%d: %d totals over %d combinations",
        num_dice, face_count, len(table), size
    )
    return table
