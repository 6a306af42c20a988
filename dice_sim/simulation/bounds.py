"""
Total bounds and combination-space size.

Every roll total of num_dice dice with face_count faces lies in
[num_dice, num_dice * face_count].
"""

from typing import Tuple

from ..types import FrequencyTable, validate_positive_int


def compute_total_bounds(face_count: int, num_dice: int) -> Tuple[int, int]:
    """
    Bounds guaranteed to contain every possible roll total.

    Returns:
        (min_total, max_total) tuple
    """
    face_count = validate_positive_int("face_count", face_count)
    num_dice = validate_positive_int("num_dice", num_dice)
    return (num_dice, num_dice * face_count)


def combination_space_size(face_count: int, num_dice: int) -> int:
    """Number of distinct ordered rolls: face_count ** num_dice."""
    face_count = validate_positive_int("face_count", face_count)
    num_dice = validate_positive_int("num_dice", num_dice)
    return face_count ** num_dice


def check_support(table: FrequencyTable, bounds: Tuple[int, int]) -> None:
    """
    Fail fast if a totals table has keys outside bounds.

    Out-of-range totals mean the table was built from the wrong dice,
    so there is no clamping.

    Raises:
        ValueError: If any key is outside [min, max]
    """
    if len(table) == 0:
        return

    min_total, max_total = bounds
    keys = list(table.keys())
    lo, hi = keys[0], keys[-1]
    if lo < min_total or hi > max_total:
        raise ValueError(
            f"Totals [{lo}, {hi}] outside bounds [{min_total}, {max_total}]"
        )
