"""
Combination-space enumeration for fair dice.

Generates every ordered roll {1..face_count}^num_dice exactly once,
lexicographic by die position.

Complexity: O(face_count ** num_dice) time. Iteration is lazy and holds
one roll at a time; materializing the space (e.g. list()) costs
O(face_count ** num_dice) memory. 6 faces x 8 dice is already 1.68M rolls.
"""

import itertools
from typing import Iterator
import logging

from ..types import Roll, validate_positive_int

logger = logging.getLogger(__name__)

# Spaces larger than this get a warning when iterated
LARGE_SPACE_WARNING = 10_000_000


class CombinationSpace:
    """
    Restartable, lazy view of all ordered rolls.

    Each call to iter() starts a fresh pass over the full product.
    """

    def __init__(self, face_count: int, num_dice: int):
        self.face_count = validate_positive_int("face_count", face_count)
        self.num_dice = validate_positive_int("num_dice", num_dice)

    def __len__(self) -> int:
        return self.face_count ** self.num_dice

    def __iter__(self) -> Iterator[Roll]:
        size = len(self)
        if size > LARGE_SPACE_WARNING:
            logger.warning(
                f"Enumerating {size} combinations of {self.num_dice}d{self.face_count}"
            )
        faces = range(1, self.face_count + 1)
        for combo in itertools.product(faces, repeat=self.num_dice):
            yield Roll(faces=combo)

    def __contains__(self, roll) -> bool:
        faces = tuple(roll)
        return (
            len(faces) == self.num_dice
            and all(1 <= f <= self.face_count for f in faces)
        )

    def __repr__(self) -> str:
        return f"CombinationSpace(face_count={self.face_count}, num_dice={self.num_dice})"


def enumerate_all(face_count: int, num_dice: int) -> CombinationSpace:
    """
    Enumerate every possible roll of num_dice dice.

    Consumers may rely on completeness and uniqueness only, not on order.

    Args:
        face_count: Faces per die (>= 1)
        num_dice: Dice per roll (>= 1)

    Returns:
        CombinationSpace of size face_count ** num_dice

    Raises:
        InvalidArgument: If either parameter is not a positive integer
    """
    return CombinationSpace(face_count, num_dice)
