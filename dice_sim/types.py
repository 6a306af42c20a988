"""
Core data structures for dice simulation and frequency aggregation.

Rolls are immutable, trial sets are stored as pre-allocated arrays,
and frequency tables are read-only mappings from key to count.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Optional, Tuple, Union
import numbers

import numpy as np
import pandas as pd


DEFAULT_FACE_COUNT = 6

# Faces are drawn with an exclusive int64 upper bound of face_count + 1
MAX_FACE_COUNT = int(np.iinfo(np.int64).max) - 1

# Anything np.random.default_rng accepts: None, int seed, SeedSequence, Generator
RandomSource = Union[None, int, np.random.SeedSequence, np.random.Generator]


class InvalidArgument(ValueError):
    """
    Raised when a dice parameter is out of range.

    Attributes:
        parameter: Name of the offending parameter
        value: The rejected value
    """

    def __init__(self, parameter: str, value, requirement: str):
        self.parameter = parameter
        self.value = value
        super().__init__(f"{parameter} must be {requirement}, got {value!r}")


class CombinationSpaceTooLarge(InvalidArgument):
    """Raised when a combination space is too large to count exactly."""


def validate_positive_int(name: str, value) -> int:
    """Return value as int, raising InvalidArgument unless it is an integer >= 1."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgument(name, value, "an integer >= 1")
    if value < 1:
        raise InvalidArgument(name, value, "an integer >= 1")
    return int(value)


def validate_non_negative_int(name: str, value) -> int:
    """Return value as int, raising InvalidArgument unless it is an integer >= 0."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgument(name, value, "an integer >= 0")
    if value < 0:
        raise InvalidArgument(name, value, "an integer >= 0")
    return int(value)


def validate_face_count(value) -> int:
    """Return face_count as int, raising InvalidArgument unless 1 <= value <= MAX_FACE_COUNT."""
    face_count = validate_positive_int("face_count", value)
    if face_count > MAX_FACE_COUNT:
        raise InvalidArgument("face_count", value, f"<= {MAX_FACE_COUNT}")
    return face_count


@dataclass(frozen=True)
class Die:
    """
    A fair die with faces 1..face_count.

    Attributes:
        face_count: Number of faces (default 6)
    """
    face_count: int = DEFAULT_FACE_COUNT

    def __post_init__(self) -> None:
        validate_face_count(self.face_count)

    def roll(self, rng: RandomSource = None) -> int:
        """Roll once using the given random source."""
        rng = np.random.default_rng(rng)
        return int(rng.integers(1, self.face_count + 1))


@dataclass(frozen=True)
class Roll:
    """
    Face values of one trial, one entry per die.

    Attributes:
        faces: Face values in die order
    """
    faces: Tuple[int, ...]

    @property
    def total(self) -> int:
        """Sum of face values."""
        return sum(self.faces)

    def __len__(self) -> int:
        return len(self.faces)

    def __iter__(self) -> Iterator[int]:
        return iter(self.faces)

    def __getitem__(self, index: int) -> int:
        return self.faces[index]

    @classmethod
    def from_array(cls, row: np.ndarray) -> 'Roll':
        """Build a roll from a 1-D integer array."""
        return cls(faces=tuple(int(v) for v in row))


@dataclass
class TrialSet:
    """
    Vectorized set of rolls from one simulation.

    faces is [num_trials, num_dice], filled in one allocation.
    """
    face_count: int
    faces: np.ndarray  # [num_trials, num_dice] int64

    @property
    def num_trials(self) -> int:
        return int(self.faces.shape[0])

    @property
    def num_dice(self) -> int:
        return int(self.faces.shape[1])

    @property
    def totals(self) -> np.ndarray:
        """[num_trials] roll totals."""
        return self.faces.sum(axis=1)

    def __len__(self) -> int:
        return self.num_trials

    def __getitem__(self, index):
        """An int index gives a Roll; a slice gives a TrialSet of those trials."""
        if isinstance(index, slice):
            return TrialSet(face_count=self.face_count, faces=self.faces[index])
        return Roll.from_array(self.faces[index])

    def __iter__(self) -> Iterator[Roll]:
        for row in self.faces:
            yield Roll.from_array(row)

    def to_lists(self) -> List[List[int]]:
        """Plain nested lists, one inner list per roll."""
        return self.faces.tolist()

    @classmethod
    def empty(cls, face_count: int, num_dice: int) -> 'TrialSet':
        return cls(face_count=face_count, faces=np.zeros((0, num_dice), dtype=np.int64))


class FrequencyTable(Mapping):
    """
    Read-only mapping from key to occurrence count.

    Iterates in ascending key order. Counts always sum to the number of
    items that were aggregated into the table.
    """

    def __init__(self, counts: Optional[Mapping] = None):
        counts = counts or {}
        for key, value in counts.items():
            if value < 0:
                raise ValueError(f"Negative count {value} for key {key!r}")
        ordered = {k: int(counts[k]) for k in sorted(counts)}
        self._counts = MappingProxyType(ordered)

    def __getitem__(self, key) -> int:
        return self._counts[key]

    def __iter__(self):
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __repr__(self) -> str:
        return f"FrequencyTable({dict(self._counts)!r})"

    def __add__(self, other: 'FrequencyTable') -> 'FrequencyTable':
        if not isinstance(other, FrequencyTable):
            return NotImplemented
        merged = dict(self._counts)
        for key, value in other.items():
            merged[key] = merged.get(key, 0) + value
        return FrequencyTable(merged)

    @property
    def total(self) -> int:
        """Number of aggregated items."""
        return sum(self._counts.values())

    def count(self, key) -> int:
        """Count for key, 0 if never seen."""
        return self._counts.get(key, 0)

    def relative(self) -> Dict:
        """Counts divided by total; empty dict for an empty table."""
        n = self.total
        if n == 0:
            return {}
        return {k: v / n for k, v in self._counts.items()}

    def to_dict(self) -> Dict:
        return dict(self._counts)

    def to_series(self, name: str = "count") -> pd.Series:
        """Counts as a pandas Series indexed by key."""
        return pd.Series(
            list(self._counts.values()),
            index=pd.Index(list(self._counts.keys()), name="key"),
            name=name,
            dtype="int64",
        )


@dataclass
class DistributionComparison:
    """
    Empirical-vs-theoretical comparison of two frequency tables.

    Attributes:
        n_observed: Number of simulated rolls
        n_combinations: Size of the theoretical combination space
        tv_distance: Total variation distance between relative frequencies (0-1)
        max_abs_deviation: Largest |observed_freq - expected_freq| over all keys
        max_deviation_key: Key where max_abs_deviation occurs (None if no keys)
        empirical_mean: Mean key of the empirical table (None if empty)
        theoretical_mean: Mean key of the theoretical table
        chi_square: Goodness-of-fit statistic (None if empirical is empty
            or theoretical has fewer than two keys)
        p_value: Chi-square p-value (None whenever chi_square is None)
    """
    n_observed: int
    n_combinations: int
    tv_distance: float
    max_abs_deviation: float
    max_deviation_key: Optional[int]
    empirical_mean: Optional[float]
    theoretical_mean: float
    chi_square: Optional[float] = None
    p_value: Optional[float] = None
    keys: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict:
        """Convert to serializable dict."""
        return {
            'n_observed': self.n_observed,
            'n_combinations': self.n_combinations,
            'tv_distance': self.tv_distance,
            'max_abs_deviation': self.max_abs_deviation,
            'max_deviation_key': self.max_deviation_key,
            'empirical_mean': self.empirical_mean,
            'theoretical_mean': self.theoretical_mean,
            'chi_square': self.chi_square,
            'p_value': self.p_value,
            'keys': list(self.keys),
        }
