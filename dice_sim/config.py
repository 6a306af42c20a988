"""
Configuration management for dice experiments.

Experiment presets, defaults, and dict loading utilities.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional

from .types import (
    InvalidArgument, DEFAULT_FACE_COUNT,
    validate_face_count, validate_positive_int, validate_non_negative_int,
)


# Largest combination space aggregated by full enumeration. Bigger spaces
# use exact convolution counts instead. 6 ** 7 = 279,936 is below it.
DEFAULT_MAX_ENUMERATION = 1_000_000

DEFAULT_NUM_TRIALS = 100


@dataclass
class DiceExperiment:
    """
    Parameters of one simulate-and-compare run.

    Attributes:
        face_count: Faces per die
        num_dice: Dice per roll
        num_trials: Number of simulated rolls
        seed: Random seed (None for fresh entropy)
        max_enumeration: Largest combination space to enumerate directly
    """
    face_count: int = DEFAULT_FACE_COUNT
    num_dice: int = 2
    num_trials: int = DEFAULT_NUM_TRIALS
    seed: Optional[int] = None
    max_enumeration: int = DEFAULT_MAX_ENUMERATION

    def __post_init__(self) -> None:
        validate_face_count(self.face_count)
        validate_positive_int("num_dice", self.num_dice)
        validate_non_negative_int("num_trials", self.num_trials)
        validate_non_negative_int("max_enumeration", self.max_enumeration)
        if self.seed is not None:
            validate_non_negative_int("seed", self.seed)

    @property
    def label(self) -> str:
        """Dice notation, e.g. '2d6'."""
        return f"{self.num_dice}d{self.face_count}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'face_count': self.face_count,
            'num_dice': self.num_dice,
            'num_trials': self.num_trials,
            'seed': self.seed,
            'max_enumeration': self.max_enumeration,
        }


# =============================================================================
# Experiment Presets
# =============================================================================

EXPERIMENT_PRESETS: Dict[str, DiceExperiment] = {
    'd6': DiceExperiment(face_count=6, num_dice=1, num_trials=100),
    '2d6': DiceExperiment(face_count=6, num_dice=2, num_trials=100),
    '3d6': DiceExperiment(face_count=6, num_dice=3, num_trials=1000),
    '4d6': DiceExperiment(face_count=6, num_dice=4, num_trials=10000),
    'd20': DiceExperiment(face_count=20, num_dice=1, num_trials=1000),
}


def get_preset(name: str, seed: Optional[int] = None) -> DiceExperiment:
    """
    Return a copy of a named preset, optionally with a seed.

    Raises:
        KeyError: If the preset name is unknown
    """
    if name not in EXPERIMENT_PRESETS:
        raise KeyError(
            f"Unknown preset '{name}'. Available: {sorted(EXPERIMENT_PRESETS)}"
        )
    base = EXPERIMENT_PRESETS[name].to_dict()
    if seed is not None:
        base['seed'] = seed
    return DiceExperiment(**base)


# =============================================================================
# Loading Utilities
# =============================================================================

def experiment_from_dict(data: Dict[str, Any]) -> DiceExperiment:
    """
    Build an experiment from a plain dict.

    Missing keys fall back to DiceExperiment defaults. An optional
    'preset' key selects the base values before the other keys apply.

    Raises:
        InvalidArgument: On unknown keys or out-of-range values
    """
    data = dict(data)
    preset = data.pop('preset', None)
    base = get_preset(preset).to_dict() if preset else DiceExperiment().to_dict()

    unknown = set(data) - set(base)
    if unknown:
        raise InvalidArgument(
            "config", sorted(unknown), f"limited to keys {sorted(base)}"
        )

    base.update(data)
    return DiceExperiment(**base)
