"""
Empirical-vs-theoretical comparison of frequency tables.

Computes distance and goodness-of-fit metrics between a simulated
frequency table and the exact table from enumeration:
- Total variation distance, max absolute deviation
- Means of both distributions
- Pearson chi-square test against the theoretical frequencies
"""

import numpy as np
import pandas as pd
from scipy import stats
from typing import Any, Dict, Optional
import logging

from ..types import FrequencyTable, DistributionComparison

logger = logging.getLogger(__name__)


def tv_distance(p: Dict[Any, float], q: Dict[Any, float]) -> float:
    """Total variation distance between two relative distributions, in [0, 1]."""
    keys = set(p) | set(q)
    return sum(abs(p.get(k, 0.0) - q.get(k, 0.0)) for k in keys) / 2.0


def _mean_key(table: FrequencyTable) -> Optional[float]:
    n = table.total
    if n == 0:
        return None
    return sum(k * v for k, v in table.items()) / n


def compare_distributions(
    empirical: FrequencyTable,
    theoretical: FrequencyTable
) -> DistributionComparison:
    """
    Compare a simulated table against the exact one.

    Args:
        empirical: Counts from simulated rolls (may be empty)
        theoretical: Counts over the full combination space (non-empty)

    Returns:
        DistributionComparison. chi_square and p_value are None when
        empirical is empty or theoretical has a single key.

    Raises:
        ValueError: If theoretical is empty, or empirical has a key
            the theoretical distribution cannot produce
    """
    if theoretical.total == 0:
        raise ValueError(
            "Theoretical table is empty; the combination space must be non-empty"
        )

    unsupported = [k for k in empirical if k not in theoretical]
    if unsupported:
        raise ValueError(
            f"Empirical keys {unsupported} are outside the theoretical support"
        )

    keys = list(theoretical.keys())
    n_obs = empirical.total

    rel_theo = theoretical.relative()
    expected_freq = np.array([rel_theo[k] for k in keys])
    if n_obs > 0:
        observed_freq = np.array([empirical.count(k) / n_obs for k in keys])
    else:
        observed_freq = np.zeros(len(keys))

    deviations = np.abs(observed_freq - expected_freq)
    max_idx = int(np.argmax(deviations))

    chi_square = None
    p_value = None
    # A single-key support has zero degrees of freedom
    if n_obs > 0 and len(keys) >= 2:
        observed = np.array([empirical.count(k) for k in keys], dtype=np.float64)
        result = stats.chisquare(observed, f_exp=expected_freq * n_obs)
        chi_square = float(result.statistic)
        p_value = float(result.pvalue)

    comparison = DistributionComparison(
        n_observed=n_obs,
        n_combinations=theoretical.total,
        tv_distance=tv_distance(empirical.relative(), rel_theo),
        max_abs_deviation=float(deviations[max_idx]),
        max_deviation_key=keys[max_idx],
        empirical_mean=_mean_key(empirical),
        theoretical_mean=_mean_key(theoretical),
        chi_square=chi_square,
        p_value=p_value,
        keys=keys,
    )

    logger.info(
        "Compared %d rolls against %d combinations: TV=%.4f, max dev=%.4f at %s",
        n_obs, theoretical.total, comparison.tv_distance,
        comparison.max_abs_deviation, comparison.max_deviation_key
    )
    return comparison


def comparison_frame(
    empirical: FrequencyTable,
    theoretical: FrequencyTable
) -> pd.DataFrame:
    """
    Side-by-side view of both tables, one row per key.

    Columns:
        observed: Empirical count
        expected_count: Theoretical frequency scaled to the number of rolls
        observed_freq: observed / n_rolls
        expected_freq: Theoretical relative frequency
    """
    keys = sorted(set(empirical) | set(theoretical))
    n_obs = empirical.total
    rel_emp = empirical.relative()
    rel_theo = theoretical.relative()

    frame = pd.DataFrame(
        {
            'observed': [empirical.count(k) for k in keys],
            'expected_count': [rel_theo.get(k, 0.0) * n_obs for k in keys],
            'observed_freq': [rel_emp.get(k, 0.0) for k in keys],
            'expected_freq': [rel_theo.get(k, 0.0) for k in keys],
        },
        index=pd.Index(keys, name='key'),
    )
    return frame
