"""
Summary Statistics

Statistics used by the reports that are stricter than their polars
counterparts: undefined inputs raise instead of producing NaN or 0.
"""

from typing import Sequence

import numpy as np

from .errors import UndefinedStatisticError


def pearson_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson correlation coefficient of two paired series.

    The result is symmetric in its arguments and clipped to [-1, 1].

    Raises:
        UndefinedStatisticError: fewer than two pairs, unequal lengths,
            or a series with zero variance
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    if x.shape != y.shape:
        raise UndefinedStatisticError(
            f"Correlation needs paired series, got lengths {len(x)} and {len(y)}"
        )
    if len(x) < 2:
        raise UndefinedStatisticError(
            f"Correlation needs at least 2 pairs, got {len(x)}"
        )
    if np.all(x == x[0]) or np.all(y == y[0]):
        raise UndefinedStatisticError("Correlation is undefined for a series with zero variance")

    dx = x - x.mean()
    dy = y - y.mean()
    sxx = np.sum(dx * dx)
    syy = np.sum(dy * dy)
    if sxx == 0 or syy == 0:
        raise UndefinedStatisticError("Correlation is undefined for a series with zero variance")

    r = np.sum(dx * dy) / np.sqrt(sxx * syy)
    return float(np.clip(r, -1.0, 1.0))


def discrete_median(values: Sequence[float]) -> float:
    """
    Lower median: the sorted value at rank ceil(n/2), never interpolated.

    Raises:
        UndefinedStatisticError: no values
    """
    ordered = sorted(values)
    if not ordered:
        raise UndefinedStatisticError("Median is undefined for an empty set")
    return ordered[(len(ordered) + 1) // 2 - 1]
