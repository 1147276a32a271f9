"""
Chi2 Binning
============

Equal-probability Chi2 classification of an observed population against a
fitted univariate distribution.

Algorithm
---------
1. The ``k - 1`` interior class boundaries are the quantiles ``q(i / k)`` of
   the model, ``i = 1 .. k - 1``; the first class is open to ``-inf`` and the
   last one to ``+inf``.
2. Each population value falls in the class found by a right-sided search
   over the boundaries. Values beyond the outer boundaries land in the
   extreme classes, so every point is counted exactly once.
3. Expected counts are ``n * (F(b_i) - F(b_{i-1}))`` normalized by the total
   mass, i.e. ``n / k`` for an exact quantile function.
4. Classes with a zero expected count are skipped; the statistic is
   ``sum((O - E)^2 / E)`` over the remaining classes.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import warnings
from typing import TYPE_CHECKING, Protocol

import numpy as np

from pysatl_cloudstats.config import DEFAULT_CHI2_CONFIG
from pysatl_cloudstats.distributions.results import Chi2Result
from pysatl_cloudstats.types import FailureReason

if TYPE_CHECKING:
    from typing import Any

    import numpy.typing as npt

    from pysatl_cloudstats.cloud import GenericCloud
    from pysatl_cloudstats.config import Chi2Config
    from pysatl_cloudstats.types import CountArray, FloatArray

logger = logging.getLogger(__name__)


class BinnedModel(Protocol):
    """Cumulative and inverse cumulative functions the binning relies on."""

    def cumulative_from_origin(self, x: Any) -> Any: ...
    def quantile(self, p: Any) -> Any: ...


def population_values(cloud: GenericCloud) -> FloatArray:
    """
    Gather the scalar value of every point of a population.

    Parameters
    ----------
    cloud : GenericCloud
        Population read through its per-point scalar accessor.

    Returns
    -------
    numpy.ndarray
        ``float64`` array of ``cloud.size()`` values.
    """
    n = cloud.size()
    return np.fromiter(
        (cloud.get_point_scalar_value(i) for i in range(n)), dtype=np.float64, count=n
    )


def equal_probability_boundaries(model: BinnedModel, number_of_classes: int) -> FloatArray:
    """
    Interior boundaries of ``number_of_classes`` equal-probability classes.

    Returns
    -------
    numpy.ndarray
        ``number_of_classes - 1`` boundaries in value space.
    """
    probabilities = np.arange(1, number_of_classes, dtype=np.float64) / number_of_classes
    return np.asarray(model.quantile(probabilities), dtype=np.float64).reshape(-1)


def classify(
    values: npt.NDArray[np.floating[Any]], boundaries: FloatArray, number_of_classes: int
) -> CountArray:
    """
    Count the values falling in each class.

    Class ``i`` holds the values ``v`` with ``b_{i-1} <= v < b_i``; values
    below the first boundary go to class 0, values at or above the last one
    to class ``number_of_classes - 1``.
    """
    indices = np.searchsorted(boundaries, values, side="right")
    return np.bincount(indices, minlength=number_of_classes).astype(np.int64)


def expected_counts(
    model: BinnedModel,
    boundaries: FloatArray,
    population_size: int,
    zero_tolerance: float,
) -> FloatArray | None:
    """
    Expected count per class under the model.

    Returns
    -------
    numpy.ndarray or None
        Expected counts summing to ``population_size``, or ``None`` when the
        class masses cannot be normalized.
    """
    inner = np.asarray(model.cumulative_from_origin(boundaries), dtype=np.float64).reshape(-1)
    cumulative = np.concatenate(([0.0], inner, [1.0]))
    mass = np.clip(np.diff(cumulative), 0.0, None)
    total = float(mass.sum())
    if not np.isfinite(total) or total <= zero_tolerance:
        return None
    return population_size * mass / total


def chi2_statistic(
    observed: CountArray, expected: FloatArray, zero_tolerance: float
) -> tuple[float, tuple[int, ...]]:
    """
    Pearson statistic over the classes with a non-zero expected count.

    Returns
    -------
    tuple[float, tuple[int, ...]]
        The statistic and the indices of the skipped classes.
    """
    kept = expected > zero_tolerance
    skipped = tuple(int(i) for i in np.flatnonzero(~kept))
    diff = observed[kept] - expected[kept]
    return float(np.sum(diff * diff / expected[kept])), skipped


def compute_chi2(
    model: BinnedModel,
    values: npt.NDArray[np.floating[Any]],
    number_of_classes: int,
    *,
    boundaries: FloatArray | None = None,
    config: Chi2Config = DEFAULT_CHI2_CONFIG,
    stacklevel: int = 2,
) -> Chi2Result:
    """
    Chi2 distance of a population against a model.

    The model is assumed valid; the caller checks it.

    Parameters
    ----------
    model : BinnedModel
        Fitted distribution.
    values : numpy.ndarray
        Population values.
    number_of_classes : int
        Number of equal-probability classes.
    boundaries : numpy.ndarray, optional
        Precomputed interior boundaries (computed from the model otherwise).
    config : Chi2Config, optional
        Numerical settings.
    stacklevel : int, default 2
        Stack level of the small expected count warning.

    Returns
    -------
    Chi2Result
        Statistic and per-class diagnostics, or a typed failure.
    """
    if number_of_classes < 1:
        return Chi2Result.failure(FailureReason.NO_CLASSES, "number_of_classes must be >= 1")
    n = int(values.shape[0])
    if n == 0:
        return Chi2Result.failure(FailureReason.EMPTY_POPULATION, "population is empty")
    if np.isnan(values).any():
        return Chi2Result.failure(
            FailureReason.INVALID_VALUE, "population holds NaN values that cannot be classified"
        )

    if boundaries is None:
        boundaries = equal_probability_boundaries(model, number_of_classes)
    if not np.all(np.isfinite(boundaries)) or np.any(np.diff(boundaries) < 0):
        return Chi2Result.failure(
            FailureReason.UNNORMALIZABLE, "class boundaries are not finite and ordered"
        )

    expected = expected_counts(model, boundaries, n, config.zero_tolerance)
    if expected is None:
        return Chi2Result.failure(
            FailureReason.UNNORMALIZABLE, "expected counts cannot be normalized"
        )

    observed = classify(values, boundaries, number_of_classes)
    statistic, skipped = chi2_statistic(observed, expected, config.zero_tolerance)
    if skipped:
        logger.debug("Chi2: classes %s skipped (zero expected count)", skipped)

    if config.warn_small_expected:
        kept = expected[expected > config.zero_tolerance]
        if np.any(kept < config.min_expected_count):
            warnings.warn(
                "Chi-squared approximation may be incorrect: "
                f"expected count below {config.min_expected_count} in some classes.",
                RuntimeWarning,
                stacklevel=stacklevel,
            )

    return Chi2Result(
        statistic=statistic,
        histogram=observed,
        expected=expected,
        boundaries=boundaries,
        skipped_classes=skipped,
    )


__all__ = [
    "BinnedModel",
    "population_values",
    "equal_probability_boundaries",
    "classify",
    "expected_counts",
    "chi2_statistic",
    "compute_chi2",
]
