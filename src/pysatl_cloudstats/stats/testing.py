"""
Statistical Testing Tools
=========================

Chi2 goodness-of-fit helpers built on top of the distribution contract:

- :func:`chi2_fractile` / :func:`chi2_probability` – Chi2 law quantile and
  upper tail;
- :func:`compute_adaptive_chi2` – Chi2 distance over equal-width classes of
  the observed range, merging classes whose expected count is too small;
- :func:`test_cloud_with_model` – accept or reject a fitted model for a
  population at a given confidence.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
import warnings
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from scipy import stats as sp_stats

from pysatl_cloudstats.config import DEFAULT_CHI2_CONFIG
from pysatl_cloudstats.distributions.chi2 import chi2_statistic, population_values
from pysatl_cloudstats.distributions.results import CHI2_FAILURE, Chi2Result
from pysatl_cloudstats.types import FailureReason

if TYPE_CHECKING:
    from pysatl_cloudstats.cloud import GenericCloud
    from pysatl_cloudstats.config import Chi2Config
    from pysatl_cloudstats.distributions.distribution import GenericDistribution
    from pysatl_cloudstats.types import CountArray, FloatArray

logger = logging.getLogger(__name__)


def chi2_fractile(p: float, dof: int) -> float:
    """
    Quantile of the Chi2 law.

    Parameters
    ----------
    p : float
        Probability in ``[0, 1]``.
    dof : int
        Degrees of freedom (positive).

    Returns
    -------
    float
        ``x`` such that ``P(Chi2(dof) <= x) = p``.

    Raises
    ------
    ValueError
        If ``p`` is outside ``[0, 1]`` or ``dof`` is not positive.
    """
    if not 0.0 <= p <= 1.0:
        raise ValueError("Probability must be in [0, 1]")
    if dof < 1:
        raise ValueError("Degrees of freedom must be positive.")
    return float(sp_stats.chi2.ppf(p, dof))


def chi2_probability(chi2: float, dof: int) -> float:
    """
    Upper tail probability ``P(Chi2(dof) >= chi2)`` (the test p-value).

    Raises
    ------
    ValueError
        If ``dof`` is not positive.
    """
    if dof < 1:
        raise ValueError("Degrees of freedom must be positive.")
    return float(sp_stats.chi2.sf(chi2, dof))


def default_number_of_classes(n: int, number_of_parameters: int = 0) -> int:
    """
    Number of Chi2 classes for a population of ``n`` points.

    ``ceil(sqrt(n))``, raised so that at least one degree of freedom remains
    once ``number_of_parameters`` estimated parameters are accounted for.
    """
    return max(math.ceil(math.sqrt(max(n, 0))), number_of_parameters + 2)


def _merge_classes(
    observed: CountArray, expected: FloatArray, edges: FloatArray, min_expected: float
) -> tuple[CountArray, FloatArray, FloatArray]:
    """
    Merge adjacent classes until every expected count reaches ``min_expected``.

    The class with the smallest expected count is merged with the neighbour
    having the smaller expected count (the left one on ties).
    """
    obs = observed.tolist()
    exp = expected.tolist()
    bounds = edges.tolist()

    while len(exp) > 1:
        i = int(np.argmin(exp))
        if exp[i] >= min_expected:
            break
        if i == 0:
            j = 1
        elif i == len(exp) - 1:
            j = i - 1
        else:
            j = i - 1 if exp[i - 1] <= exp[i + 1] else i + 1
        lo, hi = min(i, j), max(i, j)
        obs[lo : hi + 1] = [obs[lo] + obs[hi]]
        exp[lo : hi + 1] = [exp[lo] + exp[hi]]
        del bounds[lo]

    return (
        np.asarray(obs, dtype=np.int64),
        np.asarray(exp, dtype=np.float64),
        np.asarray(bounds, dtype=np.float64),
    )


def compute_adaptive_chi2(
    distribution: GenericDistribution,
    cloud: GenericCloud,
    number_of_classes: int,
    *,
    no_class_compression: bool = False,
    config: Chi2Config = DEFAULT_CHI2_CONFIG,
) -> Chi2Result:
    """
    Chi2 distance over equal-width classes of the observed value range.

    The range ``[min, max]`` of the population values is split into
    ``number_of_classes`` classes of equal width; the first and last classes
    are extended to the whole support. Unless ``no_class_compression`` is set,
    adjacent classes are merged until each expected count reaches
    ``config.min_expected_count``, so the final number of classes may be
    smaller than requested (see :attr:`Chi2Result.number_of_classes`).

    Parameters
    ----------
    distribution : GenericDistribution
        Fitted model.
    cloud : GenericCloud
        Population to test.
    number_of_classes : int
        Initial number of classes.
    no_class_compression : bool, default False
        Keep the initial classes even with small expected counts.
    config : Chi2Config, optional
        Numerical settings.

    Returns
    -------
    Chi2Result
        Statistic over the final classes; ``boundaries`` holds their interior
        edges. A failure reason is set when the computation is impossible.
    """
    if not distribution.is_valid():
        return Chi2Result.failure(FailureReason.INVALID_STATE, "distribution is not valid")
    if number_of_classes < 1:
        return Chi2Result.failure(FailureReason.NO_CLASSES, "number_of_classes must be >= 1")
    if cloud.size() == 0:
        return Chi2Result.failure(FailureReason.EMPTY_POPULATION, "population is empty")

    values = population_values(cloud)
    if np.isnan(values).any():
        return Chi2Result.failure(
            FailureReason.INVALID_VALUE, "population holds NaN values that cannot be classified"
        )
    n = int(values.shape[0])

    finite = values[np.isfinite(values)]
    if finite.size and finite.max() > finite.min():
        edges = np.linspace(finite.min(), finite.max(), number_of_classes + 1)[1:-1]
    else:
        edges = np.zeros(0, dtype=np.float64)
    k = int(edges.shape[0]) + 1

    cumulative = np.concatenate(
        ([0.0], np.asarray(distribution.cumulative_from_origin(edges), dtype=np.float64), [1.0])
    )
    mass = np.clip(np.diff(cumulative), 0.0, None)
    total = float(mass.sum())
    if not np.isfinite(total) or total <= config.zero_tolerance:
        return Chi2Result.failure(
            FailureReason.UNNORMALIZABLE, "expected counts cannot be normalized"
        )
    expected = n * mass / total
    observed = np.bincount(np.searchsorted(edges, values, side="right"), minlength=k).astype(
        np.int64
    )

    if not no_class_compression:
        observed, expected, edges = _merge_classes(
            observed, expected, edges, config.min_expected_count
        )
    elif config.warn_small_expected and np.any(expected < config.min_expected_count):
        warnings.warn(
            "Chi-squared approximation may be incorrect: "
            f"expected count below {config.min_expected_count} in some classes.",
            RuntimeWarning,
            stacklevel=2,
        )

    statistic, skipped = chi2_statistic(observed, expected, config.zero_tolerance)
    logger.debug(
        "Adaptive Chi2 for %s: %d -> %d classes, statistic %.6g",
        distribution.name,
        k,
        observed.shape[0],
        statistic,
    )
    return Chi2Result(
        statistic=statistic,
        histogram=observed,
        expected=expected,
        boundaries=edges,
        skipped_classes=skipped,
    )


@dataclass(frozen=True, slots=True)
class GoodnessOfFit:
    """
    Decision of a Chi2 goodness-of-fit test.

    Parameters
    ----------
    chi2 : Chi2Result
        Underlying Chi2 computation.
    degrees_of_freedom : int
        ``classes - 1 - estimated parameters`` (0 on failure).
    threshold : float
        Chi2 fractile at the trust probability (``nan`` on failure).
    p_value : float
        Upper tail probability of the statistic (``nan`` on failure).
    accepted : bool
        Whether the model is kept for the population.
    """

    chi2: Chi2Result
    degrees_of_freedom: int
    threshold: float
    p_value: float
    accepted: bool

    @property
    def statistic(self) -> float:
        return self.chi2.statistic


def test_cloud_with_model(
    distribution: GenericDistribution,
    cloud: GenericCloud,
    p_trust: float = 0.95,
    number_of_classes: int | None = None,
    *,
    adaptive: bool = False,
    config: Chi2Config = DEFAULT_CHI2_CONFIG,
) -> GoodnessOfFit:
    """
    Test whether a population follows a fitted model.

    The model is accepted when the Chi2 distance does not exceed the
    ``p_trust`` fractile of the Chi2 law with
    ``classes - 1 - distribution.number_of_parameters`` degrees of freedom.

    Parameters
    ----------
    distribution : GenericDistribution
        Fitted model.
    cloud : GenericCloud
        Population to test.
    p_trust : float, default 0.95
        Trust probability of the test.
    number_of_classes : int, optional
        Number of classes (see :func:`default_number_of_classes` otherwise).
    adaptive : bool, default False
        Use :func:`compute_adaptive_chi2` instead of equal-probability
        classes.
    config : Chi2Config, optional
        Numerical settings.

    Returns
    -------
    GoodnessOfFit
        Test decision. A failed Chi2 computation is never accepted.

    Raises
    ------
    ValueError
        If ``p_trust`` is outside ``[0, 1]`` or the classes leave no degree
        of freedom.
    """
    if not 0.0 <= p_trust <= 1.0:
        raise ValueError("Probability must be in [0, 1]")

    n_params = distribution.number_of_parameters
    if number_of_classes is None:
        number_of_classes = default_number_of_classes(cloud.size(), n_params)

    if adaptive:
        result = compute_adaptive_chi2(distribution, cloud, number_of_classes, config=config)
    else:
        result = distribution.compute_chi2(
            cloud, number_of_classes, config=config, _stacklevel=4
        )

    if not result.ok:
        logger.debug("Chi2 test of %s failed: %s", distribution.name, result.reason)
        return GoodnessOfFit(
            chi2=result,
            degrees_of_freedom=0,
            threshold=math.nan,
            p_value=math.nan,
            accepted=False,
        )

    dof = result.number_of_classes - len(result.skipped_classes) - 1 - n_params
    if dof < 1:
        raise ValueError(
            f"{result.number_of_classes} classes leave no degree of freedom "
            f"for {n_params} estimated parameters."
        )
    threshold = chi2_fractile(p_trust, dof)
    return GoodnessOfFit(
        chi2=result,
        degrees_of_freedom=dof,
        threshold=threshold,
        p_value=chi2_probability(result.statistic, dof),
        accepted=result.statistic != CHI2_FAILURE and result.statistic <= threshold,
    )


# not a pytest test case
test_cloud_with_model.__test__ = False  # type: ignore[attr-defined]


__all__ = [
    "chi2_fractile",
    "chi2_probability",
    "default_number_of_classes",
    "compute_adaptive_chi2",
    "GoodnessOfFit",
    "test_cloud_with_model",
]
