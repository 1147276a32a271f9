"""
Result Objects
==============

Explicit outcomes of the distribution operations that may fail:

- :class:`FitResult` – outcome of a parameter estimation;
- :class:`Chi2Result` – outcome of a Chi2 distance computation.

Both carry a typed :class:`~pysatl_cloudstats.types.FailureReason` instead of
relying on magic values. The legacy sentinel :data:`CHI2_FAILURE` is kept for
callers of :meth:`GenericDistribution.chi2_distance`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from pysatl_cloudstats.families.parametrizations import Parametrization
    from pysatl_cloudstats.types import CountArray, FailureReason, FloatArray

CHI2_FAILURE = -1.0
"""Sentinel returned by ``chi2_distance`` when the computation fails."""


@dataclass(frozen=True, slots=True)
class FitResult:
    """
    Outcome of a parameter estimation.

    Parameters
    ----------
    parameters : Parametrization or None
        Estimated parameters (``None`` on failure).
    reason : FailureReason or None
        Failure reason (``None`` on success).
    message : str
        Diagnostic message.
    sample_size : int
        Number of finite values the estimation used.
    """

    parameters: Parametrization | None
    reason: FailureReason | None = None
    message: str = ""
    sample_size: int = 0

    @property
    def ok(self) -> bool:
        return self.reason is None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, parameters: Parametrization, sample_size: int) -> FitResult:
        return cls(parameters=parameters, sample_size=sample_size)

    @classmethod
    def failure(cls, reason: FailureReason, message: str, sample_size: int = 0) -> FitResult:
        return cls(parameters=None, reason=reason, message=message, sample_size=sample_size)


def _empty_counts() -> CountArray:
    return np.zeros(0, dtype=np.int64)


def _empty_floats() -> FloatArray:
    return np.zeros(0, dtype=np.float64)


@dataclass(frozen=True, slots=True)
class Chi2Result:
    """
    Outcome of a Chi2 distance computation.

    Parameters
    ----------
    statistic : float
        Chi2 distance ``sum((O - E)^2 / E)``; :data:`CHI2_FAILURE` on failure.
    histogram : numpy.ndarray
        Observed count per class (empty on failure).
    expected : numpy.ndarray
        Expected count per class (empty on failure).
    boundaries : numpy.ndarray
        Interior class boundaries in value space, ``number_of_classes - 1``
        entries for equal-probability classes.
    skipped_classes : tuple[int, ...]
        Classes left out of the sum because their expected count is zero.
    reason : FailureReason or None
        Failure reason (``None`` on success).
    message : str
        Diagnostic message.
    """

    statistic: float
    histogram: CountArray = field(default_factory=_empty_counts)
    expected: FloatArray = field(default_factory=_empty_floats)
    boundaries: FloatArray = field(default_factory=_empty_floats)
    skipped_classes: tuple[int, ...] = ()
    reason: FailureReason | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.reason is None

    def __bool__(self) -> bool:
        return self.ok

    @property
    def number_of_classes(self) -> int:
        return int(self.histogram.shape[0])

    @property
    def population_size(self) -> int:
        return int(self.histogram.sum())

    @classmethod
    def failure(cls, reason: FailureReason, message: str) -> Chi2Result:
        return cls(statistic=CHI2_FAILURE, reason=reason, message=message)


__all__ = [
    "CHI2_FAILURE",
    "FitResult",
    "Chi2Result",
]
