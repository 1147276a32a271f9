"""
Exponential distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_cloudstats.distributions.distribution import GenericDistribution
from pysatl_cloudstats.distributions.support import ContinuousSupport
from pysatl_cloudstats.exceptions import FitError
from pysatl_cloudstats.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_cloudstats.families.registry import DistributionRegister
from pysatl_cloudstats.types import DistributionName, FailureReason

if TYPE_CHECKING:
    from pysatl_cloudstats.types import FloatArray


@parametrization(name="rate")
class Rate(Parametrization):
    """
    Rate parametrization of exponential distribution.

    Parameters
    ----------
    lambda_ : float
        Rate parameter (λ) of the distribution
    """

    lambda_: float

    @constraint(description="lambda_ > 0")
    def check_lambda_positive(self) -> bool:
        """Check that rate parameter is positive."""
        return self.lambda_ > 0


class ExponentialDistribution(GenericDistribution):
    """
    Exponential distribution.

    Probability density function (rate parametrization):
        f(x) = λ * exp(-λ * x) for x ≥ 0

    The rate is estimated as the inverse of the sample mean; samples with
    negative values or a zero mean cannot be fitted.
    """

    name = DistributionName.EXPONENTIAL
    parametrization_class = Rate

    def __init__(self, lambda_: float | None = None) -> None:
        super().__init__()
        if lambda_ is not None:
            self.set_parameters(Rate(lambda_=lambda_))  # type: ignore[call-arg]

    @property
    def rate(self) -> float:
        """Rate (``nan`` while invalid)."""
        return cast(Rate, self._parameters).lambda_ if self._is_valid else math.nan

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(left=0.0)

    def _estimate(self, values: FloatArray) -> Rate:
        if float(values.min()) < 0.0:
            raise FitError(FailureReason.DEGENERATE_SAMPLE, "sample holds negative values")
        mean = float(np.mean(values))
        if mean <= 0.0:
            raise FitError(FailureReason.DEGENERATE_SAMPLE, "sample mean is zero")
        return Rate(lambda_=1.0 / mean)  # type: ignore[call-arg]

    def _pdf(self, x: FloatArray) -> FloatArray:
        lambda_ = self.rate
        with np.errstate(over="ignore"):
            return cast("FloatArray", np.where(x >= 0, lambda_ * np.exp(-lambda_ * x), 0.0))

    def _cdf(self, x: FloatArray) -> FloatArray:
        lambda_ = self.rate
        with np.errstate(over="ignore"):
            return cast("FloatArray", np.where(x >= 0, -np.expm1(-lambda_ * x), 0.0))

    def _ppf(self, p: FloatArray) -> FloatArray:
        with np.errstate(divide="ignore", invalid="ignore"):
            return cast("FloatArray", np.where(p < 1.0, -np.log1p(-p) / self.rate, np.inf))

    def mean(self) -> float:
        return 1.0 / self.rate

    def variance(self) -> float:
        return 1.0 / (self.rate**2)


def configure_exponential_family() -> None:
    """
    Register the Exponential distribution family.
    """
    if DistributionRegister.contains(DistributionName.EXPONENTIAL):
        return
    DistributionRegister.register(ExponentialDistribution)
