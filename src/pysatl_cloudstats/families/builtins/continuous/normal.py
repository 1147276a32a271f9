"""
Normal (Gauss) distribution family implementation.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import erf, erfinv

from pysatl_cloudstats.distributions.distribution import GenericDistribution
from pysatl_cloudstats.distributions.sources import SequenceSource, as_array
from pysatl_cloudstats.exceptions import FitError
from pysatl_cloudstats.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_cloudstats.families.registry import DistributionRegister
from pysatl_cloudstats.types import DistributionName, FailureReason

if TYPE_CHECKING:
    from pysatl_cloudstats.distributions.results import FitResult
    from pysatl_cloudstats.distributions.sources import ScalarValueSource
    from pysatl_cloudstats.types import FloatArray


@parametrization(name="meanStd")
class MeanStd(Parametrization):
    """
    Standard parametrization of normal distribution.

    Parameters
    ----------
    mu : float
        Mean of the distribution
    sigma : float
        Standard deviation of the distribution
    """

    mu: float
    sigma: float

    @constraint(description="sigma > 0")
    def check_sigma_positive(self) -> bool:
        """Check that standard deviation is positive."""
        return self.sigma > 0

    @property
    def variance(self) -> float:
        return self.sigma**2


class NormalDistribution(GenericDistribution):
    """
    Normal (Gaussian) distribution.

    The normal distribution is a continuous probability distribution
    characterized by its bell-shaped curve. It is symmetric about its mean and
    is defined by two parameters: mean (μ) and standard deviation (σ).

    Probability density function:
        f(x) = 1/(σ√(2π)) * exp(-(x-μ)²/(2σ²))

    Parameters are estimated with the sample mean and the (biased) sample
    standard deviation. A sample with zero variance cannot be fitted.
    """

    name = DistributionName.GAUSS
    parametrization_class = MeanStd

    def __init__(self, mu: float | None = None, sigma: float | None = None) -> None:
        super().__init__()
        if mu is not None and sigma is not None:
            self.set_parameters(MeanStd(mu=mu, sigma=sigma))  # type: ignore[call-arg]

    @property
    def mu(self) -> float:
        """Mean (``nan`` while invalid)."""
        return cast(MeanStd, self._parameters).mu if self._is_valid else math.nan

    @property
    def sigma(self) -> float:
        """Standard deviation (``nan`` while invalid)."""
        return cast(MeanStd, self._parameters).sigma if self._is_valid else math.nan

    def mean(self) -> float:
        return self.mu

    def variance(self) -> float:
        return self.sigma**2

    def _estimate(self, values: FloatArray) -> MeanStd:
        mu = float(np.mean(values))
        sigma = float(np.std(values))
        if not (math.isfinite(mu) and math.isfinite(sigma)):
            raise FitError(FailureReason.NUMERICAL_FAILURE, "mean or deviation is not finite")
        if sigma <= 0.0:
            raise FitError(FailureReason.DEGENERATE_SAMPLE, "sample has zero variance")
        return MeanStd(mu=mu, sigma=sigma)  # type: ignore[call-arg]

    def fit_robust(self, values: ScalarValueSource, n_sigma: float = 3.0) -> FitResult:
        """
        Estimate the parameters ignoring values far from the mean.

        A first estimation is made on all values, then the parameters are
        re-estimated on the values within ``mu ± n_sigma * sigma``.

        Parameters
        ----------
        values : ScalarValueSource
            Sample to fit.
        n_sigma : float, default 3.0
            Half-width of the kept interval, in standard deviations.

        Returns
        -------
        FitResult
            Result of the second estimation (or of the first if it failed).
        """
        if n_sigma <= 0:
            raise ValueError("n_sigma must be positive.")

        first = self.fit(values)
        if not first.ok:
            return first

        data = as_array(values)
        mu, sigma = self.mu, self.sigma
        kept = data[np.isfinite(data) & (np.abs(data - mu) <= n_sigma * sigma)]
        return self.fit(SequenceSource(kept))

    def _pdf(self, x: FloatArray) -> FloatArray:
        mu, sigma = self.mu, self.sigma
        coefficient = 1.0 / (sigma * np.sqrt(2 * np.pi))
        exponent = -((x - mu) ** 2) / (2 * sigma**2)
        return cast("FloatArray", coefficient * np.exp(exponent))

    def _cdf(self, x: FloatArray) -> FloatArray:
        z = (x - self.mu) / (self.sigma * np.sqrt(2))
        return cast("FloatArray", 0.5 * (1 + erf(z)))

    def _ppf(self, p: FloatArray) -> FloatArray:
        return cast("FloatArray", self.mu + self.sigma * np.sqrt(2) * erfinv(2 * p - 1))


def configure_normal_family() -> None:
    """
    Register the Normal (Gauss) distribution family.
    """
    if DistributionRegister.contains(DistributionName.GAUSS):
        return
    DistributionRegister.register(NormalDistribution)
