"""
Weibull distribution family implementation.

Three-parameter Weibull with shape ``a``, scale ``b`` and a value shift
(location) the support starts from.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy import optimize as _sp_optimize
from scipy.special import gamma

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

SHIFT_MARGIN = 0.01
"""Fraction of the sample range kept between an inferred shift and the minimum."""


@parametrization(name="shapeScaleShift")
class ShapeScaleShift(Parametrization):
    """
    Shape/scale/shift parametrization of the Weibull distribution.

    Parameters
    ----------
    a : float
        Shape parameter
    b : float
        Scale parameter
    shift : float
        Lower bound of the support
    """

    a: float
    b: float
    shift: float = 0.0

    @constraint(description="a > 0")
    def check_a_positive(self) -> bool:
        """Check that shape parameter is positive."""
        return self.a > 0

    @constraint(description="b > 0")
    def check_b_positive(self) -> bool:
        """Check that scale parameter is positive."""
        return self.b > 0


def _mle_shape(logs: FloatArray) -> float:
    """
    Maximum likelihood shape for log-values ``logs``.

    Root of ``sum(x^a ln x) / sum(x^a) - 1/a - mean(ln x)``, which is
    increasing in ``a``; powers are scaled by the largest value to avoid
    overflow.
    """
    lmax = float(logs.max())
    mean_log = float(logs.mean())

    def profile(a: float) -> float:
        w = np.exp(a * (logs - lmax))
        return float(np.sum(w * logs) / np.sum(w) - 1.0 / a - mean_log)

    lo = hi = 1.0
    for _ in range(60):
        if profile(lo) < 0.0:
            break
        lo *= 0.5
    for _ in range(60):
        if profile(hi) > 0.0:
            break
        hi *= 2.0

    try:
        return float(_sp_optimize.brentq(profile, lo, hi, xtol=1e-12, maxiter=256))
    except (ValueError, RuntimeError) as exc:
        raise FitError(FailureReason.NUMERICAL_FAILURE, f"shape estimation failed: {exc}") from exc


class WeibullDistribution(GenericDistribution):
    """
    Weibull distribution.

    Probability density function:
        f(x) = (a/b) * ((x-s)/b)^(a-1) * exp(-((x-s)/b)^a) for x > s

    The value shift ``s`` is either fixed (default ``0``) or, with
    ``infer_shift=True``, placed just below the sample minimum. Shape and scale
    are maximum likelihood estimates on the shifted values, which must all be
    positive.

    Parameters
    ----------
    a, b : float, optional
        Initial shape and scale; the distribution is valid right away when
        both are given and positive.
    value_shift : float, default 0.0
        Fixed value shift.
    infer_shift : bool, default False
        Infer the value shift from each fitted sample.
    """

    name = DistributionName.WEIBULL
    parametrization_class = ShapeScaleShift

    def __init__(
        self,
        a: float | None = None,
        b: float | None = None,
        value_shift: float = 0.0,
        *,
        infer_shift: bool = False,
    ) -> None:
        super().__init__()
        self._value_shift = float(value_shift)
        self.infer_shift = infer_shift
        if a is not None and b is not None:
            self.set_parameters(ShapeScaleShift(a=a, b=b, shift=value_shift))  # type: ignore[call-arg]

    @property
    def _params(self) -> ShapeScaleShift:
        return cast(ShapeScaleShift, self._parameters)

    @property
    def a(self) -> float:
        """Shape (``nan`` while invalid)."""
        return self._params.a if self._is_valid else math.nan

    @property
    def b(self) -> float:
        """Scale (``nan`` while invalid)."""
        return self._params.b if self._is_valid else math.nan

    @property
    def value_shift(self) -> float:
        """Current value shift (the configured one while invalid)."""
        return self._params.shift if self._is_valid else self._value_shift

    @property
    def number_of_parameters(self) -> int:
        return 3 if self.infer_shift else 2

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(left=self.value_shift)

    def _estimate(self, values: FloatArray) -> ShapeScaleShift:
        if self.infer_shift:
            vmin, vmax = float(values.min()), float(values.max())
            if vmax <= vmin:
                raise FitError(FailureReason.DEGENERATE_SAMPLE, "sample has a single value")
            shift = vmin - SHIFT_MARGIN * (vmax - vmin)
        else:
            shift = self._value_shift

        x = values - shift
        if np.any(x <= 0.0):
            raise FitError(
                FailureReason.DEGENERATE_SAMPLE, f"values must lie above the value shift {shift}"
            )
        logs = np.log(x)
        if float(np.ptp(logs)) <= 0.0:
            raise FitError(FailureReason.DEGENERATE_SAMPLE, "sample has a single value")

        a = _mle_shape(logs)
        lmax = float(logs.max())
        b = math.exp(lmax) * float(np.mean(np.exp(a * (logs - lmax)))) ** (1.0 / a)
        if not (math.isfinite(a) and math.isfinite(b)):
            raise FitError(FailureReason.NUMERICAL_FAILURE, "non-finite Weibull parameters")

        return ShapeScaleShift(a=a, b=b, shift=shift)  # type: ignore[call-arg]

    def _pdf(self, x: FloatArray) -> FloatArray:
        a, b, shift = self.a, self.b, self.value_shift
        inside = x > shift
        z = np.where(inside, (x - shift) / b, 1.0)
        with np.errstate(over="ignore", invalid="ignore"):
            density = (a / b) * z ** (a - 1.0) * np.exp(-(z**a))
        return cast("FloatArray", np.where(inside, density, 0.0))

    def _cdf(self, x: FloatArray) -> FloatArray:
        a, b, shift = self.a, self.b, self.value_shift
        inside = x > shift
        z = np.where(inside, (x - shift) / b, 0.0)
        with np.errstate(over="ignore"):
            return cast("FloatArray", np.where(inside, -np.expm1(-(z**a)), 0.0))

    def _ppf(self, p: FloatArray) -> FloatArray:
        a, b, shift = self.a, self.b, self.value_shift
        with np.errstate(divide="ignore"):
            return cast("FloatArray", shift + b * (-np.log1p(-p)) ** (1.0 / a))

    def mean(self) -> float:
        return self.value_shift + self.b * float(gamma(1.0 + 1.0 / self.a))

    def variance(self) -> float:
        g1 = float(gamma(1.0 + 1.0 / self.a))
        g2 = float(gamma(1.0 + 2.0 / self.a))
        return self.b**2 * (g2 - g1**2)

    def mode(self) -> float:
        """Most likely value (the value shift when ``a <= 1``)."""
        a = self.a
        if a > 1.0:
            return self.value_shift + self.b * ((a - 1.0) / a) ** (1.0 / a)
        return self.value_shift

    def skewness(self) -> float:
        a = self.a
        g1, g2, g3 = (float(gamma(1.0 + k / a)) for k in (1, 2, 3))
        return (g3 - 3.0 * g1 * g2 + 2.0 * g1**3) / (g2 - g1**2) ** 1.5


def configure_weibull_family() -> None:
    """
    Register the Weibull distribution family.
    """
    if DistributionRegister.contains(DistributionName.WEIBULL):
        return
    DistributionRegister.register(WeibullDistribution)
