from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import cast

import numpy as np

from pysatl_cloudstats.distributions import ContinuousSupport, GenericDistribution
from pysatl_cloudstats.exceptions import FitError
from pysatl_cloudstats.families import Parametrization, constraint, parametrization
from pysatl_cloudstats.families.builtins.continuous.exponential import Rate
from pysatl_cloudstats.types import FailureReason, FloatArray


@parametrization(name="locationScale")
class LocationScale(Parametrization):
    mu: float
    s: float

    @constraint(description="s > 0")
    def check_s_positive(self) -> bool:
        return self.s > 0


class LogisticDistribution(GenericDistribution):
    """
    Plug-in family defining the density only.

    Cumulative and inverse cumulative functions come from the numerical
    fallbacks of the base class.
    """

    name = "Logistic"
    parametrization_class = LocationScale

    def __init__(self, mu: float | None = None, s: float | None = None) -> None:
        super().__init__()
        if mu is not None and s is not None:
            self.set_parameters(LocationScale(mu=mu, s=s))  # type: ignore[call-arg]

    def _estimate(self, values: FloatArray) -> LocationScale:
        s = float(np.std(values)) * np.sqrt(3.0) / np.pi
        if s <= 0.0:
            raise FitError(FailureReason.DEGENERATE_SAMPLE, "sample has zero variance")
        return LocationScale(mu=float(np.mean(values)), s=s)  # type: ignore[call-arg]

    def _pdf(self, x: FloatArray) -> FloatArray:
        p = cast(LocationScale, self._parameters)
        z = np.exp(-np.abs(x - p.mu) / p.s)
        return cast(FloatArray, z / (p.s * (1.0 + z) ** 2))


class DecayDistribution(GenericDistribution):
    """Density-only family on [0, inf)."""

    name = "Decay"
    parametrization_class = Rate

    def __init__(self, lambda_: float) -> None:
        super().__init__()
        self.set_parameters(Rate(lambda_=lambda_))  # type: ignore[call-arg]

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(left=0.0)

    def _estimate(self, values: FloatArray) -> Rate:
        return Rate(lambda_=1.0 / float(np.mean(values)))  # type: ignore[call-arg]

    def _pdf(self, x: FloatArray) -> FloatArray:
        lam = cast(Rate, self._parameters).lambda_
        return cast(FloatArray, np.where(x >= 0.0, lam * np.exp(-lam * np.maximum(x, 0.0)), 0.0))


class ListScalarField:
    """Scalar field stored in a plain list (no array protocol)."""

    def __init__(self, name: str, values: list[float]) -> None:
        self._name = name
        self._values = list(values)

    @property
    def name(self) -> str:
        return self._name

    def size(self) -> int:
        return len(self._values)

    def get_value(self, index: int) -> float:
        return self._values[index]


class ListCloud:
    """Population exposing its values through the per-point accessor only."""

    def __init__(self, values: list[float]) -> None:
        self._values = list(values)

    def size(self) -> int:
        return len(self._values)

    def get_point_scalar_value(self, index: int) -> float:
        return self._values[index]


class IndexedSource:
    """Scalar value source with size and indexed access only."""

    def __init__(self, values: list[float]) -> None:
        self._values = list(values)

    def size(self) -> int:
        return len(self._values)

    def value_at(self, index: int) -> float:
        return self._values[index]
