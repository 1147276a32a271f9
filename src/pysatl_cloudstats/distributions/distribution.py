"""
Distribution Contract
=====================

This module defines :class:`GenericDistribution`, the polymorphic interface
implemented by every distribution family used to classify and filter point
cloud scalar values.

A distribution is created without parameters (invalid). It becomes valid only
through a successful parameter estimation (:meth:`~GenericDistribution.fit`,
:meth:`~GenericDistribution.compute_parameters`) or an explicit, validated
:meth:`~GenericDistribution.set_parameters`. Every new estimation first
resets the validity, so parameters of a failed re-fit are never observed as
valid.

Notes
-----
- Probability queries on an invalid distribution return ``nan``.
- Probability queries accept scalars (returning ``float``) or arrays
  (returning arrays of the same shape).
- Instances are not safe for concurrent mutation; concurrent read-only
  queries on a valid instance are.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from abc import ABC, abstractmethod
from dataclasses import fields
from typing import TYPE_CHECKING, Any, overload

import numpy as np

from pysatl_cloudstats.config import DEFAULT_CHI2_CONFIG
from pysatl_cloudstats.distributions import chi2
from pysatl_cloudstats.distributions.numeric import cdf_from_pdf, ppf_from_cdf
from pysatl_cloudstats.distributions.results import CHI2_FAILURE, Chi2Result, FitResult
from pysatl_cloudstats.distributions.sources import as_array
from pysatl_cloudstats.distributions.support import ContinuousSupport
from pysatl_cloudstats.exceptions import FitError
from pysatl_cloudstats.types import FailureReason

if TYPE_CHECKING:
    from collections.abc import Callable, MutableSequence
    from typing import ClassVar

    from pysatl_cloudstats.cloud import GenericCloud
    from pysatl_cloudstats.config import Chi2Config
    from pysatl_cloudstats.distributions.sources import ScalarValueSource
    from pysatl_cloudstats.families.parametrizations import Parametrization
    from pysatl_cloudstats.types import FloatArray, Number, NumericArray

logger = logging.getLogger(__name__)


def _evaluate(func: Callable[[FloatArray], FloatArray], x: Number | NumericArray) -> Any:
    arr = np.asarray(x, dtype=np.float64)
    result = func(arr)
    if arr.ndim == 0:
        return float(result)
    return result


class GenericDistribution(ABC):
    """
    Univariate parametric distribution fitted to scalar values.

    Subclasses provide the family name, the parametrization class, a
    parameter estimator and the density. The cumulative function and its
    inverse default to numerical integration and inversion and should be
    overridden whenever a closed form exists.

    Attributes
    ----------
    parametrization_class : type[Parametrization]
        Parametrization holding the family parameters.
    """

    parametrization_class: ClassVar[type[Parametrization]]

    def __init__(self) -> None:
        self._is_valid = False
        self._parameters: Parametrization | None = None
        self._chi2_boundaries: dict[int, FloatArray] = {}

    @property
    @abstractmethod
    def name(self) -> str:
        """Family name (e.g. ``"Gauss"``)."""

    def is_valid(self) -> bool:
        """
        Whether the distribution parameters are valid.

        Returns
        -------
        bool
            ``False`` until a parameter estimation succeeds, and again after
            a failed one.
        """
        return self._is_valid

    @property
    def parameters(self) -> Parametrization | None:
        """Current parameters (``None`` while invalid)."""
        return self._parameters

    @property
    def number_of_parameters(self) -> int:
        """Number of parameters estimated from the sample."""
        return len(fields(self.parametrization_class))  # type: ignore[arg-type]

    @property
    def support(self) -> ContinuousSupport:
        """Support of the distribution (the real line unless overridden)."""
        return ContinuousSupport()

    # -- validity ----------------------------------------------------------

    def _set_valid(self, state: bool) -> None:
        self._is_valid = state

    def _invalidate(self) -> None:
        """Drop the parameters and every value derived from them."""
        self._set_valid(False)
        self._parameters = None
        self._chi2_boundaries.clear()

    # -- parameters --------------------------------------------------------

    @abstractmethod
    def _estimate(self, values: FloatArray) -> Parametrization:
        """
        Estimate the family parameters.

        Parameters
        ----------
        values : numpy.ndarray
            Non-empty array of finite values.

        Raises
        ------
        FitError
            If the sample cannot determine the parameters.
        """

    def fit(self, values: ScalarValueSource) -> FitResult:
        """
        Estimate the distribution parameters from a set of values.

        Non-finite values are ignored.

        Parameters
        ----------
        values : ScalarValueSource
            Sample to fit.

        Returns
        -------
        FitResult
            Estimated parameters or the failure reason.
        """
        self._invalidate()

        data = as_array(values)
        finite = data[np.isfinite(data)]
        if finite.size == 0:
            result = FitResult.failure(FailureReason.EMPTY_SAMPLE, "no finite value to fit")
        else:
            try:
                parameters = self._estimate(finite.astype(np.float64, copy=False))
            except FitError as exc:
                result = FitResult.failure(exc.reason, str(exc), int(finite.size))
            else:
                result = self._install(parameters, int(finite.size))

        if not result.ok:
            logger.debug("%s fit failed (%s): %s", self.name, result.reason, result.message)
        return result

    def compute_parameters(self, values: ScalarValueSource) -> bool:
        """
        Compute the distribution parameters from a set of values.

        Parameters
        ----------
        values : ScalarValueSource
            Sample to fit.

        Returns
        -------
        bool
            ``True`` if the computation succeeded, ``False`` otherwise.
        """
        return self.fit(values).ok

    def set_parameters(self, parameters: Parametrization) -> bool:
        """
        Install explicit parameters.

        Parameters
        ----------
        parameters : Parametrization
            Instance of :attr:`parametrization_class`.

        Returns
        -------
        bool
            ``True`` if the parameters satisfy the family constraints.

        Raises
        ------
        TypeError
            If the parameters belong to another parametrization.
        """
        if not isinstance(parameters, self.parametrization_class):
            raise TypeError(
                f"{self.name} expects {self.parametrization_class.__name__} parameters, "
                f"got {type(parameters).__name__}."
            )
        self._invalidate()
        return self._install(parameters, 0).ok

    def _install(self, parameters: Parametrization, sample_size: int) -> FitResult:
        try:
            parameters.validate()
        except ValueError as exc:
            return FitResult.failure(FailureReason.DEGENERATE_SAMPLE, str(exc), sample_size)

        self._parameters = parameters
        self._set_valid(True)
        return FitResult.success(parameters, sample_size)

    # -- characteristics ---------------------------------------------------

    @abstractmethod
    def _pdf(self, x: FloatArray) -> FloatArray:
        """Density on valid parameters."""

    def _cdf(self, x: FloatArray) -> FloatArray:
        """Cumulative probability on valid parameters (numerical by default)."""
        cdf = cdf_from_pdf(lambda t: float(self._pdf(np.asarray(t))), origin=self.support.origin)
        return np.vectorize(cdf, otypes=[np.float64])(x)

    def _ppf(self, p: FloatArray) -> FloatArray:
        """
        Inverse cumulative probability on valid parameters (numerical by default).

        Results are clamped to the support bounds.
        """
        support = self.support
        x0 = support.origin if np.isfinite(support.origin) else 0.0
        ppf = ppf_from_cdf(lambda t: float(self._cdf(np.asarray(t))), x0=x0)
        x = np.vectorize(ppf, otypes=[np.float64])(p)
        return np.clip(x, support.left, support.right)

    @overload
    def probability_density(self, x: Number) -> float: ...
    @overload
    def probability_density(self, x: NumericArray) -> FloatArray: ...

    def probability_density(self, x: Number | NumericArray) -> float | FloatArray:
        """
        Probability density at ``x``.

        Returns ``nan`` while the distribution is invalid.
        """
        if not self._is_valid:
            return _evaluate(lambda a: np.full_like(a, np.nan), x)
        return _evaluate(self._pdf, x)

    @overload
    def cumulative_from_origin(self, x: Number) -> float: ...
    @overload
    def cumulative_from_origin(self, x: NumericArray) -> FloatArray: ...

    def cumulative_from_origin(self, x: Number | NumericArray) -> float | FloatArray:
        """
        Cumulative probability between the support origin and ``x``.

        This is ``P(X <= x)``: the mass below the natural lower bound of the
        support is zero. Monotonically non-decreasing in ``x``. Returns
        ``nan`` while the distribution is invalid.
        """
        if not self._is_valid:
            return _evaluate(lambda a: np.full_like(a, np.nan), x)
        return _evaluate(self._cdf, x)

    @overload
    def cumulative_between(self, x1: Number, x2: Number) -> float: ...
    @overload
    def cumulative_between(self, x1: NumericArray, x2: NumericArray) -> FloatArray: ...

    def cumulative_between(
        self, x1: Number | NumericArray, x2: Number | NumericArray
    ) -> float | FloatArray:
        """
        Cumulative probability between ``x1`` and ``x2``.

        ``x1`` should be lower than ``x2``; this is not checked and reversed
        bounds yield a negative mass.
        """
        upper = self.cumulative_from_origin(x2)
        lower = self.cumulative_from_origin(x1)
        return upper - lower

    @overload
    def quantile(self, p: Number) -> float: ...
    @overload
    def quantile(self, p: NumericArray) -> FloatArray: ...

    def quantile(self, p: Number | NumericArray) -> float | FloatArray:
        """
        Inverse cumulative probability.

        ``p = 0`` and ``p = 1`` map to the support bounds. Returns ``nan``
        while the distribution is invalid.

        Raises
        ------
        ValueError
            If a probability is outside ``[0, 1]``.
        """
        arr = np.asarray(p, dtype=np.float64)
        if np.any((arr < 0) | (arr > 1)):
            raise ValueError("Probability must be in [0, 1]")
        if not self._is_valid:
            return _evaluate(lambda a: np.full_like(a, np.nan), arr)
        return _evaluate(self._ppf, arr)

    # -- chi2 --------------------------------------------------------------

    def compute_chi2(
        self,
        cloud: GenericCloud,
        number_of_classes: int,
        *,
        config: Chi2Config = DEFAULT_CHI2_CONFIG,
        _stacklevel: int = 3,
    ) -> Chi2Result:
        """
        Chi2 distance of a population against this distribution.

        The population values are read through the cloud's output scalar
        field and distributed over ``number_of_classes`` equal-probability
        classes (see :mod:`pysatl_cloudstats.distributions.chi2`).

        Parameters
        ----------
        cloud : GenericCloud
            Population to test.
        number_of_classes : int
            Number of classes of the Chi2 test.
        config : Chi2Config, optional
            Numerical settings.

        Returns
        -------
        Chi2Result
            Statistic with per-class diagnostics, or a typed failure.
        """
        if not self._is_valid:
            result = Chi2Result.failure(FailureReason.INVALID_STATE, "distribution is not valid")
        elif number_of_classes < 1:
            result = Chi2Result.failure(FailureReason.NO_CLASSES, "number_of_classes must be >= 1")
        elif cloud.size() == 0:
            result = Chi2Result.failure(FailureReason.EMPTY_POPULATION, "population is empty")
        else:
            boundaries = self._chi2_boundaries.get(number_of_classes)
            if boundaries is None:
                boundaries = chi2.equal_probability_boundaries(self, number_of_classes)
                boundaries.setflags(write=False)
                self._chi2_boundaries[number_of_classes] = boundaries
            result = chi2.compute_chi2(
                self,
                chi2.population_values(cloud),
                number_of_classes,
                boundaries=boundaries,
                config=config,
                stacklevel=_stacklevel,
            )

        if not result.ok:
            logger.debug("%s Chi2 failed (%s): %s", self.name, result.reason, result.message)
        return result

    def chi2_distance(
        self,
        cloud: GenericCloud,
        number_of_classes: int,
        histogram: MutableSequence[int] | None = None,
    ) -> float:
        """
        Compute the Chi2 distance (related to the Chi2 test).

        Parameters
        ----------
        cloud : GenericCloud
            Population to test; its output scalar field must be enabled.
        number_of_classes : int
            Number of classes of the Chi2 test.
        histogram : MutableSequence[int], optional
            Caller-owned buffer of exactly ``number_of_classes`` entries that
            receives the observed count per class. Left untouched on failure.

        Returns
        -------
        float
            The Chi2 distance, or ``-1.0`` if the computation failed.
        """
        result = self.compute_chi2(cloud, number_of_classes, _stacklevel=4)
        if not result.ok:
            return CHI2_FAILURE
        if histogram is not None:
            for i, count in enumerate(result.histogram):
                histogram[i] = int(count)
        return result.statistic

    def __repr__(self) -> str:
        params = self._parameters.parameters if self._parameters is not None else None
        return f"{type(self).__name__}(valid={self._is_valid}, parameters={params})"


__all__ = [
    "GenericDistribution",
]
