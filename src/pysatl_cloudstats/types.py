"""
Core Type Definitions
=====================

Fundamental types and data structures used throughout PySATL CloudStats.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from enum import StrEnum
from math import inf
from typing import Any, TypeAlias, cast, overload

import numpy as np
from numpy.typing import NDArray

NumPyNumber = np.floating[Any] | np.integer[Any]
"""Type alias for NumPy numeric types."""

Number = NumPyNumber | int | float
"""Type alias for all numeric types."""

NumericArray = NDArray[NumPyNumber]
"""Type alias for numeric arrays."""

FloatArray = NDArray[np.float64]
"""Type alias for double precision arrays."""

CountArray = NDArray[np.int64]
"""Type alias for per-class counts."""

BoolArray = NDArray[np.bool_]
"""Type alias for boolean arrays."""

ScalarType: TypeAlias = float
"""Type alias for a scalar value attached to a point."""

ParametrizationName: TypeAlias = str
"""Type alias for parametrization names."""


@dataclass(frozen=True, slots=True)
class Interval1D:
    """
    1D interval with configurable closure.

    Parameters
    ----------
    left : float, default=-inf
        Left endpoint of the interval.
    right : float, default=inf
        Right endpoint of the interval.
    left_closed : bool, default=True
        Whether left endpoint is included (ignored if left = -inf).
    right_closed : bool, default=True
        Whether right endpoint is included (ignored if right = inf).
    """

    left: float = -inf
    right: float = inf
    left_closed: bool = True
    right_closed: bool = True

    def __post_init__(self) -> None:
        """Adjust closure for infinite endpoints."""
        if self.left == -inf and self.left_closed:
            object.__setattr__(self, "left_closed", False)
        if self.right == inf and self.right_closed:
            object.__setattr__(self, "right_closed", False)

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        """
        Check if point(s) are contained in the interval.

        Parameters
        ----------
        x : Number or NumericArray
            Point(s) to check.

        Returns
        -------
        bool or BoolArray
            True for points within the interval, False otherwise.
        """
        arr = np.asarray(x)

        left_ok = (arr > self.left) | (self.left_closed & (arr >= self.left))
        right_ok = (arr < self.right) | (self.right_closed & (arr <= self.right))
        result = left_ok & right_ok

        if np.ndim(arr) == 0:
            return bool(result)

        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        """Check if a single point is in the interval."""
        return bool(self.contains(cast(Number, x)))


class DistributionName(StrEnum):
    """Names of the built-in distribution families."""

    GAUSS = "Gauss"
    WEIBULL = "Weibull"
    EXPONENTIAL = "Exponential"


class FailureReason(StrEnum):
    """
    Typed reasons for a failed fit or a failed Chi2 computation.

    Attributes
    ----------
    EMPTY_SAMPLE
        No finite value to estimate the parameters from.
    DEGENERATE_SAMPLE
        The sample cannot determine the parameters (zero variance, values
        outside the family support, violated parameter constraint).
    NUMERICAL_FAILURE
        The estimator did not converge or produced non-finite parameters.
    INVALID_STATE
        The distribution has no valid parameters.
    NO_CLASSES
        The requested number of Chi2 classes is not positive.
    EMPTY_POPULATION
        The population to test holds no point.
    INVALID_VALUE
        A population value cannot be assigned to a class (NaN).
    UNNORMALIZABLE
        Class boundaries or expected counts cannot be normalized.
    """

    EMPTY_SAMPLE = "empty_sample"
    DEGENERATE_SAMPLE = "degenerate_sample"
    NUMERICAL_FAILURE = "numerical_failure"
    INVALID_STATE = "invalid_state"
    NO_CLASSES = "no_classes"
    EMPTY_POPULATION = "empty_population"
    INVALID_VALUE = "invalid_value"
    UNNORMALIZABLE = "unnormalizable"


__all__ = [
    "NumPyNumber",
    "Number",
    "NumericArray",
    "FloatArray",
    "CountArray",
    "BoolArray",
    "ScalarType",
    "ParametrizationName",
    "Interval1D",
    "DistributionName",
    "FailureReason",
]
