"""
Exception hierarchy for PySATL CloudStats.

Contract-level failures (a fit that cannot be performed, a Chi2 distance that
cannot be computed) are reported through result objects and sentinels. The
exceptions below are used internally by estimators and for library misuse.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from pysatl_cloudstats.types import FailureReason


class CloudStatsError(Exception):
    """Base exception for all PySATL CloudStats errors."""


class FitError(CloudStatsError):
    """
    Parameter estimation failed.

    Raised by family estimators; the distribution base class converts it into
    a failed fit and never lets it escape ``compute_parameters``.

    Parameters
    ----------
    reason : FailureReason
        Typed failure reason reported in the fit result.
    message : str
        Human-readable diagnostic.
    """

    def __init__(self, reason: FailureReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class UnknownDistributionError(CloudStatsError, ValueError):
    """No distribution family with the requested name is registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No distribution {name} found in register")
        self.name = name


__all__ = [
    "CloudStatsError",
    "FitError",
    "UnknownDistributionError",
]
