"""
Numerical settings shared by the Chi2 computations.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Chi2Config:
    """
    Settings of the Chi2 binning algorithm.

    Parameters
    ----------
    zero_tolerance : float, default 1e-12
        Expected counts at or below this value are treated as zero: such
        classes are skipped, and a total expected mass at or below it makes
        the computation fail.
    min_expected_count : float, default 5.0
        Minimal expected count per class for the Chi2 approximation to hold
        (Cochran's rule). Used when merging classes in the adaptive test.
    warn_small_expected : bool, default True
        Emit a ``RuntimeWarning`` when a class keeps an expected count below
        ``min_expected_count``.
    """

    zero_tolerance: float = 1e-12
    min_expected_count: float = 5.0
    warn_small_expected: bool = True

    def __post_init__(self) -> None:
        if self.zero_tolerance < 0:
            raise ValueError("zero_tolerance must be non-negative.")
        if self.min_expected_count < 0:
            raise ValueError("min_expected_count must be non-negative.")


DEFAULT_CHI2_CONFIG = Chi2Config()
"""Settings used when no explicit :class:`Chi2Config` is passed."""


__all__ = [
    "Chi2Config",
    "DEFAULT_CHI2_CONFIG",
]
