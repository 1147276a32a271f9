from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import dataclasses

import pytest

import pysatl_cloudstats
from pysatl_cloudstats.config import DEFAULT_CHI2_CONFIG, Chi2Config
from pysatl_cloudstats.exceptions import CloudStatsError, FitError
from pysatl_cloudstats.types import FailureReason


class TestChi2Config:
    def test_defaults(self) -> None:
        assert DEFAULT_CHI2_CONFIG == Chi2Config(
            zero_tolerance=1e-12, min_expected_count=5.0, warn_small_expected=True
        )

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CHI2_CONFIG.min_expected_count = 1.0  # type: ignore[misc]

    @pytest.mark.parametrize("field", ["zero_tolerance", "min_expected_count"])
    def test_rejects_negative(self, field: str) -> None:
        with pytest.raises(ValueError, match=field):
            Chi2Config(**{field: -1.0})


def test_fit_error_carries_reason() -> None:
    error = FitError(FailureReason.NUMERICAL_FAILURE, "diverged")
    assert isinstance(error, CloudStatsError)
    assert error.reason is FailureReason.NUMERICAL_FAILURE
    assert str(error) == "diverged"


def test_public_api() -> None:
    for name in (
        "GenericDistribution",
        "NormalDistribution",
        "WeibullDistribution",
        "ExponentialDistribution",
        "ScalarFieldCloud",
        "SequenceSource",
        "Chi2Config",
        "CHI2_FAILURE",
        "DistributionRegister",
        "FailureReason",
        "compute_adaptive_chi2",
    ):
        assert name in pysatl_cloudstats.__all__
        assert hasattr(pysatl_cloudstats, name)
