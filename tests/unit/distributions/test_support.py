from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import inf

import numpy as np
import pytest

from pysatl_cloudstats.distributions.support import ContinuousSupport, Support
from pysatl_cloudstats.families import (
    ExponentialDistribution,
    NormalDistribution,
    WeibullDistribution,
)


class TestContinuousSupport:
    support_example = ContinuousSupport(left=0.0, right=1.0, left_closed=True, right_closed=False)

    @pytest.mark.parametrize(
        "point, expected_result",
        [(0, True), (1, False), (0.5, True), (-0.1, False), (inf, False)],
        ids=["left_bound_closed", "right_bound_open", "inside", "outside", "+inf"],
    )
    def test_contains_scalar(self, point, expected_result):
        assert (point in self.support_example) is expected_result
        assert self.support_example.contains(point) is expected_result

    def test_contains_array(self):
        result = self.support_example.contains(np.array([-1.0, 0.0, 0.5, 1.0]))
        assert isinstance(result, np.ndarray)
        assert result.tolist() == [False, True, True, False]

    def test_infinite_bounds_are_open(self):
        support = ContinuousSupport()
        assert support.left_closed is False
        assert support.right_closed is False
        assert -inf not in support

    def test_origin_is_left_bound(self):
        assert ContinuousSupport(left=2.5).origin == 2.5
        assert ContinuousSupport().origin == -inf

    def test_is_support(self):
        assert isinstance(ContinuousSupport(), Support)


class TestFamilySupports:
    def test_normal_support_is_real_line(self):
        support = NormalDistribution(0.0, 1.0).support
        assert support.left == -inf
        assert support.right == inf
        assert -1e300 in support

    def test_exponential_support_starts_at_zero(self):
        support = ExponentialDistribution(2.0).support
        assert support.origin == 0.0
        assert -1.0 not in support

    def test_weibull_support_follows_value_shift(self):
        support = WeibullDistribution(2.0, 1.0, value_shift=3.0).support
        assert support.origin == 3.0
        assert 2.0 not in support
        assert 4.0 in support
