"""
Common fixtures and utilities for continuous distribution tests.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math
from typing import Any

import numpy as np
from scipy.stats import chi2

from pysatl_cloudstats.cloud import ScalarFieldCloud
from pysatl_cloudstats.distributions import GenericDistribution, SequenceSource


class BaseDistributionTest:
    """Base class for all distribution families' tests"""

    # Precision for floating point comparisons
    CALCULATION_PRECISION = 1e-10

    # Grid where characteristics are compared with SciPy
    TEST_POINTS = np.array([-2.0, -0.5, 0.0, 0.3, 1.0, 2.5, 7.0])

    @staticmethod
    def assert_arrays_almost_equal(
        actual: np.ndarray[Any, Any], expected: np.ndarray[Any, Any], precision: float | None = None
    ) -> None:
        """Helper method to assert arrays are almost equal."""
        if precision is None:
            precision = BaseDistributionTest.CALCULATION_PRECISION

        np.testing.assert_array_almost_equal(actual, expected, decimal=int(-math.log10(precision)))

    @staticmethod
    def fitted(
        distribution: GenericDistribution, sample: np.ndarray[Any, Any]
    ) -> GenericDistribution:
        """Fit the distribution and check the fit succeeded."""
        result = distribution.fit(SequenceSource(sample))
        assert result.ok, result.message
        assert distribution.is_valid()
        return distribution

    @staticmethod
    def assert_chi2_accepts(
        distribution: GenericDistribution, sample: np.ndarray[Any, Any], number_of_classes: int
    ) -> None:
        """Chi2 distance of a sample drawn from the model stays within the 99.99% fractile."""
        histogram = [0] * number_of_classes
        cloud = ScalarFieldCloud.from_values(sample)
        statistic = distribution.chi2_distance(cloud, number_of_classes, histogram)
        assert sum(histogram) == sample.size
        dof = number_of_classes - 1 - distribution.number_of_parameters
        assert 0.0 <= statistic < chi2.ppf(0.9999, dof)
