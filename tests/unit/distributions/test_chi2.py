from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
import warnings

import numpy as np
import pytest
from scipy.stats import chi2 as chi2_law
from scipy.stats import norm

from pysatl_cloudstats.cloud import ArrayScalarField, ScalarFieldCloud
from pysatl_cloudstats.config import Chi2Config
from pysatl_cloudstats.distributions import CHI2_FAILURE, SequenceSource
from pysatl_cloudstats.distributions.chi2 import (
    classify,
    compute_chi2,
    equal_probability_boundaries,
    expected_counts,
)
from pysatl_cloudstats.families import ExponentialDistribution, NormalDistribution
from pysatl_cloudstats.types import FailureReason
from tests.utils.mocks import ListCloud


class _BrokenModel:
    def __init__(self, quantiles, cumulative):
        self._quantiles = quantiles
        self._cumulative = cumulative

    def quantile(self, p):
        return np.full_like(np.asarray(p, dtype=np.float64), self._quantiles)

    def cumulative_from_origin(self, x):
        return np.full_like(np.asarray(x, dtype=np.float64), self._cumulative)


class TestChi2Sentinel:
    def test_zero_classes(self):
        cloud = ScalarFieldCloud.from_values([0.1, 0.2, 0.3])
        assert NormalDistribution(0.0, 1.0).chi2_distance(cloud, 0) == CHI2_FAILURE

    def test_empty_population(self):
        cloud = ScalarFieldCloud.from_values([])
        assert NormalDistribution(0.0, 1.0).chi2_distance(cloud, 4) == -1.0

    def test_invalid_distribution(self):
        cloud = ScalarFieldCloud.from_values([0.1, 0.2, 0.3])
        assert NormalDistribution().chi2_distance(cloud, 4) == -1.0

    def test_histogram_untouched_on_failure(self):
        histogram = [7, 7, 7, 7]
        cloud = ScalarFieldCloud.from_values([0.1, 0.2])
        assert NormalDistribution().chi2_distance(cloud, 4, histogram) == -1.0
        assert histogram == [7, 7, 7, 7]

    @pytest.mark.parametrize(
        "distribution, values, k, reason",
        [
            (NormalDistribution(), [1.0], 2, FailureReason.INVALID_STATE),
            (NormalDistribution(0.0, 1.0), [1.0], 0, FailureReason.NO_CLASSES),
            (NormalDistribution(0.0, 1.0), [], 2, FailureReason.EMPTY_POPULATION),
            (NormalDistribution(0.0, 1.0), [1.0, math.nan], 2, FailureReason.INVALID_VALUE),
        ],
        ids=["invalid", "no_classes", "empty", "nan"],
    )
    def test_failure_reasons(self, distribution, values, k, reason):
        result = distribution.compute_chi2(ScalarFieldCloud.from_values(values), k)
        assert not result.ok
        assert result.reason is reason
        assert result.statistic == CHI2_FAILURE
        assert result.number_of_classes == 0


class TestChi2Distance:
    def test_pathological_single_class(self):
        cloud = ScalarFieldCloud.from_values(np.full(100, 10.0))
        histogram = [0] * 4
        chi2 = NormalDistribution(0.0, 1.0).chi2_distance(cloud, 4, histogram)
        assert chi2 == pytest.approx(300.0)
        assert histogram == [0, 0, 0, 100]

    def test_histogram_sums_to_population(self, rng):
        values = rng.normal(2.0, 0.5, 500)
        distribution = NormalDistribution()
        assert distribution.compute_parameters(SequenceSource(values))
        histogram = [0] * 12
        chi2 = distribution.chi2_distance(ScalarFieldCloud.from_values(values), 12, histogram)
        assert chi2 >= 0.0
        assert sum(histogram) == 500

    def test_iid_population_is_bounded(self, rng):
        distribution = NormalDistribution(0.0, 1.0)
        cloud = ScalarFieldCloud.from_values(rng.normal(0.0, 1.0, 2000))
        chi2 = distribution.chi2_distance(cloud, 10)
        assert 0.0 <= chi2 < chi2_law.ppf(0.9999, 9)

    def test_single_class(self):
        cloud = ScalarFieldCloud.from_values([-3.0, 0.0, 5.0])
        result = NormalDistribution(0.0, 1.0).compute_chi2(cloud, 1)
        assert result.statistic == 0.0
        assert result.histogram.tolist() == [3]

    def test_infinite_values_go_to_extreme_classes(self):
        cloud = ScalarFieldCloud.from_values([-math.inf, 0.1, math.inf])
        result = NormalDistribution(0.0, 1.0).compute_chi2(cloud, 3)
        assert result.histogram.tolist() == [1, 1, 1]

    def test_population_read_through_accessor(self):
        values = [0.5, -0.5, 1.5, -1.5]
        distribution = NormalDistribution(0.0, 1.0)
        expected = distribution.chi2_distance(ScalarFieldCloud.from_values(values), 2)
        assert distribution.chi2_distance(ListCloud(values), 2) == pytest.approx(expected)

    def test_output_field_is_used(self):
        a = ArrayScalarField("a", [10.0, 10.0, 10.0, 10.0])
        b = ArrayScalarField("b", [-1.0, -0.1, 0.1, 1.0])
        cloud = ScalarFieldCloud(4, fields=[a, b])
        cloud.set_output_scalar_field("b")
        result = NormalDistribution(0.0, 1.0).compute_chi2(cloud, 2)
        assert result.histogram.tolist() == [2, 2]

    def test_missing_output_field(self):
        cloud = ScalarFieldCloud(2, fields=[ArrayScalarField("a", [1.0, 2.0])])
        with pytest.raises(RuntimeError):
            NormalDistribution(0.0, 1.0).chi2_distance(cloud, 2)

    def test_result_diagnostics(self):
        cloud = ScalarFieldCloud.from_values(np.linspace(-2.0, 2.0, 40))
        result = NormalDistribution(0.0, 1.0).compute_chi2(cloud, 4)
        assert result.ok
        assert result.number_of_classes == 4
        assert result.population_size == 40
        np.testing.assert_allclose(result.expected, [10.0] * 4)
        np.testing.assert_allclose(result.boundaries, norm.ppf([0.25, 0.5, 0.75]), atol=1e-12)
        assert result.skipped_classes == ()

    def test_boundaries_follow_refit(self, rng):
        distribution = NormalDistribution()
        cloud = ScalarFieldCloud.from_values(rng.normal(0.0, 1.0, 100))
        distribution.compute_parameters(SequenceSource([-1.0, 1.0]))
        first = distribution.compute_chi2(cloud, 4).boundaries
        distribution.compute_parameters(SequenceSource([9.0, 11.0]))
        second = distribution.compute_chi2(cloud, 4).boundaries
        np.testing.assert_allclose(second - first, 10.0)

    def test_cached_boundaries_are_read_only(self):
        distribution = NormalDistribution(0.0, 1.0)
        cloud = ScalarFieldCloud.from_values(norm.ppf((np.arange(40) + 0.5) / 40))
        first = distribution.compute_chi2(cloud, 4)
        with pytest.raises(ValueError):
            first.boundaries[:] = 100.0
        second = distribution.compute_chi2(cloud, 4)
        np.testing.assert_allclose(second.boundaries, norm.ppf([0.25, 0.5, 0.75]), atol=1e-12)
        assert second.histogram.tolist() == [10, 10, 10, 10]

    def test_small_expected_count_warning_points_at_caller(self):
        distribution = NormalDistribution(0.0, 1.0)
        cloud = ScalarFieldCloud.from_values(np.linspace(-1.0, 1.0, 10))
        with pytest.warns(RuntimeWarning) as direct:
            distribution.compute_chi2(cloud, 5)
        with pytest.warns(RuntimeWarning) as through_distance:
            distribution.chi2_distance(cloud, 5)
        assert direct[0].filename == __file__
        assert through_distance[0].filename == __file__

    def test_small_expected_count_warns(self):
        cloud = ScalarFieldCloud.from_values(np.linspace(-1.0, 1.0, 10))
        with pytest.warns(RuntimeWarning, match="Chi-squared approximation"):
            NormalDistribution(0.0, 1.0).compute_chi2(cloud, 5)

    def test_small_expected_count_warning_disabled(self):
        cloud = ScalarFieldCloud.from_values(np.linspace(-1.0, 1.0, 10))
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = NormalDistribution(0.0, 1.0).compute_chi2(
                cloud, 5, config=Chi2Config(warn_small_expected=False)
            )
        assert result.ok


class TestBinningFunctions:
    def test_equal_probability_boundaries(self):
        boundaries = equal_probability_boundaries(NormalDistribution(0.0, 1.0), 4)
        np.testing.assert_allclose(boundaries, norm.ppf([0.25, 0.5, 0.75]), atol=1e-12)

    def test_classify_is_right_sided(self):
        counts = classify(np.array([-1.0, 0.0, 0.5, 1.0, 2.0]), np.array([0.0, 1.0]), 3)
        assert counts.tolist() == [1, 2, 2]

    def test_expected_counts_are_normalized(self):
        model = ExponentialDistribution(1.0)
        expected = expected_counts(model, np.array([0.5, 1.0, 2.0]), 100, 1e-12)
        assert expected is not None
        assert expected.sum() == pytest.approx(100.0)

    def test_zero_expected_classes_are_skipped(self):
        model = ExponentialDistribution(1.0)
        values = np.array([0.2, 0.5, 1.5, 3.0])
        result = compute_chi2(
            model,
            values,
            4,
            boundaries=np.array([-2.0, -1.0, 1.0]),
            config=Chi2Config(warn_small_expected=False),
        )
        assert result.ok
        assert result.skipped_classes == (0, 1)
        assert math.isfinite(result.statistic)
        assert result.histogram.tolist() == [0, 0, 2, 2]

    def test_unnormalizable_mass(self):
        result = compute_chi2(_BrokenModel(0.0, math.nan), np.array([1.0, 2.0]), 2)
        assert result.reason is FailureReason.UNNORMALIZABLE

    def test_non_finite_boundaries(self):
        result = compute_chi2(_BrokenModel(math.nan, 0.5), np.array([1.0, 2.0]), 2)
        assert result.reason is FailureReason.UNNORMALIZABLE
