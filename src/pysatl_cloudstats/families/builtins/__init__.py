"""
Built-in distribution families for PySATL CloudStats.

This package contains implementations of the standard distribution families
used to model point cloud scalar values.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_cloudstats.families.builtins.continuous import (
    ExponentialDistribution,
    NormalDistribution,
    WeibullDistribution,
    configure_exponential_family,
    configure_normal_family,
    configure_weibull_family,
)

__all__ = [
    "NormalDistribution",
    "WeibullDistribution",
    "ExponentialDistribution",
    "configure_normal_family",
    "configure_weibull_family",
    "configure_exponential_family",
]
