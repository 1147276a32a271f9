"""
Built-in continuous distribution families.

This module contains implementations of continuous distribution families.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_cloudstats.families.builtins.continuous.exponential import (
    ExponentialDistribution,
    configure_exponential_family,
)
from pysatl_cloudstats.families.builtins.continuous.normal import (
    NormalDistribution,
    configure_normal_family,
)
from pysatl_cloudstats.families.builtins.continuous.weibull import (
    WeibullDistribution,
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
