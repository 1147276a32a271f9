"""
Statistics subpackage

Chi2 goodness-of-fit testing of point cloud populations against fitted
distributions.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .testing import (
    GoodnessOfFit,
    chi2_fractile,
    chi2_probability,
    compute_adaptive_chi2,
    default_number_of_classes,
    test_cloud_with_model,
)

__all__ = [
    "GoodnessOfFit",
    "chi2_fractile",
    "chi2_probability",
    "compute_adaptive_chi2",
    "default_number_of_classes",
    "test_cloud_with_model",
]
