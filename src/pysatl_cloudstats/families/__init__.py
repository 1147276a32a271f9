"""
Distribution families.

This package provides the parametrizations, the global register and the
built-in families implementing the distribution contract.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from .builtins import ExponentialDistribution, NormalDistribution, WeibullDistribution
from .configuration import configure_distributions_register, reset_distributions_register
from .parametrizations import (
    Parametrization,
    ParametrizationConstraint,
    constraint,
    parametrization,
)
from .registry import DistributionRegister

__all__ = [
    "DistributionRegister",
    "ParametrizationConstraint",
    "Parametrization",
    "NormalDistribution",
    "WeibullDistribution",
    "ExponentialDistribution",
    "constraint",
    "parametrization",
    "configure_distributions_register",
    "reset_distributions_register",
]
