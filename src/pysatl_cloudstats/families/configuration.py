"""
Distribution Families Configuration
===================================

This module registers the built-in distribution families of PySATL CloudStats:

- :class:`NormalDistribution`: ``"Gauss"``.
- :class:`WeibullDistribution`: ``"Weibull"``.
- :class:`ExponentialDistribution`: ``"Exponential"``.

Notes
-----
- All families are registered in the global DistributionRegister.
- User families can be registered next to the built-in ones with
  :meth:`DistributionRegister.register`.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from pysatl_cloudstats.families.builtins import (
    configure_exponential_family,
    configure_normal_family,
    configure_weibull_family,
)
from pysatl_cloudstats.families.registry import DistributionRegister


@lru_cache(maxsize=1)
def configure_distributions_register() -> DistributionRegister:
    """
    Register all built-in distribution families in the global registry.

    Returns
    -------
    DistributionRegister
        The global registry of distribution families.
    """
    configure_normal_family()
    configure_weibull_family()
    configure_exponential_family()
    return DistributionRegister()


def reset_distributions_register() -> None:
    """
    Reset the cached distributions registry.
    """
    configure_distributions_register.cache_clear()
    DistributionRegister._reset()
