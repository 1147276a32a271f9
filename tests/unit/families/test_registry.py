from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from pysatl_cloudstats.exceptions import CloudStatsError, UnknownDistributionError
from pysatl_cloudstats.families import (
    DistributionRegister,
    ExponentialDistribution,
    NormalDistribution,
    WeibullDistribution,
    configure_distributions_register,
    reset_distributions_register,
)
from pysatl_cloudstats.types import DistributionName
from tests.utils.mocks import LogisticDistribution


class TestDistributionRegister:
    def test_singleton(self) -> None:
        assert DistributionRegister() is DistributionRegister()

    def test_builtin_families(self) -> None:
        register = configure_distributions_register()
        assert register.names() == ["Gauss", "Weibull", "Exponential"]
        assert register.get(DistributionName.GAUSS) is NormalDistribution
        assert register.get("Weibull") is WeibullDistribution
        assert register.get("Exponential") is ExponentialDistribution

    def test_configuration_is_cached(self) -> None:
        assert configure_distributions_register() is configure_distributions_register()

    def test_reset(self) -> None:
        configure_distributions_register()
        reset_distributions_register()
        assert DistributionRegister.names() == []
        assert "Gauss" in configure_distributions_register().names()

    def test_unknown_family(self) -> None:
        configure_distributions_register()
        with pytest.raises(UnknownDistributionError, match="No distribution Cauchy"):
            DistributionRegister.get("Cauchy")
        with pytest.raises(ValueError):
            DistributionRegister.get("Cauchy")
        with pytest.raises(CloudStatsError):
            DistributionRegister.create("Cauchy")

    def test_duplicate_registration(self) -> None:
        configure_distributions_register()
        with pytest.raises(ValueError, match="already found"):
            DistributionRegister.register(NormalDistribution)

    def test_create(self) -> None:
        register = configure_distributions_register()
        gauss = register.create("Gauss", mu=0.0, sigma=1.0)
        assert isinstance(gauss, NormalDistribution)
        assert gauss.is_valid()
        assert register.create("Exponential").is_valid() is False

    def test_user_family(self) -> None:
        register = configure_distributions_register()
        register.register(LogisticDistribution)
        assert register.contains("Logistic")
        assert register.names()[-1] == "Logistic"
        assert isinstance(register.create("Logistic", mu=0.0, s=1.0), LogisticDistribution)
