"""
Global registry for distribution families using singleton pattern.

This module implements a centralized registry that maps family names to
distribution classes, so that callers can select a model by name (e.g. from
a processing pipeline setting) and plug in their own families.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

from pysatl_cloudstats.exceptions import UnknownDistributionError

if TYPE_CHECKING:
    from typing import Any, ClassVar

    from pysatl_cloudstats.distributions.distribution import GenericDistribution


class DistributionRegister:
    """
    Singleton registry for distribution families.

    Maintains a global registry of distribution classes, allowing them to be
    accessed and instantiated by name.
    """

    _instance: ClassVar[DistributionRegister | None] = None
    _registered: dict[str, type[GenericDistribution]]

    def __new__(cls) -> DistributionRegister:
        """Create or return the singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._registered = {}
        return cls._instance

    @classmethod
    def get(cls, name: str) -> type[GenericDistribution]:
        """
        Retrieve a distribution class by family name.

        Parameters
        ----------
        name : str
            Name of the family to retrieve.

        Returns
        -------
        type[GenericDistribution]
            The requested distribution class.

        Raises
        ------
        UnknownDistributionError
            If no family with the given name exists.
        """
        self = cls()
        if name not in self._registered:
            raise UnknownDistributionError(name)
        return self._registered[name]

    @classmethod
    def contains(cls, name: str) -> bool:
        return name in cls()._registered

    @classmethod
    def names(cls) -> list[str]:
        """Registered family names, in registration order."""
        return list(cls()._registered)

    @classmethod
    def register(cls, distribution_class: type[GenericDistribution]) -> None:
        """
        Register a distribution family under its name.

        Parameters
        ----------
        distribution_class : type[GenericDistribution]
            The class to register; its ``name`` class attribute is the key.

        Raises
        ------
        ValueError
            If a family with the same name is already registered.
        """
        self = cls()
        name = str(distribution_class.name)
        if name in self._registered:
            raise ValueError(f"Distribution {name} already found in register")
        self._registered[name] = distribution_class

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> GenericDistribution:
        """
        Instantiate a registered family.

        Parameters
        ----------
        name : str
            Family name.
        **kwargs
            Constructor arguments of the family.
        """
        return cls.get(name)(**kwargs)

    @classmethod
    def _reset(cls) -> None:
        """Drop the singleton instance (test helper)."""
        cls._instance = None


__all__ = [
    "DistributionRegister",
]
