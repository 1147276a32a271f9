"""
Point Cloud Interfaces
======================

Interfaces of the point-cloud collaborators consumed by the distributions:

- :class:`ScalarField` – a named sequence of scalar values, one per point.
- :class:`GenericCloud` – a population of points exposing one scalar value per
  point through its enabled output scalar field.

Two light NumPy-backed implementations are provided for callers that do not
bring their own container: :class:`ArrayScalarField` and
:class:`ScalarFieldCloud`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Any

    import numpy.typing as npt

    from pysatl_cloudstats.types import ScalarType


@runtime_checkable
class ScalarField(Protocol):
    """Named scalar field storing one value per point."""

    @property
    def name(self) -> str: ...
    def size(self) -> int: ...
    def get_value(self, index: int) -> ScalarType: ...


@runtime_checkable
class GenericCloud(Protocol):
    """
    Population of points, each yielding one scalar value.

    The scalar value is read from the cloud's current output scalar field.
    """

    def size(self) -> int: ...
    def get_point_scalar_value(self, index: int) -> ScalarType: ...


class ArrayScalarField:
    """
    Scalar field backed by a one-dimensional NumPy array.

    Parameters
    ----------
    name : str
        Field name (e.g. ``"C2C distances"``).
    values : array-like
        Field values. Floating point arrays are referenced, not copied.

    Raises
    ------
    ValueError
        If values are not one-dimensional.
    """

    __slots__ = ("_name", "_values")

    def __init__(self, name: str, values: npt.ArrayLike) -> None:
        data = np.asarray(values)
        if data.ndim != 1:
            raise ValueError("ArrayScalarField expects a 1D array of values.")
        if not np.issubdtype(data.dtype, np.floating):
            data = data.astype(np.float64)
        self._name = name
        self._values = data

    @property
    def name(self) -> str:
        return self._name

    @property
    def values(self) -> npt.NDArray[np.floating[Any]]:
        """Backing array (shared, not a copy)."""
        return self._values

    def size(self) -> int:
        return int(self._values.shape[0])

    def get_value(self, index: int) -> ScalarType:
        return float(self._values[index])

    def set_value(self, index: int, value: ScalarType) -> None:
        self._values[index] = value

    def __len__(self) -> int:
        return self.size()

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> npt.NDArray[Any]:
        if dtype is None or np.dtype(dtype) == self._values.dtype:
            return self._values
        return self._values.astype(dtype)

    def __repr__(self) -> str:
        return f"ArrayScalarField(name={self._name!r}, size={self.size()})"


class ScalarFieldCloud:
    """
    Minimal point population with named scalar fields.

    Only the population size and the per-point scalar values matter to the
    distributions; coordinates are optional and never read.

    Parameters
    ----------
    size : int
        Number of points.
    fields : Iterable[ScalarField], optional
        Scalar fields attached to the points. Each must hold ``size`` values.
    points : array-like, optional
        Point coordinates of shape ``(size, 3)``.

    Raises
    ------
    ValueError
        If a field or the coordinates do not match the number of points.
    """

    def __init__(
        self,
        size: int,
        fields: Iterable[ScalarField] = (),
        points: npt.ArrayLike | None = None,
    ) -> None:
        if size < 0:
            raise ValueError("size must be non-negative.")
        self._size = int(size)
        self._fields: dict[str, ScalarField] = {}
        self._output: ScalarField | None = None
        self.points = None if points is None else np.asarray(points, dtype=np.float64)
        if self.points is not None and self.points.shape != (self._size, 3):
            raise ValueError(f"points must have shape ({self._size}, 3).")
        for field in fields:
            self.add_scalar_field(field)

    @classmethod
    def from_values(cls, values: npt.ArrayLike, name: str = "values") -> ScalarFieldCloud:
        """
        Build a cloud with a single scalar field enabled as output.

        Parameters
        ----------
        values : array-like
            One scalar value per point.
        name : str, default "values"
            Name of the created field.
        """
        field = ArrayScalarField(name, values)
        cloud = cls(field.size(), fields=[field])
        cloud.set_output_scalar_field(name)
        return cloud

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    @property
    def scalar_field_names(self) -> list[str]:
        return list(self._fields)

    def add_scalar_field(self, field: ScalarField) -> None:
        """
        Attach a scalar field to the points.

        Raises
        ------
        ValueError
            If a field with the same name exists or the size does not match.
        """
        if field.name in self._fields:
            raise ValueError(f"Scalar field '{field.name}' is already attached.")
        if field.size() != self._size:
            raise ValueError(
                f"Scalar field '{field.name}' holds {field.size()} values, "
                f"expected {self._size}."
            )
        self._fields[field.name] = field

    def get_scalar_field(self, name: str) -> ScalarField:
        """
        Fetch an attached scalar field by name.

        Raises
        ------
        KeyError
            If no field with this name is attached.
        """
        return self._fields[name]

    def set_output_scalar_field(self, name: str | None) -> None:
        """Enable the named field as output channel (``None`` disables it)."""
        self._output = None if name is None else self._fields[name]

    @property
    def output_scalar_field(self) -> ScalarField | None:
        return self._output

    def get_point_scalar_value(self, index: int) -> ScalarType:
        """
        Scalar value of a point read from the output scalar field.

        Raises
        ------
        RuntimeError
            If no output scalar field is enabled.
        """
        if self._output is None:
            raise RuntimeError("No output scalar field is enabled on the cloud.")
        return self._output.get_value(index)


__all__ = [
    "ScalarField",
    "GenericCloud",
    "ArrayScalarField",
    "ScalarFieldCloud",
]
