"""
Scalar Value Sources
====================

This module defines the read-only view used to feed values to
:meth:`GenericDistribution.compute_parameters`:

- :class:`ScalarValueSource` protocol – size plus indexed access.
- :class:`ScalarFieldSource` – wraps a scalar field owned elsewhere.
- :class:`SequenceSource` – wraps a plain sequence or a NumPy array.

Notes
-----
- Sources borrow the storage they wrap: they never copy or mutate it, and
  must not outlive it.
- Index access is only defined for ``0 <= index < size()``; no extra bounds
  check is performed beyond what the backing storage does itself.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from typing import Any

    import numpy.typing as npt

    from pysatl_cloudstats.cloud import ScalarField
    from pysatl_cloudstats.types import ScalarType


@runtime_checkable
class ScalarValueSource(Protocol):
    """
    Protocol for read-only scalar value containers.

    Only the size and indexed access are required. Sources that also expose
    an ``array`` property are read through it without copying.
    """

    def size(self) -> int: ...
    def value_at(self, index: int) -> ScalarType: ...


@runtime_checkable
class _ArraySource(Protocol):
    @property
    def array(self) -> npt.NDArray[np.floating[Any]]: ...


@runtime_checkable
class _SupportsArray(Protocol):
    def __array__(self, *args: Any, **kwargs: Any) -> npt.NDArray[Any]: ...


class ScalarFieldSource:
    """
    Scalar field viewed as a scalar value source.

    Parameters
    ----------
    field : ScalarField
        Borrowed field; must outlive the source.
    """

    __slots__ = ("_field",)

    def __init__(self, field: ScalarField) -> None:
        self._field = field

    def size(self) -> int:
        return self._field.size()

    def value_at(self, index: int) -> ScalarType:
        return self._field.get_value(index)

    def __len__(self) -> int:
        return self._field.size()

    @property
    def array(self) -> npt.NDArray[np.floating[Any]]:
        """Field values as an array (a view if the field supports the array protocol)."""
        if isinstance(self._field, _SupportsArray):
            return np.asarray(self._field)
        n = self._field.size()
        return np.fromiter((self._field.get_value(i) for i in range(n)), dtype=np.float64, count=n)


class SequenceSource:
    """
    Plain sequence viewed as a scalar value source.

    Parameters
    ----------
    values : Sequence[float] or numpy.ndarray
        Borrowed sequence; must outlive the source. NumPy arrays are never
        copied.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Sequence[ScalarType] | npt.NDArray[np.floating[Any]]) -> None:
        self._values = values

    def size(self) -> int:
        return len(self._values)

    def value_at(self, index: int) -> ScalarType:
        return float(self._values[index])

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[ScalarType]:
        """Iterate over the values."""
        yield from self._values

    @property
    def array(self) -> npt.NDArray[np.floating[Any]]:
        """Values as an array (the wrapped array itself when it is one)."""
        return np.asarray(self._values)


def as_array(source: ScalarValueSource) -> npt.NDArray[np.floating[Any]]:
    """
    Return the values of a source as a flat floating point array.

    Parameters
    ----------
    source : ScalarValueSource
        Source to read.

    Returns
    -------
    numpy.ndarray
        One-dimensional array. Floating point storage exposed through an
        ``array`` property is returned as is, integer storage is converted to
        ``float64``. Other sources are read value by value.
    """
    if isinstance(source, _ArraySource):
        arr = np.ravel(source.array)
    else:
        n = source.size()
        arr = np.fromiter((source.value_at(i) for i in range(n)), dtype=np.float64, count=n)
    if not np.issubdtype(arr.dtype, np.floating):
        arr = arr.astype(np.float64)
    return arr


__all__ = [
    "ScalarValueSource",
    "ScalarFieldSource",
    "SequenceSource",
    "as_array",
]
