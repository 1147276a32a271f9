"""
Numerical Fallbacks
===================

Scalar helpers used when a distribution family does not provide a closed
form:

- ``ppf_from_cdf`` – inverse of a monotone ``cdf`` by bracket expansion and
  bisection;
- ``cdf_from_pdf`` – ``cdf`` obtained by integrating a ``pdf`` from the
  support origin.

Notes
-----
All callables are **scalar** (``float -> float``). Vectorization is handled by
the caller.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from math import isfinite
from typing import TYPE_CHECKING, Any, TypeAlias, cast

import numpy as np
from mypy_extensions import KwArg
from scipy import integrate as _sp_integrate

if TYPE_CHECKING:
    ScalarFunc: TypeAlias = Callable[[float], float]


def ppf_from_cdf(
    cdf: ScalarFunc,
    *,
    most_left: bool = False,
    x0: float = 0.0,
    init_step: float = 1.0,
    expand_factor: float = 2.0,
    max_expand: int = 60,
    x_tol: float = 1e-12,
    max_iter: int = 200,
) -> Callable[[float, KwArg(Any)], float]:
    """
    Build a scalar ``ppf`` from a scalar ``cdf`` using bracket expansion
    and a bisection search.

    Parameters
    ----------
    cdf : Callable[[float], float]
        Monotone cdf in ``[-inf, +inf] -> [0, 1]``.
    most_left : bool, default False
        If ``True``, return the leftmost quantile for flat cdf plateaus.
    x0 : float, default 0.0
        Initial bracket center.
    init_step : float, default 1.0
        Initial half-width for the bracket.
    expand_factor : float, default 2.0
        Multiplicative factor for exponential bracket growth.
    max_expand : int, default 60
        Maximum expansions while searching for a valid bracket.
    x_tol : float, default 1e-12
        Relative tolerance in ``x`` for the stopping criterion.
    max_iter : int, default 200
        Maximum iterations for the bisection refinement.

    Returns
    -------
    Callable[[float], float]
        Scalar ``ppf`` such that ``cdf(ppf(q)) ≈ q``.

    Notes
    -----
    The extreme tail queries are clamped: ``q <= 0`` maps to ``-inf``,
    ``q >= 1`` maps to ``+inf``. NaN maps to NaN.
    """

    def ok(q: float, FL: float, FR: float) -> bool:
        if most_left:
            return (q > FL) and (q <= FR)
        return (q >= FL) and (q < FR)

    def _expand_bracket(q: float) -> tuple[float, float]:
        step = init_step
        L = x0 - step
        R = x0 + step
        FL = float(cdf(L))
        FR = float(cdf(R))

        for _ in range(max_expand):
            if ok(q, FL, FR):
                break
            grow_left = not ((q > FL) if most_left else (q >= FL))
            grow_right = not ((q <= FR) if most_left else (q < FR))

            if grow_left:
                step *= expand_factor
                L -= step
                FL = float(cdf(L))
            if grow_right:
                step *= expand_factor
                R += step
                FR = float(cdf(R))

        return L, R

    def _ppf(q: float, **kwargs: Any) -> float:
        if q != q:
            return float("nan")
        if q <= 0.0:
            return float("-inf")
        if q >= 1.0:
            return float("inf")

        L, R = _expand_bracket(q)

        it = 0
        while it < max_iter and x_tol * (1.0 + max(abs(L), abs(R))) < (R - L):
            M = 0.5 * (L + R)
            FM = float(cdf(M))

            if most_left:
                if q <= FM:
                    R = M
                else:
                    L = M
            else:
                if q < FM:
                    R = M
                else:
                    L = M
            it += 1

        return R if most_left else L

    return _ppf


def cdf_from_pdf(
    pdf: ScalarFunc, *, origin: float = float("-inf")
) -> Callable[[float, KwArg(Any)], float]:
    """
    Build a scalar ``cdf`` by integrating a scalar ``pdf``.

    Parameters
    ----------
    pdf : Callable[[float], float]
        Density, zero outside the support.
    origin : float, default -inf
        Lower support bound the mass is integrated from.

    Returns
    -------
    Callable[[float], float]
        ``cdf`` clipped to ``[0, 1]``.
    """

    def _cdf(x: float, **options: Any) -> float:
        if x != x:
            return float("nan")
        if x <= origin:
            return 0.0
        if not isfinite(x):
            return 1.0
        val, _ = _sp_integrate.quad(lambda t: float(pdf(t)), origin, x, limit=200)
        return float(np.clip(val, 0.0, 1.0))

    return cast(Callable[[float, KwArg(Any)], float], _cdf)


__all__ = [
    "ppf_from_cdf",
    "cdf_from_pdf",
]
