# -*- coding: utf-8 -*-
"""
Causal Filter Kernels - Sample-by-sample loops for fixed-coefficient filters.

Each kernel operates on 3D float64 volumes ``(n3, n2, n1)``; 1D and 2D
arrays are passed as views with leading unit axes. Lags are given as three
int64 arrays ``lag1, lag2, lag3`` and coefficients as a float64 array
``a`` with ``a[0]`` the zero-lag coefficient. Samples outside the volume
are treated as zero.

Scan orders make every kernel safe to run with ``x`` and ``y`` being the
same array:

- ``apply`` reads only lexicographically earlier inputs, so it scans
  backwards.
- ``apply_transpose`` reads only later inputs, so it scans forwards.
- ``apply_inverse`` depends on earlier outputs, so it scans forwards.
- ``apply_inverse_transpose`` depends on later outputs, so it scans
  backwards.

When numba is available, the loops are JIT-compiled; otherwise the same
functions run as plain Python.

Dependencies
------------
numba (optional, for JIT-compiled loops)

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import logging
from typing import Callable, Dict

# Third-party
import numpy as np

# Optional numba acceleration
try:
    import numba as nb
    _HAS_NUMBA = True
except ImportError:
    _HAS_NUMBA = False

logger = logging.getLogger(__name__)


# ── Plain loops ─────────────────────────────────────────────────────────


def _apply(x, y, lag1, lag2, lag3, a):
    """y[i] = sum_j a[j] * x[i - lag_j], scanned backwards."""
    n3, n2, n1 = x.shape
    m = a.shape[0]
    a0 = a[0]
    for i3 in range(n3 - 1, -1, -1):
        for i2 in range(n2 - 1, -1, -1):
            for i1 in range(n1 - 1, -1, -1):
                yi = a0 * x[i3, i2, i1]
                for j in range(1, m):
                    k1 = i1 - lag1[j]
                    k2 = i2 - lag2[j]
                    k3 = i3 - lag3[j]
                    if (0 <= k1 and k1 < n1 and 0 <= k2 and k2 < n2
                            and 0 <= k3 and k3 < n3):
                        yi += a[j] * x[k3, k2, k1]
                y[i3, i2, i1] = yi


def _apply_transpose(x, y, lag1, lag2, lag3, a):
    """y[i] = sum_j a[j] * x[i + lag_j], scanned forwards."""
    n3, n2, n1 = x.shape
    m = a.shape[0]
    a0 = a[0]
    for i3 in range(n3):
        for i2 in range(n2):
            for i1 in range(n1):
                yi = a0 * x[i3, i2, i1]
                for j in range(1, m):
                    k1 = i1 + lag1[j]
                    k2 = i2 + lag2[j]
                    k3 = i3 + lag3[j]
                    if (0 <= k1 and k1 < n1 and 0 <= k2 and k2 < n2
                            and 0 <= k3 and k3 < n3):
                        yi += a[j] * x[k3, k2, k1]
                y[i3, i2, i1] = yi


def _apply_inverse(y, x, lag1, lag2, lag3, a):
    """x[i] = (y[i] - sum_{j>0} a[j] * x[i - lag_j]) / a[0], scanned forwards."""
    n3, n2, n1 = y.shape
    m = a.shape[0]
    a0i = 1.0 / a[0]
    for i3 in range(n3):
        for i2 in range(n2):
            for i1 in range(n1):
                xi = y[i3, i2, i1]
                for j in range(1, m):
                    k1 = i1 - lag1[j]
                    k2 = i2 - lag2[j]
                    k3 = i3 - lag3[j]
                    if (0 <= k1 and k1 < n1 and 0 <= k2 and k2 < n2
                            and 0 <= k3 and k3 < n3):
                        xi -= a[j] * x[k3, k2, k1]
                x[i3, i2, i1] = xi * a0i


def _apply_inverse_transpose(y, x, lag1, lag2, lag3, a):
    """x[i] = (y[i] - sum_{j>0} a[j] * x[i + lag_j]) / a[0], scanned backwards."""
    n3, n2, n1 = y.shape
    m = a.shape[0]
    a0i = 1.0 / a[0]
    for i3 in range(n3 - 1, -1, -1):
        for i2 in range(n2 - 1, -1, -1):
            for i1 in range(n1 - 1, -1, -1):
                xi = y[i3, i2, i1]
                for j in range(1, m):
                    k1 = i1 + lag1[j]
                    k2 = i2 + lag2[j]
                    k3 = i3 + lag3[j]
                    if (0 <= k1 and k1 < n1 and 0 <= k2 and k2 < n2
                            and 0 <= k3 and k3 < n3):
                        xi -= a[j] * x[k3, k2, k1]
                x[i3, i2, i1] = xi * a0i


KERNELS: Dict[str, Callable] = {
    'apply': _apply,
    'apply_transpose': _apply_transpose,
    'apply_inverse': _apply_inverse,
    'apply_inverse_transpose': _apply_inverse_transpose,
}


# ── Numba-accelerated loops ─────────────────────────────────────────────


if _HAS_NUMBA:
    _NB_KERNELS: Dict[str, Callable] = {
        name: nb.njit(cache=True)(func) for name, func in KERNELS.items()
    }
else:
    _NB_KERNELS = {}


def get_kernel(operation: str, use_numba: bool = True) -> Callable:
    """Return the loop implementing *operation*.

    Parameters
    ----------
    operation : str
        One of ``'apply'``, ``'apply_transpose'``, ``'apply_inverse'``,
        ``'apply_inverse_transpose'``.
    use_numba : bool
        Prefer the JIT-compiled loop when numba is installed.

    Returns
    -------
    Callable
        ``kernel(src, dst, lag1, lag2, lag3, a)``.
    """
    if use_numba and _HAS_NUMBA:
        return _NB_KERNELS[operation]
    return KERNELS[operation]


def has_numba() -> bool:
    """Whether numba is installed and JIT-compiled kernels are available."""
    return _HAS_NUMBA


logger.debug("Causal filter kernels: numba %s",
             "enabled" if _HAS_NUMBA else "unavailable")
