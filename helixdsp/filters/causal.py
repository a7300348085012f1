# -*- coding: utf-8 -*-
"""
Causal Filter - Multidimensional causal filter with fixed coefficients.

A causal filter is linear and shift-invariant; each output sample depends
only on present and past input samples, where "past" means
lexicographically earlier in ``(i3, i2, i1)`` order. In two dimensions
these are non-symmetric half-plane (NSHP) filters.

The filter ``A`` is a stable all-zero filter. Its transpose ``A'`` is the
corresponding anti-causal filter. When ``A`` is minimum-phase, its inverse
is a stable recursive all-pole filter, and so is the inverse of ``A'``.
All four operators are provided:

    apply                    y[i] = sum_j a[j] x[i - lag_j]
    apply_transpose          y[i] = sum_j a[j] x[i + lag_j]
    apply_inverse            x[i] = (y[i] - sum_{j>0} a[j] x[i - lag_j]) / a[0]
    apply_inverse_transpose  x[i] = (y[i] - sum_{j>0} a[j] x[i + lag_j]) / a[0]

Samples outside the array are zero. All four operators may be applied in
place (``out`` may be the input array). Arithmetic is in float64; results
are narrowed to the floating dtype of the input.

Dependencies
------------
numba (optional, for JIT-compiled loops)

Reference
---------
J. Claerbout, "Multidimensional recursive filters via a helix,"
Geophysics, vol. 63, no. 5, pp. 1532-1541, 1998.

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
from typing import Optional, Sequence, Tuple

# Third-party
import numpy as np

# helixdsp internal
from helixdsp.exceptions import SingularFilterError
from helixdsp.filters._kernels import get_kernel
from helixdsp.filters.base import (
    APPLY,
    APPLY_INVERSE,
    APPLY_INVERSE_TRANSPOSE,
    APPLY_TRANSPOSE,
    CausalOperator,
)
from helixdsp.filters.lags import LagSet, check_coefficients, impulse_coefficients


class CausalFilter(CausalOperator):
    """Multidimensional causal filter with fixed coefficients.

    Parameters
    ----------
    lags : LagSet
        Causal neighborhood. ``lags.lags[0]`` is the zero lag.
    coefficients : sequence of float, optional
        One coefficient per lag. Defaults to the unit impulse
        ``[1, 0, ..., 0]``.
    use_numba : bool
        Use JIT-compiled loops when numba is installed. Default ``True``.

    Raises
    ------
    InvalidArgumentError
        If the number of coefficients differs from the number of lags or
        any coefficient is not finite.

    Examples
    --------
    The filter ``(1 - 0.9z)^2`` and its recursive inverse:

    >>> cf = CausalFilter(LagSet([0, 1, 2]), [1.0, -1.8, 0.81])
    >>> y = cf.apply(x)
    >>> x_back = cf.apply_inverse(y)
    """

    def __init__(
        self,
        lags: LagSet,
        coefficients: Optional[Sequence[float]] = None,
        use_numba: bool = True,
    ) -> None:
        super().__init__(lags)
        if coefficients is None:
            coefficients = impulse_coefficients(len(lags))
        self._a = check_coefficients(lags, coefficients)
        self._a_work = np.array(self._a)
        self._use_numba = use_numba
        table = lags.lags
        self._lag1 = np.ascontiguousarray(table[:, 0])
        self._lag2 = np.ascontiguousarray(table[:, 1])
        self._lag3 = np.ascontiguousarray(table[:, 2])

    @property
    def coefficients(self) -> np.ndarray:
        """Read-only filter coefficients, co-indexed with :attr:`lags`."""
        return self._a

    # ── Operators ───────────────────────────────────────────────────────

    def apply(self, x: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
        """Apply this filter.

        Parameters
        ----------
        x : np.ndarray
            Input array, 1D, 2D or 3D (rank at least ``lags.ndim``).
        out : np.ndarray, optional
            Output array of the same shape. May be ``x``.

        Returns
        -------
        np.ndarray
            Filtered array.
        """
        return self._run(APPLY, x, out)

    def apply_transpose(
        self, x: np.ndarray, out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Apply the transpose (adjoint) of this filter. May be in place."""
        return self._run(APPLY_TRANSPOSE, x, out)

    def apply_inverse(
        self, y: np.ndarray, out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Apply the recursive inverse of this filter. May be in place.

        Raises
        ------
        SingularFilterError
            If the zero-lag coefficient is zero.
        """
        self._check_invertible()
        return self._run(APPLY_INVERSE, y, out)

    def apply_inverse_transpose(
        self, y: np.ndarray, out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Apply the inverse of the transpose of this filter. May be in place.

        Raises
        ------
        SingularFilterError
            If the zero-lag coefficient is zero.
        """
        self._check_invertible()
        return self._run(APPLY_INVERSE_TRANSPOSE, y, out)

    def impulse_response(self, shape: Tuple[int, ...]) -> np.ndarray:
        """Apply this filter to a unit impulse at the center of *shape*.

        Parameters
        ----------
        shape : tuple of int
            Output shape; each extent should be odd so the center is a
            single sample.

        Returns
        -------
        np.ndarray
            float64 impulse response of the given shape.
        """
        x = np.zeros(shape, dtype=np.float64)
        x[tuple(n // 2 for n in shape)] = 1.0
        return self.apply(x, out=x)

    # ── Internals ───────────────────────────────────────────────────────

    def _check_invertible(self) -> None:
        if self._a[0] == 0.0:
            raise SingularFilterError(
                "zero-lag coefficient a[0] is zero; filter is not invertible"
            )

    def _run(self, operation: str, x: np.ndarray, out: Optional[np.ndarray]) -> np.ndarray:
        kernel = get_kernel(operation, self._use_numba)
        return self._execute(
            operation, kernel, x, out,
            self._lag1, self._lag2, self._lag3, self._a_work,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CausalFilter):
            return NotImplemented
        return (
            self._lags == other._lags
            and np.array_equal(self._a, other._a)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(lags={self._lags!r}, "
            f"coefficients={self._a.tolist()})"
        )
