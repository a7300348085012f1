# -*- coding: utf-8 -*-
"""
Lag Tables - Immutable sparse causal neighborhoods for helix filters.

A ``LagSet`` is an ordered list of distinct integer lag tuples in 1, 2 or
3 dimensions. Lag ``j`` pairs with filter coefficient ``a[j]``. The first
lag is always the zero lag (the "diagonal" coefficient ``a[0]``) and
every other lag must be strictly causal, i.e. lexicographically positive
when compared as ``(lag3, lag2, lag1)``:

- ``lag3 > 0``, or
- ``lag3 == 0`` and ``lag2 > 0``, or
- ``lag3 == lag2 == 0`` and ``lag1 > 0``.

Lags in the 1st dimension shift along the last (fastest) array axis, lags
in the 2nd dimension along axis ``-2`` and lags in the 3rd dimension along
axis ``-3``. In two dimensions such neighborhoods are known as
non-symmetric half-plane (NSHP) filters; they correspond to one-sided
filters on a helix (Claerbout, 1998).

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
from typing import Iterator, Optional, Sequence, Tuple

# Third-party
import numpy as np

# helixdsp internal
from helixdsp.exceptions import InvalidArgumentError, InvalidLagSetError


def _as_lag_array(values: Sequence[int], name: str) -> np.ndarray:
    arr = np.asarray(values)
    if arr.ndim != 1:
        raise InvalidLagSetError(
            f"{name} must be a 1D sequence of integers, got shape {arr.shape}"
        )
    if arr.size and not np.issubdtype(arr.dtype, np.integer):
        if not np.all(np.isfinite(arr)) or np.any(arr != np.round(arr)):
            raise InvalidLagSetError(f"{name} must contain only integers")
    return arr.astype(np.int64)


class LagSet:
    """Immutable table of causal filter lags.

    Parameters
    ----------
    lag1 : sequence of int
        Lags in the 1st dimension (last array axis).
    lag2 : sequence of int, optional
        Lags in the 2nd dimension (axis ``-2``). Omit for a 1D lag set.
    lag3 : sequence of int, optional
        Lags in the 3rd dimension (axis ``-3``). Requires ``lag2``.

    Raises
    ------
    InvalidLagSetError
        If the lag arrays are empty or differ in length, if ``lag3`` is
        given without ``lag2``, if any lag tuple is repeated, if the first
        tuple is not the zero lag, or if any other tuple is not causal.

    Examples
    --------
    A 2D lag set with five lags on the current row and five on the row
    below:

    >>> lags = LagSet([0, 1, 2, 3, 4, -4, -3, -2, -1, 0],
    ...               [0, 0, 0, 0, 0, 1, 1, 1, 1, 1])
    >>> lags.ndim, len(lags)
    (2, 10)
    """

    __slots__ = ('_lags', '_ndim', '_min', '_max', '_hash')

    def __init__(
        self,
        lag1: Sequence[int],
        lag2: Optional[Sequence[int]] = None,
        lag3: Optional[Sequence[int]] = None,
    ) -> None:
        if lag3 is not None and lag2 is None:
            raise InvalidLagSetError("lag3 requires lag2")

        arrays = [_as_lag_array(lag1, 'lag1')]
        if lag2 is not None:
            arrays.append(_as_lag_array(lag2, 'lag2'))
        if lag3 is not None:
            arrays.append(_as_lag_array(lag3, 'lag3'))

        m = len(arrays[0])
        if m == 0:
            raise InvalidLagSetError("lag set must contain at least one lag")
        for name, arr in zip(('lag2', 'lag3'), arrays[1:]):
            if len(arr) != m:
                raise InvalidLagSetError(
                    f"{name} has length {len(arr)}, expected {m} "
                    f"(the length of lag1)"
                )

        ndim = len(arrays)
        table = np.zeros((m, 3), dtype=np.int64)
        for d, arr in enumerate(arrays):
            table[:, d] = arr

        if np.any(table[0] != 0):
            raise InvalidLagSetError(
                f"first lag must be zero, got {tuple(table[0, :ndim])}"
            )

        seen = set()
        for j in range(m):
            key = tuple(int(v) for v in table[j])
            if key in seen:
                raise InvalidLagSetError(
                    f"duplicate lag {key[:ndim]} at index {j}"
                )
            seen.add(key)
            if j > 0:
                l1, l2, l3 = key
                causal = l3 > 0 or (l3 == 0 and (l2 > 0 or (l2 == 0 and l1 > 0)))
                if not causal:
                    raise InvalidLagSetError(
                        f"lag {key[:ndim]} at index {j} is not causal"
                    )

        table.setflags(write=False)
        self._lags = table
        self._ndim = ndim
        self._min = tuple(int(v) for v in table.min(axis=0))
        self._max = tuple(int(v) for v in table.max(axis=0))
        self._hash = hash((ndim, table.tobytes()))

    @classmethod
    def from_tuples(cls, tuples: Sequence[Sequence[int]]) -> 'LagSet':
        """Build a lag set from a sequence of ``(lag1[, lag2[, lag3]])`` tuples.

        Parameters
        ----------
        tuples : sequence of sequence of int
            One tuple per lag, all of the same length (1, 2 or 3).

        Returns
        -------
        LagSet
        """
        rows = [tuple(t) for t in tuples]
        if not rows:
            raise InvalidLagSetError("lag set must contain at least one lag")
        width = len(rows[0])
        if width not in (1, 2, 3) or any(len(r) != width for r in rows):
            raise InvalidLagSetError(
                "lag tuples must all have the same length of 1, 2 or 3"
            )
        columns = list(zip(*rows))
        return cls(*columns)

    # ── Accessors ───────────────────────────────────────────────────────

    @property
    def ndim(self) -> int:
        """Number of lag dimensions (1, 2 or 3)."""
        return self._ndim

    @property
    def lags(self) -> np.ndarray:
        """Read-only lag table of shape ``(m, 3)`` ordered ``(lag1, lag2, lag3)``.

        Lags in dimensions beyond :attr:`ndim` are zero.
        """
        return self._lags

    @property
    def lag1(self) -> np.ndarray:
        """Copy of the lags in the 1st dimension."""
        return self._lags[:, 0].copy()

    @property
    def lag2(self) -> np.ndarray:
        """Copy of the lags in the 2nd dimension (zeros for 1D lag sets)."""
        return self._lags[:, 1].copy()

    @property
    def lag3(self) -> np.ndarray:
        """Copy of the lags in the 3rd dimension (zeros below 3D)."""
        return self._lags[:, 2].copy()

    @property
    def min_lag(self) -> Tuple[int, int, int]:
        """Minimum lag per dimension, ordered ``(lag1, lag2, lag3)``."""
        return self._min

    @property
    def max_lag(self) -> Tuple[int, int, int]:
        """Maximum lag per dimension, ordered ``(lag1, lag2, lag3)``."""
        return self._max

    def __len__(self) -> int:
        return self._lags.shape[0]

    def __iter__(self) -> Iterator[Tuple[int, ...]]:
        for row in self._lags:
            yield tuple(int(v) for v in row[:self._ndim])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LagSet):
            return NotImplemented
        return (
            self._ndim == other._ndim
            and np.array_equal(self._lags, other._lags)
        )

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        names = ('lag1', 'lag2', 'lag3')[:self._ndim]
        parts = ', '.join(
            f"{name}={self._lags[:, d].tolist()}"
            for d, name in enumerate(names)
        )
        return f"LagSet({parts})"


def impulse_coefficients(m: int) -> np.ndarray:
    """Unit-impulse coefficients ``[1, 0, ..., 0]`` for a lag set of length *m*."""
    if m < 1:
        raise InvalidArgumentError(f"m must be >= 1, got {m}")
    a = np.zeros(m, dtype=np.float64)
    a[0] = 1.0
    return a


def check_coefficients(lags: LagSet, coefficients: Sequence[float]) -> np.ndarray:
    """Validate coefficients against *lags* and return a read-only float64 copy.

    Parameters
    ----------
    lags : LagSet
        The lag table the coefficients are co-indexed with.
    coefficients : sequence of float
        One coefficient per lag.

    Returns
    -------
    np.ndarray
        Read-only float64 array of shape ``(len(lags),)``.

    Raises
    ------
    InvalidArgumentError
        If the length differs from ``len(lags)`` or any value is not finite.
    """
    a = np.array(coefficients, dtype=np.float64)
    if a.ndim != 1 or a.shape[0] != len(lags):
        raise InvalidArgumentError(
            f"expected {len(lags)} coefficients, got shape {a.shape}"
        )
    if not np.all(np.isfinite(a)):
        raise InvalidArgumentError("coefficients must be finite")
    a.setflags(write=False)
    return a
