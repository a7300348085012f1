# -*- coding: utf-8 -*-
"""
Local Causal Filter - Causal filter with spatially varying coefficients.

Like ``CausalFilter``, but the coefficients may differ at every output
sample. They are obtained from a ``CoefficientProvider`` whose
``coefficients_at(index)`` is called once per output sample, where
``index`` is the numpy index tuple of that sample (``x[index]``). The
provider must be a pure function of the index; the adjoint identities
only hold when repeated lookups of the same index agree.

``apply`` and ``apply_inverse`` gather inputs with the coefficients of the
output sample. Their transposes scatter each input with the coefficients
of that input's own sample, which makes them the exact adjoints:

    apply            y[i] = sum_j a_j(i) x[i - lag_j]
    apply_transpose  y[k] = sum_j a_j(k + lag_j) x[k + lag_j]

All four operators accept ``out`` aliasing the input. The loops write to
float64 scratch and copy into ``out`` only after the scan completes, so
``apply_inverse_transpose``, which accumulates into its output, never
reads a sample it has overwritten, and ``out`` is unchanged when a scan
raises.

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
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence, Tuple, Union

# Third-party
import numpy as np

# helixdsp internal
from helixdsp.exceptions import (
    DimensionMismatchError,
    InvalidArgumentError,
    SingularFilterError,
)
from helixdsp.filters._validation import check_sampled_array
from helixdsp.filters.base import (
    APPLY,
    APPLY_INVERSE,
    APPLY_INVERSE_TRANSPOSE,
    APPLY_TRANSPOSE,
    CausalOperator,
)
from helixdsp.filters.lags import LagSet


Index = Tuple[int, ...]


# ── Coefficient providers ───────────────────────────────────────────────


class CoefficientProvider(ABC):
    """Source of per-sample filter coefficients for ``LocalCausalFilter``."""

    @abstractmethod
    def coefficients_at(self, index: Index) -> Sequence[float]:
        """Return the coefficients for the output sample at *index*.

        Parameters
        ----------
        index : tuple of int
            Numpy index of the output sample, one entry per array axis.

        Returns
        -------
        sequence of float
            One coefficient per lag.
        """
        ...

    def check_shape(self, shape: Tuple[int, ...], m: int) -> None:
        """Hook to reject arrays this provider cannot serve. Default no-op."""


class CallableCoefficients(CoefficientProvider):
    """Wrap a plain function ``func(index) -> coefficients``."""

    def __init__(self, func: Callable[[Index], Sequence[float]]) -> None:
        if not callable(func):
            raise InvalidArgumentError("func must be callable")
        self._func = func

    def coefficients_at(self, index: Index) -> Sequence[float]:
        return self._func(index)


class ConstantCoefficients(CoefficientProvider):
    """The same coefficients at every sample.

    Parameters
    ----------
    coefficients : sequence of float
        One coefficient per lag.
    """

    def __init__(self, coefficients: Sequence[float]) -> None:
        a = np.array(coefficients, dtype=np.float64)
        if a.ndim != 1 or a.size == 0:
            raise InvalidArgumentError(
                f"coefficients must be a non-empty 1D sequence, got shape {a.shape}"
            )
        a.setflags(write=False)
        self._a = a

    def coefficients_at(self, index: Index) -> np.ndarray:
        return self._a


class CoefficientField(CoefficientProvider):
    """Table of coefficients with one row per sample.

    Parameters
    ----------
    table : np.ndarray
        Array of shape ``(*shape, m)``: ``table[index]`` holds the
        ``m`` coefficients for the sample at ``index``.
    """

    def __init__(self, table: np.ndarray) -> None:
        table = np.array(table, dtype=np.float64)
        if table.ndim < 2 or table.ndim > 4:
            raise InvalidArgumentError(
                f"table must have shape (*shape, m) with 1 to 3 sample axes, "
                f"got {table.shape}"
            )
        table.setflags(write=False)
        self._table = table

    @property
    def table(self) -> np.ndarray:
        """Read-only coefficient table."""
        return self._table

    def coefficients_at(self, index: Index) -> np.ndarray:
        return self._table[index]

    def check_shape(self, shape: Tuple[int, ...], m: int) -> None:
        if self._table.shape != tuple(shape) + (m,):
            raise DimensionMismatchError(
                f"coefficient table has shape {self._table.shape}, "
                f"expected {tuple(shape) + (m,)}"
            )


class IndexedCoefficients(CoefficientProvider):
    """Bank of coefficient sets selected per sample by an integer index.

    The sample at ``index`` uses ``bank[selector[index]]``. This is the
    compact form of a field where only a few distinct filters occur, such
    as a bank of minimum-phase factors chosen by a region label.

    Parameters
    ----------
    bank : np.ndarray
        Array of shape ``(k, m)``: ``k`` coefficient sets of ``m``
        coefficients each.
    selector : np.ndarray
        Integer array with the shape of the filtered arrays and values in
        ``[0, k)``.

    Raises
    ------
    InvalidArgumentError
        If the bank is not a finite 2D array, or the selector is not an
        integer array of 1 to 3 axes with values in ``[0, k)``.
    """

    def __init__(self, bank: np.ndarray, selector: np.ndarray) -> None:
        bank = np.array(bank, dtype=np.float64)
        if bank.ndim != 2 or bank.shape[0] == 0 or bank.shape[1] == 0:
            raise InvalidArgumentError(
                f"bank must have shape (k, m) with k, m >= 1, got {bank.shape}"
            )
        if not np.all(np.isfinite(bank)):
            raise InvalidArgumentError("bank coefficients must be finite")

        selector = np.array(selector)
        if not np.issubdtype(selector.dtype, np.integer):
            raise InvalidArgumentError(
                f"selector must be an integer array, got dtype {selector.dtype}"
            )
        if selector.ndim < 1 or selector.ndim > 3:
            raise InvalidArgumentError(
                f"selector must have 1 to 3 axes, got {selector.ndim}"
            )
        if selector.size and (selector.min() < 0 or selector.max() >= bank.shape[0]):
            raise InvalidArgumentError(
                f"selector values must lie in [0, {bank.shape[0]}), "
                f"got [{selector.min()}, {selector.max()}]"
            )
        bank.setflags(write=False)
        selector.setflags(write=False)
        self._bank = bank
        self._selector = selector

    @classmethod
    def from_filters(cls, filters: Sequence, selector: np.ndarray) -> 'IndexedCoefficients':
        """Build the bank from fixed filters that share one lag set.

        Parameters
        ----------
        filters : sequence of CausalFilter
            Bank entries; ``selector`` value ``k`` picks ``filters[k]``.
        selector : np.ndarray
            Integer bank index per sample.

        Raises
        ------
        InvalidArgumentError
            If ``filters`` is empty or the lag sets differ.
        """
        filters = list(filters)
        if not filters:
            raise InvalidArgumentError("filters must not be empty")
        lags = filters[0].lags
        if any(f.lags != lags for f in filters[1:]):
            raise InvalidArgumentError("all filters must share one LagSet")
        return cls(np.stack([f.coefficients for f in filters]), selector)

    @property
    def bank(self) -> np.ndarray:
        """Read-only ``(k, m)`` coefficient bank."""
        return self._bank

    @property
    def selector(self) -> np.ndarray:
        """Read-only per-sample bank index."""
        return self._selector

    def coefficients_at(self, index: Index) -> np.ndarray:
        return self._bank[self._selector[index]]

    def check_shape(self, shape: Tuple[int, ...], m: int) -> None:
        if self._selector.shape != tuple(shape):
            raise DimensionMismatchError(
                f"selector has shape {self._selector.shape}, "
                f"expected {tuple(shape)}"
            )
        if self._bank.shape[1] != m:
            raise DimensionMismatchError(
                f"bank holds {self._bank.shape[1]} coefficients per set, "
                f"expected {m}"
            )


Coefficients = Union[CoefficientProvider, Callable[[Index], Sequence[float]]]


def as_provider(
    coefficients: Coefficients,
) -> CoefficientProvider:
    """Coerce a provider or a plain callable into a ``CoefficientProvider``."""
    if isinstance(coefficients, CoefficientProvider):
        return coefficients
    if callable(coefficients):
        return CallableCoefficients(coefficients)
    raise InvalidArgumentError(
        f"expected a CoefficientProvider or callable, "
        f"got {type(coefficients).__name__}"
    )


# ── Loops ───────────────────────────────────────────────────────────────


class _Lookup:
    """Per-call coefficient lookup with validation.

    Converts volume indices back to the caller's index tuple and checks
    every returned row has one coefficient per lag.
    """

    def __init__(self, provider: CoefficientProvider, ndim: int, m: int) -> None:
        self._provider = provider
        self._skip = 3 - ndim
        self._m = m

    def __call__(self, i3: int, i2: int, i1: int) -> np.ndarray:
        index = (i3, i2, i1)[self._skip:]
        a = np.asarray(self._provider.coefficients_at(index), dtype=np.float64)
        if a.shape != (self._m,):
            raise InvalidArgumentError(
                f"coefficients at {index} have shape {a.shape}, "
                f"expected ({self._m},)"
            )
        return a

    def leading(self, a: np.ndarray, i3: int, i2: int, i1: int) -> float:
        a0 = a[0]
        if a0 == 0.0 or not np.isfinite(a0):
            index = (i3, i2, i1)[self._skip:]
            raise SingularFilterError(
                f"zero-lag coefficient is {a0} at {index}; "
                f"filter is not invertible"
            )
        return a0


def _local_apply(x, y, lag1, lag2, lag3, get):
    n3, n2, n1 = x.shape
    m = len(lag1)
    for i3 in range(n3 - 1, -1, -1):
        for i2 in range(n2 - 1, -1, -1):
            for i1 in range(n1 - 1, -1, -1):
                a = get(i3, i2, i1)
                yi = a[0] * x[i3, i2, i1]
                for j in range(1, m):
                    k1 = i1 - lag1[j]
                    k2 = i2 - lag2[j]
                    k3 = i3 - lag3[j]
                    if 0 <= k1 < n1 and 0 <= k2 < n2 and 0 <= k3 < n3:
                        yi += a[j] * x[k3, k2, k1]
                y[i3, i2, i1] = yi


def _local_apply_transpose(x, y, lag1, lag2, lag3, get):
    n3, n2, n1 = x.shape
    m = len(lag1)
    for i3 in range(n3):
        for i2 in range(n2):
            for i1 in range(n1):
                a = get(i3, i2, i1)
                xi = x[i3, i2, i1]
                y[i3, i2, i1] = a[0] * xi
                for j in range(1, m):
                    k1 = i1 - lag1[j]
                    k2 = i2 - lag2[j]
                    k3 = i3 - lag3[j]
                    if 0 <= k1 < n1 and 0 <= k2 < n2 and 0 <= k3 < n3:
                        y[k3, k2, k1] += a[j] * xi


def _local_apply_inverse(y, x, lag1, lag2, lag3, get):
    n3, n2, n1 = y.shape
    m = len(lag1)
    for i3 in range(n3):
        for i2 in range(n2):
            for i1 in range(n1):
                a = get(i3, i2, i1)
                a0 = get.leading(a, i3, i2, i1)
                xi = y[i3, i2, i1]
                for j in range(1, m):
                    k1 = i1 - lag1[j]
                    k2 = i2 - lag2[j]
                    k3 = i3 - lag3[j]
                    if 0 <= k1 < n1 and 0 <= k2 < n2 and 0 <= k3 < n3:
                        xi -= a[j] * x[k3, k2, k1]
                x[i3, i2, i1] = xi / a0


def _local_apply_inverse_transpose(y, x, lag1, lag2, lag3, get):
    # x doubles as the accumulator for contributions of later samples
    x[...] = 0.0
    n3, n2, n1 = y.shape
    m = len(lag1)
    for i3 in range(n3 - 1, -1, -1):
        for i2 in range(n2 - 1, -1, -1):
            for i1 in range(n1 - 1, -1, -1):
                a = get(i3, i2, i1)
                a0 = get.leading(a, i3, i2, i1)
                xi = (y[i3, i2, i1] - x[i3, i2, i1]) / a0
                x[i3, i2, i1] = xi
                for j in range(1, m):
                    k1 = i1 - lag1[j]
                    k2 = i2 - lag2[j]
                    k3 = i3 - lag3[j]
                    if 0 <= k1 < n1 and 0 <= k2 < n2 and 0 <= k3 < n3:
                        x[k3, k2, k1] += a[j] * xi


_LOOPS = {
    APPLY: _local_apply,
    APPLY_TRANSPOSE: _local_apply_transpose,
    APPLY_INVERSE: _local_apply_inverse,
    APPLY_INVERSE_TRANSPOSE: _local_apply_inverse_transpose,
}


# ── Class ────────────────────────────────────────────────────────────────


class LocalCausalFilter(CausalOperator):
    """Causal filter whose coefficients vary from sample to sample.

    Parameters
    ----------
    lags : LagSet
        Causal neighborhood shared by all samples.

    Examples
    --------
    Alternate between two 1D filters on even and odd samples:

    >>> ar = [1.0, -1.8, 0.81]
    >>> ak = [1.0, -1.6, 0.64]
    >>> lcf = LocalCausalFilter(LagSet([0, 1, 2]))
    >>> y = lcf.apply(lambda idx: ar if idx[0] % 2 == 0 else ak, x)
    """

    IN_PLACE_SAFE = {
        APPLY: True,
        APPLY_TRANSPOSE: True,
        APPLY_INVERSE: True,
        APPLY_INVERSE_TRANSPOSE: False,
    }

    def __init__(self, lags: LagSet) -> None:
        super().__init__(lags)
        table = lags.lags
        self._lag1 = [int(v) for v in table[:, 0]]
        self._lag2 = [int(v) for v in table[:, 1]]
        self._lag3 = [int(v) for v in table[:, 2]]

    def apply(
        self,
        coefficients: Coefficients,
        x: np.ndarray,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Apply this filter.

        Parameters
        ----------
        coefficients : CoefficientProvider or callable
            Per-sample coefficients; a callable receives the index tuple.
        x : np.ndarray
            Input array, 1D, 2D or 3D (rank at least ``lags.ndim``).
        out : np.ndarray, optional
            Output array of the same shape. May be ``x``.

        Returns
        -------
        np.ndarray
            Filtered array.
        """
        return self._run(APPLY, coefficients, x, out)

    def apply_transpose(
        self,
        coefficients: Coefficients,
        x: np.ndarray,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Apply the transpose (adjoint) of this filter. May be in place."""
        return self._run(APPLY_TRANSPOSE, coefficients, x, out)

    def apply_inverse(
        self,
        coefficients: Coefficients,
        y: np.ndarray,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Apply the recursive inverse of this filter. May be in place.

        Raises
        ------
        SingularFilterError
            If the zero-lag coefficient is zero at any sample. ``out`` is
            left unchanged.
        """
        return self._run(APPLY_INVERSE, coefficients, y, out)

    def apply_inverse_transpose(
        self,
        coefficients: Coefficients,
        y: np.ndarray,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Apply the inverse of the transpose of this filter.

        ``out`` may alias ``y``.

        Raises
        ------
        SingularFilterError
            If the zero-lag coefficient is zero at any sample. ``out`` is
            left unchanged.
        """
        return self._run(APPLY_INVERSE_TRANSPOSE, coefficients, y, out)

    def _run(self, operation, coefficients, x, out):
        provider = as_provider(coefficients)
        x = check_sampled_array(x, self._lags.ndim)
        m = len(self._lags)
        provider.check_shape(x.shape, m)
        lookup = _Lookup(provider, x.ndim, m)
        return self._execute(
            operation, _LOOPS[operation], x, out,
            self._lag1, self._lag2, self._lag3, lookup,
            write_through=False,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(lags={self._lags!r})"

