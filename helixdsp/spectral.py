# -*- coding: utf-8 -*-
"""
Spectral Service - FFT plans and implied autocorrelations of causal filters.

``FftService`` wraps ``scipy.fft`` real transforms and caches the fast
transform length chosen for each requested length. A service is created
once, reused for many transforms and cleared explicitly (it is also a
context manager). Forward transforms are unscaled; inverse transforms
scale by ``1/N``.

``autocorrelation`` computes the autocorrelation ``A A'`` implied by a
causal filter as the inverse transform of ``|A(k)|^2``.
``correlation_misfit`` compares that autocorrelation with a target.

Arrays follow the library convention: the 1st dimension is the last
array axis. Autocorrelations are centred, with the zero lag at index
``n // 2`` of every axis.

Dependencies
------------
scipy

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
from typing import Dict, Optional, Sequence, Tuple

# Third-party
import numpy as np
from scipy import fft as sp_fft

# helixdsp internal
from helixdsp.exceptions import DimensionMismatchError, InvalidArgumentError
from helixdsp.filters._validation import MAX_NDIM
from helixdsp.filters.lags import LagSet, check_coefficients

logger = logging.getLogger(__name__)


class FftService:
    """Real-to-complex FFTs with cached fast transform lengths.

    Parameters
    ----------
    workers : int, optional
        Worker threads passed to ``scipy.fft``. ``None`` uses scipy's
        default.

    Examples
    --------
    >>> with FftService() as fft:
    ...     n = fft.fast_length(101)
    ...     X = fft.rfftn(x, (n,))
    ...     x_back = fft.irfftn(X, (n,))
    """

    def __init__(self, workers: Optional[int] = None) -> None:
        self._workers = workers
        self._lengths: Dict[int, int] = {}

    def fast_length(self, n: int) -> int:
        """Smallest length ``>= n`` that scipy transforms efficiently."""
        if n < 1:
            raise InvalidArgumentError(f"transform length must be >= 1, got {n}")
        length = self._lengths.get(n)
        if length is None:
            length = sp_fft.next_fast_len(n, real=True)
            self._lengths[n] = length
            logger.debug("FFT length %d -> %d", n, length)
        return length

    def fast_shape(self, shape: Sequence[int]) -> Tuple[int, ...]:
        """Apply :meth:`fast_length` to each extent of *shape*."""
        return tuple(self.fast_length(int(n)) for n in shape)

    def rfftn(self, x: np.ndarray, shape: Sequence[int]) -> np.ndarray:
        """Forward real FFT of *x*, zero-padded to *shape*. Unscaled."""
        return sp_fft.rfftn(x, s=tuple(shape), workers=self._workers)

    def irfftn(self, X: np.ndarray, shape: Sequence[int]) -> np.ndarray:
        """Inverse of :meth:`rfftn` for a real signal of *shape*. Scaled by ``1/N``."""
        return sp_fft.irfftn(X, s=tuple(shape), workers=self._workers)

    def clear(self) -> None:
        """Forget cached transform lengths."""
        self._lengths.clear()

    close = clear

    def __enter__(self) -> 'FftService':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.clear()

    def __repr__(self) -> str:
        return f"FftService(workers={self._workers!r}, cached={len(self._lengths)})"


def _filter_support(lags: LagSet, coefficients: np.ndarray, ndim: int) -> np.ndarray:
    """Dense impulse response of the filter over its bounding box."""
    lo = lags.min_lag
    hi = lags.max_lag
    extent = tuple(hi[d] - lo[d] + 1 for d in reversed(range(ndim)))
    h = np.zeros(extent, dtype=np.float64)
    table = lags.lags
    for j in range(len(lags)):
        index = tuple(
            int(table[j, d]) - lo[d] for d in reversed(range(ndim))
        )
        h[index] += coefficients[j]
    return h


def autocorrelation(
    lags: LagSet,
    coefficients: Sequence[float],
    shape: Optional[Sequence[int]] = None,
    fft: Optional[FftService] = None,
) -> np.ndarray:
    """Autocorrelation implied by a causal filter.

    Parameters
    ----------
    lags : LagSet
        Filter lags.
    coefficients : sequence of float
        Filter coefficients co-indexed with ``lags``.
    shape : tuple of int, optional
        Odd output extents, one per array axis (at least ``lags.ndim``,
        at most 3). Defaults to the full support ``2 * (max - min) + 1``
        per lag dimension.
    fft : FftService, optional
        Transform service to use. A private one is created when omitted.

    Returns
    -------
    np.ndarray
        float64 autocorrelation with the zero lag at ``n // 2`` on every
        axis; lags outside ``shape`` are dropped.

    Raises
    ------
    DimensionMismatchError
        If ``shape`` has the wrong rank or an even extent.
    """
    a = check_coefficients(lags, coefficients)
    if shape is None:
        ndim = lags.ndim
    else:
        shape = tuple(int(n) for n in shape)
        ndim = len(shape)
        if ndim < lags.ndim or ndim > MAX_NDIM:
            raise DimensionMismatchError(
                f"shape must have between {lags.ndim} and {MAX_NDIM} "
                f"dimensions, got {shape}"
            )
        if any(n < 1 or n % 2 == 0 for n in shape):
            raise DimensionMismatchError(f"shape extents must be odd, got {shape}")

    h = _filter_support(lags, a, ndim)
    extent = h.shape
    full = tuple(2 * e - 1 for e in extent)
    if fft is None:
        fft = FftService()
    nfft = fft.fast_shape(full)

    H = fft.rfftn(h, nfft)
    c = fft.irfftn(H.real ** 2 + H.imag ** 2, nfft)
    c = np.roll(c, tuple(e - 1 for e in extent), axis=tuple(range(ndim)))
    c = c[tuple(slice(0, n) for n in full)]

    if shape is None:
        return np.ascontiguousarray(c)

    out = np.zeros(shape, dtype=np.float64)
    src = []
    dst = []
    for n, e in zip(shape, extent):
        half = min(e - 1, n // 2)
        src.append(slice(e - 1 - half, e + half))
        dst.append(slice(n // 2 - half, n // 2 + half + 1))
    out[tuple(dst)] = c[tuple(src)]
    return out


def correlation_misfit(
    lags: LagSet,
    coefficients: Sequence[float],
    r: np.ndarray,
    fft: Optional[FftService] = None,
) -> float:
    """Largest deviation of the filter's autocorrelation from *r*, relative to ``r[0]``.

    Parameters
    ----------
    lags : LagSet
        Filter lags.
    coefficients : sequence of float
        Filter coefficients.
    r : np.ndarray
        Target autocorrelation with odd extents, zero lag at the centre.
    fft : FftService, optional
        Transform service to use.

    Returns
    -------
    float
        ``max |autocorrelation - r| / r0`` over the samples of ``r``.
    """
    r = np.asarray(r, dtype=np.float64)
    c = autocorrelation(lags, coefficients, shape=r.shape, fft=fft)
    r0 = r[tuple(n // 2 for n in r.shape)]
    if r0 == 0.0:
        raise InvalidArgumentError("zero lag of r must be non-zero")
    return float(np.max(np.abs(c - r)) / abs(r0))
