# -*- coding: utf-8 -*-
"""
Wilson-Burg Factorization - Minimum-phase factors of multidimensional autocorrelations.

Given lags and a target autocorrelation ``R``, finds coefficients of a
minimum-phase causal filter ``A`` such that ``A A' ~ R``. The Newton
iteration of Wilson (1969), in the form popularized by Burg and applied
to helix filters by Fomel et al. (2003), repeats

    U(z) + U(1/z) = 1 + R(z) / (A(z) A(1/z))
    A(z) <- U+(z) A(z)

where ``U+`` keeps the causal half of ``U`` (the zero lag halved). Each
pass applies ``A'^{-1}`` and ``A^{-1}`` recursively to a zero-padded copy
of ``R``, so the filters involved never leave the lag table.

``R`` is embedded in a workspace padded by ``padding_factor`` times the
extent of the filter in every dimension, which limits the truncation of
the infinitely long ``R / A'``. All arithmetic is in float64; the
coefficients are narrowed to the floating dtype of ``R`` at the end.

Convergence is declared when no coefficient changes by more than
``epsilon * sqrt(r0)`` in one pass, where ``r0`` is the zero lag of ``R``.
Running out of iterations is not an error: the latest coefficients are
returned with ``converged=False`` and a ``FactorizationWarning`` is
emitted, unless ``strict=True`` requests ``FactorizationNotConvergedError``.

Reference
---------
G. Wilson, "Factorization of the covariance generating function of a pure
moving average process," SIAM J. Numer. Anal., vol. 6, no. 1, pp. 1-7,
1969.

S. Fomel, P. Sava, J. Rickett and J. Claerbout, "The Wilson-Burg method
of spectral factorization with application to helical filtering,"
Geophysical Prospecting, vol. 51, pp. 409-420, 2003.

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
import math
import warnings
from dataclasses import dataclass
from typing import Annotated, Any, Iterator, Optional, Tuple

# Third-party
import numpy as np

# helixdsp internal
from helixdsp.exceptions import (
    DimensionMismatchError,
    FactorizationDivergedError,
    FactorizationNotConvergedError,
    FactorizationWarning,
    InvalidArgumentError,
)
from helixdsp.filters._validation import MAX_NDIM
from helixdsp.filters.causal import CausalFilter
from helixdsp.filters.lags import LagSet
from helixdsp.filters.minimum_phase import MinimumPhaseFilter
from helixdsp.params import Desc, Range, Tunable
from helixdsp.spectral import FftService, correlation_misfit

logger = logging.getLogger(__name__)


DEFAULT_MAX_ITERATIONS = 100
DEFAULT_EPSILON = float(np.finfo(np.float32).eps)
DEFAULT_PADDING_FACTOR = 10


@dataclass(frozen=True)
class FactorizationResult:
    """Outcome of a Wilson-Burg factorization.

    Unpacks as ``(coefficients, converged)``.
    """

    coefficients: np.ndarray
    """Filter coefficients co-indexed with the lags, in the dtype of ``r``."""

    converged: bool
    """Whether the coefficient change fell below tolerance."""

    iterations: int
    """Number of passes performed."""

    max_change: float
    """Largest coefficient change in the last pass."""

    misfit: float
    """``max |A A' - r| / r0`` over the samples of ``r``."""

    def __iter__(self) -> Iterator[Any]:
        yield self.coefficients
        yield self.converged

    def to_filter(self, lags: LagSet) -> MinimumPhaseFilter:
        """Build the factored filter on *lags*."""
        return MinimumPhaseFilter(lags, self.coefficients)


# ── Validation ──────────────────────────────────────────────────────────


def _check_iteration_params(max_iterations, epsilon, padding_factor) -> None:
    if (
        isinstance(max_iterations, bool)
        or not isinstance(max_iterations, (int, np.integer))
        or max_iterations < 1
    ):
        raise InvalidArgumentError(
            f"max_iterations must be a positive integer, got {max_iterations!r}"
        )
    if not (np.isfinite(epsilon) and epsilon > 0):
        raise InvalidArgumentError(f"epsilon must be positive, got {epsilon!r}")
    if (
        isinstance(padding_factor, bool)
        or not isinstance(padding_factor, (int, np.integer))
        or padding_factor < 1
    ):
        raise InvalidArgumentError(
            f"padding_factor must be a positive integer, got {padding_factor!r}"
        )


def _check_target(lags: LagSet, r: Any) -> np.ndarray:
    r = np.asarray(r)
    if np.iscomplexobj(r):
        raise InvalidArgumentError("r must be real-valued")
    if r.ndim < lags.ndim or r.ndim > MAX_NDIM:
        raise DimensionMismatchError(
            f"r must have between {lags.ndim} and {MAX_NDIM} dimensions "
            f"for a {lags.ndim}D lag set, got shape {r.shape}"
        )
    if any(n % 2 == 0 for n in r.shape):
        raise DimensionMismatchError(
            f"r must have odd extents with the zero lag at the centre, "
            f"got shape {r.shape}"
        )
    if not np.all(np.isfinite(r)):
        raise InvalidArgumentError("r must be finite")
    return r


def _workspace(lags: LagSet, shape: Tuple[int, ...], padding_factor: int):
    """Padded workspace shape and the index of the zero lag within it."""
    ndim = len(shape)
    padded = []
    zero = []
    for axis, n in enumerate(shape):
        d = ndim - 1 - axis
        lo = lags.min_lag[d]
        hi = lags.max_lag[d]
        half = (n - 1) // 2
        n_pad = n + padding_factor * (hi - lo)
        padded.append(n_pad)
        # room after the zero lag for both r and the filter
        zero.append(n_pad - 1 - max(hi, half))
    return tuple(padded), tuple(zero)


# ── Factorization ───────────────────────────────────────────────────────


def wilson_burg(
    lags: LagSet,
    r: np.ndarray,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    epsilon: float = DEFAULT_EPSILON,
    padding_factor: int = DEFAULT_PADDING_FACTOR,
    fft: Optional[FftService] = None,
    strict: bool = False,
    use_numba: bool = True,
) -> FactorizationResult:
    """Factor the autocorrelation *r* into a minimum-phase causal filter.

    Parameters
    ----------
    lags : LagSet
        Lags of the filter to compute.
    r : np.ndarray
        Target autocorrelation, symmetric about its centre sample, with odd
        extents. Its rank must be at least ``lags.ndim`` and at most 3.
        Not modified.
    max_iterations : int
        Maximum number of Wilson-Burg passes. Default 100.
    epsilon : float
        Convergence tolerance on coefficient changes, relative to
        ``sqrt(r0)``. Default float32 machine epsilon.
    padding_factor : int
        Zero padding of ``r`` in units of the filter extent. Default 10.
    fft : FftService, optional
        Transform service used to evaluate the final misfit.
    strict : bool
        Raise ``FactorizationNotConvergedError`` instead of warning when
        the iterations run out. Default ``False``.
    use_numba : bool
        Use JIT-compiled filter loops when numba is installed.

    Returns
    -------
    FactorizationResult
        Coefficients in the floating dtype of ``r`` (float64 otherwise),
        the convergence flag and iteration diagnostics.

    Raises
    ------
    InvalidArgumentError
        If an iteration parameter is out of range, or ``r`` is complex,
        non-finite or has a non-positive zero lag.
    DimensionMismatchError
        If ``r`` has an even extent or an unsupported rank.
    FactorizationDivergedError
        If non-finite coefficients appear during the iteration.
    FactorizationNotConvergedError
        If ``strict`` is set and the iterations run out.
    """
    if not isinstance(lags, LagSet):
        raise InvalidArgumentError(
            f"lags must be a LagSet, got {type(lags).__name__}"
        )
    _check_iteration_params(max_iterations, epsilon, padding_factor)
    r = _check_target(lags, r)
    out_dtype = r.dtype if np.issubdtype(r.dtype, np.floating) else np.float64
    r64 = np.asarray(r, dtype=np.float64)

    r0 = float(r64[tuple(n // 2 for n in r64.shape)])
    if not r0 > 0.0:
        raise InvalidArgumentError(
            f"zero lag of r must be positive, got {r0}"
        )

    shape, zero = _workspace(lags, r64.shape, padding_factor)
    s = np.zeros(shape, dtype=np.float64)
    s[tuple(slice(k - n // 2, k + n // 2 + 1) for k, n in zip(zero, r64.shape))] = r64
    t = np.empty(shape, dtype=np.float64)
    u = np.empty(shape, dtype=np.float64)
    u_flat = u.reshape(-1)
    k0 = int(np.ravel_multi_index(zero, shape))

    ndim = len(shape)
    table = lags.lags
    taps = [
        tuple(zero[axis] + int(table[j, ndim - 1 - axis]) for axis in range(ndim))
        for j in range(len(lags))
    ]

    a = np.zeros(len(lags), dtype=np.float64)
    a[0] = math.sqrt(r0)
    tolerance = epsilon * a[0]
    logger.debug(
        "Wilson-Burg: %d lags, r shape %s, workspace %s, tolerance %.3g",
        len(lags), r64.shape, shape, tolerance,
    )

    converged = False
    max_change = math.inf
    iterations = 0
    while iterations < max_iterations and not converged:
        iterations += 1
        cf = CausalFilter(lags, a, use_numba=use_numba)

        # U(z) + U(1/z) = 1 + S(z) / (A(z) A(1/z))
        cf.apply_inverse_transpose(s, out=t)
        cf.apply_inverse(t, out=u)
        u_flat[k0] = 0.5 * (u_flat[k0] + 1.0)
        u_flat[:k0] = 0.0

        # A(z) <- U+(z) A(z)
        cf.apply(u, out=t)
        a_new = np.array([t[tap] for tap in taps])

        if not np.all(np.isfinite(a_new)) or a_new[0] == 0.0:
            raise FactorizationDivergedError(
                f"Wilson-Burg iteration {iterations} produced "
                f"non-finite or singular coefficients"
            )
        max_change = float(np.max(np.abs(a_new - a)))
        a = a_new
        converged = bool(max_change <= tolerance)
        logger.debug(
            "Wilson-Burg iteration %d: max change %.3e", iterations, max_change,
        )

    if fft is None:
        with FftService() as service:
            misfit = correlation_misfit(lags, a, r64, fft=service)
    else:
        misfit = correlation_misfit(lags, a, r64, fft=fft)

    if not converged:
        message = (
            f"Wilson-Burg factorization did not converge in {iterations} "
            f"iterations (max change {max_change:.3e}, tolerance "
            f"{tolerance:.3e}, misfit {misfit:.3e})"
        )
        if strict:
            raise FactorizationNotConvergedError(message)
        logger.warning(message)
        warnings.warn(message, FactorizationWarning, stacklevel=2)
    else:
        logger.debug(
            "Wilson-Burg converged after %d iterations, misfit %.3e",
            iterations, misfit,
        )

    coefficients = a.astype(out_dtype)
    coefficients.setflags(write=False)
    return FactorizationResult(
        coefficients=coefficients,
        converged=converged,
        iterations=iterations,
        max_change=max_change,
        misfit=misfit,
    )


# ── Configurable processor ──────────────────────────────────────────────


class WilsonBurgFactorizer(Tunable):
    """Reusable Wilson-Burg factorizer with validated settings.

    Examples
    --------
    >>> factorizer = WilsonBurgFactorizer(max_iterations=50)
    >>> coefficients, converged = factorizer.factor(lags, r)
    >>> result = factorizer.factor(lags, r, strict=True)
    """

    max_iterations: Annotated[
        int, Range(min=1), Desc('Maximum number of Wilson-Burg passes'),
    ] = DEFAULT_MAX_ITERATIONS

    epsilon: Annotated[
        float, Range(min=0.0, exclusive_min=True),
        Desc('Convergence tolerance relative to sqrt(r0)'),
    ] = DEFAULT_EPSILON

    padding_factor: Annotated[
        int, Range(min=1), Desc('Zero padding of r in filter extents'),
    ] = DEFAULT_PADDING_FACTOR

    strict: Annotated[
        bool, Desc('Raise instead of warning when not converged'),
    ] = False

    def factor(
        self,
        lags: LagSet,
        r: np.ndarray,
        fft: Optional[FftService] = None,
        **overrides: Any,
    ) -> FactorizationResult:
        """Factor *r* on *lags* with this factorizer's settings.

        Parameters
        ----------
        lags : LagSet
            Lags of the filter to compute.
        r : np.ndarray
            Target autocorrelation.
        fft : FftService, optional
            Transform service used to evaluate the misfit.
        **overrides
            Per-call values for any declared parameter.

        Returns
        -------
        FactorizationResult
        """
        params = self._resolve_params(overrides)
        return wilson_burg(lags, r, fft=fft, **params)
