# -*- coding: utf-8 -*-
"""
Minimum-Phase Filter - Causal filter with a stable causal inverse.

A ``MinimumPhaseFilter`` is a ``CausalFilter`` whose recursive inverse
``A^{-1}`` is also causal and stable, as is the inverse of its transpose.
Such filters are typically obtained by Wilson-Burg spectral factorization
of an autocorrelation, see :meth:`MinimumPhaseFilter.factor`.

The minimum-phase property is a contract on the coefficients and is not
verified at construction.

A bank of minimum-phase filters chosen per sample by an integer index runs
through ``LocalCausalFilter`` with ``IndexedCoefficients.from_filters``.

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
from typing import Any

# Third-party
import numpy as np

# helixdsp internal
from helixdsp.exceptions import InvalidArgumentError
from helixdsp.filters.causal import CausalFilter
from helixdsp.filters.lags import LagSet


class MinimumPhaseFilter(CausalFilter):
    """Causal filter with a causal and stable inverse.

    Parameters
    ----------
    lags : LagSet
        Causal neighborhood.
    coefficients : sequence of float, optional
        One coefficient per lag; defaults to the unit impulse.
    use_numba : bool
        Use JIT-compiled loops when numba is installed. Default ``True``.

    Examples
    --------
    Factor the autocorrelation of ``(z+2)(z+3)(z+4)``:

    >>> r = np.array([24., 242., 867., 1334., 867., 242., 24.])
    >>> mpf = MinimumPhaseFilter.factor(LagSet([0, 1, 2, 3]), r)
    >>> mpf.coefficients
    array([24., 26.,  9.,  1.])
    """

    @classmethod
    def factor(cls, lags: LagSet, r: np.ndarray, **kwargs: Any) -> 'MinimumPhaseFilter':
        """Factor the autocorrelation *r* into a minimum-phase filter.

        Parameters
        ----------
        lags : LagSet
            Lags of the filter to compute.
        r : np.ndarray
            Target autocorrelation with odd extents and the zero lag at
            the centre.
        **kwargs
            Forwarded to :func:`helixdsp.factorization.wilson_burg`
            (``max_iterations``, ``epsilon``, ``padding_factor``, ``fft``,
            ``strict``, ``use_numba``).

        Returns
        -------
        MinimumPhaseFilter
            Filter with the factored coefficients in float64. When the
            iteration did not converge, a ``FactorizationWarning`` has been
            emitted, or ``FactorizationNotConvergedError`` raised when
            ``strict=True``.
        """
        from helixdsp.factorization.wilson_burg import wilson_burg

        result = wilson_burg(lags, r, **kwargs)
        return cls(lags, result.coefficients, use_numba=kwargs.get('use_numba', True))

    @classmethod
    def from_filter(cls, causal_filter: CausalFilter) -> 'MinimumPhaseFilter':
        """Promote *causal_filter*, whose coefficients are known to be minimum-phase."""
        if not isinstance(causal_filter, CausalFilter):
            raise InvalidArgumentError(
                f"expected a CausalFilter, got {type(causal_filter).__name__}"
            )
        return cls(
            causal_filter.lags,
            causal_filter.coefficients,
            use_numba=causal_filter._use_numba,
        )
