# -*- coding: utf-8 -*-
"""
Spectral Factorization - Minimum-phase factors of autocorrelations.

``wilson_burg`` factors a 1D, 2D or 3D autocorrelation into the
coefficients of a minimum-phase causal filter on a given ``LagSet``.
``WilsonBurgFactorizer`` holds validated iteration settings for repeated
use.

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

from helixdsp.factorization.wilson_burg import (
    DEFAULT_EPSILON,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_PADDING_FACTOR,
    FactorizationResult,
    WilsonBurgFactorizer,
    wilson_burg,
)

__all__ = [
    'wilson_burg',
    'WilsonBurgFactorizer',
    'FactorizationResult',
    'DEFAULT_MAX_ITERATIONS',
    'DEFAULT_EPSILON',
    'DEFAULT_PADDING_FACTOR',
]
