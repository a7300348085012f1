# -*- coding: utf-8 -*-
"""
Causal Filters - Sparse multidimensional causal (helix) filters.

Provides filters whose lags form a causal neighborhood in 1, 2 or 3
dimensions, each with four operators: ``apply``, ``apply_transpose``,
``apply_inverse`` and ``apply_inverse_transpose``.

Lag Tables
    ``LagSet`` - immutable table of causal lags

Fixed Coefficients
    ``CausalFilter`` - the same coefficients at every sample
    ``MinimumPhaseFilter`` - causal filter with a stable causal inverse

Spatially Varying Coefficients
    ``LocalCausalFilter`` - coefficients supplied per sample by a
    ``CoefficientProvider`` (``ConstantCoefficients``,
    ``CoefficientField``, ``IndexedCoefficients`` or any callable)

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

from helixdsp.filters.lags import LagSet, impulse_coefficients
from helixdsp.filters.causal import CausalFilter
from helixdsp.filters.local import (
    CallableCoefficients,
    CoefficientField,
    IndexedCoefficients,
    CoefficientProvider,
    ConstantCoefficients,
    LocalCausalFilter,
)
from helixdsp.filters.minimum_phase import MinimumPhaseFilter
from helixdsp.filters._kernels import has_numba

__all__ = [
    'LagSet',
    'impulse_coefficients',
    'CausalFilter',
    'MinimumPhaseFilter',
    'LocalCausalFilter',
    'CoefficientProvider',
    'CallableCoefficients',
    'ConstantCoefficients',
    'CoefficientField',
    'IndexedCoefficients',
    'has_numba',
]
