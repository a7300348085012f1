# -*- coding: utf-8 -*-
"""
helixdsp - Multidimensional causal filters and spectral factorization.

Sparse causal (helix) filters over 1D, 2D and 3D arrays with their
transposes and recursive inverses, plus Wilson-Burg factorization of
autocorrelations into minimum-phase filters.

Dependencies
------------
numpy
scipy
numba (optional)

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

__version__ = "0.1.0"

from helixdsp.exceptions import (
    HelixError,
    InvalidArgumentError,
    InvalidLagSetError,
    DimensionMismatchError,
    SingularFilterError,
    FactorizationDivergedError,
    FactorizationNotConvergedError,
    FactorizationWarning,
)
from helixdsp.filters import (
    LagSet,
    CausalFilter,
    MinimumPhaseFilter,
    LocalCausalFilter,
    CoefficientProvider,
    ConstantCoefficients,
    CoefficientField,
    IndexedCoefficients,
)
from helixdsp.factorization import (
    FactorizationResult,
    WilsonBurgFactorizer,
    wilson_burg,
)
from helixdsp.spectral import FftService, autocorrelation, correlation_misfit

__all__ = [
    'HelixError',
    'InvalidArgumentError',
    'InvalidLagSetError',
    'DimensionMismatchError',
    'SingularFilterError',
    'FactorizationDivergedError',
    'FactorizationNotConvergedError',
    'FactorizationWarning',
    'LagSet',
    'CausalFilter',
    'MinimumPhaseFilter',
    'LocalCausalFilter',
    'CoefficientProvider',
    'ConstantCoefficients',
    'CoefficientField',
    'IndexedCoefficients',
    'FactorizationResult',
    'WilsonBurgFactorizer',
    'wilson_burg',
    'FftService',
    'autocorrelation',
    'correlation_misfit',
]
