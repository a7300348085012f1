# -*- coding: utf-8 -*-
"""
helixdsp Exception Hierarchy - Domain-specific exceptions for causal filtering.

Provides a small exception hierarchy that lets callers catch helixdsp
errors distinctly from Python built-in exceptions. All helixdsp exceptions
subclass both ``HelixError`` and the appropriate built-in exception, so
``except ValueError`` still catches invalid arguments and mismatched
array shapes.

Non-convergence of the Wilson-Burg factorization is not fatal by default;
it is reported through ``FactorizationWarning`` and a ``converged=False``
flag on the result, and only becomes ``FactorizationNotConvergedError``
when the caller asks for strict behavior.

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


class HelixError(Exception):
    """Base exception for all helixdsp errors."""


class InvalidArgumentError(HelixError, ValueError):
    """Invalid parameter or input value.

    Raised for non-positive iteration counts or tolerances, coefficient
    arrays of the wrong length, non-finite correlation targets, and other
    argument validation failures detected before any computation begins.
    """


class InvalidLagSetError(InvalidArgumentError):
    """Malformed lag table.

    Raised when lag arrays differ in length, contain duplicate lag tuples,
    do not start with the zero lag, or contain a lag that is not causal.
    """


class DimensionMismatchError(HelixError, ValueError):
    """Array rank or extents incompatible with a lag table or paired array."""


class SingularFilterError(HelixError, ArithmeticError):
    """Zero (or non-finite) leading coefficient on an inverse operation."""


class FactorizationDivergedError(HelixError, ArithmeticError):
    """Non-finite filter coefficients appeared during factorization.

    Fatal: no partial coefficients are returned.
    """


class FactorizationNotConvergedError(HelixError, RuntimeError):
    """Factorization exhausted its iterations without converging.

    Only raised when the caller requests strict behavior; otherwise the
    best available coefficients are returned with ``converged=False``.
    """


class FactorizationWarning(RuntimeWarning):
    """Factorization exhausted its iterations without converging."""
