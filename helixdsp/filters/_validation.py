# -*- coding: utf-8 -*-
"""
Filter Validation Helpers - Shared array rank, shape and buffer checks.

Provides reusable validation functions for the causal filter engines. All
engines call these helpers so that rank, extent and output-buffer
constraints are enforced consistently, before anything is written to a
caller-supplied buffer.

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
from typing import Optional, Tuple

# Third-party
import numpy as np

# helixdsp internal
from helixdsp.exceptions import DimensionMismatchError, InvalidArgumentError


MAX_NDIM = 3


def check_sampled_array(x: np.ndarray, lag_ndim: int, name: str = 'x') -> np.ndarray:
    """Validate that *x* is a real 1D, 2D or 3D array a lag set can filter.

    Parameters
    ----------
    x : array_like
        Input samples.
    lag_ndim : int
        Number of lag dimensions of the filter.
    name : str
        Parameter name for error messages. Default ``'x'``.

    Returns
    -------
    np.ndarray
        ``x`` as an ndarray (no copy when already an array).

    Raises
    ------
    InvalidArgumentError
        If ``x`` is complex or empty.
    DimensionMismatchError
        If the rank of ``x`` is below ``lag_ndim`` or above 3.
    """
    x = np.asarray(x)
    if np.iscomplexobj(x):
        raise InvalidArgumentError(f"{name} must be real-valued")
    if x.ndim < lag_ndim or x.ndim > MAX_NDIM:
        raise DimensionMismatchError(
            f"{name} must have between {lag_ndim} and {MAX_NDIM} dimensions "
            f"for a {lag_ndim}D lag set, got shape {x.shape}"
        )
    if x.size == 0:
        raise InvalidArgumentError(f"{name} must not be empty")
    return x


def check_output_array(out: Optional[np.ndarray], x: np.ndarray) -> np.ndarray:
    """Validate (or allocate) the output buffer paired with *x*.

    When *out* is ``None`` a new array is allocated with the floating
    dtype of ``x`` (float64 for non-floating input).

    Raises
    ------
    InvalidArgumentError
        If ``out`` is not a writeable real floating ndarray.
    DimensionMismatchError
        If ``out.shape`` differs from ``x.shape``.
    """
    if out is None:
        dtype = x.dtype if np.issubdtype(x.dtype, np.floating) else np.float64
        return np.empty(x.shape, dtype=dtype)
    if not isinstance(out, np.ndarray):
        raise InvalidArgumentError(
            f"out must be a numpy array, got {type(out).__name__}"
        )
    if out.shape != x.shape:
        raise DimensionMismatchError(
            f"out has shape {out.shape}, expected {x.shape}"
        )
    if not np.issubdtype(out.dtype, np.floating):
        raise InvalidArgumentError(
            f"out must have a real floating dtype, got {out.dtype}"
        )
    if not out.flags.writeable:
        raise InvalidArgumentError("out must be writeable")
    return out


def volume_shape(shape: Tuple[int, ...]) -> Tuple[int, int, int]:
    """Pad a 1D or 2D shape with leading unit axes to ``(n3, n2, n1)``."""
    return (1,) * (MAX_NDIM - len(shape)) + tuple(shape)


def same_buffer(a: np.ndarray, b: np.ndarray) -> bool:
    """Whether *a* and *b* view exactly the same memory with the same layout."""
    return (
        a.__array_interface__['data'][0] == b.__array_interface__['data'][0]
        and a.strides == b.strides
        and a.shape == b.shape
    )
