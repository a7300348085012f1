# -*- coding: utf-8 -*-
"""
Causal Filter Base Class - Shared plumbing for causal filter engines.

Defines the ``CausalOperator`` ABC holding a ``LagSet`` and the buffer
handling common to every engine: input validation, float64 scratch
conversion, output allocation, narrowing back to the caller's dtype, and
in-place aliasing rules.

Each operation carries an explicit in-place flag in ``IN_PLACE_SAFE``.
When the output buffer is the input buffer and the operation is marked
safe, the loop runs directly on the caller's memory. When the buffers
overlap in any other way, or the operation is marked unsafe, the input is
first copied to scratch.

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
from abc import ABC
from typing import Any, Callable, Dict, Optional

# Third-party
import numpy as np

# helixdsp internal
from helixdsp.exceptions import InvalidArgumentError
from helixdsp.filters._validation import (
    check_output_array,
    check_sampled_array,
    same_buffer,
    volume_shape,
)
from helixdsp.filters.lags import LagSet

logger = logging.getLogger(__name__)


APPLY = 'apply'
APPLY_TRANSPOSE = 'apply_transpose'
APPLY_INVERSE = 'apply_inverse'
APPLY_INVERSE_TRANSPOSE = 'apply_inverse_transpose'

OPERATIONS = (APPLY, APPLY_TRANSPOSE, APPLY_INVERSE, APPLY_INVERSE_TRANSPOSE)


class CausalOperator(ABC):
    """Abstract base class for causal filter engines.

    Subclasses expose ``apply``, ``apply_transpose``, ``apply_inverse`` and
    ``apply_inverse_transpose`` and route them through :meth:`_execute`.

    Parameters
    ----------
    lags : LagSet
        The causal neighborhood of the filter.

    Raises
    ------
    InvalidArgumentError
        If ``lags`` is not a ``LagSet``.
    """

    #: Whether each operation may run directly on a buffer that is both
    #: its input and its output.
    IN_PLACE_SAFE: Dict[str, bool] = {
        APPLY: True,
        APPLY_TRANSPOSE: True,
        APPLY_INVERSE: True,
        APPLY_INVERSE_TRANSPOSE: True,
    }

    def __init__(self, lags: LagSet) -> None:
        if not isinstance(lags, LagSet):
            raise InvalidArgumentError(
                f"lags must be a LagSet, got {type(lags).__name__}"
            )
        self._lags = lags

    @property
    def lags(self) -> LagSet:
        """The lag table of this filter."""
        return self._lags

    @property
    def ndim(self) -> int:
        """Number of lag dimensions."""
        return self._lags.ndim

    def _execute(
        self,
        operation: str,
        kernel: Callable[..., Any],
        x: np.ndarray,
        out: Optional[np.ndarray],
        *args: Any,
        write_through: bool = True,
    ) -> np.ndarray:
        """Validate buffers and run *kernel* on float64 volumes.

        Parameters
        ----------
        operation : str
            Operation name, used to look up ``IN_PLACE_SAFE``.
        kernel : Callable
            ``kernel(src, dst, *args)`` operating on ``(n3, n2, n1)``
            float64 arrays.
        x : np.ndarray
            Input array.
        out : np.ndarray, optional
            Output array; allocated when ``None``.
        *args
            Extra kernel arguments.
        write_through : bool
            Allow the kernel to write straight into ``out`` when its dtype
            and layout permit. When ``False`` the kernel always writes to
            scratch, so ``out`` is untouched if the kernel raises.

        Returns
        -------
        np.ndarray
            ``out``.
        """
        x = check_sampled_array(x, self._lags.ndim)
        out = check_output_array(out, x)
        shape3 = volume_shape(x.shape)

        src = np.ascontiguousarray(x, dtype=np.float64)
        direct = (
            write_through
            and out.dtype == np.float64
            and out.flags.c_contiguous
        )
        dst = out if direct else np.empty(x.shape, dtype=np.float64)

        if np.may_share_memory(src, dst):
            if not (self.IN_PLACE_SAFE[operation] and same_buffer(src, dst)):
                logger.debug("%s: copying aliased input to scratch", operation)
                src = src.copy()

        kernel(src.reshape(shape3), dst.reshape(shape3), *args)

        if dst is not out:
            out[...] = dst
        return out
