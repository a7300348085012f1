# -*- coding: utf-8 -*-
"""
Tunable Settings Tests.

Tests for ``Range`` bounds, setting collection from ``typing.Annotated``
class annotations, the generated keyword-only ``__init__`` and
``_resolve_params`` overrides.

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
import inspect
from typing import Annotated

# Third-party
import numpy as np
import pytest

# helixdsp internal
from helixdsp.exceptions import InvalidArgumentError
from helixdsp.params import Desc, Range, Tunable, collect_settings


class Iteration(Tunable):
    passes: Annotated[int, Range(min=1, max=50), Desc('Pass cap')] = 10
    tolerance: Annotated[float, Range(min=0.0, exclusive_min=True)] = 1e-6
    strict: Annotated[bool, Desc('Raise on failure')] = False
    label = 'not a setting'


class Refined(Iteration):
    damping: Annotated[float, Range(min=0.0, max=1.0)] = 0.5


# ── Markers ─────────────────────────────────────────────────────────────


class TestRange:

    def test_repr(self):
        assert repr(Range(min=0, exclusive_min=True)) == 'Range(min=0, exclusive_min=True)'

    def test_inclusive_min(self):
        Range(min=1).check('n', 1)
        with pytest.raises(InvalidArgumentError, match="at least 1"):
            Range(min=1).check('n', 0)

    def test_exclusive_min(self):
        with pytest.raises(InvalidArgumentError, match="greater than"):
            Range(min=0.0, exclusive_min=True).check('eps', 0.0)

    def test_max(self):
        with pytest.raises(InvalidArgumentError, match="at most 3"):
            Range(max=3).check('n', 4)


# ── Collection ──────────────────────────────────────────────────────────


class TestCollection:

    def test_names_in_order(self):
        assert [s.name for s in Iteration.__settings__] == [
            'passes', 'tolerance', 'strict',
        ]

    def test_inherited_settings_first(self):
        assert [s.name for s in Refined.__settings__][-1] == 'damping'
        assert len(Refined.__settings__) == 4

    def test_setting_fields(self):
        passes = Iteration.__settings__[0]
        assert passes.kind is int
        assert passes.default == 10
        assert passes.bound.max == 50
        assert passes.description == 'Pass cap'

    def test_missing_default(self):
        class NoDefault:
            order: Annotated[int, Range(min=1)]

        with pytest.raises(TypeError, match="default"):
            collect_settings(NoDefault)

    def test_unsupported_type(self):
        class Named:
            mode: Annotated[str, Desc('mode')] = 'fast'

        with pytest.raises(TypeError, match="int, float or bool"):
            collect_settings(Named)

    def test_bad_default(self):
        class OutOfRange:
            passes: Annotated[int, Range(min=1)] = 0

        with pytest.raises(InvalidArgumentError):
            collect_settings(OutOfRange)

    def test_signature(self):
        params = inspect.signature(Iteration.__init__).parameters
        assert params['passes'].kind is inspect.Parameter.KEYWORD_ONLY
        assert params['tolerance'].default == 1e-6


# ── Generated __init__ ──────────────────────────────────────────────────


class TestInit:

    def test_defaults(self):
        it = Iteration()
        assert (it.passes, it.tolerance, it.strict) == (10, 1e-6, False)

    def test_int_accepted_for_float(self):
        assert Iteration(tolerance=1).tolerance == 1

    def test_numpy_bool_accepted(self):
        assert Iteration(strict=np.bool_(True)).strict

    def test_bound_violation(self):
        with pytest.raises(InvalidArgumentError, match="passes"):
            Iteration(passes=51)

    def test_bound_violation_is_value_error(self):
        with pytest.raises(ValueError):
            Iteration(tolerance=0.0)

    def test_wrong_type(self):
        with pytest.raises(TypeError):
            Iteration(passes=2.5)

    def test_bool_rejected_for_int(self):
        with pytest.raises(TypeError):
            Iteration(passes=True)

    def test_int_rejected_for_bool(self):
        with pytest.raises(TypeError):
            Iteration(strict=1)

    def test_unexpected_keyword(self):
        with pytest.raises(TypeError, match="unexpected"):
            Iteration(depth=2)


class TestResolveParams:

    def test_merges_overrides(self):
        it = Iteration(passes=5)
        resolved = it._resolve_params({'tolerance': 0.5})
        assert resolved == {'passes': 5, 'tolerance': 0.5, 'strict': False}

    def test_instance_unchanged(self):
        it = Iteration()
        it._resolve_params({'passes': 3})
        assert it.passes == 10

    def test_validates_overrides(self):
        with pytest.raises(InvalidArgumentError):
            Iteration()._resolve_params({'passes': 100})

    def test_unknown_override(self):
        with pytest.raises(TypeError, match="depth"):
            Iteration()._resolve_params({'depth': 1})

    def test_repr(self):
        assert repr(Refined()) == (
            "Refined(passes=10, tolerance=1e-06, strict=False, damping=0.5)"
        )
