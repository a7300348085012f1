# -*- coding: utf-8 -*-
"""
Lag Table Tests.

Tests for ``LagSet`` construction and validation (zero first lag,
causality, duplicates, length mismatches), its accessors, equality and
hashing, and the coefficient helpers.

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

# Third-party
import numpy as np
import pytest

# helixdsp internal
from helixdsp.exceptions import InvalidArgumentError, InvalidLagSetError
from helixdsp.filters.lags import LagSet, check_coefficients, impulse_coefficients


# ── Construction ────────────────────────────────────────────────────────


class TestLagSetConstruction:

    def test_1d(self):
        lags = LagSet([0, 1, 2])
        assert lags.ndim == 1
        assert len(lags) == 3
        np.testing.assert_array_equal(lags.lag1, [0, 1, 2])
        np.testing.assert_array_equal(lags.lag2, [0, 0, 0])

    def test_2d_nshp(self):
        lags = LagSet([0, 1, 2, 3, 4, -4, -3, -2, -1, 0],
                      [0, 0, 0, 0, 0, 1, 1, 1, 1, 1])
        assert lags.ndim == 2
        assert len(lags) == 10
        assert lags.min_lag == (-4, 0, 0)
        assert lags.max_lag == (4, 1, 0)

    def test_3d(self):
        lags = LagSet([0, 1, -1, 0], [0, 0, 1, -1], [0, 0, 0, 1])
        assert lags.ndim == 3
        assert lags.lags.shape == (4, 3)
        assert lags.min_lag == (-1, -1, 0)

    def test_integral_floats_accepted(self):
        lags = LagSet([0.0, 1.0, 2.0])
        assert lags.lags.dtype == np.int64

    def test_from_tuples(self):
        lags = LagSet.from_tuples([(0, 0), (1, 0), (-1, 1)])
        assert lags == LagSet([0, 1, -1], [0, 0, 1])

    def test_iteration_truncates_to_ndim(self):
        assert list(LagSet([0, 1], [0, 0])) == [(0, 0), (1, 0)]


class TestLagSetValidation:

    def test_empty(self):
        with pytest.raises(InvalidLagSetError, match="at least one"):
            LagSet([])

    def test_first_lag_not_zero(self):
        with pytest.raises(InvalidLagSetError, match="first lag"):
            LagSet([1, 2])

    def test_non_causal_1d(self):
        with pytest.raises(InvalidLagSetError, match="not causal"):
            LagSet([0, -1])

    def test_non_causal_2d(self):
        # negative lag1 is only allowed on a later row
        with pytest.raises(InvalidLagSetError, match="not causal"):
            LagSet([0, -1], [0, 0])

    def test_non_causal_3d(self):
        with pytest.raises(InvalidLagSetError, match="not causal"):
            LagSet([0, 0], [0, 1], [0, -1])

    def test_duplicate(self):
        with pytest.raises(InvalidLagSetError, match="duplicate"):
            LagSet([0, 1, 1])

    def test_length_mismatch(self):
        with pytest.raises(InvalidLagSetError, match="length"):
            LagSet([0, 1, 2], [0, 0])

    def test_lag3_without_lag2(self):
        with pytest.raises(InvalidLagSetError):
            LagSet([0, 1], lag3=[0, 0])

    def test_non_integer(self):
        with pytest.raises(InvalidLagSetError, match="integers"):
            LagSet([0, 1.5])

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            LagSet([1])


# ── Accessors ───────────────────────────────────────────────────────────


class TestLagSetAccessors:

    def test_table_is_read_only(self):
        lags = LagSet([0, 1, 2])
        with pytest.raises(ValueError):
            lags.lags[1, 0] = 5

    def test_lag_copies_are_independent(self):
        lags = LagSet([0, 1, 2])
        lag1 = lags.lag1
        lag1[1] = 7
        np.testing.assert_array_equal(lags.lag1, [0, 1, 2])

    def test_equality_and_hash(self):
        a = LagSet([0, 1, 2])
        b = LagSet(np.array([0, 1, 2]))
        assert a == b
        assert hash(a) == hash(b)
        assert a != LagSet([0, 1, 3])
        # same table, different dimensionality
        assert a != LagSet([0, 1, 2], [0, 0, 0])

    def test_repr(self):
        assert repr(LagSet([0, 1], [0, 0])) == "LagSet(lag1=[0, 1], lag2=[0, 0])"


# ── Coefficient helpers ─────────────────────────────────────────────────


class TestCoefficientHelpers:

    def test_impulse(self):
        np.testing.assert_array_equal(impulse_coefficients(3), [1.0, 0.0, 0.0])

    def test_check_coefficients_read_only(self):
        a = check_coefficients(LagSet([0, 1]), [1.0, -0.5])
        assert a.dtype == np.float64
        assert not a.flags.writeable

    def test_wrong_length(self):
        with pytest.raises(InvalidArgumentError, match="coefficients"):
            check_coefficients(LagSet([0, 1, 2]), [1.0, 2.0])

    def test_non_finite(self):
        with pytest.raises(InvalidArgumentError):
            check_coefficients(LagSet([0, 1]), [1.0, np.nan])
