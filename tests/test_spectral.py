# -*- coding: utf-8 -*-
"""
Spectral Service Tests.

Tests for ``FftService`` length caching and transforms, and for the
FFT-based autocorrelation of causal filters, checked against direct
application of the filter and its transpose.

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
from helixdsp.exceptions import DimensionMismatchError, InvalidArgumentError
from helixdsp.filters import CausalFilter, LagSet
from helixdsp.spectral import FftService, autocorrelation, correlation_misfit


# ── FFT service ─────────────────────────────────────────────────────────


class TestFftService:

    def test_fast_length(self):
        fft = FftService()
        n = fft.fast_length(97)
        assert n >= 97
        assert fft.fast_length(97) == n

    def test_fast_length_invalid(self):
        with pytest.raises(InvalidArgumentError):
            FftService().fast_length(0)

    def test_round_trip(self):
        rng = np.random.default_rng(3)
        x = rng.random((6, 10))
        with FftService() as fft:
            X = fft.rfftn(x, x.shape)
            y = fft.irfftn(X, x.shape)
        np.testing.assert_allclose(y, x, atol=1e-12)

    def test_forward_unscaled(self):
        X = FftService().rfftn(np.ones(8), (8,))
        assert X[0] == pytest.approx(8.0)

    def test_clear(self):
        fft = FftService()
        fft.fast_length(11)
        fft.clear()
        assert 'cached=0' in repr(fft)


# ── Autocorrelation ─────────────────────────────────────────────────────


class TestAutocorrelation:

    def test_1d_known(self):
        # (24 + 26z + 9z^2 + z^3) times its transpose
        r = autocorrelation(LagSet([0, 1, 2, 3]), [24.0, 26.0, 9.0, 1.0])
        np.testing.assert_allclose(
            r, [24.0, 242.0, 867.0, 1334.0, 867.0, 242.0, 24.0], atol=1e-9,
        )

    def test_shape_crops_and_pads(self):
        lags = LagSet([0, 1, 2, 3])
        a = [24.0, 26.0, 9.0, 1.0]
        np.testing.assert_allclose(
            autocorrelation(lags, a, shape=(3,)), [867.0, 1334.0, 867.0],
        )
        wide = autocorrelation(lags, a, shape=(11,))
        np.testing.assert_allclose(wide[:2], 0.0, atol=1e-9)
        assert wide[5] == pytest.approx(1334.0)

    def test_2d_matches_filter(self):
        lags = LagSet([0, 1, -1, 0], [0, 0, 1, 1])
        a = [2.0, -0.5, -0.3, -0.4]
        shape = (5, 5)
        r = autocorrelation(lags, a, shape=shape)
        cf = CausalFilter(lags, a)
        s = np.zeros(shape)
        s[2, 2] = 1.0
        expected = cf.apply_transpose(cf.apply(s))
        np.testing.assert_allclose(r, expected, atol=1e-12)

    def test_1d_lags_on_2d_shape(self):
        r = autocorrelation(LagSet([0, 1]), [2.0, 1.0], shape=(3, 3))
        expected = np.zeros((3, 3))
        expected[1] = [2.0, 5.0, 2.0]
        np.testing.assert_allclose(r, expected, atol=1e-12)

    def test_even_shape(self):
        with pytest.raises(DimensionMismatchError):
            autocorrelation(LagSet([0, 1]), [1.0, 0.5], shape=(4,))

    def test_rank_too_low(self):
        with pytest.raises(DimensionMismatchError):
            autocorrelation(LagSet([0, 1], [0, 0]), [1.0, 0.5], shape=(3,))


class TestCorrelationMisfit:

    def test_exact(self):
        r = np.array([2.0, 5.0, 2.0])
        assert correlation_misfit(LagSet([0, 1]), [2.0, 1.0], r) < 1e-12

    def test_relative_to_zero_lag(self):
        r = np.array([2.0, 10.0, 2.0])
        misfit = correlation_misfit(LagSet([0, 1]), [2.0, 1.0], r)
        assert misfit == pytest.approx(0.5)
