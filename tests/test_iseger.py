"""
Tests for den Iseger's Gaussian-quadrature Laplace inversion.

Verifies:
1. Output length is the next power of two >= the requested count
2. 1/(1+p) inverts to exp(-t) for every quadrature degree
3. Invalid input is rejected before the image is evaluated
4. Images are called point by point with Python complex unless batching
   is requested, and both modes agree
5. Single-point get_value matches the batched grid and stays accurate at
   large t
"""

import cmath
import warnings

import numpy as np
import pytest
import jax
import jax.numpy as jnp

jax.config.update("jax_enable_x64", True)

from lapinv.laplace.coefficients import (
    ISEGER_COEFFICIENTS,
    SUPPORTED_DEGREES,
    UnsupportedQuadratureDegree,
    get_coefficients,
)
from lapinv.laplace.iseger import (
    IsegerParams,
    build_spectrum,
    contour_points,
    contour_shift,
    get_value,
    get_values,
    iseger_invert,
)


def exp_decay_image(p):
    return 1.0 / (1.0 + p)


class CountingImage:
    """Image wrapper that records how often (and with what) it is called."""

    def __init__(self, image):
        self.image = image
        self.calls = 0
        self.points = 0

    def __call__(self, p):
        self.calls += 1
        self.points += int(np.size(p))
        return self.image(p)


def forbidden_image(p):
    raise AssertionError("image must not be evaluated for invalid input")


# =============================================================================
# Coefficient tables
# =============================================================================

class TestCoefficients:
    """Test the quadrature coefficient tables."""

    @pytest.mark.parametrize("degree", [16, 32, 48])
    def test_table_length_is_half_degree(self, degree):
        assert len(get_coefficients(degree)) == degree // 2

    def test_supported_degrees(self):
        assert SUPPORTED_DEGREES == (16, 32, 48)

    @pytest.mark.parametrize("degree", [16, 32, 48])
    def test_first_node_is_unit_weight_at_origin(self, degree):
        node = ISEGER_COEFFICIENTS[degree][0]
        assert node.alpha == 1.0
        assert node.lam == 0.0

    def test_nodes_increasing(self):
        for nodes in ISEGER_COEFFICIENTS.values():
            lambdas = [node.lam for node in nodes]
            assert lambdas == sorted(lambdas)

    def test_unsupported_degree(self):
        with pytest.raises(UnsupportedQuadratureDegree) as excinfo:
            get_coefficients(24)
        assert isinstance(excinfo.value, LookupError)
        assert "24" in str(excinfo.value)


# =============================================================================
# Output sizing
# =============================================================================

class TestOutputLength:
    """Output length equals the next power of two >= requested count."""

    @pytest.mark.parametrize("degree", [16, 32, 48])
    @pytest.mark.parametrize("n_values,expected", [
        (2, 2), (3, 4), (5, 8), (16, 16), (20, 32), (33, 64),
    ])
    def test_length(self, degree, n_values, expected):
        values = get_values(exp_decay_image, 0.1, n_values, quadrature_degree=degree)
        assert values.shape == (expected,)

    def test_power_of_two_count_unchanged(self):
        """16 stays 16 (not bumped to 32)."""
        assert get_values(exp_decay_image, 0.25, 16).shape == (16,)

    def test_padded_tail_is_returned(self):
        """
        The padded length M is returned, not the requested count: asking for
        20 values yields 32, and the extra 12 are real samples of f.
        """
        result = iseger_invert(exp_decay_image, 0.1, 20)

        assert result.n_requested == 20
        assert result.M == 32
        assert result.f.shape == (32,)
        assert jnp.all(jnp.isfinite(result.f[20:]))

    def test_result_time_grid(self):
        result = iseger_invert(exp_decay_image, 0.1, 20, quadrature_degree=32)

        assert result.dt == 0.1
        assert result.quadrature_degree == 32
        assert result.critical_abscissa == 0.0
        assert np.allclose(np.asarray(result.t), 0.1 * np.arange(32))


# =============================================================================
# Accuracy
# =============================================================================

class TestExponentialDecay:
    """L^{-1}[1/(1+p)] = exp(-t) with dt = 0.1, 20 values."""

    @pytest.mark.parametrize("degree", [16, 32, 48])
    def test_exp_decay(self, degree):
        values = get_values(exp_decay_image, 0.1, 20, quadrature_degree=degree)

        t = 0.1 * np.arange(20)
        exact = np.exp(-t)
        rel_error = np.abs(np.asarray(values[:20]) - exact) / exact

        assert np.max(rel_error) < 1e-6, \
            f"degree {degree}: max relative error {np.max(rel_error):.3e}"

    def test_exp_growth_with_critical_abscissa(self):
        """L^{-1}[1/(p-1)] = exp(t), contour right of the pole at p = 1."""
        values = get_values(lambda p: 1.0 / (p - 1.0), 0.1, 20, critical_abscissa=2.0)

        t = 0.1 * np.arange(20)
        exact = np.exp(t)
        rel_error = np.abs(np.asarray(values[:20]) - exact) / exact

        assert np.max(rel_error) < 1e-6, f"max relative error {np.max(rel_error):.3e}"

    def test_critical_abscissa_shift_equivalence(self):
        """Inverting F(p) with c matches inverting F(p + c) times exp(c*t)."""
        c = 1.5
        shifted = get_values(lambda p: 1.0 / (p + 1.0), 0.1, 16, critical_abscissa=c)
        plain = get_values(lambda p: 1.0 / (p + 1.0 + c), 0.1, 16)

        t = 0.1 * np.arange(16)
        assert np.allclose(np.asarray(shifted), np.asarray(plain) * np.exp(c * t), rtol=1e-10)


# =============================================================================
# Validation
# =============================================================================

class TestInvalidInput:
    """Invalid requests raise before any image evaluation."""

    @pytest.mark.parametrize("delta_t", [0.0, -0.1, float("nan"), float("inf")])
    def test_invalid_delta_t(self, delta_t):
        with pytest.raises(ValueError):
            get_values(forbidden_image, delta_t, 20)

    @pytest.mark.parametrize("n_values", [1, 0, -3])
    def test_invalid_count(self, n_values):
        with pytest.raises(ValueError):
            get_values(forbidden_image, 0.1, n_values)

    def test_unsupported_degree(self):
        with pytest.raises(UnsupportedQuadratureDegree):
            get_values(forbidden_image, 0.1, 20, quadrature_degree=24)

    def test_delta_t_checked_before_degree(self):
        with pytest.raises(ValueError):
            get_values(forbidden_image, 0.0, 20, quadrature_degree=24)

    def test_non_finite_critical_abscissa(self):
        with pytest.raises(ValueError):
            get_values(forbidden_image, 0.1, 20, critical_abscissa=float("nan"))

    def test_overflow_guard(self):
        with pytest.raises(ValueError, match="overflow"):
            get_values(forbidden_image, 1.0, 16, critical_abscissa=100.0)

    def test_params_validate_degree(self):
        with pytest.raises(UnsupportedQuadratureDegree):
            IsegerParams(quadrature_degree=20)

    def test_params_frozen(self):
        params = IsegerParams()
        with pytest.raises(AttributeError):
            params.quadrature_degree = 32


# =============================================================================
# Image evaluation
# =============================================================================

class TestImageEvaluation:
    """Contour construction and callback evaluation."""

    def test_contour_points_shape_and_origin(self):
        params = IsegerParams(critical_abscissa=0.5, quadrature_degree=32)
        z = contour_points(0.2, 4, params)

        assert z.shape == (8 * 4 + 1, 16)
        b = contour_shift(4)
        assert abs(complex(z[0, 0]) - (0.5 + b / 0.2)) < 1e-14

    def test_contour_shift(self):
        assert contour_shift(4) == 44.0 / 32

    def test_spectrum_length(self):
        spectrum = build_spectrum(exp_decay_image, 0.1, 20)
        assert spectrum.shape == (8 * 32,)
        assert jnp.all(jnp.imag(spectrum) == 0.0)

    def test_vectorized_single_call(self):
        image = CountingImage(exp_decay_image)
        get_values(image, 0.1, 4, vectorized=True)

        assert image.calls == 1
        assert image.points == (8 * 4 + 1) * 8

    @pytest.mark.parametrize("degree", [16, 48])
    def test_pointwise_evaluation_count(self, degree):
        image = CountingImage(exp_decay_image)
        get_values(image, 0.1, 4, quadrature_degree=degree)

        assert image.calls == (degree // 2) * (8 * 4 + 1)

    def test_pointwise_matches_vectorized(self):
        batched = get_values(exp_decay_image, 0.1, 8, quadrature_degree=32, vectorized=True)
        pointwise = get_values(exp_decay_image, 0.1, 8, quadrature_degree=32)

        assert np.allclose(np.asarray(batched), np.asarray(pointwise), rtol=1e-12, atol=1e-14)

    def test_cmath_image_with_default_arguments(self):
        """Scalar-only images (cmath) work without any mode switch."""
        def image(p):
            return cmath.exp(-cmath.log(1.0 + p))  # 1/(1+p)

        values = get_values(image, 0.1, 20)
        exact = np.exp(-0.1 * np.arange(32))

        assert np.allclose(np.asarray(values), exact, rtol=1e-6)
        assert abs(get_value(image, 1.0) - np.exp(-1.0)) < 1e-6

    def test_pointwise_receives_python_complex(self):
        seen = []

        def image(p):
            seen.append(type(p))
            return 1.0 / (1.0 + p)

        get_values(image, 0.1, 2)
        assert set(seen) == {complex}

    def test_non_finite_image_warns(self):
        with pytest.warns(RuntimeWarning, match="non-finite"):
            get_values(lambda p: complex(float("nan"), 0.0), 0.1, 4)

    def test_finite_image_does_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", RuntimeWarning)
            get_values(exp_decay_image, 0.1, 4)


# =============================================================================
# Single point
# =============================================================================

class TestGetValue:
    """Single-point inversion without the batched FFT."""

    def test_matches_batched_grid(self):
        t = 0.3
        single = get_value(exp_decay_image, t)
        batched = get_values(exp_decay_image, t / 32, 64)

        assert abs(single - float(batched[32])) < 1e-12

    def test_at_zero_matches_batched_grid(self):
        single = get_value(exp_decay_image, 0.0)
        batched = get_values(exp_decay_image, 1.0, 64)

        assert abs(single - float(batched[0])) < 1e-12

    @pytest.mark.parametrize("t", [0.0, 0.5, 2.0])
    def test_exp_decay_value(self, t):
        value = get_value(exp_decay_image, t, quadrature_degree=32)
        assert abs(value - np.exp(-t)) < 1e-6 * np.exp(-t)

    def test_oscillation_at_large_t(self):
        """L^{-1}[1/(p^2+1)] = sin(t), several periods out."""
        value = get_value(lambda p: 1.0 / (p * p + 1.0), 20.0)
        assert abs(value - np.sin(20.0)) < 1e-6, f"got {value!r}"

    def test_decay_at_large_t(self):
        """exp(-50) ~ 1.9e-22 is only matched to an absolute tolerance."""
        value = get_value(exp_decay_image, 50.0)
        assert abs(value - np.exp(-50.0)) < 1e-10, f"got {value!r}"

    def test_returns_float(self):
        assert isinstance(get_value(exp_decay_image, 0.5), float)

    def test_negative_time_rejected(self):
        with pytest.raises(ValueError):
            get_value(forbidden_image, -1.0)

    def test_unsupported_degree(self):
        with pytest.raises(UnsupportedQuadratureDegree):
            get_value(forbidden_image, 1.0, quadrature_degree=64)
