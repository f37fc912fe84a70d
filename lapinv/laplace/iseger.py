"""
Laplace transform inversion by Gaussian quadrature (den Iseger's method).

The original f(t) is recovered on the uniform grid t_j = j*dt from its
image F(p) by sampling F along a shifted Bromwich contour at fixed
quadrature nodes, assembling a discrete spectrum and inverting it with
the radix-2 FFT of lapinv.core.fft.

Algorithm (M output points, quadrature table {(alpha_j, lambda_j)}):
    M2 = 8*M                       oversampled grid
    b = 44/M2                      contour shift (damping per step)
    s[k] = (2/dt) * sum_j alpha_j * Re F(c + (b + i*(lambda_j + 2*pi*k/M2))/dt)
                                   for k = 0..M2
    s[0] = (s[0] + s[M2]) / 2      endpoint averaging
    y = inverse_transform(s[:M2])  (0.5-scaled inverse FFT)
    f[j] = y[j] * exp(b*j + c*j*dt) / (M2/4)

The exp(b*j) factor undoes the damping introduced by the contour shift.
The c*j*dt term is only applied for a positive critical abscissa c.

Reference:
    P. den Iseger, Numerical Transform Inversion Using Gaussian Quadrature.
    Probability in the Engineering and Informational Sciences 20 (2006), 1-44.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, NamedTuple
import warnings

import jax.numpy as jnp
import numpy as np

from lapinv.core.fft import inverse_transform, next_power_of_two
from lapinv.laplace.coefficients import (
    DEFAULT_DEGREE,
    UnsupportedQuadratureDegree,
    coefficient_arrays,
    get_coefficients,
)


ImageFunction = Callable[[complex], complex]

OVERSAMPLING = 8  # M2 = 8*M
CONTOUR_SHIFT = 44.0  # b = CONTOUR_SHIFT / M2
SAFE_LOG_MAX = float(np.log(np.finfo(np.float64).max) - 10.0)  # ~699.8
SINGLE_POINT_INDEX = 32  # get_value evaluates t as sample j0 of a grid with dt = t/j0


@dataclass(frozen=True)
class IsegerParams:
    """Optional parameters of the inversion.

    Args:
        critical_abscissa: Real c greater than the real part of every
            singularity of F; the contour is placed to the right of it.
        quadrature_degree: Number of quadrature nodes (16, 32 or 48).
        vectorized: If False (default), F is called point by point with a
            Python complex and must return one complex value. If True, F is
            called once with the full array of contour points.
    """
    critical_abscissa: float = 0.0
    quadrature_degree: int = DEFAULT_DEGREE
    vectorized: bool = False

    def __post_init__(self):
        if not np.isfinite(self.critical_abscissa):
            raise ValueError(
                f"Critical abscissa must be finite, got {self.critical_abscissa}"
            )
        # Raises UnsupportedQuadratureDegree
        get_coefficients(self.quadrature_degree)


class IsegerResult(NamedTuple):
    """Result from Iseger inversion."""
    t: jnp.ndarray  # Time points j*dt
    f: jnp.ndarray  # Original values at t
    dt: float  # Time step
    M: int  # Number of output points (power of 2)
    n_requested: int  # Number of values asked for (M >= n_requested)
    critical_abscissa: float
    quadrature_degree: int


# =============================================================================
# Validation
# =============================================================================

def _validate_request(delta_t: float, n_values: int) -> None:
    if not (np.isfinite(delta_t) and delta_t > 0):
        raise ValueError(f"The value of delta is invalid: {delta_t}.")
    if n_values < 2:
        raise ValueError(
            f"The number of output values is invalid: {n_values} (must be >= 2)."
        )


def _check_overflow(b: float, M: int, delta_t: float, critical_abscissa: float) -> None:
    """Refuse grids whose rescaling factor exp(...) would overflow float64."""
    max_exponent = b * (M - 1)
    if critical_abscissa > 0:
        max_exponent += critical_abscissa * (M - 1) * delta_t

    if max_exponent > SAFE_LOG_MAX:
        raise ValueError(
            f"Iseger overflow risk: max exponent = {max_exponent:.2f} > {SAFE_LOG_MAX:.1f}.\n"
            f"  Parameters: c={critical_abscissa:.2e}, dt={delta_t:.2e}, M={M}\n"
            f"  Reduce the critical abscissa or the time horizon M*dt."
        )


# =============================================================================
# Grid construction
# =============================================================================

def output_size(n_values: int) -> int:
    """Number of output points M: smallest power of 2 >= n_values."""
    return next_power_of_two(n_values)


def contour_shift(M: int) -> float:
    """Contour offset b = 44 / (8*M)."""
    return CONTOUR_SHIFT / (OVERSAMPLING * M)


def contour_points(
    delta_t: float,
    M: int,
    params: IsegerParams = IsegerParams(),
) -> jnp.ndarray:
    """
    Points of the Bromwich contour where the image is evaluated.

    z[k, j] = c + (b + i*(lambda_j + 2*pi*k/M2)) / dt

    Returns:
        complex128 array of shape (M2 + 1, degree/2)
    """
    M2 = OVERSAMPLING * M
    b = contour_shift(M)
    _, lambdas = coefficient_arrays(params.quadrature_degree)

    k = jnp.arange(M2 + 1, dtype=jnp.float64)
    lam = jnp.asarray(lambdas, dtype=jnp.float64)
    omega = lam[None, :] + 2.0 * jnp.pi * k[:, None] / M2

    return params.critical_abscissa + (b + 1j * omega) / delta_t


def evaluate_image(image: ImageFunction, z: jnp.ndarray, vectorized: bool = False) -> jnp.ndarray:
    """
    Real part of the image on an array of contour points.

    Warns (RuntimeWarning) if F returns non-finite values.
    """
    if vectorized:
        values = jnp.asarray(image(z), dtype=jnp.complex128)
        values = jnp.broadcast_to(values, z.shape)
        real = jnp.real(values)
    else:
        z_host = np.asarray(z)
        real_host = np.empty(z_host.shape, dtype=np.float64)
        for idx in np.ndindex(z_host.shape):
            real_host[idx] = complex(image(complex(z_host[idx]))).real
        real = jnp.asarray(real_host)

    n_bad = int(jnp.sum(~jnp.isfinite(real)))
    if n_bad > 0:
        warnings.warn(
            f"Laplace image returned {n_bad} non-finite value(s) on the contour. "
            f"Check that the critical abscissa lies right of all singularities.",
            RuntimeWarning
        )

    return real


def build_spectrum(
    image: ImageFunction,
    delta_t: float,
    n_values: int,
    params: IsegerParams = IsegerParams(),
) -> jnp.ndarray:
    """
    Assemble the discrete spectrum fed to the inverse FFT.

    Samples F at (M2 + 1) * degree/2 contour points, weights the real parts
    with the quadrature weights and averages the two endpoint samples.

    Returns:
        complex128 spectrum of length M2 = 8*M (the M2-th sample is dropped
        after averaging)
    """
    _validate_request(delta_t, n_values)
    M = output_size(n_values)
    M2 = OVERSAMPLING * M
    alphas, _ = coefficient_arrays(params.quadrature_degree)

    z = contour_points(delta_t, M, params)
    real = evaluate_image(image, z, params.vectorized)

    sums = real @ jnp.asarray(alphas, dtype=jnp.float64)
    spectrum = 2.0 * sums / delta_t

    # Endpoint averaging enforces the periodicity assumed by the FFT
    spectrum = spectrum.at[0].set((spectrum[0] + spectrum[M2]) / 2.0)

    return spectrum[:M2].astype(jnp.complex128)


def rescale(
    inverse_fft: jnp.ndarray,
    M: int,
    delta_t: float,
    critical_abscissa: float = 0.0,
) -> jnp.ndarray:
    """Undo the contour damping and normalize: y[j]*exp(b*j [+ c*j*dt]) / (M2/4)."""
    M4 = OVERSAMPLING * M // 4
    b = contour_shift(M)

    j = jnp.arange(M, dtype=jnp.float64)
    exp_arg = b * j
    if critical_abscissa > 0:
        exp_arg = exp_arg + critical_abscissa * (j * delta_t)

    return inverse_fft[:M] * jnp.exp(exp_arg) / M4


# =============================================================================
# Public API
# =============================================================================

def iseger_invert(
    image: ImageFunction,
    delta_t: float,
    n_values: int,
    *,
    critical_abscissa: float = 0.0,
    quadrature_degree: int = DEFAULT_DEGREE,
    vectorized: bool = False,
) -> IsegerResult:
    """
    Invert a Laplace image on the grid t_j = j*dt.

    Args:
        image: F(p); one complex in, one complex out (an array of points
            if vectorized)
        delta_t: Time step (> 0)
        n_values: Number of requested output values (>= 2)
        critical_abscissa: Real c right of all singularities of F
        quadrature_degree: 16, 32 or 48
        vectorized: Evaluate F on the whole contour grid in one call (opt-in)

    Returns:
        IsegerResult with M = next_power_of_two(n_values) points. Values past
        n_requested are still computed and returned.

    Raises:
        ValueError: invalid delta_t, n_values or critical_abscissa
        UnsupportedQuadratureDegree: quadrature_degree not tabulated
    """
    _validate_request(delta_t, n_values)
    params = IsegerParams(
        critical_abscissa=critical_abscissa,
        quadrature_degree=quadrature_degree,
        vectorized=vectorized,
    )

    M = output_size(n_values)
    _check_overflow(contour_shift(M), M, delta_t, params.critical_abscissa)

    spectrum = build_spectrum(image, delta_t, n_values, params)
    inverse_fft = inverse_transform(spectrum)
    f = rescale(inverse_fft, M, delta_t, params.critical_abscissa)

    return IsegerResult(
        t=jnp.arange(M, dtype=jnp.float64) * delta_t,
        f=f,
        dt=delta_t,
        M=M,
        n_requested=n_values,
        critical_abscissa=params.critical_abscissa,
        quadrature_degree=params.quadrature_degree,
    )


def get_values(
    image: ImageFunction,
    delta_t: float,
    n_values: int,
    *,
    critical_abscissa: float = 0.0,
    quadrature_degree: int = DEFAULT_DEGREE,
    vectorized: bool = False,
) -> jnp.ndarray:
    """
    Values of the Laplace original at k*delta_t, k = 0..M-1.

    M is the smallest power of 2 >= n_values; the returned array always has
    length M (no truncation to n_values).

    Example:
        >>> f = get_values(lambda p: 1.0 / (1.0 + p), 0.1, 20)
        >>> f.shape
        (32,)
    """
    result = iseger_invert(
        image,
        delta_t,
        n_values,
        critical_abscissa=critical_abscissa,
        quadrature_degree=quadrature_degree,
        vectorized=vectorized,
    )
    return result.f


def get_value(
    image: ImageFunction,
    t: float,
    *,
    critical_abscissa: float = 0.0,
    quadrature_degree: int = DEFAULT_DEGREE,
    vectorized: bool = False,
) -> float:
    """
    Value of the Laplace original at a single time t >= 0.

    t is placed as sample j0 = SINGLE_POINT_INDEX of the grid dt = t/j0 with
    M = next_power_of_two(2*j0) points, i.e. the same resolution get_values
    would use for that horizon. The spectrum is built as in get_values, but
    the inverse DFT is evaluated directly at index j0 instead of running the
    FFT. For t = 0, dt = 1 and index 0 are used.
    """
    if not (np.isfinite(t) and t >= 0):
        raise ValueError(f"The time argument is invalid: {t} (must be >= 0).")

    params = IsegerParams(
        critical_abscissa=critical_abscissa,
        quadrature_degree=quadrature_degree,
        vectorized=vectorized,
    )

    if t > 0:
        index = SINGLE_POINT_INDEX
        delta_t = float(t) / index
    else:
        index = 0
        delta_t = 1.0

    M = output_size(2 * SINGLE_POINT_INDEX)
    M2 = OVERSAMPLING * M
    b = contour_shift(M)
    # Only sample j0 is rescaled
    _check_overflow(b, index + 1, delta_t, params.critical_abscissa)

    spectrum = build_spectrum(image, delta_t, M, params)

    # 0.5-scaled inverse DFT at a single index
    k = jnp.arange(M2, dtype=jnp.float64)
    phase = jnp.exp(1j * 2.0 * jnp.pi * k * index / M2)
    y = 0.5 * jnp.real(jnp.sum(spectrum * phase))

    exp_arg = b * index
    if params.critical_abscissa > 0:
        exp_arg += params.critical_abscissa * index * delta_t

    return float(y * np.exp(exp_arg) / (M2 // 4))
