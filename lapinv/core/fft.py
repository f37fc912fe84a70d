"""
Radix-2 Cooley-Tukey FFT engine.

This module provides forward and inverse discrete Fourier transforms of
real sequences over power-of-two lengths, plus symmetric spectral windows:

- direct_transform(data): real samples -> complex spectrum, scaled by 2/N
- inverse_transform(spectrum): complex spectrum -> real samples, scaled by 0.5
- window / low_pass / high_pass: zero harmonics outside an index range

Design decisions:
- Input that is not a power of two is padded (zeros or last value)
- The butterfly runs stage by stage on whole sections (no per-element loops)
- Twiddles w[k] = z**k are built by repeated multiplication with the
  primitive root z, as in the classic in-place formulation
- The scaling is asymmetric: 2/N forward and 0.5 inverse. This is NOT the
  textbook 1/N convention; the Laplace inversion relies on it.

The spectrum of a real sequence has central symmetry:
    s[i] = conj(s[N-i])
This redundancy is not enforced by the transform itself, which is why the
windows below always clear a harmonic on both ends of the spectrum.
"""

from __future__ import annotations

from enum import Enum
from functools import partial

import jax
import jax.numpy as jnp
import numpy as np


class PaddingMode(Enum):
    """How to fill the tail when the number of samples is not a power of two."""
    ZEROS = 0
    LAST_VALUE = 1


FORWARD_SCALE_NUMERATOR = 2.0  # forward factor is 2/N
INVERSE_SCALE = 0.5


# =============================================================================
# Size helpers
# =============================================================================

def next_power_of_two(n: int) -> int:
    """
    Return the smallest power of 2 >= n.

    Raises:
        ValueError: if n < 1
    """
    if n < 1:
        raise ValueError(f"Size must be >= 1, got {n}")
    p = 1
    while p < n:
        p *= 2
    return p


def is_power_of_two(n: int) -> bool:
    """True if n is a positive power of 2."""
    return n >= 1 and (n & (n - 1)) == 0


def int_log2(n: int) -> int:
    """Integer binary logarithm (floor)."""
    count = 0
    while n > 1:
        n //= 2
        count += 1
    return count


def bit_reverse(index: int, n_bits: int) -> int:
    """Reverse the lowest n_bits bits of index."""
    k = 0
    for _ in range(n_bits):
        k = (k << 1) | (index & 1)
        index >>= 1
    return k


def bit_reversal_permutation(n: int) -> np.ndarray:
    """
    Bit-reversed index order for a power-of-two length n.

    The permutation is an involution, so x[perm] both scatters and
    gathers the butterfly input.
    """
    if not is_power_of_two(n):
        raise ValueError(f"Length must be a power of 2, got {n}")
    n_bits = int_log2(n)
    return np.array([bit_reverse(i, n_bits) for i in range(n)], dtype=np.int64)


# =============================================================================
# Data preparation
# =============================================================================

def prepare_data(data, padding_mode: PaddingMode = PaddingMode.ZEROS) -> jnp.ndarray:
    """
    Build the initial complex spectrum from real samples.

    The length is increased to the next power of two and the real parts are
    initialized with the data; the tail is filled according to padding_mode.
    Byte-valued input (uint8) is treated as real.

    Args:
        data: 1D sequence of real (or byte) samples
        padding_mode: PaddingMode.ZEROS or PaddingMode.LAST_VALUE

    Returns:
        complex128 array of length next_power_of_two(len(data))
    """
    if isinstance(data, (bytes, bytearray)):
        data = np.frombuffer(data, dtype=np.uint8)
    values = jnp.asarray(data, dtype=jnp.float64)
    if values.ndim != 1:
        raise ValueError(f"Expected 1D data, got shape {values.shape}")
    n = values.shape[0]
    if n == 0:
        raise ValueError("Cannot transform an empty sequence")

    size = next_power_of_two(n)
    n_pad = size - n

    if n_pad > 0:
        if padding_mode == PaddingMode.ZEROS:
            trail = 0.0
        elif padding_mode == PaddingMode.LAST_VALUE:
            trail = values[-1]
        else:
            raise ValueError(f"Unknown padding mode: {padding_mode}")
        values = jnp.concatenate([values, jnp.full((n_pad,), trail, dtype=jnp.float64)])

    return values.astype(jnp.complex128)


# =============================================================================
# Cooley-Tukey butterfly
# =============================================================================

def twiddle_factors(span: int, inverse: bool) -> jnp.ndarray:
    """
    Twiddles w[k] = z**k for k in [0, span/2), z = exp(-/+ 2*pi*i/span).

    Built by repeated multiplication with z (cumulative product).
    Negative exponent for the forward transform, positive for the inverse.
    """
    argument = -2.0 * jnp.pi / span
    if inverse:
        argument = -argument
    z = jnp.cos(argument) + 1j * jnp.sin(argument)
    half = span // 2
    factors = jnp.concatenate([
        jnp.ones((1,), dtype=jnp.complex128),
        jnp.full((half - 1,), z, dtype=jnp.complex128),
    ])
    return jnp.cumprod(factors)


@partial(jax.jit, static_argnames=("inverse",))
def cooley_tukey(spectrum: jnp.ndarray, inverse: bool = False) -> jnp.ndarray:
    """
    The Cooley-Tukey algorithm on a power-of-two length complex array.

    Steps:
        1. Permute into bit-reversed order
        2. Span 2: sum and difference of adjacent pairs
        3. Spans 4, 8, ..., N: for each section combine
           (even + w[k]*odd, even - w[k]*odd), k < span/2
        4. Scale by 2/N (forward) or 0.5 (inverse)

    Args:
        spectrum: Complex input of length N = 2^p
        inverse: True for the inverse transform (conjugate rotation)

    Returns:
        Transformed complex array of length N
    """
    n = spectrum.shape[0]
    if not is_power_of_two(n):
        raise ValueError(f"FFT length must be a power of 2, got {n}")

    x = spectrum.astype(jnp.complex128)[bit_reversal_permutation(n)]

    if n >= 2:
        pairs = x.reshape(n // 2, 2)
        x = jnp.stack([
            pairs[:, 0] + pairs[:, 1],
            pairs[:, 0] - pairs[:, 1],
        ], axis=1).reshape(n)

    span = 4
    while span <= n:
        half = span // 2
        w = twiddle_factors(span, inverse)

        sections = x.reshape(n // span, span)
        even = sections[:, :half]
        odd = sections[:, half:] * w

        x = jnp.concatenate([even + odd, even - odd], axis=1).reshape(n)
        span *= 2

    factor = INVERSE_SCALE if inverse else FORWARD_SCALE_NUMERATOR / n
    return x * factor


# =============================================================================
# Public transforms
# =============================================================================

def direct_transform(data, padding_mode: PaddingMode = PaddingMode.ZEROS) -> jnp.ndarray:
    """
    Forward FFT of real (or byte) samples.

    Args:
        data: 1D real samples, padded to the next power of two if needed
        padding_mode: How to fill the padded tail

    Returns:
        Complex spectrum scaled by 2/N
    """
    spectrum = prepare_data(data, padding_mode)
    return cooley_tukey(spectrum, inverse=False)


def inverse_transform(spectrum) -> jnp.ndarray:
    """
    Inverse FFT returning the real parts, scaled by 0.5.

    inverse_transform(direct_transform(x)) reproduces x for power-of-two
    lengths.

    Raises:
        ValueError: if the spectrum is empty or its length is not a power of 2
    """
    spectrum = jnp.asarray(spectrum, dtype=jnp.complex128)
    if spectrum.ndim != 1:
        raise ValueError(f"Expected 1D spectrum, got shape {spectrum.shape}")
    n = spectrum.shape[0]
    if not is_power_of_two(n):
        raise ValueError(f"Spectrum length must be a power of 2, got {n}")
    return jnp.real(cooley_tukey(spectrum, inverse=True))


# =============================================================================
# Filters
# =============================================================================

def harmonic_index(n: int) -> jnp.ndarray:
    """Harmonic number of each bin: min(i, N - i)."""
    i = jnp.arange(n)
    return jnp.minimum(i, n - i)


def window(spectrum, start: int, stop: int) -> jnp.ndarray:
    """
    Keep harmonics start..stop and zero the rest on both ends of the spectrum.

    Harmonic h occupies bins h and N-h, so symmetry is preserved. The window
    ranges over harmonics 0..N/2-1; the Nyquist bin (h = N/2) is only removed
    when start exceeds N/2.

    Args:
        spectrum: Complex spectrum of length N
        start: Lowest harmonic to keep
        stop: Highest harmonic to keep

    Returns:
        New filtered spectrum
    """
    spectrum = jnp.asarray(spectrum)
    n = spectrum.shape[0]
    if n == 0:
        raise ValueError("Cannot filter an empty spectrum")

    h = harmonic_index(n)
    keep = (h >= start) & ((h <= stop) | (h >= n // 2))
    return jnp.where(keep, spectrum, jnp.zeros_like(spectrum))


def low_pass(spectrum, upper_limit: int) -> jnp.ndarray:
    """Low pass filter: keeps only harmonics 0..upper_limit."""
    return window(spectrum, 0, upper_limit)


def high_pass(spectrum, lower_limit: int) -> jnp.ndarray:
    """High pass filter: keeps only harmonics lower_limit..N-1."""
    spectrum = jnp.asarray(spectrum)
    return window(spectrum, lower_limit, spectrum.shape[0] - 1)
