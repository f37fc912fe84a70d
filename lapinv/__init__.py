"""
LAPINV: JAX-based numerical inversion of Laplace transforms

This library recovers a real-valued time-domain sequence from a Laplace
image F(p) using den Iseger's Gaussian-quadrature contour method together
with a radix-2 Cooley-Tukey FFT.

Key Features:
- Forward/inverse FFT with fixed 2/N forward and 0.5 inverse scaling
- Zero or last-value padding to the next power of two
- Symmetric low-pass/high-pass spectral windows
- Gaussian quadrature of degree 16, 32 or 48 on the Bromwich contour
- Batched evaluation of the image on the whole contour grid

Reference:
    P. den Iseger, Numerical Transform Inversion Using Gaussian Quadrature.
    Probability in the Engineering and Informational Sciences 20 (2006), 1-44.
"""

import jax

# The inversion rescales by exp(b*j) and needs double precision throughout.
jax.config.update("jax_enable_x64", True)

from lapinv.core.fft import (
    PaddingMode,
    next_power_of_two,
    is_power_of_two,
    direct_transform,
    inverse_transform,
    low_pass,
    high_pass,
    window,
)
from lapinv.laplace.iseger import (
    IsegerParams,
    IsegerResult,
    UnsupportedQuadratureDegree,
    get_values,
    get_value,
    iseger_invert,
)
from lapinv.laplace.coefficients import SUPPORTED_DEGREES, get_coefficients

__version__ = "0.1.0"
__all__ = [
    # FFT engine
    "PaddingMode",
    "next_power_of_two",
    "is_power_of_two",
    "direct_transform",
    "inverse_transform",
    "low_pass",
    "high_pass",
    "window",
    # Inversion
    "IsegerParams",
    "IsegerResult",
    "UnsupportedQuadratureDegree",
    "get_values",
    "get_value",
    "iseger_invert",
    # Coefficients
    "SUPPORTED_DEGREES",
    "get_coefficients",
]
