"""
Laplace inversion subpackage.

Implements den Iseger's Gaussian-quadrature inversion on top of the
radix-2 FFT engine in lapinv.core.fft.

Main components:
- coefficients: Quadrature (alpha, lambda) tables for degrees 16, 32, 48
- iseger: Contour sampling, spectrum assembly and rescaling
- transfer_functions: Known Laplace pairs (growth, jumps, branch cut) as oracles
- diagnostics: Error metrics against known originals
"""

from .coefficients import (
    QuadratureNode,
    ISEGER_COEFFICIENTS,
    SUPPORTED_DEGREES,
    DEFAULT_DEGREE,
    UnsupportedQuadratureDegree,
    get_coefficients,
)

from .iseger import (
    IsegerParams,
    IsegerResult,
    OVERSAMPLING,
    CONTOUR_SHIFT,
    output_size,
    contour_shift,
    contour_points,
    evaluate_image,
    build_spectrum,
    rescale,
    iseger_invert,
    get_values,
    get_value,
)

from .transfer_functions import (
    LaplacePair,
    exponential,
    damped_oscillation,
    unit_step,
    ramp,
    second_order,
    diffusion_front,
    standard_pairs,
)

from .diagnostics import (
    InversionError,
    compare_to_reference,
    degree_convergence,
    print_convergence_report,
)


__all__ = [
    # Coefficients
    'QuadratureNode',
    'ISEGER_COEFFICIENTS',
    'SUPPORTED_DEGREES',
    'DEFAULT_DEGREE',
    'UnsupportedQuadratureDegree',
    'get_coefficients',

    # Inversion
    'IsegerParams',
    'IsegerResult',
    'OVERSAMPLING',
    'CONTOUR_SHIFT',
    'output_size',
    'contour_shift',
    'contour_points',
    'evaluate_image',
    'build_spectrum',
    'rescale',
    'iseger_invert',
    'get_values',
    'get_value',

    # Transfer functions
    'LaplacePair',
    'exponential',
    'damped_oscillation',
    'unit_step',
    'ramp',
    'second_order',
    'diffusion_front',
    'standard_pairs',

    # Diagnostics
    'InversionError',
    'compare_to_reference',
    'degree_convergence',
    'print_convergence_report',
]
