"""
Accuracy diagnostics for Iseger inversion results.

Compares an IsegerResult with a known original f(t) over the requested
prefix of the output grid.
"""

from __future__ import annotations

from typing import Callable, NamedTuple

import jax.numpy as jnp

from lapinv.laplace.iseger import IsegerResult, iseger_invert


class InversionError(NamedTuple):
    """Error metrics of an inversion against a reference original."""
    max_abs: float  # max |f - f_ref|
    max_rel: float  # max |f - f_ref| / |f_ref|
    rms: float  # sqrt(mean((f - f_ref)^2))
    t_max_error: float  # Time of the largest absolute error
    n_compared: int


def compare_to_reference(
    result: IsegerResult,
    f_exact: Callable[[jnp.ndarray], jnp.ndarray],
    n_points: int | None = None,
) -> InversionError:
    """
    Compare an inversion result to the exact original.

    Args:
        result: Output of iseger_invert
        f_exact: Original f(t), accepting an array of times
        n_points: Number of leading points to compare (default: the number
            originally requested, not the padded length M)

    Returns:
        InversionError
    """
    if n_points is None:
        n_points = result.n_requested
    n_points = min(n_points, result.M)

    t = result.t[:n_points]
    f_ref = f_exact(t)
    abs_error = jnp.abs(result.f[:n_points] - f_ref)
    rel_error = abs_error / (jnp.abs(f_ref) + 1e-300)

    max_idx = int(jnp.argmax(abs_error))

    return InversionError(
        max_abs=float(jnp.max(abs_error)),
        max_rel=float(jnp.max(rel_error)),
        rms=float(jnp.sqrt(jnp.mean(abs_error**2))),
        t_max_error=float(t[max_idx]),
        n_compared=n_points,
    )


def degree_convergence(
    image: Callable[[jnp.ndarray], jnp.ndarray],
    f_exact: Callable[[jnp.ndarray], jnp.ndarray],
    delta_t: float,
    n_values: int,
    degrees: tuple[int, ...] = (16, 32, 48),
    critical_abscissa: float = 0.0,
) -> dict[int, InversionError]:
    """Invert the same image with each quadrature degree and collect errors."""
    errors = {}
    for degree in degrees:
        result = iseger_invert(
            image,
            delta_t,
            n_values,
            critical_abscissa=critical_abscissa,
            quadrature_degree=degree,
        )
        errors[degree] = compare_to_reference(result, f_exact)
    return errors


def print_convergence_report(errors: dict[int, InversionError]) -> None:
    """Print a table of errors per quadrature degree."""
    print(f"{'degree':>8} {'max abs':>12} {'max rel':>12} {'rms':>12} {'t @ max':>10}")
    print("-" * 58)
    for degree, err in sorted(errors.items()):
        print(
            f"{degree:>8d} {err.max_abs:>12.3e} {err.max_rel:>12.3e} "
            f"{err.rms:>12.3e} {err.t_max_error:>10.3f}"
        )
