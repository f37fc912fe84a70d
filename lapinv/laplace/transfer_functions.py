"""
Known Laplace pairs used as oracles for the inversion.

Images follow the callback contract of lapinv.laplace.iseger: one Python
complex in, one complex out (cmath), so they work with the default
point-by-point evaluation. Originals take an array of times.

Each pair records the critical abscissa it needs (right of every pole or
branch point; 0 is enough when the contour shift b/dt already clears them)
and whether the original jumps at t = 0, where the inversion must return
the right limit f(0+).
"""

from __future__ import annotations

import cmath
from typing import Callable, NamedTuple

import jax.numpy as jnp
from jax.scipy.special import erfc


class LaplacePair(NamedTuple):
    """Image F(p) with its original f(t)."""
    name: str
    image: Callable[[complex], complex]
    original: Callable[[jnp.ndarray], jnp.ndarray]
    critical_abscissa: float = 0.0
    jump_at_zero: bool = False  # f(0+) != 0


def exponential(alpha: float = 1.0) -> LaplacePair:
    """
    1/(p + alpha) <-> exp(-alpha*t).

    For alpha < 0 the original grows and the pole at p = -alpha sits in the
    right half-plane; the contour is moved one unit right of it.
    """
    def image(p):
        return 1.0 / (p + alpha)

    def original(t):
        return jnp.exp(-alpha * t)

    return LaplacePair(
        name=f"exponential[{alpha:g}]",
        image=image,
        original=original,
        critical_abscissa=1.0 - alpha if alpha < 0 else 0.0,
        jump_at_zero=True,
    )


def damped_oscillation(alpha: float, omega: float, cosine: bool = False) -> LaplacePair:
    """
    Poles at p = -alpha +/- i*omega.

        omega/((p+alpha)^2 + omega^2)    <-> exp(-alpha*t) sin(omega*t)
        (p+alpha)/((p+alpha)^2 + omega^2) <-> exp(-alpha*t) cos(omega*t)

    The cosine form jumps from 0 to 1 at t = 0. A negative alpha gives a
    growing oscillation and a positive critical abscissa.
    """
    def image(p):
        q = p + alpha
        numerator = q if cosine else omega
        return numerator / (q * q + omega * omega)

    def original(t):
        wave = jnp.cos(omega * t) if cosine else jnp.sin(omega * t)
        return jnp.exp(-alpha * t) * wave

    kind = "cos" if cosine else "sin"
    return LaplacePair(
        name=f"damped_{kind}[{alpha:g},{omega:g}]",
        image=image,
        original=original,
        critical_abscissa=1.0 - alpha if alpha < 0 else 0.0,
        jump_at_zero=cosine,
    )


def unit_step() -> LaplacePair:
    """1/p <-> 1 (Heaviside jump at t = 0, pole on the imaginary axis)."""
    return LaplacePair(
        name="unit_step",
        image=lambda p: 1.0 / p,
        original=jnp.ones_like,
        jump_at_zero=True,
    )


def ramp() -> LaplacePair:
    """1/p^2 <-> t (continuous at 0, kink only)."""
    return LaplacePair(
        name="ramp",
        image=lambda p: 1.0 / (p * p),
        original=lambda t: t,
    )


def second_order(omega_n: float = 1.0, zeta: float = 0.5) -> LaplacePair:
    """
    Underdamped second-order system, 0 < zeta < 1.

        F(p) = 1/(p^2 + 2*zeta*omega_n*p + omega_n^2)
        f(t) = exp(-zeta*omega_n*t) sin(omega_d*t) / omega_d,
               omega_d = omega_n*sqrt(1 - zeta^2)

    With the defaults the poles are -1/2 +/- i*sqrt(3)/2.
    """
    if not 0.0 < zeta < 1.0:
        raise ValueError(f"Damping ratio must be in (0, 1), got {zeta}")

    sigma = zeta * omega_n
    omega_d = omega_n * (1.0 - zeta**2) ** 0.5

    def image(p):
        return 1.0 / (p * p + 2.0 * sigma * p + omega_n**2)

    def original(t):
        return jnp.exp(-sigma * t) * jnp.sin(omega_d * t) / omega_d

    return LaplacePair(
        name=f"second_order[{omega_n:g},{zeta:g}]",
        image=image,
        original=original,
    )


def diffusion_front(x: float = 1.0) -> LaplacePair:
    """
    exp(-x*sqrt(p))/p <-> erfc(x / (2*sqrt(t))).

    Branch point at p = 0 (cmath.sqrt takes the principal branch, which is
    the right one on the contour). All derivatives of f vanish at t = 0+.
    """
    def image(p):
        return cmath.exp(-x * cmath.sqrt(p)) / p

    def original(t):
        t_safe = jnp.maximum(t, 1e-300)
        return jnp.where(t > 0, erfc(x / (2.0 * jnp.sqrt(t_safe))), 0.0)

    return LaplacePair(
        name=f"diffusion_front[{x:g}]",
        image=image,
        original=original,
    )


def standard_pairs() -> list[LaplacePair]:
    """Pairs covering decay, growth, oscillation, jumps and a branch cut."""
    return [
        exponential(1.0),
        exponential(-1.0),
        damped_oscillation(0.5, 2.0),
        damped_oscillation(0.5, 2.0, cosine=True),
        damped_oscillation(-0.25, 1.0),
        unit_step(),
        ramp(),
        second_order(),
        diffusion_front(1.0),
    ]
