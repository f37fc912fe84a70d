#!/usr/bin/env python3
"""
Exponential Decay Inversion Example.

This example demonstrates:
- Inverting F(p) = 1/(1 + p) on a uniform grid with get_values
- Output length rounded up to the next power of two
- Convergence with the quadrature degree (16, 32, 48)

The exact original is f(t) = exp(-t).

Run: python examples/exponential_decay.py
"""

import jax.numpy as jnp

from lapinv.laplace import (
    SUPPORTED_DEGREES,
    degree_convergence,
    exponential,
    get_values,
    print_convergence_report,
)


def main():
    delta_t = 0.1
    n_values = 20
    pair = exponential(1.0)

    values = get_values(pair.image, delta_t, n_values)

    print(f"Requested {n_values} values, got {values.shape[0]} (next power of 2)")
    print(f"{'t':>6} {'Iseger':>22} {'Exact':>22}")
    for i in range(values.shape[0]):
        t = i * delta_t
        exact = float(pair.original(jnp.asarray(t)))
        print(f"{t:>6.2f} {float(values[i]):>22.15f} {exact:>22.15f}")

    print("\nError by quadrature degree:")
    errors = degree_convergence(
        pair.image,
        pair.original,
        delta_t,
        n_values,
        degrees=SUPPORTED_DEGREES,
    )
    print_convergence_report(errors)


if __name__ == "__main__":
    main()
