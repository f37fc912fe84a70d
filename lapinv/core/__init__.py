"""Core numerical kernels for LAPINV."""
