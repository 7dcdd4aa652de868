"""Closed-form SIR quantities used to cross-check simulated trajectories."""

from __future__ import annotations

import numpy as np
from scipy.optimize import brentq


def basic_reproduction_number(beta: float, gamma: float) -> float:
    """R0 = beta / gamma. R0 > 1 means the epidemic grows."""
    if gamma <= 0:
        raise ValueError(f"gamma must be positive to define R0, got {gamma}")
    return beta / gamma


def final_size(beta: float, gamma: float, s0: float, i0: float, r0: float = 0.0) -> float:
    """Susceptible fraction remaining once the epidemic has burnt out.

    Solves the final-size relation ``s = s0 * exp(-R0 * (1 - s - r0))`` for
    ``s`` in ``[0, s0]``. Arguments are population fractions summing to 1.
    """
    if s0 <= 0:
        return 0.0
    if i0 <= 0:
        return s0
    R0 = basic_reproduction_number(beta, gamma)

    def residual(s: float) -> float:
        return s - s0 * np.exp(-R0 * (1.0 - s - r0))

    # residual(0) < 0 <= residual(s0) and residual is concave: one root.
    return float(brentq(residual, 0.0, s0, xtol=1e-12))
