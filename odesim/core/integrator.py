"""Fixed-step classical Runge-Kutta (RK4) integrator.

Model-agnostic: the caller supplies the right-hand side ``derivs(t, y, params)``
and the integrator knows nothing about what the state vector means.
"""

from __future__ import annotations

from typing import Callable, Mapping, NamedTuple, Sequence

import numpy as np

DerivativeFunction = Callable[[float, np.ndarray, Mapping[str, float]], Sequence[float]]


class Trajectory(NamedTuple):
    t: np.ndarray  # shape (steps + 1,)
    y: np.ndarray  # shape (steps + 1, n_state)


def _evaluate(derivs: DerivativeFunction, t: float, y: np.ndarray, params: Mapping[str, float]) -> np.ndarray:
    dy = np.asarray(derivs(t, y, params), dtype=np.float64)
    if dy.shape != y.shape:
        raise ValueError(
            f"Derivative function returned shape {dy.shape}, expected {y.shape}"
        )
    return dy


def rk4(
    derivs: DerivativeFunction,
    t0: float,
    y0: Sequence[float],
    t_end: float,
    steps: int,
    params: Mapping[str, float],
) -> Trajectory:
    """Integrate ``derivs`` from ``t0`` to ``t_end`` in ``steps`` uniform steps.

    Returns ``steps + 1`` time points and state vectors; the first row is
    ``(t0, y0)`` unchanged. Pure and deterministic for identical inputs.

    Raises ValueError for ``steps < 1`` or a mis-shaped derivative, and
    FloatingPointError when the state overflows or becomes NaN.
    """
    if steps < 1:
        raise ValueError(f"steps must be >= 1, got {steps}")

    dt = (t_end - t0) / steps
    y = np.array(y0, dtype=np.float64)

    t_points = t0 + dt * np.arange(steps + 1, dtype=np.float64)
    t_points[-1] = t_end
    y_points = np.empty((steps + 1, y.size), dtype=np.float64)
    y_points[0] = y

    with np.errstate(over="raise", invalid="raise", divide="raise"):
        for i in range(steps):
            t = t_points[i]
            k1 = _evaluate(derivs, t, y, params)
            k2 = _evaluate(derivs, t + dt / 2, y + dt / 2 * k1, params)
            k3 = _evaluate(derivs, t + dt / 2, y + dt / 2 * k2, params)
            k4 = _evaluate(derivs, t + dt, y + dt * k3, params)
            y = y + dt / 6 * (k1 + 2 * k2 + 2 * k3 + k4)
            if not np.all(np.isfinite(y)):
                raise FloatingPointError(
                    f"Non-finite state at t={t_points[i + 1]:.6g} (step {i + 1}/{steps})"
                )
            y_points[i + 1] = y

    return Trajectory(t=t_points, y=y_points)
