"""Ballistic projectile under constant gravity, no drag."""

from __future__ import annotations

import math

from odesim.core.integrator import rk4
from odesim.core.model_spec import ProjectileConfig, SimulationResult
from odesim.models.base import SUCCESS_MESSAGE, build_rows, driver

COLUMNS = ["t", "x", "y", "vx", "vy"]
DECIMALS = [2, 2, 2, 2, 2]


def derivatives(t, y, params):
    _, _, vx, vy = y
    return [vx, vy, 0.0, -params["g"]]


def launch_velocity(velocity: float, angle_deg: float) -> tuple[float, float]:
    rad = math.radians(angle_deg)
    return velocity * math.cos(rad), velocity * math.sin(rad)


def _apex_and_range(rows: list[dict[str, float]]) -> tuple[float, float, float]:
    """(max_height, time_of_max_height, range).

    Range is the x of the last row with y >= 0, so it is only as precise as
    the step size; no landing-time root-find is attempted.
    """
    max_y, t_max = -math.inf, rows[0]["t"]
    ground_range = 0.0
    for row in rows:
        if row["y"] > max_y:
            max_y, t_max = row["y"], row["t"]
        if row["y"] >= 0:
            ground_range = row["x"]
    return max_y, t_max, ground_range


@driver("Projectile")
def simulate(config: ProjectileConfig) -> SimulationResult:
    params = config.parameters
    ic = config.initial_conditions
    span = config.time_span

    vx0, vy0 = launch_velocity(params.velocity, params.angle)
    trajectory = rk4(
        derivatives, span.start, [ic.x, ic.y, vx0, vy0], span.end, span.steps, {"g": params.g}
    )
    rows = build_rows(trajectory, COLUMNS, DECIMALS)
    max_y, t_max, ground_range = _apex_and_range(rows)

    return SimulationResult(
        status="success",
        message=SUCCESS_MESSAGE,
        summary=(
            f"Projectile reached max height of {max_y:.2f}m "
            f"and range of approx {ground_range:.2f}m."
        ),
        metrics={
            "max_height": max_y,
            "range": ground_range,
            "time_of_max_height": t_max,
        },
        columns=list(COLUMNS),
        data=rows,
    )
