"""Logistic growth bounded by a carrying capacity."""

from __future__ import annotations

import numpy as np

from odesim.core.integrator import rk4
from odesim.core.model_spec import LogisticConfig, SimulationResult
from odesim.models.base import SUCCESS_MESSAGE, build_rows, driver

COLUMNS = ["t", "P"]
DECIMALS = [2, 2]


def _plain(value: float) -> str:
    # Positional notation; 2e6 reads as 2000000, never 2e+06.
    return np.format_float_positional(value, trim="-")


def derivatives(t, y, params):
    # P > K gives a negative rate, pulling the population back down to K.
    (P,) = y
    return [params["r"] * P * (1 - P / params["K"])]


@driver("Logistic")
def simulate(config: LogisticConfig) -> SimulationResult:
    params = config.parameters.model_dump()
    P0 = config.initial_conditions.P
    span = config.time_span

    trajectory = rk4(derivatives, span.start, [P0], span.end, span.steps, params)
    rows = build_rows(trajectory, COLUMNS, DECIMALS)
    final_p = rows[-1]["P"]

    return SimulationResult(
        status="success",
        message=SUCCESS_MESSAGE,
        summary=(
            f"Population grew from {_plain(P0)} to {_plain(final_p)} "
            f"(Carrying Capacity: {_plain(params['K'])})."
        ),
        metrics={
            "P_initial": P0,
            "P_final": final_p,
            "K": params["K"],
        },
        columns=list(COLUMNS),
        data=rows,
    )
