"""SIR epidemic model: susceptible → infected → recovered."""

from __future__ import annotations

from odesim.core.analysis import basic_reproduction_number, final_size
from odesim.core.integrator import rk4
from odesim.core.model_spec import SIRConfig, SimulationResult
from odesim.models.base import SUCCESS_MESSAGE, build_rows, driver

COLUMNS = ["t", "S", "I", "R"]
DECIMALS = [2, 4, 4, 4]


def derivatives(t, y, params):
    S, I, R = y
    beta = params["beta"]
    gamma = params["gamma"]

    # Population is not pre-normalised; N == 0 means no infection flux.
    N = S + I + R
    inv_n = 1.0 / N if N > 0 else 0.0

    infection = beta * S * I * inv_n
    recovery = gamma * I
    return [-infection, infection - recovery, recovery]


def _peak(rows: list[dict[str, float]]) -> tuple[float, float]:
    """First row with the largest I, as (I_peak, t_peak)."""
    i_peak, t_peak = rows[0]["I"], rows[0]["t"]
    for row in rows[1:]:
        if row["I"] > i_peak:
            i_peak, t_peak = row["I"], row["t"]
    return i_peak, t_peak


@driver("SIR")
def simulate(config: SIRConfig) -> SimulationResult:
    params = config.parameters.model_dump()
    ic = config.initial_conditions
    span = config.time_span

    trajectory = rk4(derivatives, span.start, [ic.S, ic.I, ic.R], span.end, span.steps, params)
    rows = build_rows(trajectory, COLUMNS, DECIMALS)

    i_peak, t_peak = _peak(rows)
    metrics = {
        "I_peak": i_peak,
        "t_peak": t_peak,
        "final_recovered": rows[-1]["R"],
    }

    n0 = ic.S + ic.I + ic.R
    if n0 > 0:
        metrics["attack_rate"] = 1.0 - float(trajectory.y[-1][0]) / n0
    if params["gamma"] > 0:
        metrics["R0"] = basic_reproduction_number(params["beta"], params["gamma"])
        if n0 > 0 and ic.I > 0:
            s_inf = final_size(params["beta"], params["gamma"], ic.S / n0, ic.I / n0, ic.R / n0)
            metrics["attack_rate_theory"] = 1.0 - s_inf

    return SimulationResult(
        status="success",
        message=SUCCESS_MESSAGE,
        summary=f"Peak infection of {i_peak * 100:.1f}% occurred at day {t_peak:.1f}.",
        metrics=metrics,
        columns=list(COLUMNS),
        data=rows,
    )
