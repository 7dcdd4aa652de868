"""Shared plumbing for the model drivers."""

from __future__ import annotations

import functools
import logging
from typing import Callable, Sequence

from odesim.core.integrator import Trajectory
from odesim.core.model_spec import SimulationConfig, SimulationResult
from odesim.core.settings import get_settings

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Simulation completed successfully"


def driver(model_name: str) -> Callable:
    """Wrap a model driver so that any failure comes back as an error result."""

    def decorate(func: Callable[[SimulationConfig], SimulationResult]):
        @functools.wraps(func)
        def wrapper(config: SimulationConfig) -> SimulationResult:
            try:
                check_step_budget(config.time_span.steps)
                return func(config)
            except Exception as exc:
                logger.warning("%s simulation failed: %s", model_name, exc)
                message = str(exc) or f"Unknown error in {model_name} simulation"
                return SimulationResult.error(message)

        return wrapper

    return decorate


def check_step_budget(steps: int) -> None:
    max_steps = get_settings().max_steps
    if steps > max_steps:
        raise ValueError(f"steps={steps} exceeds the configured maximum of {max_steps}")


def build_rows(
    trajectory: Trajectory,
    columns: Sequence[str],
    decimals: Sequence[int],
) -> list[dict[str, float]]:
    """Zip time and state into rows keyed by ``columns``.

    ``columns[0]`` names the time field; ``decimals`` gives the display
    precision for each column, in the same order.
    """
    rows = []
    for t, state in zip(trajectory.t, trajectory.y):
        values = (t, *state)
        rows.append({
            name: round(float(value), places)
            for name, value, places in zip(columns, values, decimals)
        })
    return rows
