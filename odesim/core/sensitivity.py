"""One-at-a-time parameter sensitivity, built on the re-run path.

``{"beta": 0.05}`` re-runs the model with beta scaled by 0.95 and 1.05 and
reports how each summary metric moves.
"""

from __future__ import annotations

import logging
from typing import Mapping

from pydantic import BaseModel, Field

from odesim.core.engine import rerun, run_simulation
from odesim.core.model_spec import SimulationConfig, SimulationResult, parameters_of

logger = logging.getLogger(__name__)


class SensitivityEntry(BaseModel):
    parameter: str
    fraction: float
    low_value: float | None = None
    high_value: float | None = None
    metrics_low: dict[str, float] = Field(default_factory=dict)
    metrics_high: dict[str, float] = Field(default_factory=dict)
    relative_change: dict[str, float] = Field(default_factory=dict)  # (high - low) / base
    error: str | None = None


class SensitivityReport(BaseModel):
    model_type: str
    base_metrics: dict[str, float]
    entries: list[SensitivityEntry]


def _relative_change(base: Mapping[str, float], low: Mapping[str, float], high: Mapping[str, float]) -> dict[str, float]:
    changes = {}
    for name, base_value in base.items():
        if name in low and name in high and base_value != 0:
            changes[name] = (high[name] - low[name]) / base_value
    return changes


def sensitivity_analysis(
    config: SimulationConfig,
    spec: Mapping[str, float],
    base: SimulationResult | None = None,
) -> SensitivityReport:
    """Perturb each parameter in ``spec`` by ± its fraction and compare metrics.

    Problems with a single parameter (unknown name, bad fraction, failed run)
    are recorded on that entry; the rest of the report is still produced.
    """
    base = base or run_simulation(config)
    base_metrics = base.metrics or {}
    params = parameters_of(config)

    entries = []
    for name, fraction in spec.items():
        entry = SensitivityEntry(parameter=name, fraction=fraction)
        entries.append(entry)

        if name not in params:
            entry.error = f"Unknown parameter for {config.model_type}: {name}"
            continue
        if not 0 < fraction < 1:
            entry.error = f"Sensitivity fraction must be in (0, 1), got {fraction}"
            continue

        entry.low_value = params[name] * (1 - fraction)
        entry.high_value = params[name] * (1 + fraction)
        low = rerun(config, {name: entry.low_value})
        high = rerun(config, {name: entry.high_value})
        if not (low.ok and high.ok):
            entry.error = low.message if not low.ok else high.message
            logger.info("Sensitivity run for %s failed: %s", name, entry.error)
            continue

        entry.metrics_low = low.metrics or {}
        entry.metrics_high = high.metrics or {}
        entry.relative_change = _relative_change(base_metrics, entry.metrics_low, entry.metrics_high)

    return SensitivityReport(
        model_type=config.model_type,
        base_metrics=base_metrics,
        entries=entries,
    )
