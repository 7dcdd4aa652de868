"""The engine exposed as the ``simulate_model`` conversational tool."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError

from odesim.core.engine import run_from_payload
from odesim.core.model_spec import SimulationConfig, SimulationResult, parse_config
from odesim.core.sensitivity import sensitivity_analysis
from odesim.core.settings import get_settings

logger = logging.getLogger(__name__)

TOOL_NAME = "simulate_model"

TOOL_DESCRIPTION = """Run a numerical ODE simulation described by a structured JSON spec and return time-series data plus summary metrics.

Supported models (spec.model_type):
- "SIR": epidemic spread. parameters {beta, gamma}, initial_conditions {S, I, R}. Compartments may be fractions (S+I+R=1) or head counts; they are not normalised.
- "Logistic": bounded growth. parameters {r, K}, initial_conditions {P}.
- "Projectile": ballistic motion. parameters {velocity (m/s), angle (degrees), g (default 9.81)}, initial_conditions {x, y} (default 0, 0); time_span.end is the flight duration in seconds.

time_span {start (default 0), end, steps (default 100)} controls the fixed-step RK4 grid.
Set preview_mode=true for a fast, coarse run; set sensitivity, e.g. {"beta": 0.05}, for a ±5% one-at-a-time sensitivity check."""


class ToolOptions(BaseModel):
    return_data: bool = Field(True, description="Whether to return full time-series data")
    preview_mode: bool = Field(False, description="Fast preview with a capped number of steps")
    sensitivity: dict[str, float] | None = Field(
        None, description="Optional sensitivity analysis, e.g. {'beta': 0.05} for ±5%"
    )
    tags: list[str] | None = Field(None, description="Optional labels for this run")


class SimulationRequest(ToolOptions):
    spec: SimulationConfig


SIMULATION_TOOL = {
    "name": TOOL_NAME,
    "description": TOOL_DESCRIPTION,
    "input_schema": SimulationRequest.model_json_schema(),
}


def _apply_preview(spec: dict[str, Any]) -> dict[str, Any]:
    # A malformed time_span is left for schema validation to report.
    time_span = spec.get("time_span")
    if not isinstance(time_span, Mapping):
        return spec
    cap = get_settings().preview_max_steps
    steps = time_span.get("steps", 100)
    if isinstance(steps, (int, float)) and steps > cap:
        return {**spec, "time_span": {**time_span, "steps": cap}}
    return spec


def _envelope(result: dict[str, Any]) -> dict[str, Any]:
    return {"_meta": {"result": result}}


def execute_tool(tool_input: Mapping[str, Any]) -> dict[str, Any]:
    """Run one ``simulate_model`` call. Never raises.

    Returns the ``{"_meta": {"result": ...}}`` envelope the chat renderer reads.
    """
    try:
        options = ToolOptions.model_validate({k: v for k, v in tool_input.items() if k != "spec"})
    except ValidationError as exc:
        return _envelope(SimulationResult.error(f"Invalid tool options: {exc.errors()[0]['msg']}").to_payload())

    spec = tool_input.get("spec")
    if not isinstance(spec, Mapping):
        return _envelope(SimulationResult.error("Missing simulation spec").to_payload())
    spec = dict(spec)
    if options.preview_mode:
        spec = _apply_preview(spec)

    logger.info("Executing %s for %s", TOOL_NAME, spec.get("model_type"))
    result = run_from_payload(spec)
    payload = result.to_payload()

    if result.ok and options.sensitivity:
        report = sensitivity_analysis(parse_config(spec), options.sensitivity, base=result)
        payload["sensitivity"] = report.model_dump(mode="json")
    if not options.return_data:
        payload["data"] = []
    if options.tags:
        payload["tags"] = options.tags
    return _envelope(payload)


def summarize_for_model(envelope: Mapping[str, Any]) -> str:
    """Compact JSON for the tool_result block; the row data stays with the renderer."""
    result = envelope["_meta"]["result"]
    brief = {k: v for k, v in result.items() if k != "data"}
    brief["n_rows"] = len(result.get("data", []))
    return json.dumps(brief)
