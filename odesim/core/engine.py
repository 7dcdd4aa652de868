"""Dispatcher — routes a configuration to its model driver, and the re-run path."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from odesim.core.model_spec import (
    SimulationConfig,
    SimulationResult,
    parse_config,
    with_parameters,
)
from odesim.models import DRIVERS

logger = logging.getLogger(__name__)


def available_models() -> list[str]:
    return sorted(DRIVERS)


def _not_implemented(model_type: Any) -> SimulationResult:
    return SimulationResult.error(f"Model type {model_type} not implemented yet.")


def run_simulation(config: SimulationConfig) -> SimulationResult:
    """Run one simulation. Never raises: failures come back as error results."""
    model_type = getattr(config, "model_type", None)
    simulate = DRIVERS.get(model_type) if isinstance(model_type, str) else None
    if simulate is None:
        logger.warning("Unknown model type: %r", model_type)
        return _not_implemented(model_type)

    logger.debug("Dispatching %s with %d steps", model_type, config.time_span.steps)
    return simulate(config)


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        problems.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "Invalid simulation config: " + "; ".join(problems)


def run_from_payload(payload: Mapping[str, Any]) -> SimulationResult:
    """Validate a raw JSON mapping and run it.

    Unknown ``model_type`` tags are reported as unimplemented models rather
    than as schema errors.
    """
    model_type = payload.get("model_type") if isinstance(payload, Mapping) else None
    if not isinstance(model_type, str) or model_type not in DRIVERS:
        return _not_implemented(model_type)
    try:
        config = parse_config(payload)
    except ValidationError as exc:
        logger.info("Rejected %s config: %s", model_type, exc.error_count())
        return SimulationResult.error(_format_validation_error(exc))
    return run_simulation(config)


def rerun(config: SimulationConfig, parameters: Mapping[str, float]) -> SimulationResult:
    """Re-run ``config`` with a modified parameter mapping.

    Initial conditions and time span are kept, so a successful result has
    the same ``columns`` as the original run.
    """
    try:
        updated = with_parameters(config, parameters)
    except ValidationError as exc:
        return SimulationResult.error(_format_validation_error(exc))
    except KeyError as exc:
        return SimulationResult.error(exc.args[0])
    return run_simulation(updated)
