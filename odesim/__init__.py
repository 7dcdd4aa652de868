"""Initial-value ODE simulation engine for conversational tools."""

from odesim.core.engine import rerun, run_from_payload, run_simulation
from odesim.core.model_spec import SimulationConfig, SimulationResult

__all__ = [
    "SimulationConfig",
    "SimulationResult",
    "rerun",
    "run_from_payload",
    "run_simulation",
]
