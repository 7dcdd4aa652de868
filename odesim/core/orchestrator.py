"""Orchestrator — command-line entry point: config file → simulation result JSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from odesim.core.engine import rerun, run_from_payload, run_simulation
from odesim.core.log_config import setup_logging
from odesim.core.model_spec import SimulationResult, parse_config, with_parameters
from odesim.core.sensitivity import sensitivity_analysis


def _log(msg: str) -> None:
    print(f"[odesim] {msg}", file=sys.stderr, flush=True)


def _parse_assignment(text: str) -> tuple[str, float]:
    """'beta=0.4' → ('beta', 0.4)."""
    name, sep, value = text.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected name=value, got {text!r}")
    try:
        return name.strip(), float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None


def run_config_file(
    config_path: Path,
    overrides: dict[str, float] | None = None,
    sensitivity: dict[str, float] | None = None,
) -> dict:
    """Load a JSON config, optionally re-run with parameter overrides, return the payload."""
    payload = json.loads(Path(config_path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        return SimulationResult.error("Config file must contain a JSON object").to_payload()
    _log(f"Loaded {payload.get('model_type', '?')} config from {config_path}")

    if not overrides and not sensitivity:
        return run_from_payload(payload).to_payload()

    try:
        config = parse_config(payload)
    except ValidationError:
        # Let run_from_payload build the error result
        return run_from_payload(payload).to_payload()

    if overrides:
        _log(f"Re-running with {', '.join(f'{k}={v:g}' for k, v in overrides.items())}")
        result = rerun(config, overrides)
        if not result.ok:
            return result.to_payload()
        config = with_parameters(config, overrides)
    else:
        result = run_simulation(config)

    out = result.to_payload()
    if result.ok and sensitivity:
        _log(f"Sensitivity analysis on {', '.join(sensitivity)}")
        out["sensitivity"] = sensitivity_analysis(config, sensitivity, base=result).model_dump(mode="json")
    return out


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="odesim — run an ODE simulation (SIR, Logistic, Projectile) from a JSON config",
    )
    parser.add_argument("--config", required=True, type=Path, help="Path to a JSON simulation config")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        type=_parse_assignment,
        default=[],
        metavar="NAME=VALUE",
        help="Override a model parameter (repeatable), e.g. --set beta=0.4",
    )
    parser.add_argument(
        "--sensitivity",
        action="append",
        type=_parse_assignment,
        default=[],
        metavar="NAME=FRACTION",
        help="One-at-a-time sensitivity, e.g. --sensitivity beta=0.05 for ±5%%",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write the result JSON here instead of stdout")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        out = run_config_file(args.config, dict(args.overrides), dict(args.sensitivity))
    except (OSError, ValueError) as e:
        # ValueError covers both JSONDecodeError and UnicodeDecodeError
        out = SimulationResult.error(f"Could not read config: {e}").to_payload()

    text = json.dumps(out, indent=2)
    if args.output:
        args.output.write_text(text + "\n")
        _log(f"Result written to {args.output}")
    else:
        print(text)

    if out["status"] != "success":
        _log(f"ERROR: {out['message']}")
        sys.exit(1)


if __name__ == "__main__":
    main()
