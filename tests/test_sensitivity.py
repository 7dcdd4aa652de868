"""Tests for one-at-a-time sensitivity analysis."""

import pytest

from odesim.core.model_spec import parse_config
from odesim.core.sensitivity import SensitivityReport, sensitivity_analysis


def _sir():
    return parse_config({
        "model_type": "SIR",
        "parameters": {"beta": 0.3, "gamma": 0.1},
        "initial_conditions": {"S": 0.99, "I": 0.01, "R": 0.0},
        "time_span": {"end": 160, "steps": 160},
    })


def _logistic():
    return parse_config({
        "model_type": "Logistic",
        "parameters": {"r": 0.1, "K": 1000},
        "initial_conditions": {"P": 10},
        "time_span": {"end": 50, "steps": 50},
    })


def test_beta_raises_peak():
    report = sensitivity_analysis(_sir(), {"beta": 0.1})
    assert isinstance(report, SensitivityReport)
    assert report.model_type == "SIR"

    (entry,) = report.entries
    assert entry.error is None
    assert entry.low_value == pytest.approx(0.27)
    assert entry.high_value == pytest.approx(0.33)
    assert entry.metrics_high["I_peak"] > entry.metrics_low["I_peak"]
    assert entry.relative_change["I_peak"] > 0


def test_gamma_lowers_peak():
    (entry,) = sensitivity_analysis(_sir(), {"gamma": 0.2}).entries
    assert entry.relative_change["I_peak"] < 0


def test_capacity_raises_final_population():
    (entry,) = sensitivity_analysis(_logistic(), {"K": 0.05}).entries
    assert entry.relative_change["P_final"] > 0


def test_unknown_parameter_recorded_on_entry():
    report = sensitivity_analysis(_sir(), {"delta": 0.05, "beta": 0.05})
    bad, good = report.entries
    assert "delta" in bad.error
    assert good.error is None


def test_fraction_out_of_range():
    (entry,) = sensitivity_analysis(_sir(), {"beta": 1.5}).entries
    assert "fraction" in entry.error
    assert entry.metrics_low == {}


def test_base_metrics_reused():
    report = sensitivity_analysis(_logistic(), {"r": 0.1})
    assert report.base_metrics["K"] == 1000
