"""SIR model against known analytical properties."""

import pytest

from odesim.core.model_spec import SIRConfig, parse_config
from odesim.models import sir


def _sir_config(beta=0.3, gamma=0.1, S=0.99, I=0.01, R=0.0, start=0, end=160, steps=160) -> SIRConfig:
    return parse_config({
        "model_type": "SIR",
        "parameters": {"beta": beta, "gamma": gamma},
        "initial_conditions": {"S": S, "I": I, "R": R},
        "time_span": {"start": start, "end": end, "steps": steps},
    })


class TestDerivatives:
    def test_classic_rates(self):
        dS, dI, dR = sir.derivatives(0.0, [0.99, 0.01, 0.0], {"beta": 0.3, "gamma": 0.1})
        assert dS == pytest.approx(-0.00297)
        assert dI == pytest.approx(0.00197)
        assert dR == pytest.approx(0.001)

    def test_rates_sum_to_zero(self):
        rates = sir.derivatives(0.0, [500.0, 300.0, 200.0], {"beta": 0.7, "gamma": 0.2})
        assert sum(rates) == pytest.approx(0.0, abs=1e-12)

    def test_zero_population_has_no_flux(self):
        assert sir.derivatives(0.0, [0.0, 0.0, 0.0], {"beta": 0.3, "gamma": 0.1}) == [0.0, 0.0, 0.0]


class TestRawCountScenario:
    """beta=0.3, gamma=0.1, S=990, I=10, R=0 over 100 days in 100 steps."""

    @pytest.fixture
    def result(self):
        return sir.simulate(_sir_config(S=990, I=10, R=0, end=100, steps=100))

    def test_success_with_101_rows(self, result):
        assert result.status == "success"
        assert result.columns == ["t", "S", "I", "R"]
        assert len(result.data) == 101

    def test_first_row_is_unnormalised_initial_state(self, result):
        assert result.data[0] == {"t": 0.0, "S": 990.0, "I": 10.0, "R": 0.0}

    def test_peak_exceeds_initial_infected(self, result):
        assert result.metrics["I_peak"] > 10
        assert 0 < result.metrics["t_peak"] < 100

    def test_peak_matches_rows(self, result):
        peak_row = max(result.data, key=lambda row: row["I"])
        assert result.metrics["I_peak"] == peak_row["I"]
        assert result.metrics["t_peak"] == peak_row["t"]


class TestConservation:
    @pytest.mark.parametrize("beta,gamma", [(0.3, 0.1), (1.5, 0.2), (0.05, 0.5), (0.0, 0.0), (0.4, 0.0)])
    def test_population_conserved(self, beta, gamma):
        result = sir.simulate(_sir_config(beta=beta, gamma=gamma))
        assert result.status == "success"
        for row in result.data:
            assert abs(row["S"] + row["I"] + row["R"] - 1.0) < 1e-3

    def test_no_compartment_goes_negative(self):
        result = sir.simulate(_sir_config(beta=0.8, gamma=0.1, steps=400))
        for row in result.data:
            assert row["S"] >= 0 and row["I"] >= 0 and row["R"] >= 0


class TestMetrics:
    def test_epidemic_peaks_then_declines(self):
        result = sir.simulate(_sir_config(end=300, steps=300))
        assert result.metrics["I_peak"] > 0.2
        assert result.data[-1]["I"] < 0.001

    def test_r0_metric(self):
        result = sir.simulate(_sir_config())
        assert result.metrics["R0"] == pytest.approx(3.0)

    def test_r0_omitted_without_recovery(self):
        result = sir.simulate(_sir_config(gamma=0.0))
        assert "R0" not in result.metrics
        assert "attack_rate_theory" not in result.metrics

    def test_attack_rate_matches_final_size_equation(self):
        result = sir.simulate(_sir_config(end=300, steps=600))
        metrics = result.metrics
        assert 0.92 < metrics["attack_rate_theory"] < 0.96
        assert abs(metrics["attack_rate"] - metrics["attack_rate_theory"]) < 0.01

    def test_final_recovered_is_last_row(self):
        result = sir.simulate(_sir_config())
        assert result.metrics["final_recovered"] == result.data[-1]["R"]

    def test_summary_reports_percentage_and_day(self):
        result = sir.simulate(_sir_config())
        pct = result.metrics["I_peak"] * 100
        assert result.summary == (
            f"Peak infection of {pct:.1f}% occurred at day {result.metrics['t_peak']:.1f}."
        )


class TestDegenerate:
    def test_zero_population_is_stagnant_success(self):
        result = sir.simulate(_sir_config(S=0, I=0, R=0, end=10, steps=10))
        assert result.status == "success"
        assert all(row["S"] == row["I"] == row["R"] == 0 for row in result.data)
        assert result.metrics["I_peak"] == 0
        assert "attack_rate" not in result.metrics

    def test_single_step(self):
        result = sir.simulate(_sir_config(end=1, steps=1))
        assert len(result.data) == 2
        assert result.data[-1]["t"] == 1.0

    def test_rounding_precision(self):
        result = sir.simulate(_sir_config(end=10, steps=3))
        for row in result.data:
            assert row["t"] == round(row["t"], 2)
            assert row["I"] == round(row["I"], 4)

    def test_no_infection_peaks_at_window_start(self):
        result = sir.simulate(_sir_config(S=1.0, I=0.0, R=0.0, start=5, end=15, steps=10))
        assert result.metrics["I_peak"] == 0
        assert result.metrics["t_peak"] == 5.0
        assert result.summary == "Peak infection of 0.0% occurred at day 5.0."

    def test_declining_epidemic_peaks_at_first_row(self):
        result = sir.simulate(_sir_config(beta=0.05, gamma=0.5, start=20, end=40, steps=20))
        assert result.metrics["I_peak"] == result.data[0]["I"]
        assert result.metrics["t_peak"] == 20.0
