"""odesim — Streamlit front end.

Pick a model (or paste a JSON config), then drag the parameter sliders to
re-run the simulation in place.
"""

import json

import plotly.graph_objects as go
import streamlit as st
from pydantic import ValidationError

from odesim.core.engine import available_models, rerun, run_simulation
from odesim.core.model_spec import parameters_of, parse_config
from odesim.core.sliders import slider_range

st.set_page_config(
    page_title="odesim",
    page_icon="📈",
    layout="wide",
)

# ---------------------------------------------------------------------------
# Styling
# ---------------------------------------------------------------------------
st.markdown("""
<style>
    .main .block-container { max-width: 1100px; padding-top: 2rem; }
    .stMetric { background: #f8f9fa; border-radius: 8px; padding: 12px; }
</style>
""", unsafe_allow_html=True)

PRESETS = {
    "SIR": {
        "model_type": "SIR",
        "parameters": {"beta": 0.3, "gamma": 0.1},
        "initial_conditions": {"S": 0.99, "I": 0.01, "R": 0.0},
        "time_span": {"start": 0, "end": 160, "steps": 160},
    },
    "Logistic": {
        "model_type": "Logistic",
        "parameters": {"r": 0.1, "K": 1000},
        "initial_conditions": {"P": 10},
        "time_span": {"start": 0, "end": 100, "steps": 100},
    },
    "Projectile": {
        "model_type": "Projectile",
        "parameters": {"velocity": 50, "angle": 45, "g": 9.81},
        "initial_conditions": {"x": 0, "y": 0},
        "time_span": {"start": 0, "end": 10, "steps": 100},
    },
}

AXIS_LABELS = {
    "SIR": ("Days", "Population"),
    "Logistic": ("Time", "Population"),
    "Projectile": ("Time (s)", "Value"),
}

COLORS = ["#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd"]


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
st.title("odesim")
st.markdown("**Fixed-step RK4 simulations** for epidemic, growth and projectile models")
st.divider()

# ---------------------------------------------------------------------------
# Sidebar — Model input
# ---------------------------------------------------------------------------
with st.sidebar:
    st.header("Model")
    model_type = st.selectbox("Model type", available_models())
    raw = st.text_area(
        "Config (JSON)",
        value=json.dumps(PRESETS[model_type], indent=2),
        height=260,
        key=f"config_{model_type}",
    )

try:
    config = parse_config(json.loads(raw))
except (json.JSONDecodeError, ValidationError) as e:
    st.error(f"Invalid config: {e}")
    st.stop()

# ---------------------------------------------------------------------------
# Sidebar — Parameter sliders (each change triggers a re-run)
# ---------------------------------------------------------------------------
with st.sidebar:
    st.divider()
    st.header("Parameters")

    if st.button("Reset to Config Defaults", use_container_width=True):
        st.rerun()

    defaults = parameters_of(config)
    params = {}
    for pname, pvalue in defaults.items():
        low, high = slider_range(pname, pvalue)
        params[pname] = st.slider(
            pname,
            min_value=float(low),
            max_value=float(high),
            value=float(pvalue),
            step=max((high - low) / 200, 1e-6),
            format="%.4g",
        )

result = run_simulation(config) if params == defaults else rerun(config, params)

# ---------------------------------------------------------------------------
# Main content
# ---------------------------------------------------------------------------
if not result.ok:
    st.error(f"Simulation error: {result.message}")
    st.stop()

st.subheader(config.model_type)
if result.summary:
    st.markdown(result.summary)

time_col, *series = result.columns
t = [row[time_col] for row in result.data]

fig = go.Figure()
if config.model_type == "Projectile":
    fig.add_trace(go.Scatter(
        x=[row["x"] for row in result.data],
        y=[row["y"] for row in result.data],
        mode="lines",
        name="trajectory",
        line=dict(width=2, color=COLORS[0]),
    ))
    x_title, y_title = "x (m)", "y (m)"
else:
    for i, col in enumerate(series):
        fig.add_trace(go.Scatter(
            x=t, y=[row[col] for row in result.data],
            mode="lines",
            name=col,
            line=dict(width=2, color=COLORS[i % len(COLORS)]),
        ))
    x_title, y_title = AXIS_LABELS[config.model_type]
fig.update_layout(
    xaxis_title=x_title,
    yaxis_title=y_title,
    hovermode="x unified",
    legend=dict(orientation="h", y=1.12),
    margin=dict(t=40, b=40),
    height=500,
)
st.plotly_chart(fig, use_container_width=True)

if result.metrics:
    cols = st.columns(min(len(result.metrics), 4))
    for i, (name, value) in enumerate(result.metrics.items()):
        cols[i % len(cols)].metric(name, f"{value:,.4g}")

with st.expander("Raw data"):
    st.dataframe(result.data, use_container_width=True)
