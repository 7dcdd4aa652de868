"""Slider ranges for the interactive parameter controls."""

from __future__ import annotations

# Fixed bounds where the physics suggests them; otherwise 0.1x-10x the default.
SLIDER_BOUNDS = {
    "angle": (0.0, 90.0),
}


def slider_range(name: str, value: float) -> tuple[float, float]:
    """(low, high) for a parameter slider, always containing ``value``.

    A config value outside the fixed bounds widens them, so the slider's
    starting position is the configured parameter and not a clamped one.
    """
    if name in SLIDER_BOUNDS:
        low, high = SLIDER_BOUNDS[name]
    elif value == 0:
        low, high = 0.0, 1.0
    else:
        low, high = sorted((value * 0.1, value * 10.0))
    return min(low, value), max(high, value)
