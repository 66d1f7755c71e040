"""Easing and interpolation helpers used by the face animation."""

from __future__ import annotations

import math
from typing import Callable

Easing = Callable[[float], float]

BACK_OVERSHOOT = 1.70158
ELASTIC_PERIOD = 0.3


def linear(t: float) -> float:
    return t


def ease_in_out_cubic(t: float) -> float:
    """Smooth ease in-out."""
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


def ease_out_back(t: float) -> float:
    """Ease out with a small overshoot past 1 before settling."""
    if t == 0 or t == 1:
        return t
    c3 = BACK_OVERSHOOT + 1
    return 1 + c3 * (t - 1) ** 3 + BACK_OVERSHOOT * (t - 1) ** 2


def ease_out_elastic(t: float) -> float:
    """Springy ease out; oscillates around 1 before settling."""
    if t == 0 or t == 1:
        return t
    p = ELASTIC_PERIOD
    return 2 ** (-10 * t) * math.sin((t - p / 4) * (2 * math.pi) / p) + 1


def ease_out_quad(t: float) -> float:
    return 1 - (1 - t) * (1 - t)


def smoothstep(t: float) -> float:
    return t * t * (3 - 2 * t)


EASINGS: dict[str, Easing] = {
    "linear": linear,
    "ease_in_out_cubic": ease_in_out_cubic,
    "ease_out_back": ease_out_back,
    "ease_out_elastic": ease_out_elastic,
    "ease_out_quad": ease_out_quad,
    "smoothstep": smoothstep,
}


def get_easing(name: str) -> Easing:
    """Look up an easing curve by name (raises KeyError if unknown)."""
    return EASINGS[name]


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation. t is not clamped, so overshooting curves extrapolate."""
    return a + (b - a) * t


def bounce(time: float, amplitude: float = 1.0, frequency: float = 1.0, phase: float = 0.0) -> float:
    """Periodic sine bounce."""
    return amplitude * math.sin(time * frequency * math.pi * 2 + phase)


def smooth_noise(time: float, seed: float = 0.0) -> float:
    """Smooth pseudo-random value in [-1, 1] built from three sine waves."""
    return (
        math.sin(time * 0.7 + seed) * 0.5
        + math.sin(time * 1.3 + seed * 2) * 0.3
        + math.sin(time * 2.1 + seed * 3) * 0.2
    )


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
