from __future__ import annotations

import pytest

from buddy_face.animation import (
    EASINGS,
    bounce,
    clamp,
    ease_out_back,
    ease_out_elastic,
    get_easing,
    lerp,
    smooth_noise,
)


@pytest.mark.parametrize("name", sorted(EASINGS))
def test_easing_endpoints_exact(name: str) -> None:
    f = EASINGS[name]
    assert f(0.0) == 0.0
    assert f(1.0) == 1.0


def test_back_and_elastic_overshoot() -> None:
    assert max(ease_out_back(i / 100) for i in range(101)) > 1.0
    assert max(ease_out_elastic(i / 100) for i in range(101)) > 1.0


def test_get_easing_unknown_raises() -> None:
    assert get_easing("smoothstep") is EASINGS["smoothstep"]
    with pytest.raises(KeyError):
        get_easing("nope")


def test_lerp_endpoints_and_extrapolation() -> None:
    assert lerp(0.3, 0.8, 0.0) == 0.3
    assert lerp(0.3, 0.8, 1.0) == 0.8
    assert lerp(2.0, 4.0, 0.5) == 3.0
    assert lerp(0.0, 10.0, 1.1) == pytest.approx(11.0)


def test_bounce_is_scaled_sine() -> None:
    assert bounce(0.0, 2.0, 1.0) == 0.0
    assert bounce(0.25, 2.0, 1.0) == pytest.approx(2.0)
    assert bounce(0.5, 2.0, 2.0, phase=0.0) == pytest.approx(0.0, abs=1e-9)


def test_smooth_noise_bounded_and_deterministic() -> None:
    samples = [smooth_noise(i * 0.37, seed=1.7) for i in range(2000)]
    assert all(-1.0 <= v <= 1.0 for v in samples)
    assert smooth_noise(12.5, 3) == smooth_noise(12.5, 3)
    assert smooth_noise(12.5, 3) != smooth_noise(12.5, 4)


def test_clamp() -> None:
    assert clamp(-1, 0, 1) == 0
    assert clamp(2, 0, 1) == 1
    assert clamp(0.4, 0, 1) == 0.4
