"""Canonical expression definitions for Buddy Face."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Eyes:
    openness: float = 1.0  # 0 closed, 1 open, >1 wide
    look_x: float = 0.0  # -1 left .. 1 right
    look_y: float = 0.0  # -1 up .. 1 down
    squint: float = 0.0
    asymmetric: bool = False  # one brow raised
    wink_left: bool = False
    sparkle: bool = False


@dataclass(frozen=True)
class Mouth:
    smile: float = 0.3  # -1 frown .. 1 big smile
    openness: float = 0.0
    width: float = 1.0
    offset: float = 0.0


@dataclass(frozen=True)
class Movement:
    bounce: float = 0.3
    speed: float = 1.0
    tilt_x: float = 0.0
    drift_y: float = 0.0


@dataclass(frozen=True)
class Pose:
    """One visual instant of the face."""
    eyes: Eyes = field(default_factory=Eyes)
    mouth: Mouth = field(default_factory=Mouth)
    movement: Movement = field(default_factory=Movement)
    name: Optional[str] = None


@dataclass(frozen=True)
class Expression:
    """A named template pose with a nominal duration (ms) and selection weight."""
    name: str
    pose: Pose
    duration: float
    weight: int = 0


def _expr(name: str, duration: float, weight: int, eyes: Eyes, mouth: Mouth,
          movement: Movement) -> Expression:
    pose = Pose(eyes=eyes, mouth=mouth, movement=movement, name=name)
    return Expression(name=name, pose=pose, duration=duration, weight=weight)


# Catalog order matters: weighted picks walk it front to back.
EXPRESSIONS: dict[str, Expression] = {
    e.name: e
    for e in (
        _expr(
            "neutral", 3000, 0,
            Eyes(openness=1.0),
            Mouth(smile=0.3),
            Movement(bounce=0.3, speed=1.0),
        ),
        _expr(
            "happy", 2500, 3,
            Eyes(openness=1.1, look_y=-0.1, squint=0.2),
            Mouth(smile=0.8, openness=0.1, width=1.1),
            Movement(bounce=0.5, speed=1.3),
        ),
        _expr(
            "curious", 2800, 2,
            Eyes(openness=1.15, look_x=0.6, look_y=-0.2, asymmetric=True),
            Mouth(smile=0.1, openness=0.3, width=0.7),
            Movement(bounce=0.2, speed=0.8, tilt_x=0.15),
        ),
        _expr(
            "sleepy", 4000, 1,
            Eyes(openness=0.4, look_y=0.3, squint=0.3),
            Mouth(smile=0.2, width=0.9),
            Movement(bounce=0.15, speed=0.5, drift_y=0.05),
        ),
        # Only reached through the inactivity timeout.
        _expr(
            "sleeping", math.inf, 0,
            Eyes(openness=0.0),
            Mouth(smile=0.2, width=0.9),
            Movement(bounce=0.1, speed=0.3, drift_y=0.02),
        ),
        _expr(
            "excited", 2000, 2,
            Eyes(openness=1.3, look_y=-0.2, sparkle=True),
            Mouth(smile=1.0, openness=0.4, width=1.2),
            Movement(bounce=0.7, speed=1.8),
        ),
        _expr(
            "thinking", 3500, 2,
            Eyes(openness=0.9, look_x=-0.5, look_y=-0.5, squint=0.1),
            Mouth(smile=0.0, width=0.8, offset=0.2),
            Movement(bounce=0.1, speed=0.6, drift_y=-0.03),
        ),
        _expr(
            "wink", 1500, 1,
            Eyes(openness=1.0, look_x=0.2, wink_left=True),
            Mouth(smile=0.6),
            Movement(bounce=0.3, speed=1.0, tilt_x=0.1),
        ),
        _expr(
            "surprised", 2000, 1,
            Eyes(openness=1.4),
            Mouth(smile=0.0, openness=0.7, width=0.6),
            Movement(bounce=0.4, speed=1.2),
        ),
        _expr(
            "look_left", 2500, 2,
            Eyes(openness=1.0, look_x=-0.8),
            Mouth(smile=0.2),
            Movement(bounce=0.2, speed=0.9, tilt_x=-0.1),
        ),
        _expr(
            "look_right", 2500, 2,
            Eyes(openness=1.0, look_x=0.8),
            Mouth(smile=0.2),
            Movement(bounce=0.2, speed=0.9, tilt_x=0.1),
        ),
    )
}

NEUTRAL = EXPRESSIONS["neutral"]
SLEEPING = EXPRESSIONS["sleeping"]
SURPRISED = EXPRESSIONS["surprised"]
FALLBACK = EXPRESSIONS["happy"]

# Weighted random distribution for auto-cycling
WEIGHTS: dict[str, int] = {name: e.weight for name, e in EXPRESSIONS.items()}

# camelCase aliases -> canonical name
COMPAT_MAP: dict[str, str] = {
    "lookLeft": "look_left",
    "lookRight": "look_right",
}

ALL_VALID: set[str] = set(EXPRESSIONS) | set(COMPAT_MAP)


def resolve_name(name: object) -> Optional[str]:
    """Return the canonical expression name, or None if unknown."""
    if not isinstance(name, str):
        return None
    name = COMPAT_MAP.get(name, name)
    return name if name in EXPRESSIONS else None


def get_random_expression(exclude: Optional[str] = None, rng=random) -> Expression:
    """Weighted random pick, skipping weight-0 entries and ``exclude``."""
    available = [
        (name, weight) for name, weight in WEIGHTS.items()
        if name != exclude and weight > 0
    ]
    total = sum(weight for _, weight in available)
    remaining = rng.random() * total
    for name, weight in available:
        remaining -= weight
        if remaining <= 0:
            return EXPRESSIONS[name]
    if available:
        # float residue after the last subtraction
        return EXPRESSIONS[available[-1][0]]
    return FALLBACK
