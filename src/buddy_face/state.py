"""Buddy animation state machine.

``BuddyState`` is an immutable value. Every operation here takes a state and
returns the next one, so a session can be replayed deterministically from a
seeded ``random.Random`` and a sequence of frame times.

Per frame, ``update`` runs:
  1. queued activity events (they arrived between frames)
  2. sleep check (inactivity timeout)
  3. transition advance
  4. expression dwell cycling (awake only)
  5. blink cycling (awake only)
  6. pose resolution + positional drift

Timers count frames at the configured reference rate (``Display.fps``).
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Iterable, Optional

from .animation import Easing, bounce, clamp, ease_out_back, lerp, smooth_noise
from .config import Config
from .expressions import (
    EXPRESSIONS,
    NEUTRAL,
    SLEEPING,
    SURPRISED,
    Expression,
    Pose,
    get_random_expression,
    resolve_name,
)

log = logging.getLogger(__name__)

# Positional drift, in grid cells
BREATH_FREQUENCY = 0.5  # Hz at movement.speed == 1
BOUNCE_SCALE = 2.0
DRIFT_SCALE = 10.0
TILT_SCALE = 6.0
NOISE_RATE = 0.3
NOISE_AMPLITUDE = 0.6
NOISE_SEED = 1.7

TAU = 2 * math.pi


# ── State ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ActivityEvent:
    """Pointer/key input reported by the host."""
    time: float


@dataclass(frozen=True)
class BuddyState:
    current_expression: Pose = field(default_factory=lambda: NEUTRAL.pose)
    target_expression: Pose = field(default_factory=lambda: NEUTRAL.pose)
    transition_progress: float = 1.0

    expression_timer: float = 0.0
    next_expression_time: float = 0.0
    is_in_neutral: bool = True

    blink_timer: float = 0.0
    next_blink_time: float = 0.0
    is_blinking: bool = False
    blink_progress: float = 0.0

    offset_x: float = 0.0
    offset_y: float = 0.0
    target_offset_x: float = 0.0
    target_offset_y: float = 0.0
    bounce_phase: float = 0.0  # radians

    is_sleeping: bool = False
    last_activity_time: float = 0.0
    zzz_start_time: Optional[float] = None

    def as_dict(self) -> dict:
        return asdict(self)


# ── Timing helpers ───────────────────────────────────────────────────


def _frames(seconds: float, config: Config) -> float:
    return seconds * config.display.fps


def _duration_frames(expression: Expression, config: Config) -> float:
    return _frames(expression.duration / 1000.0, config)


def _blink_interval(config: Config, rng) -> float:
    b = config.behavior
    return _frames(rng.uniform(b.blink_interval_min, b.blink_interval_max), config)


def _neutral_dwell(config: Config, rng) -> float:
    b = config.behavior
    return _frames(rng.uniform(b.neutral_dwell_min, b.neutral_dwell_max), config)


def initial_state(now: float, config: Config, rng=random) -> BuddyState:
    """Fresh awake state resting in neutral, timers seeded randomly."""
    return BuddyState(
        next_expression_time=_neutral_dwell(config, rng),
        next_blink_time=_blink_interval(config, rng),
        last_activity_time=now,
    )


# ── Pose resolution ──────────────────────────────────────────────────


def _blend(start, end, t: float):
    """Lerp every numeric field; flags snap to the target."""
    values = {}
    for f in fields(end):
        a = getattr(start, f.name)
        b = getattr(end, f.name)
        values[f.name] = b if isinstance(b, bool) else lerp(a, b, t)
    return type(end)(**values)


def resolve_pose(state: BuddyState, easing: Easing = ease_out_back) -> Pose:
    """The pose currently on screen (before blink is applied)."""
    if state.transition_progress >= 1.0:
        return state.target_expression
    t = easing(clamp(state.transition_progress, 0.0, 1.0))
    a, b = state.current_expression, state.target_expression
    return Pose(
        eyes=_blend(a.eyes, b.eyes, t),
        mouth=_blend(a.mouth, b.mouth, t),
        movement=_blend(a.movement, b.movement, t),
    )


def blink_factor(progress: float) -> float:
    """Triangle ramp: 1 -> 0 over the first half of a blink, 0 -> 1 over the second."""
    p = clamp(progress, 0.0, 1.0)
    if p < 0.5:
        return 1.0 - 2.0 * p
    return 2.0 * p - 1.0


def effective_eye_openness(state: BuddyState, pose: Optional[Pose] = None) -> tuple[float, float]:
    """(left, right) eye openness with blink and wink applied."""
    if pose is None:
        pose = resolve_pose(state)
    factor = blink_factor(state.blink_progress) if state.is_blinking else 1.0
    openness = max(0.0, pose.eyes.openness) * factor
    left = 0.0 if pose.eyes.wink_left else openness
    return left, openness


# ── Transitions ──────────────────────────────────────────────────────


def _retarget(state: BuddyState, expression: Expression) -> BuddyState:
    # Anchor on the live pose so an in-flight transition never jumps.
    return replace(
        state,
        current_expression=resolve_pose(state),
        target_expression=expression.pose,
        transition_progress=0.0,
    )


def _begin_dwell(state: BuddyState, expression: Expression, config: Config, rng) -> BuddyState:
    in_neutral = expression is NEUTRAL
    if in_neutral:
        dwell = _neutral_dwell(config, rng)
    else:
        dwell = _duration_frames(expression, config)
    state = _retarget(state, expression)
    return replace(
        state,
        is_in_neutral=in_neutral,
        expression_timer=0.0,
        next_expression_time=dwell,
    )


def fall_asleep(state: BuddyState, now: float) -> BuddyState:
    log.info("Buddy fell asleep")
    state = _retarget(state, SLEEPING)
    return replace(
        state,
        is_sleeping=True,
        zzz_start_time=now,
        is_blinking=False,
        blink_progress=0.0,
    )


def register_activity(state: BuddyState, now: float, config: Config) -> BuddyState:
    """Record input activity; wakes a sleeping Buddy with a surprised look."""
    state = replace(state, last_activity_time=now)
    if not state.is_sleeping:
        return state

    log.info("Buddy woke up")
    state = _retarget(state, SURPRISED)
    return replace(
        state,
        is_sleeping=False,
        zzz_start_time=None,
        is_in_neutral=False,
        expression_timer=0.0,
        next_expression_time=_duration_frames(SURPRISED, config),
        blink_timer=0.0,
    )


def trigger_expression(state: BuddyState, name: str, config: Config, rng=random) -> BuddyState:
    """Jump straight to a named expression; unknown names are ignored."""
    canonical = resolve_name(name)
    if canonical is None:
        log.debug("Ignoring unknown expression %r", name)
        return state
    log.debug("Expression triggered: %s", canonical)
    return _begin_dwell(state, EXPRESSIONS[canonical], config, rng)


# ── Per-frame update ─────────────────────────────────────────────────


def _advance_transition(state: BuddyState, config: Config) -> BuddyState:
    if state.transition_progress >= 1.0:
        return state
    step = 1.0 / _frames(config.behavior.transition_duration, config)
    return replace(state, transition_progress=min(1.0, state.transition_progress + step))


def _advance_dwell(state: BuddyState, config: Config, rng) -> BuddyState:
    timer = state.expression_timer + 1
    if timer < state.next_expression_time:
        return replace(state, expression_timer=timer)

    if state.is_in_neutral:
        expression = get_random_expression(exclude=state.target_expression.name, rng=rng)
    else:
        expression = NEUTRAL
    log.debug("Expression: %s", expression.name)
    return _begin_dwell(state, expression, config, rng)


def _advance_blink(state: BuddyState, config: Config, rng) -> BuddyState:
    if state.is_blinking:
        step = 1.0 / _frames(config.behavior.blink_duration, config)
        progress = min(1.0, state.blink_progress + step)
        if progress >= 1.0:
            return replace(
                state,
                is_blinking=False,
                blink_progress=0.0,
                blink_timer=0.0,
                next_blink_time=_blink_interval(config, rng),
            )
        return replace(state, blink_progress=progress)

    timer = state.blink_timer + 1
    if timer > state.next_blink_time:
        return replace(state, blink_timer=timer, is_blinking=True, blink_progress=0.0)
    return replace(state, blink_timer=timer)


def _advance_drift(state: BuddyState, pose: Pose, now: float, config: Config) -> BuddyState:
    move = pose.movement
    # Integrate the phase per frame; sin(speed * now) would jump whenever speed changes.
    phase = (state.bounce_phase + TAU * move.speed * BREATH_FREQUENCY / config.display.fps) % TAU
    target_y = (
        bounce(0.0, move.bounce * BOUNCE_SCALE, phase=phase)
        + move.drift_y * DRIFT_SCALE
    )
    target_x = (
        move.tilt_x * TILT_SCALE
        + smooth_noise(now * NOISE_RATE, NOISE_SEED) * NOISE_AMPLITUDE
    )

    gain = config.behavior.drift_gain
    limit = config.behavior.drift_max_step
    dx = clamp((target_x - state.offset_x) * gain, -limit, limit)
    dy = clamp((target_y - state.offset_y) * gain, -limit, limit)
    return replace(
        state,
        bounce_phase=phase,
        target_offset_x=target_x,
        target_offset_y=target_y,
        offset_x=state.offset_x + dx,
        offset_y=state.offset_y + dy,
    )


def update(
    state: BuddyState,
    now: float,
    config: Config,
    rng=random,
    events: Iterable[ActivityEvent] = (),
) -> BuddyState:
    """Advance one frame and return the next state."""
    for event in events:
        state = register_activity(state, event.time, config)

    if not state.is_sleeping and now - state.last_activity_time >= config.behavior.sleep_timeout:
        state = fall_asleep(state, now)

    state = _advance_transition(state, config)

    if not state.is_sleeping:
        state = _advance_dwell(state, config, rng)
        state = _advance_blink(state, config, rng)

    return _advance_drift(state, resolve_pose(state), now, config)
