"""Buddy - the single live character session."""

from __future__ import annotations

import logging
import random
import time
from typing import Optional

from . import state as machine
from .config import Config
from .expressions import Pose
from .render import Palette, render

log = logging.getLogger(__name__)


class Buddy:
    """Owns the config, random source, palette and the one BuddyState.

    The host calls ``update(now)`` then ``draw(sink)`` once per frame.
    Input callbacks call ``notify_activity()``; the event is queued and
    applied at the start of the next ``update`` so state never changes
    mid-frame.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        start: Optional[float] = None,
    ):
        self.config = config or Config()
        self.config.validate()
        self.rng = rng or random.Random(seed)

        colors = self.config.colors
        hue = colors.hue if colors.hue is not None else self.rng.randrange(360)
        palette = Palette.from_hue(hue)
        self.palette = Palette(
            char_color=colors.char_color or palette.char_color,
            background=colors.background or palette.background,
        )

        self.now = time.monotonic() if start is None else start
        self._state = machine.initial_state(self.now, self.config, self.rng)
        self._pose = machine.resolve_pose(self._state)
        self._pending: list[machine.ActivityEvent] = []
        log.debug("Buddy created (hue=%s)", hue)

    @property
    def state(self) -> machine.BuddyState:
        return self._state

    @property
    def pose(self) -> Pose:
        return self._pose

    def notify_activity(self, now: Optional[float] = None) -> None:
        """Report pointer/key input."""
        when = time.monotonic() if now is None else now
        self._pending.append(machine.ActivityEvent(when))

    def update(self, now: Optional[float] = None) -> machine.BuddyState:
        """Advance one frame."""
        self.now = time.monotonic() if now is None else now
        events, self._pending = self._pending, []
        self._state = machine.update(self._state, self.now, self.config, self.rng, events)
        self._pose = machine.resolve_pose(self._state)
        return self._state

    def draw(self, sink) -> None:
        render(self._state, self._pose, self.palette, sink, self.now)

    def trigger_expression(self, name: str) -> bool:
        """Switch to a named expression now. Returns False for unknown names."""
        before = self._state
        self._state = machine.trigger_expression(before, name, self.config, self.rng)
        self._pose = machine.resolve_pose(self._state)
        return self._state is not before

    def sleep(self) -> None:
        """Fall asleep right away."""
        if not self._state.is_sleeping:
            self._state = machine.fall_asleep(self._state, self.now)
            self._pose = machine.resolve_pose(self._state)
