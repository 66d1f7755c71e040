"""Grid renderer - maps a Buddy pose onto character cells.

A sink is anything with ``place(char, x, y, color)`` where ``x``/``y`` are
integer cell offsets from the face origin and ``color`` is an RGB or RGBA
tuple. ``TextCanvas`` is a plain-text sink; the pygame host provides another.
"""

from __future__ import annotations

import colorsys
import math
from dataclasses import dataclass
from typing import Optional

from .expressions import Eyes, Mouth, Pose
from .state import BuddyState, effective_eye_openness

RGB = tuple[int, int, int]

EYE_X = 4
EYE_Y = -1
MOUTH_Y = 2
BLUSH_X = 7
BLUSH_Y = 0
ZZZ_PERIOD = 2.4  # seconds per rising "z z Z" cycle


def _hsl(hue: float, saturation: float, lightness: float) -> RGB:
    r, g, b = colorsys.hls_to_rgb(hue / 360.0, lightness / 100.0, saturation / 100.0)
    return (round(r * 255), round(g * 255), round(b * 255))


@dataclass(frozen=True)
class Palette:
    char_color: RGB
    background: RGB

    @classmethod
    def from_hue(cls, hue: float) -> "Palette":
        """Bright glyphs on a near-black background of the same hue."""
        return cls(char_color=_hsl(hue, 80, 70), background=_hsl(hue, 70, 6))


# ── Glyph selection ──────────────────────────────────────────────────


def eye_glyphs(openness: float, eyes: Eyes, asleep: bool = False) -> tuple[str, str, str]:
    """(left bracket, pupil, right bracket); empty brackets when closed."""
    if openness < 0.2:
        return ("", "^" if asleep else "-", "")
    if openness < 0.6:
        return ("(", "-", ")")
    if eyes.sparkle:
        return ("(", "*", ")")
    if openness > 1.25:
        return ("(", "O", ")")
    if eyes.squint >= 0.2:
        return ("(", "^", ")")
    return ("(", "●", ")")


def mouth_glyphs(mouth: Mouth) -> list[tuple[int, str]]:
    """(x, char) cells for the mouth, centered on its horizontal offset."""
    half = max(1, round(2 * mouth.width))
    cx = round(mouth.offset * 5)

    if mouth.smile > 0.15:
        left, right, fill = "\\", "/", "_"
    elif mouth.smile < -0.15:
        left, right, fill = "/", "\\", "-"
    else:
        left, right, fill = "-", "-", "-"

    if mouth.openness >= 0.5:
        center = "O"
    elif mouth.openness >= 0.2:
        center = "o"
    else:
        center = fill

    cells = [(cx - half, left), (cx + half, right)]
    for x in range(cx - half + 1, cx + half):
        cells.append((x, center if x == cx else fill))
    return cells


# ── Drawing ──────────────────────────────────────────────────────────


def render(state: BuddyState, pose: Pose, palette: Palette, sink, now: float) -> None:
    """Emit draw calls for one frame."""
    color = palette.char_color

    def put(char: str, x: float, y: float, rgba=color) -> None:
        if char:
            sink.place(char, int(round(x + state.offset_x)), int(round(y + state.offset_y)), rgba)

    left_open, right_open = effective_eye_openness(state, pose)
    look_dx = int(round(pose.eyes.look_x))
    look_dy = int(round(pose.eyes.look_y))

    for side, openness in ((-1, left_open), (1, right_open)):
        cx = side * EYE_X + look_dx
        cy = EYE_Y + look_dy
        for i, char in enumerate(eye_glyphs(openness, pose.eyes, state.is_sleeping)):
            put(char, cx + i - 1, cy)
    if pose.eyes.asymmetric:
        put("~", EYE_X + look_dx, EYE_Y + look_dy - 1)

    for x, char in mouth_glyphs(pose.mouth):
        put(char, x, MOUTH_Y)

    if pose.eyes.sparkle and not state.is_sleeping:
        alpha = int((0.5 + math.sin(now * 2) * 0.2) * 255)
        blush = (color[0], color[1], color[2], alpha)
        put("*", -BLUSH_X, BLUSH_Y, blush)
        put("*", BLUSH_X, BLUSH_Y, blush)

    if state.is_sleeping:
        _render_zzz(state, now, color, put)


def _render_zzz(state: BuddyState, now: float, color: RGB, put) -> None:
    start = state.zzz_start_time if state.zzz_start_time is not None else now
    cycle = ((now - start) % ZZZ_PERIOD) / ZZZ_PERIOD
    for i, char in enumerate("zzZ"):
        phase = (cycle - i / 3 + 1) % 1
        if phase >= 0.8:
            continue
        alpha = int(math.sin((phase / 0.8) * math.pi) * 255)
        put(char, 7 + i * 1.2, -3 - i * 1.5 - (phase / 0.8) * 2,
            (color[0], color[1], color[2], alpha))


class TextCanvas:
    """Sink that collects glyphs into a fixed-size text grid centred on the origin."""

    def __init__(self, cols: int = 32, rows: int = 12):
        self.cols = cols
        self.rows = rows
        self.origin = (cols // 2, rows // 2)
        self.cells: dict[tuple[int, int], str] = {}

    def clear(self) -> None:
        self.cells.clear()

    def place(self, char: str, x: int, y: int, color: Optional[tuple] = None) -> None:
        col = self.origin[0] + x
        row = self.origin[1] + y
        if 0 <= col < self.cols and 0 <= row < self.rows:
            self.cells[(col, row)] = char

    def get(self, x: int, y: int) -> str:
        """Glyph at an origin-relative cell, or a space."""
        return self.cells.get((self.origin[0] + x, self.origin[1] + y), " ")

    def lines(self) -> list[str]:
        return [
            "".join(self.cells.get((col, row), " ") for col in range(self.cols))
            for row in range(self.rows)
        ]

    def __str__(self) -> str:
        return "\n".join(line.rstrip() for line in self.lines())
