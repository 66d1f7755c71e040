"""Configuration management for Buddy Face."""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Optional, Tuple

# Default config location
CONFIG_DIR = Path.home() / ".config" / "buddy-face"
CONFIG_FILE = CONFIG_DIR / "config.json"

log = logging.getLogger(__name__)


def _clamp_float(v: object, fallback: float, lo: float = 0.0) -> float:
    try:
        n = float(v)  # type: ignore[arg-type]
    except Exception:
        return fallback
    if not (n == n) or n in (float("inf"), float("-inf")):  # NaN / inf
        return fallback
    return max(lo, n)


def _ordered(lo: float, hi: float) -> Tuple[float, float]:
    return (hi, lo) if hi < lo else (lo, hi)


@dataclass
class Colors:
    """Color configuration.

    ``hue`` picks the glyph/background pair (None = random per session).
    Explicit RGB tuples override the hue-derived colors.
    """
    hue: Optional[int] = None
    char_color: Optional[Tuple[int, int, int]] = None
    background: Optional[Tuple[int, int, int]] = None

    @staticmethod
    def _clamp_rgb(v: object) -> Optional[Tuple[int, int, int]]:
        if not isinstance(v, tuple) or len(v) != 3:
            return None
        out = []
        for c in v:
            try:
                n = int(c)
            except Exception:
                return None
            out.append(max(0, min(255, n)))
        return (out[0], out[1], out[2])

    def validate(self) -> None:
        if self.hue is not None:
            try:
                self.hue = int(self.hue) % 360
            except Exception:
                self.hue = None
        self.char_color = self._clamp_rgb(self.char_color)
        self.background = self._clamp_rgb(self.background)


@dataclass
class Behavior:
    """Behavior timing configuration (seconds unless noted)."""
    sleep_timeout: float = 45.0
    blink_interval_min: float = 2.0
    blink_interval_max: float = 6.0
    blink_duration: float = 0.3
    neutral_dwell_min: float = 3.0
    neutral_dwell_max: float = 7.0
    transition_duration: float = 0.5
    drift_gain: float = 0.08  # fraction of the remaining distance per frame
    drift_max_step: float = 0.15  # grid cells per frame

    def validate(self) -> None:
        self.sleep_timeout = _clamp_float(self.sleep_timeout, 45.0, lo=1.0)

        self.blink_interval_min, self.blink_interval_max = _ordered(
            _clamp_float(self.blink_interval_min, 2.0),
            _clamp_float(self.blink_interval_max, 6.0),
        )
        self.neutral_dwell_min, self.neutral_dwell_max = _ordered(
            _clamp_float(self.neutral_dwell_min, 3.0),
            _clamp_float(self.neutral_dwell_max, 7.0),
        )

        # Durations divide per-frame steps, keep them strictly positive.
        self.blink_duration = _clamp_float(self.blink_duration, 0.3, lo=0.01)
        self.transition_duration = _clamp_float(self.transition_duration, 0.5, lo=0.01)

        self.drift_gain = min(1.0, _clamp_float(self.drift_gain, 0.08))
        self.drift_max_step = _clamp_float(self.drift_max_step, 0.15)


@dataclass
class Display:
    """Display configuration."""
    fps: int = 60
    font_size: int = 32
    fullscreen: bool = False
    window_width: int = 1280
    window_height: int = 720

    def validate(self) -> None:
        # FPS doubles as the reference rate for converting durations to frames.
        try:
            fps = int(self.fps)
        except Exception:
            fps = 60
        self.fps = max(1, min(240, fps))

        try:
            size = int(self.font_size)
        except Exception:
            size = 32
        self.font_size = max(8, min(256, size))

        self.fullscreen = bool(self.fullscreen)

        try:
            w = int(self.window_width)
        except Exception:
            w = 1280
        try:
            h = int(self.window_height)
        except Exception:
            h = 720
        self.window_width = max(1, w)
        self.window_height = max(1, h)


def _safe_init(cls, data: dict):
    """Instantiate a dataclass, ignoring unknown keys."""
    valid = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in data.items() if k in valid})


@dataclass
class Config:
    """Main configuration container."""
    colors: Colors = field(default_factory=Colors)
    behavior: Behavior = field(default_factory=Behavior)
    display: Display = field(default_factory=Display)

    def validate(self) -> None:
        self.colors.validate()
        self.behavior.validate()
        self.display.validate()

    def to_dict(self) -> dict:
        return {
            "colors": {k: list(v) if isinstance(v, tuple) else v
                       for k, v in asdict(self.colors).items()},
            "behavior": asdict(self.behavior),
            "display": asdict(self.display),
        }

    def save(self, path: Path = CONFIG_FILE) -> None:
        """Save configuration to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)

        self.validate()
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Path = CONFIG_FILE) -> "Config":
        """Load configuration from JSON file, or return defaults."""
        if not path.exists():
            cfg = cls()
            cfg.validate()
            return cfg

        try:
            with open(path) as f:
                data = json.load(f)

            colors = _safe_init(Colors, {
                k: tuple(v) if isinstance(v, list) else v
                for k, v in data.get("colors", {}).items()
            })
            behavior = _safe_init(Behavior, data.get("behavior", {}))
            display = _safe_init(Display, data.get("display", {}))

            cfg = cls(colors=colors, behavior=behavior, display=display)
            cfg.validate()
            return cfg
        except Exception as e:
            log.warning("Could not load config (%s): %s", str(path), e)
            cfg = cls()
            cfg.validate()
            return cfg
