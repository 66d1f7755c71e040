from __future__ import annotations

import json
from pathlib import Path

from buddy_face.config import Config


def test_unknown_keys_ignored(tmp_path: Path) -> None:
    p = tmp_path / "config.json"
    p.write_text(
        json.dumps(
            {
                "colors": {"background": [1, 2, 3], "unknown": 123},
                "behavior": {"blink_interval_min": 1, "nope": True},
                "display": {"fps": 30, "wat": "ok"},
                "top_level_unknown": 1,
            }
        )
    )
    cfg = Config.load(p)
    assert cfg.colors.background == (1, 2, 3)
    assert cfg.behavior.blink_interval_min == 1.0
    assert cfg.display.fps == 30


def test_validation_clamps_and_normalizes(tmp_path: Path) -> None:
    p = tmp_path / "config.json"
    p.write_text(
        json.dumps(
            {
                "colors": {"hue": 400, "char_color": [-10, 260, 5], "background": "nope"},
                "behavior": {
                    "blink_interval_min": 10,
                    "blink_interval_max": 3,
                    "neutral_dwell_min": "x",
                    "transition_duration": 0,
                    "sleep_timeout": -5,
                    "drift_gain": 7,
                },
                "display": {
                    "fps": 9999,
                    "font_size": 1,
                    "window_width": 0,
                    "window_height": -1,
                },
            }
        )
    )
    cfg = Config.load(p)
    assert cfg.colors.hue == 40
    assert cfg.colors.char_color == (0, 255, 5)
    assert cfg.colors.background is None
    assert (cfg.behavior.blink_interval_min, cfg.behavior.blink_interval_max) == (3.0, 10.0)
    assert cfg.behavior.neutral_dwell_min == 3.0
    assert cfg.behavior.transition_duration > 0
    assert cfg.behavior.sleep_timeout == 1.0
    assert cfg.behavior.drift_gain == 1.0
    assert 1 <= cfg.display.fps <= 240
    assert cfg.display.font_size >= 8
    assert cfg.display.window_width >= 1
    assert cfg.display.window_height >= 1


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    cfg = Config.load(tmp_path / "absent.json")
    assert cfg == Config()


def test_broken_file_gives_defaults(tmp_path: Path) -> None:
    p = tmp_path / "config.json"
    p.write_text("{not json")
    assert Config.load(p) == Config()


def test_save_then_load(tmp_path: Path) -> None:
    p = tmp_path / "sub" / "config.json"
    cfg = Config()
    cfg.colors.hue = 30
    cfg.colors.background = (5, 4, 3)
    cfg.behavior.sleep_timeout = 12.5
    cfg.save(p)

    loaded = Config.load(p)
    assert loaded.colors.hue == 30
    assert loaded.colors.background == (5, 4, 3)
    assert loaded.behavior.sleep_timeout == 12.5
