from __future__ import annotations

from pathlib import Path

from buddy_face.config import Config
from buddy_face.main import apply_overrides, main, parse_args, run_headless


def test_overrides_are_validated() -> None:
    args = parse_args(["--hue", "400", "--fps", "0", "--sleep-timeout", "10", "--fullscreen"])
    cfg = apply_overrides(Config(), args)
    assert cfg.colors.hue == 40
    assert cfg.display.fps == 1
    assert cfg.behavior.sleep_timeout == 10.0
    assert cfg.display.fullscreen is True


def test_headless_prints_a_face() -> None:
    cfg = Config()
    cfg.validate()
    text = run_headless(cfg, 60, seed=1, expression="surprised")
    assert "O" in text
    assert "(" in text


def test_headless_is_repeatable() -> None:
    cfg = Config()
    cfg.validate()
    assert run_headless(cfg, 200, seed=4) == run_headless(cfg, 200, seed=4)


def test_main_headless(tmp_path: Path, capsys) -> None:
    rc = main(["--headless", "--frames", "5", "--seed", "1", "--config", str(tmp_path / "c.json")])
    assert rc == 0
    assert "(" in capsys.readouterr().out
