from __future__ import annotations

from buddy_face.buddy import Buddy
from buddy_face.config import Config
from buddy_face.expressions import EXPRESSIONS, SURPRISED
from buddy_face.render import Palette, TextCanvas


def _config(**behavior) -> Config:
    cfg = Config()
    for k, v in behavior.items():
        setattr(cfg.behavior, k, v)
    cfg.validate()
    return cfg


def test_activity_is_applied_on_next_update() -> None:
    b = Buddy(_config(), seed=1, start=0.0)
    b.notify_activity(10.0)
    assert b.state.last_activity_time == 0.0
    b.update(10.0)
    assert b.state.last_activity_time == 10.0


def test_sleep_then_wake() -> None:
    b = Buddy(_config(sleep_timeout=1.0), seed=3, start=0.0)
    b.update(1.0)
    assert b.state.is_sleeping

    b.notify_activity(2.0)
    assert b.state.is_sleeping
    b.update(2.0)
    assert not b.state.is_sleeping
    assert b.state.target_expression is SURPRISED.pose


def test_sleep_command() -> None:
    b = Buddy(_config(), seed=3, start=0.0)
    b.sleep()
    assert b.state.is_sleeping
    assert b.state.zzz_start_time == 0.0
    b.update(0.5)
    assert b.state.is_sleeping


def test_trigger_expression() -> None:
    b = Buddy(_config(), seed=1, start=0.0)
    assert b.trigger_expression("happy") is True
    assert b.state.target_expression is EXPRESSIONS["happy"].pose
    assert b.state.transition_progress == 0.0

    before = b.state
    assert b.trigger_expression("not-a-real-expression") is False
    assert b.state is before


def test_same_seed_same_session() -> None:
    def run() -> Buddy:
        b = Buddy(_config(), seed=9, start=0.0)
        for i in range(1, 600):
            b.update(i / 60)
        return b

    a, b = run(), run()
    assert a.palette == b.palette
    assert a.state == b.state
    assert a.pose == b.pose


def test_configured_colors() -> None:
    cfg = _config()
    cfg.colors.hue = 200
    b = Buddy(cfg, seed=1, start=0.0)
    assert b.palette == Palette.from_hue(200)

    cfg.colors.char_color = (1, 2, 3)
    b = Buddy(cfg, seed=1, start=0.0)
    assert b.palette.char_color == (1, 2, 3)
    assert b.palette.background == Palette.from_hue(200).background


def test_draw_emits_a_face() -> None:
    b = Buddy(_config(), seed=1, start=0.0)
    b.update(1 / 60)
    canvas = TextCanvas()
    b.draw(canvas)
    assert "(" in str(canvas)
