from __future__ import annotations

import logging

import pytest

from delve.__main__ import main
from delve.app import render_ascii, run_headless
from delve.core.rng import RNG
from delve.engine import GameState


@pytest.fixture(autouse=True)
def clean_env_and_logging(monkeypatch):
    for name in ("DELVE_CONFIG", "DELVE_SEED", "DELVE_MAP_WIDTH", "DELVE_MAP_HEIGHT", "DELVE_MAX_ROOMS",
                 "DELVE_FOV_RADIUS", "DELVE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in saved_handlers:
        root.addHandler(h)
    root.setLevel(saved_level)


def test_headless_entrypoint_exits_successfully(capsys):
    code = main(["--seed", "5", "--keys", "ddssq"])
    out = capsys.readouterr().out
    assert code == 0
    assert "HP: " in out
    assert "Turns taken: " in out


def test_exit_key_stops_the_script(settings):
    lines = []
    run_headless(settings, keys=["q", "d", "d"], seed=1, out=lines.append)
    assert lines[-1] == "Turns taken: 0"


def test_missing_config_file_is_reported(capsys, tmp_path):
    code = main(["--config", str(tmp_path / "missing.yaml")])
    err = capsys.readouterr().err
    assert code == 2
    assert "error:" in err


def test_frame_shows_player_and_welcome(settings):
    state = GameState(settings, rng=RNG(8))
    frame = render_ascii(state)
    px, py = state.player.pos
    assert frame[py][px] == "@"
    assert frame[settings.dungeon.height] == "HP: 30/30"
    assert "Welcome hero! Beware the dragons." in frame


@pytest.mark.parametrize(
    "text",
    ["dungeon: [unclosed\n", "player: {hp: thirty}\n", "dungeon: {width: wide}\n"],
)
def test_bad_config_content_exits_with_code_2(capsys, tmp_path, text):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text(text, encoding="utf-8")
    code = main(["--config", str(cfg)])
    captured = capsys.readouterr()
    assert code == 2
    assert "error:" in captured.err
    assert "Turns taken" not in captured.out
