from typing import Dict

import pytest

from questforge.presentation.cli import app
from questforge.presentation.cli.config import default_config


@pytest.fixture(autouse=True)
def _default_config(monkeypatch: pytest.MonkeyPatch) -> None:
    def _load_config() -> Dict[str, object]:
        return default_config()

    monkeypatch.setattr(app, "load_config", _load_config)


def test_arena_command_prints_waves_and_summary(capsys: pytest.CaptureFixture[str]) -> None:
    assert app.main(["arena", "--seed", "1", "--waves", "3", "--stat", "40"]) == 0

    out = capsys.readouterr().out
    assert "(seed 1)" in out
    assert "Wave   1" in out
    assert "Run " in out


def test_arena_command_is_reproducible(capsys: pytest.CaptureFixture[str]) -> None:
    app.main(["arena", "--seed", "7", "--waves", "5"])
    first = capsys.readouterr().out.splitlines()[1:]
    app.main(["arena", "--seed", "7", "--waves", "5"])
    second = capsys.readouterr().out.splitlines()[1:]

    assert first == second


def test_arena_unknown_preset_lists_known(capsys: pytest.CaptureFixture[str]) -> None:
    assert app.main(["arena", "--preset", "moon_gravity"]) == 2

    out = capsys.readouterr().out
    assert "moon_gravity" in out
    assert "boss_rush" in out


def test_waves_and_endless_are_exclusive() -> None:
    with pytest.raises(SystemExit):
        app.build_parser().parse_args(["arena", "--waves", "3", "--endless"])


def test_shop_command_prints_four_items(capsys: pytest.CaptureFixture[str]) -> None:
    assert app.main(["shop", "--date", "2024-03-09", "--level", "12"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Daily shop for 2024-03-09 (level 12)"
    assert len(lines) == 5
    assert all(line.rstrip().endswith("g") for line in lines[1:])
