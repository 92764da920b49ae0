from pathlib import Path

import cappa
import pytest

from racetrack_simulator import cli
from racetrack_simulator.cli import Args


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch):
    # Leave the root logger to pytest
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)


def _write(path: Path, text: str) -> Path:
    _ = path.write_text(text, encoding="utf-8")
    return path


def test_parse_arguments():
    args = cappa.parse(
        Args,
        argv=["-c", "race.toml", "--track", "oval", "--max-turns", "5", "-v"],
    )
    assert args.config == Path("race.toml")
    assert args.track == "oval"
    assert args.max_turns == 5
    assert args.verbose


def test_race_with_winner(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    config = _write(
        tmp_path / "race.toml",
        '[strategies.a]\nkind = "move_list"\nmoves = ["RIGHT", "RIGHT", "RIGHT", "RIGHT"]\n',
    )

    assert Args(config=config)() == 0

    out = capsys.readouterr().out
    assert "Race result" in out
    assert "Winner: car a" in out


def test_defaults_run_until_turn_limit(capsys: pytest.CaptureFixture[str]):
    assert Args(max_turns=3)() == 0
    assert "Race aborted after 3 turns." in capsys.readouterr().out


def test_missing_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    assert Args(config=tmp_path / "missing.toml")() == 1
    assert "Config file not found" in capsys.readouterr().err


def test_invalid_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    config = _write(tmp_path / "race.toml", "max_turns_per_race = 'many'\n")

    assert Args(config=config)() == 1
    assert "Invalid config" in capsys.readouterr().err


def test_malformed_toml(tmp_path: Path):
    config = _write(tmp_path / "race.toml", "track = \n")
    assert Args(config=config)() == 1


def test_missing_track_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    assert Args(track=str(tmp_path / "nowhere.txt"))() == 1
    assert "Cannot load track" in capsys.readouterr().err


def test_invalid_track_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    track = _write(tmp_path / "empty.txt", "####\n#  #\n####\n")

    assert Args(track=str(track))() == 1
    assert "no cars" in capsys.readouterr().err


def test_missing_moves_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    config = _write(
        tmp_path / "race.toml",
        f'[strategies.a]\nkind = "move_list"\nmoves_file = "{tmp_path / "nope.txt"}"\n',
    )

    assert Args(config=config)() == 1
    assert "Error" in capsys.readouterr().err


def test_custom_track_with_overrides(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
):
    track = _write(tmp_path / "tiny.txt", "#####\n#a >#\n#####\n")
    config = _write(
        tmp_path / "race.toml",
        'default_strategy = "path_finder"\n',
    )

    assert Args(config=config, track=str(track), max_turns=10)() == 0
    assert "Winner: car a" in capsys.readouterr().out
