import argparse

import pytest

from game_runner import build_parser, main, positive_int


@pytest.mark.parametrize("value", ["0", "-3", "ten"])
def test_positive_int_rejects_bad_values(value):
    with pytest.raises(argparse.ArgumentTypeError):
        positive_int(value)


def test_positive_int_accepts_counts():
    assert positive_int("25") == 25


@pytest.mark.parametrize("flag", ["--max-turns", "--max-steps"])
def test_parser_exits_on_non_positive_limits(flag):
    with pytest.raises(SystemExit):
        build_parser().parse_args([flag, "0"])


def test_main_runs_short_game():
    assert main(["--max-steps", "8", "--agent", "blue=pass", "--seed", "3"]) == 0


def test_settings_reject_non_positive_turn_limit(monkeypatch):
    from infra.settings import Settings

    monkeypatch.setenv("CONQUEST_MAX_TURNS", "0")
    with pytest.raises(ValueError):
        Settings.from_env(dotenv=False)
