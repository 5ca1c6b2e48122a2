"""Tests for the command-line shell."""

import pytest

from palace_engine import cli


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("PALACE_PLAYERS", "PALACE_SEED", "PALACE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def fake_input(monkeypatch, *answers):
    queue = list(answers)

    def read(prompt=""):
        if not queue:
            raise EOFError
        return queue.pop(0)

    monkeypatch.setattr("builtins.input", read)


class TestMain:
    def test_setup_cancelled(self, monkeypatch, capsys):
        fake_input(monkeypatch)

        assert cli.main([]) == 0
        assert "Game setup cancelled." in capsys.readouterr().out

    def test_invalid_player_count(self, capsys):
        assert cli.main(["--players", "9"]) == 2
        assert "Invalid configuration" in capsys.readouterr().err

    def test_non_numeric_player_count(self, monkeypatch):
        fake_input(monkeypatch, "lots")
        assert cli.main([]) == 2

    def test_game_cancelled_exits_cleanly(self, monkeypatch, capsys):
        fake_input(monkeypatch, "3", "q")

        assert cli.main(["--seed", "5"]) == 0
        out = capsys.readouterr().out
        assert "Welcome to Palace!" in out
        assert "GAME CANCELLED" in out

    def test_players_from_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("PALACE_PLAYERS", "2")
        fake_input(monkeypatch, "quit")

        assert cli.main([]) == 0
        assert "Game started with 2 players." in capsys.readouterr().out
