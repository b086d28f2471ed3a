"""
Tests for the interactive entry point's startup error handling.
"""

import sys

import pytest

import tools.play_human as play_human


@pytest.fixture(autouse=True)
def no_args(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["play_human"])


def without_pygame(monkeypatch):
    monkeypatch.setattr(play_human, "PYGAME_AVAILABLE", False)
    monkeypatch.setattr(play_human, "WINDOW_ERRORS", ())


class TestStartupErrors:
    """Test main() exit codes when the game cannot start."""

    @pytest.mark.parametrize("error", [
        FileNotFoundError("Config file not found: game_config.yaml"),
        ValueError("gravity must be positive, got 0.0"),
    ])
    def test_bad_config_exits_1(self, monkeypatch, capsys, error):
        """Config errors are reported, even without pygame installed."""
        without_pygame(monkeypatch)

        def broken_config(*args, **kwargs):
            raise error

        monkeypatch.setattr(play_human, "load_config", broken_config)

        assert play_human.main() == 1
        assert str(error) in capsys.readouterr().out

    def test_missing_pygame_exits_1(self, monkeypatch, capsys):
        without_pygame(monkeypatch)

        assert play_human.main() == 1
        assert "pygame" in capsys.readouterr().out

    def test_unexpected_error_propagates(self, monkeypatch):
        """Errors other than startup failures are not swallowed or masked."""
        without_pygame(monkeypatch)

        class Exploding:
            def __init__(self, **kwargs):
                raise RuntimeError("boom")

        monkeypatch.setattr(play_human, "HumanPlayer", Exploding)

        with pytest.raises(RuntimeError, match="boom"):
            play_human.main()
