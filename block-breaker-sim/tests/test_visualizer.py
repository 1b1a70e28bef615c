"""Tests for frontend availability checks in the visualizer and CLI."""

import sys

import pytest

import main
from sim import tracker, visualizer


def test_missing_pygame_reports_failure(monkeypatch, capsys):
    """No pygame: an error is printed and no window is opened."""
    monkeypatch.setattr(visualizer, "pygame", None)
    assert visualizer.run_visualizer() is False
    assert "pygame is not installed" in capsys.readouterr().out


def test_missing_camera_reports_failure(monkeypatch, capsys):
    """Camera mode stops before opening a window when no camera is found."""
    monkeypatch.setattr(tracker, "open_camera", lambda index=0: None)
    assert visualizer.run_visualizer(use_camera=True) is False
    assert "ERROR" in capsys.readouterr().out


@pytest.mark.parametrize("command", ["play", "camera"])
def test_cli_exits_nonzero_without_frontend(monkeypatch, command):
    """play and camera exit with status 1 when pygame is unavailable."""
    monkeypatch.setattr(visualizer, "pygame", None)
    monkeypatch.setattr(sys, "argv", ["main.py", command])
    with pytest.raises(SystemExit) as exc:
        main.main()
    assert exc.value.code == 1
