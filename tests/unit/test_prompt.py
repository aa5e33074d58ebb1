"""Tests for the interactive confirmation gate."""

import io
import sys

from advanced_building.build.prompt import confirm


def test_assume_yes_skips_question(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))

    assert confirm("push now?", assume_yes=True) is True


def test_y_confirms(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("y\n"))

    assert confirm("push now?") is True


def test_closed_stdin_declines(monkeypatch, caplog):
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))

    assert confirm("push now?") is False
    assert "stdin closed" in caplog.text
