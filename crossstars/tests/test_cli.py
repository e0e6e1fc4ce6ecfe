"""
Tests for the command-line interface.
"""

import json
import os
import subprocess
import sys
from pathlib import Path

from ..catalog import SAMPLE_DECKLIST
from ..cli import main
from .conftest import ATTACK_DECKLIST

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class TestCLI:
    """Tests for crossstars subcommands."""

    def test_validate_ok(self, tmp_path, capsys):
        deck = tmp_path / "deck.txt"
        deck.write_text(SAMPLE_DECKLIST, encoding="utf-8")

        assert main(["validate", str(deck), "--policy", "strict"]) == 0
        out = capsys.readouterr().out
        assert "Leaders: 4" in out
        assert "valid" in out

    def test_validate_errors(self, tmp_path, capsys):
        deck = tmp_path / "deck.txt"
        deck.write_text("2 《うるか》\n", encoding="utf-8")

        assert main(["validate", str(deck)]) == 1
        assert "4 leaders" in capsys.readouterr().out

    def test_start_prints_board(self, tmp_path, capsys):
        deck = tmp_path / "deck.txt"
        deck.write_text(ATTACK_DECKLIST, encoding="utf-8")

        assert main(["start", "--p1", str(deck), "--p2", str(deck), "--seed", "3"]) == 0
        out = capsys.readouterr().out
        assert "Round 1" in out
        assert "* player1  PP 3/3" in out
        assert "[PP ticket]" in out
        assert "HP100/100" in out

    def test_start_rejects_bad_deck(self, tmp_path, capsys):
        good = tmp_path / "good.txt"
        good.write_text(ATTACK_DECKLIST, encoding="utf-8")
        bad = tmp_path / "bad.txt"
        bad.write_text("4 《謎》\n", encoding="utf-8")

        assert main(["start", "--p1", str(good), "--p2", str(bad)]) == 1
        assert "《謎》" in capsys.readouterr().out

    def test_cards_with_json_catalog(self, tmp_path, capsys):
        path = tmp_path / "cards.json"
        path.write_text(
            json.dumps([{"card_id": "X-1", "name": "《テスト》", "type": "Memoria"}]),
            encoding="utf-8",
        )

        assert main(["cards", "--catalog", str(path)]) == 0
        out = capsys.readouterr().out
        assert "X-1" in out
        assert "Memoria" in out

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_cards_ignores_server_env(self, monkeypatch, capsys):
        """Server settings are only read when the HTTP app is built."""
        monkeypatch.setenv("CROSSSTARS_DECK_POLICY", "bogus")
        monkeypatch.setenv("CROSSSTARS_CATALOG_PATH", "/nonexistent/cards.json")

        assert main(["cards"]) == 0
        assert "《うるか》" in capsys.readouterr().out

    def test_module_entry_with_bad_server_env(self):
        env = dict(os.environ, CROSSSTARS_DECK_POLICY="bogus", PYTHONIOENCODING="utf-8")
        result = subprocess.run(
            [sys.executable, "-m", "crossstars.cli", "cards"],
            capture_output=True,
            text=True,
            encoding="utf-8",
            env=env,
            cwd=PROJECT_ROOT,
        )

        assert result.returncode == 0, result.stderr
        assert "CS01-001" in result.stdout
