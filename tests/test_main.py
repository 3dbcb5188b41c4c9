"""Tests for the command-line entry point."""

from __future__ import annotations

import argparse

import pytest

import main


class TestParseChannel:
    def test_parses_label_and_multipliers(self):
        channel = main.parse_channel("Lo:1.5:2.5")
        assert channel.label == "Lo"
        assert channel.multipliers.two_d == 1.5
        assert channel.multipliers.three_d == 2.5

    @pytest.mark.parametrize("value", ["A", "A:2", "A:x:3", "A:2:3:4"])
    def test_rejects_malformed(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            main.parse_channel(value)


class TestMain:
    def test_priced_bet_exits_zero(self, capsys):
        code = main.main(["12X34", "-c", "A:2:3", "-a", "10", "--currency", "USD"])
        out = capsys.readouterr().out
        assert code == 0
        assert "80.00 USD" in out  # 4 combinations × 2 × 10
        assert "13 14 23 24" in out

    def test_engine_error_exits_one(self, capsys):
        code = main.main(["12>34", "-c", "A:2:3"])
        out = capsys.readouterr().out
        assert code == 1
        assert "INVALID_RANGE" in out

    def test_no_channel_is_reported(self, capsys):
        assert main.main(["12"]) == 1
        assert "NO_CHANNEL_SELECTED" in capsys.readouterr().out

    def test_demo_mode(self, capsys):
        assert main.main([]) == 0
        out = capsys.readouterr().out
        for text in main.DEMO_NOTATIONS:
            assert f"BET: {text}" in out

    def test_long_results_are_truncated(self, capsys):
        main.main(["9876543210X", "-c", "A:2:3"])
        assert "620 more not shown" in capsys.readouterr().out
