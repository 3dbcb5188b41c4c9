"""Tests for GrammarConfig defaults and BET_NOTATION_* environment loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from bet_notation.config import DEFAULT_CONFIG, GrammarConfig, load_config


class TestGrammarConfig:
    def test_defaults(self):
        assert DEFAULT_CONFIG.max_digit_frequency == 3
        assert DEFAULT_CONFIG.allow_simple_range is False
        assert DEFAULT_CONFIG.mapped_range_span == 10
        assert DEFAULT_CONFIG.max_cross_segments == 3
        assert DEFAULT_CONFIG.amount_decimal_places == 2

    def test_is_immutable(self):
        with pytest.raises(ValidationError):
            DEFAULT_CONFIG.max_digit_frequency = 4  # type: ignore[misc]

    @pytest.mark.parametrize("field, value", [
        ("max_digit_frequency", 0),
        ("mapped_range_span", 0),
        ("max_cross_segments", 4),
        ("amount_decimal_places", -1),
    ])
    def test_rejects_out_of_range_values(self, field, value):
        with pytest.raises(ValidationError):
            GrammarConfig(**{field: value})


class TestLoadConfig:
    def test_empty_environment_gives_defaults(self):
        assert load_config({}) is DEFAULT_CONFIG

    def test_blank_values_are_ignored(self):
        assert load_config({"BET_NOTATION_MAX_DIGIT_FREQUENCY": "  "}) is DEFAULT_CONFIG

    def test_overrides(self):
        config = load_config({
            "BET_NOTATION_MAX_DIGIT_FREQUENCY": "4",
            "BET_NOTATION_ALLOW_SIMPLE_RANGE": "true",
            "BET_NOTATION_MAPPED_RANGE_SPAN": " 5 ",
        })
        assert config.max_digit_frequency == 4
        assert config.allow_simple_range is True
        assert config.mapped_range_span == 5

    def test_malformed_value_fails_loudly(self):
        with pytest.raises(ValidationError):
            load_config({"BET_NOTATION_MAX_DIGIT_FREQUENCY": "lots"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("BET_NOTATION_ALLOW_SIMPLE_RANGE", "1")
        assert load_config().allow_simple_range is True
