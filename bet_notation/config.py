"""
Grammar configuration — the tunable constants of the notation grammar.

Kept as one immutable model instead of literals scattered through the
validators, so boundary values (cap = 2, cap = 4, legacy ``~`` on/off)
can be exercised by passing a different config rather than patching globals.
"""

from __future__ import annotations

import os
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field


# ─── Environment Variables ──────────────────────────────────────────

ENV_PREFIX = "BET_NOTATION_"

_ENV_FIELDS: dict[str, str] = {
    "MAX_DIGIT_FREQUENCY": "max_digit_frequency",
    "ALLOW_SIMPLE_RANGE": "allow_simple_range",
    "MAPPED_RANGE_SPAN": "mapped_range_span",
}


# ─── Config Model ───────────────────────────────────────────────────


class GrammarConfig(BaseModel):
    """Named, overridable grammar constants."""

    model_config = ConfigDict(frozen=True)

    # A single digit value may appear at most this many times in any
    # notation containing X
    max_digit_frequency: int = Field(default=3, ge=1)

    # Legacy "~" simple range; retired for end users unless switched on
    allow_simple_range: bool = False

    # How many values an open mapped range ("10>") yields
    mapped_range_span: int = Field(default=10, ge=1)

    # 2 segments -> 2D, 3 segments -> 3D; more would exceed 3 digits
    max_cross_segments: int = Field(default=3, ge=2, le=3)

    amount_decimal_places: int = Field(default=2, ge=0)


DEFAULT_CONFIG = GrammarConfig()


def load_config(environ: Mapping[str, str] | None = None) -> GrammarConfig:
    """Build a GrammarConfig from ``BET_NOTATION_*`` environment variables.

    Unset variables keep their defaults.  Malformed values raise
    ``pydantic.ValidationError`` so a bad deployment fails at startup.
    """
    env = os.environ if environ is None else environ
    overrides = {
        field: env[ENV_PREFIX + name].strip()
        for name, field in _ENV_FIELDS.items()
        if env.get(ENV_PREFIX + name, "").strip()
    }
    if not overrides:
        return DEFAULT_CONFIG
    return GrammarConfig.model_validate(overrides)
