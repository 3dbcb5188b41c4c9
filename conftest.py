"""Pytest configuration — ensures the project root is importable and shares channel fixtures."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))

from bet_notation.models import Channel, ChannelMultipliers  # noqa: E402


@pytest.fixture
def channels() -> list[Channel]:
    """Two channels: A (2D x2, 3D x3) and B (2D x1.5, 3D x2.5)."""
    return [
        Channel(id="A", label="A", multipliers=ChannelMultipliers(two_d=2, three_d=3)),
        Channel(id="B", label="B", multipliers=ChannelMultipliers(two_d=1.5, three_d=2.5)),
    ]


@pytest.fixture
def single_channel() -> list[Channel]:
    return [Channel(id="A", label="A", multipliers=ChannelMultipliers(two_d=2, three_d=3))]
