"""
Pydantic models for the notation engine — strict typing at every seam.

Channels come in from the caller, ProcessedBet / EngineError go back out.
The two result models share a literal ``status`` field so that BetResult is
a discriminated union: callers (and pydantic) must branch on it.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, NoReturn, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import EXCEPTIONS_BY_CODE


# ─── Enumerations ───────────────────────────────────────────────────


class SyntaxType(str, Enum):
    """Width of every combination produced for one notation."""

    TWO_D = "2D"
    THREE_D = "3D"

    @property
    def width(self) -> int:
        return 2 if self is SyntaxType.TWO_D else 3

    @classmethod
    def from_width(cls, width: int) -> SyntaxType:
        if width == 2:
            return cls.TWO_D
        if width == 3:
            return cls.THREE_D
        raise ValueError(f"No syntax type for width {width}")


class NotationShape(str, Enum):
    """Which notational form a raw string is attempting to express."""

    PLAIN = "PLAIN"  # 12, 123
    PERMUTATION = "PERMUTATION"  # 12X, 1234X
    CROSS_PRODUCT = "CROSS_PRODUCT"  # 12X34, 1X2X3
    MAPPED_RANGE = "MAPPED_RANGE"  # 10>, 10>19, 111>333
    SIMPLE_RANGE = "SIMPLE_RANGE"  # 10~19 (legacy)
    INVALID = "INVALID"


class ErrorKind(str, Enum):
    """Machine-readable failure categories, in the order they are checked."""

    EMPTY_INPUT = "EMPTY_INPUT"
    NO_CHANNEL_SELECTED = "NO_CHANNEL_SELECTED"
    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_RANGE = "INVALID_RANGE"


# ─── Channels ───────────────────────────────────────────────────────


class ChannelMultipliers(BaseModel):
    """Per-width multipliers.  Serialized with the product's "2D"/"3D" keys."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    two_d: float = Field(alias="2D", allow_inf_nan=False)
    three_d: float = Field(alias="3D", allow_inf_nan=False)

    def for_syntax(self, syntax_type: SyntaxType) -> float:
        return self.two_d if syntax_type is SyntaxType.TWO_D else self.three_d


class Channel(BaseModel):
    """A named multiplier source.  The engine only reads ``multipliers``."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    multipliers: ChannelMultipliers


# ─── Classification ─────────────────────────────────────────────────


class ParsedNotation(BaseModel):
    """Structural reading of a notation string.

    ``segments`` holds the digit runs (the pool for PERMUTATION, one entry
    per group for CROSS_PRODUCT, the number itself for PLAIN).  Ranges use
    ``start`` / ``end`` instead; ``end`` is None for an open mapped range.
    No length or frequency rule has been applied yet.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    shape: NotationShape
    segments: list[str] = Field(default_factory=list)
    start: Optional[str] = None
    end: Optional[str] = None


# ─── Results ────────────────────────────────────────────────────────


class ProcessedBet(BaseModel):
    """A priced bet: the engine's success value."""

    status: Literal["ok"] = "ok"
    syntax_type: SyntaxType
    combined_numbers: list[str]
    number_of_combinations: int
    channel_multiplier_sum: float
    total_amount: str  # Fixed-point, e.g. "35.00"
    channel_breakdown: list[str] = Field(default_factory=list)  # "A (2Dx2)"
    currency: Optional[str] = None  # Opaque label, passed through untouched


class EngineError(BaseModel):
    """A user-facing failure: the engine's error value."""

    status: Literal["error"] = "error"
    kind: ErrorKind
    error: str

    def raise_error(self) -> NoReturn:
        """Re-raise this value as the matching BetNotationError subclass."""
        raise EXCEPTIONS_BY_CODE[self.kind.value](self.error, {"kind": self.kind.value})


BetResult = Annotated[Union[ProcessedBet, EngineError], Field(discriminator="status")]
