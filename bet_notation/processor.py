"""
Bet processor — orchestrates the full notation-to-priced-bet workflow.

Flow:
  ┌───────────┐
  │ Raw text  │
  └─────┬─────┘
        │
  ┌─────▼─────┐
  │  Guards   │   ← empty text, no channel
  └─────┬─────┘
        │
  ┌─────▼─────┐
  │ Classify  │   ← grammar.classify + final validation
  └─────┬─────┘
        │
  ┌─────▼─────┐
  │  Amount   │   ← finite number check
  └─────┬─────┘
        │
  ┌─────▼─────┐
  │ Generate  │   ← one rule per shape; empty range → error
  └─────┬─────┘
        │
  ┌─────▼─────┐
  │   Price   │   ← Σ channel multipliers × amount × combinations
  └───────────┘

Design principles:
  - Every check short-circuits; the FIRST failing check is reported.
  - Errors are returned as EngineError values, never raised.
  - No side effects: nothing is stored, nothing is sent anywhere.
  - Money is computed in Decimal (via each number's string form) and
    rounded half away from zero, so 5.5 × 3.5 renders as "19.25".
"""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from numbers import Real
from typing import Any, Sequence, Union

from .config import DEFAULT_CONFIG, GrammarConfig
from .generators import (
    cross_product_syntax,
    generate_cross_product,
    generate_digit_permutations,
    generate_mapped_range,
    generate_simple_range,
    permutation_syntax,
)
from .grammar import classify
from .models import (
    BetResult,
    Channel,
    EngineError,
    ErrorKind,
    NotationShape,
    ParsedNotation,
    ProcessedBet,
    SyntaxType,
)
from .validators import accepts, supported_formats

logger = logging.getLogger(__name__)


# ─── User-Facing Messages ───────────────────────────────────────────

MSG_EMPTY_INPUT = "Please enter a number before pressing Enter."
MSG_NO_CHANNEL = "Please select at least one channel (e.g., A, B, C, Lo)."
MSG_INVALID_AMOUNT = "Amount is not a valid number."
MSG_INVALID_RANGE = "Invalid range: start number must not exceed end number."


def invalid_format_message(config: GrammarConfig = DEFAULT_CONFIG) -> str:
    """The INVALID_FORMAT message, listing every shape ``config`` accepts."""
    return f"Invalid number format. Supported formats: {', '.join(supported_formats(config))}."


ChannelLike = Union[Channel, dict[str, Any]]


class BetProcessor:
    """Turns a notation string into a priced bet (or an error value).

    Usage:
        processor = BetProcessor()
        result = processor.run("12X34", channels, 10)
        if result.status == "error":
            show(result.error)
        else:
            save(result.combined_numbers, result.total_amount)
    """

    def __init__(self, config: GrammarConfig | None = None):
        self.config = config or DEFAULT_CONFIG

    def run(
        self,
        text: object,
        channels: Sequence[ChannelLike],
        amount: object,
        currency: str | None = None,
    ) -> BetResult:
        """Execute the pipeline.  Never raises for bad text or amount.

        Args:
            text: The notation as typed, e.g. "12X", "10>19", "1X2X3".
            channels: Active channels. Dicts are validated into Channel as
                soon as the list is known to be non-empty; one that does not
                match the schema raises pydantic.ValidationError.
            amount: Stake per combination per multiplier unit.
            currency: Opaque label copied onto the result.

        Returns:
            ProcessedBet on success, EngineError for the first failed check.
        """
        # ── Step 1: Something was typed ─────────────────────────────
        if isinstance(text, str) and text.strip() == "":
            return self._reject(ErrorKind.EMPTY_INPUT, MSG_EMPTY_INPUT, text)

        # ── Step 2: At least one channel ────────────────────────────
        if not channels:
            return self._reject(ErrorKind.NO_CHANNEL_SELECTED, MSG_NO_CHANNEL, text)
        active = [_as_channel(channel) for channel in channels]

        # ── Step 3: Final validation ────────────────────────────────
        parsed = classify(text)
        if not accepts(parsed, self.config):
            return self._reject(
                ErrorKind.INVALID_FORMAT, invalid_format_message(self.config), text
            )

        # ── Step 4: Amount ──────────────────────────────────────────
        stake = _to_decimal_amount(amount)
        if stake is None:
            return self._reject(ErrorKind.INVALID_AMOUNT, MSG_INVALID_AMOUNT, text)

        # ── Step 5: Generate combinations ───────────────────────────
        syntax_type, combined_numbers = self._generate(parsed)
        if not combined_numbers:
            return self._reject(ErrorKind.INVALID_RANGE, MSG_INVALID_RANGE, text)

        # ── Step 6: Channel multipliers ─────────────────────────────
        multipliers = [channel.multipliers.for_syntax(syntax_type) for channel in active]
        multiplier_sum = sum((Decimal(str(m)) for m in multipliers), Decimal(0))
        breakdown = [
            f"{channel.label} ({syntax_type.value}x{_format_number(m)})"
            for channel, m in zip(active, multipliers)
        ]

        # ── Step 7: Total stake ─────────────────────────────────────
        total = _total_amount(
            stake, multiplier_sum, len(combined_numbers), self.config.amount_decimal_places
        )

        logger.debug(
            "Processed %r as %s %s: %d combination(s), total %s",
            text, parsed.shape.value, syntax_type.value, len(combined_numbers), total,
        )

        # ── Step 8: Result ──────────────────────────────────────────
        return ProcessedBet(
            syntax_type=syntax_type,
            combined_numbers=combined_numbers,
            number_of_combinations=len(combined_numbers),
            channel_multiplier_sum=float(multiplier_sum),
            total_amount=total,
            channel_breakdown=breakdown,
            currency=currency,
        )

    # ─── Generation Dispatch ────────────────────────────────────────

    def _generate(self, parsed: ParsedNotation) -> tuple[SyntaxType, list[str]]:
        """Run the generator rule that matches the notation's shape."""
        if parsed.shape is NotationShape.PLAIN:
            return SyntaxType.from_width(len(parsed.text)), [parsed.text]

        if parsed.shape is NotationShape.PERMUTATION:
            pool = parsed.segments[0]
            return permutation_syntax(pool), generate_digit_permutations(pool)

        if parsed.shape is NotationShape.CROSS_PRODUCT:
            return (
                cross_product_syntax(parsed.segments),
                generate_cross_product(parsed.segments),
            )

        # Ranges: width comes from the start number, validated to be 2 or 3
        start = parsed.start or ""
        syntax_type = SyntaxType.from_width(len(start))

        if parsed.shape is NotationShape.MAPPED_RANGE:
            numbers = generate_mapped_range(
                start, parsed.end, span=self.config.mapped_range_span
            )
            return syntax_type, numbers

        if parsed.shape is NotationShape.SIMPLE_RANGE:
            return syntax_type, generate_simple_range(start, parsed.end or "")

        raise ValueError(f"No generator for shape {parsed.shape.value}")

    # ─── Rejection ──────────────────────────────────────────────────

    def _reject(self, kind: ErrorKind, message: str, text: object) -> EngineError:
        logger.info("Rejected %r: %s", text, kind.value)
        return EngineError(kind=kind, error=message)


# ─── Functional Entry Points ────────────────────────────────────────


def process_input_number(
    text: object,
    channels: Sequence[ChannelLike],
    amount: object,
    currency: str | None = None,
    config: GrammarConfig | None = None,
) -> BetResult:
    """Classify, validate, expand and price ``text`` in one call."""
    return BetProcessor(config).run(text, channels, amount, currency)


def unwrap(result: BetResult) -> ProcessedBet:
    """Return the ProcessedBet, or raise the matching BetNotationError."""
    if isinstance(result, EngineError):
        result.raise_error()
    return result


# ─── Helpers ────────────────────────────────────────────────────────


def _as_channel(channel: ChannelLike) -> Channel:
    if isinstance(channel, Channel):
        return channel
    return Channel.model_validate(channel)


def _to_decimal_amount(amount: object) -> Decimal | None:
    """Finite real number → Decimal via its string form; anything else → None.

    bool is rejected even though it is an int subclass.
    """
    if isinstance(amount, bool):
        return None
    if isinstance(amount, Decimal):
        return amount if amount.is_finite() else None
    if isinstance(amount, Real):
        value = float(amount)
        if not math.isfinite(value):
            return None
        return Decimal(str(amount)) if isinstance(amount, (int, float)) else Decimal(str(value))
    return None


def _total_amount(
    stake: Decimal, multiplier_sum: Decimal, combinations: int, places: int
) -> str:
    """amount × Σmultipliers × combinations, fixed to ``places`` decimals."""
    with localcontext() as ctx:
        ctx.prec = 60
        raw = stake * multiplier_sum * combinations
        # Quantizing needs every integer digit plus the decimals
        ctx.prec = max(ctx.prec, raw.adjusted() + places + 2)
        total = raw.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
        if total.is_zero():
            total = abs(total)  # never render "-0.00"
        return f"{total:.{places}f}"


def _format_number(value: float) -> str:
    """2.0 → '2', 1.5 → '1.5' (matches how the product labels channels)."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)
