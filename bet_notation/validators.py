"""
Notation validators — the gatekeepers in front of the generator.

Two validators with deliberately different strictness:

  - is_valid_prefix():    called on every keystroke.  Answers "could this
                          still become an accepted notation?"  It must never
                          reject a true prefix of an accepted string.
  - is_accepted_notation(): called on submission.  Applies exact lengths,
                          segment counts and the digit-frequency cap.

Both are pure functions of (text, config).  The final validator is a single
decision table keyed on the shape returned by grammar.classify().
"""

from __future__ import annotations

from typing import Callable

from .config import DEFAULT_CONFIG, GrammarConfig
from .grammar import (
    ALPHABET,
    OP_MAPPED_RANGE,
    OP_PERMUTATION,
    OP_SIMPLE_RANGE,
    classify,
    exceeds_frequency_cap,
    is_digit_run,
)
from .models import NotationShape, ParsedNotation

# ─── Constants ───────────────────────────────────────────────────────

NUMBER_WIDTHS: frozenset[int] = frozenset({2, 3})

# Human-readable shapes, in the order the error message lists them
SUPPORTED_FORMATS: tuple[str, ...] = (
    "##", "###",
    "##X", "###X", "####X", "#####X",
    "##X##", "##X##X##",
    "##>", "###>", "##>##", "###>###",
)
SIMPLE_RANGE_FORMATS: tuple[str, ...] = ("##~##", "###~###")


def supported_formats(config: GrammarConfig = DEFAULT_CONFIG) -> tuple[str, ...]:
    """Every accepted shape under ``config``."""
    # n cross-product segments are joined by n - 1 operators
    formats = tuple(
        fmt for fmt in SUPPORTED_FORMATS
        if fmt.count(OP_PERMUTATION) < config.max_cross_segments or fmt.endswith(OP_PERMUTATION)
    )
    if config.allow_simple_range:
        return formats + SIMPLE_RANGE_FORMATS
    return formats


# ─── Final Validator ────────────────────────────────────────────────


def is_accepted_notation(text: object, config: GrammarConfig = DEFAULT_CONFIG) -> bool:
    """True if ``text`` is a complete, acceptable notation."""
    return accepts(classify(text), config)


def accepts(parsed: ParsedNotation, config: GrammarConfig = DEFAULT_CONFIG) -> bool:
    """Apply the per-shape rule to an already classified notation."""
    rule = _SHAPE_RULES.get(parsed.shape)
    return rule is not None and rule(parsed, config)


def _accepts_plain(parsed: ParsedNotation, config: GrammarConfig) -> bool:
    return len(parsed.text) in NUMBER_WIDTHS


def _accepts_permutation(parsed: ParsedNotation, config: GrammarConfig) -> bool:
    pool = parsed.segments[0]
    return len(pool) >= 2 and not exceeds_frequency_cap(pool, config.max_digit_frequency)


def _accepts_cross_product(parsed: ParsedNotation, config: GrammarConfig) -> bool:
    return (
        2 <= len(parsed.segments) <= config.max_cross_segments
        and not exceeds_frequency_cap(parsed.text, config.max_digit_frequency)
    )


def _accepts_mapped_range(parsed: ParsedNotation, config: GrammarConfig) -> bool:
    start, end = parsed.start or "", parsed.end
    if not is_digit_run(start) or len(start) not in NUMBER_WIDTHS:
        return False
    return end is None or (is_digit_run(end) and len(end) == len(start))


def _accepts_simple_range(parsed: ParsedNotation, config: GrammarConfig) -> bool:
    start, end = parsed.start or "", parsed.end or ""
    return (
        config.allow_simple_range
        and is_digit_run(start)
        and is_digit_run(end)
        and len(start) in NUMBER_WIDTHS
        and len(end) == len(start)
    )


_SHAPE_RULES: dict[NotationShape, Callable[[ParsedNotation, GrammarConfig], bool]] = {
    NotationShape.PLAIN: _accepts_plain,
    NotationShape.PERMUTATION: _accepts_permutation,
    NotationShape.CROSS_PRODUCT: _accepts_cross_product,
    NotationShape.MAPPED_RANGE: _accepts_mapped_range,
    NotationShape.SIMPLE_RANGE: _accepts_simple_range,
}


# ─── Prefix Validator ───────────────────────────────────────────────


def is_valid_prefix(text: object, config: GrammarConfig = DEFAULT_CONFIG) -> bool:
    """True if ``text`` is a plausible in-progress typing state.

    Looser than is_accepted_notation(): a lone digit, a 4+ digit run (on its
    way to "1234X"), a trailing X after a cross-product group ("1X2X") and a
    half-typed range end ("12>1") are all fine here.
    """
    if not isinstance(text, str):
        return False
    if text == "":
        return True
    if not set(text) <= ALPHABET:
        return False

    if OP_PERMUTATION in text:
        return _is_permutation_prefix(text, config)
    if OP_MAPPED_RANGE in text:
        return _is_range_prefix(text, OP_MAPPED_RANGE)
    if OP_SIMPLE_RANGE in text:
        return config.allow_simple_range and _is_range_prefix(text, OP_SIMPLE_RANGE)

    # Plain digits: any length, 4+ digits can still grow into a permutation
    return True


def _is_permutation_prefix(text: str, config: GrammarConfig) -> bool:
    """Digit groups separated by X; only the last group may be empty."""
    if OP_MAPPED_RANGE in text or OP_SIMPLE_RANGE in text:
        return False

    segments = text.split(OP_PERMUTATION)
    if not all(segments[:-1]):
        return False  # leading X, or XX
    if len(segments) > config.max_cross_segments:
        return False

    return not exceeds_frequency_cap(text, config.max_digit_frequency)


def _is_range_prefix(text: str, operator: str) -> bool:
    """2 or 3 digits, the operator, then up to as many digits again."""
    start, _, end = text.partition(operator)
    if not is_digit_run(start) or len(start) not in NUMBER_WIDTHS:
        return False
    if end == "":
        return True
    return is_digit_run(end) and len(end) <= len(start)
