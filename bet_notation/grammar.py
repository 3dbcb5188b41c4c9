"""
Grammar classification and shared digit utilities.

The notation alphabet is tiny: digits plus three operators.

    X   permutation (trailing) or cross-product (between digit groups)
    >   mapped range
    ~   simple range (legacy)

classify() reads the STRUCTURE of a string only — which operators occur and
where the digit runs sit.  It never applies length or frequency rules; that
is the validators' job.  Decision table, first match wins:

    digits only, non-empty                      → PLAIN
    digits, one X, X last                       → PERMUTATION
    2+ non-empty digit runs joined by single X  → CROSS_PRODUCT
    digits > optional digits                    → MAPPED_RANGE
    digits ~ digits                             → SIMPLE_RANGE
    anything else                               → INVALID
"""

from __future__ import annotations

from collections import Counter

from .models import NotationShape, ParsedNotation

# ─── Alphabet ───────────────────────────────────────────────────────

DIGITS: frozenset[str] = frozenset("0123456789")

OP_PERMUTATION = "X"
OP_MAPPED_RANGE = ">"
OP_SIMPLE_RANGE = "~"

OPERATORS: frozenset[str] = frozenset({OP_PERMUTATION, OP_MAPPED_RANGE, OP_SIMPLE_RANGE})
ALPHABET: frozenset[str] = DIGITS | OPERATORS


# ─── Classifier ─────────────────────────────────────────────────────


def classify(text: object) -> ParsedNotation:
    """Determine which notational form ``text`` is attempting to express."""
    if not isinstance(text, str) or not text or not set(text) <= ALPHABET:
        return _invalid(text)

    operators = {ch for ch in text if ch in OPERATORS}

    if not operators:
        return ParsedNotation(text=text, shape=NotationShape.PLAIN, segments=[text])

    if operators == {OP_PERMUTATION}:
        segments = text.split(OP_PERMUTATION)
        if len(segments) == 2 and segments[0] and not segments[1]:
            return ParsedNotation(
                text=text, shape=NotationShape.PERMUTATION, segments=[segments[0]]
            )
        if all(segments):
            return ParsedNotation(
                text=text, shape=NotationShape.CROSS_PRODUCT, segments=segments
            )
        return _invalid(text)

    if operators == {OP_MAPPED_RANGE} and text.count(OP_MAPPED_RANGE) == 1:
        start, _, end = text.partition(OP_MAPPED_RANGE)
        if start:
            return ParsedNotation(
                text=text,
                shape=NotationShape.MAPPED_RANGE,
                start=start,
                end=end or None,
            )

    if operators == {OP_SIMPLE_RANGE} and text.count(OP_SIMPLE_RANGE) == 1:
        start, _, end = text.partition(OP_SIMPLE_RANGE)
        if start and end:
            return ParsedNotation(
                text=text, shape=NotationShape.SIMPLE_RANGE, start=start, end=end
            )

    return _invalid(text)


def _invalid(text: object) -> ParsedNotation:
    return ParsedNotation(
        text=text if isinstance(text, str) else "", shape=NotationShape.INVALID
    )


# ─── Digit Utilities ────────────────────────────────────────────────


def is_digit_run(text: str) -> bool:
    """True for a non-empty string of ASCII digits (str.isdigit() also takes '²')."""
    return bool(text) and set(text) <= DIGITS


def digit_frequencies(text: str) -> Counter[str]:
    """Count each digit value in ``text``; operators are ignored."""
    return Counter(ch for ch in text if ch in DIGITS)


def exceeds_frequency_cap(text: str, cap: int) -> bool:
    """True if any single digit value appears more than ``cap`` times."""
    return any(count > cap for count in digit_frequencies(text).values())


def to_digits(number: str) -> tuple[int, ...]:
    """'120' → (1, 2, 0)"""
    return tuple(int(ch) for ch in number)


def from_digits(digits: tuple[int, ...] | list[int]) -> str:
    """(1, 2, 0) → '120'"""
    return "".join(str(d) for d in digits)


def pad(value: int, width: int) -> str:
    """Zero-pad ``value`` to ``width`` digits: pad(5, 2) → '05'."""
    return str(value).zfill(width)
