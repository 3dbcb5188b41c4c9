"""
Combination generators — expand an accepted notation into concrete numbers.

Every function here is pure and returns a de-duplicated list in order of
first appearance.  Range generators return an EMPTY list for a range they
cannot expand; the processor turns that into an INVALID_RANGE error.

Rules:
  1. Plain number        "12"        → ["12"]
  2. Permutation         "112X"      → ["112", "121", "211"]
                         "1234X"     → every ordered pick of 3 positions
  3. Cross-product       "12X34"     → ["13", "14", "23", "24"]
  4. Mapped range        "10>19"     → positional fixed/varying expansion
  5. Simple range        "10~19"     → plain inclusive numeric range
"""

from __future__ import annotations

from collections import Counter
from itertools import permutations, product
from typing import Iterable, Optional

from .config import DEFAULT_CONFIG
from .grammar import from_digits, is_digit_run, pad, to_digits
from .models import SyntaxType

# A permutation pool longer than this yields "3 of N" selections
FULL_PERMUTATION_MAX = 3


def unique(items: Iterable[str]) -> list[str]:
    """De-duplicate, keeping the order of first appearance."""
    return list(dict.fromkeys(items))


# ─── Permutations ───────────────────────────────────────────────────


def permutation_syntax(pool: str) -> SyntaxType:
    """2-digit pool → 2D; 3 or more digits → 3D."""
    return SyntaxType.TWO_D if len(pool) == 2 else SyntaxType.THREE_D


def generate_digit_permutations(pool: str) -> list[str]:
    """Every distinct arrangement of ``pool`` (or of 3 picks from it).

    Pools of 2 or 3 digits are fully permuted.  Longer pools yield every
    ordered selection of exactly 3 positions, so "1234X" produces 24
    three-digit numbers and never a four-digit one.  Repeated digits collapse:
    "11" → ["11"], "112" → ["112", "121", "211"].
    """
    width = min(len(pool), FULL_PERMUTATION_MAX)
    trimmed = _trim_pool(pool, width)
    return unique("".join(picked) for picked in permutations(trimmed, width))


def _trim_pool(pool: str, width: int) -> str:
    """Drop every copy of a digit beyond the first ``width``.

    A pick of ``width`` positions can never use more copies than that, and
    the earliest copies are the ones that produce each arrangement first,
    so the output and its order are unchanged while the work stays bounded.
    """
    seen: Counter[str] = Counter()
    kept = []
    for digit in pool:
        seen[digit] += 1
        if seen[digit] <= width:
            kept.append(digit)
    return "".join(kept)


# ─── Cross-Product ──────────────────────────────────────────────────


def cross_product_syntax(segments: list[str]) -> SyntaxType:
    """Width is the number of segments, never the length of one."""
    return SyntaxType.from_width(len(segments))


def generate_cross_product(segments: list[str]) -> list[str]:
    """Pick one digit from each segment, concatenated in segment order.

    "12X34" → ["13", "14", "23", "24"];  "1X234" → ["12", "13", "14"]
    """
    choices = [unique(segment) for segment in segments]
    return unique("".join(picked) for picked in product(*choices))


# ─── Mapped Ranges (>) ──────────────────────────────────────────────


def generate_mapped_range(
    start: str,
    end: Optional[str] = None,
    span: int = DEFAULT_CONFIG.mapped_range_span,
) -> list[str]:
    """Expand "start>end" (or open "start>") at the width of ``start``.

    Open range: ``span`` sequential values from start, wrapping modulo
    10**width, so "95>" → 95..99, 00..04.

    Closed range, compared digit position by digit position:
      - all digits repeated in both ends ("11>55", "111>333")
            → step the repeated digit: 11, 22, 33, 44, 55
      - exactly one position varies ("10>19", "103>183")
            → step that position, hold the others
      - two positions vary (3 digits only) and they carry the same digit
        as each other at each end ("100>155")
            → step them together: 100, 111, 122, ... 155
      - anything else ("12>34", "123>456") → []
    Unequal widths or start > end → [].
    """
    if not is_digit_run(start) or len(start) not in (2, 3):
        return []
    width = len(start)

    if end is None:
        return _open_range(int(start), width, span)

    if not is_digit_run(end) or len(end) != width or int(start) > int(end):
        return []
    return _closed_mapped_range(to_digits(start), to_digits(end))


def _open_range(start: int, width: int, span: int) -> list[str]:
    modulus = 10**width
    return unique(pad((start + offset) % modulus, width) for offset in range(span))


def _closed_mapped_range(start: tuple[int, ...], end: tuple[int, ...]) -> list[str]:
    width = len(start)

    # Repeated-digit stepping: 11>55, 111>333
    if len(set(start)) == 1 and len(set(end)) == 1:
        return [str(d) * width for d in range(start[0], end[0] + 1)]

    varying = [pos for pos in range(width) if start[pos] != end[pos]]

    if not varying:
        return [from_digits(start)]

    if len(varying) == 1 or (len(varying) == 2 and width == 3):
        low = {start[pos] for pos in varying}
        high = {end[pos] for pos in varying}
        if len(low) != 1 or len(high) != 1:
            return []  # varying positions disagree, e.g. 102>153
        return [
            _with_digit(start, varying, d) for d in range(low.pop(), high.pop() + 1)
        ]

    return []


def _with_digit(base: tuple[int, ...], positions: list[int], digit: int) -> str:
    digits = list(base)
    for pos in positions:
        digits[pos] = digit
    return from_digits(digits)


# ─── Simple Ranges (~, legacy) ──────────────────────────────────────


def generate_simple_range(start: str, end: str) -> list[str]:
    """Every integer in [start, end], zero-padded: "08~11" → 08, 09, 10, 11."""
    if not is_digit_run(start) or not is_digit_run(end):
        return []
    width = len(start)
    if width not in (2, 3) or len(end) != width or int(start) > int(end):
        return []
    return [pad(value, width) for value in range(int(start), int(end) + 1)]
