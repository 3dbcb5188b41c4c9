#!/usr/bin/env python3
"""
Bet Notation Engine — Entry Point
=================================

Prices one notation, or runs a demo over a handful of sample notations.

Usage:
    python main.py                                      # Demo mode
    python main.py 12X34 --channel A:2:3 --amount 10    # One notation
    python main.py 10>19 -c A:2:3 -c B:1.5:2.5 -a 5 --currency USD

Channels are given as LABEL:MULT_2D:MULT_3D.  Grammar constants can be
overridden with BET_NOTATION_* environment variables (or a .env file).
"""

from __future__ import annotations

import argparse
import logging
import sys

from bet_notation.config import load_config
from bet_notation.models import Channel, ChannelMultipliers, EngineError, ProcessedBet
from bet_notation.processor import BetProcessor

# ─── Load .env if available (optional dependency) ────────────────────
try:
    from dotenv import load_dotenv

    load_dotenv()
except ImportError:
    pass


# ─── Demo Input ─────────────────────────────────────────────────────

DEMO_NOTATIONS = ["12", "112X", "1234X", "12X34", "12X34X56", "10>19", "111>333", "95>", "12>34", "1111X"]

DEMO_CHANNELS = [
    Channel(id="A", label="A", multipliers=ChannelMultipliers(two_d=2, three_d=3)),
    Channel(id="B", label="B", multipliers=ChannelMultipliers(two_d=1.5, three_d=2.5)),
]

# The report never lists more combinations than this
MAX_COMBINATIONS_DISPLAY = 100


# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_GREEN = "\033[92m"
_CYAN = "\033[96m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_WIDTH = 72


# ─── Pretty Printer ─────────────────────────────────────────────────


def _print_combinations(numbers: list[str]) -> None:
    shown = numbers[:MAX_COMBINATIONS_DISPLAY]
    per_line = 12
    for i in range(0, len(shown), per_line):
        print(f"    {' '.join(shown[i:i + per_line])}")
    omitted = len(numbers) - len(shown)
    if omitted > 0:
        print(f"    {_DIM}... {omitted} more not shown{_RESET}")


def print_report(text: str, result: ProcessedBet | EngineError) -> int:
    """Pretty-print one processed notation.

    Returns:
        0 if the bet was priced, 1 if the engine returned an error.
    """
    print(f"\n{'=' * _WIDTH}")
    print(f"{_BOLD}{_CYAN}  BET: {text}{_RESET}")
    print(f"{'─' * _WIDTH}")

    if isinstance(result, EngineError):
        print(f"  {_RED}{_BOLD}[{result.kind.value}]{_RESET}")
        print(f"  {result.error}")
        print(f"{'=' * _WIDTH}")
        return 1

    currency = f" {result.currency}" if result.currency else ""
    print(f"  Type:         {result.syntax_type.value}")
    print(f"  Channels:     {', '.join(result.channel_breakdown)}")
    print(f"  Multipliers:  {result.channel_multiplier_sum:g}")
    print(f"  Combinations: {result.number_of_combinations}")
    _print_combinations(result.combined_numbers)
    print(f"{'─' * _WIDTH}")
    print(f"  {_GREEN}{_BOLD}TOTAL: {result.total_amount}{currency}{_RESET}")
    print(f"{'=' * _WIDTH}")
    return 0


# ─── Argument Parsing ───────────────────────────────────────────────


def parse_channel(value: str) -> Channel:
    """'A:2:3' → Channel(A, 2D=2, 3D=3)"""
    parts = value.split(":")
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(
            f"Channel must look like LABEL:MULT_2D:MULT_3D, got '{value}'"
        )
    label, two_d, three_d = parts
    try:
        multipliers = ChannelMultipliers(two_d=float(two_d), three_d=float(three_d))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Bad multiplier in '{value}': {e}") from e
    return Channel(id=label, label=label, multipliers=multipliers)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Price a bet written in compact notation.")
    parser.add_argument("notation", nargs="?", help="e.g. 12, 123X, 12X34, 10>19")
    parser.add_argument(
        "-c", "--channel", action="append", type=parse_channel, default=[],
        help="LABEL:MULT_2D:MULT_3D (repeatable)",
    )
    parser.add_argument("-a", "--amount", type=float, default=1.0, help="Stake amount")
    parser.add_argument("--currency", default=None, help="Label shown next to the total")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


# ─── Main ────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    processor = BetProcessor(load_config())

    if args.notation is None:
        print(f"\n  Bet Notation Engine demo ({len(DEMO_NOTATIONS)} notations)")
        for text in DEMO_NOTATIONS:
            print_report(text, processor.run(text, DEMO_CHANNELS, args.amount, args.currency))
        return 0

    result = processor.run(args.notation, args.channel, args.amount, args.currency)
    return print_report(args.notation, result)


if __name__ == "__main__":
    sys.exit(main())
