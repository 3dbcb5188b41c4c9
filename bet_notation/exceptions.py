"""
Custom exception hierarchy for notation processing.

The engine itself reports failures as EngineError values.  These exceptions
exist for callers that prefer raising: ``EngineError.raise_error()`` and
``processor.unwrap()`` translate an error value into the matching subclass.
"""

from __future__ import annotations


class BetNotationError(Exception):
    """Base exception for all notation processing failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.details = details or {}
        super().__init__(message)


class EmptyInputError(BetNotationError):
    """Nothing was typed before submitting."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("EMPTY_INPUT", message, details)


class NoChannelSelectedError(BetNotationError):
    """The bet has no channel to draw multipliers from."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("NO_CHANNEL_SELECTED", message, details)


class InvalidFormatError(BetNotationError):
    """The notation is not one of the accepted shapes."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("INVALID_FORMAT", message, details)


class InvalidAmountError(BetNotationError):
    """The stake amount is not a finite number."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("INVALID_AMOUNT", message, details)


class InvalidRangeError(BetNotationError):
    """A range notation resolved to zero combinations."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("INVALID_RANGE", message, details)


EXCEPTIONS_BY_CODE: dict[str, type[BetNotationError]] = {
    "EMPTY_INPUT": EmptyInputError,
    "NO_CHANNEL_SELECTED": NoChannelSelectedError,
    "INVALID_FORMAT": InvalidFormatError,
    "INVALID_AMOUNT": InvalidAmountError,
    "INVALID_RANGE": InvalidRangeError,
}
