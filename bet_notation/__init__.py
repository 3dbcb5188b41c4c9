"""
Bet Notation Engine — validation and expansion of compact betting notation.

Architecture: Classify → Validate (prefix / final) → Generate → Price
Philosophy:  Every operation is a pure function of its arguments.
"""

__version__ = "1.0.0"
