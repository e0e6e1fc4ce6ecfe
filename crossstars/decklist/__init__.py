"""
Decklist Module - Parsing and validating player-submitted decklists.
"""

from ..engine_core.rules import DeckPolicy, STRICT_POLICY, RELAXED_POLICY, POLICIES
from .parser import (
    DecklistEntry,
    ParsedDeck,
    DeckValidationResult,
    parse_line,
    parse_decklist,
    validate_decklist,
)

__all__ = [
    "DeckPolicy",
    "STRICT_POLICY",
    "RELAXED_POLICY",
    "POLICIES",
    "DecklistEntry",
    "ParsedDeck",
    "DeckValidationResult",
    "parse_line",
    "parse_decklist",
    "validate_decklist",
]
