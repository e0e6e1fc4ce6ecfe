"""
Engine Errors - Typed failures raised by the rules engine.

Every error carries a machine-readable ``code`` (UPPER_SNAKE_CASE) so the
reducer and the API layer can surface it without string matching.

Parse errors abort the whole decklist. Runtime errors are raised before any
mutation, so the caller may retry with corrected input.
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for all recoverable rules-engine errors."""

    code: str = "ENGINE_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# =============================================================================
# Decklist / catalog errors
# =============================================================================

class DeckParseError(EngineError):
    """A decklist could not be turned into a deck."""

    code = "DECK_PARSE_ERROR"


class UnknownCard(DeckParseError):
    code = "UNKNOWN_CARD"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Card not found in catalog: {name}")


class MalformedLine(DeckParseError):
    code = "MALFORMED_LINE"

    def __init__(self, text: str, reason: str = "no card name"):
        self.text = text
        super().__init__(f"Malformed decklist line ({reason}): {text!r}")


class InvalidLeaderCount(DeckParseError):
    code = "INVALID_LEADER_COUNT"

    def __init__(self, actual: int, expected: int = 4):
        self.actual = actual
        self.expected = expected
        super().__init__(f"Deck must have {expected} leaders (found {actual})")


class InvalidDeckSize(DeckParseError):
    code = "INVALID_DECK_SIZE"

    def __init__(self, section: str, expected: int, actual: int):
        self.section = section
        self.expected = expected
        self.actual = actual
        super().__init__(f"{section} must have {expected} cards (found {actual})")


class DeckTooLarge(DeckParseError):
    """Raised while scanning, before any card is created."""

    code = "INVALID_DECK_SIZE"

    def __init__(self, limit: int, actual: int):
        self.limit = limit
        self.actual = actual
        super().__init__(f"Deck may have at most {limit} cards (found at least {actual})")


class CatalogUnavailable(EngineError):
    """The catalog could not be reached at all (not the same as a missing card)."""

    code = "CATALOG_UNAVAILABLE"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Card catalog unavailable: {reason}")


# =============================================================================
# Runtime command errors
# =============================================================================

class InsufficientResource(EngineError):
    code = "INSUFFICIENT_RESOURCE"

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(f"Not enough PP: need {required}, have {available}")


class CardNotInSourceZone(EngineError):
    code = "CARD_NOT_IN_SOURCE_ZONE"

    def __init__(self, card_id: str, zone: str):
        self.card_id = card_id
        self.zone = zone
        super().__init__(f"Card {card_id} is not in {zone}")


class IllegalZoneTransfer(EngineError):
    code = "ILLEGAL_ZONE_TRANSFER"

    def __init__(self, from_zone: str, to_zone: str):
        self.from_zone = from_zone
        self.to_zone = to_zone
        super().__init__(f"Cards cannot move from {from_zone} to {to_zone}")


class ZoneFull(EngineError):
    code = "ZONE_FULL"

    def __init__(self, zone: str):
        self.zone = zone
        super().__init__(f"Zone {zone} is full")


class InvalidPhaseTransition(EngineError):
    code = "INVALID_PHASE_TRANSITION"

    def __init__(self, current: str, attempted: str):
        self.current = current
        self.attempted = attempted
        super().__init__(f"Cannot {attempted} during phase {current}")


class NotActivePlayer(EngineError):
    code = "NOT_ACTIVE_PLAYER"

    def __init__(self, player: str):
        self.player = player
        super().__init__(f"Not {player}'s turn")


class NotALeader(EngineError):
    code = "NOT_A_LEADER"

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(f"Card {card_id} is not a leader")


class TacticsAlreadyPlayed(EngineError):
    code = "TACTICS_ALREADY_PLAYED"

    def __init__(self, player: str):
        self.player = player
        super().__init__(f"{player} has already played a tactics card this turn")


class CardNotPlayable(EngineError):
    code = "CARD_NOT_PLAYABLE"

    def __init__(self, card_id: str, reason: str):
        self.card_id = card_id
        super().__init__(f"Card {card_id} cannot be played: {reason}")


class GameNotStarted(EngineError):
    code = "GAME_NOT_STARTED"

    def __init__(self):
        super().__init__("Game has not been started")
