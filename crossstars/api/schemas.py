"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between clients (board renderer,
deck builder) and the engine. All responses include explicit types for
OpenAPI schema generation.

Error Codes:
- SESSION_NOT_FOUND: Game does not exist or has been deleted
- CARD_NOT_FOUND: Card name not in the catalog
- UNKNOWN_CARD / MALFORMED_LINE / INVALID_LEADER_COUNT / INVALID_DECK_SIZE:
  Decklist rejected
- INSUFFICIENT_RESOURCE / TACTICS_ALREADY_PLAYED / NOT_ACTIVE_PLAYER / ...:
  Command rejected by the rules; the game is unchanged
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

# Longest decklist text accepted in a request body
MAX_DECKLIST_LENGTH = 10_000


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    # API
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    CARD_NOT_FOUND = "CARD_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Decklist / catalog
    DECK_PARSE_ERROR = "DECK_PARSE_ERROR"
    UNKNOWN_CARD = "UNKNOWN_CARD"
    MALFORMED_LINE = "MALFORMED_LINE"
    INVALID_LEADER_COUNT = "INVALID_LEADER_COUNT"
    INVALID_DECK_SIZE = "INVALID_DECK_SIZE"
    CATALOG_UNAVAILABLE = "CATALOG_UNAVAILABLE"

    # Commands
    ENGINE_ERROR = "ENGINE_ERROR"
    INSUFFICIENT_RESOURCE = "INSUFFICIENT_RESOURCE"
    CARD_NOT_IN_SOURCE_ZONE = "CARD_NOT_IN_SOURCE_ZONE"
    ILLEGAL_ZONE_TRANSFER = "ILLEGAL_ZONE_TRANSFER"
    ZONE_FULL = "ZONE_FULL"
    INVALID_PHASE_TRANSITION = "INVALID_PHASE_TRANSITION"
    NOT_ACTIVE_PLAYER = "NOT_ACTIVE_PLAYER"
    NOT_A_LEADER = "NOT_A_LEADER"
    TACTICS_ALREADY_PLAYED = "TACTICS_ALREADY_PLAYED"
    CARD_NOT_PLAYABLE = "CARD_NOT_PLAYABLE"
    GAME_NOT_STARTED = "GAME_NOT_STARTED"
    INVALID_PLAYER = "INVALID_PLAYER"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_ACTION = "INVALID_ACTION"
    NO_HANDLER = "NO_HANDLER"


class LeaderOperation(str, Enum):
    """Leader edits accepted by the API."""
    DAMAGE = "damage"
    HEAL = "heal"
    TOGGLE_AWAKEN = "toggle_awaken"
    TOGGLE_TAP = "toggle_tap"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """One card instance as the board shows it."""
    unique_id: str
    card_id: str
    name: str
    card_type: str
    cost: int = 0
    is_face_down: bool = False
    is_tapped: bool = False
    is_awakened: bool = False
    current_hp: Optional[int] = Field(None, description="Leaders only")
    max_hp: Optional[int] = Field(None, description="Leaders only")
    atk: Optional[int] = Field(None, description="Leaders only")
    attached: list["CardInfo"] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class ZoneInfo(BaseModel):
    """Zone contents. Hidden zones (deck, tactics_deck) report a count only."""
    zone: str
    card_count: int = 0
    cards: list[CardInfo] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class PPInfo(BaseModel):
    max: int
    current: int


class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: str
    is_active: bool = False
    pp: PPInfo
    pp_ticket: bool = False
    has_played_tactics_this_turn: bool = False
    wins: int = 0
    zones: list[ZoneInfo] = Field(default_factory=list)

    model_config = {"from_attributes": True}


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to start a new game."""
    decklist_p1: str = Field(..., min_length=1, max_length=MAX_DECKLIST_LENGTH, description="Player 1 decklist text")
    decklist_p2: str = Field(..., min_length=1, max_length=MAX_DECKLIST_LENGTH, description="Player 2 decklist text")
    seed: Optional[int] = Field(None, description="Shuffle seed for a reproducible game")


class PlayCardRequest(BaseModel):
    """Request to play a card from hand or the tactics area."""
    player_id: str = Field(..., description="player1 or player2")
    card_id: str = Field(..., description="Card instance unique_id")


class AdjustLeaderRequest(BaseModel):
    """Request to edit a leader's HP or flags."""
    op: LeaderOperation
    amount: int = Field(0, ge=0, description="Damage or healing amount")


class ValidateDecklistRequest(BaseModel):
    """Request to dry-run a decklist."""
    decklist: str = Field(..., min_length=1, max_length=MAX_DECKLIST_LENGTH)
    policy: Optional[str] = Field(
        None, description="Deck size policy: strict or relaxed (server default if omitted)"
    )


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Full board snapshot."""
    game_id: str
    round: int
    turn: int
    active_player: str
    phase: str
    is_first_turn_of_game: bool
    players: list[PlayerInfo]
    last_changes: list[str] = Field(default_factory=list)


class ActionResponse(BaseModel):
    """Result of a successful command."""
    success: bool = True
    changes: list[str] = Field(default_factory=list)
    details: dict[str, Any] = Field(default_factory=dict)
    state: GameStateResponse


class ValidateDecklistResponse(BaseModel):
    """Dry-run decklist validation."""
    valid: bool
    errors: list[str] = Field(default_factory=list)
    counts: dict[str, int] = Field(default_factory=dict)


class CardDefinitionResponse(BaseModel):
    """A catalog entry."""
    card_id: str
    name: str
    card_type: str
    cost: int = 0
    effect_text: str = ""
    color: Optional[str] = None
    base_hp: Optional[int] = None
    base_atk: Optional[int] = None
    awakened_hp: Optional[int] = None
    awakened_atk: Optional[int] = None
    awakened_effect_text: Optional[str] = None


class SessionListResponse(BaseModel):
    """Response listing active games."""
    games: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after deleting a game."""
    success: bool
    game_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
