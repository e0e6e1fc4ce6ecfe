"""
API Module - HTTP interface.

Exposes the engine via REST API for board renderers and deck builders.
A client:
1. Starts a game from two decklists
2. Polls the board snapshot
3. Submits commands (play, leader edits, end turn)
4. Validates decklists and looks up cards

All game state is session-scoped and in memory.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    PlayCardRequest,
    AdjustLeaderRequest,
    ValidateDecklistRequest,
    # Responses
    GameStateResponse,
    ActionResponse,
    ValidateDecklistResponse,
    CardDefinitionResponse,
    ErrorResponse,
    # Shared
    PlayerInfo,
    ZoneInfo,
    CardInfo,
    ErrorCode,
)
from .service import APIService

__all__ = [
    # Requests
    "CreateGameRequest",
    "PlayCardRequest",
    "AdjustLeaderRequest",
    "ValidateDecklistRequest",
    # Responses
    "GameStateResponse",
    "ActionResponse",
    "ValidateDecklistResponse",
    "CardDefinitionResponse",
    "ErrorResponse",
    # Shared
    "PlayerInfo",
    "ZoneInfo",
    "CardInfo",
    "ErrorCode",
    # Service
    "APIService",
]
