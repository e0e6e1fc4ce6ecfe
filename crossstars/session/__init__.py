"""
Session Module - Manages in-memory game sessions.

A session represents one game between two players:
- Created when a game is requested
- Holds the current authoritative GameState
- Applies commands through the reducer
- Destroyed when the game is deleted

Sessions are EPHEMERAL: there is no persistence.
"""

from .manager import SessionManager, GameSession, SessionState

__all__ = [
    "SessionManager",
    "GameSession",
    "SessionState",
]
