"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Caller submits two decklists -> session created, StartGame applied
2. During the game:
   - Commands (PlayCard, AdjustLeader, EndTurn) go through the reducer
   - A successful command swaps in the new state
   - A failed command leaves the state untouched
3. Game deleted -> session removed, ALL state dropped

PERSISTENCE RULES:
- NO database for gameplay
- Game state is session-scoped only
"""

from __future__ import annotations
import logging
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ..engine_core.action import Action, ActionResult
from ..engine_core.reducer import Reducer
from ..engine_core.rules import DEFAULT_RULES, GameRules
from ..engine_core.state import GameState

if TYPE_CHECKING:
    from ..catalog.base import CardCatalog

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    CREATED = "created"  # Waiting for StartGame
    ACTIVE = "active"  # Game in progress
    ENDED = "ended"  # Deleted or abandoned


@dataclass
class GameSession:
    """
    One game in memory.

    The session owns the canonical GameState and replaces it only
    when the reducer reports success.
    """
    session_id: str
    reducer: Reducer
    game_state: GameState
    created_at: float
    last_active_at: float = 0.0

    state: SessionState = SessionState.CREATED
    last_changes: list[str] = field(default_factory=list)

    def is_active(self) -> bool:
        return self.state in {SessionState.CREATED, SessionState.ACTIVE}

    def apply(self, action: Action) -> ActionResult:
        """Apply a command; on success the new state becomes canonical."""
        self.last_active_at = time.time()
        result = self.reducer.apply(self.game_state, action)
        if result.success:
            self.game_state = result.new_state
            self.last_changes = result.state_changes
            if self.state == SessionState.CREATED:
                self.state = SessionState.ACTIVE
        return result

    def start(self, decklist_p1: str, decklist_p2: str, seed: int | None = None) -> ActionResult:
        return self.apply(Action.start_game(decklist_p1, decklist_p2, seed=seed))


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions that share one catalog and rule set
    - Track active sessions
    - Clean up idle sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, catalog: CardCatalog, rules: GameRules = DEFAULT_RULES):
        self.catalog = catalog
        self.rules = rules
        self._sessions: dict[str, GameSession] = {}

    def create_session(self, seed: int | None = None) -> GameSession:
        """
        Create a new session holding an empty INIT game state.

        The caller starts the game with ``session.start(...)``.
        """
        session_id = str(uuid.uuid4())
        now = time.time()
        session = GameSession(
            session_id=session_id,
            reducer=Reducer(catalog=self.catalog, rules=self.rules),
            game_state=GameState.create(session_id, random_seed=seed),
            created_at=now,
            last_active_at=now,
        )
        self._sessions[session_id] = session
        logger.info("Session %s created", session_id)
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """
        End a session and drop its state.

        Returns False if no such session exists.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.state = SessionState.ENDED
        logger.info("Session %s ended", session_id)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_idle_seconds: int = 3600) -> int:
        """
        Remove sessions that have received no command for max_idle_seconds.

        Any command counts as activity, rejected ones included.
        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.last_active_at > max_idle_seconds
        ]
        for session_id in to_remove:
            logger.info("Session %s idle, removing", session_id)
            self.end_session(session_id)
        return len(to_remove)

    def __len__(self) -> int:
        return len(self._sessions)
