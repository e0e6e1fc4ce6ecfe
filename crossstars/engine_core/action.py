"""
Action System - Commands, payloads, and results.

Actions are the only way a caller changes a game:
1. StartGame    - build both decks and deal
2. PlayCard     - pay for and play a card from hand or tactics area
3. AdjustLeader - damage, heal, awaken or tap a leader
4. EndTurn      - clean up and hand over to the opponent

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    START_GAME = "start_game"
    PLAY_CARD = "play_card"
    ADJUST_LEADER = "adjust_leader"
    END_TURN = "end_turn"


class LeaderOp(str, Enum):
    """Edits a leader card accepts."""
    DAMAGE = "damage"
    HEAL = "heal"
    TOGGLE_AWAKEN = "toggle_awaken"
    TOGGLE_TAP = "toggle_tap"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields; validation happens
    in the reducer.
    """
    player_id: str | None = None
    card_id: str | None = None

    # StartGame
    decklist_p1: str | None = None
    decklist_p2: str | None = None
    seed: int | None = None

    # AdjustLeader
    leader_op: LeaderOp | None = None
    amount: int = 0


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload

    @classmethod
    def start_game(cls, decklist_p1: str, decklist_p2: str, seed: int | None = None) -> Action:
        """Factory for the game setup action."""
        return cls(
            action_type=ActionType.START_GAME,
            payload=ActionPayload(decklist_p1=decklist_p1, decklist_p2=decklist_p2, seed=seed),
        )

    @classmethod
    def play_card(cls, player_id: str, card_id: str) -> Action:
        return cls(
            action_type=ActionType.PLAY_CARD,
            payload=ActionPayload(player_id=player_id, card_id=card_id),
        )

    @classmethod
    def adjust_leader(cls, card_id: str, op: LeaderOp | str, amount: int = 0) -> Action:
        """Factory for a leader edit. ``amount`` is only used by DAMAGE and HEAL."""
        return cls(
            action_type=ActionType.ADJUST_LEADER,
            payload=ActionPayload(card_id=card_id, leader_op=LeaderOp(op), amount=amount),
        )

    @classmethod
    def end_turn(cls) -> Action:
        return cls(action_type=ActionType.END_TURN, payload=ActionPayload())


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Errors (if failed)
    - Human-readable changes (for UI updates)
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    state_changes: list[str] = field(default_factory=list)
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            details=details or {},
        )
