"""
Engine Core - Authoritative game state and rules for Cross Stars.

The engine is the runtime that:
1. Holds GameState (players, zones, PP, phase)
2. Moves cards between zones under the transfer rules
3. Sequences turns (start-of-turn refresh, end-of-turn cleanup)
4. Applies actions atomically via the reducer

Setup and the reducer depend on the decklist parser; import them from
``engine_core.setup`` and ``engine_core.reducer``.
"""

from .cards import CardType, CardDefinition, LeaderDefinition, CardInstance, CardFactory
from .state import GameState, PlayerState, PlayerId, Phase, Zone, ZoneName, PPLedger
from .errors import EngineError, DeckParseError
from .rules import GameRules, DeckPolicy, FirstTurnClear, DEFAULT_RULES
from .turn import EndTurnReport, begin_turn, end_turn
from .action import Action, ActionType, ActionPayload, ActionResult, LeaderOp

__all__ = [
    "CardType",
    "CardDefinition",
    "LeaderDefinition",
    "CardInstance",
    "CardFactory",
    "GameState",
    "PlayerState",
    "PlayerId",
    "Phase",
    "Zone",
    "ZoneName",
    "PPLedger",
    "EngineError",
    "DeckParseError",
    "GameRules",
    "DeckPolicy",
    "FirstTurnClear",
    "DEFAULT_RULES",
    "EndTurnReport",
    "begin_turn",
    "end_turn",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "LeaderOp",
]
