"""
Turn Controller - Start-of-turn and end-of-turn sequencing.

Phase order: INIT -> START -> MAIN -> END -> START -> ...

begin_turn: refresh PP, draw, reset per-turn flags, refill tactics.
end_turn:   trash the play area, bonus draw for unspent PP, hand off.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from . import resources, zones
from .cards import CardType
from .errors import InvalidPhaseTransition
from .rules import DEFAULT_RULES, FirstTurnClear, GameRules
from .state import GameState, Phase, PlayerId, ZoneName

logger = logging.getLogger(__name__)


@dataclass
class EndTurnReport:
    """What end_turn did, for callers that want to show it."""
    player: PlayerId
    trashed_face_up: list[str] = field(default_factory=list)
    trashed_face_down: list[str] = field(default_factory=list)
    bonus_requested: int = 0
    bonus_drawn: int = 0
    next_player: PlayerId | None = None


def begin_turn(
    state: GameState,
    player_id: PlayerId,
    rules: GameRules = DEFAULT_RULES,
) -> None:
    if state.current_phase not in (Phase.INIT, Phase.END):
        raise InvalidPhaseTransition(state.current_phase.value, "begin turn")

    state.turn += 1
    state.current_phase = Phase.START
    state.active_player = player_id
    player = state.player(player_id)
    logger.info(
        "[%s] %s turn (round %d / turn %d)",
        state.game_id, player_id.value, state.round, state.turn,
    )

    resources.refresh(state, player_id)

    if not (rules.first_player_skips_draw and state.turn == 1):
        zones.draw(state, player_id, rules.turn_draw)

    player.has_played_tactics_this_turn = False
    zones.reveal_tactics(state, player_id)

    if state.is_first_turn_of_game:
        if rules.first_turn_clear == FirstTurnClear.ON_FIRST_CALL or state.turn > 1:
            state.is_first_turn_of_game = False

    state.current_phase = Phase.MAIN


def end_turn(state: GameState, rules: GameRules = DEFAULT_RULES) -> EndTurnReport:
    """
    Finish the active player's turn and begin the opponent's.

    The bonus draw uses the PP left over before any refresh.
    """
    if state.current_phase != Phase.MAIN:
        raise InvalidPhaseTransition(state.current_phase.value, "end turn")

    player_id = state.active_player
    player = state.player(player_id)
    report = EndTurnReport(player=player_id)

    state.current_phase = Phase.END

    # Iterate over a snapshot; move_card mutates the play area
    for card in list(player.play_area):
        if card.card_type == CardType.TACTICS:
            zones.move_card(state, player_id, card.unique_id, ZoneName.PLAY_AREA, ZoneName.TRASH_FACE_UP)
            report.trashed_face_up.append(card.unique_id)
        else:
            zones.move_card(state, player_id, card.unique_id, ZoneName.PLAY_AREA, ZoneName.TRASH_FACE_DOWN)
            report.trashed_face_down.append(card.unique_id)

    report.bonus_requested = player.pp.current
    if report.bonus_requested > 0:
        report.bonus_drawn = zones.draw(state, player_id, report.bonus_requested)

    next_player = player_id.other
    if next_player == PlayerId.PLAYER1:
        state.round += 1
    report.next_player = next_player

    begin_turn(state, next_player, rules)
    return report
