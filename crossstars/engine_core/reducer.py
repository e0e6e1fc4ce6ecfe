"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation for callers.
All commands must go through Reducer.apply().

Design principles:
- Clone-and-swap: (state, action) -> new_state; the input is never touched
- Validates before applying
- Returns ActionResult with success/failure
- Engine errors become typed failures; anything else is a bug and propagates
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

from . import combat, resources, zones
from .action import Action, ActionResult, ActionType, LeaderOp
from .cards import CardType
from .errors import (
    CardNotInSourceZone,
    CardNotPlayable,
    EngineError,
    GameNotStarted,
    InvalidPhaseTransition,
    NotActivePlayer,
    NotALeader,
    TacticsAlreadyPlayed,
)
from .rules import DEFAULT_RULES, GameRules
from .setup import setup_game
from .state import GameState, Phase, PlayerId, ZoneName
from .turn import end_turn

if TYPE_CHECKING:
    from ..catalog.base import CardCatalog

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    The catalog resolves decklists; the rules tune setup and turns.
    """
    catalog: CardCatalog
    rules: GameRules = DEFAULT_RULES

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error. On failure the
        caller's state is unchanged.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        new_state = state.clone()
        try:
            result = handler(new_state, action)
        except EngineError as e:
            logger.info("[%s] %s rejected: %s", state.game_id, action.action_type.value, e.message)
            return ActionResult.failure(e.message, error_code=e.code)

        if result.success and result.new_state:
            result.new_state.action_history.append(action)
        return result

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.START_GAME: self._handle_start_game,
            ActionType.PLAY_CARD: self._handle_play_card,
            ActionType.ADJUST_LEADER: self._handle_adjust_leader,
            ActionType.END_TURN: self._handle_end_turn,
        }
        return handlers.get(action_type)

    def _handle_start_game(self, state: GameState, action: Action) -> ActionResult:
        payload = action.payload
        if payload.seed is not None:
            state.random_seed = payload.seed
            state.rng = random.Random(payload.seed)

        setup_game(state, payload.decklist_p1 or "", payload.decklist_p2 or "", self.catalog, self.rules)
        return ActionResult.success_with_state(
            state,
            changes=["Game started", f"{state.active_player.value} to play"],
        )

    def _handle_play_card(self, state: GameState, action: Action) -> ActionResult:
        """
        Play a card: validate cost, spend PP, move to the play area.

        Main-deck cards come from the hand, tactics from the tactics area.
        """
        _require_started(state)
        if state.current_phase != Phase.MAIN:
            raise InvalidPhaseTransition(state.current_phase.value, "play a card")

        try:
            player_id = PlayerId(action.payload.player_id)
        except ValueError:
            return ActionResult.failure(
                f"Unknown player: {action.payload.player_id}",
                error_code="INVALID_PLAYER",
            )
        if player_id != state.active_player:
            raise NotActivePlayer(player_id.value)

        player = state.player(player_id)
        card_id = action.payload.card_id

        if player.zone(ZoneName.TACTICS_AREA).get(card_id) is not None:
            source = ZoneName.TACTICS_AREA
            if player.has_played_tactics_this_turn:
                raise TacticsAlreadyPlayed(player_id.value)
        elif player.zone(ZoneName.HAND).get(card_id) is not None:
            source = ZoneName.HAND
        elif player.zone(ZoneName.LEADERS).get(card_id) is not None:
            raise CardNotPlayable(card_id, "leaders stay in the leader zone")
        else:
            raise CardNotInSourceZone(card_id, ZoneName.HAND.value)

        card = player.zone(source).get(card_id)
        resources.spend(state, player_id, card.cost)
        zones.move_card(state, player_id, card_id, source, ZoneName.PLAY_AREA)
        if card.card_type == CardType.TACTICS:
            player.has_played_tactics_this_turn = True

        return ActionResult.success_with_state(
            state,
            changes=[f"{player_id.value} played {card.name} ({card.cost} PP)"],
        )

    def _handle_adjust_leader(self, state: GameState, action: Action) -> ActionResult:
        """Leader edits are accepted for either player at any time after setup."""
        _require_started(state)
        payload = action.payload
        if payload.amount < 0:
            return ActionResult.failure(
                f"Amount must be non-negative: {payload.amount}",
                error_code="INVALID_AMOUNT",
            )

        found = zones.find_card(state, payload.card_id)
        if found is None:
            raise CardNotInSourceZone(payload.card_id, ZoneName.LEADERS.value)
        _, zone_name, card = found
        if zone_name != ZoneName.LEADERS:
            raise NotALeader(payload.card_id)

        op = payload.leader_op
        details: dict = {}
        if op == LeaderOp.DAMAGE:
            details["downed"] = combat.damage(card, payload.amount)
            change = f"{card.name} took {payload.amount} damage (HP {card.current_hp})"
        elif op == LeaderOp.HEAL:
            details["downed"] = combat.heal(card, payload.amount)
            change = f"{card.name} healed {payload.amount} (HP {card.current_hp})"
        elif op == LeaderOp.TOGGLE_AWAKEN:
            details["awakened"] = combat.toggle_awaken(card)
            change = f"{card.name} {'awakened' if card.is_awakened else 'returned to normal'}"
        elif op == LeaderOp.TOGGLE_TAP:
            details["tapped"] = combat.toggle_tap(card)
            change = f"{card.name} {'tapped' if card.is_tapped else 'untapped'}"
        else:
            return ActionResult.failure(f"Unknown leader operation: {op}", error_code="INVALID_ACTION")

        changes = [change]
        if details.get("downed"):
            changes.append(f"{card.name} is down")
        return ActionResult.success_with_state(state, changes=changes, details=details)

    def _handle_end_turn(self, state: GameState, action: Action) -> ActionResult:
        """Handle end of turn, advance to next player."""
        _require_started(state)
        report = end_turn(state, self.rules)
        changes = [f"{report.player.value} ended the turn"]
        if report.bonus_drawn:
            changes.append(f"{report.player.value} drew {report.bonus_drawn} bonus card(s)")
        changes.append(f"Next player: {report.next_player.value}")
        return ActionResult.success_with_state(
            state,
            changes=changes,
            details={
                "trashed_face_up": report.trashed_face_up,
                "trashed_face_down": report.trashed_face_down,
                "bonus_requested": report.bonus_requested,
                "bonus_drawn": report.bonus_drawn,
            },
        )


def _require_started(state: GameState) -> None:
    if state.current_phase == Phase.INIT:
        raise GameNotStarted()


def apply_action(
    catalog: CardCatalog,
    state: GameState,
    action: Action,
    rules: GameRules = DEFAULT_RULES,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(catalog=catalog, rules=rules)
    return reducer.apply(state, action)
