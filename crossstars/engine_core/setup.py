"""
Game Setup - Build both decks and deal the opening position.

Setup order:
1. Parse both decklists (all-or-nothing across both players)
2. Leaders out, main deck and tactics deck shuffled, top tactics revealed
3. Opening hands drawn
4. Starting PP for both players, PP ticket for the second player
5. Round 1 begins with player 1
"""

from __future__ import annotations
import logging
import uuid
from typing import TYPE_CHECKING

from . import resources, zones
from .cards import CardFactory
from .errors import InvalidPhaseTransition
from .rules import DEFAULT_RULES, GameRules
from .state import GameState, Phase, PlayerId, ZoneName
from .turn import begin_turn
from ..decklist.parser import ParsedDeck, parse_decklist

if TYPE_CHECKING:
    from ..catalog.base import CardCatalog

logger = logging.getLogger(__name__)


def setup_game(
    state: GameState,
    decklist_p1: str,
    decklist_p2: str,
    catalog: CardCatalog,
    rules: GameRules = DEFAULT_RULES,
) -> GameState:
    """
    Deal a new game into an empty INIT state, in place.

    Raises a DeckParseError subclass (before touching ``state``) if
    either decklist is rejected.
    """
    if state.current_phase != Phase.INIT or state.turn != 0:
        raise InvalidPhaseTransition(state.current_phase.value, "start game")

    factory = CardFactory()
    decks = {
        PlayerId.PLAYER1: parse_decklist(
            decklist_p1, PlayerId.PLAYER1.prefix, catalog, factory, rules.deck_policy
        ),
        PlayerId.PLAYER2: parse_decklist(
            decklist_p2, PlayerId.PLAYER2.prefix, catalog, factory, rules.deck_policy
        ),
    }

    for player_id, deck in decks.items():
        _deal(state, player_id, deck, rules)

    for player_id in PlayerId:
        resources.set_max(state, player_id, rules.starting_pp)
    state.player(PlayerId.PLAYER2).pp_ticket = True

    state.round = 1
    logger.info("[%s] game set up (seed=%s)", state.game_id, state.random_seed)
    begin_turn(state, PlayerId.PLAYER1, rules)
    return state


def _deal(state: GameState, player_id: PlayerId, deck: ParsedDeck, rules: GameRules) -> None:
    zones.place(state, player_id, ZoneName.LEADERS, deck.leaders)
    zones.place(state, player_id, ZoneName.DECK, deck.main_deck)
    zones.place(state, player_id, ZoneName.TACTICS_DECK, deck.tactics)
    zones.shuffle_zone(state, player_id, ZoneName.DECK)
    zones.shuffle_zone(state, player_id, ZoneName.TACTICS_DECK)
    zones.reveal_tactics(state, player_id)
    zones.draw(state, player_id, rules.opening_hand)


def start_game(
    decklist_p1: str,
    decklist_p2: str,
    catalog: CardCatalog,
    rules: GameRules = DEFAULT_RULES,
    seed: int | None = None,
    game_id: str | None = None,
) -> GameState:
    """
    Create and deal a new game.

    Args:
        decklist_p1: Player 1 decklist text
        decklist_p2: Player 2 decklist text
        catalog: Name -> definition lookup
        rules: Rule configuration
        seed: RNG seed for reproducible shuffles
        game_id: Explicit ID (random if omitted)

    Returns:
        GameState in round 1, player 1's MAIN phase
    """
    state = GameState.create(game_id or str(uuid.uuid4())[:8], random_seed=seed)
    return setup_game(state, decklist_p1, decklist_p2, catalog, rules)
