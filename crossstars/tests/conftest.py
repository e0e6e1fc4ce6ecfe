"""
Pytest fixtures for Cross Stars tests.
"""

import pytest

from ..catalog import InMemoryCatalog, SAMPLE_DECKLIST, default_catalog
from ..engine_core.cards import CardFactory, CardInstance
from ..engine_core.reducer import Reducer
from ..engine_core.setup import start_game
from ..engine_core.state import GameState, PlayerId, ZoneName
from ..catalog.cards import BRYANT_SHOT, PP_TICKET, URUKA


# Every main-deck card costs 1, so any card in hand is playable for 1 PP
ATTACK_DECKLIST = """\
L: 《うるか》
L: 《うるか》
L: 《うるか》
L: 《うるか》
T: 《PPチケット》
T: 《PPチケット》
T: 《PPチケット》
T: 《デッド・オア・アライブ》
T: 《デッド・オア・アライブ》
50 《ブライアントショット》
"""


@pytest.fixture
def catalog() -> InMemoryCatalog:
    """Catalog with the built-in sample cards."""
    return default_catalog()


@pytest.fixture
def sample_decklist() -> str:
    return SAMPLE_DECKLIST


@pytest.fixture
def attack_decklist() -> str:
    return ATTACK_DECKLIST


@pytest.fixture
def reducer(catalog) -> Reducer:
    return Reducer(catalog=catalog)


@pytest.fixture
def empty_game_state() -> GameState:
    """A two-player state that has not been dealt."""
    return GameState.create("test_game", random_seed=42)


@pytest.fixture
def started_state(catalog) -> GameState:
    """A dealt game: round 1, player 1 in MAIN with 3 PP."""
    return start_game(ATTACK_DECKLIST, ATTACK_DECKLIST, catalog, seed=42, game_id="test_game")


@pytest.fixture
def factory() -> CardFactory:
    return CardFactory()


@pytest.fixture
def leader(factory) -> CardInstance:
    """A fresh 100 HP leader."""
    return factory.instantiate(URUKA, "l_p1", owner="p1")


@pytest.fixture
def attack_card(factory) -> CardInstance:
    return factory.instantiate(BRYANT_SHOT, "m_p1", owner="p1")


@pytest.fixture
def state_with_deck(factory) -> GameState:
    """
    Undealt state where player 1 has a 3-card deck, a 1-card hand,
    and one tactics card waiting.
    """
    state = GameState.create("zones_game", random_seed=7)
    player = state.player(PlayerId.PLAYER1)
    player.zone(ZoneName.DECK).cards.extend(
        factory.instantiate(BRYANT_SHOT, "m_p1", owner="p1") for _ in range(3)
    )
    player.zone(ZoneName.HAND).cards.append(factory.instantiate(BRYANT_SHOT, "m_p1", owner="p1"))
    player.zone(ZoneName.TACTICS_DECK).cards.append(factory.instantiate(PP_TICKET, "t_p1", owner="p1"))
    player.zone(ZoneName.LEADERS).cards.append(factory.instantiate(URUKA, "l_p1", owner="p1"))
    return state
