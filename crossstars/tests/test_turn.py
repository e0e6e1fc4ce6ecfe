"""
Tests for turn sequencing.

Tests:
- Game setup position
- Start-of-turn refresh, draw, flag reset, tactics refill
- End-of-turn cleanup, bonus draw, handoff and round counting
- First-turn flag options
"""

import pytest

from ..engine_core import resources, turn, zones
from ..engine_core.errors import DeckParseError, InvalidLeaderCount, InvalidPhaseTransition
from ..engine_core.rules import FirstTurnClear, GameRules, STRICT_POLICY
from ..engine_core.setup import start_game
from ..engine_core.state import Phase, PlayerId, ZoneName


P1 = PlayerId.PLAYER1
P2 = PlayerId.PLAYER2


def play_from_hand(state, player_id, card):
    resources.spend(state, player_id, card.cost)
    zones.move_card(state, player_id, card.unique_id, ZoneName.HAND, ZoneName.PLAY_AREA)


class TestStartGame:
    """Tests for the opening position."""

    def test_opening_position(self, started_state):
        state = started_state
        p1, p2 = state.player(P1), state.player(P2)

        assert state.round == 1
        assert state.turn == 1
        assert state.active_player == P1
        assert state.current_phase == Phase.MAIN
        assert len(p1.hand) == 4
        assert len(p2.hand) == 4
        assert p1.tactics_area is not None
        assert p2.tactics_area is not None
        assert len(p1.tactics_deck) == 4
        assert len(p1.leaders) == 4
        assert len(p1.deck) == 46
        assert p2.pp_ticket
        assert not p1.pp_ticket
        assert (p1.pp.max, p1.pp.current) == (3, 3)
        assert (p2.pp.max, p2.pp.current) == (3, 3)

    def test_seed_reproducible(self, catalog, attack_decklist, sample_decklist):
        a = start_game(sample_decklist, sample_decklist, catalog, seed=5, game_id="a")
        b = start_game(sample_decklist, sample_decklist, catalog, seed=5, game_id="b")
        assert [c.unique_id for c in a.player(P1).hand] == [c.unique_id for c in b.player(P1).hand]
        assert [c.unique_id for c in a.player(P2).deck] == [c.unique_id for c in b.player(P2).deck]

    def test_bad_second_decklist_rejects_game(self, catalog, attack_decklist):
        with pytest.raises(InvalidLeaderCount):
            start_game(attack_decklist, "3 《うるか》\n", catalog)

    def test_strict_rules(self, catalog, attack_decklist, sample_decklist):
        rules = GameRules(deck_policy=STRICT_POLICY)
        state = start_game(sample_decklist, sample_decklist, catalog, rules=rules)
        assert state.round == 1
        with pytest.raises(DeckParseError):
            start_game(sample_decklist, "4 《うるか》\n10 《序章》\n", catalog, rules=rules)

    def test_no_tactics_leaves_area_empty(self, catalog):
        text = "4 《うるか》\n20 《序章》\n"
        state = start_game(text, text, catalog, seed=1)
        assert state.player(P1).tactics_area is None


class TestBeginTurn:
    """Tests for start-of-turn processing."""

    def test_rejected_during_main(self, started_state):
        with pytest.raises(InvalidPhaseTransition):
            turn.begin_turn(started_state, P2)

    def test_refresh_draw_and_reset(self, started_state):
        state = started_state
        p2 = state.player(P2)
        p2.pp.current = 0
        p2.has_played_tactics_this_turn = True
        state.current_phase = Phase.END

        turn.begin_turn(state, P2)

        assert state.turn == 2
        assert state.active_player == P2
        assert state.current_phase == Phase.MAIN
        assert p2.pp.current == p2.pp.max
        assert len(p2.hand) == 5
        assert not p2.has_played_tactics_this_turn

    def test_first_player_draws_when_skip_disabled(self, catalog, attack_decklist):
        rules = GameRules(first_player_skips_draw=False)
        state = start_game(attack_decklist, attack_decklist, catalog, rules=rules, seed=3)
        assert len(state.player(P1).hand) == 5

    def test_empty_deck_turn_start(self, catalog):
        text = "4 《うるか》\n4 《序章》\n"
        state = start_game(text, text, catalog, seed=3)
        state.current_phase = Phase.END
        turn.begin_turn(state, P2)
        assert len(state.player(P2).hand) == 4
        assert state.player(P2).deck == []


class TestFirstTurnFlag:
    """Tests for clearing is_first_turn_of_game."""

    def test_default_clears_on_second_turn(self, started_state):
        assert started_state.is_first_turn_of_game
        turn.end_turn(started_state)
        assert not started_state.is_first_turn_of_game

    def test_on_first_call(self, catalog, attack_decklist):
        rules = GameRules(first_turn_clear=FirstTurnClear.ON_FIRST_CALL)
        state = start_game(attack_decklist, attack_decklist, catalog, rules=rules)
        assert not state.is_first_turn_of_game


class TestEndTurn:
    """Tests for end-of-turn cleanup."""

    def test_full_first_turn(self, started_state):
        """Play one 1-cost card, end turn: 2 bonus cards, handoff to player 2."""
        state = started_state
        p1, p2 = state.player(P1), state.player(P2)
        card = p1.hand[0]
        play_from_hand(state, P1, card)
        assert p1.pp.current == 2

        report = turn.end_turn(state)

        assert report.bonus_requested == 2
        assert report.bonus_drawn == 2
        assert len(p1.hand) == 3 + 2
        assert p1.play_area == []
        assert p1.trash_face_down == [card]
        assert card.is_face_down
        assert report.trashed_face_down == [card.unique_id]
        assert state.active_player == P2
        assert report.next_player == P2
        assert p2.pp.current == p2.pp.max == 3
        assert len(p2.hand) == 5
        assert state.round == 1
        assert state.turn == 2

    def test_tactics_trashed_face_up_and_refilled(self, started_state):
        state = started_state
        p1 = state.player(P1)
        tactics = p1.tactics_area
        zones.move_card(state, P1, tactics.unique_id, ZoneName.TACTICS_AREA, ZoneName.PLAY_AREA)
        p1.has_played_tactics_this_turn = True

        report = turn.end_turn(state)
        assert p1.trash_face_up == [tactics]
        assert not tactics.is_face_down
        assert report.trashed_face_up == [tactics.unique_id]

        # Player 1's next turn refills the tactics area
        turn.end_turn(state)
        assert p1.tactics_area is not None
        assert p1.tactics_area is not tactics
        assert len(p1.tactics_deck) == 3
        assert not p1.has_played_tactics_this_turn

    def test_bonus_uses_unspent_pp_before_refresh(self, started_state):
        state = started_state
        p1 = state.player(P1)
        play_from_hand(state, P1, p1.hand[0])
        play_from_hand(state, P1, p1.hand[0])
        play_from_hand(state, P1, p1.hand[0])
        assert p1.pp.current == 0

        report = turn.end_turn(state)
        assert report.bonus_drawn == 0
        assert len(p1.hand) == 1

    def test_round_increments_when_player1_resumes(self, started_state):
        state = started_state
        turn.end_turn(state)
        assert state.round == 1
        turn.end_turn(state)
        assert state.round == 2
        assert state.active_player == P1
        assert state.turn == 3

    def test_rejected_outside_main(self, empty_game_state):
        with pytest.raises(InvalidPhaseTransition):
            turn.end_turn(empty_game_state)

    def test_bonus_draw_capped_by_deck(self, catalog):
        text = "4 《うるか》\n5 《序章》\n"
        state = start_game(text, text, catalog, seed=2)
        report = turn.end_turn(state)
        assert report.bonus_requested == 3
        assert report.bonus_drawn == 1
        assert state.player(P1).deck == []
