"""
Game Rules - Tunable rule constants for a game.

Rules the card game's own revisions disagree on are explicit options here
instead of hard-coded constants:
- exact tactics / main-deck sizes (DeckPolicy)
- when the first-turn flag clears (FirstTurnClear)
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidDeckSize, InvalidLeaderCount

LEADER_COUNT = 4

# Upper bound on cards in one decklist, whatever the policy
MAX_DECK_CARDS = 200


@dataclass(frozen=True)
class DeckPolicy:
    """
    Exact section sizes a deck must have.

    The leader count is always enforced. ``None`` means the section
    size is not checked. ``max_cards`` caps the whole list and is checked
    line by line while scanning.
    """
    leaders: int = LEADER_COUNT
    tactics: int | None = None
    main_deck: int | None = None
    max_cards: int = MAX_DECK_CARDS

    def check(self, leaders: int, tactics: int, main_deck: int) -> None:
        """Raise the first violated rule, if any."""
        if leaders != self.leaders:
            raise InvalidLeaderCount(leaders, expected=self.leaders)
        if self.tactics is not None and tactics != self.tactics:
            raise InvalidDeckSize("tactics", self.tactics, tactics)
        if self.main_deck is not None and main_deck != self.main_deck:
            raise InvalidDeckSize("main_deck", self.main_deck, main_deck)

    def violations(self, leaders: int, tactics: int, main_deck: int) -> list[str]:
        """Collect every violated rule as a message (for dry-run validation)."""
        errors = []
        if leaders != self.leaders:
            errors.append(str(InvalidLeaderCount(leaders, expected=self.leaders)))
        if self.tactics is not None and tactics != self.tactics:
            errors.append(str(InvalidDeckSize("tactics", self.tactics, tactics)))
        if self.main_deck is not None and main_deck != self.main_deck:
            errors.append(str(InvalidDeckSize("main_deck", self.main_deck, main_deck)))
        return errors


# Leaders 4, tactics 5, main deck 50
STRICT_POLICY = DeckPolicy(leaders=LEADER_COUNT, tactics=5, main_deck=50)

# Leaders only; tactics and main deck sizes unchecked
RELAXED_POLICY = DeckPolicy(leaders=LEADER_COUNT)

POLICIES: dict[str, DeckPolicy] = {
    "strict": STRICT_POLICY,
    "relaxed": RELAXED_POLICY,
}


class FirstTurnClear(Enum):
    """When ``is_first_turn_of_game`` is cleared."""
    # Cleared at the start of the second turn (turn > 1)
    AFTER_FIRST_TURN = "after_first_turn"
    # Cleared by the very first begin_turn call
    ON_FIRST_CALL = "on_first_call"


@dataclass(frozen=True)
class GameRules:
    """Rule configuration applied by setup and the turn controller."""
    starting_pp: int = 3
    opening_hand: int = 4
    turn_draw: int = 1
    deck_policy: DeckPolicy = DeckPolicy()
    first_turn_clear: FirstTurnClear = FirstTurnClear.AFTER_FIRST_TURN
    first_player_skips_draw: bool = True


DEFAULT_RULES = GameRules()
