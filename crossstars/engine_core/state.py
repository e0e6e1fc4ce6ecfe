"""
Game State - The single authoritative state container for one game.

Design principles:
- Explicitly passed: every engine function takes the GameState it mutates
- Enum-indexed: players and zones are addressed by PlayerId x ZoneName,
  so an illegal zone name cannot be expressed
- Partitioned: a CardInstance lives in exactly one zone at a time
- Clonable: the reducer applies each command to a deep copy
"""

from __future__ import annotations
import random
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .cards import CardInstance


class PlayerId(str, Enum):
    """The two seats at the table."""
    PLAYER1 = "player1"
    PLAYER2 = "player2"

    @property
    def other(self) -> PlayerId:
        return PlayerId.PLAYER2 if self is PlayerId.PLAYER1 else PlayerId.PLAYER1

    @property
    def prefix(self) -> str:
        """Short form used in card instance IDs ("p1", "p2")."""
        return "p1" if self is PlayerId.PLAYER1 else "p2"


class Phase(str, Enum):
    """Turn phases. Order: INIT -> START -> MAIN -> END -> START ..."""
    INIT = "INIT"
    START = "START"
    MAIN = "MAIN"
    END = "END"


class ZoneName(str, Enum):
    """Every zone a player owns."""
    DECK = "deck"
    HAND = "hand"
    LEADERS = "leaders"
    PLAY_AREA = "play_area"
    TRASH_FACE_UP = "trash_face_up"
    TRASH_FACE_DOWN = "trash_face_down"
    TACTICS_DECK = "tactics_deck"
    TACTICS_AREA = "tactics_area"


# Zones with a fixed capacity; all others are unbounded.
ZONE_CAPACITY: dict[ZoneName, int] = {
    ZoneName.TACTICS_AREA: 1,
}


@dataclass
class Zone:
    """
    A zone that holds cards.

    For the deck, the end of ``cards`` is the top.
    """
    name: ZoneName
    cards: list[CardInstance] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    @property
    def capacity(self) -> int | None:
        return ZONE_CAPACITY.get(self.name)

    @property
    def is_full(self) -> bool:
        return self.capacity is not None and self.count >= self.capacity

    @property
    def top_card(self) -> CardInstance | None:
        return self.cards[-1] if self.cards else None

    def index_of(self, unique_id: str) -> int | None:
        for i, card in enumerate(self.cards):
            if card.unique_id == unique_id:
                return i
        return None

    def get(self, unique_id: str) -> CardInstance | None:
        idx = self.index_of(unique_id)
        return None if idx is None else self.cards[idx]


def _default_zones() -> dict[ZoneName, Zone]:
    return {name: Zone(name=name) for name in ZoneName}


@dataclass
class PPLedger:
    """Spendable PP for one player. 0 <= current <= max."""
    max: int = 0
    current: int = 0


@dataclass
class PlayerState:
    """State for a single player."""
    player_id: PlayerId
    zones: dict[ZoneName, Zone] = field(default_factory=_default_zones)

    pp: PPLedger = field(default_factory=PPLedger)
    pp_ticket: bool = False  # Go-second bonus, reserved for a future rule
    has_played_tactics_this_turn: bool = False

    def zone(self, name: ZoneName) -> Zone:
        return self.zones[name]

    @property
    def deck(self) -> list[CardInstance]:
        return self.zones[ZoneName.DECK].cards

    @property
    def hand(self) -> list[CardInstance]:
        return self.zones[ZoneName.HAND].cards

    @property
    def leaders(self) -> list[CardInstance]:
        return self.zones[ZoneName.LEADERS].cards

    @property
    def play_area(self) -> list[CardInstance]:
        return self.zones[ZoneName.PLAY_AREA].cards

    @property
    def trash_face_up(self) -> list[CardInstance]:
        return self.zones[ZoneName.TRASH_FACE_UP].cards

    @property
    def trash_face_down(self) -> list[CardInstance]:
        return self.zones[ZoneName.TRASH_FACE_DOWN].cards

    @property
    def tactics_deck(self) -> list[CardInstance]:
        return self.zones[ZoneName.TACTICS_DECK].cards

    @property
    def tactics_area(self) -> CardInstance | None:
        """The single active tactics card, if any."""
        return self.zones[ZoneName.TACTICS_AREA].top_card

    def all_cards(self) -> list[CardInstance]:
        """Every card this player owns, including attachments."""
        cards: list[CardInstance] = []
        for zone in self.zones.values():
            for card in zone.cards:
                cards.append(card)
                cards.extend(_attachments(card))
        return cards


def _attachments(card: CardInstance) -> list[CardInstance]:
    found: list[CardInstance] = []
    for attached in card.attached_cards:
        found.append(attached)
        found.extend(_attachments(attached))
    return found


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All commands go through the reducer.
    """
    game_id: str
    players: dict[PlayerId, PlayerState] = field(default_factory=dict)

    round: int = 0
    turn: int = 0
    active_player: PlayerId = PlayerId.PLAYER1
    current_phase: Phase = Phase.INIT
    is_first_turn_of_game: bool = True

    wins: dict[PlayerId, int] = field(
        default_factory=lambda: {PlayerId.PLAYER1: 0, PlayerId.PLAYER2: 0}
    )

    # Random source for shuffling (seeded for reproducible games)
    random_seed: int | None = None
    rng: random.Random = field(default_factory=random.Random)

    # History (for replay, logging)
    action_history: list[Any] = field(default_factory=list)

    @classmethod
    def create(cls, game_id: str, random_seed: int | None = None) -> GameState:
        """Create an empty two-player state in the INIT phase."""
        return cls(
            game_id=game_id,
            players={pid: PlayerState(player_id=pid) for pid in PlayerId},
            random_seed=random_seed,
            rng=random.Random(random_seed),
        )

    def player(self, player_id: PlayerId) -> PlayerState:
        return self.players[player_id]

    def all_unique_ids(self) -> list[str]:
        return [card.unique_id for p in self.players.values() for card in p.all_cards()]

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)
