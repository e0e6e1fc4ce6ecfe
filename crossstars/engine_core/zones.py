"""
Zone Manager - The only code that changes which zone a card is in.

Every transfer is atomic: the card is validated in its source zone, the
destination is checked for legality and capacity, and only then is the
card removed and appended. A card is never referenced by two zones.

Legal paths are listed in LEGAL_TRANSFERS. Leaders are fixed for the game,
so no path touches the LEADERS zone.
"""

from __future__ import annotations
import logging
import random
from typing import TypeVar

from .cards import CardInstance
from .errors import CardNotInSourceZone, IllegalZoneTransfer, ZoneFull
from .state import GameState, PlayerId, ZoneName

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRASH = {ZoneName.TRASH_FACE_UP, ZoneName.TRASH_FACE_DOWN}

LEGAL_TRANSFERS: dict[ZoneName, set[ZoneName]] = {
    ZoneName.DECK: {ZoneName.HAND} | _TRASH,
    ZoneName.HAND: {ZoneName.PLAY_AREA, ZoneName.DECK} | _TRASH,
    ZoneName.PLAY_AREA: {ZoneName.HAND} | _TRASH,
    ZoneName.TACTICS_DECK: {ZoneName.TACTICS_AREA},
    ZoneName.TACTICS_AREA: {ZoneName.PLAY_AREA, ZoneName.TRASH_FACE_UP},
    ZoneName.TRASH_FACE_UP: set(),
    ZoneName.TRASH_FACE_DOWN: set(),
    ZoneName.LEADERS: set(),
}


def can_transfer(from_zone: ZoneName, to_zone: ZoneName) -> bool:
    return to_zone in LEGAL_TRANSFERS.get(from_zone, set())


def move_card(
    state: GameState,
    player_id: PlayerId,
    card_id: str,
    from_zone: ZoneName,
    to_zone: ZoneName,
) -> CardInstance:
    """
    Move one card between two of a player's zones.

    Raises:
        CardNotInSourceZone: the card is not currently in ``from_zone``
        IllegalZoneTransfer: the path is not a legal one
        ZoneFull: the destination is at capacity

    Returns the moved card.
    """
    player = state.player(player_id)
    source = player.zone(from_zone)
    idx = source.index_of(card_id)
    if idx is None:
        raise CardNotInSourceZone(card_id, from_zone.value)
    if not can_transfer(from_zone, to_zone):
        raise IllegalZoneTransfer(from_zone.value, to_zone.value)
    destination = player.zone(to_zone)
    if destination.is_full:
        raise ZoneFull(to_zone.value)

    card = source.cards.pop(idx)
    _apply_entry_rules(card, to_zone)
    destination.cards.append(card)
    return card


def _apply_entry_rules(card: CardInstance, to_zone: ZoneName) -> None:
    """Destination semantics: trash zones fix the face-down flag."""
    if to_zone == ZoneName.TRASH_FACE_UP:
        card.is_face_down = False
    elif to_zone == ZoneName.TRASH_FACE_DOWN:
        card.is_face_down = True


def draw(state: GameState, player_id: PlayerId, count: int = 1) -> int:
    """
    Draw up to ``count`` cards from the top of the deck into the hand.

    Drawing from an empty deck is not an error: the draw stops early.

    Returns the number of cards actually drawn.
    """
    player = state.player(player_id)
    drawn = 0
    for _ in range(count):
        if not player.deck:
            logger.warning(
                "%s tried to draw with an empty deck (%d of %d drawn)",
                player_id.value, drawn, count,
            )
            break
        player.hand.append(player.deck.pop())
        drawn += 1
    return drawn


def shuffle(cards: list[T], rng: random.Random) -> list[T]:
    """Uniformly shuffle ``cards`` in place and return it."""
    if len(cards) > 1:
        rng.shuffle(cards)
    return cards


def shuffle_zone(state: GameState, player_id: PlayerId, zone: ZoneName) -> None:
    shuffle(state.player(player_id).zone(zone).cards, state.rng)


def place(
    state: GameState,
    player_id: PlayerId,
    zone: ZoneName,
    cards: list[CardInstance],
) -> None:
    """
    Put freshly created cards into an empty zone during setup.

    Cards that already belong to a zone must be moved with move_card.
    """
    target = state.player(player_id).zone(zone)
    if not target.is_empty:
        raise ValueError(f"{player_id.value} {zone.value} is not empty")
    if target.capacity is not None and len(cards) > target.capacity:
        raise ZoneFull(zone.value)
    target.cards.extend(cards)


def reveal_tactics(state: GameState, player_id: PlayerId) -> CardInstance | None:
    """Move the top tactics card into an empty tactics area, if possible."""
    player = state.player(player_id)
    area = player.zone(ZoneName.TACTICS_AREA)
    if not area.is_empty or not player.tactics_deck:
        return None
    top = player.tactics_deck[-1]
    return move_card(state, player_id, top.unique_id, ZoneName.TACTICS_DECK, ZoneName.TACTICS_AREA)


def attach_card(
    state: GameState,
    player_id: PlayerId,
    card_id: str,
    from_zone: ZoneName,
    host_id: str,
) -> CardInstance:
    """
    Attach a card to a host card in play (leader or play area).

    The card leaves ``from_zone`` and is owned by the host's
    ``attached_cards`` from then on.
    """
    player = state.player(player_id)
    host = player.zone(ZoneName.LEADERS).get(host_id) or player.zone(ZoneName.PLAY_AREA).get(host_id)
    if host is None:
        raise CardNotInSourceZone(host_id, "leaders/play_area")
    if host_id == card_id:
        raise IllegalZoneTransfer(from_zone.value, "itself")

    source = player.zone(from_zone)
    idx = source.index_of(card_id)
    if idx is None:
        raise CardNotInSourceZone(card_id, from_zone.value)
    if from_zone == ZoneName.LEADERS:
        raise IllegalZoneTransfer(from_zone.value, "attached_cards")

    card = source.cards.pop(idx)
    host.attached_cards.append(card)
    return card


def find_card(
    state: GameState, card_id: str
) -> tuple[PlayerId, ZoneName, CardInstance] | None:
    """Locate a card among every player's zones (attachments excluded)."""
    for player_id, player in state.players.items():
        for zone_name, zone in player.zones.items():
            card = zone.get(card_id)
            if card is not None:
                return player_id, zone_name, card
    return None
