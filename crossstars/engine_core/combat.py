"""
Combat State - Leader hit points, tap ("down") and awaken transitions.

States: {Normal, Awakened} x {Untapped, Tapped}.

Auto-down rule: when damage takes a leader to 0 HP while it is untapped,
the leader is tapped. Healing never untaps.
"""

from __future__ import annotations
import logging

from .cards import CardInstance
from .errors import NotALeader

logger = logging.getLogger(__name__)


def _require_leader(card: CardInstance) -> None:
    if not card.is_leader:
        raise NotALeader(card.unique_id)


def toggle_awaken(card: CardInstance) -> bool:
    """Flip the awaken flag. Returns the new value."""
    _require_leader(card)
    card.is_awakened = not card.is_awakened
    return card.is_awakened


def toggle_tap(card: CardInstance) -> bool:
    """Flip the tap flag unconditionally (manual override). Returns the new value."""
    _require_leader(card)
    card.is_tapped = not card.is_tapped
    return card.is_tapped


def apply_delta(card: CardInstance, amount: int) -> bool:
    """
    Apply damage (positive) or healing (negative) to a leader.

    HP is floored at 0. Returns True if this call auto-downed the leader.
    """
    _require_leader(card)
    card.current_hp = max(0, card.current_hp - amount)

    if card.current_hp <= 0 and not card.is_tapped:
        card.is_tapped = True
        logger.info("%s (%s) is down", card.name, card.unique_id)
        return True
    return False


def damage(card: CardInstance, amount: int) -> bool:
    if amount < 0:
        raise ValueError(f"Damage must be non-negative: {amount}")
    return apply_delta(card, amount)


def heal(card: CardInstance, amount: int) -> bool:
    if amount < 0:
        raise ValueError(f"Healing must be non-negative: {amount}")
    return apply_delta(card, -amount)
