"""
PP Ledger - Per-player spendable points.

PP fully refreshes every turn; nothing is banked. Unspent PP is only
rewarded through the end-of-turn bonus draw.
"""

from __future__ import annotations

from .errors import InsufficientResource
from .state import GameState, PlayerId


def set_max(state: GameState, player_id: PlayerId, value: int) -> None:
    """Set both max and current PP to ``value``."""
    if value < 0:
        raise ValueError(f"PP cannot be negative: {value}")
    pp = state.player(player_id).pp
    pp.max = value
    pp.current = value


def refresh(state: GameState, player_id: PlayerId) -> None:
    """Restore current PP to max."""
    pp = state.player(player_id).pp
    pp.current = pp.max


def spend(state: GameState, player_id: PlayerId, amount: int) -> None:
    """
    Spend ``amount`` PP.

    Raises InsufficientResource (leaving PP unchanged) if the player
    cannot pay.
    """
    if amount < 0:
        raise ValueError(f"Cannot spend a negative amount: {amount}")
    pp = state.player(player_id).pp
    if amount > pp.current:
        raise InsufficientResource(required=amount, available=pp.current)
    pp.current -= amount
