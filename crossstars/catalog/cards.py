"""
Sample Cards - A small built-in card set for demos and tests.

The full card list lives in an external catalog; these entries mirror the
cards the catalog was seeded with (one card of each type).
"""

from ..engine_core.cards import CardDefinition, CardType, LeaderDefinition
from .base import InMemoryCatalog


# ============================================================================
# Leaders
# ============================================================================

URUKA = LeaderDefinition(
    card_id="BP01-001",
    name="《うるか》",
    card_type=CardType.LEADER,
    color="赤",
    base_hp=100,
    base_atk=30,
    awakened_hp=130,
    awakened_atk=40,
    awakened_effect_text="【覚醒時】カードを1枚引く。",
)


# ============================================================================
# Tactics
# ============================================================================

PP_TICKET = CardDefinition(
    card_id="CS01-T01",
    name="《PPチケット》",
    card_type=CardType.TACTICS,
    cost=0,
    effect_text="PPを1回復する",
)

DEAD_OR_ALIVE = CardDefinition(
    card_id="CS01-T02",
    name="《デッド・オア・アライブ》",
    card_type=CardType.TACTICS,
    cost=0,
)


# ============================================================================
# Main deck
# ============================================================================

BRYANT_SHOT = CardDefinition(
    card_id="CS01-001",
    name="《ブライアントショット》",
    card_type=CardType.ATTACK,
    cost=1,
)

PROLOGUE = CardDefinition(
    card_id="CS01-002",
    name="《序章》",
    card_type=CardType.MEMORIA,
    cost=0,
)


SAMPLE_CARDS: list[CardDefinition] = [
    URUKA,
    PP_TICKET,
    DEAD_OR_ALIVE,
    BRYANT_SHOT,
    PROLOGUE,
]


# Four leaders, five tactics, fifty main-deck cards
SAMPLE_DECKLIST = """\
L: 《うるか》
L: 《うるか》
L: 《うるか》
L: 《うるか》
T: 《PPチケット》
T: 《PPチケット》
T: 《PPチケット》
T: 《デッド・オア・アライブ》
T: 《デッド・オア・アライブ》
25 《ブライアントショット》
25 《序章》
"""


def default_catalog() -> InMemoryCatalog:
    """Create a catalog holding the sample cards."""
    return InMemoryCatalog(SAMPLE_CARDS)
