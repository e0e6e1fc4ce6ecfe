"""
Cards - Static card definitions and runtime card instances.

A CardDefinition is the immutable template owned by the catalog.
A CardInstance is the mutable entity that lives in exactly one zone.

Definitions are a tagged variant on ``card_type``: only leaders carry
hit points and attack, so those fields live on LeaderDefinition and
callers branch on the class rather than on field presence.

The type set is open. CardType names the types the rules treat specially;
any other type string is a main-deck card.
"""

from __future__ import annotations
import itertools
from dataclasses import dataclass, field
from enum import Enum


class CardType(str, Enum):
    """Known card types. Catalogs may carry others."""
    LEADER = "Leader"
    TACTICS = "Tactics"
    ATTACK = "Attack"
    MEMORIA = "Memoria"


@dataclass(frozen=True)
class CardDefinition:
    """
    Immutable card template.

    Retrieved from the catalog by display name; never mutated by the engine.
    """
    card_id: str  # Printed card number, e.g. "CS01-001"
    name: str  # Display name, the catalog key
    card_type: str  # A CardType value or any other printed type
    cost: int = 0
    effect_text: str = ""
    color: str | None = None

    def __post_init__(self):
        if isinstance(self.card_type, CardType):
            object.__setattr__(self, "card_type", self.card_type.value)

    @property
    def is_leader(self) -> bool:
        return self.card_type == CardType.LEADER

    @property
    def is_tactics(self) -> bool:
        return self.card_type == CardType.TACTICS


@dataclass(frozen=True)
class LeaderDefinition(CardDefinition):
    """Leader variant: base stats plus optional awakened overrides."""
    base_hp: int = 0
    base_atk: int = 0
    awakened_hp: int | None = None
    awakened_atk: int | None = None
    awakened_effect_text: str | None = None


@dataclass
class CardInstance:
    """
    A card in play.

    Note: This is a runtime instance, not the definition.
    Definition fields are exposed read-only through properties.
    """
    definition: CardDefinition
    unique_id: str
    owner: str | None = None

    is_awakened: bool = False
    is_face_down: bool = False
    is_tapped: bool = False

    current_hp: int = 0  # Leaders only
    damage_counters: int = 0
    attached_cards: list[CardInstance] = field(default_factory=list)

    def __hash__(self):
        return hash(self.unique_id)

    def __eq__(self, other):
        if not isinstance(other, CardInstance):
            return False
        return self.unique_id == other.unique_id

    @property
    def card_id(self) -> str:
        return self.definition.card_id

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def card_type(self) -> str:
        return self.definition.card_type

    @property
    def cost(self) -> int:
        return self.definition.cost

    @property
    def is_leader(self) -> bool:
        return isinstance(self.definition, LeaderDefinition)

    @property
    def atk(self) -> int:
        """Current attack, honouring the awakened override."""
        definition = self.definition
        if not isinstance(definition, LeaderDefinition):
            return 0
        if self.is_awakened and definition.awakened_atk is not None:
            return definition.awakened_atk
        return definition.base_atk

    @property
    def max_hp(self) -> int:
        """Printed hit points for the current awaken state."""
        definition = self.definition
        if not isinstance(definition, LeaderDefinition):
            return 0
        if self.is_awakened and definition.awakened_hp is not None:
            return definition.awakened_hp
        return definition.base_hp


class CardFactory:
    """
    Creates card instances with session-unique IDs.

    IDs come from a monotonic counter, so uniqueness is guaranteed for the
    lifetime of the factory. One factory is shared by both players of a game.
    """

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def next_id(self, prefix: str) -> str:
        return f"{prefix}_{next(self._counter):04d}"

    def instantiate(
        self,
        definition: CardDefinition,
        owner_prefix: str,
        owner: str | None = None,
    ) -> CardInstance:
        """Create a fresh instance of ``definition``."""
        if isinstance(definition, LeaderDefinition):
            hp = definition.base_hp
        else:
            hp = 0
        return CardInstance(
            definition=definition,
            unique_id=self.next_id(owner_prefix),
            owner=owner,
            current_hp=hp,
        )
