"""
Card Catalog - Keyed store mapping a card's display name to its definition.

The engine only needs a synchronous ``lookup(name)``. Implementations that
cannot reach their backing store raise CatalogUnavailable, which callers
must keep distinct from a plain miss (``None``).
"""

from __future__ import annotations
from typing import Iterable, Protocol, runtime_checkable

from ..engine_core.cards import CardDefinition


@runtime_checkable
class CardCatalog(Protocol):
    """Anything that can resolve a card name to a definition."""

    def lookup(self, name: str) -> CardDefinition | None:
        ...


class InMemoryCatalog:
    """
    Catalog held in a dict.

    Usage:
        catalog = InMemoryCatalog([leader_def, attack_def])
        definition = catalog.lookup("《うるか》")
    """

    def __init__(self, definitions: Iterable[CardDefinition] = ()):
        self._cards: dict[str, CardDefinition] = {}
        for definition in definitions:
            self.add(definition)

    def add(self, definition: CardDefinition) -> None:
        """Register a definition under its display name (last write wins)."""
        self._cards[definition.name] = definition

    def lookup(self, name: str) -> CardDefinition | None:
        return self._cards.get(name)

    def names(self) -> list[str]:
        return list(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, name: object) -> bool:
        return name in self._cards
