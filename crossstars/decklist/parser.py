"""
Decklist Parser - Turns submitted decklist text into card instances.

Line format (one entry per line, blank lines ignored):
    L: 《Leader Name》        leader line
    T: 《Tactics Name》       tactics line
    3 《Main Deck Card》      quantity + name
A name wrapped in 《》 or [] is taken verbatim and wins over prefix stripping.

Classification is by the catalog definition's type, not by the line prefix.
Types other than Leader and Tactics go to the main deck.

Parsing is all-or-nothing: every line is resolved against the catalog
before any instance is created, so a failed parse allocates no IDs.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..engine_core.cards import CardDefinition, CardFactory, CardInstance, CardType
from ..engine_core.errors import DeckParseError, DeckTooLarge, MalformedLine, UnknownCard
from ..engine_core.rules import MAX_DECK_CARDS, DeckPolicy

if TYPE_CHECKING:
    from ..catalog.base import CardCatalog

logger = logging.getLogger(__name__)

_BRACKETED = re.compile(r"《[^》]*》|\[[^\]]*\]")
_PREFIX = re.compile(r"^(?:L:|T:|\d+(?=\s|$))")
_LEADING_INT = re.compile(r"^(\d+)(?=\s|$)")

# Instance ID prefixes per section (e.g. "l_p1_0001")
_SECTION_PREFIX = {
    CardType.LEADER.value: "l",
    CardType.TACTICS.value: "t",
}
_MAIN_PREFIX = "m"


@dataclass
class DecklistEntry:
    """One resolved decklist line."""
    line: str
    name: str
    quantity: int
    definition: CardDefinition | None = None


@dataclass
class ParsedDeck:
    """Result of a successful parse, grouped by section."""
    leaders: list[CardInstance] = field(default_factory=list)
    tactics: list[CardInstance] = field(default_factory=list)
    main_deck: list[CardInstance] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.leaders) + len(self.tactics) + len(self.main_deck)


@dataclass
class DeckValidationResult:
    """Dry-run validation outcome, with every problem found."""
    valid: bool
    errors: list[str]
    counts: dict[str, int]


def parse_line(line: str) -> DecklistEntry:
    """
    Extract the card name and quantity from a single non-blank line.

    Raises MalformedLine if no name remains.
    """
    text = line.strip()

    match = _LEADING_INT.match(text)
    quantity = int(match.group(1)) if match else 1

    bracketed = _BRACKETED.search(text)
    if bracketed:
        name = bracketed.group(0)
        # Empty brackets carry no name
        if len(name) <= 2:
            raise MalformedLine(text)
    else:
        name = _PREFIX.sub("", text, count=1).strip()

    if not name:
        raise MalformedLine(text)
    if quantity < 1:
        raise MalformedLine(text, reason="quantity must be at least 1")

    return DecklistEntry(line=text, name=name, quantity=quantity)


def scan_decklist(
    raw_text: str,
    catalog: CardCatalog,
    max_cards: int = MAX_DECK_CARDS,
) -> list[DecklistEntry]:
    """
    Parse and resolve every line without creating instances.

    Raises MalformedLine / UnknownCard on the first bad line, and
    DeckTooLarge as soon as the running quantity passes ``max_cards``.
    CatalogUnavailable from the catalog propagates unchanged.
    """
    entries = []
    total = 0
    for line in raw_text.splitlines():
        if not line.strip():
            continue
        entry = parse_line(line)
        total += entry.quantity
        if total > max_cards:
            raise DeckTooLarge(max_cards, total)
        definition = catalog.lookup(entry.name)
        if definition is None:
            raise UnknownCard(entry.name)
        entry.definition = definition
        entries.append(entry)
    return entries


def _section_counts(entries: list[DecklistEntry]) -> dict[str, int]:
    counts = {"leaders": 0, "tactics": 0, "main_deck": 0}
    for entry in entries:
        card_type = entry.definition.card_type
        if card_type == CardType.LEADER:
            counts["leaders"] += entry.quantity
        elif card_type == CardType.TACTICS:
            counts["tactics"] += entry.quantity
        else:
            counts["main_deck"] += entry.quantity
    return counts


def parse_decklist(
    raw_text: str,
    owner: str,
    catalog: CardCatalog,
    factory: CardFactory | None = None,
    policy: DeckPolicy | None = None,
) -> ParsedDeck:
    """
    Parse a decklist into leader, tactics and main-deck instances.

    Args:
        raw_text: Newline-delimited decklist
        owner: Owner prefix for instance IDs ("p1", "p2")
        catalog: Name -> definition lookup
        factory: Shared ID source for the session (a fresh one if omitted)
        policy: Section size rules (leaders-only if omitted)

    Returns:
        ParsedDeck with one instance per requested copy

    Raises:
        DeckParseError subclass on any problem; nothing is created.
    """
    factory = factory or CardFactory()
    policy = policy or DeckPolicy()

    try:
        entries = scan_decklist(raw_text, catalog, policy.max_cards)
        counts = _section_counts(entries)
        policy.check(counts["leaders"], counts["tactics"], counts["main_deck"])
    except DeckParseError as e:
        logger.warning("[%s] decklist rejected: %s", owner, e)
        raise

    deck = ParsedDeck()
    for entry in entries:
        definition = entry.definition
        section_prefix = _SECTION_PREFIX.get(definition.card_type, _MAIN_PREFIX)
        id_prefix = f"{section_prefix}_{owner}"
        for _ in range(entry.quantity):
            card = factory.instantiate(definition, id_prefix, owner=owner)
            if definition.card_type == CardType.LEADER:
                deck.leaders.append(card)
            elif definition.card_type == CardType.TACTICS:
                deck.tactics.append(card)
            else:
                deck.main_deck.append(card)

    logger.info(
        "[%s] decklist parsed: %d leaders, %d tactics, %d main deck",
        owner, len(deck.leaders), len(deck.tactics), len(deck.main_deck),
    )
    return deck


def validate_decklist(
    raw_text: str,
    catalog: CardCatalog,
    policy: DeckPolicy | None = None,
) -> DeckValidationResult:
    """
    Check a decklist without building it.

    Line and catalog errors stop the scan; size rules are all reported.
    """
    policy = policy or DeckPolicy()
    try:
        entries = scan_decklist(raw_text, catalog, policy.max_cards)
    except DeckParseError as e:
        return DeckValidationResult(valid=False, errors=[str(e)], counts={})

    counts = _section_counts(entries)
    errors = policy.violations(counts["leaders"], counts["tactics"], counts["main_deck"])
    return DeckValidationResult(valid=not errors, errors=errors, counts=counts)
