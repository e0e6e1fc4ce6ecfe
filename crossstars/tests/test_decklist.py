"""
Tests for decklist parsing.

Tests:
- Line format (brackets, prefixes, quantities)
- Classification by catalog type
- Leader count and deck size policies
- All-or-nothing behavior
"""

import pytest

from ..catalog import InMemoryCatalog
from ..decklist import (
    DeckPolicy,
    STRICT_POLICY,
    RELAXED_POLICY,
    parse_line,
    parse_decklist,
    validate_decklist,
)
from ..engine_core.cards import CardFactory, CardType
from ..engine_core.errors import (
    CatalogUnavailable,
    DeckTooLarge,
    InvalidDeckSize,
    InvalidLeaderCount,
    MalformedLine,
    UnknownCard,
)
from ..engine_core.rules import MAX_DECK_CARDS


class TestParseLine:
    """Tests for single-line extraction."""

    def test_leader_prefix(self):
        entry = parse_line("L: 《うるか》")
        assert entry.name == "《うるか》"
        assert entry.quantity == 1

    def test_quantity_and_name(self):
        entry = parse_line("25 《ブライアントショット》")
        assert entry.name == "《ブライアントショット》"
        assert entry.quantity == 25

    def test_bracket_token_wins_over_prefix(self):
        """Text around a bracketed name is ignored."""
        entry = parse_line("T: 《PPチケット》 (sideboard)")
        assert entry.name == "《PPチケット》"

    def test_square_brackets(self):
        entry = parse_line("3 [序章]")
        assert entry.name == "[序章]"
        assert entry.quantity == 3

    def test_bare_name_after_prefix(self):
        entry = parse_line("T: PPチケット")
        assert entry.name == "PPチケット"

    def test_surrounding_whitespace(self):
        entry = parse_line("   2 《序章》   ")
        assert entry.name == "《序章》"
        assert entry.quantity == 2

    def test_prefix_only_is_malformed(self):
        with pytest.raises(MalformedLine):
            parse_line("L:")

    def test_number_only_is_malformed(self):
        with pytest.raises(MalformedLine):
            parse_line("3")

    def test_empty_brackets_malformed(self):
        with pytest.raises(MalformedLine):
            parse_line("2 《》")

    def test_zero_quantity_malformed(self):
        with pytest.raises(MalformedLine):
            parse_line("0 《序章》")


class TestParseDecklist:
    """Tests for whole-decklist parsing."""

    def test_sample_decklist_sections(self, catalog, sample_decklist):
        deck = parse_decklist(sample_decklist, "p1", catalog)

        assert len(deck.leaders) == 4
        assert len(deck.tactics) == 5
        assert len(deck.main_deck) == 50
        assert deck.total == 59

    def test_classification_uses_catalog_type(self, catalog):
        """A card is sorted by its definition, not the line prefix."""
        text = "\n".join(["L: 《うるか》"] * 3 + ["T: 《うるか》", "T: 《序章》"])
        deck = parse_decklist(text, "p1", catalog)

        assert len(deck.leaders) == 4
        assert len(deck.tactics) == 0
        assert [c.card_type for c in deck.main_deck] == [CardType.MEMORIA]

    def test_blank_lines_ignored(self, catalog):
        text = "\n\nL: 《うるか》\n\n4 《序章》\nL: 《うるか》\nL: 《うるか》\n  \nL: 《うるか》\n"
        deck = parse_decklist(text, "p1", catalog)
        assert len(deck.leaders) == 4
        assert len(deck.main_deck) == 4

    def test_instance_ids_unique_and_prefixed(self, catalog, sample_decklist):
        factory = CardFactory()
        p1 = parse_decklist(sample_decklist, "p1", catalog, factory)
        p2 = parse_decklist(sample_decklist, "p2", catalog, factory)

        ids = [c.unique_id for deck in (p1, p2) for c in deck.leaders + deck.tactics + deck.main_deck]
        assert len(ids) == len(set(ids))
        assert all(c.unique_id.startswith("l_p1_") for c in p1.leaders)
        assert all(c.unique_id.startswith("t_p2_") for c in p2.tactics)
        assert all(c.unique_id.startswith("m_p1_") for c in p1.main_deck)

    def test_leader_hp_initialized(self, catalog, sample_decklist):
        deck = parse_decklist(sample_decklist, "p1", catalog)
        assert all(c.current_hp == 100 for c in deck.leaders)
        assert all(c.current_hp == 0 for c in deck.main_deck)
        assert all(not c.is_tapped and not c.is_awakened for c in deck.leaders)

    def test_unknown_card(self, catalog, sample_decklist):
        text = sample_decklist + "1 《存在しないカード》\n"
        with pytest.raises(UnknownCard) as exc:
            parse_decklist(text, "p1", catalog)
        assert exc.value.name == "《存在しないカード》"
        assert exc.value.code == "UNKNOWN_CARD"

    def test_three_leaders_rejected(self, catalog):
        text = "L: 《うるか》\nL: 《うるか》\nL: 《うるか》\n10 《序章》\n"
        with pytest.raises(InvalidLeaderCount) as exc:
            parse_decklist(text, "p1", catalog)
        assert exc.value.actual == 3

    def test_five_leaders_rejected(self, catalog):
        text = "5 《うるか》\n"
        with pytest.raises(InvalidLeaderCount):
            parse_decklist(text, "p1", catalog)

    def test_failed_parse_allocates_no_ids(self, catalog):
        """Nothing is instantiated when any line fails."""
        factory = CardFactory()
        text = "4 《うるか》\n10 《序章》\n1 《存在しないカード》\n"
        with pytest.raises(UnknownCard):
            parse_decklist(text, "p1", catalog, factory)
        assert factory.next_id("x") == "x_0001"

    def test_catalog_unavailable_propagates(self, sample_decklist):
        class OfflineCatalog:
            def lookup(self, name):
                raise CatalogUnavailable("offline")

        with pytest.raises(CatalogUnavailable):
            parse_decklist(sample_decklist, "p1", OfflineCatalog())


class TestDeckPolicy:
    """Tests for deck size rules."""

    def test_default_policy_ignores_section_sizes(self, catalog):
        text = "4 《うるか》\n1 《PPチケット》\n10 《序章》\n"
        deck = parse_decklist(text, "p1", catalog)
        assert len(deck.main_deck) == 10

    def test_strict_policy_accepts_sample(self, catalog, sample_decklist):
        deck = parse_decklist(sample_decklist, "p1", catalog, policy=STRICT_POLICY)
        assert deck.total == 59

    def test_strict_policy_main_deck_size(self, catalog):
        text = "4 《うるか》\n5 《PPチケット》\n49 《序章》\n"
        with pytest.raises(InvalidDeckSize) as exc:
            parse_decklist(text, "p1", catalog, policy=STRICT_POLICY)
        assert exc.value.section == "main_deck"
        assert exc.value.actual == 49

    def test_strict_policy_tactics_size(self, catalog):
        text = "4 《うるか》\n4 《PPチケット》\n50 《序章》\n"
        with pytest.raises(InvalidDeckSize) as exc:
            parse_decklist(text, "p1", catalog, policy=STRICT_POLICY)
        assert exc.value.section == "tactics"

    def test_relaxed_policy(self, catalog):
        text = "4 《うるか》\n2 《序章》\n"
        deck = parse_decklist(text, "p1", catalog, policy=RELAXED_POLICY)
        assert len(deck.main_deck) == 2

    def test_huge_quantity_rejected_before_instancing(self, catalog):
        """A runaway quantity fails the scan; no IDs are allocated."""
        factory = CardFactory()
        with pytest.raises(DeckTooLarge) as exc:
            parse_decklist("4 《うるか》\n2000000 《序章》\n", "p1", catalog, factory)
        assert exc.value.code == "INVALID_DECK_SIZE"
        assert exc.value.limit == MAX_DECK_CARDS
        assert factory.next_id("x") == "x_0001"

    def test_card_cap_counts_across_lines(self, catalog):
        policy = DeckPolicy(max_cards=10)
        text = "4 《うるか》\n" + "2 《序章》\n" * 4
        with pytest.raises(DeckTooLarge) as exc:
            parse_decklist(text, "p1", catalog, policy=policy)
        assert exc.value.actual == 12

    def test_cap_is_inclusive(self, catalog):
        deck = parse_decklist("4 《うるか》\n6 《序章》\n", "p1", catalog, policy=DeckPolicy(max_cards=10))
        assert deck.total == 10


class TestValidateDecklist:
    """Tests for dry-run validation."""

    def test_valid(self, catalog, sample_decklist):
        result = validate_decklist(sample_decklist, catalog, STRICT_POLICY)
        assert result.valid
        assert result.errors == []
        assert result.counts == {"leaders": 4, "tactics": 5, "main_deck": 50}

    def test_reports_every_size_problem(self, catalog):
        text = "3 《うるか》\n1 《PPチケット》\n"
        result = validate_decklist(text, catalog, STRICT_POLICY)
        assert not result.valid
        assert len(result.errors) == 3
        assert result.counts["leaders"] == 3

    def test_unknown_card_reported(self, catalog):
        result = validate_decklist("4 《謎》\n", catalog)
        assert not result.valid
        assert "《謎》" in result.errors[0]
        assert result.counts == {}

    def test_empty_catalog(self, sample_decklist):
        result = validate_decklist(sample_decklist, InMemoryCatalog())
        assert not result.valid

    def test_oversized_list_reported(self, catalog):
        result = validate_decklist("4 《うるか》\n2000000 《序章》\n", catalog)
        assert not result.valid
        assert "at most" in result.errors[0]
