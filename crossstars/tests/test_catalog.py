"""
Tests for card catalogs.

Tests:
- In-memory lookup
- JSON loading and record validation
- Unavailable catalog vs. missing card
"""

import json

import pytest

from ..catalog import CardCatalog, CardRecord, InMemoryCatalog, JsonCatalog, default_catalog
from ..catalog.cards import PROLOGUE
from ..engine_core.cards import CardType, LeaderDefinition
from ..decklist import parse_decklist
from ..engine_core.errors import CatalogUnavailable


LEADER_RECORD = {
    "card_id": "BP01-001",
    "name": "《うるか》",
    "type": "Leader",
    "hp": 100,
    "atk": 30,
    "hp_awakened": 130,
    "atk_awakened": 40,
    "effect_awakened": "【覚醒時】カードを1枚引く。",
    "color": "赤",
}

ATTACK_RECORD = {
    "card_id": "CS01-001",
    "name": "《ブライアントショット》",
    "type": "Attack",
    "cost": 1,
    "text": "相手のリーダー1体に20ダメージ。",
}


class TestInMemoryCatalog:
    """Tests for the dict-backed catalog."""

    def test_default_catalog(self):
        catalog = default_catalog()
        assert len(catalog) == 5
        assert "《うるか》" in catalog
        assert isinstance(catalog, CardCatalog)

    def test_lookup_miss_is_none(self, catalog):
        assert catalog.lookup("《存在しない》") is None

    def test_add_and_names(self):
        catalog = InMemoryCatalog()
        catalog.add(PROLOGUE)
        assert catalog.names() == ["《序章》"]
        assert catalog.lookup("《序章》").card_type == CardType.MEMORIA


class TestCardRecord:
    """Tests for catalog record validation."""

    def test_leader_record(self):
        definition = CardRecord.model_validate(LEADER_RECORD).to_definition()
        assert isinstance(definition, LeaderDefinition)
        assert definition.base_hp == 100
        assert definition.awakened_atk == 40

    def test_main_record(self):
        definition = CardRecord.model_validate(ATTACK_RECORD).to_definition()
        assert not isinstance(definition, LeaderDefinition)
        assert definition.cost == 1
        assert definition.effect_text.startswith("相手")

    def test_leader_requires_stats(self):
        record = dict(LEADER_RECORD)
        del record["hp"]
        with pytest.raises(ValueError):
            CardRecord.model_validate(record)

    def test_id_and_name_required(self):
        with pytest.raises(ValueError):
            CardRecord.model_validate({**ATTACK_RECORD, "card_id": ""})
        with pytest.raises(ValueError):
            CardRecord.model_validate({**ATTACK_RECORD, "name": ""})

    def test_unlisted_type_accepted(self):
        """The type set is open; a new printed type still loads."""
        definition = CardRecord.model_validate({**ATTACK_RECORD, "type": "Character"}).to_definition()
        assert definition.card_type == "Character"
        assert not definition.is_leader
        assert not definition.is_tactics

    def test_empty_type_rejected(self):
        with pytest.raises(ValueError):
            CardRecord.model_validate({**ATTACK_RECORD, "type": ""})


class TestJsonCatalog:
    """Tests for file-backed catalogs."""

    def test_load_list(self, tmp_path):
        path = tmp_path / "cards.json"
        path.write_text(json.dumps([LEADER_RECORD, ATTACK_RECORD], ensure_ascii=False), encoding="utf-8")

        catalog = JsonCatalog.from_path(path)

        assert len(catalog) == 2
        assert catalog.lookup("《うるか》").is_leader
        assert catalog.source == str(path)

    def test_load_wrapped(self, tmp_path):
        path = tmp_path / "cards.json"
        path.write_text(json.dumps({"cards": [ATTACK_RECORD]}), encoding="utf-8")
        assert len(JsonCatalog.from_path(path)) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogUnavailable):
            JsonCatalog.from_path(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "cards.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogUnavailable):
            JsonCatalog.from_path(path)

    def test_unlisted_type_goes_to_main_deck(self, tmp_path):
        path = tmp_path / "cards.json"
        character = {"card_id": "CS02-010", "name": "《ヒロイン》", "type": "Character", "cost": 2}
        path.write_text(json.dumps([LEADER_RECORD, character], ensure_ascii=False), encoding="utf-8")
        catalog = JsonCatalog.from_path(path)

        deck = parse_decklist("4 《うるか》\n3 《ヒロイン》", "p1", catalog)

        assert len(deck.leaders) == 4
        assert len(deck.tactics) == 0
        assert [c.card_type for c in deck.main_deck] == ["Character"] * 3
        assert all(c.unique_id.startswith("m_p1_") for c in deck.main_deck)

    def test_invalid_record(self, tmp_path):
        path = tmp_path / "cards.json"
        path.write_text(json.dumps([{"name": "x", "type": "Attack"}]), encoding="utf-8")
        with pytest.raises(ValueError, match="index 0"):
            JsonCatalog.from_path(path)
