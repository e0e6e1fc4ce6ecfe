"""
Catalog Records - Pydantic schema for stored card data.

These are the rules the authoring form enforces before a card reaches
the catalog: an ID and a name are required, and leaders carry HP/ATK.
"""

from typing import Optional
from pydantic import BaseModel, Field, model_validator

from ..engine_core.cards import CardDefinition, CardType, LeaderDefinition


class CardRecord(BaseModel):
    """A single card as stored in the catalog."""
    card_id: str = Field(..., min_length=1, description="Printed card number, e.g. BP01-001")
    name: str = Field(..., min_length=1, description="Display name used in decklists")
    card_type: str = Field(
        ..., min_length=1, alias="type", description="Card type; unlisted types are main-deck cards"
    )
    cost: int = Field(0, ge=0)
    text: str = ""
    color: Optional[str] = None

    # Leader stats
    hp: Optional[int] = Field(None, ge=0)
    atk: Optional[int] = Field(None, ge=0)
    hp_awakened: Optional[int] = Field(None, ge=0)
    atk_awakened: Optional[int] = Field(None, ge=0)
    effect_awakened: Optional[str] = None

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _leaders_have_stats(self) -> "CardRecord":
        if self.card_type == CardType.LEADER and (self.hp is None or self.atk is None):
            raise ValueError(f"Leader {self.card_id} must define hp and atk")
        return self

    def to_definition(self) -> CardDefinition:
        """Convert to the engine's tagged definition."""
        if self.card_type == CardType.LEADER:
            return LeaderDefinition(
                card_id=self.card_id,
                name=self.name,
                card_type=self.card_type,
                cost=self.cost,
                effect_text=self.text,
                color=self.color,
                base_hp=self.hp or 0,
                base_atk=self.atk or 0,
                awakened_hp=self.hp_awakened,
                awakened_atk=self.atk_awakened,
                awakened_effect_text=self.effect_awakened,
            )
        return CardDefinition(
            card_id=self.card_id,
            name=self.name,
            card_type=self.card_type,
            cost=self.cost,
            effect_text=self.text,
            color=self.color,
        )
