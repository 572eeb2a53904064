"""
Card record input models.

A CardRecord is the Scryfall-shaped JSON object handed to the encoder by
the external data source. It is UNTRUSTED: validation happens here, and a
record that fails validation is a per-record failure, never a batch failure.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

# Power/toughness/loyalty arrive as strings ("2", "*", "1+*") but numeric
# values are accepted as well.
StatValue = str | int | float


class CardFace(BaseModel):
    """One printed face of a multi-face card."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str | None = None
    mana_cost: str | None = None
    type_line: str | None = None
    oracle_text: str | None = None
    power: StatValue | None = None
    toughness: StatValue | None = None
    colors: list[str] = []

    @field_validator("colors", mode="before")
    @classmethod
    def default_colors(cls, value: Any) -> Any:
        return [] if value is None else value


class CardRecord(BaseModel):
    """
    A single card as supplied by the card data source.

    Attributes:
        id: Scryfall card ID (falls back to name as the card identifier)
        name: Card name (never tokenized, see CardEncoder)
        mana_cost: Mana cost in brace notation (e.g., "{2}{W}{U}")
        cmc: Converted mana cost / mana value
        type_line: Full type line (e.g., "Creature — Human Wizard")
        oracle_text: Rules text
        power, toughness, loyalty: Printed stats, absent when not applicable
        rarity: common, uncommon, rare, mythic (or any other printed rarity)
        colors: Ordered color codes (W, U, B, R, G)
        color_identity: Commander color identity
        set: Set code
        card_faces: Faces of split, transform, and modal double-faced cards
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str | None = None
    name: str | None = None
    mana_cost: str | None = None
    cmc: float = 0
    type_line: str | None = None
    oracle_text: str | None = None
    power: StatValue | None = None
    toughness: StatValue | None = None
    loyalty: StatValue | None = None
    rarity: str | None = None
    colors: list[str] = []
    color_identity: list[str] = []
    set: str | None = None
    card_faces: list[CardFace] | None = None

    @field_validator("colors", "color_identity", mode="before")
    @classmethod
    def default_color_lists(cls, value: Any) -> Any:
        """Scryfall sends null colors on some layouts."""
        return [] if value is None else value

    @field_validator("cmc", mode="before")
    @classmethod
    def default_cmc(cls, value: Any) -> Any:
        """Scryfall omits cmc on some tokens and art cards."""
        return 0 if value is None else value

    @property
    def card_id(self) -> str | None:
        """External identifier, falling back to the card name."""
        return self.id or self.name
