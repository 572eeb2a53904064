"""
Card encoder.

Maps one card record to per-section tokens. Free-text fields go through
the tokenizer; numeric and categorical fields become synthetic tokens:

    power "2", toughness "3"  ->  stats  ["POWER_2", "TOUGHNESS_3"]
    rarity "rare"             ->  rarity ["RARITY_RARE"]
    colors ["W", "U"]         ->  colors ["COLOR_W", "COLOR_U"]
    cmc 3.0                   ->  cmc    ["CMC_3"]

Card names are never tokenized. Every name section is the single card-name
placeholder, which keeps names out of the vocabulary.
"""

from collections.abc import Mapping
from typing import Any

from oracletok.config import settings
from oracletok.models.card import CardFace, CardRecord, StatValue
from oracletok.models.errors import ConfigNotLoadedError
from oracletok.models.tokenized import (
    CardMetadata,
    CardSections,
    FaceSections,
    TokenizedCard,
)
from oracletok.services.tokenizer import Tokenizer


def format_value(value: StatValue) -> str:
    """Render a stat or cmc value: integral floats lose their ".0"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def stat_tokens(
    power: StatValue | None,
    toughness: StatValue | None,
    loyalty: StatValue | None = None,
) -> list[str]:
    """POWER_/TOUGHNESS_/LOYALTY_ tokens for the fields that are present."""
    tokens: list[str] = []
    for label, value in (("POWER", power), ("TOUGHNESS", toughness), ("LOYALTY", loyalty)):
        # Scryfall sends "" as well as null for missing stats
        if value is not None and value != "":
            tokens.append(f"{label}_{format_value(value)}")
    return tokens


def rarity_tokens(rarity: str | None) -> list[str]:
    """RARITY_ token, empty when rarity is absent."""
    return [f"RARITY_{rarity.upper()}"] if rarity else []


def color_tokens(colors: list[str]) -> list[str]:
    """One COLOR_ token per color, input order preserved."""
    return [f"COLOR_{color}" for color in colors]


def cmc_tokens(cmc: float) -> list[str]:
    return [f"CMC_{format_value(cmc)}"]


class CardEncoder:
    """Encodes card records with a shared tokenizer."""

    def __init__(self, tokenizer: Tokenizer, card_name_token: str | None = None) -> None:
        self.tokenizer = tokenizer
        self.card_name_token = card_name_token or settings.card_name_token

    def _name_section(self) -> list[str]:
        self.tokenizer.record(self.card_name_token)
        return [self.card_name_token]

    def _encode_face(self, face: CardFace) -> FaceSections:
        return FaceSections(
            name=self._name_section(),
            type=self.tokenizer.tokenize(face.type_line),
            text=self.tokenizer.tokenize(face.oracle_text),
            mana=self.tokenizer.tokenize(face.mana_cost),
        )

    def encode(self, record: CardRecord | Mapping[str, Any]) -> TokenizedCard:
        """
        Encode one card record.

        Args:
            record: A CardRecord, or a raw Scryfall card mapping

        Returns:
            TokenizedCard with all sections and a metadata snapshot

        Raises:
            ConfigNotLoadedError: If no configuration has been loaded
            pydantic.ValidationError: If a raw mapping is not a valid card
        """
        if not self.tokenizer.store.is_loaded:
            raise ConfigNotLoadedError()

        card = record if isinstance(record, CardRecord) else CardRecord.model_validate(record)

        # Faces get their own free-text sections; stats, rarity, colors and
        # cmc always come from the outer record
        faces = (
            [self._encode_face(face) for face in card.card_faces] if card.card_faces else None
        )

        sections = CardSections(
            name=self._name_section(),
            type=self.tokenizer.tokenize(card.type_line),
            text=self.tokenizer.tokenize(card.oracle_text),
            mana=self.tokenizer.tokenize(card.mana_cost),
            stats=stat_tokens(card.power, card.toughness, card.loyalty),
            rarity=rarity_tokens(card.rarity),
            colors=color_tokens(card.colors),
            cmc=cmc_tokens(card.cmc),
            faces=faces,
        )

        return TokenizedCard(
            card_id=card.card_id,
            tokens=sections,
            metadata=CardMetadata(
                set=card.set,
                rarity=card.rarity,
                cmc=card.cmc,
                colors=list(card.colors),
            ),
        )
