"""
Tokenized output models.

These are the JSON shapes consumed by the model-training pipeline.
Field names are snake_case in Python and camelCase on the wire:

    result.model_dump(by_alias=True)  # {"tokenizedCards": [...], ...}
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FaceSections(_WireModel):
    """Token sections computed for one face of a multi-face card."""

    name: list[str]
    type: list[str]
    text: list[str]
    mana: list[str]


class CardSections(_WireModel):
    """All token sections for one card.

    Free-text sections (type, text, mana) come from the tokenizer; the
    remaining sections hold synthetic fixed-form tokens.
    """

    name: list[str]
    type: list[str]
    text: list[str]
    mana: list[str]
    stats: list[str] = Field(default_factory=list)
    rarity: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    cmc: list[str] = Field(default_factory=list)
    faces: list[FaceSections] | None = None


class CardMetadata(_WireModel):
    """Untokenized snapshot of the record fields useful for filtering."""

    set: str | None = None
    rarity: str | None = None
    cmc: float = 0
    colors: list[str] = Field(default_factory=list)


class TokenizedCard(_WireModel):
    """Tokenized representation of one card record."""

    card_id: str | None
    tokens: CardSections
    metadata: CardMetadata


class TokenizationStats(_WireModel):
    """Summary statistics for one batch."""

    total_cards: int
    vocabulary_size: int
    unknown_token_count: int
    total_tokens: int


class TokenizationResult(_WireModel):
    """Corpus-level output of CorpusAggregator.tokenize_batch()."""

    tokenized_cards: list[TokenizedCard]
    vocabulary: list[str]
    unknown_tokens: list[str]
    token_counts: dict[str, int]
    stats: TokenizationStats


class TokenizerStats(_WireModel):
    """Snapshot of the tokenizer's configuration and session counters."""

    config_loaded: bool
    categories: list[str]
    vocabulary_size: int
    unknown_token_count: int
    total_unique_tokens: int
    total_tokens: int
    top_tokens: list[tuple[str, int]]


class VocabularyExport(_WireModel):
    """Model-ready vocabulary with stable alphabetical ids."""

    vocabulary: list[str]
    categories: dict[str, list[str]]
    token_to_id: dict[str, int]
    id_to_token: dict[int, str]
    unknown_tokens: list[str]
    stats: TokenizerStats
