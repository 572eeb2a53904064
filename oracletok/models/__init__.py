from oracletok.models.card import CardFace, CardRecord
from oracletok.models.errors import (
    ConfigError,
    ConfigNotLoadedError,
    ConfigSourceError,
    TokenizerError,
)
from oracletok.models.tokenized import (
    CardMetadata,
    CardSections,
    FaceSections,
    TokenizationResult,
    TokenizationStats,
    TokenizedCard,
    TokenizerStats,
    VocabularyExport,
)

__all__ = [
    "CardFace",
    "CardMetadata",
    "CardRecord",
    "CardSections",
    "ConfigError",
    "ConfigNotLoadedError",
    "ConfigSourceError",
    "FaceSections",
    "TokenizationResult",
    "TokenizationStats",
    "TokenizedCard",
    "TokenizerError",
    "TokenizerStats",
    "VocabularyExport",
]
