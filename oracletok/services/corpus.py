"""
Corpus aggregation.

Drives the card encoder over a batch of records and produces corpus-level
statistics plus a model-ready vocabulary export.

A single bad record never aborts a batch: it is logged and skipped, so
the result may hold fewer cards than the input. Only a missing
configuration fails the whole call.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from oracletok.config import Settings, settings
from oracletok.models.card import CardRecord
from oracletok.models.errors import ConfigNotLoadedError
from oracletok.models.tokenized import (
    TokenizationResult,
    TokenizationStats,
    TokenizedCard,
    TokenizerStats,
    VocabularyExport,
)
from oracletok.services.card_encoder import CardEncoder
from oracletok.services.configuration_store import ConfigurationStore
from oracletok.services.preprocessor import Preprocessor
from oracletok.services.tokenizer import Tokenizer

logger = logging.getLogger(__name__)

CardInput = CardRecord | Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class EncodeOutcome:
    """Result of encoding one record: a card, or the reason it was skipped."""

    index: int
    card: TokenizedCard | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.card is not None


def _describe(record: Any) -> str:
    """Best-effort record label for log output."""
    if isinstance(record, CardRecord):
        return record.name or "unknown"
    if isinstance(record, Mapping):
        return str(record.get("name") or "unknown")
    return "unknown"


class CorpusAggregator:
    """Batch tokenization over one store/tokenizer/encoder set."""

    def __init__(self, encoder: CardEncoder) -> None:
        self.encoder = encoder

    @classmethod
    def from_config_text(
        cls, config_text: str, config: Settings | None = None
    ) -> "CorpusAggregator":
        """Wire a store, preprocessor, tokenizer and encoder from table text."""
        config = config or settings
        store = ConfigurationStore(config_text)
        preprocessor = Preprocessor(store, self_reference_token=config.self_reference_token)
        tokenizer = Tokenizer(
            store,
            preprocessor,
            unknown_prefix=config.unknown_prefix,
            top_tokens_limit=config.top_tokens_limit,
        )
        return cls(CardEncoder(tokenizer, card_name_token=config.card_name_token))

    @property
    def tokenizer(self) -> Tokenizer:
        return self.encoder.tokenizer

    @property
    def store(self) -> ConfigurationStore:
        return self.encoder.tokenizer.store

    # -------------------------------------------------------------------------
    # Batch tokenization
    # -------------------------------------------------------------------------

    def iter_outcomes(self, records: Iterable[CardInput]) -> Iterator[EncodeOutcome]:
        """
        Encode records one at a time, yielding an outcome per record.

        Raises:
            ConfigNotLoadedError: Propagated, it is not a per-record failure
        """
        for index, record in enumerate(records):
            try:
                yield EncodeOutcome(index=index, card=self.encoder.encode(record))
            except ConfigNotLoadedError:
                raise
            except Exception as e:
                logger.warning(
                    "card_tokenization_failed",
                    extra={
                        "record_index": index,
                        "card_name": _describe(record),
                        "error": str(e),
                    },
                )
                yield EncodeOutcome(index=index, error=str(e))

    def tokenize_batch(self, records: Iterable[CardInput]) -> TokenizationResult:
        """
        Tokenize a batch of card records.

        Counters are reset first, so counts never span batches.

        Args:
            records: CardRecords or raw Scryfall card mappings

        Returns:
            TokenizationResult for the records that encoded successfully

        Raises:
            ConfigNotLoadedError: If no configuration has been loaded
        """
        if not self.store.is_loaded:
            raise ConfigNotLoadedError()

        self.tokenizer.reset_counts()

        outcomes = list(self.iter_outcomes(records))
        cards = [outcome.card for outcome in outcomes if outcome.card is not None]
        unknown = sorted(self.tokenizer.unknown_tokens)

        logger.info(
            "batch_tokenized",
            extra={
                "record_count": len(outcomes),
                "tokenized_count": len(cards),
                "skipped_count": len(outcomes) - len(cards),
                "unknown_token_count": len(unknown),
            },
        )

        return TokenizationResult(
            tokenized_cards=cards,
            vocabulary=sorted(self.store.vocabulary),
            unknown_tokens=unknown,
            token_counts=self.tokenizer.token_counts,
            stats=TokenizationStats(
                total_cards=len(cards),
                vocabulary_size=len(self.store),
                unknown_token_count=len(unknown),
                total_tokens=self.tokenizer.total_tokens(),
            ),
        )

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def get_stats(self, top_n: int | None = None) -> TokenizerStats:
        """Current configuration and counter statistics."""
        return self.tokenizer.stats(top_n)

    def export_vocabulary(self) -> VocabularyExport:
        """
        Export the vocabulary for model training.

        Ids are alphabetical ranks, so they are stable for an unchanged
        vocabulary regardless of load order.
        """
        vocabulary = sorted(self.store.vocabulary)

        return VocabularyExport(
            vocabulary=vocabulary,
            categories=self.store.as_mapping(),
            token_to_id={token: index for index, token in enumerate(vocabulary)},
            id_to_token=dict(enumerate(vocabulary)),
            unknown_tokens=sorted(self.tokenizer.unknown_tokens),
            stats=self.get_stats(),
        )
