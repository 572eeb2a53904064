"""OracleTok: vocabulary-controlled tokenizer for Magic: The Gathering rules text."""

from oracletok.services import (
    CardEncoder,
    ConfigurationStore,
    CorpusAggregator,
    Preprocessor,
    Tokenizer,
)

__all__ = [
    "CardEncoder",
    "ConfigurationStore",
    "CorpusAggregator",
    "Preprocessor",
    "Tokenizer",
]
