"""
OracleTok services.

Configuration, normalization, tokenization and corpus aggregation.
"""

from oracletok.services.card_encoder import CardEncoder
from oracletok.services.config_source import (
    fetch_config_text,
    load_store_from_file,
    load_store_from_url,
    read_config_file,
)
from oracletok.services.configuration_store import ConfigurationStore
from oracletok.services.corpus import CorpusAggregator, EncodeOutcome
from oracletok.services.preprocessor import Preprocessor
from oracletok.services.tokenizer import Tokenizer

__all__ = [
    "CardEncoder",
    "ConfigurationStore",
    "CorpusAggregator",
    "EncodeOutcome",
    "Preprocessor",
    "Tokenizer",
    # Configuration acquisition
    "fetch_config_text",
    "load_store_from_file",
    "load_store_from_url",
    "read_config_file",
]
