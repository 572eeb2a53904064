from pathlib import Path

import pytest

from oracletok.services.card_encoder import CardEncoder
from oracletok.services.configuration_store import ConfigurationStore
from oracletok.services.corpus import CorpusAggregator
from oracletok.services.preprocessor import Preprocessor
from oracletok.services.tokenizer import Tokenizer

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def config_path() -> Path:
    return FIXTURES / "token_config.csv"


@pytest.fixture
def config_text(config_path: Path) -> str:
    """Token configuration table covering every category the tests use."""
    return config_path.read_text(encoding="utf-8")


@pytest.fixture
def store(config_text: str) -> ConfigurationStore:
    return ConfigurationStore(config_text)


@pytest.fixture
def preprocessor(store: ConfigurationStore) -> Preprocessor:
    return Preprocessor(store)


@pytest.fixture
def tokenizer(store: ConfigurationStore, preprocessor: Preprocessor) -> Tokenizer:
    return Tokenizer(store, preprocessor)


@pytest.fixture
def encoder(tokenizer: Tokenizer) -> CardEncoder:
    return CardEncoder(tokenizer)


@pytest.fixture
def aggregator(encoder: CardEncoder) -> CorpusAggregator:
    return CorpusAggregator(encoder)


@pytest.fixture
def sample_cards() -> list[dict]:
    """Sample Scryfall card records."""
    return [
        {
            "id": "card-bolt",
            "name": "Lightning Bolt",
            "mana_cost": "{R}",
            "cmc": 1.0,
            "type_line": "Instant",
            "oracle_text": "Lightning Bolt deals 3 damage to any target.",
            "rarity": "common",
            "colors": ["R"],
            "color_identity": ["R"],
            "set": "leb",
        },
        {
            "id": "card-angel",
            "name": "Serra Angel",
            "mana_cost": "{3}{W}{W}",
            "cmc": 5.0,
            "type_line": "Creature — Angel",
            "oracle_text": "Flying, vigilance",
            "power": "4",
            "toughness": "4",
            "rarity": "uncommon",
            "colors": ["W"],
            "color_identity": ["W"],
            "set": "leb",
        },
        {
            "id": "card-terror",
            "name": "Terror",
            "mana_cost": "{1}{B}",
            "cmc": 2.0,
            "type_line": "Instant",
            "oracle_text": "Destroy target creature. (It can't be regenerated.)",
            "rarity": "common",
            "colors": ["B"],
            "color_identity": ["B"],
            "set": "leb",
        },
    ]


@pytest.fixture
def double_faced_card() -> dict:
    """A transform card with two faces."""
    return {
        "id": "card-delver",
        "name": "Delver of Secrets // Insectile Aberration",
        "cmc": 1.0,
        "type_line": "Creature — Human Wizard // Creature — Human Insect",
        "rarity": "common",
        "colors": ["U"],
        "color_identity": ["U"],
        "set": "isd",
        "card_faces": [
            {
                "name": "Delver of Secrets",
                "mana_cost": "{U}",
                "type_line": "Creature — Human Wizard",
                "oracle_text": "At the beginning of your upkeep, you may transform it.",
                "power": "1",
                "toughness": "1",
                "colors": ["U"],
            },
            {
                "name": "Insectile Aberration",
                "mana_cost": "",
                "type_line": "Creature — Human Insect",
                "oracle_text": "Flying",
                "power": "3",
                "toughness": "2",
                "colors": ["U"],
            },
        ],
    }
