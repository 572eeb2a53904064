from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Tokenizer settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="ORACLETOK_")

    app_name: str = "OracleTok"

    # Prefix marking out-of-vocabulary tokens in output
    unknown_prefix: str = "UNK_"

    # Name section placeholder (card names never enter the token stream)
    card_name_token: str = "CardName"

    # Replacement for the "~" self-reference marker in rules text
    self_reference_token: str = "CARDNAME"

    top_tokens_limit: int = 20

    config_fetch_timeout: float = 30.0
    user_agent: str = "OracleTok/1.0"


settings = Settings()


# =============================================================================
# CONFIGURATION TABLE
# =============================================================================

# Header columns every configuration table must carry (any order)
REQUIRED_COLUMNS = ("category", "token", "description")

# Categories with special meaning to the preprocessor and tokenizer
PHRASES_CATEGORY = "phrases"
PUNCTUATION_CATEGORY = "punctuation"

# Split characters used when no "punctuation" category is configured
DEFAULT_PUNCTUATION = (
    ".",
    ",",
    ":",
    ";",
    "!",
    "?",
    "(",
    ")",
    "[",
    "]",
    "{",
    "}",
    '"',
    "'",
    "—",
    "–",
    "+",
    "/",
    "*",
    "=",
    "<",
    ">",
    "~",
    "-",
)
