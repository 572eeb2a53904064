"""
Vocabulary-controlled tokenizer.

Splits normalized rules text into tokens and classifies each one against
the configuration store's vocabulary:

    "Destroy target creature."  ->  ["destroy", "target", "creature", "."]
    "Destroy target Wurm."      ->  ["destroy", "target", "UNK_wurm", "."]

Token frequencies and the set of unknown tokens accumulate across calls
until reset_counts() is called, a batch starts, or the configuration is
reloaded.
"""

import logging
import re
from collections import Counter
from collections.abc import Iterable
from re import Pattern

from oracletok.config import DEFAULT_PUNCTUATION, PUNCTUATION_CATEGORY, settings
from oracletok.models.errors import ConfigNotLoadedError
from oracletok.models.tokenized import TokenizerStats
from oracletok.services.configuration_store import ConfigurationStore
from oracletok.services.preprocessor import Preprocessor, join_phrase, split_phrase

logger = logging.getLogger(__name__)

NUMBER_PATTERN = re.compile(r"[0-9]+")

# Characters that stay inside a word when flanked by word characters
# ("can't", "opponent's", "jump-start")
WORD_JOINERS = "'’-"


def build_split_pattern(punctuation: Iterable[str], phrases: Iterable[str]) -> Pattern[str]:
    """
    Build the tokenizing pattern.

    Alternatives, in priority order:
    1. brace symbols left intact by the preprocessor ("{t}", "{10}")
    2. underscore-joined phrases, which may contain punctuation ("+1/+1_counter")
    3. words, allowing joiner characters between word characters
    4. single punctuation characters

    Args:
        punctuation: Split characters (multi-character entries contribute
            each of their characters)
        phrases: Phrases from the configuration, in any form

    Returns:
        Compiled pattern for use with finditer()
    """
    chars = sorted({char for entry in punctuation for char in entry if not char.isspace()})
    punct_class = "".join(re.escape(char) for char in chars)
    joiner_class = "".join(re.escape(char) for char in WORD_JOINERS)
    word_class = rf"[^\s{punct_class}]" if punct_class else r"\S"

    alternatives = [r"\{[^{}\s]+\}"]

    joined = sorted({join_phrase(p) for p in phrases if p.strip()}, key=lambda p: (-len(p), p))
    if joined:
        phrase_body = "|".join(re.escape(phrase) for phrase in joined)
        alternatives.append(rf"(?<!\w)(?:{phrase_body})(?!\w)")

    alternatives.append(rf"{word_class}+(?:[{joiner_class}]{word_class}+)*")

    if punct_class:
        alternatives.append(rf"[{punct_class}]")

    return re.compile("|".join(alternatives))


class Tokenizer:
    """
    Splits and classifies rules text.

    Owns the session counters (token frequencies and unknown tokens).
    Counters reset automatically when the store is reloaded.
    The store holds its reload listener weakly, so a discarded tokenizer
    does not stay registered.
    """

    def __init__(
        self,
        store: ConfigurationStore,
        preprocessor: Preprocessor | None = None,
        unknown_prefix: str | None = None,
        top_tokens_limit: int | None = None,
    ) -> None:
        self.store = store
        self.preprocessor = preprocessor or Preprocessor(store)
        self.unknown_prefix = unknown_prefix or settings.unknown_prefix
        self.top_tokens_limit = (
            settings.top_tokens_limit if top_tokens_limit is None else top_tokens_limit
        )

        self._token_counts: Counter[str] = Counter()
        self._unknown_tokens: set[str] = set()

        self._split_pattern: Pattern[str] | None = None
        self._pattern_revision = -1

        store.on_reload(self.reset_counts)

    # -------------------------------------------------------------------------
    # Tokenization
    # -------------------------------------------------------------------------

    def split_pattern(self) -> Pattern[str]:
        """Current tokenizing pattern, rebuilt when the store changes."""
        if self._split_pattern is None or self._pattern_revision != self.store.revision:
            punctuation = self.store.tokens_by_category(PUNCTUATION_CATEGORY)
            self._split_pattern = build_split_pattern(
                punctuation or DEFAULT_PUNCTUATION,
                self.store.phrases,
            )
            self._pattern_revision = self.store.revision
            logger.debug(
                "split_pattern_rebuilt",
                extra={
                    "revision": self.store.revision,
                    "default_punctuation": not punctuation,
                },
            )
        return self._split_pattern

    def split(self, normalized: str) -> list[str]:
        """Split normalized text into raw tokens (no classification)."""
        return [match.group(0) for match in self.split_pattern().finditer(normalized)]

    def is_known(self, raw_token: str) -> bool:
        """Vocabulary membership of a raw token, numerals always known."""
        return split_phrase(raw_token) in self.store or bool(NUMBER_PATTERN.fullmatch(raw_token))

    def tokenize(self, text: str | None) -> list[str]:
        """
        Tokenize one piece of rules text.

        Args:
            text: Raw text (oracle text, type line, mana cost)

        Returns:
            Tokens in text order. Unknown tokens carry the unknown prefix.

        Raises:
            ConfigNotLoadedError: If no configuration has been loaded
        """
        if not self.store.is_loaded:
            raise ConfigNotLoadedError()

        tokens: list[str] = []
        for raw in self.split(self.preprocessor.normalize(text)):
            normalized = split_phrase(raw)

            if self.is_known(raw):
                token = normalized
            else:
                self._unknown_tokens.add(normalized)
                token = f"{self.unknown_prefix}{normalized}"

            tokens.append(token)
            self.record(token)

        return tokens

    # -------------------------------------------------------------------------
    # Session counters
    # -------------------------------------------------------------------------

    def record(self, token: str) -> None:
        """Count one occurrence of an emitted token."""
        self._token_counts[token] += 1

    def reset_counts(self) -> None:
        """Clear token frequencies and unknown tokens."""
        self._token_counts.clear()
        self._unknown_tokens.clear()

    @property
    def token_counts(self) -> dict[str, int]:
        """Token -> count, most frequent first."""
        return dict(self._token_counts.most_common())

    @property
    def unknown_tokens(self) -> set[str]:
        """Unprefixed tokens that failed vocabulary membership."""
        return set(self._unknown_tokens)

    def total_tokens(self) -> int:
        """Sum of all token counts."""
        return sum(self._token_counts.values())

    def stats(self, top_n: int | None = None) -> TokenizerStats:
        """Snapshot of configuration size and session counters."""
        limit = self.top_tokens_limit if top_n is None else top_n
        return TokenizerStats(
            config_loaded=self.store.is_loaded,
            categories=self.store.categories(),
            vocabulary_size=len(self.store),
            unknown_token_count=len(self._unknown_tokens),
            total_unique_tokens=len(self._token_counts),
            total_tokens=self.total_tokens(),
            top_tokens=self._token_counts.most_common(limit),
        )
