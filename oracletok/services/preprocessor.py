"""
Rules text preprocessor.

Normalizes oracle text before it is split into tokens. The pipeline runs
in a fixed order:

1. lowercase
2. mana symbols: hybrid -> " / ", Phyrexian -> " P ", others padded
3. configured phrases joined with underscores (longest first)
4. reminder text parentheses removed, contents kept
5. "~" self-reference replaced with a placeholder
"""

import re
from re import Match, Pattern

from oracletok.config import settings
from oracletok.services.configuration_store import ConfigurationStore

# Any brace-delimited symbol: {G}, {2/W}, {W/P}, {T}, {10}
MANA_SYMBOL_PATTERN = re.compile(r"\{[^{}]+\}")

# Patterns run on lowercased text
# {W/U} (two colors) or {2/W} (generic cost and a color)
HYBRID_PATTERN = re.compile(r"\{(?:[wubrg]|\d+)/[wubrg]\}")
# {W/P}: color or 2 life
PHYREXIAN_PATTERN = re.compile(r"\{[wubrg]/p\}")

HYBRID_MARKER = " / "
PHYREXIAN_MARKER = " P "

REMINDER_TEXT_PATTERN = re.compile(r"\(([^()]*)\)")

SELF_REFERENCE = "~"
# A "~" inside a joined phrase ("when_~_dies") belongs to the phrase
_SELF_REFERENCE_PATTERN = re.compile(r"(?<!_)~(?!_)")


def join_phrase(phrase: str) -> str:
    """Underscore-joined form of a phrase: "draw a card" -> "draw_a_card"."""
    return "_".join(phrase.split())


def split_phrase(token: str) -> str:
    """Inverse of join_phrase: "draw_a_card" -> "draw a card"."""
    return token.replace("_", " ")


def _replace_mana_symbol(match: Match[str]) -> str:
    symbol = match.group(0)
    if HYBRID_PATTERN.fullmatch(symbol):
        return HYBRID_MARKER
    if PHYREXIAN_PATTERN.fullmatch(symbol):
        return PHYREXIAN_MARKER
    return f" {symbol} "


def _phrase_pattern(phrase: str) -> Pattern[str]:
    body = r"\s+".join(re.escape(word) for word in phrase.split())
    return re.compile(rf"(?<!\w){body}(?!\w)", re.IGNORECASE)


class Preprocessor:
    """
    Deterministic text normalization driven by the "phrases" category.

    normalize() has no side effects. Compiled phrase patterns are cached
    per store revision.
    """

    def __init__(
        self,
        store: ConfigurationStore,
        self_reference_token: str | None = None,
    ) -> None:
        self.store = store
        self.self_reference_token = self_reference_token or settings.self_reference_token
        self._phrase_patterns: list[tuple[Pattern[str], str]] = []
        self._phrase_revision = -1

    def phrase_patterns(self) -> list[tuple[Pattern[str], str]]:
        """(pattern, joined form) for each phrase in substitution order."""
        if self._phrase_revision != self.store.revision:
            self._phrase_patterns = [
                (_phrase_pattern(phrase), join_phrase(phrase))
                for phrase in self.store.ordered_phrases()
                if phrase.strip()
            ]
            self._phrase_revision = self.store.revision
        return self._phrase_patterns

    def normalize(self, text: str | None) -> str:
        """
        Normalize rules text for splitting.

        Args:
            text: Raw oracle text, type line, or mana cost

        Returns:
            Normalized text ("" for empty input)
        """
        if not text:
            return ""

        processed = text.lower()

        processed = MANA_SYMBOL_PATTERN.sub(_replace_mana_symbol, processed)

        for pattern, joined in self.phrase_patterns():
            processed = pattern.sub(lambda _match, joined=joined: joined, processed)

        # Reminder text is informative: keep the words, drop the parentheses
        processed = REMINDER_TEXT_PATTERN.sub(lambda m: f" {m.group(1)} ", processed)

        return _SELF_REFERENCE_PATTERN.sub(self.self_reference_token, processed)
