"""
Configuration store.

Owns the categorized token sets and the vocabulary derived from them.

INVARIANTS:
- vocabulary == union of every category's tokens, at all times
- load() is atomic: a failed load leaves the store exactly as it was
- a successful load replaces the whole state, it never merges with it
"""

import logging
import weakref
from collections.abc import Callable
from inspect import ismethod

from oracletok.config import PHRASES_CATEGORY
from oracletok.models.errors import ConfigError
from oracletok.parsers.token_config import format_config_table, parse_config_table

logger = logging.getLogger(__name__)

ReloadListener = Callable[[], None]


def _clean_field(name: str, value: str) -> str:
    """Strip a field the way the table parser does; line breaks cannot round-trip."""
    value = value.strip()
    if "\n" in value or "\r" in value:
        raise ConfigError(f"{name} must not contain a line break")
    return value


class ConfigurationStore:
    """
    Categorized token sets loaded from a configuration table.

    Each category maps token -> description, kept in insertion order so
    export_as_tabular() reproduces the loaded table.

    `revision` increases on every mutation; dependents use it to invalidate
    anything they derive from the store (compiled patterns, phrase order).
    """

    def __init__(self, config_text: str | None = None) -> None:
        self._categories: dict[str, dict[str, str]] = {}
        self._vocabulary: set[str] = set()
        self._loaded = False
        self._reload_listeners: list[Callable[[], ReloadListener | None]] = []
        self.revision = 0

        if config_text is not None:
            self.load(config_text)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self, config_text: str) -> None:
        """
        Replace the whole store with the contents of a configuration table.

        Raises:
            ConfigError: If the header is missing a required column. The
                store is not modified.
        """
        parsed = parse_config_table(config_text)

        categories: dict[str, dict[str, str]] = {}
        for row in parsed.rows:
            categories.setdefault(row.category, {})[row.token] = row.description

        # Swap only after the whole table parsed
        self._categories = categories
        self._vocabulary = {token for tokens in categories.values() for token in tokens}
        self._loaded = True
        self.revision += 1

        if parsed.skipped:
            logger.debug("token_config_rows_skipped", extra={"skipped_rows": parsed.skipped})

        logger.info(
            "token_config_loaded",
            extra={
                "vocabulary_size": len(self._vocabulary),
                "category_count": len(self._categories),
                "skipped_rows": parsed.skipped,
            },
        )

        for listener in self._live_listeners():
            listener()

    def on_reload(self, listener: ReloadListener) -> None:
        """
        Register a callback invoked after every successful load().

        Bound methods are held weakly and drop out once their owner is
        garbage collected. Plain functions stay registered until passed to
        remove_reload_listener().
        """
        self._live_listeners()
        if ismethod(listener):
            self._reload_listeners.append(weakref.WeakMethod(listener))
        else:
            self._reload_listeners.append(lambda: listener)

    def remove_reload_listener(self, listener: ReloadListener) -> None:
        """Unregister a callback; unknown callbacks are ignored."""
        self._reload_listeners = [ref for ref in self._reload_listeners if ref() != listener]

    def _live_listeners(self) -> list[ReloadListener]:
        """Resolve registered callbacks, pruning collected ones."""
        resolved = [(ref, ref()) for ref in self._reload_listeners]
        self._reload_listeners = [ref for ref, listener in resolved if listener is not None]
        return [listener for _, listener in resolved if listener is not None]

    @property
    def is_loaded(self) -> bool:
        """Whether load() has ever succeeded."""
        return self._loaded

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add_token(self, category: str, token: str, description: str = "") -> None:
        """
        Add a token to a category, creating the category if needed.

        Fields are stripped like table fields on load, so the token survives
        an export_as_tabular() round trip.

        Raises:
            ConfigError: If category or token is blank, or a field holds a
                line break
        """
        category = _clean_field("category", category)
        token = _clean_field("token", token)
        description = _clean_field("description", description)
        if not category or not token:
            raise ConfigError("category and token must be non-empty")

        self._categories.setdefault(category, {})[token] = description
        self._vocabulary.add(token)
        self.revision += 1

    def remove_token(self, category: str, token: str) -> None:
        """
        Remove a token from one category.

        The token stays in the vocabulary while any other category still
        holds it. A category left empty is dropped. Removing from an unknown
        category is a no-op.
        """
        tokens = self._categories.get(category)
        if tokens is None or token not in tokens:
            return

        del tokens[token]
        if not tokens:
            del self._categories[category]

        if not any(token in other for other in self._categories.values()):
            self._vocabulary.discard(token)

        self.revision += 1

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    def categories(self) -> list[str]:
        """All category names in load order."""
        return list(self._categories)

    def tokens_by_category(self, category: str) -> list[str]:
        """Tokens in a category, empty for an unknown category."""
        return list(self._categories.get(category, {}))

    def description(self, category: str, token: str) -> str | None:
        """Description recorded for a token, or None if absent."""
        return self._categories.get(category, {}).get(token)

    def as_mapping(self) -> dict[str, list[str]]:
        """Category -> tokens snapshot."""
        return {category: list(tokens) for category, tokens in self._categories.items()}

    @property
    def vocabulary(self) -> frozenset[str]:
        """Snapshot of the derived vocabulary."""
        return frozenset(self._vocabulary)

    def contains(self, token: str) -> bool:
        """Vocabulary membership."""
        return token in self._vocabulary

    def __contains__(self, token: str) -> bool:
        return token in self._vocabulary

    def __len__(self) -> int:
        """Vocabulary size."""
        return len(self._vocabulary)

    @property
    def phrases(self) -> list[str]:
        """Phrases in stored order."""
        return self.tokens_by_category(PHRASES_CATEGORY)

    def ordered_phrases(self) -> list[str]:
        """
        Phrases in substitution order: longest first, ties alphabetical.

        Longer phrases must be joined before any phrase they contain,
        e.g. "converted mana cost" before "mana cost".
        """
        return sorted(self.phrases, key=lambda phrase: (-len(phrase), phrase))

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def export_as_tabular(self) -> str:
        """Serialize the store back to configuration table text."""
        return format_config_table(self._categories)
