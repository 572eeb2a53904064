"""
Tokenizer exception hierarchy.

Structural failures (bad configuration, missing configuration) are raised
to the caller. Per-record failures during a batch are not represented here:
the corpus aggregator logs and skips them.
"""


class TokenizerError(Exception):
    """Base exception for all tokenizer failures."""

    pass


class ConfigError(TokenizerError):
    """Raised when configuration text cannot be loaded.

    The store is left exactly as it was before the failed load.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid token configuration: {reason}")


class ConfigNotLoadedError(TokenizerError):
    """Raised when tokenization is attempted before any configuration load."""

    def __init__(self) -> None:
        super().__init__(
            "Tokenizer configuration not loaded. Call ConfigurationStore.load() first."
        )


class ConfigSourceError(TokenizerError):
    """Raised when configuration text cannot be acquired from its source."""

    pass
