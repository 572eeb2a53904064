"""
Configuration acquisition.

Reads configuration table text from a file or URL. This is the only I/O
in the package and it finishes before any tokenization starts:

    store = ConfigurationStore()
    await load_store_from_url(store, "https://example.com/tokens.csv")
    tokenizer = Tokenizer(store)
"""

import logging
from pathlib import Path

import httpx

from oracletok.config import settings
from oracletok.models.errors import ConfigSourceError
from oracletok.services.configuration_store import ConfigurationStore

logger = logging.getLogger(__name__)


def read_config_file(path: Path) -> str:
    """
    Read configuration table text from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    if not path.exists():
        raise FileNotFoundError(f"Token configuration not found at {path}.")

    with open(path, encoding="utf-8") as f:
        return f.read()


async def fetch_config_text(url: str, timeout: float | None = None) -> str:
    """
    Download configuration table text.

    Args:
        url: Location of the table
        timeout: Request timeout in seconds (defaults to settings)

    Returns:
        Decoded response body

    Raises:
        ConfigSourceError: If the request fails or returns an error status
    """
    try:
        async with httpx.AsyncClient(
            timeout=timeout or settings.config_fetch_timeout,
            headers={"User-Agent": settings.user_agent},
            follow_redirects=True,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise ConfigSourceError(
            f"Failed to fetch configuration from {url}: HTTP {e.response.status_code}"
        ) from e
    except httpx.RequestError as e:
        raise ConfigSourceError(f"Failed to fetch configuration from {url}: {e}") from e

    return response.text


def load_store_from_file(store: ConfigurationStore, path: Path) -> None:
    """Read a table from disk and load it into the store."""
    store.load(read_config_file(path))
    logger.info("token_config_source", extra={"source": str(path)})


async def load_store_from_url(store: ConfigurationStore, url: str) -> None:
    """Download a table and load it into the store."""
    text = await fetch_config_text(url)
    store.load(text)
    logger.info("token_config_source", extra={"source": url})
