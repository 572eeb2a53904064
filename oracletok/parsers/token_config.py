"""
Parser for the token configuration table.

Format (header columns may appear in any order):

    category,token,description
    actions,destroy,Destroy a permanent
    phrases,enters the battlefield,ETB trigger
    gameTerms,"+1/+1 counter, the ""plus"" kind",Quoted token

Blank lines are ignored. Data rows with fewer than three fields, or with
a blank category or token, are skipped rather than aborting the load.
"""

import csv
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from io import StringIO

from oracletok.config import REQUIRED_COLUMNS
from oracletok.models.errors import ConfigError


@dataclass(frozen=True, slots=True)
class ConfigRow:
    """One data row of the configuration table."""

    category: str
    token: str
    description: str = ""


@dataclass
class ParsedConfig:
    """Rows accepted from a configuration table plus the skipped-row count."""

    rows: list[ConfigRow] = field(default_factory=list)
    skipped: int = 0


def _split_line(line: str) -> list[str]:
    """Split one line on commas, honoring double-quote escaping."""
    reader = csv.reader([line], skipinitialspace=True)
    return next(reader, [])


def _iter_rows(lines: list[str], columns: dict[str, int]) -> Iterator[ConfigRow | None]:
    """Yield a ConfigRow per data line, or None for a line that is skipped."""
    width = max(columns.values()) + 1

    for line in lines:
        fields = _split_line(line)
        if len(fields) < len(REQUIRED_COLUMNS) or len(fields) < width:
            yield None
            continue

        category = fields[columns["category"]].strip()
        token = fields[columns["token"]].strip()
        if not category or not token:
            yield None
            continue

        yield ConfigRow(
            category=category,
            token=token,
            description=fields[columns["description"]].strip(),
        )


def parse_config_table(text: str) -> ParsedConfig:
    """
    Parse configuration table text.

    Args:
        text: Decoded tabular text, header row first

    Returns:
        ParsedConfig with the accepted rows in file order

    Raises:
        ConfigError: If the text is empty or the header lacks a required column
    """
    lines = [line.strip() for line in text.splitlines()] if text else []
    lines = [line for line in lines if line]
    if not lines:
        raise ConfigError("configuration is empty")

    header = [name.strip() for name in _split_line(lines[0])]
    missing = [name for name in REQUIRED_COLUMNS if name not in header]
    if missing:
        raise ConfigError(
            f"header is missing {', '.join(missing)}. "
            f"Expected: {', '.join(REQUIRED_COLUMNS)}"
        )

    columns = {name: header.index(name) for name in REQUIRED_COLUMNS}

    parsed = ParsedConfig()
    for row in _iter_rows(lines[1:], columns):
        if row is None:
            parsed.skipped += 1
        else:
            parsed.rows.append(row)

    return parsed


def format_config_table(categories: Mapping[str, Mapping[str, str]]) -> str:
    """
    Serialize categories back to configuration table text.

    Fields containing a comma or quote are quoted, with embedded quotes
    doubled, so the output parses back to the same categories.

    Args:
        categories: Mapping of category -> {token: description}

    Returns:
        Table text with a "category,token,description" header
    """
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(REQUIRED_COLUMNS)

    for category, tokens in categories.items():
        for token, description in tokens.items():
            writer.writerow(
                [category, token, description or f"Token from {category} category"]
            )

    return buffer.getvalue().rstrip("\n")
