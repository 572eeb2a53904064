from oracletok.parsers.token_config import (
    ConfigRow,
    ParsedConfig,
    format_config_table,
    parse_config_table,
)

__all__ = [
    "ConfigRow",
    "ParsedConfig",
    "format_config_table",
    "parse_config_table",
]
