import pytest

from oracletok.models.errors import ConfigError
from oracletok.parsers.token_config import (
    ConfigRow,
    format_config_table,
    parse_config_table,
)


class TestParseConfigTable:
    def test_parses_rows_in_order(self) -> None:
        text = """category,token,description
actions,destroy,Destroy a permanent
keywords,flying,Evasion"""
        parsed = parse_config_table(text)

        assert parsed.rows == [
            ConfigRow("actions", "destroy", "Destroy a permanent"),
            ConfigRow("keywords", "flying", "Evasion"),
        ]
        assert parsed.skipped == 0

    def test_columns_in_any_order(self) -> None:
        text = """token,description,category
destroy,Destroy a permanent,actions"""
        parsed = parse_config_table(text)

        assert parsed.rows == [ConfigRow("actions", "destroy", "Destroy a permanent")]

    def test_header_whitespace_is_ignored(self) -> None:
        text = "category, token, description\nactions,draw,Draw"
        parsed = parse_config_table(text)

        assert parsed.rows[0].token == "draw"

    def test_quoted_field_with_comma(self) -> None:
        text = 'category,token,description\npunctuation,",",Comma'
        parsed = parse_config_table(text)

        assert parsed.rows[0].token == ","

    def test_doubled_quote_is_literal_quote(self) -> None:
        text = 'category,token,description\npunctuation,"""",Double quote'
        parsed = parse_config_table(text)

        assert parsed.rows[0].token == '"'

    def test_quoted_description_with_comma(self) -> None:
        text = 'category,token,description\nactions,draw,"Draw cards, usually one"'
        parsed = parse_config_table(text)

        assert parsed.rows[0].description == "Draw cards, usually one"

    def test_blank_lines_ignored(self) -> None:
        text = "\ncategory,token,description\n\nactions,draw,Draw\n\n"
        parsed = parse_config_table(text)

        assert len(parsed.rows) == 1
        assert parsed.skipped == 0

    def test_short_rows_are_skipped(self) -> None:
        text = """category,token,description
actions,destroy
actions,draw,Draw"""
        parsed = parse_config_table(text)

        assert [row.token for row in parsed.rows] == ["draw"]
        assert parsed.skipped == 1

    def test_blank_token_is_skipped(self) -> None:
        text = "category,token,description\nactions,,No token"
        parsed = parse_config_table(text)

        assert parsed.rows == []
        assert parsed.skipped == 1

    def test_missing_header_column_raises(self) -> None:
        with pytest.raises(ConfigError, match="description"):
            parse_config_table("category,token\nactions,draw")

    def test_empty_text_raises(self) -> None:
        with pytest.raises(ConfigError, match="empty"):
            parse_config_table("")
        with pytest.raises(ConfigError, match="empty"):
            parse_config_table("\n\n")


class TestFormatConfigTable:
    def test_writes_header_and_rows(self) -> None:
        text = format_config_table({"actions": {"draw": "Draw cards"}})

        assert text == "category,token,description\nactions,draw,Draw cards"

    def test_quotes_comma_and_quote_tokens(self) -> None:
        text = format_config_table({"punctuation": {",": "Comma", '"': "Quote"}})
        lines = text.split("\n")

        assert lines[1] == 'punctuation,",",Comma'
        assert lines[2] == 'punctuation,"""",Quote'

    def test_missing_description_gets_default(self) -> None:
        text = format_config_table({"actions": {"draw": ""}})

        assert text.split("\n")[1] == "actions,draw,Token from actions category"

    def test_output_parses_back(self) -> None:
        categories = {
            "punctuation": {",": "Comma", '"': "Quote"},
            "phrases": {"draw a card": "Card draw"},
        }
        parsed = parse_config_table(format_config_table(categories))

        assert [(row.category, row.token) for row in parsed.rows] == [
            ("punctuation", ","),
            ("punctuation", '"'),
            ("phrases", "draw a card"),
        ]
