import pytest

from contract_schema_to_code.utils import (
    make_unique,
    pascal_to_snake_case,
    snake_to_pascal_case,
    to_valid_function_name,
    to_valid_parameter_name,
    to_valid_property_name,
    to_valid_type_name,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("balance", "Balance"),
        ("all_accounts", "AllAccounts"),
        ("total-supply", "TotalSupply"),
        ("mimeType", "MimeType"),
        ("BalanceResponse", "BalanceResponse"),
        ("first 3 rows", "First3Rows"),
        ("", ""),
    ],
)
def test_snake_to_pascal_case(text, expected):
    assert snake_to_pascal_case(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("BalanceAsync", "balance_async"),
        ("AllAccountsAsync", "all_accounts_async"),
        ("AtTime", "at_time"),
        ("Value2", "value_2"),
    ],
)
def test_pascal_to_snake_case(text, expected):
    assert pascal_to_snake_case(text) == expected


class TestIdentifiers:
    def test_type_name_with_leading_digit(self):
        assert to_valid_type_name("1inch") == "_1Inch"

    def test_type_name_without_word_characters(self):
        assert to_valid_type_name("$$") == "_"

    def test_property_and_function_names_are_pascal_case(self):
        assert to_valid_property_name("mime_type") == "MimeType"
        assert to_valid_function_name("token_info") == "TokenInfo"

    def test_enum_literal_becomes_member_name(self):
        assert to_valid_property_name("embedded") == "Embedded"
        assert to_valid_property_name("not-started") == "NotStarted"

    @pytest.mark.parametrize(
        "text, language, expected",
        [
            ("address", "cs", "address"),
            ("start_after", "cs", "start_after"),
            ("string", "cs", "@string"),
            ("from", "python", "from_"),
            ("from", "cs", "from"),
            ("class", "python", "class_"),
            ("mime-type", "python", "mime_type"),
            ("3d", "cs", "_3d"),
        ],
    )
    def test_parameter_names(self, text, language, expected):
        assert to_valid_parameter_name(text, language) == expected

    def test_reserved_parameter_names_get_suffix(self):
        assert to_valid_parameter_name("response", "cs", frozenset({"response"})) == "response_"
        assert to_valid_parameter_name("request", "python", frozenset({"response"})) == "request"


class TestMakeUnique:
    def test_free_name_is_kept(self):
        taken = set()
        assert make_unique("Value", taken) == "Value"
        assert taken == {"Value"}

    def test_taken_names_get_numeric_suffix(self):
        taken = {"Value"}
        assert make_unique("Value", taken) == "Value2"
        assert make_unique("Value", taken) == "Value3"
        assert taken == {"Value", "Value2", "Value3"}
