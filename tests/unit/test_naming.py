"""Unit tests for domain naming conventions."""

import pytest

from program_errors.registry.naming import (
    NAMING_RULES,
    NamingRule,
    pascal_case_name,
    resolve_naming,
    table_identifier_for,
)


@pytest.mark.parametrize("file_name,identifier", [
    ("anchor-error.rs", "ANCHOR_ERROR"),
    ("auction-house-error.rs", "AUCTION_HOUSE_ERROR"),
    ("candy-core-error.rs", "CANDY_CORE_ERROR"),
    ("sources/candy-guard-error.rs", "CANDY_GUARD_ERROR"),
    ("metadata-error", "METADATA_ERROR"),
])
def test_table_identifier(file_name, identifier):
    assert table_identifier_for(file_name) == identifier


def test_pascal_case_only_touches_first_character():
    assert pascal_case_name("auction-house-error.rs") == "AuctionHouseError"
    assert pascal_case_name("nft-PDA-error.rs") == "NftPDAError"


@pytest.mark.parametrize("file_name,source,enum_name,starting_code", [
    ("anchor-error.rs", '#[msg("x")]', "ErrorCode", 100),
    ("anchor-error.rs", "", "ErrorCode", 100),
    ("candy-core-error.rs", '#[msg("x")]', "CandyError", 6000),
    ("candy-error.rs", '#[msg("x")]', "CandyError", 6000),
    ("candy-guard-error.rs", '#[msg("x")]', "CandyGuardError", 6000),
    ("metadata-error.rs", '#[error("x")]', "MetadataError", 0),
])
def test_resolve_naming(file_name, source, enum_name, starting_code):
    naming = resolve_naming(file_name, source)

    assert naming.enum_name == enum_name
    assert naming.starting_code == starting_code


def test_anchor_marker_anywhere_in_file_name():
    naming = resolve_naming("my-anchor-lang-error.rs", "")

    assert naming.enum_name == "ErrorCode"
    assert naming.table_identifier == "MY_ANCHOR_LANG_ERROR"


def test_directory_names_do_not_select_rules():
    naming = resolve_naming("anchor-programs/metadata-error.rs", '#[error("x")]')

    assert naming.enum_name == "MetadataError"
    assert naming.starting_code == 0
    assert naming.table_identifier == "METADATA_ERROR"


def test_rules_are_checked_in_order():
    assert NAMING_RULES[0].file_marker == "anchor"

    rule = NamingRule(table_identifier="CANDY_CORE_ERROR", enum_name="CandyError")
    assert rule.matches("candy-core-error.rs", "CANDY_CORE_ERROR")
    assert not rule.matches("candy-error.rs", "CANDY_ERROR")
