"""
Naming conventions for domain error enums.

A domain's source file name decides three things: the identifier of the
compiled table, the name of the enum to look for in the source, and the
code assigned to the first variant. Special cases live in `NAMING_RULES`;
every other file falls back to the generic convention.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

# Attribute marker used by Anchor programs for error messages
MESSAGE_ATTRIBUTE_MARKER = "#[msg"

# First code of Anchor's own framework errors
FRAMEWORK_STARTING_CODE = 100
# First code of custom errors declared with Anchor's #[error_code]
ANCHOR_CUSTOM_STARTING_CODE = 6000
# First code of plain (thiserror style) enums
DEFAULT_STARTING_CODE = 0


@dataclass(frozen=True)
class NamingRule:
    """One special case of the naming convention.

    A rule matches when `file_marker` occurs in the base file name, or when the
    derived table identifier equals `table_identifier`. A `None` enum name
    or starting code falls through to the generic derivation.
    """

    enum_name: Optional[str] = None
    starting_code: Optional[int] = None
    file_marker: Optional[str] = None
    table_identifier: Optional[str] = None

    def matches(self, file_name: str, table_identifier: str) -> bool:
        if self.file_marker is not None and self.file_marker in os.path.basename(file_name):
            return True
        return self.table_identifier is not None and self.table_identifier == table_identifier


# Checked in order; the first matching rule wins.
NAMING_RULES: Tuple[NamingRule, ...] = (
    NamingRule(file_marker="anchor", enum_name="ErrorCode", starting_code=FRAMEWORK_STARTING_CODE),
    NamingRule(table_identifier="CANDY_CORE_ERROR", enum_name="CandyError"),
)


@dataclass(frozen=True)
class EnumNaming:
    """Everything the parser needs to know before scanning a source file."""

    table_identifier: str
    enum_name: str
    starting_code: int


def file_words(file_name: str) -> list:
    """Split a source file name into its dash-separated words."""
    stem, _ = os.path.splitext(os.path.basename(file_name))
    return stem.replace("-", " ").split(" ")


def table_identifier_for(file_name: str) -> str:
    """`candy-guard-error.rs` -> `CANDY_GUARD_ERROR`."""
    return "_".join(word.upper() for word in file_words(file_name))


def pascal_case_name(file_name: str) -> str:
    """`candy-guard-error.rs` -> `CandyGuardError`.

    Only the first character of each word changes case.
    """
    return "".join(word[:1].upper() + word[1:] for word in file_words(file_name))


def default_starting_code(source_text: str) -> int:
    if MESSAGE_ATTRIBUTE_MARKER in source_text:
        return ANCHOR_CUSTOM_STARTING_CODE
    return DEFAULT_STARTING_CODE


def find_rule(file_name: str, table_identifier: str) -> Optional[NamingRule]:
    for rule in NAMING_RULES:
        if rule.matches(file_name, table_identifier):
            return rule
    return None


def resolve_naming(file_name: str, source_text: str) -> EnumNaming:
    """Derive table identifier, enum name and starting code for a source file.

    Args:
        file_name: Name of the domain's source file, e.g. `auction-house-error.rs`
        source_text: Raw source text of that file

    Returns:
        The resolved naming for the domain
    """
    table_identifier = table_identifier_for(file_name)
    rule = find_rule(file_name, table_identifier)

    enum_name = rule.enum_name if rule and rule.enum_name else pascal_case_name(file_name)

    if rule is not None and rule.starting_code is not None:
        starting_code = rule.starting_code
    else:
        starting_code = default_starting_code(source_text)

    return EnumNaming(
        table_identifier=table_identifier,
        enum_name=enum_name,
        starting_code=starting_code,
    )
