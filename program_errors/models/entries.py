"""Data models for compiled error domains."""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field

# Separator between a variant's symbol and its message in a rendered value
MESSAGE_SEPARATOR = ": "

# A bare Rust identifier, as written for unit variants
_SYMBOL_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass(frozen=True)
class ErrorEntry:
    """One error variant extracted from a domain's error enum."""

    code: int
    symbol: str
    message: Optional[str] = None

    @property
    def key(self) -> str:
        """Uppercase hexadecimal lookup key, without a `0x` prefix."""
        return format(self.code, "X")

    @property
    def rendered(self) -> str:
        """Symbol, followed by the message when the variant carried one."""
        if self.message is None:
            return self.symbol
        return f"{self.symbol}{MESSAGE_SEPARATOR}{self.message}"

    @classmethod
    def from_rendered(cls, key: str, value: str) -> "ErrorEntry":
        """Rebuild an entry from a compiled table row.

        The symbol is taken to be the identifier before the first `": "`.
        A value that does not start with `identifier: ` is read back as a
        bare symbol, so a non-identifier symbol (e.g. a struct variant
        `Foo { a: u8 }`) round-trips only when it carried no message.

        Args:
            key: Hexadecimal code
            value: Rendered `symbol[: message]` text

        Returns:
            The entry the row was rendered from
        """
        symbol, separator, message = value.partition(MESSAGE_SEPARATOR)
        if not separator or not _SYMBOL_PATTERN.fullmatch(symbol):
            return cls(code=int(key, 16), symbol=value)
        return cls(code=int(key, 16), symbol=symbol, message=message)


@dataclass(frozen=True)
class ParsedEnum:
    """Result of parsing one domain's error enum source."""

    file_name: str
    table_identifier: str
    enum_name: str
    starting_code: int
    entries: Tuple[ErrorEntry, ...]

    def rows(self) -> Tuple[Tuple[str, str], ...]:
        """Rendered `(key, value)` pairs in declaration order."""
        return tuple((entry.key, entry.rendered) for entry in self.entries)


@dataclass(frozen=True)
class Domain:
    """An independent program domain and its read-only error table.

    Later entries win when two variants share a code, mirroring how the
    compiled table is probed.
    """

    name: str
    source_name: str
    entries: Tuple[ErrorEntry, ...]
    table: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "entries", tuple(self.entries))
        table = {entry.key: entry.rendered for entry in self.entries}
        object.__setattr__(self, "table", MappingProxyType(table))

    def get(self, key: str) -> Optional[str]:
        """Probe the table for an already-normalized key."""
        return self.table.get(key)

    def __len__(self) -> int:
        return len(self.table)


class FoundError(BaseModel):
    """A domain that recognized a looked-up error code."""

    domain: str = Field(..., description="Display name of the domain")
    message: str = Field(..., description="Symbol, optionally followed by the error message")


class LookupResult(BaseModel):
    """All domains that recognize one error code."""

    code: str = Field(..., description="Normalized hexadecimal code")
    matches: List[FoundError] = Field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.matches)


class DomainSummary(BaseModel):
    """Catalog listing entry."""

    name: str
    source_name: str
    error_count: int
