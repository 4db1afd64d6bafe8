"""
Error enum source parser.

Extracts ordered `(code, symbol, message)` entries from the Rust source of
one domain's error enum. Only the declarative pattern is recognized:

    #[msg("Account not initialized")]
    NotInitialized,
    Overflow = 6010,

Message attributes (`#[msg(...)]` or `#[error(...)]`) attach to the next
variant. Codes start at the domain's starting code and increase by one per
variant unless a variant assigns its own code, which then also seeds the
following variants.
"""

import logging
import re
from enum import Enum
from typing import Dict, Iterable, List, Optional

from program_errors.models.entries import ErrorEntry, ParsedEnum
from program_errors.registry.naming import resolve_naming
from program_errors.utils.error_handling import (
    EnumNotFoundError,
    InvalidOverrideCodeError,
    MalformedEnumError,
)

logger = logging.getLogger(__name__)

# Matches what an i64 parse accepts: optional plus sign, decimal digits
_OVERRIDE_PATTERN = re.compile(r"\+?[0-9]+")
_MAX_CODE = 2 ** 63 - 1

# Characters skipped after the enum name: the space and the opening brace
_ENUM_OPENER_WIDTH = 2

# Wrapper fragments removed from an attribute line to leave the message
_ATTRIBUTE_FRAGMENTS = ("#[", 'error("', 'msg("', '")]')


class ScannerState(Enum):
    """States of the enum body scanner."""
    AWAITING_VARIANT = "awaiting_variant"
    MESSAGE_PENDING = "message_pending"


class LineKind(Enum):
    """Classification of one trimmed line of the enum body."""
    END = "end"
    SKIP = "skip"
    ATTRIBUTE = "attribute"
    VARIANT = "variant"
    FRAGMENT = "fragment"


def classify_line(line: str) -> LineKind:
    """Classify a trimmed line of the enum body.

    Lines that are neither attributes nor variants (multi-line attribute
    openers, quoted message continuations, closing `)]`) are fragments and
    are ignored.
    """
    if line.startswith("}"):
        return LineKind.END
    if not line or line.startswith("/"):
        return LineKind.SKIP
    if (
        not line.startswith("#[")
        and not line.startswith('"')
        and not line.endswith('"')
        and not line.endswith(")]")
    ):
        return LineKind.VARIANT
    if line.startswith("#[") and line.endswith(")]"):
        return LineKind.ATTRIBUTE
    return LineKind.FRAGMENT


def extract_message(line: str) -> str:
    """`#[msg("Invalid owner")]` -> `Invalid owner`."""
    message = line
    for fragment in _ATTRIBUTE_FRAGMENTS:
        message = message.replace(fragment, "")
    return message


class CodeCounter:
    """Assigns codes to variants in declaration order."""

    def __init__(self, starting_code: int):
        self.current = starting_code

    def override(self, code: int) -> None:
        self.current = code

    def advance(self) -> None:
        self.current += 1


class EnumScanner:
    """Two-state scanner over the lines of an enum body.

    In `AWAITING_VARIANT` no message is held. An attribute line moves the
    scanner to `MESSAGE_PENDING` (replacing any message already held); a
    variant line emits an entry carrying the held message, if any, and
    returns the scanner to `AWAITING_VARIANT`.
    """

    def __init__(self, file_name: str, starting_code: int, strict: bool = False):
        self.file_name = file_name
        self.strict = strict
        self.counter = CodeCounter(starting_code)
        self.state = ScannerState.AWAITING_VARIANT
        self.pending_message: Optional[str] = None
        self.finished = False

    def feed(self, raw_line: str, line_number: Optional[int] = None) -> Optional[ErrorEntry]:
        """Consume one line of the enum body.

        Args:
            raw_line: Untrimmed source line
            line_number: Position of the line, for error reporting

        Returns:
            The entry completed by this line, if any
        """
        if self.finished:
            return None

        line = raw_line.strip()
        kind = classify_line(line)

        if kind is LineKind.END:
            self.finish(line_number)
            return None

        if kind is LineKind.ATTRIBUTE:
            if self.state is ScannerState.MESSAGE_PENDING:
                logger.debug(
                    f"{self.file_name}:{line_number}: message attribute replaces "
                    f"unconsumed message '{self.pending_message}'"
                )
            self.pending_message = extract_message(line)
            self.state = ScannerState.MESSAGE_PENDING
            return None

        if kind is LineKind.VARIANT:
            return self._emit_variant(line, line_number)

        return None

    def finish(self, line_number: Optional[int] = None) -> None:
        """Mark the end of the enum body.

        Raises:
            MalformedEnumError: In strict mode, when a message attribute was
                never followed by a variant
        """
        if self.finished:
            return
        self.finished = True

        if self.state is ScannerState.MESSAGE_PENDING:
            if self.strict:
                raise MalformedEnumError(
                    self.file_name,
                    "message attribute is not followed by a variant",
                    line_number=line_number,
                    line=self.pending_message,
                )
            logger.warning(
                f"{self.file_name}: dropping message '{self.pending_message}' "
                f"with no variant before the end of the enum"
            )

    def _emit_variant(self, line: str, line_number: Optional[int]) -> ErrorEntry:
        comma = line.find(",")
        if comma == -1:
            raise MalformedEnumError(
                self.file_name,
                "variant is missing its trailing comma",
                line_number=line_number,
                line=line,
            )

        symbol = line[:comma]
        if "=" in symbol:
            parts = symbol.split("=")
            symbol = parts[0].strip()
            self.counter.override(self._parse_override(symbol, parts[1].strip(), line_number))

        entry = ErrorEntry(
            code=self.counter.current,
            symbol=symbol.strip(),
            message=self.pending_message,
        )

        self.pending_message = None
        self.state = ScannerState.AWAITING_VARIANT
        self.counter.advance()
        return entry

    def _parse_override(self, symbol: str, value: str, line_number: Optional[int]) -> int:
        if not _OVERRIDE_PATTERN.fullmatch(value):
            raise InvalidOverrideCodeError(self.file_name, symbol, value, line_number)
        code = int(value)
        if code > _MAX_CODE:
            raise InvalidOverrideCodeError(self.file_name, symbol, value, line_number)
        return code


def enum_body(file_name: str, source_text: str, enum_name: str) -> str:
    """Return the trimmed text following `enum_name` and its opening brace.

    Raises:
        EnumNotFoundError: If `enum_name` does not occur in the source
        MalformedEnumError: If no closing brace follows the enum name
    """
    index = source_text.find(enum_name)
    if index == -1:
        raise EnumNotFoundError(file_name, enum_name)

    start = index + len(enum_name) + _ENUM_OPENER_WIDTH
    if start > len(source_text):
        raise MalformedEnumError(file_name, "source ends right after the enum name")

    body = source_text[start:].strip()
    if "}" not in body:
        raise MalformedEnumError(file_name, "enum has no closing brace")

    return body


def scan_entries(
    file_name: str,
    lines: Iterable[str],
    starting_code: int,
    strict: bool = False
) -> List[ErrorEntry]:
    """Run the scanner over enum body lines and collect the entries.

    Raises:
        MalformedEnumError: If two variants end up with the same code
    """
    scanner = EnumScanner(file_name, starting_code, strict=strict)
    entries = []
    symbols_by_code: Dict[int, str] = {}
    line_number = 0

    for line_number, line in enumerate(lines, start=1):
        entry = scanner.feed(line, line_number)
        if entry is not None:
            if entry.code in symbols_by_code:
                raise MalformedEnumError(
                    file_name,
                    f"code {entry.code} is assigned to both "
                    f"{symbols_by_code[entry.code]} and {entry.symbol}",
                    line_number=line_number,
                    line=line.strip(),
                )
            symbols_by_code[entry.code] = entry.symbol
            entries.append(entry)
        if scanner.finished:
            break

    scanner.finish(line_number)
    return entries


def parse_enum_source(file_name: str, source_text: str, strict: bool = False) -> ParsedEnum:
    """Parse one domain's error enum source.

    Args:
        file_name: Source file name; decides table identifier, enum name
            and starting code
        source_text: Raw source text
        strict: Reject message attributes left dangling at the end of the enum

    Returns:
        The parsed enum with its entries in declaration order

    Raises:
        EnumNotFoundError: If the expected enum is absent
        MalformedEnumError: On missing braces or variant separators, or
            when two variants share a code
        InvalidOverrideCodeError: If a `Variant = N` override is not an integer
    """
    naming = resolve_naming(file_name, source_text)
    body = enum_body(file_name, source_text, naming.enum_name)
    entries = scan_entries(file_name, body.split("\n"), naming.starting_code, strict=strict)

    logger.debug(f"Parsed {len(entries)} errors from {file_name} ({naming.enum_name})")

    return ParsedEnum(
        file_name=file_name,
        table_identifier=naming.table_identifier,
        enum_name=naming.enum_name,
        starting_code=naming.starting_code,
        entries=tuple(entries),
    )

