"""
Registry compiler.

Renders parsed error enums into `.table` artifacts and reads them back:

    table CANDY_GUARD_ERROR {
        "1770" => "InvalidAccountSize: Could not save guard to account",
        "1771" => "DeserializationError: Could not deserialize guard",
    }

Keys and values are JSON string literals, so rendering is deterministic and
any message text survives a round trip.
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from program_errors.registry.parser import parse_enum_source
from program_errors.utils.error_handling import RegistryError, TableFormatError

logger = logging.getLogger(__name__)

TABLE_EXTENSION = ".table"
SOURCE_EXTENSION = ".rs"

_HEADER_PATTERN = re.compile(r"^table ([A-Z0-9_]+) \{$")
_ROW_PATTERN = re.compile(r'^    ("(?:[^"\\]|\\.)*") => ("(?:[^"\\]|\\.)*"),$')
_FOOTER = "}"


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def render_header(table_identifier: str) -> str:
    return f"table {table_identifier} {{\n"


def render_row(key: str, value: str) -> str:
    return f"    {_quote(key)} => {_quote(value)},\n"


def render_table(table_identifier: str, entries: Iterable[Tuple[str, str]]) -> str:
    """Render an ordered mapping as a table artifact.

    Args:
        table_identifier: Name declared in the header, e.g. `ANCHOR_ERROR`
        entries: Ordered `(hex key, rendered value)` pairs

    Returns:
        The artifact text
    """
    lines = [render_header(table_identifier)]
    lines.extend(render_row(key, value) for key, value in entries)
    lines.append(_FOOTER + "\n")
    return "".join(lines)


def read_table(text: str) -> Tuple[str, List[Tuple[str, str]]]:
    """Parse a table artifact produced by `render_table`.

    Blank lines are ignored anywhere after the header.

    Args:
        text: Artifact text

    Returns:
        The declared table identifier and its ordered `(key, value)` rows

    Raises:
        TableFormatError: If the text is not a well-formed artifact
    """
    if not text.strip():
        raise TableFormatError("Table artifact is empty")

    lines = text.split("\n")

    header = _HEADER_PATTERN.match(lines[0])
    if header is None:
        raise TableFormatError("Missing table header", line_number=1, details={"line": lines[0]})
    identifier = header.group(1)

    rows: List[Tuple[str, str]] = []
    seen: Dict[str, int] = {}
    closed = False

    for line_number, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        if line == _FOOTER:
            closed = True
            continue
        if closed:
            raise TableFormatError(
                "Content after closing brace",
                line_number=line_number,
                details={"table": identifier}
            )

        row = _ROW_PATTERN.match(line)
        if row is None:
            raise TableFormatError(
                "Malformed table row",
                line_number=line_number,
                details={"table": identifier, "line": line}
            )

        key = json.loads(row.group(1))
        value = json.loads(row.group(2))
        if key in seen:
            raise TableFormatError(
                f"Duplicate key {key}",
                line_number=line_number,
                details={"table": identifier, "first_line": seen[key]}
            )
        seen[key] = line_number
        rows.append((key, value))

    if not closed:
        raise TableFormatError("Missing closing brace", details={"table": identifier})

    return identifier, rows


def table_file_name(table_identifier: str) -> str:
    """`CANDY_GUARD_ERROR` -> `candy_guard_error.table`."""
    return table_identifier.lower() + TABLE_EXTENSION


def compile_source(file_name: str, source_text: str, strict: bool = False) -> str:
    """Parse a domain's error enum and render its table artifact."""
    parsed = parse_enum_source(file_name, source_text, strict=strict)
    return render_table(parsed.table_identifier, parsed.rows())


@dataclass
class CompileReport:
    """Outcome of compiling a directory of error enum sources."""

    compiled: Dict[str, str] = field(default_factory=dict)
    failures: Dict[str, RegistryError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


def compile_directory(source_dir: str, output_dir: str, strict: bool = False) -> CompileReport:
    """Compile every `.rs` error enum in a directory into table artifacts.

    A domain that fails to parse is recorded in the report and skipped; the
    remaining domains are still compiled.

    Args:
        source_dir: Directory holding `<domain>-error.rs` sources
        output_dir: Directory the `.table` artifacts are written to
        strict: Reject dangling message attributes

    Returns:
        Report mapping each source file to its artifact path or its error
    """
    report = CompileReport()
    os.makedirs(output_dir, exist_ok=True)

    for file_name in sorted(os.listdir(source_dir)):
        if not file_name.endswith(SOURCE_EXTENSION):
            continue

        with open(os.path.join(source_dir, file_name), "r", encoding="utf-8") as f:
            source_text = f.read()

        try:
            parsed = parse_enum_source(file_name, source_text, strict=strict)
        except RegistryError as e:
            logger.error(f"Skipping {file_name}: {e}")
            report.failures[file_name] = e
            continue

        output_path = os.path.join(output_dir, table_file_name(parsed.table_identifier))
        with open(output_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(render_table(parsed.table_identifier, parsed.rows()))

        logger.info(f"Compiled {len(parsed.entries)} errors from {file_name} into {output_path}")
        report.compiled[file_name] = output_path

    return report
