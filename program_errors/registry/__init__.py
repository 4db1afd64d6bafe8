"""Error enum compilation and the domain catalog.

This package turns error enum sources into compiled tables and loads those
tables into the catalog consulted by lookups.
"""

from program_errors.registry.catalog import (
    DEFAULT_DOMAINS,
    DomainCatalog,
    DomainSpec,
    get_catalog,
    initialize_catalog,
)
from program_errors.registry.compiler import compile_directory, compile_source, read_table, render_table
from program_errors.registry.parser import parse_enum_source

__all__ = [
    'DEFAULT_DOMAINS',
    'DomainCatalog',
    'DomainSpec',
    'get_catalog',
    'initialize_catalog',
    'compile_directory',
    'compile_source',
    'read_table',
    'render_table',
    'parse_enum_source',
]
