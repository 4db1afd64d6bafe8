"""Common test fixtures for the program error registry tests.

This module provides fixtures that can be reused across different test modules.
"""

import os

import pytest

from program_errors.models.entries import Domain, ErrorEntry
from program_errors.registry import catalog as catalog_module
from program_errors.registry.catalog import DomainCatalog
from program_errors.services.lookup_service import ErrorLookupService
from program_errors.utils.config import DEFAULT_TABLES_DIR

FIXTURES_DIR = os.path.dirname(os.path.abspath(__file__))


def read_source(file_name: str) -> str:
    """Read one of the bundled error enum sources."""
    with open(os.path.join(FIXTURES_DIR, "sources", file_name), "r", encoding="utf-8") as f:
        return f.read()


@pytest.fixture
def sources_dir():
    """Directory holding the Rust error enums the bundled tables were compiled from."""
    return os.path.join(FIXTURES_DIR, "sources")


@pytest.fixture
def bundled_tables_dir():
    """Directory of the table artifacts shipped with the package."""
    return DEFAULT_TABLES_DIR


@pytest.fixture
def metadata_domain():
    """A small Token Metadata domain."""
    return Domain(
        name="Token Metadata",
        source_name="metadata-error.rs",
        entries=(
            ErrorEntry(0, "InstructionUnpackError", "Failed to unpack instruction data"),
            ErrorEntry(1, "InstructionPackError", "Failed to pack instruction data"),
            ErrorEntry(0x1A, "TokenAccountOneTimeAuthMintMismatch"),
            ErrorEntry(6000, "LegacyCustomError", "Shared code with the auction house"),
        ),
    )


@pytest.fixture
def auction_house_domain():
    """A small Auction House domain sharing code 0x1770 with the metadata domain."""
    return Domain(
        name="Auction House",
        source_name="auction-house-error.rs",
        entries=(
            ErrorEntry(6000, "PublicKeyMismatch", "PublicKeyMismatch"),
            ErrorEntry(6001, "InvalidMintAuthority", "InvalidMintAuthority"),
        ),
    )


@pytest.fixture
def small_catalog(metadata_domain, auction_house_domain):
    """Two-domain catalog: Token Metadata, then Auction House."""
    return DomainCatalog([metadata_domain, auction_house_domain])


@pytest.fixture
def lookup_service(small_catalog):
    """Lookup service bound to the small catalog."""
    return ErrorLookupService(small_catalog)


@pytest.fixture
def bundled_catalog(bundled_tables_dir):
    """Catalog loaded from the shipped tables."""
    return DomainCatalog.from_tables(tables_dir=bundled_tables_dir)


@pytest.fixture
def fresh_process_catalog(monkeypatch):
    """Clear the process-wide catalog for the duration of a test."""
    monkeypatch.setattr(catalog_module, "_catalog", None)
    monkeypatch.setattr(catalog_module, "_catalog_source", None)
    return catalog_module
