"""Unit tests for the domain catalog."""

import logging

import pytest

from program_errors.models.entries import Domain, ErrorEntry
from program_errors.registry.catalog import (
    DEFAULT_DOMAINS,
    DomainCatalog,
    DomainSpec,
    get_catalog,
    initialize_catalog,
)
from program_errors.registry.compiler import render_table
from program_errors.utils.error_handling import CatalogLoadError


class TestDomainCatalog:
    """Test suite for DomainCatalog."""

    def test_bundled_catalog_order(self, bundled_catalog):
        assert bundled_catalog.names == [
            "Anchor Program",
            "Token Metadata",
            "Auction House",
            "Auctioneer",
            "Candy Machine",
            "Candy Core",
            "Candy Guard",
        ]

    def test_bundled_catalog_contents(self, bundled_catalog):
        anchor = bundled_catalog.get("Anchor Program")

        assert len(anchor) == 57
        assert anchor.get("64") == "InstructionMissing: 8 byte instruction identifier not provided"
        assert anchor.get("7D0") == "ConstraintMut: A mut constraint was violated"
        assert anchor.get("1388") == "Deprecated: The API being used is deprecated and should no longer be used"
        assert anchor.source_name == "anchor-error.rs"

        metadata = bundled_catalog.get("Token Metadata")
        assert metadata.entries[0] == ErrorEntry(0, "InstructionUnpackError", "Failed to unpack instruction data")

    def test_domain_tables_are_read_only(self, metadata_domain):
        with pytest.raises(TypeError):
            metadata_domain.table["FFFF"] = "Injected"

    def test_duplicate_domain_names_rejected(self, metadata_domain):
        with pytest.raises(ValueError):
            DomainCatalog([metadata_domain, metadata_domain])

    def test_membership_and_iteration(self, small_catalog):
        assert "Token Metadata" in small_catalog
        assert "Candy Guard" not in small_catalog
        assert [domain.name for domain in small_catalog] == ["Token Metadata", "Auction House"]
        assert small_catalog.get("Candy Guard") is None


class TestLoading:
    """Test suite for loading tables from disk."""

    @pytest.fixture
    def vault_spec(self):
        return DomainSpec("Vault", "VAULT_ERROR", "vault-error.rs")

    def test_load_custom_tables(self, tmp_path, vault_spec):
        (tmp_path / "vault_error.table").write_text(
            render_table("VAULT_ERROR", [("1770", "Closed: Vault is closed"), ("1771", "Frozen")]),
            encoding="utf-8",
        )

        catalog = DomainCatalog.from_tables([vault_spec], str(tmp_path))

        vault = catalog.get("Vault")
        assert vault.entries == (
            ErrorEntry(6000, "Closed", "Vault is closed"),
            ErrorEntry(6001, "Frozen"),
        )

    def test_missing_table_is_fatal(self, tmp_path, vault_spec):
        with pytest.raises(CatalogLoadError) as exc_info:
            DomainCatalog.from_tables([vault_spec], str(tmp_path))

        assert exc_info.value.domain == "Vault"

    def test_malformed_table_is_fatal(self, tmp_path, vault_spec):
        (tmp_path / "vault_error.table").write_text("table VAULT_ERROR {\n    broken\n}\n", encoding="utf-8")

        with pytest.raises(CatalogLoadError) as exc_info:
            DomainCatalog.from_tables([vault_spec], str(tmp_path))

        assert exc_info.value.details["line_number"] == 2

    def test_wrong_table_identifier_is_fatal(self, tmp_path, vault_spec):
        (tmp_path / "vault_error.table").write_text(render_table("OTHER_ERROR", []), encoding="utf-8")

        with pytest.raises(CatalogLoadError):
            DomainCatalog.from_tables([vault_spec], str(tmp_path))

    def test_invalid_hex_key_is_fatal(self, tmp_path, vault_spec):
        (tmp_path / "vault_error.table").write_text(render_table("VAULT_ERROR", [("XYZ", "Bad")]), encoding="utf-8")

        with pytest.raises(CatalogLoadError):
            DomainCatalog.from_tables([vault_spec], str(tmp_path))

    def test_one_bad_domain_fails_whole_catalog(self, tmp_path, bundled_tables_dir, vault_spec):
        specs = list(DEFAULT_DOMAINS[:2]) + [vault_spec]

        with pytest.raises(CatalogLoadError):
            DomainCatalog.from_tables(specs, bundled_tables_dir)


class TestProcessCatalog:
    """Test suite for the process-wide catalog."""

    def test_initialized_once(self, fresh_process_catalog, bundled_tables_dir):
        first = initialize_catalog(tables_dir=bundled_tables_dir)
        second = initialize_catalog(tables_dir=bundled_tables_dir)

        assert first is second
        assert get_catalog() is first
        assert len(first) == len(DEFAULT_DOMAINS)

    def test_later_arguments_are_logged_and_ignored(self, fresh_process_catalog, bundled_tables_dir, tmp_path, caplog):
        # Setup
        caplog.set_level(logging.DEBUG, logger="program_errors.registry.catalog")
        first = initialize_catalog(tables_dir=bundled_tables_dir)

        # Execute
        second = initialize_catalog(DEFAULT_DOMAINS[:1], tables_dir=str(tmp_path))

        # Verify
        assert second is first
        assert len(second) == len(DEFAULT_DOMAINS)
        assert any("ignoring request" in record.getMessage() for record in caplog.records)

    def test_same_arguments_are_not_logged(self, fresh_process_catalog, bundled_tables_dir, caplog):
        initialize_catalog(tables_dir=bundled_tables_dir)
        caplog.set_level(logging.DEBUG, logger="program_errors.registry.catalog")

        initialize_catalog(tables_dir=bundled_tables_dir)

        assert not any("ignoring request" in record.getMessage() for record in caplog.records)

    def test_failed_initialization_leaves_no_catalog(self, fresh_process_catalog, tmp_path):
        with pytest.raises(CatalogLoadError):
            initialize_catalog(tables_dir=str(tmp_path))

        assert fresh_process_catalog._catalog is None


def test_domain_from_entries_keeps_declaration_order():
    domain = Domain(
        name="Ordered",
        source_name="ordered-error.rs",
        entries=[ErrorEntry(2, "B"), ErrorEntry(1, "A")],
    )

    assert list(domain.table) == ["2", "1"]
    assert isinstance(domain.entries, tuple)
