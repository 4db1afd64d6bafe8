"""
Domain catalog.

The catalog is the ordered, read-only set of error domains consulted by
lookups. It is built once per process from the compiled table artifacts;
any domain failing to load aborts the build.
"""

import logging
import os
import threading
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from program_errors.models.entries import Domain, ErrorEntry
from program_errors.registry.compiler import read_table, table_file_name
from program_errors.utils.config import DEFAULT_TABLES_DIR, get_registry_settings
from program_errors.utils.error_handling import CatalogLoadError, TableFormatError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DomainSpec:
    """One row of the fixed domain list."""

    name: str
    table_identifier: str
    source_name: str

    @property
    def table_file(self) -> str:
        return table_file_name(self.table_identifier)


# Lookup results are reported in this order.
DEFAULT_DOMAINS: Tuple[DomainSpec, ...] = (
    DomainSpec("Anchor Program", "ANCHOR_ERROR", "anchor-error.rs"),
    DomainSpec("Token Metadata", "METADATA_ERROR", "metadata-error.rs"),
    DomainSpec("Auction House", "AUCTION_HOUSE_ERROR", "auction-house-error.rs"),
    DomainSpec("Auctioneer", "AUCTIONEER_ERROR", "auctioneer-error.rs"),
    DomainSpec("Candy Machine", "CANDY_ERROR", "candy-error.rs"),
    DomainSpec("Candy Core", "CANDY_CORE_ERROR", "candy-core-error.rs"),
    DomainSpec("Candy Guard", "CANDY_GUARD_ERROR", "candy-guard-error.rs"),
)

METADATA_DOMAIN = "Token Metadata"


class DomainCatalog:
    """Ordered, immutable collection of error domains."""

    def __init__(self, domains: Iterable[Domain]):
        """Initialize the catalog.

        Args:
            domains: Domains in lookup order

        Raises:
            ValueError: If two domains share a name
        """
        self._domains: Tuple[Domain, ...] = tuple(domains)
        self._by_name = {}
        for domain in self._domains:
            if domain.name in self._by_name:
                raise ValueError(f"Duplicate domain name: {domain.name}")
            self._by_name[domain.name] = domain

    @classmethod
    def from_tables(
        cls,
        specs: Sequence[DomainSpec] = DEFAULT_DOMAINS,
        tables_dir: Optional[str] = None
    ) -> "DomainCatalog":
        """Load every domain from its compiled table artifact.

        Args:
            specs: Domains to load, in lookup order
            tables_dir: Directory of `.table` files (defaults to the tables
                shipped with the package)

        Returns:
            The loaded catalog

        Raises:
            CatalogLoadError: If any domain cannot be loaded
        """
        if tables_dir is None:
            tables_dir = DEFAULT_TABLES_DIR

        domains = [load_domain(spec, tables_dir) for spec in specs]
        catalog = cls(domains)
        logger.info(
            f"Loaded {len(catalog)} error domains "
            f"({sum(len(d) for d in catalog)} codes) from {tables_dir}"
        )
        return catalog

    @property
    def names(self) -> List[str]:
        return [domain.name for domain in self._domains]

    def get(self, name: str) -> Optional[Domain]:
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Domain]:
        return iter(self._domains)

    def __len__(self) -> int:
        return len(self._domains)

    def __repr__(self) -> str:
        return f"DomainCatalog({self.names!r})"


def load_domain(spec: DomainSpec, tables_dir: str) -> Domain:
    """Load one domain's table artifact.

    Raises:
        CatalogLoadError: If the artifact is missing, malformed or declares
            a different table
    """
    path = os.path.join(tables_dir, spec.table_file)

    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise CatalogLoadError(spec.name, f"cannot read {path}", details={"error": str(e)})

    try:
        identifier, rows = read_table(text)
    except TableFormatError as e:
        raise CatalogLoadError(spec.name, e.message, details=dict(e.details, path=path))

    if identifier != spec.table_identifier:
        raise CatalogLoadError(
            spec.name,
            f"{path} declares table {identifier}, expected {spec.table_identifier}",
        )

    try:
        entries = tuple(ErrorEntry.from_rendered(key, value) for key, value in rows)
    except ValueError as e:
        raise CatalogLoadError(spec.name, f"invalid code in {path}", details={"error": str(e)})

    logger.debug(f"Loaded {len(entries)} errors for {spec.name}")
    return Domain(name=spec.name, source_name=spec.source_name, entries=entries)


# Process-wide catalog
_catalog: Optional[DomainCatalog] = None
# Specs and tables directory the process-wide catalog was built from
_catalog_source: Optional[Tuple[Tuple[DomainSpec, ...], str]] = None
_catalog_lock = threading.Lock()


def initialize_catalog(
    specs: Sequence[DomainSpec] = DEFAULT_DOMAINS,
    tables_dir: Optional[str] = None
) -> DomainCatalog:
    """Build the process-wide catalog once.

    Later calls return the catalog built by the first one; their arguments
    are ignored.

    Returns:
        The process-wide catalog

    Raises:
        CatalogLoadError: If any domain cannot be loaded
    """
    global _catalog, _catalog_source

    with _catalog_lock:
        if tables_dir is None:
            tables_dir = get_registry_settings().TABLES_DIR
        requested = (tuple(specs), tables_dir)

        if _catalog is None:
            _catalog = DomainCatalog.from_tables(specs, tables_dir)
            _catalog_source = requested
        elif requested != _catalog_source:
            logger.debug(
                f"Catalog already built from {len(_catalog_source[0])} domains in "
                f"{_catalog_source[1]}; ignoring request for {len(requested[0])} "
                f"domains in {tables_dir}"
            )

    return _catalog


def get_catalog() -> DomainCatalog:
    """Get the process-wide catalog, building it on first use."""
    if _catalog is None:
        return initialize_catalog()
    return _catalog
