"""
Error lookup service.

Resolves a hexadecimal program error code against every domain of a
catalog. Codes are domain-local, so one code may be recognized by several
domains; results follow catalog order.
"""

import logging
from typing import List, Optional

from program_errors.models.entries import FoundError, LookupResult
from program_errors.registry.catalog import METADATA_DOMAIN, DomainCatalog, get_catalog
from program_errors.utils.error_handling import UnknownDomainError

logger = logging.getLogger(__name__)


def normalize_code(code: str) -> str:
    """Normalize a hex code to the form used as table keys.

    `" 0x1770 "` and `"1770"` both become `"1770"`; `"1a"` becomes `"1A"`.
    """
    normalized = code.strip().upper()
    if normalized.startswith("0X"):
        normalized = normalized[2:]
    return normalized


class ErrorLookupService:
    """Looks up program error codes in a domain catalog."""

    def __init__(self, catalog: Optional[DomainCatalog] = None):
        """Initialize the service.

        Args:
            catalog: Catalog to query; the process-wide catalog when omitted
        """
        self.catalog = catalog if catalog is not None else get_catalog()

    def lookup(self, code: str) -> List[FoundError]:
        """Find every domain that recognizes a code.

        Args:
            code: Hexadecimal error code, any letter case

        Returns:
            Matches in catalog order; empty when no domain knows the code
        """
        key = normalize_code(code)
        found_errors = []

        for domain in self.catalog:
            message = domain.get(key)
            if message is not None:
                found_errors.append(FoundError(domain=domain.name, message=message))

        if not found_errors:
            logger.debug(f"No domain recognizes error code {key}")

        return found_errors

    def lookup_result(self, code: str) -> LookupResult:
        """Same as `lookup`, wrapped with the normalized code."""
        return LookupResult(code=normalize_code(code), matches=self.lookup(code))

    def lookup_code(self, code: int) -> List[FoundError]:
        """Look up an integer error code, e.g. `6000`."""
        if code < 0:
            return []
        return self.lookup(format(code, "X"))

    def lookup_single_domain(self, code: str, domain_name: str) -> Optional[str]:
        """Look up a code in one named domain.

        Args:
            code: Hexadecimal error code, any letter case
            domain_name: Display name of the domain, e.g. `Token Metadata`

        Returns:
            The rendered error, or None if the domain does not know the code

        Raises:
            UnknownDomainError: If the catalog has no domain with that name
        """
        domain = self.catalog.get(domain_name)
        if domain is None:
            raise UnknownDomainError(domain_name, self.catalog.names)
        return domain.get(normalize_code(code))

    def lookup_metadata_error(self, code: str) -> Optional[str]:
        """Look up a code in the Token Metadata domain."""
        return self.lookup_single_domain(code, METADATA_DOMAIN)
