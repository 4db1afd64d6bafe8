"""Test configuration for pytest.

This module imports fixtures that should be available to all tests.
"""

# Import fixtures
from tests.fixtures.common import (  # noqa
    sources_dir,
    bundled_tables_dir,
    metadata_domain,
    auction_house_domain,
    small_catalog,
    lookup_service,
    bundled_catalog,
    fresh_process_catalog,
)
