"""Program error registry.

Compiles the error enums of Solana programs (Anchor, Token Metadata,
Auction House, Candy Machine and friends) into lookup tables and decodes
error codes returned by failed transactions.
"""

__version__ = "0.1.0"
__author__ = "Program Error Registry Contributors"
__email__ = "maintainers@program-errors.dev"


def initialize_application():
    """Configure logging and build the process-wide domain catalog.

    Returns:
        The loaded DomainCatalog

    Raises:
        ConfigurationError: If the settings are invalid
        CatalogLoadError: If any error domain fails to load
    """
    from program_errors.logging_config import configure_logging
    from program_errors.registry.catalog import initialize_catalog
    from program_errors.utils.config import get_settings

    settings = get_settings()
    configure_logging(settings.logging.LOG_LEVEL, settings.logging.LOG_JSON)
    return initialize_catalog(tables_dir=settings.registry.TABLES_DIR)
