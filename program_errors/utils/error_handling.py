"""
Error handling utilities for the program error registry.

This module provides the exception hierarchy shared by the registry
generator, the catalog loader and the lookup surface:
- A base exception carrying an error code and structured details
- Source-parsing errors raised while compiling a domain's error enum
- Catalog errors raised while loading compiled tables
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional

# Get logger
logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """Error codes for the program error registry."""
    # General errors
    UNKNOWN_ERROR = 1000
    CONFIGURATION_ERROR = 1001
    VALIDATION_ERROR = 1002

    # Source parsing errors
    ENUM_NOT_FOUND = 2000
    MALFORMED_ENUM = 2001
    INVALID_OVERRIDE_CODE = 2002

    # Catalog errors
    TABLE_FORMAT_ERROR = 3000
    CATALOG_LOAD_ERROR = 3001
    UNKNOWN_DOMAIN = 3002


# Base exception classes
class ProgramErrorsError(Exception):
    """Base exception class for all registry errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize a new ProgramErrorsError.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
        """
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        # Format the error message
        formatted_message = f"[{error_code.name}] {message}"
        if details:
            formatted_message += f" - Details: {details}"

        super().__init__(formatted_message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the error to a dictionary.

        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.error_code.name,
            "message": self.message,
            "details": self.details
        }


class ConfigurationError(ProgramErrorsError):
    """Error related to configuration issues."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class RegistryError(ProgramErrorsError):
    """Error raised while compiling one domain's error enum source."""

    def __init__(
        self,
        message: str,
        file_name: str,
        error_code: ErrorCode,
        line_number: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the registry error.

        Args:
            message: Error message
            file_name: Source file the domain was compiled from
            error_code: Error code from ErrorCode enum
            line_number: 1-based line within the enum body, when known
            details: Additional error details
        """
        self.file_name = file_name
        self.line_number = line_number

        error_details = {"file_name": file_name}
        if line_number is not None:
            error_details["line_number"] = line_number
        error_details.update(details or {})

        super().__init__(message, error_code, error_details)


class EnumNotFoundError(RegistryError):
    """The expected error enum does not appear in the source text."""

    def __init__(self, file_name: str, enum_name: str):
        self.enum_name = enum_name
        super().__init__(
            f"Could not find error enum '{enum_name}'",
            file_name,
            ErrorCode.ENUM_NOT_FOUND,
            details={"enum_name": enum_name}
        )


class MalformedEnumError(RegistryError):
    """The error enum is structurally broken (braces or separators)."""

    def __init__(
        self,
        file_name: str,
        reason: str,
        line_number: Optional[int] = None,
        line: Optional[str] = None
    ):
        self.reason = reason
        details = {"line": line} if line is not None else None
        super().__init__(
            f"Malformed error enum: {reason}",
            file_name,
            ErrorCode.MALFORMED_ENUM,
            line_number=line_number,
            details=details
        )


class InvalidOverrideCodeError(RegistryError):
    """An explicit `Variant = N` override is not a valid integer."""

    def __init__(self, file_name: str, symbol: str, value: str, line_number: Optional[int] = None):
        self.symbol = symbol
        self.value = value
        super().__init__(
            f"Invalid error code override '{value}' for variant '{symbol}'",
            file_name,
            ErrorCode.INVALID_OVERRIDE_CODE,
            line_number=line_number,
            details={"symbol": symbol, "value": value}
        )


class TableFormatError(ProgramErrorsError):
    """A compiled error table artifact could not be read."""

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = dict(details or {})
        if line_number is not None:
            error_details["line_number"] = line_number
        self.line_number = line_number
        super().__init__(message, ErrorCode.TABLE_FORMAT_ERROR, error_details)


class CatalogLoadError(ProgramErrorsError):
    """A domain could not be loaded into the catalog."""

    def __init__(self, domain: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.domain = domain
        error_details = {"domain": domain}
        error_details.update(details or {})
        super().__init__(
            f"Failed to load domain '{domain}': {message}",
            ErrorCode.CATALOG_LOAD_ERROR,
            error_details
        )


class UnknownDomainError(ProgramErrorsError):
    """A lookup named a domain that is not part of the catalog."""

    def __init__(self, domain: str, known_domains: Optional[list] = None):
        self.domain = domain
        super().__init__(
            f"Unknown error domain: {domain}",
            ErrorCode.UNKNOWN_DOMAIN,
            {"domain": domain, "known_domains": known_domains or []}
        )
