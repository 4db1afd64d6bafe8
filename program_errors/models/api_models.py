"""Standardized API response models."""

from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

# Type variable for response data
T = TypeVar('T')


class ApiResponse(BaseModel, Generic[T]):
    """Standardized API response model.

    Provides a consistent structure for all API responses.
    """

    data: Optional[T] = None
    error: Optional[Dict[str, Any]] = None
    meta: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def success(cls, data: T, meta: Optional[Dict[str, Any]] = None) -> 'ApiResponse[T]':
        """Create a success response.

        Args:
            data: The response data
            meta: Optional metadata

        Returns:
            An ApiResponse with data
        """
        return cls(data=data, meta=meta or {})

    @classmethod
    def failure(
        cls,
        error_message: str,
        error_code: str = "INTERNAL_ERROR",
        error_details: Optional[Dict[str, Any]] = None
    ) -> 'ApiResponse[T]':
        """Create an error response.

        Args:
            error_message: The error message
            error_code: Error code for categorization
            error_details: Optional error details

        Returns:
            An ApiResponse with error information
        """
        return cls(
            error={
                "message": error_message,
                "code": error_code,
                "details": error_details
            }
        )
