"""Error code lookup API routes.

This module defines routes for decoding program error codes.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Request

from program_errors.models.api_models import ApiResponse
from program_errors.models.entries import DomainSummary, FoundError, LookupResult
from program_errors.services.lookup_service import ErrorLookupService, normalize_code

# Create router
router = APIRouter(tags=["errors"])


def get_lookup_service(request: Request) -> ErrorLookupService:
    """Dependency to get the lookup service bound to the application's catalog.

    Args:
        request: The incoming request

    Returns:
        An ErrorLookupService instance
    """
    return ErrorLookupService(request.app.state.catalog)


@router.get(
    "/errors/{code}",
    response_model=ApiResponse[LookupResult],
    summary="Decode an error code",
    description="Finds every program domain that defines the given hexadecimal error code."
)
async def decode_error(
    code: str = Path(..., description="Hexadecimal error code, e.g. 1770 or 0x1770"),
    service: ErrorLookupService = Depends(get_lookup_service)
) -> ApiResponse[LookupResult]:
    """Decode an error code across all domains.

    Args:
        code: The hexadecimal error code
        service: The lookup service

    Returns:
        All matching domains, in catalog order
    """
    result = service.lookup_result(code)
    return ApiResponse[LookupResult].success(result, meta={"domains_searched": len(service.catalog)})


@router.get(
    "/domains",
    response_model=ApiResponse[List[DomainSummary]],
    summary="List error domains",
    description="Lists the program domains known to the registry, in lookup order."
)
async def list_domains(
    service: ErrorLookupService = Depends(get_lookup_service)
) -> ApiResponse[List[DomainSummary]]:
    summaries = [
        DomainSummary(name=domain.name, source_name=domain.source_name, error_count=len(domain))
        for domain in service.catalog
    ]
    return ApiResponse[List[DomainSummary]].success(summaries)


@router.get(
    "/domains/{domain}/errors/{code}",
    response_model=ApiResponse[FoundError],
    summary="Decode an error code in one domain",
    description="Looks up an error code in a single named domain."
)
async def decode_domain_error(
    domain: str = Path(..., description="Domain display name, e.g. Token Metadata"),
    code: str = Path(..., description="Hexadecimal error code"),
    service: ErrorLookupService = Depends(get_lookup_service)
) -> ApiResponse[FoundError]:
    """Decode an error code in a single domain.

    Raises:
        HTTPException: 404 if the domain does not define the code
    """
    message = service.lookup_single_domain(code, domain)
    if message is None:
        raise HTTPException(
            status_code=404,
            detail=f"Error code {normalize_code(code)} is not defined by {domain}"
        )
    return ApiResponse[FoundError].success(FoundError(domain=domain, message=message))
