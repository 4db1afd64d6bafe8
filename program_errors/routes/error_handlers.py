"""
Error handlers for the API
"""
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from program_errors.models.api_models import ApiResponse
from program_errors.utils.error_handling import ProgramErrorsError, UnknownDomainError

# Setup logger
logger = structlog.get_logger("api.errors")


def register_error_handlers(app: FastAPI) -> None:
    """Register global error handlers for the application"""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions"""
        logger.warning(
            "HTTP exception",
            status_code=exc.status_code,
            detail=str(exc.detail),
            path=request.url.path
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=ApiResponse.failure(str(exc.detail), "HTTP_ERROR").model_dump()
        )

    @app.exception_handler(UnknownDomainError)
    async def unknown_domain_handler(request: Request, exc: UnknownDomainError):
        """Handle lookups against undeclared domains"""
        logger.warning("Unknown domain", domain=exc.domain, path=request.url.path)
        return JSONResponse(
            status_code=404,
            content=ApiResponse.failure(exc.message, exc.error_code.name, exc.details).model_dump()
        )

    @app.exception_handler(ProgramErrorsError)
    async def registry_exception_handler(request: Request, exc: ProgramErrorsError):
        """Handle registry errors"""
        logger.error(
            "Registry error",
            error_code=exc.error_code.name,
            message=exc.message,
            path=request.url.path
        )
        return JSONResponse(
            status_code=500,
            content=ApiResponse.failure(exc.message, exc.error_code.name, exc.details).model_dump()
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all uncaught exceptions"""
        logger.exception(
            "Uncaught exception",
            exc_info=exc,
            path=request.url.path,
            method=request.method
        )
        return JSONResponse(
            status_code=500,
            content=ApiResponse.failure(
                "Internal server error",
                "INTERNAL_ERROR",
                {"detail": str(exc) if app.debug else "An unexpected error occurred"}
            ).model_dump()
        )
