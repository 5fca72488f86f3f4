import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from snippet_review.api.dependencies import HandlerDep, lifespan
from snippet_review.api.middleware import install_middleware, server_error_response
from snippet_review.config import Settings, settings
from snippet_review.dto import (
    CacheClearResponse,
    CacheStatsResponse,
    ErrorResponse,
    HealthCheckResponse,
    ReviewRequest,
)
from snippet_review.services import ReviewService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post(
    "/get-review",
    response_class=PlainTextResponse,
    responses={400: {"model": ErrorResponse}},
)
@router.post("/get-review/", response_class=PlainTextResponse, include_in_schema=False)
async def get_review(
    handler: HandlerDep,
    request: Annotated[ReviewRequest | None, Body()] = None,
) -> PlainTextResponse:
    """Send a code snippet or chat message to the model and return its text."""
    return await handler.get_review(request)


@router.get("/cache/stats", response_model=CacheStatsResponse)
async def get_cache_stats(handler: HandlerDep) -> CacheStatsResponse:
    """Get response cache and resolver statistics."""
    return await handler.get_stats()


@router.delete("/cache", response_model=CacheClearResponse)
async def clear_cache(handler: HandlerDep) -> CacheClearResponse:
    """Remove every cached response."""
    return await handler.clear_cache()


def _install_error_handlers(app: FastAPI, app_settings: Settings) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # A wrong method on a known path gets the same answer as an unknown path
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"error": "Route not found"},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected request body on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body"},
        )

    # Fallback for errors raised outside the security-headers middleware
    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        return server_error_response(request, exc, app_settings.is_development)


def create_app(
    review_service: ReviewService | None = None,
    app_settings: Settings | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        review_service: Use this service instead of building one from settings.
        app_settings: Override the global settings.

    Returns:
        The configured FastAPI app
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Snippet Review API",
        description="Code review and chat backed by Google Gemini",
        version="0.1.0",
        lifespan=lifespan,
    )
    if review_service is not None:
        app.state.review_service = review_service

    install_middleware(app, app_settings)
    _install_error_handlers(app, app_settings)

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "Snippet Review API",
            "version": "0.1.0",
            "endpoints": {
                "review": "/ai/get-review",
                "cache_stats": "/ai/cache/stats",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health() -> HealthCheckResponse:
        """Health check endpoint."""
        return HealthCheckResponse(status="healthy")

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "snippet_review.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
