"""HTTP handlers for review and cache operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, media types and errors.
"""

from fastapi import HTTPException, status
from fastapi.responses import PlainTextResponse

from snippet_review.dto import CacheClearResponse, CacheStatsResponse, ReviewRequest
from snippet_review.services import ReviewService


class ReviewHandler:
    """HTTP handlers for the review endpoint and cache management.

    Example:
        ```python
        handler = ReviewHandler(review_service=service)

        @app.post("/ai/get-review", response_class=PlainTextResponse)
        async def get_review(request: ReviewRequest):
            return await handler.get_review(request)
        ```
    """

    def __init__(self, review_service: ReviewService) -> None:
        """Initialize the review handler.

        Args:
            review_service: The review service for business logic (required).
        """
        self._service = review_service

    async def get_review(self, request: ReviewRequest | None) -> PlainTextResponse:
        """Handle POST /ai/get-review requests.

        The service never raises for model failures; its fixed error
        strings are sent with status 200 like any other response text.

        Args:
            request: The review request DTO, None when no body was sent

        Returns:
            PlainTextResponse with the resolved text

        Raises:
            HTTPException: 400 if there is no body or it has no ``code`` field
        """
        if request is None or request.code is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Prompt is required",
            )

        text = await self._service.resolve(request.code, bypass_safety=request.bypass_safety)
        return PlainTextResponse(text)

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /ai/cache/stats requests.

        Returns:
            CacheStatsResponse with store and resolver statistics
        """
        stats = self._service.get_stats()
        return CacheStatsResponse(cache=stats["cache"], resolver=stats["resolver"])

    async def clear_cache(self) -> CacheClearResponse:
        """Handle DELETE /ai/cache requests.

        Returns:
            CacheClearResponse with the number of removed entries

        Raises:
            HTTPException: If the store fails to clear
        """
        try:
            count = self._service.clear()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to clear cache: {e}",
            ) from e

        return CacheClearResponse(
            success=True,
            deleted_count=count,
            message="Cache cleared successfully",
        )
