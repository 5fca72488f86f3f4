"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class ReviewRequest(BaseModel):
    """Request DTO for the review endpoint.

    ``code`` may be empty: blank input is answered in-band by the service.
    """

    code: str | None = Field(None, description="Code snippet or chat message to send to the model")
    bypass_safety: bool = Field(
        False,
        description="Skip rephrasing of prompts that trip the provider's safety filters",
    )
