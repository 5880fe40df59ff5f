"""Request schemas for API endpoints."""
from pydantic import BaseModel, Field


class SubmitRequest(BaseModel):
    """Request schema for a summary submission."""
    url: str = Field(default="", description="Blog URL to summarize")
