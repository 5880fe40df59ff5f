"""Blog content model definitions."""
from typing import Any, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator


class BlogContentModel(BaseModel):
    """Scraped blog record as persisted by the summarize endpoint."""
    id: Optional[str] = Field(default=None, alias="_id")
    blog_url: str
    title: str
    content: str
    scraped_at: datetime
    word_count: int = Field(..., ge=0)
    author: Optional[str] = None
    published_date: Optional[str] = None

    class Config:
        populate_by_name = True

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> Optional[str]:
        """Mongo hands back ObjectId values."""
        return None if v is None else str(v)
