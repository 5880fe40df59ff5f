"""Response schemas for API endpoints."""
from typing import Dict, List, Optional, Any
from pydantic import BaseModel, Field


class StepResponse(BaseModel):
    """Schema for a processing step."""
    label: str = Field(..., description="Step display name")
    status: str = Field(..., description="pending, processing, completed or error")
    detail: Optional[str] = Field(None, description="Sub-message for the step")


class NoticeResponse(BaseModel):
    """Schema for the translation-unavailable notice."""
    title: str
    message: str


class AnalysisResponse(BaseModel):
    """Schema for text statistics of one language."""
    word_count: int = 0
    char_count: int = 0
    vowel_count: int = 0


class SessionResponse(BaseModel):
    """Response schema for a session view."""
    session_id: str = Field(..., description="Unique session identifier")
    url: str = Field("", description="URL last entered")
    is_processing: bool = Field(False, description="Whether a submission is in flight")
    error: Optional[str] = Field(None, description="Visible error message")
    steps: List[StepResponse] = Field(default_factory=list)
    result: Optional[Dict[str, Any]] = Field(None, description="Summary result payload")
    urdu_display: Optional[str] = Field(None, description="Urdu text as shown")
    show_full_urdu: bool = False
    can_expand: bool = False
    translation_unavailable: bool = False
    notice: Optional[NoticeResponse] = None
    analysis: Dict[str, AnalysisResponse] = Field(default_factory=dict)
    actions: Dict[str, bool] = Field(default_factory=dict, description="Languages with analysis/export enabled")


class SummaryListItemResponse(BaseModel):
    """Schema for one dashboard entry."""
    id: Optional[Any] = None
    title: str
    blog_url: str
    created_at: Optional[str] = None


class DashboardResponse(BaseModel):
    """Response schema for the summaries dashboard."""
    state: str = Field(..., description="loaded or error")
    error: Optional[str] = None
    summaries: List[SummaryListItemResponse] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Schema for error responses."""
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")
    session: Optional[SessionResponse] = None
