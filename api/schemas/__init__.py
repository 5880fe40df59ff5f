# Schemas module
from .requests import SubmitRequest
from .responses import (
    SessionResponse,
    StepResponse,
    AnalysisResponse,
    DashboardResponse,
    ErrorResponse
)

__all__ = [
    "SubmitRequest",
    "SessionResponse",
    "StepResponse",
    "AnalysisResponse",
    "DashboardResponse",
    "ErrorResponse"
]
