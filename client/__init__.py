# Client module
from .models import (
    AnalysisSnapshot,
    Language,
    ProcessingStep,
    SessionState,
    StepStatus,
    SummaryResult,
)
from .session import SummarizerSession
from .transport import SummarizeClient

__all__ = [
    "AnalysisSnapshot",
    "Language",
    "ProcessingStep",
    "SessionState",
    "StepStatus",
    "SummaryResult",
    "SummarizerSession",
    "SummarizeClient",
]
