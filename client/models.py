"""Data models for the summarizer client."""
from enum import Enum
from typing import Dict, List, Optional, Union
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class StepStatus(str, Enum):
    """Processing step status enumeration."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class Language(str, Enum):
    """Summary languages. English is primary, Urdu is the translation."""
    ENGLISH = "english"
    URDU = "urdu"


class TranslationStatus(str, Enum):
    """Structured translation outcome reported by the summarize endpoint."""
    OK = "ok"
    QUOTA_EXCEEDED = "quota_exceeded"


STEP_LABELS = (
    "Scraping blog content",
    "Generating AI summary",
    "Translating to Urdu",
)


class ProcessingStep(BaseModel):
    """One of the three fixed progress stages."""
    label: str
    status: StepStatus = StepStatus.PENDING
    detail: Optional[str] = None


def initial_steps() -> List[ProcessingStep]:
    """Return the three steps in their pending baseline."""
    return [ProcessingStep(label=label) for label in STEP_LABELS]


class SummaryRequest(BaseModel):
    """Body of the outbound summarize call."""
    url: str


class SummaryResult(BaseModel):
    """Successful summarize response. Immutable once received."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Union[int, str]
    blog_url: str
    title: str
    summary_english: str
    summary_urdu: str
    created_at: datetime
    word_count: int = Field(..., ge=0)
    author: Optional[str] = None
    translation_status: Optional[TranslationStatus] = None

    def text_for(self, language: Language) -> str:
        if language == Language.ENGLISH:
            return self.summary_english
        return self.summary_urdu


class AnalysisSnapshot(BaseModel):
    """Text statistics computed on demand for one language."""
    word_count: int = Field(default=0, ge=0)
    char_count: int = Field(default=0, ge=0)
    vowel_count: int = Field(default=0, ge=0)


def empty_analysis() -> Dict[Language, AnalysisSnapshot]:
    return {language: AnalysisSnapshot() for language in Language}


class SummaryListItem(BaseModel):
    """Entry of the summaries listing."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[Union[int, str]] = None
    title: str = "Untitled"
    blog_url: str = ""
    created_at: Optional[datetime] = None


class SessionState(BaseModel):
    """Everything the page shows for one session."""
    session_id: str
    url: str = ""
    is_processing: bool = False
    error: Optional[str] = None
    steps: List[ProcessingStep] = Field(default_factory=initial_steps)
    result: Optional[SummaryResult] = None
    analysis: Dict[Language, AnalysisSnapshot] = Field(default_factory=empty_analysis)
    show_full_urdu: bool = False
