"""Result presenter: analysis, truncation, export and reset over a received result."""
import logging
from typing import Optional

from client.analysis import analyze_text, is_truncatable, truncate_words
from client.exporter import ExportedDocument, PdfExporter
from client.models import (
    AnalysisSnapshot,
    Language,
    SessionState,
    TranslationStatus,
    empty_analysis,
    initial_steps,
)
from shared.errors import ActionUnavailableError

logger = logging.getLogger(__name__)

# Markers the translation provider writes into the text when its quota is spent.
QUOTA_SENTINELS = ("MYMEMORY WARNING", "USED ALL AVAILABLE FREE TRANSLATIONS")

UNAVAILABLE_NOTICE = {
    "title": "Translation Service Temporarily Unavailable",
    "message": (
        "The translation service has reached its daily limit. "
        "Urdu translation will be available again in a few hours."
    ),
}


class ResultPresenter:
    """Derived views and user actions on the session's summary result."""

    def __init__(self, state: SessionState, exporter: Optional[PdfExporter] = None):
        self.state = state
        self.exporter = exporter or PdfExporter()

    @property
    def translation_unavailable(self) -> bool:
        """Whether the Urdu text is a provider quota notice rather than content."""
        result = self.state.result
        if result is None:
            return False
        if result.translation_status is not None:
            return result.translation_status == TranslationStatus.QUOTA_EXCEEDED
        return any(sentinel in result.summary_urdu for sentinel in QUOTA_SENTINELS)

    def is_available(self, language: Language) -> bool:
        """Whether analysis and export are offered for a language."""
        result = self.state.result
        if result is None:
            return False
        if language == Language.URDU and self.translation_unavailable:
            return False
        return True

    def analyze(self, language: Language) -> Optional[AnalysisSnapshot]:
        """Compute and store statistics for one language. No-op when unavailable."""
        if not self.is_available(language):
            return None
        snapshot = analyze_text(self.state.result.text_for(language), language)
        self.state.analysis[language] = snapshot
        return snapshot

    def toggle_expanded(self) -> bool:
        self.state.show_full_urdu = not self.state.show_full_urdu
        return self.state.show_full_urdu

    @property
    def can_expand(self) -> bool:
        result = self.state.result
        return result is not None and is_truncatable(result.summary_urdu)

    def display_urdu(self) -> Optional[str]:
        """Urdu text as currently shown: full, or truncated to 20 words."""
        result = self.state.result
        if result is None or self.translation_unavailable:
            return None
        if self.state.show_full_urdu:
            return result.summary_urdu
        return truncate_words(result.summary_urdu)

    def export(self, language: Language) -> ExportedDocument:
        if not self.is_available(language):
            raise ActionUnavailableError(f"No {language.value} summary to export")
        text = self.state.result.text_for(language)
        if not text:
            raise ActionUnavailableError(f"No {language.value} summary to export")
        logger.info(f"Exporting {language.value} summary for {self.state.result.blog_url}")
        return self.exporter.export(text, language)

    def reset(self):
        """Return the session to its initial baseline."""
        self.state.result = None
        self.state.analysis = empty_analysis()
        self.state.url = ""
        self.state.error = None
        self.state.show_full_urdu = False
        self.state.is_processing = False
        self.state.steps = initial_steps()
