"""A user's summarizer session: orchestrator, presenter and lister over one state."""
from typing import Any, Dict, Optional

from client.exporter import ExportedDocument, PdfExporter
from client.lister import DashboardLister
from client.models import AnalysisSnapshot, Language, SessionState, SummaryResult
from client.orchestrator import Listener, RequestOrchestrator
from client.presenter import UNAVAILABLE_NOTICE, ResultPresenter
from client.transport import SummarizeClient


class SummarizerSession:
    """Facade used by the page service for a single session."""

    def __init__(
        self,
        state: SessionState,
        client: Optional[SummarizeClient] = None,
        exporter: Optional[PdfExporter] = None,
        listener: Optional[Listener] = None
    ):
        self.state = state
        self.client = client or SummarizeClient()
        self.orchestrator = RequestOrchestrator(state, self.client, listener)
        self.presenter = ResultPresenter(state, exporter)
        self.lister = DashboardLister(self.client)

    async def submit(self, raw_url: str) -> SummaryResult:
        return await self.orchestrator.submit(raw_url)

    def analyze(self, language: Language) -> Optional[AnalysisSnapshot]:
        return self.presenter.analyze(language)

    def toggle_expanded(self) -> bool:
        return self.presenter.toggle_expanded()

    def export(self, language: Language) -> ExportedDocument:
        return self.presenter.export(language)

    def reset(self):
        self.presenter.reset()

    async def open_dashboard(self) -> Dict[str, Any]:
        await self.lister.open()
        return self.lister.view()

    def view(self) -> Dict[str, Any]:
        """Everything the page needs to render this session."""
        presenter = self.presenter
        unavailable = presenter.translation_unavailable
        return {
            "session_id": self.state.session_id,
            "url": self.state.url,
            "is_processing": self.state.is_processing,
            "error": self.state.error,
            "steps": [step.model_dump(mode="json") for step in self.state.steps],
            "result": self.state.result.model_dump(mode="json") if self.state.result else None,
            "urdu_display": presenter.display_urdu(),
            "show_full_urdu": self.state.show_full_urdu,
            "can_expand": presenter.can_expand and not unavailable,
            "translation_unavailable": unavailable,
            "notice": UNAVAILABLE_NOTICE if unavailable else None,
            "analysis": {
                language.value: snapshot.model_dump()
                for language, snapshot in self.state.analysis.items()
            },
            "actions": {
                language.value: presenter.is_available(language)
                for language in Language
            },
        }
