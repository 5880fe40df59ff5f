"""Request orchestrator: validates a URL, calls the endpoint once, drives progress."""
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from client.models import (
    SessionState,
    SummaryResult,
    empty_analysis,
    initial_steps,
)
from client.progress import CallEvent, transition
from client.transport import SummarizeClient
from shared.errors import (
    SubmissionInProgressError,
    SummarizerError,
    TransportError,
    UnexpectedError,
    ValidationError,
)
from shared.utils import validate_url

logger = logging.getLogger(__name__)

Listener = Callable[[Dict[str, Any]], Awaitable[None]]

MISSING_URL_MESSAGE = "Please enter a blog URL"
INVALID_URL_MESSAGE = "Please enter a valid URL (must start with http:// or https://)"
UNEXPECTED_MESSAGE = "An unexpected error occurred"

SCROLL_EVENT = {"type": "scroll", "behavior": "smooth", "offset": 400, "delay_ms": 300}


class RequestOrchestrator:
    """Owns submission, validation and step transitions for one session."""

    def __init__(
        self,
        state: SessionState,
        client: SummarizeClient,
        listener: Optional[Listener] = None
    ):
        self.state = state
        self.client = client
        self.listener = listener

    async def _emit(self, event: Dict[str, Any]):
        if self.listener is not None:
            await self.listener(event)

    async def _apply(self, event: CallEvent, message: Optional[str] = None):
        self.state.steps = transition(self.state.steps, event, message)
        await self._emit({
            "type": "steps",
            "steps": [step.model_dump(mode="json") for step in self.state.steps],
        })

    def _validate(self, raw_url: str) -> str:
        url = (raw_url or "").strip()
        if not url:
            self.state.error = MISSING_URL_MESSAGE
            raise ValidationError("missing url", MISSING_URL_MESSAGE)
        if not validate_url(url):
            self.state.error = INVALID_URL_MESSAGE
            raise ValidationError("invalid url", INVALID_URL_MESSAGE)
        return url

    async def submit(self, raw_url: str) -> SummaryResult:
        """
        Submit a blog URL for summarization.

        Makes exactly one call to the summarize endpoint. On success all three
        steps end up completed and the result is stored on the session. On
        failure the error is stored, the in-flight step is marked as failed,
        and the error is re-raised.
        """
        if self.state.is_processing:
            raise SubmissionInProgressError()

        self.state.url = raw_url
        try:
            url = self._validate(raw_url)
        except ValidationError as e:
            logger.info(f"Rejected submission {raw_url!r}: {e.reason}")
            raise

        self.state.error = None
        self.state.result = None
        self.state.analysis = empty_analysis()
        self.state.show_full_urdu = False
        self.state.is_processing = True
        self.state.steps = initial_steps()
        logger.info(f"Submitting {url} for summarization")

        try:
            await self._emit(dict(SCROLL_EVENT))
            await self._apply(CallEvent.CALL_STARTED)

            response = await self.client.request_summary(url)

            await self._apply(CallEvent.CALL_SUCCEEDED)
            result = SummaryResult.model_validate(response.json())
            await self._apply(CallEvent.PAYLOAD_ACCEPTED)

            self.state.result = result
            return result
        except TransportError as e:
            await self._fail(e)
            raise
        except Exception as e:
            error = UnexpectedError(str(e) or UNEXPECTED_MESSAGE)
            await self._fail(error)
            raise error from e
        finally:
            self.state.is_processing = False

    async def _fail(self, error: SummarizerError):
        logger.error(f"Summarization of {self.state.url} failed: {error.message}")
        self.state.error = error.message
        await self._apply(CallEvent.CALL_FAILED, error.message)
