"""Dashboard lister for previously produced summaries."""
import logging
from enum import Enum
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from client.models import SummaryListItem
from client.transport import SummarizeClient
from shared.errors import SummarizerError

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch summaries"


class ListerState(str, Enum):
    """Dashboard state. Exactly one applies at a time."""
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


def parse_summaries(payload) -> List[SummaryListItem]:
    """Extract listing entries, treating a missing or malformed field as empty."""
    if not isinstance(payload, dict):
        return []
    raw = payload.get("summaries")
    if not isinstance(raw, list):
        return []

    items = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        try:
            items.append(SummaryListItem.model_validate(entry))
        except PydanticValidationError:
            logger.warning(f"Skipping malformed summary entry: {entry!r}")
    return items


class DashboardLister:
    """Fetches the summaries listing once per open, with its own error channel."""

    def __init__(self, client: SummarizeClient):
        self.client = client
        self.state = ListerState.IDLE
        self.summaries: List[SummaryListItem] = []
        self.error: Optional[str] = None

    async def open(self) -> List[SummaryListItem]:
        self.state = ListerState.LOADING
        self.summaries = []
        self.error = None

        try:
            payload = await self.client.list_summaries()
        except SummarizerError as e:
            return self._failed(e.message)
        except ValueError:
            return self._failed(FETCH_FAILED_MESSAGE)

        self.summaries = parse_summaries(payload)
        self.state = ListerState.LOADED
        logger.info(f"Loaded {len(self.summaries)} summaries")
        return self.summaries

    def _failed(self, message: str) -> List[SummaryListItem]:
        logger.error(f"Listing summaries failed: {message}")
        self.state = ListerState.ERROR
        self.error = message
        return []

    def view(self) -> dict:
        return {
            "state": self.state.value,
            "error": self.error,
            "summaries": [item.model_dump(mode="json") for item in self.summaries],
        }
