"""HTTP transport for the summarize endpoint."""
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import aiohttp

from client.models import SummaryRequest
from shared.config import settings
from shared.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass
class EndpointResponse:
    """Raw 2xx response from the summarize endpoint."""
    status: int
    body: str

    def json(self) -> Any:
        """Decode the body. Raises ValueError on malformed JSON."""
        return json.loads(self.body)


def _error_message(status: int, body: str) -> str:
    """Pick the endpoint's own error message, else a status based one."""
    try:
        data = json.loads(body)
    except ValueError:
        data = None
    if isinstance(data, dict) and isinstance(data.get("error"), str) and data["error"]:
        return data["error"]
    return f"HTTP error! status: {status}"


class SummarizeClient:
    """Client for the summarization endpoint (submit and listing modes)."""

    def __init__(self, endpoint_url: str = None, timeout: Optional[float] = None):
        self.endpoint_url = endpoint_url or settings.summarize_endpoint_url
        self.timeout = timeout if timeout is not None else settings.summarize_timeout
        self.headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout),
            headers=self.headers
        )

    async def request_summary(self, url: str) -> EndpointResponse:
        """
        POST the URL to the summarize endpoint.

        Returns the response for any 2xx status. Raises TransportError for
        non-2xx responses and network failures.
        """
        try:
            async with self._session() as session:
                payload = SummaryRequest(url=url).model_dump()
                async with session.post(self.endpoint_url, json=payload) as response:
                    body = await response.text()
                    if not 200 <= response.status < 300:
                        message = _error_message(response.status, body)
                        logger.warning(f"Summarize request for {url} failed: {response.status} {message}")
                        raise TransportError(message, status=response.status)
                    logger.info(f"Summarize request for {url} succeeded: {response.status}")
                    return EndpointResponse(status=response.status, body=body)
        except aiohttp.ClientError as e:
            logger.error(f"Network error calling summarize endpoint: {e}")
            raise TransportError(str(e) or "Network request failed") from e

    async def list_summaries(self) -> Any:
        """GET the summarize endpoint in listing mode and return the decoded body."""
        params = {settings.summarize_list_param: "true"}
        try:
            async with self._session() as session:
                async with session.get(self.endpoint_url, params=params) as response:
                    body = await response.text()
                    if not 200 <= response.status < 300:
                        raise TransportError(
                            f"Failed to fetch summaries (status {response.status})",
                            status=response.status
                        )
                    return json.loads(body)
        except aiohttp.ClientError as e:
            logger.error(f"Network error listing summaries: {e}")
            raise TransportError(str(e) or "Network request failed") from e
