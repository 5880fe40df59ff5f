"""Pytest configuration and fixtures."""
import json
import pytest
from unittest.mock import AsyncMock, MagicMock

from client.models import SessionState, SummaryResult
from client.transport import EndpointResponse, SummarizeClient

URDU_SUMMARY = "ایک مختصر خلاصہ"


@pytest.fixture
def result_payload():
    """Create a summarize endpoint success payload."""
    return {
        "id": 1,
        "blog_url": "https://example.com/post",
        "title": "Example Post",
        "summary_english": "A short summary.",
        "summary_urdu": URDU_SUMMARY,
        "created_at": "2024-02-04T10:30:00Z",
        "word_count": 3
    }


@pytest.fixture
def summary_result(result_payload):
    return SummaryResult.model_validate(result_payload)


@pytest.fixture
def session_state():
    """Create a fresh session state."""
    return SessionState(session_id="sess_test123")


@pytest.fixture
def loaded_state(session_state, summary_result):
    """Create a session state holding a result."""
    session_state.url = "https://example.com/post"
    session_state.result = summary_result
    return session_state


@pytest.fixture
def mock_client(result_payload):
    """Create a summarize client that answers with the sample payload."""
    client = MagicMock(spec=SummarizeClient)
    client.request_summary = AsyncMock(
        return_value=EndpointResponse(status=200, body=json.dumps(result_payload))
    )
    client.list_summaries = AsyncMock(return_value={"summaries": [result_payload]})
    return client


@pytest.fixture
def mock_redis_client():
    """Create mock Redis client."""
    redis = AsyncMock()

    redis.get = AsyncMock(return_value=None)
    redis.set = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    redis.publish = AsyncMock(return_value=1)

    return redis


@pytest.fixture
def mock_mongo_db():
    """Create mock MongoDB database."""
    db = MagicMock()

    db.blog_content = MagicMock()
    db.blog_content.find_one = AsyncMock()
    db.blog_content.update_one = AsyncMock()
    db.blog_content.create_index = AsyncMock()
    db.blog_content.find = MagicMock()
    db.command = AsyncMock(return_value={"ok": 1})

    return db
