"""Request orchestrator tests."""
import pytest
from unittest.mock import AsyncMock

from client.models import Language, StepStatus
from client.orchestrator import RequestOrchestrator
from client.transport import EndpointResponse
from shared.errors import (
    SubmissionInProgressError,
    TransportError,
    UnexpectedError,
    ValidationError,
)


def statuses(state):
    return [step.status for step in state.steps]


class TestSubmitValidation:
    """Tests for URL validation before any network call."""

    @pytest.fixture
    def orchestrator(self, session_state, mock_client):
        return RequestOrchestrator(session_state, mock_client)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_url", ["", "   ", "\t\n"])
    async def test_missing_url(self, orchestrator, mock_client, raw_url):
        with pytest.raises(ValidationError) as exc_info:
            await orchestrator.submit(raw_url)

        assert exc_info.value.reason == "missing url"
        assert orchestrator.state.error == "Please enter a blog URL"
        mock_client.request_summary.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_url", [
        "not a url",
        "example.com/post",
        "ftp://example.com/post",
        "mailto:someone@example.com",
        "javascript:alert(1)",
        "http://",
        "http://exa mple.com/post",
        "http://exa<mple.com",
        "http://example.com:99999/post",
    ])
    async def test_invalid_url(self, orchestrator, mock_client, raw_url):
        with pytest.raises(ValidationError) as exc_info:
            await orchestrator.submit(raw_url)

        assert exc_info.value.reason == "invalid url"
        assert "valid URL" in orchestrator.state.error
        assert not orchestrator.state.is_processing
        mock_client.request_summary.assert_not_called()

    @pytest.mark.asyncio
    async def test_validation_keeps_previous_result(self, loaded_state, mock_client):
        orchestrator = RequestOrchestrator(loaded_state, mock_client)

        with pytest.raises(ValidationError):
            await orchestrator.submit("not a url")

        assert loaded_state.result is not None

    @pytest.mark.asyncio
    async def test_rejects_while_in_flight(self, session_state, mock_client):
        session_state.is_processing = True
        orchestrator = RequestOrchestrator(session_state, mock_client)

        with pytest.raises(SubmissionInProgressError):
            await orchestrator.submit("https://example.com/post")

        mock_client.request_summary.assert_not_called()


class TestSubmitSuccess:
    """Tests for the success path."""

    @pytest.mark.asyncio
    async def test_single_call_with_trimmed_url(self, session_state, mock_client):
        orchestrator = RequestOrchestrator(session_state, mock_client)

        await orchestrator.submit("  https://example.com/post  ")

        mock_client.request_summary.assert_awaited_once_with("https://example.com/post")

    @pytest.mark.asyncio
    async def test_all_steps_completed_and_result_set(self, session_state, mock_client):
        orchestrator = RequestOrchestrator(session_state, mock_client)

        result = await orchestrator.submit("https://example.com/post")

        assert statuses(session_state) == [StepStatus.COMPLETED] * 3
        assert session_state.result == result
        assert result.summary_english == "A short summary."
        assert session_state.error is None
        assert not session_state.is_processing

    @pytest.mark.asyncio
    async def test_scrape_step_processing_during_call(self, session_state, mock_client):
        seen = {}
        response = mock_client.request_summary.return_value

        async def observe(url):
            seen["statuses"] = statuses(session_state)
            seen["is_processing"] = session_state.is_processing
            return response

        mock_client.request_summary.side_effect = observe
        orchestrator = RequestOrchestrator(session_state, mock_client)

        await orchestrator.submit("https://example.com/post")

        assert seen["statuses"] == [StepStatus.PROCESSING, StepStatus.PENDING, StepStatus.PENDING]
        assert seen["is_processing"] is True

    @pytest.mark.asyncio
    async def test_previous_state_cleared(self, loaded_state, mock_client):
        loaded_state.error = "old error"
        loaded_state.show_full_urdu = True
        loaded_state.analysis[Language.ENGLISH].word_count = 7
        orchestrator = RequestOrchestrator(loaded_state, mock_client)

        await orchestrator.submit("https://example.com/post")

        assert loaded_state.error is None
        assert loaded_state.show_full_urdu is False
        assert loaded_state.analysis[Language.ENGLISH].word_count == 0

    @pytest.mark.asyncio
    async def test_listener_receives_scroll_then_step_updates(self, session_state, mock_client):
        events = []
        listener = AsyncMock(side_effect=events.append)
        orchestrator = RequestOrchestrator(session_state, mock_client, listener)

        await orchestrator.submit("https://example.com/post")

        assert events[0]["type"] == "scroll"
        assert events[0]["behavior"] == "smooth"
        step_events = [event for event in events if event["type"] == "steps"]
        assert len(step_events) == 3
        assert [step["status"] for step in step_events[1]["steps"]] == [
            "completed", "processing", "processing"
        ]
        assert [step["status"] for step in step_events[-1]["steps"]] == ["completed"] * 3


class TestSubmitFailure:
    """Tests for error responses and exceptions."""

    @pytest.mark.asyncio
    async def test_error_response_message_surfaced(self, session_state, mock_client):
        mock_client.request_summary.side_effect = TransportError("scrape failed", status=500)
        orchestrator = RequestOrchestrator(session_state, mock_client)

        with pytest.raises(TransportError):
            await orchestrator.submit("https://example.com/post")

        assert session_state.error == "scrape failed"
        assert session_state.steps[0].status == StepStatus.ERROR
        assert session_state.steps[0].detail == "scrape failed"
        assert session_state.result is None
        assert not session_state.is_processing

    @pytest.mark.asyncio
    async def test_later_steps_stay_pending_after_failure(self, session_state, mock_client):
        # Later stages are not marked aborted; they keep their pending status.
        mock_client.request_summary.side_effect = TransportError("scrape failed", status=500)
        orchestrator = RequestOrchestrator(session_state, mock_client)

        with pytest.raises(TransportError):
            await orchestrator.submit("https://example.com/post")

        assert statuses(session_state)[1:] == [StepStatus.PENDING, StepStatus.PENDING]

    @pytest.mark.asyncio
    async def test_unexpected_exception_wrapped(self, session_state, mock_client):
        mock_client.request_summary.side_effect = RuntimeError("socket exploded")
        orchestrator = RequestOrchestrator(session_state, mock_client)

        with pytest.raises(UnexpectedError) as exc_info:
            await orchestrator.submit("https://example.com/post")

        assert exc_info.value.message == "socket exploded"
        assert session_state.steps[0].status == StepStatus.ERROR

    @pytest.mark.asyncio
    async def test_unexpected_exception_without_message(self, session_state, mock_client):
        mock_client.request_summary.side_effect = RuntimeError()
        orchestrator = RequestOrchestrator(session_state, mock_client)

        with pytest.raises(UnexpectedError):
            await orchestrator.submit("https://example.com/post")

        assert session_state.error == "An unexpected error occurred"

    @pytest.mark.asyncio
    async def test_malformed_payload_fails_summarize_step(self, session_state, mock_client):
        mock_client.request_summary.return_value = EndpointResponse(status=200, body="<html>")
        orchestrator = RequestOrchestrator(session_state, mock_client)

        with pytest.raises(UnexpectedError):
            await orchestrator.submit("https://example.com/post")

        assert statuses(session_state) == [
            StepStatus.COMPLETED,
            StepStatus.ERROR,
            StepStatus.PROCESSING,
        ]
        assert session_state.result is None

    @pytest.mark.asyncio
    async def test_resubmit_after_failure(self, session_state, mock_client):
        response = mock_client.request_summary.return_value
        mock_client.request_summary.side_effect = [TransportError("scrape failed", status=500), response]
        orchestrator = RequestOrchestrator(session_state, mock_client)

        with pytest.raises(TransportError):
            await orchestrator.submit("https://example.com/post")
        await orchestrator.submit("https://example.com/post")

        assert session_state.error is None
        assert statuses(session_state) == [StepStatus.COMPLETED] * 3
