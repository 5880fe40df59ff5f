"""Session routes for the summarizer page."""
import asyncio
import logging
from typing import Any, Dict
from fastapi import APIRouter, HTTPException, Depends, Response, status
from fastapi.responses import JSONResponse
import redis.asyncio as redis

from database.connection import get_redis
from database.repositories.session_repo import SessionRepository
from api.services.publisher import UpdatePublisher
from api.schemas.requests import SubmitRequest
from api.schemas.responses import SessionResponse, DashboardResponse, AnalysisResponse, ErrorResponse
from client.exporter import PdfExporter
from client.models import Language, SessionState
from client.session import SummarizerSession
from client.transport import SummarizeClient
from shared.errors import (
    ActionUnavailableError,
    SubmissionInProgressError,
    SummarizerError,
    TransportError,
    ValidationError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])

ERROR_RESPONSES = {
    code: {"model": ErrorResponse} for code in (409, 422, 500, 502)
}
CONFLICT_RESPONSES = {409: {"model": ErrorResponse}}


def error_status(error: SummarizerError) -> int:
    """HTTP status for a summarizer error."""
    if isinstance(error, ValidationError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(error, (SubmissionInProgressError, ActionUnavailableError)):
        return status.HTTP_409_CONFLICT
    if isinstance(error, TransportError):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(error: SummarizerError, session: SummarizerSession) -> JSONResponse:
    return JSONResponse(
        status_code=error_status(error),
        content={"error": error.message, "session": session.view()}
    )


async def get_session_repo(redis_client: redis.Redis = Depends(get_redis)) -> SessionRepository:
    return SessionRepository(redis_client)


async def get_publisher(redis_client: redis.Redis = Depends(get_redis)) -> UpdatePublisher:
    return UpdatePublisher(redis_client)


def get_summarize_client() -> SummarizeClient:
    return SummarizeClient()


def get_exporter() -> PdfExporter:
    return PdfExporter()


async def load_state(session_id: str, repo: SessionRepository) -> SessionState:
    state = await repo.get_session(session_id)
    if state is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found"
        )
    return state


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    repo: SessionRepository = Depends(get_session_repo),
    client: SummarizeClient = Depends(get_summarize_client)
):
    """Start a new summarizer session."""
    state = await repo.create_session()
    logger.info(f"Created session {state.session_id}")
    return SummarizerSession(state, client).view()


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: str,
    repo: SessionRepository = Depends(get_session_repo),
    client: SummarizeClient = Depends(get_summarize_client)
):
    """Get the current view of a session."""
    state = await load_state(session_id, repo)
    return SummarizerSession(state, client).view()


@router.post(
    "/{session_id}/submit",
    response_model=SessionResponse,
    responses=ERROR_RESPONSES
)
async def submit_url(
    session_id: str,
    request: SubmitRequest,
    repo: SessionRepository = Depends(get_session_repo),
    publisher: UpdatePublisher = Depends(get_publisher),
    client: SummarizeClient = Depends(get_summarize_client)
):
    """
    Submit a blog URL for summarization.

    - Rejects the request while another submission of the session is in flight
    - Validates the URL before any outbound call
    - Pushes step transitions over the session's WebSocket
    - Returns the final session view
    """
    state = await load_state(session_id, repo)

    token = await repo.acquire_submission(session_id)
    if token is None:
        return error_response(SubmissionInProgressError(), SummarizerSession(state, client))
    heartbeat = asyncio.create_task(repo.hold_submission(session_id, token))

    async def on_update(event: Dict[str, Any]):
        await repo.save_session(state)
        await publisher.publish(session_id, event)

    session = SummarizerSession(state, client, listener=on_update)
    try:
        await session.submit(request.url)
    except SummarizerError as e:
        return error_response(e, session)
    finally:
        heartbeat.cancel()
        try:
            await heartbeat
        except asyncio.CancelledError:
            pass
        await repo.save_session(state)
        await repo.release_submission(session_id, token)

    return session.view()


@router.post("/{session_id}/analyze/{language}", response_model=AnalysisResponse, responses=CONFLICT_RESPONSES)
async def analyze(
    session_id: str,
    language: Language,
    repo: SessionRepository = Depends(get_session_repo),
    client: SummarizeClient = Depends(get_summarize_client)
):
    """Compute word, character and vowel counts for one language."""
    state = await load_state(session_id, repo)
    session = SummarizerSession(state, client)

    snapshot = session.analyze(language)
    if snapshot is None:
        return error_response(
            ActionUnavailableError(f"No {language.value} summary to analyze"),
            session
        )

    await repo.save_session(state)
    return snapshot.model_dump()


@router.post("/{session_id}/toggle-expanded", response_model=SessionResponse)
async def toggle_expanded(
    session_id: str,
    repo: SessionRepository = Depends(get_session_repo),
    client: SummarizeClient = Depends(get_summarize_client)
):
    """Switch the Urdu summary between truncated and full text."""
    state = await load_state(session_id, repo)
    session = SummarizerSession(state, client)
    session.toggle_expanded()
    await repo.save_session(state)
    return session.view()


@router.get("/{session_id}/export/{language}", responses=CONFLICT_RESPONSES)
async def export_summary(
    session_id: str,
    language: Language,
    repo: SessionRepository = Depends(get_session_repo),
    client: SummarizeClient = Depends(get_summarize_client),
    exporter: PdfExporter = Depends(get_exporter)
):
    """Download the summary of one language as a PDF."""
    state = await load_state(session_id, repo)
    session = SummarizerSession(state, client, exporter=exporter)

    try:
        document = session.export(language)
    except ActionUnavailableError as e:
        return error_response(e, session)

    return Response(
        content=document.data,
        media_type=document.content_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'}
    )


@router.post("/{session_id}/reset", response_model=SessionResponse)
async def reset_session(
    session_id: str,
    repo: SessionRepository = Depends(get_session_repo),
    client: SummarizeClient = Depends(get_summarize_client)
):
    """Clear the result, analysis, URL and error of a session."""
    state = await load_state(session_id, repo)
    session = SummarizerSession(state, client)
    session.reset()
    await repo.save_session(state)
    return session.view()


@router.get("/{session_id}/dashboard", response_model=DashboardResponse)
async def dashboard(
    session_id: str,
    repo: SessionRepository = Depends(get_session_repo),
    client: SummarizeClient = Depends(get_summarize_client)
):
    """List previously generated summaries."""
    state = await load_state(session_id, repo)
    return await SummarizerSession(state, client).open_dashboard()
