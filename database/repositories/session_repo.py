"""Session repository: summarizer session state stored in Redis."""
import asyncio
import logging
import uuid
from typing import Optional
import redis.asyncio as redis
from pydantic import ValidationError
from client.models import SessionState
from shared.config import settings
from shared.utils import generate_session_id

logger = logging.getLogger(__name__)


class SessionRepository:
    """Repository for per-session state and the in-flight submission lock."""

    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client
        self.prefix = settings.redis_session_prefix
        self.ttl = settings.session_ttl
        self.lock_ttl = settings.inflight_lock_ttl

    def _key(self, session_id: str) -> str:
        return f"{self.prefix}:{session_id}"

    def _lock_key(self, session_id: str) -> str:
        return f"{self.prefix}:{session_id}:inflight"

    async def create_session(self) -> SessionState:
        """Create and store a fresh session."""
        state = SessionState(session_id=generate_session_id())
        await self.save_session(state)
        return state

    async def get_session(self, session_id: str) -> Optional[SessionState]:
        """Get a session by ID."""
        raw = await self.redis.get(self._key(session_id))
        if raw is None:
            return None
        try:
            return SessionState.model_validate_json(raw)
        except ValidationError:
            logger.error(f"Discarding unreadable session {session_id}")
            await self.redis.delete(self._key(session_id))
            return None

    async def save_session(self, state: SessionState) -> bool:
        """Store the session and refresh its expiry."""
        return bool(await self.redis.set(
            self._key(state.session_id),
            state.model_dump_json(),
            ex=self.ttl
        ))

    async def acquire_submission(self, session_id: str) -> Optional[str]:
        """
        Take the in-flight lock.

        Returns the token owning the lock, or None if a submission is running.
        """
        token = uuid.uuid4().hex
        acquired = await self.redis.set(
            self._lock_key(session_id),
            token,
            nx=True,
            ex=self.lock_ttl
        )
        if not acquired:
            logger.info(f"Session {session_id} already has a submission in flight")
            return None
        return token

    async def refresh_submission(self, session_id: str, token: str) -> bool:
        """Extend the lock if the token still owns it."""
        if await self.redis.get(self._lock_key(session_id)) != token:
            logger.warning(f"Lost in-flight lock of session {session_id}")
            return False
        return bool(await self.redis.expire(self._lock_key(session_id), self.lock_ttl))

    async def hold_submission(self, session_id: str, token: str):
        """Keep the lock alive until cancelled. Runs beside the outbound call."""
        interval = max(self.lock_ttl / 3, 1)
        while True:
            await asyncio.sleep(interval)
            try:
                await self.refresh_submission(session_id, token)
            except redis.RedisError as e:
                logger.warning(f"Could not refresh in-flight lock of session {session_id}: {e}")

    async def release_submission(self, session_id: str, token: str):
        """Drop the lock if the token still owns it."""
        if await self.redis.get(self._lock_key(session_id)) == token:
            await self.redis.delete(self._lock_key(session_id))
