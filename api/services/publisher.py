"""Publisher service for pushing session updates to Redis."""
import json
from typing import Any, Dict
import redis.asyncio as redis
from shared.config import settings


class UpdatePublisher:
    """Publishes step and UI events for WebSocket fan-out."""

    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client
        self.channel = settings.redis_update_channel

    async def publish(self, session_id: str, event: Dict[str, Any]) -> int:
        """Publish one event for a session. Returns the number of receivers."""
        message = {"session_id": session_id, **event}
        return await self.redis.publish(self.channel, json.dumps(message))
