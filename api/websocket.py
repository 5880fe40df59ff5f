"""WebSocket fan-out of step and scroll events to open summarizer pages."""
import asyncio
import json
import logging
from typing import Any, Dict, Optional, Set, Tuple
from fastapi import WebSocket, WebSocketDisconnect
import redis.asyncio as redis
from shared.config import settings

logger = logging.getLogger(__name__)

# Event types a page knows how to apply
FORWARDED_EVENTS = {"steps", "scroll"}


class SessionSockets:
    """Open page sockets, grouped by session."""

    def __init__(self):
        self.sockets: Dict[str, Set[WebSocket]] = {}

    async def attach(self, websocket: WebSocket, session_id: str):
        await websocket.accept()
        self.sockets.setdefault(session_id, set()).add(websocket)
        logger.info(f"Page attached to session {session_id}")

    def detach(self, websocket: WebSocket, session_id: str):
        pages = self.sockets.get(session_id)
        if pages is None:
            return
        pages.discard(websocket)
        if not pages:
            del self.sockets[session_id]

    async def deliver(self, session_id: str, event: Dict[str, Any]) -> int:
        """
        Send an event to every page of one session.

        Pages whose socket fails are detached. Returns how many pages got it.
        """
        delivered = 0
        for websocket in list(self.sockets.get(session_id, ())):
            try:
                await websocket.send_json(event)
            except Exception as e:
                logger.info(f"Dropping page of session {session_id}: {e}")
                self.detach(websocket, session_id)
            else:
                delivered += 1
        return delivered


sockets = SessionSockets()


def decode_update(raw: Any) -> Optional[Tuple[str, Dict[str, Any]]]:
    """
    Parse one published update into its session and page event.

    Returns None for anything a page cannot apply: malformed JSON, a missing
    session, or an unknown event type.
    """
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError):
        logger.warning(f"Ignoring malformed update: {raw!r}")
        return None
    if not isinstance(data, dict):
        logger.warning(f"Ignoring malformed update: {raw!r}")
        return None

    session_id = data.pop("session_id", None)
    if not session_id:
        logger.warning(f"Ignoring update without session: {raw!r}")
        return None
    if data.get("type") not in FORWARDED_EVENTS:
        logger.warning(f"Ignoring {data.get('type')!r} update for session {session_id}")
        return None
    return session_id, data


async def redis_subscriber(redis_client: redis.Redis, targets: SessionSockets = sockets):
    """Relay updates from the update channel to the pages of each session."""
    pubsub = redis_client.pubsub()
    await pubsub.subscribe(settings.redis_update_channel)

    try:
        async for message in pubsub.listen():
            if message["type"] != "message":
                continue
            update = decode_update(message["data"])
            if update is not None:
                await targets.deliver(*update)
    except asyncio.CancelledError:
        pass
    finally:
        await pubsub.unsubscribe(settings.redis_update_channel)
        await pubsub.aclose()


async def websocket_endpoint(websocket: WebSocket, session_id: str):
    """Hold a page socket open, answering pings and sending heartbeats."""
    await sockets.attach(websocket, session_id)

    try:
        while True:
            try:
                data = await asyncio.wait_for(
                    websocket.receive_text(),
                    timeout=settings.ws_heartbeat_interval
                )
                if data == "ping":
                    await websocket.send_text("pong")
            except asyncio.TimeoutError:
                await websocket.send_json({"type": "heartbeat"})
    except WebSocketDisconnect:
        sockets.detach(websocket, session_id)
