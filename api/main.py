"""Main FastAPI application for the blog summarizer page."""
import asyncio
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, WebSocket, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from database.connection import connection, get_redis
from api.routes import sessions_router
from api.routes.sessions import error_status
from api.websocket import websocket_endpoint, redis_subscriber
from shared.config import settings
from shared.errors import SummarizerError

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Background task for Redis subscriber
subscriber_task = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    global subscriber_task

    # Startup. MongoDB is acquired on first use.
    redis_client = await get_redis()
    subscriber_task = asyncio.create_task(redis_subscriber(redis_client))
    logger.info("Blog summarizer page service started")

    yield

    # Shutdown
    if subscriber_task:
        subscriber_task.cancel()
        try:
            await subscriber_task
        except asyncio.CancelledError:
            pass

    await connection.close_connections()


# Create FastAPI app
app = FastAPI(
    title="Blog Summarizer",
    description="Summarize a blog post in English and Urdu, with text statistics and PDF export",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SummarizerError)
async def summarizer_exception_handler(request: Request, exc: SummarizerError):
    """Map summarizer errors raised outside a session view."""
    return JSONResponse(
        status_code=error_status(exc),
        content={"error": exc.message}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "detail": str(exc)}
    )


# Include routers
app.include_router(sessions_router)


@app.websocket("/ws/sessions/{session_id}")
async def websocket_session(websocket: WebSocket, session_id: str):
    """WebSocket endpoint for step updates of one session."""
    await websocket_endpoint(websocket, session_id)


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    storage = "up" if await connection.ping() else "down"
    return {"status": "healthy", "storage": storage}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Blog Summarizer",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug
    )
