"""Shared configuration for the page service and the summarizer client."""
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Summarize endpoint
    summarize_endpoint_url: str = "http://localhost:3000/api/summarize"
    summarize_list_param: str = "list"
    summarize_timeout: Optional[float] = None  # None waits for the transport

    # Redis Configuration
    redis_url: str = "redis://localhost:6379"
    redis_session_prefix: str = "summarizer:session"
    redis_update_channel: str = "summary_updates"
    session_ttl: int = 60 * 60 * 24  # seconds
    inflight_lock_ttl: int = 60 * 15  # seconds

    # MongoDB Configuration
    mongodb_uri: Optional[str] = Field(default=None, validation_alias="MONGODB_URI")
    mongo_db_name: str = "blog_summarizer"
    mongo_server_selection_timeout_ms: int = 5000

    # Runtime
    app_env: str = "production"

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False

    # WebSocket Configuration
    ws_heartbeat_interval: int = 30

    # Export Configuration
    export_urdu_font_path: Optional[str] = None
    export_font_size: int = 28

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() == "development"


settings = Settings()
