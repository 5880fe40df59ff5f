"""Shared utility functions."""
import re
import uuid
from datetime import datetime, timezone
from pydantic import HttpUrl, TypeAdapter, ValidationError

_WHITESPACE = re.compile(r"\s+")
_HTTP_URL = TypeAdapter(HttpUrl)


def generate_session_id() -> str:
    """Generate a unique session ID."""
    return f"sess_{uuid.uuid4().hex[:16]}"


def get_utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def validate_url(url: str) -> bool:
    """Validate that a URL is absolute, uses http or https, and parses cleanly."""
    try:
        _HTTP_URL.validate_python(url)
    except ValidationError:
        return False
    return True


def split_words(text: str) -> list[str]:
    """Split text on whitespace runs, dropping empty tokens."""
    return [token for token in _WHITESPACE.split(text) if token]

