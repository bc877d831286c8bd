"""Chat request/response schemas.

JSON bodies use camelCase keys; snake_case names are accepted on input too.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ChatRequest(BaseModel):
    """POST /chat request body."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str | None = None
    target_language: str | None = "en"


class ChatResponse(BaseModel):
    """POST /chat response body."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    original_message: str
    detected_language: str
    translated_user_message: str | None = None
    generated_reply: str
    reply_language: str
    degraded_steps: list[str] = []


class HealthResponse(BaseModel):
    """GET /chat response body when the inference server answers."""

    status: str = "healthy"
    upstream: str = "connected"
    model: str
    languages: dict[str, str]
