"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation.

HOW: Each endpoint has its own request and/or response model. All
fields carry Field descriptions for the /docs UI.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- WPM inputs accept numbers or numeric strings; clamping happens in the
  route, never in validation, so out-of-range values are corrected
  instead of rejected
- Python 3.9+ compatible (use Optional/Union from typing)
"""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class SessionRequest(BaseModel):
    """Text to prepare for reading."""

    text: str = Field(description="Raw text. Whitespace is normalized; punctuation is kept.")
    wpm: Optional[Union[float, str]] = Field(
        default=None,
        description="Words per minute. Clamped to the supported range. "
                    "Defaults to the saved preference.",
    )

    model_config = {"json_schema_extra": {
        "examples": [{"text": "Hei, maailma!", "wpm": 300}]
    }}


class WpmUpdate(BaseModel):
    """New reading speed to save."""

    wpm: Union[float, str] = Field(
        description="Words per minute. Values outside the supported range are clamped."
    )


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class RenderModelOut(BaseModel):
    """One token split around its optimal recognition point."""

    prefix: str = Field(description="Characters before the highlighted one.")
    highlight: str = Field(description="The highlighted character ('' only for an empty token).")
    suffix: str = Field(description="Characters after the highlighted one.")


class SessionResponse(BaseModel):
    """A prepared reading session."""

    token_count: int = Field(description="Number of tokens in the text.")
    wpm: int = Field(description="Clamped words-per-minute rate.")
    interval_ms: float = Field(description="Milliseconds each token is shown (60000 / wpm).")
    tokens: List[str] = Field(description="Tokens in reading order.")
    models: List[RenderModelOut] = Field(description="Render model for each token, same order.")


class OrpResponse(BaseModel):
    """ORP details for a single token."""

    token: str = Field(description="The token as given.")
    orp_index: int = Field(description="Zero-based index of the highlighted character.")
    model: RenderModelOut = Field(description="The token split around that character.")


class WpmResponse(BaseModel):
    """The saved reading speed and its bounds."""

    wpm: int = Field(description="Saved words-per-minute value.")
    min_wpm: int = Field(description="Lowest supported rate.")
    max_wpm: int = Field(description="Highest supported rate.")


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
