"""FastAPI application exposing the reading pipeline over HTTP.

WHY: Web and mobile front ends want the same tokens, ORP positions, and
saved reading speed as the desktop reader without porting the pipeline.

HOW: A single FastAPI app with five endpoints grouped by tags. Sessions
are prepared synchronously (the pipeline is pure and fast). The
preference store is injected through the ``get_preference_store``
dependency so tests can swap it for an in-memory one.

RULES:
- All endpoints have OpenAPI descriptions
- Error responses use the ErrorResponse schema
- Empty text is a 400, never a 500
- WPM is clamped, never rejected, on every input path
- Saving the preference never fails the request
"""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException, Query

from rsvp_reader import __version__
from rsvp_reader.config import (
    MAX_WPM,
    MIN_WPM,
    PREFERENCES_PATH,
    SERVER_HOST,
    SERVER_PORT,
    interval_ms_for_wpm,
)
from rsvp_reader.core.models import prepare_reading
from rsvp_reader.core.orp import compute_orp_index
from rsvp_reader.core.render_model import build_render_model
from rsvp_reader.errors import EmptyTextError
from rsvp_reader.server.models import (
    ErrorResponse,
    HealthResponse,
    OrpResponse,
    RenderModelOut,
    SessionRequest,
    SessionResponse,
    WpmResponse,
    WpmUpdate,
)
from rsvp_reader.storage.preferences import (
    JsonFilePreferenceStore,
    PreferenceStore,
    load_wpm,
    save_wpm,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App and store setup
# ---------------------------------------------------------------------------

preference_store: PreferenceStore = JsonFilePreferenceStore(PREFERENCES_PATH)


def get_preference_store() -> PreferenceStore:
    return preference_store


app = FastAPI(
    title="RSVP Reader API",
    description=(
        "Prepare text for rapid serial visual presentation: tokens, the "
        "optimal recognition point of every token, and the presentation "
        "interval. Also stores the reader's preferred speed."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Endpoints: Sessions
# ---------------------------------------------------------------------------


@app.post(
    "/sessions",
    response_model=SessionResponse,
    tags=["sessions"],
    summary="Prepare text for reading",
    description=(
        "Tokenize the text on whitespace (punctuation stays attached), pick "
        "the ORP character of every token, and return the render models "
        "together with the per-word interval."
    ),
    responses={400: {"model": ErrorResponse, "description": "Text contains no words"}},
)
def create_session(
    request: SessionRequest,
    store: PreferenceStore = Depends(get_preference_store),
) -> SessionResponse:
    wpm = request.wpm if request.wpm is not None else load_wpm(store)
    try:
        state = prepare_reading(request.text, wpm)
    except EmptyTextError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    logger.debug("Prepared session with %d tokens at %d WPM", state.total, state.wpm)
    return SessionResponse(
        token_count=state.total,
        wpm=state.wpm,
        interval_ms=interval_ms_for_wpm(state.wpm),
        tokens=list(state.tokens),
        models=[RenderModelOut(**model.to_dict()) for model in state.models],
    )


@app.get(
    "/orp",
    response_model=OrpResponse,
    tags=["sessions"],
    summary="ORP for a single token",
    description="Return the highlighted character index and render model for one token.",
)
def get_orp(
    token: str = Query(description="A single token, punctuation included."),
) -> OrpResponse:
    model = build_render_model(token)
    return OrpResponse(
        token=token,
        orp_index=compute_orp_index(token),
        model=RenderModelOut(**model.to_dict()),
    )


# ---------------------------------------------------------------------------
# Endpoints: Preferences
# ---------------------------------------------------------------------------


@app.get(
    "/preferences/wpm",
    response_model=WpmResponse,
    tags=["preferences"],
    summary="Get the saved reading speed",
    description="Falls back to the default speed when nothing usable is saved.",
)
def get_wpm(store: PreferenceStore = Depends(get_preference_store)) -> WpmResponse:
    return WpmResponse(wpm=load_wpm(store), min_wpm=MIN_WPM, max_wpm=MAX_WPM)


@app.put(
    "/preferences/wpm",
    response_model=WpmResponse,
    tags=["preferences"],
    summary="Save the reading speed",
    description=(
        "Clamp the value to the supported range and save it. The clamped "
        "value is returned even if the store could not be written."
    ),
)
def put_wpm(
    update: WpmUpdate,
    store: PreferenceStore = Depends(get_preference_store),
) -> WpmResponse:
    wpm = save_wpm(store, update.wpm)
    return WpmResponse(wpm=wpm, min_wpm=MIN_WPM, max_wpm=MAX_WPM)


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness probe returning the API version.",
)
def health() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def main() -> None:
    """Serve the API with uvicorn."""
    import uvicorn
    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)


if __name__ == "__main__":
    main()
