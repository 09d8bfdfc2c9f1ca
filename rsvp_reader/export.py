"""Schema-validated JSON export of a prepared reading session.

WHY: A prepared session (tokens, render models, rate) is useful outside
the reader, for example to feed a web front end or to compare ORP
choices between two versions. Every exported file must be
well-formed, so consumers never have to guess at its shape.

HOW: build_session_export() turns a PlaybackState into a plain dict,
export_session_json() validates it against the bundled JSON Schema with
jsonschema and serializes it.

RULES:
- tokens and models have the same length and order
- wpm is the clamped rate; interval_ms is derived from it
- Output is UTF-8 JSON with non-ASCII characters kept as-is
- Validation failures raise jsonschema.ValidationError
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema

from rsvp_reader import __version__
from rsvp_reader.config import interval_ms_for_wpm
from rsvp_reader.core.models import PlaybackState

_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "session.schema.json"

_CACHED_SCHEMA: Optional[dict] = None


def _get_schema() -> dict:
    """Load and cache the session JSON schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def build_session_export(state: PlaybackState, source: Optional[str] = None) -> Dict[str, Any]:
    return {
        "version": __version__,
        "source": source,
        "wpm": state.wpm,
        "interval_ms": interval_ms_for_wpm(state.wpm),
        "token_count": len(state.tokens),
        "tokens": list(state.tokens),
        "models": [model.to_dict() for model in state.models],
    }


def export_session_json(state: PlaybackState, source: Optional[str] = None) -> str:
    """Serialize ``state`` to validated JSON text.

    Raises:
        jsonschema.ValidationError: If the export does not match the schema.
    """
    payload = build_session_export(state, source)
    jsonschema.validate(instance=payload, schema=_get_schema())
    return json.dumps(payload, indent=2, ensure_ascii=False)
