"""Load reading text from a file, standard input, or a URL.

WHY: The terminal reader and the GUI both accept text from outside the
program. Decoding rules and error messages should be the same in both.

HOW: ``load_text(source)`` dispatches on the source string: ``"-"`` reads
stdin, ``http://`` / ``https://`` fetches with httpx, anything else is a
path read as UTF-8.

RULES:
- Every failure becomes a TextSourceError with a readable reason
- Files are decoded as UTF-8 (BOM tolerated)
- URL fetches follow redirects and honour URL_FETCH_TIMEOUT_S
- Only text/* responses are accepted from URLs
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, TextIO

import httpx

from rsvp_reader.config import URL_FETCH_TIMEOUT_S
from rsvp_reader.errors import TextSourceError


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def load_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        raise TextSourceError(str(path), "file not found")
    except UnicodeDecodeError:
        raise TextSourceError(str(path), "file is not UTF-8 text")
    except OSError as exc:
        raise TextSourceError(str(path), exc.strerror or str(exc))


def fetch_url(url: str, client: Optional[httpx.Client] = None) -> str:
    """Download ``url`` and return its body as text.

    Args:
        url: An http(s) URL.
        client: Optional pre-configured client (tests pass one built on
                ``httpx.MockTransport``).
    """
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=URL_FETCH_TIMEOUT_S, follow_redirects=True)
    try:
        resp = client.get(url)
    except httpx.HTTPError as exc:
        raise TextSourceError(url, str(exc) or exc.__class__.__name__)
    finally:
        if owns_client:
            client.close()

    if resp.status_code != 200:
        raise TextSourceError(url, "HTTP {}".format(resp.status_code))

    content_type = resp.headers.get("content-type", "text/plain").split(";")[0].strip()
    if not content_type.startswith("text/"):
        raise TextSourceError(url, "unsupported content type '{}'".format(content_type))
    return resp.text


def load_text(source: str, stdin: Optional[TextIO] = None) -> str:
    """Load text from ``source``: ``"-"`` for stdin, a URL, or a file path."""
    if source == "-":
        stream = stdin if stdin is not None else sys.stdin
        try:
            return stream.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise TextSourceError("stdin", str(exc))
    if is_url(source):
        return fetch_url(source)
    return load_file(Path(source).expanduser())
