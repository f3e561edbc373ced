"""
Visitor identity helpers.

* Anonymous visitors get an opaque session id, minted once and persisted in
  the ``hama_session_id`` cookie.
* Logged-in users carry a ``hama_user`` cookie holding a JSON object with
  (at least) ``user_id``.
"""

from __future__ import annotations

import json
import uuid
from typing import Any, Optional
from urllib.parse import unquote

SESSION_COOKIE = "hama_session_id"
USER_COOKIE = "hama_user"
PARTNER_COOKIE = "hama_user_id"

# Persisted "forever": ten years.
SESSION_COOKIE_MAX_AGE = 60 * 60 * 24 * 365 * 10


def new_session_id() -> str:
    return str(uuid.uuid4())


def parse_user_cookie(raw: Optional[str]) -> Optional[dict[str, Any]]:
    """Decode the ``hama_user`` cookie; ``None`` if absent or malformed."""
    if not raw:
        return None
    try:
        value = json.loads(unquote(raw))
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


def visitor_id(user: Optional[dict[str, Any]], session_id: str) -> str:
    """``user_<id>`` for logged-in users, ``session_<sid>`` otherwise."""
    if user and user.get("user_id"):
        return f"user_{user['user_id']}"
    return f"session_{session_id}"
