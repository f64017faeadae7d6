"""Greeting text and name resolution for ``/hello/success``."""

import json
from typing import Optional

DEFAULT_GREETING = "Hello — this function executed successfully. Provide ?name= to personalize."


def build_greeting(name: Optional[str]) -> str:
    if not name:
        return DEFAULT_GREETING
    return f"Hello, {name}. This function executed successfully."


def name_from_body(raw_body: bytes) -> Optional[str]:
    """``name`` field of a JSON object body; anything unparseable is ignored."""
    if not raw_body or not raw_body.strip():
        return None
    try:
        payload = json.loads(raw_body)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    name = payload.get("name")
    return name if isinstance(name, str) else None


def resolve_name(query_name: Optional[str], raw_body: bytes) -> Optional[str]:
    """Pick the name to greet. A ``name`` query parameter wins over the body."""
    if query_name is not None:
        return query_name
    return name_from_body(raw_body)
