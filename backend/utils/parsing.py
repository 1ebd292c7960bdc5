import json
import re
from typing import Any, Dict, Optional
from urllib.parse import urlparse

_LEADING_FENCE = re.compile(r"^```[\w+-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?```\s*$")


def strip_code_fence(text: str) -> str:
    """Remove one enclosing markdown fence (```json ... ```) from text."""
    if not text:
        return ""

    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_json_object(text: str) -> Dict[str, Any]:
    """Parse text that must hold exactly one JSON object.

    Raises ValueError for anything else; no attempt is made to pull an
    object out of surrounding prose.
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def truncate_snippet(text: Optional[str], limit: int = 200) -> str:
    if not text:
        return ""
    text = str(text)
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def title_from_url(url: str) -> str:
    """Human title for a source URL: its host without 'www.', capitalized."""
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError:
        return url

    if not parsed.scheme or not hostname:
        return url

    if hostname.startswith("www."):
        hostname = hostname[len("www."):]
    if not hostname:
        return url
    return hostname[0].upper() + hostname[1:]
