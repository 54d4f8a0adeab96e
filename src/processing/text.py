"""
Text helpers shared by ingestion and enrichment: markup stripping,
domain extraction and loose JSON parsing of model replies.
"""
import json
import re
from typing import Any, Dict, Optional
from urllib.parse import urlparse

_SCRIPT = re.compile(r"<script\b[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)
_STYLE = re.compile(r"<style\b[^>]*>.*?</style>", re.IGNORECASE | re.DOTALL)
_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
_TAG = re.compile(r"<[^>]+>")
_SPACE = re.compile(r"\s+")

MAX_ARTICLE_CHARS = 8000


def strip_html(html: Optional[str]) -> str:
    """Drop script/style blocks and comments, turn tags into spaces and collapse whitespace."""
    if not html:
        return ""
    text = _SCRIPT.sub("", html)
    text = _STYLE.sub("", text)
    text = _COMMENT.sub("", text)
    text = _TAG.sub(" ", text)
    return _SPACE.sub(" ", text).strip()


def safe_domain(url: Optional[str]) -> str:
    try:
        return urlparse(url or "").hostname or ""
    except ValueError:
        return ""


def first_line(text: Optional[str], limit: int = 100) -> str:
    if not text:
        return ""
    return text.split("\n", 1)[0][:limit]


def _extract_json(content: str) -> str:
    """
    Extract the JSON object from a model reply, stripping markdown fences.
    """
    content = content.strip()

    pattern = r'^```(?:json)?\s*\n?(.*?)\n?```$'
    match = re.match(pattern, content, re.DOTALL)
    if match:
        return match.group(1).strip()

    object_match = re.search(r'\{.*\}', content, re.DOTALL)
    if object_match:
        return object_match.group(0)

    return content


def parse_json_loose(content: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Parse a JSON object out of free-form model output.
    Returns None when nothing usable is found.
    """
    if not content:
        return None
    for candidate in (content, _extract_json(content)):
        try:
            parsed = json.loads(candidate)
        except (TypeError, ValueError):
            continue
        if isinstance(parsed, dict):
            return parsed
    return None
